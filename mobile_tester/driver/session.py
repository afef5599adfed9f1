"""
Lifecycle Controller - app reset, Appium session acquisition and teardown
"""
import logging
import time
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional

from appium import webdriver
from appium.options.android import UiAutomator2Options
from selenium.common.exceptions import WebDriverException

from ..config import SessionConfig, Settings, settings as default_settings
from ..errors import AppResetWarning, DriverAcquisitionError
from ..models import BestEffortResult
from .adb import AdbShell
from .controller import StepExecutor

logger = logging.getLogger(__name__)


def remote_driver(config: SessionConfig):
    """Open a UiAutomator2 session on the configured Appium server."""
    options = UiAutomator2Options().load_capabilities(config.capabilities())
    return webdriver.Remote(config.server_url, options=options)


class LifecycleController:
    """
    Owns the device side of a run:
    - resets the application through adb before a scenario
    - opens the Appium session
    - tears the session down according to the teardown policy
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        driver_factory: Optional[Callable[[SessionConfig], object]] = None,
        adb: Optional[AdbShell] = None,
        sleep: Callable[[float], None] = time.sleep,
        close_on_teardown: Optional[bool] = None,
    ):
        self.settings = settings or default_settings
        self.driver_factory = driver_factory or remote_driver
        self.adb = adb or AdbShell(self.settings.ADB_PATH, serial=self.settings.ADB_SERIAL)
        self.close_on_teardown = (
            self.settings.CLOSE_ON_TEARDOWN if close_on_teardown is None else close_on_teardown
        )
        self.driver = None
        self._sleep = sleep

    def acquire_driver(self, config: Optional[SessionConfig] = None):
        """
        Establish a session with the automation backend.

        Args:
            config: Session parameters. Defaults to the ones in settings

        Returns:
            The live driver handle

        Raises:
            DriverAcquisitionError: server unreachable or negotiation failed
        """
        if config is None:
            config = self.settings.session_config()
        logger.info(
            "Starting session for %s on %s via %s",
            config.app_package, config.device_name, config.server_url,
        )
        try:
            driver = self.driver_factory(config)
            driver.implicitly_wait(config.implicit_wait)
        except Exception as e:
            raise DriverAcquisitionError(
                f"Could not start a session at {config.server_url}: {e}"
            ) from e
        self.driver = driver
        logger.info("Driver setup completed")
        return driver

    def executor(self) -> StepExecutor:
        if self.driver is None:
            raise RuntimeError("No active session, call acquire_driver() first")
        return StepExecutor(
            self.driver,
            wait_timeout=self.settings.EXPLICIT_WAIT,
            poll_interval=self.settings.WAIT_POLL_INTERVAL,
            sleep=self._sleep,
        )

    def reset_application_state(self) -> List[BestEffortResult]:
        """
        Force-stop the app, clear its data and reset its permissions.

        Each sub-step is best-effort: a failure is logged and the next one
        still runs. The fixed delays stand in for polling the device.

        Returns:
            One result per sub-step
        """
        package = self.settings.APP_PACKAGE
        logger.info("Resetting %s to start fresh", package)
        plan = [
            ("force_stop", self.adb.force_stop, self.settings.FORCE_STOP_DELAY),
            ("clear_data", self.adb.clear_data, self.settings.CLEAR_DATA_DELAY),
            ("reset_permissions", self.adb.reset_permissions, self.settings.RESET_PERMISSIONS_DELAY),
        ]
        results = []
        for operation, action, delay in plan:
            try:
                action(package)
                results.append(BestEffortResult(operation=operation, ok=True))
            except AppResetWarning as w:
                logger.warning("App reset step %s failed: %s", operation, w)
                results.append(BestEffortResult(operation=operation, ok=False, detail=str(w)))
            self._sleep(delay)

        if all(r.ok for r in results):
            logger.info("App reset completed")
        else:
            logger.warning("App reset incomplete, continuing with existing app state")
        return results

    def release_driver(self) -> BestEffortResult:
        """
        Tear the session down.

        With close_on_teardown disabled the session and app are left
        running for post-run inspection.
        """
        driver, self.driver = self.driver, None
        if driver is None:
            return BestEffortResult(operation="release_driver", ok=True, detail="no active session")
        if not self.close_on_teardown:
            logger.info("App kept open for inspection (close_on_teardown disabled)")
            return BestEffortResult(operation="release_driver", ok=True, detail="session kept open")
        # quit is attempted even when terminate_app fails
        failures = []
        for call, action in (
            ("terminate_app", lambda: driver.terminate_app(self.settings.APP_PACKAGE)),
            ("quit", driver.quit),
        ):
            try:
                action()
            except WebDriverException as e:
                logger.warning("Driver teardown step %s failed: %s", call, e.msg or e)
                failures.append(f"{call}: {e.msg or e}")
        if failures:
            return BestEffortResult(operation="release_driver", ok=False, detail="; ".join(failures))
        logger.info("Session closed")
        return BestEffortResult(operation="release_driver", ok=True, detail="session closed")

    def settle_after_teardown(self) -> List[BestEffortResult]:
        """Give the app time to close, reset it again, then let the reset land."""
        self._sleep(self.settings.TEARDOWN_SETTLE_DELAY)
        results = self.reset_application_state()
        self._sleep(self.settings.POST_RESET_DELAY)
        return results

    @contextmanager
    def session(self, reset: bool = True) -> Iterator[StepExecutor]:
        """Reset, acquire, yield an executor, always release."""
        if reset:
            self.reset_application_state()
        self.acquire_driver()
        try:
            yield self.executor()
        finally:
            self.release_driver()
