"""
Step Executor - Appium-backed execution of single UI interactions
"""
import logging
import time
from typing import Callable, Optional

from appium.webdriver.common.appiumby import AppiumBy
from selenium.common.exceptions import (
    NoSuchElementException,
    StaleElementReferenceException,
    TimeoutException,
    WebDriverException,
)
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from ..errors import ActionFailedError, ElementNotFoundError
from ..models import BestEffortResult, Locator, ReadyMode, Step, StepAction

logger = logging.getLogger(__name__)

STABILITY_PROBE = "//*"


def _driver_message(exc: WebDriverException) -> str:
    return (exc.msg or str(exc) or exc.__class__.__name__).strip()


class StepExecutor:
    """
    Thin layer over an Appium driver.
    Every call is a single attempt: no retries, no recovery.
    """

    def __init__(
        self,
        driver,
        wait_timeout: float = 20,
        poll_interval: float = 0.5,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.driver = driver
        self.wait_timeout = wait_timeout
        self.poll_interval = poll_interval
        self._sleep = sleep

    def locate(self, locator: Locator):
        """
        Find one element.

        Args:
            locator: Element query, resolved inside its parent when it has one

        Returns:
            The driver's element handle

        Raises:
            ElementNotFoundError: the driver reported not-found or timed out
            ActionFailedError: any other driver failure during the lookup
        """
        try:
            return self._resolve(locator)
        except (NoSuchElementException, StaleElementReferenceException, TimeoutException) as e:
            raise ElementNotFoundError(
                f"Element not found: {locator.label()} [{locator}]: {_driver_message(e)}"
            ) from e
        except WebDriverException as e:
            raise ActionFailedError(
                f"Lookup failed for {locator.label()} [{locator}]: {_driver_message(e)}"
            ) from e

    def wait_ready(
        self,
        locator: Locator,
        mode: ReadyMode,
        timeout: Optional[float] = None,
    ) -> bool:
        """
        Block until the element is clickable or visible.

        A timeout is tolerated: the method returns False and the next
        locate/click call surfaces the real failure.

        Returns:
            True if the condition held within the timeout, False otherwise
        """
        if timeout is None:
            timeout = self.wait_timeout
        wait = WebDriverWait(self.driver, timeout, poll_frequency=self.poll_interval)
        try:
            wait.until(self._condition(locator, mode))
            return True
        except TimeoutException:
            logger.debug(
                "%s not %s after %ss, continuing", locator.label(), mode.value, timeout
            )
            return False
        except WebDriverException as e:
            logger.warning(
                "Wait for %s to be %s failed: %s", locator.label(), mode.value, _driver_message(e)
            )
            return False

    def click(self, locator: Locator):
        element = self.locate(locator)
        try:
            element.click()
        except WebDriverException as e:
            raise ActionFailedError(
                f"Could not click {locator.label()}: {_driver_message(e)}"
            ) from e

    def type_text(self, locator: Locator, text: str):
        element = self.locate(locator)
        try:
            element.send_keys(text)
        except WebDriverException as e:
            raise ActionFailedError(
                f"Could not type into {locator.label()}: {_driver_message(e)}"
            ) from e

    def get_attribute(self, locator: Locator, name: str) -> Optional[str]:
        element = self.locate(locator)
        try:
            return element.get_attribute(name)
        except WebDriverException as e:
            raise ActionFailedError(
                f"Could not read '{name}' of {locator.label()}: {_driver_message(e)}"
            ) from e

    def get_text(self, locator: Locator) -> str:
        element = self.locate(locator)
        try:
            return element.text or ""
        except WebDriverException as e:
            raise ActionFailedError(
                f"Could not read text of {locator.label()}: {_driver_message(e)}"
            ) from e

    def element_exists(self, locator: Locator) -> bool:
        try:
            self.locate(locator)
        except ElementNotFoundError:
            return False
        return True

    def perform(self, step: Step) -> str:
        """
        Execute one step.

        Returns:
            Short description of what happened, for the step log
        """
        if step.action == StepAction.WAIT_VISIBLE:
            return self._wait_detail(step.locator, ReadyMode.VISIBLE)
        if step.action == StepAction.WAIT_CLICKABLE:
            return self._wait_detail(step.locator, ReadyMode.CLICKABLE)

        if step.ready is not None:
            self.wait_ready(step.locator, step.ready)

        if step.action == StepAction.CLICK:
            self.click(step.locator)
            detail = f"clicked {step.locator.label()}"
        elif step.action == StepAction.TYPE:
            text = step.text or ""
            self.type_text(step.locator, text)
            detail = f"typed {len(text)} characters into {step.locator.label()}"
        else:
            raise ValueError(f"Unsupported step action: {step.action}")

        if step.settle_seconds:
            self._sleep(step.settle_seconds)
        return detail

    def probe_stability(self) -> BestEffortResult:
        """Cheap query proving the app still answers. Never raises."""
        try:
            self.driver.find_element(AppiumBy.XPATH, STABILITY_PROBE)
            return BestEffortResult(operation="stability_probe", ok=True)
        except WebDriverException as e:
            return BestEffortResult(
                operation="stability_probe", ok=False, detail=_driver_message(e)
            )

    def screenshot_png(self) -> bytes:
        return self.driver.get_screenshot_as_png()

    def page_source(self) -> str:
        return self.driver.page_source

    def _resolve(self, locator: Locator):
        if locator.parent is not None:
            return self._resolve(locator.parent).find_element(locator.by, locator.value)
        return self.driver.find_element(locator.by, locator.value)

    def _condition(self, locator: Locator, mode: ReadyMode):
        if locator.parent is None:
            target = (locator.by, locator.value)
            if mode == ReadyMode.CLICKABLE:
                return EC.element_to_be_clickable(target)
            return EC.visibility_of_element_located(target)

        def _nested(_driver):
            element = self._resolve(locator)
            if not element.is_displayed():
                return False
            if mode == ReadyMode.CLICKABLE and not element.is_enabled():
                return False
            return element

        return _nested

    def _wait_detail(self, locator: Locator, mode: ReadyMode) -> str:
        if self.wait_ready(locator, mode):
            return f"{locator.label()} is {mode.value}"
        return f"{locator.label()} not {mode.value} within {self.wait_timeout}s, continuing"
