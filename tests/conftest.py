"""
Shared fakes: an in-process stand-in for the Appium driver modelling the
onboarding/login screens, a fake adb shell and test settings.
"""
from typing import Dict, List, Optional

import pytest
from selenium.common.exceptions import NoSuchElementException

from mobile_tester.catalog import locators as loc
from mobile_tester.config import Settings
from mobile_tester.driver.controller import StepExecutor
from mobile_tester.driver.session import LifecycleController
from mobile_tester.errors import AppResetWarning

HOME_CONTENT = "Activity Streak\n0 Week Streak\nMon\nTue\nWed\nThu\nFri\nSat\nSun"


class FakeElement:
    def __init__(
        self,
        driver: "FakeDriver",
        xpath: str,
        content_desc: str = "",
        displayed: bool = True,
        enabled: bool = True,
        click_error: Optional[Exception] = None,
        on_click=None,
    ):
        self.driver = driver
        self.xpath = xpath
        self.content_desc = content_desc
        self.displayed = displayed
        self.enabled = enabled
        self.click_error = click_error
        self.on_click = on_click
        self.children: Dict[str, "FakeElement"] = {}

    @property
    def text(self):
        return self.content_desc

    def click(self):
        self.driver.actions.append(("click", self.xpath))
        if self.click_error is not None:
            raise self.click_error
        if self.on_click is not None:
            self.on_click()

    def send_keys(self, text):
        self.driver.actions.append(("type", self.xpath, text))
        self.driver.typed.append(text)

    def get_attribute(self, name):
        if name == "content-desc":
            return self.content_desc
        return None

    def is_displayed(self):
        return self.displayed

    def is_enabled(self):
        return self.enabled

    def find_element(self, by, value):
        if value in self.children:
            return self.children[value]
        raise NoSuchElementException(f"No child matching {value}")

    def add_child(self, xpath: str, **kwargs) -> "FakeElement":
        child = FakeElement(self.driver, xpath, **kwargs)
        self.children[xpath] = child
        return child


class FakeDriver:
    """Elements keyed by their exact XPath."""

    def __init__(self):
        self.elements: Dict[str, FakeElement] = {}
        self.actions: List[tuple] = []
        self.typed: List[str] = []
        self.lookups: List[str] = []
        self.responsive = True
        self.implicit_wait = None
        self.terminated: List[str] = []
        self.quit_called = False

    def add(self, xpath: str, **kwargs) -> FakeElement:
        element = FakeElement(self, xpath, **kwargs)
        self.elements[xpath] = element
        return element

    def remove(self, xpath: str):
        self.elements.pop(xpath, None)

    def find_element(self, by, value):
        self.lookups.append(value)
        if value == "//*" and self.responsive:
            return FakeElement(self, value)
        if value in self.elements:
            return self.elements[value]
        raise NoSuchElementException(
            f"An element could not be located on the page using the given search parameters: {value}"
        )

    def implicitly_wait(self, seconds):
        self.implicit_wait = seconds

    def terminate_app(self, package):
        self.terminated.append(package)

    def quit(self):
        self.quit_called = True

    def get_screenshot_as_png(self):
        return b"\x89PNG fake"

    @property
    def page_source(self):
        return "<hierarchy rotation=\"0\" />"


class FakeProdigyApp(FakeDriver):
    """
    Onboarding and login screens. The second Sign in press decides where
    the app lands: home for the valid credentials, the auth error otherwise.
    """

    def __init__(
        self,
        valid_email: str = "program1@prodigy.baby",
        valid_password: str = "123456",
        accept_any: bool = False,
        feedback_popup: bool = False,
    ):
        super().__init__()
        self.valid_email = valid_email
        self.valid_password = valid_password
        self.accept_any = accept_any
        self.feedback_popup = feedback_popup
        self.sign_in_presses = 0

        for locator in (
            loc.TAP_TO_START,
            loc.START_BUTTON,
            loc.SAW_ADVERTISEMENT,
            loc.CONTINUE,
            loc.CREDENTIAL_FIELD,
            loc.LOGIN_WITH_PASSWORD,
        ):
            self.add(locator.value, content_desc=locator.label())
        self.add(loc.SIGN_IN.value, content_desc="Sign in", on_click=self._sign_in)

    def _sign_in(self):
        self.sign_in_presses += 1
        if self.sign_in_presses < 2:
            return
        email, password = (self.typed + ["", ""])[:2]
        if self.accept_any or (email == self.valid_email and password == self.valid_password):
            self.show_home()
        else:
            self.add(loc.AUTH_ERROR.value, content_desc=loc.AUTH_ERROR_MESSAGE)

    def show_home(self):
        self.add(loc.HOME_MARKER.value, content_desc=HOME_CONTENT)
        icon = self.add(loc.NOTIFICATION_ICON.value, content_desc="1")
        icon.add_child(loc.NOTIFICATION_BADGE.value, content_desc="badge")
        self.add(loc.CLAIM_MEDALS.value, content_desc="Claim medals")
        if self.feedback_popup:
            self.add(loc.FEEDBACK_POPUP.value, content_desc="Enjoying Prodigy Baby?")


class FakeAdb:
    def __init__(self, failing=()):
        self.failing = set(failing)
        self.calls: List[tuple] = []

    def _call(self, operation, package):
        self.calls.append((operation, package))
        if operation in self.failing:
            raise AppResetWarning(f"{operation} failed for {package}")
        return "Success"

    def force_stop(self, package):
        return self._call("force_stop", package)

    def clear_data(self, package):
        return self._call("clear_data", package)

    def reset_permissions(self, package):
        return self._call("reset_permissions", package)


class DriverFactory:
    """Hands out a fresh fake app per session and remembers them."""

    def __init__(self, make=FakeProdigyApp, error: Optional[Exception] = None):
        self.make = make
        self.error = error
        self.drivers: List[FakeDriver] = []
        self.configs = []

    def __call__(self, config):
        self.configs.append(config)
        if self.error is not None:
            raise self.error
        driver = self.make()
        self.drivers.append(driver)
        return driver


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        ARTIFACTS_DIR=tmp_path / "artifacts",
        REPORTS_DIR=tmp_path / "reports",
        LOGS_DIR=tmp_path / "logs",
        EXPLICIT_WAIT=0,
        HOME_WAIT=0,
        WAIT_POLL_INTERVAL=0.01,
        FORCE_STOP_DELAY=0,
        CLEAR_DATA_DELAY=0,
        RESET_PERMISSIONS_DELAY=0,
        TEARDOWN_SETTLE_DELAY=0,
        POST_RESET_DELAY=0,
        SUBMIT_SETTLE_DELAY=0,
        VALID_EMAIL="program1@prodigy.baby",
        VALID_PASSWORD="123456",
        INVALID_EMAIL="invalid@email.com",
        INVALID_PASSWORD="wrongpassword",
    )


@pytest.fixture
def app():
    return FakeProdigyApp()


@pytest.fixture
def executor(app):
    return StepExecutor(app, wait_timeout=0, poll_interval=0.01, sleep=lambda s: None)


@pytest.fixture
def fake_adb():
    return FakeAdb()


@pytest.fixture
def driver_factory():
    return DriverFactory()


@pytest.fixture
def lifecycle(test_settings, driver_factory, fake_adb):
    return LifecycleController(
        test_settings,
        driver_factory=driver_factory,
        adb=fake_adb,
        sleep=lambda s: None,
    )
