import pytest
from selenium.common.exceptions import ElementNotInteractableException

from mobile_tester.catalog import locators as loc
from mobile_tester.driver.controller import StepExecutor
from mobile_tester.errors import ActionFailedError, ElementNotFoundError
from mobile_tester.models import Locator, ReadyMode, Step, StepAction


def test_locate_returns_element(executor, app):
    element = executor.locate(loc.TAP_TO_START)
    assert element is app.elements[loc.TAP_TO_START.value]


def test_locate_missing_element_raises_not_found(executor):
    with pytest.raises(ElementNotFoundError) as excinfo:
        executor.locate(loc.HOME_MARKER)
    message = str(excinfo.value)
    assert loc.HOME_MARKER.value in message
    assert "could not be located" in message


def test_locate_resolves_within_parent(executor, app):
    app.show_home()
    badge = executor.locate(loc.NOTIFICATION_BADGE)
    assert badge.content_desc == "badge"


def test_nested_lookup_fails_when_parent_missing(executor):
    with pytest.raises(ElementNotFoundError):
        executor.locate(loc.NOTIFICATION_BADGE)


def test_wait_ready_tolerates_timeout(executor):
    assert executor.wait_ready(loc.HOME_MARKER, ReadyMode.VISIBLE) is False


def test_wait_ready_true_when_clickable(executor):
    assert executor.wait_ready(loc.TAP_TO_START, ReadyMode.CLICKABLE) is True


def test_wait_ready_false_for_hidden_element(executor, app):
    app.elements[loc.CONTINUE.value].displayed = False
    assert executor.wait_ready(loc.CONTINUE, ReadyMode.VISIBLE) is False


def test_wait_ready_disabled_element_not_clickable(executor, app):
    app.elements[loc.CONTINUE.value].enabled = False
    assert executor.wait_ready(loc.CONTINUE, ReadyMode.CLICKABLE) is False
    assert executor.wait_ready(loc.CONTINUE, ReadyMode.VISIBLE) is True


def test_wait_ready_nested_locator(executor, app):
    assert executor.wait_ready(loc.NOTIFICATION_BADGE, ReadyMode.VISIBLE) is False
    app.show_home()
    assert executor.wait_ready(loc.NOTIFICATION_BADGE, ReadyMode.VISIBLE) is True


def test_click_rejected_raises_action_failed(executor, app):
    app.elements[loc.CONTINUE.value].click_error = ElementNotInteractableException("element not interactable")
    with pytest.raises(ActionFailedError) as excinfo:
        executor.click(loc.CONTINUE)
    assert "not interactable" in str(excinfo.value)


def test_perform_type_substitutes_inputs(executor, app):
    step = Step(
        description="Enter email",
        locator=loc.CREDENTIAL_FIELD,
        action=StepAction.TYPE,
        text="{email}",
    ).bind({"email": "someone@example.com"})

    detail = executor.perform(step)

    assert app.typed == ["someone@example.com"]
    assert "19 characters" in detail


def test_perform_click_waits_then_clicks(executor, app):
    step = Step(description="Continue", locator=loc.CONTINUE, ready=ReadyMode.CLICKABLE)
    detail = executor.perform(step)
    assert ("click", loc.CONTINUE.value) in app.actions
    assert detail == "clicked Continue"


def test_perform_settles_after_action(app):
    pauses = []
    executor = StepExecutor(app, wait_timeout=0, poll_interval=0.01, sleep=pauses.append)
    executor.perform(Step(description="Sign in", locator=loc.SIGN_IN, settle_seconds=3))
    assert pauses == [3]


def test_perform_wait_step_never_raises(executor):
    step = Step(description="Wait for home", locator=loc.HOME_MARKER, action=StepAction.WAIT_VISIBLE)
    assert "not visible" in executor.perform(step)


def test_get_attribute_reads_content_desc(executor):
    assert executor.get_attribute(loc.SIGN_IN, "content-desc") == "Sign in"


def test_element_exists(executor):
    assert executor.element_exists(loc.SIGN_IN)
    assert not executor.element_exists(Locator(value="//nothing"))


def test_probe_stability_reports_unresponsive_app(executor, app):
    assert executor.probe_stability().ok
    app.responsive = False
    probe = executor.probe_stability()
    assert not probe.ok
    assert probe.detail
