import csv

import pytest
from selenium.common.exceptions import WebDriverException
from urllib3.exceptions import MaxRetryError

from mobile_tester.catalog import locators as loc
from mobile_tester.catalog.scenarios import default_suite, select_scenarios
from mobile_tester.driver.session import LifecycleController
from mobile_tester.models import TestStatus
from mobile_tester.reporting.recorder import ResultRecorder
from mobile_tester.runner.orchestrator import SuiteOrchestrator

from .conftest import DriverFactory, FakeAdb, FakeProdigyApp


def orchestrator(settings, factory, adb=None, recorder=None):
    lifecycle = LifecycleController(
        settings, driver_factory=factory, adb=adb or FakeAdb(), sleep=lambda s: None
    )
    return SuiteOrchestrator(settings, lifecycle=lifecycle, recorder=recorder, run_id="test-run")


def statuses(outcome):
    return {r.test_name: r.status for r in outcome.results}


def test_full_suite_passes(test_settings):
    factory = DriverFactory()

    outcome = orchestrator(test_settings, factory).run(default_suite(test_settings))

    assert statuses(outcome) == {
        "Successful Login": TestStatus.PASSED,
        "Invalid Email Login": TestStatus.PASSED,
        "Invalid Password Login": TestStatus.PASSED,
        "Home Page Loaded": TestStatus.PASSED,
        "App Bar Element": TestStatus.SKIPPED,
        "Notification Icon": TestStatus.PASSED,
        "Activity Streak Element": TestStatus.PASSED,
        "Claim Medals Element": TestStatus.PASSED,
        "Feedback Popup Element": TestStatus.SKIPPED,
    }
    assert outcome.exit_code == 0
    assert not outcome.aborted
    # one session per login scenario, one shared by the home checks
    assert len(factory.drivers) == 4
    assert outcome.summary.total == 9
    assert outcome.summary.passed == 7


def test_results_keep_suite_order(test_settings):
    outcome = orchestrator(test_settings, DriverFactory()).run(default_suite(test_settings))
    assert [r.test_name for r in outcome.results][:4] == [
        "Successful Login", "Invalid Email Login", "Invalid Password Login", "Home Page Loaded"
    ]


def test_report_written_with_every_result(test_settings):
    outcome = orchestrator(test_settings, DriverFactory()).run(default_suite(test_settings))

    with open(outcome.report_path, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0][0] == "Test Name"
    assert [row[0] for row in rows[1:10]] == [r.test_name for r in outcome.results]
    assert outcome.report_path.startswith(str(test_settings.REPORTS_DIR))


def test_isolated_scenarios_reset_before_and_after(test_settings):
    adb = FakeAdb()
    groups = default_suite(test_settings, include_home=False)

    orchestrator(test_settings, DriverFactory(), adb=adb).run(groups)

    # reset before each session plus the settle reset after it
    assert len(adb.calls) == 3 * 3 * 2


def test_acquisition_failure_aborts_run(test_settings):
    factory = DriverFactory(error=WebDriverException("Could not connect to server"))

    outcome = orchestrator(test_settings, factory).run(default_suite(test_settings))

    assert outcome.aborted
    assert outcome.exit_code == 2
    assert outcome.results == []
    assert "Could not connect" in outcome.error
    assert len(factory.configs) == 1
    assert outcome.report_path is not None


def test_failing_login_marks_run_failed(test_settings):
    factory = DriverFactory(make=lambda: FakeProdigyApp(valid_password="rotated"))
    groups = default_suite(test_settings, include_home=False)

    outcome = orchestrator(test_settings, factory).run(groups)

    assert statuses(outcome)["Successful Login"] == TestStatus.FAILED
    assert statuses(outcome)["Invalid Email Login"] == TestStatus.PASSED
    assert outcome.exit_code == 1


def test_setup_failure_skips_home_checks(test_settings):
    factory = DriverFactory(make=lambda: FakeProdigyApp(valid_password="rotated"))
    groups = default_suite(test_settings)[1:]

    outcome = orchestrator(test_settings, factory).run(groups)

    assert len(outcome.results) == 6
    assert all(r.status == TestStatus.SKIPPED for r in outcome.results)
    assert "Setup 'Successful Login' failed" in outcome.results[0].actual
    assert outcome.exit_code == 0


def test_selected_scenarios_only(test_settings):
    groups = select_scenarios(default_suite(test_settings), ["invalid email login"])

    outcome = orchestrator(test_settings, DriverFactory()).run(groups)

    assert [r.test_name for r in outcome.results] == ["Invalid Email Login"]


def test_report_write_failure_is_reported(test_settings, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    recorder = ResultRecorder(blocker / "reports")
    groups = select_scenarios(default_suite(test_settings), ["Invalid Email Login"])

    outcome = orchestrator(test_settings, DriverFactory(), recorder=recorder).run(groups)

    assert outcome.report_path is None
    assert "Could not write report" in outcome.error
    assert outcome.exit_code == 1
    assert outcome.summary.passed == 1


def test_server_lost_mid_run_still_writes_report(test_settings):
    def make():
        app = FakeProdigyApp()
        if len(factory.drivers) == 1:
            app.elements[loc.SIGN_IN.value].click_error = MaxRetryError(None, "/session/2/element/click")
        return app

    factory = DriverFactory(make=make)
    suite = orchestrator(test_settings, factory)

    with pytest.raises(MaxRetryError):
        suite.run(default_suite(test_settings, include_home=False))

    assert [(r.test_name, r.status) for r in suite.recorder.results] == [
        ("Successful Login", TestStatus.PASSED),
        ("Invalid Email Login", TestStatus.FAILED),
    ]
    reports = list(test_settings.REPORTS_DIR.glob("TestReport_*.csv"))
    assert len(reports) == 1
    with open(reports[0], newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert [row[:2] for row in rows[1:3]] == [
        ["Successful Login", "PASSED"], ["Invalid Email Login", "FAILED"]
    ]
    assert "MaxRetryError" in rows[2][4]
