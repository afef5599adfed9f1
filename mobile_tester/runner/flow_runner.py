"""
Flow Runner - executes one scenario and turns it into exactly one TestResult
"""
from typing import List, Optional

from ..driver.artifact_capture import ArtifactCapture
from ..driver.controller import StepExecutor
from ..errors import ActionFailedError, AssertionMismatchError, ElementNotFoundError
from ..models import (
    FlowState,
    MatchMode,
    Scenario,
    StepOutcome,
    StepStatus,
    TerminalAssertion,
    TestResult,
    TestStatus,
)
from ..reporting.recorder import ResultRecorder
from ..reporting.test_logger import end_test, log_step, start_test
from ..utils.helpers import truncate_text
from .base import BaseRunner

STEP_ERRORS = (ElementNotFoundError, ActionFailedError)


class FlowRunner(BaseRunner):
    """
    Runs a scenario's steps in order against one session.

    State machine: PENDING -> RUNNING -> COMPLETED | ABORTED.
    The first failing required step aborts the scenario; nothing after
    it is attempted. A scenario is never retried.
    """

    def __init__(
        self,
        executor: Optional[StepExecutor],
        recorder: Optional[ResultRecorder] = None,
        artifact_capture: Optional[ArtifactCapture] = None,
    ):
        super().__init__(
            name="FlowRunner",
            description="Executes scenarios step by step"
        )
        self.executor = executor
        self.recorder = recorder
        self.artifact_capture = artifact_capture
        self.state = FlowState.PENDING

    def run(self, scenario: Scenario) -> TestResult:
        """
        Execute a scenario.

        Args:
            scenario: Scenario to execute

        Returns:
            The scenario's single TestResult, also handed to the recorder
        """
        self.state = FlowState.PENDING
        if scenario.skip_reason:
            return self.skip(scenario, scenario.skip_reason)

        start_test(scenario.name)
        self.state = FlowState.RUNNING
        try:
            return self._execute(scenario)
        except Exception as e:
            # record the scenario the run died in, then propagate
            if self.state == FlowState.RUNNING:
                self._interrupted(scenario, e)
            raise

    def _execute(self, scenario: Scenario) -> TestResult:
        probe = self.executor.probe_stability()
        if not probe.ok:
            self.log_warning(f"App stability probe failed, continuing: {truncate_text(probe.detail, 200)}")

        steps = scenario.bound_steps()
        total = len(steps)
        self.log_debug(f"Running '{scenario.name}' ({total} steps)")
        outcomes: List[StepOutcome] = []

        for index, step in enumerate(steps, start=1):
            try:
                detail = self.executor.perform(step)
            except STEP_ERRORS as e:
                message = str(e)
                outcomes.append(StepOutcome(
                    step_index=index,
                    description=step.description,
                    status=StepStatus.FAILED,
                    detail=message,
                ))
                log_step(index, total, step.description, StepStatus.FAILED, message)
                if step.required:
                    return self._finish(
                        scenario,
                        TestStatus.FAILED,
                        outcomes,
                        actual=f"Aborted at step {index}/{total}: {step.description}",
                        error=message,
                    )
                self.log_warning(f"Optional step {index}/{total} failed, continuing")
                continue

            outcomes.append(StepOutcome(
                step_index=index,
                description=step.description,
                status=StepStatus.SUCCESS,
                detail=detail,
            ))
            log_step(index, total, step.description, StepStatus.SUCCESS, detail)

        if scenario.assertion is None:
            return self._finish(
                scenario, TestStatus.PASSED, outcomes, actual=f"All {total} steps completed"
            )

        assertion = scenario.assertion
        try:
            actual = self._evaluate(assertion)
        except ElementNotFoundError as e:
            if scenario.optional:
                return self._finish(
                    scenario,
                    TestStatus.SKIPPED,
                    outcomes,
                    actual=f"{assertion.locator.label()} not found - may not always be visible",
                )
            return self._finish(
                scenario,
                TestStatus.FAILED,
                outcomes,
                actual=f"{assertion.locator.label()} not found",
                error=str(e),
            )
        except AssertionMismatchError as e:
            return self._finish(scenario, TestStatus.FAILED, outcomes, actual=e.actual, error=str(e))
        except ActionFailedError as e:
            return self._finish(
                scenario,
                TestStatus.FAILED,
                outcomes,
                actual=f"Could not read {assertion.locator.label()}",
                error=str(e),
            )

        return self._finish(scenario, TestStatus.PASSED, outcomes, actual=actual)

    def skip(self, scenario: Scenario, reason: str) -> TestResult:
        """Record a scenario that was never attempted."""
        self.log_info(f"Skipping '{scenario.name}': {reason}")
        result = TestResult(
            test_name=scenario.name,
            status=TestStatus.SKIPPED,
            expected=self._expected(scenario),
            actual=reason,
        )
        self.state = FlowState.COMPLETED
        end_test(scenario.name, result.status.value)
        if self.recorder is not None:
            self.recorder.record(result)
        return result

    def _interrupted(self, scenario: Scenario, error: Exception):
        """Record FAILED for a scenario cut short by an unexpected exception."""
        self.state = FlowState.ABORTED
        message = f"{error.__class__.__name__}: {error}"
        self.log_error(f"'{scenario.name}' interrupted: {message}")
        result = TestResult(
            test_name=scenario.name,
            status=TestStatus.FAILED,
            expected=self._expected(scenario),
            actual="Run interrupted",
            error_message=message,
        )
        end_test(scenario.name, result.status.value)
        if self.recorder is not None:
            self.recorder.record(result)

    def _evaluate(self, assertion: TerminalAssertion) -> str:
        """
        Check the terminal assertion.

        Returns:
            What was observed

        Raises:
            ElementNotFoundError: the terminal element is missing
            AssertionMismatchError: it is there but does not match
        """
        locator = assertion.locator
        label = locator.label()

        if assertion.mode == MatchMode.ABSENT:
            if self.executor.element_exists(locator):
                raise AssertionMismatchError(assertion.describe(), f"{label} is present")
            return f"{label} absent"

        if assertion.wait is not None:
            self.executor.wait_ready(locator, assertion.wait, assertion.timeout)

        value = self.executor.get_attribute(locator, assertion.attribute)
        if assertion.mode == MatchMode.PRESENT:
            return value or f"{label} found"

        if value is None:
            raise AssertionMismatchError(
                assertion.describe(), f"{label} has no {assertion.attribute}"
            )
        if assertion.mode == MatchMode.CONTAINS and assertion.expected not in value:
            raise AssertionMismatchError(assertion.describe(), value)
        if assertion.mode == MatchMode.EQUALS and value != assertion.expected:
            raise AssertionMismatchError(assertion.describe(), value)
        return value

    def _finish(
        self,
        scenario: Scenario,
        status: TestStatus,
        outcomes: List[StepOutcome],
        actual: str,
        error: Optional[str] = None,
    ) -> TestResult:
        self.state = FlowState.ABORTED if status == TestStatus.FAILED else FlowState.COMPLETED

        artifacts = []
        if status == TestStatus.FAILED:
            self.log_error(f"'{scenario.name}' failed: {error}")
            if self.artifact_capture is not None:
                artifacts = self.artifact_capture.capture_all(self.executor, scenario.name)

        result = TestResult(
            test_name=scenario.name,
            status=status,
            expected=self._expected(scenario),
            actual=actual,
            error_message=error,
            steps=outcomes,
            artifacts=artifacts,
        )
        end_test(scenario.name, status.value)
        if self.recorder is not None:
            self.recorder.record(result)
        return result

    @staticmethod
    def _expected(scenario: Scenario) -> str:
        if scenario.expected_result:
            return scenario.expected_result
        if scenario.assertion is not None:
            return scenario.assertion.describe()
        return ""
