"""
Suite Orchestrator - wraps scenario groups in the app lifecycle and
produces the run's report
"""
import uuid
from typing import List, Optional

from ..catalog.scenarios import default_suite
from ..config import Settings, settings as default_settings
from ..driver.artifact_capture import ArtifactCapture
from ..driver.controller import StepExecutor
from ..driver.session import LifecycleController
from ..errors import DriverAcquisitionError, ReportWriteError
from ..models import ScenarioGroup, SuiteOutcome, TestStatus
from ..reporting.recorder import ResultRecorder
from ..utils.helpers import duration_ms, format_duration, timestamp_now
from .base import BaseRunner
from .flow_runner import FlowRunner


class SuiteOrchestrator(BaseRunner):
    """
    Orchestrates a suite run:
    - isolated groups get a reset and a fresh session per scenario
    - shared groups get one session and an optional setup flow
    - scenarios run strictly one after another
    - a run without a session is aborted, never half-attempted
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        lifecycle: Optional[LifecycleController] = None,
        recorder: Optional[ResultRecorder] = None,
        run_id: Optional[str] = None,
    ):
        super().__init__(
            name="Orchestrator",
            description="Runs scenario groups around the app lifecycle"
        )
        self.settings = settings or default_settings
        self.lifecycle = lifecycle or LifecycleController(self.settings)
        self.recorder = recorder or ResultRecorder(self.settings.REPORTS_DIR)
        self.run_id = run_id or str(uuid.uuid4())[:8]
        self.artifact_capture = None
        if self.settings.CAPTURE_ARTIFACTS_ON_FAILURE:
            self.artifact_capture = ArtifactCapture(self.run_id, self.settings.ARTIFACTS_DIR)

    def run(self, groups: Optional[List[ScenarioGroup]] = None) -> SuiteOutcome:
        """
        Execute every group in order and write the report.

        Args:
            groups: Groups to run. Defaults to the built-in suite

        Returns:
            Results, summary, report location and exit status of the run
        """
        if groups is None:
            groups = default_suite(self.settings)
        started_at = timestamp_now()
        scenario_count = sum(len(g.scenarios) for g in groups)
        self.log_info(f"Starting run {self.run_id}: {scenario_count} scenarios in {len(groups)} groups")

        aborted = False
        errors = []
        try:
            for group in groups:
                self.log_info(f"Group '{group.name}' ({len(group.scenarios)} scenarios)")
                if group.isolate:
                    self._run_isolated(group)
                else:
                    self._run_shared(group)
        except DriverAcquisitionError as e:
            aborted = True
            errors.append(str(e))
            self.log_error(f"Run aborted, no session available: {e}")
        except Exception:
            self.log_error(f"Run {self.run_id} interrupted, writing the partial report")
            self._write_report(errors)
            raise

        report_path = self._write_report(errors)

        ended_at = timestamp_now()
        summary = self.recorder.summary()
        self.log_info(
            f"Run {self.run_id} finished in {format_duration(duration_ms(started_at, ended_at))}: "
            f"{summary.passed} passed, {summary.failed} failed, {summary.skipped} skipped "
            f"({summary.success_rate}%)"
        )
        return SuiteOutcome(
            run_id=self.run_id,
            results=list(self.recorder.results),
            summary=summary,
            report_path=report_path,
            aborted=aborted,
            error="; ".join(errors) or None,
            started_at=started_at,
            ended_at=ended_at,
        )

    def _write_report(self, errors: List[str]) -> Optional[str]:
        try:
            return str(self.recorder.write())
        except ReportWriteError as e:
            errors.append(str(e))
            self.log_error(str(e))
            return None

    def _runner(self, executor: Optional[StepExecutor]) -> FlowRunner:
        return FlowRunner(executor, recorder=self.recorder, artifact_capture=self.artifact_capture)

    def _run_isolated(self, group: ScenarioGroup):
        for scenario in group.scenarios:
            if scenario.skip_reason:
                self._runner(None).skip(scenario, scenario.skip_reason)
                continue
            with self.lifecycle.session() as executor:
                self._runner(executor).run(scenario)
            self.lifecycle.settle_after_teardown()

    def _run_shared(self, group: ScenarioGroup):
        with self.lifecycle.session() as executor:
            runner = self._runner(executor)
            setup_error = self._run_setup(group, executor)
            for scenario in group.scenarios:
                if setup_error:
                    runner.skip(scenario, setup_error)
                else:
                    runner.run(scenario)
        self.lifecycle.settle_after_teardown()

    def _run_setup(self, group: ScenarioGroup, executor: StepExecutor) -> Optional[str]:
        """Run the group's setup flow, unrecorded. Returns a skip reason on failure."""
        if group.setup is None:
            return None
        self.log_info(f"Setup for group '{group.name}': {group.setup.name}")
        result = FlowRunner(executor, artifact_capture=self.artifact_capture).run(group.setup)
        if result.status == TestStatus.PASSED:
            return None
        reason = f"Setup '{group.setup.name}' failed: {result.error_message or result.actual}"
        self.log_error(reason)
        return reason
