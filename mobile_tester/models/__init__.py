"""Models package"""
from .scenario import (
    Locator,
    MatchMode,
    ReadyMode,
    Scenario,
    ScenarioGroup,
    Step,
    StepAction,
    TerminalAssertion,
)
from .execution_result import (
    BestEffortResult,
    FlowState,
    StepOutcome,
    StepStatus,
    TestResult,
    TestStatus,
)
from .report import REPORT_HEADER, ReportDocument, ReportSummary, SuiteOutcome

__all__ = [
    "Locator",
    "MatchMode",
    "ReadyMode",
    "Scenario",
    "ScenarioGroup",
    "Step",
    "StepAction",
    "TerminalAssertion",
    "BestEffortResult",
    "FlowState",
    "StepOutcome",
    "StepStatus",
    "TestResult",
    "TestStatus",
    "REPORT_HEADER",
    "ReportDocument",
    "ReportSummary",
    "SuiteOutcome",
]
