"""
Execution Result Data Model
"""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class FlowState(str, Enum):
    PENDING = "PENDING"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    ABORTED = "ABORTED"


class StepStatus(str, Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class TestStatus(str, Enum):
    PASSED = "PASSED"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"


class StepOutcome(BaseModel):
    """Result of a single scenario step."""

    step_index: int
    description: str
    status: StepStatus
    detail: str = ""


class TestResult(BaseModel):
    """Recorded outcome of one scenario execution."""

    __test__ = False

    test_name: str
    status: TestStatus
    expected: str = ""
    actual: str = ""
    error_message: Optional[str] = None
    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat())
    steps: List[StepOutcome] = Field(default_factory=list)
    artifacts: List[str] = Field(default_factory=list)

    class Config:
        frozen = True

    @property
    def passed(self) -> bool:
        return self.status == TestStatus.PASSED


class BestEffortResult(BaseModel):
    """Outcome of an operation whose failure never halts the flow."""

    operation: str
    ok: bool
    detail: str = ""
