"""
Scenario Data Model
"""
import re
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

XPATH = "xpath"
PLACEHOLDER = re.compile(r"\{(\w+)\}")


class Locator(BaseModel):
    """Query identifying zero or more UI elements."""

    value: str = Field(..., description="Selector expression")
    by: str = Field(default=XPATH, description="Appium locator strategy")
    description: str = Field(default="", description="Human readable name")
    parent: Optional["Locator"] = Field(
        default=None, description="Element the query is resolved within"
    )

    class Config:
        frozen = True

    def label(self) -> str:
        return self.description or self.value

    def __str__(self):
        if self.parent is not None:
            return f"{self.parent} > {self.by}={self.value}"
        return f"{self.by}={self.value}"


Locator.model_rebuild()


class ReadyMode(str, Enum):
    CLICKABLE = "clickable"
    VISIBLE = "visible"


class StepAction(str, Enum):
    CLICK = "click"
    TYPE = "type"
    WAIT_VISIBLE = "wait_visible"
    WAIT_CLICKABLE = "wait_clickable"


class Step(BaseModel):
    """One atomic UI interaction."""

    description: str
    locator: Locator
    action: StepAction = StepAction.CLICK
    text: Optional[str] = Field(
        default=None, description="Text to type, may hold {placeholders}"
    )
    ready: Optional[ReadyMode] = Field(
        default=None, description="Readiness to wait for before acting"
    )
    required: bool = True
    settle_seconds: float = Field(default=0, description="Pause after the action")

    class Config:
        frozen = True

    def bind(self, inputs: Dict[str, str]) -> "Step":
        """
        Return a copy with {name} placeholders replaced from inputs.

        Unknown names and any other braces are left as they are.
        """
        if self.text is None or not inputs:
            return self
        text = PLACEHOLDER.sub(lambda m: inputs.get(m.group(1), m.group(0)), self.text)
        return self.model_copy(update={"text": text})


class MatchMode(str, Enum):
    CONTAINS = "contains"
    EQUALS = "equals"
    PRESENT = "present"
    ABSENT = "absent"


class TerminalAssertion(BaseModel):
    """Final check deciding whether a scenario passed."""

    locator: Locator
    expected: str = ""
    mode: MatchMode = MatchMode.CONTAINS
    attribute: str = "content-desc"
    wait: Optional[ReadyMode] = ReadyMode.VISIBLE
    timeout: Optional[float] = Field(
        default=None, description="Wait override, executor default when unset"
    )

    class Config:
        frozen = True

    def describe(self) -> str:
        target = self.locator.label()
        if self.mode == MatchMode.CONTAINS:
            return f"{target} {self.attribute} contains '{self.expected}'"
        if self.mode == MatchMode.EQUALS:
            return f"{target} {self.attribute} equals '{self.expected}'"
        if self.mode == MatchMode.ABSENT:
            return f"{target} is absent"
        return f"{target} is present"


class Scenario(BaseModel):
    """A named, ordered sequence of steps plus its terminal assertion."""

    name: str = Field(..., description="Human readable scenario name")
    description: str = Field(default="", description="What the scenario covers")
    expected_result: str = Field(default="", description="Expected outcome, reported verbatim")
    steps: List[Step] = Field(default_factory=list)
    assertion: Optional[TerminalAssertion] = None
    inputs: Dict[str, str] = Field(
        default_factory=dict, description="Values substituted into step text"
    )
    optional: bool = Field(
        default=False, description="Missing terminal element means SKIPPED"
    )
    skip_reason: Optional[str] = Field(
        default=None, description="Set when the scenario cannot be attempted at all"
    )

    class Config:
        frozen = True

    def bound_steps(self) -> List[Step]:
        return [step.bind(self.inputs) for step in self.steps]


class ScenarioGroup(BaseModel):
    """Scenarios sharing one lifecycle policy."""

    name: str
    scenarios: List[Scenario] = Field(default_factory=list)
    setup: Optional[Scenario] = Field(
        default=None, description="Flow run once before the group's scenarios"
    )
    isolate: bool = Field(
        default=True, description="Fresh reset and session for every scenario"
    )

    class Config:
        frozen = True
