"""
Report Data Model
"""
import csv
import io
from typing import List, Optional

from pydantic import BaseModel, Field

from .execution_result import TestResult, TestStatus

REPORT_HEADER = [
    "Test Name",
    "Status",
    "Expected Result",
    "Actual Result",
    "Error Message",
    "Timestamp",
]


class ReportSummary(BaseModel):
    """Aggregate counts over a set of results."""

    total: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    success_rate: float = 0.0

    @classmethod
    def from_results(cls, results: List[TestResult]) -> "ReportSummary":
        total = len(results)
        passed = sum(1 for r in results if r.status == TestStatus.PASSED)
        failed = sum(1 for r in results if r.status == TestStatus.FAILED)
        skipped = sum(1 for r in results if r.status == TestStatus.SKIPPED)
        success_rate = round((passed / total) * 100, 2) if total > 0 else 0.0
        return cls(
            total=total,
            passed=passed,
            failed=failed,
            skipped=skipped,
            success_rate=success_rate,
        )


class ReportDocument(BaseModel):
    """Rendered report: one row per result followed by the summary."""

    header: List[str] = Field(default_factory=lambda: list(REPORT_HEADER))
    rows: List[List[str]] = Field(default_factory=list)
    summary: ReportSummary = Field(default_factory=ReportSummary)

    @classmethod
    def from_results(cls, results: List[TestResult]) -> "ReportDocument":
        rows = [
            [
                r.test_name,
                r.status.value,
                r.expected,
                r.actual,
                r.error_message or "",
                r.timestamp,
            ]
            for r in results
        ]
        return cls(rows=rows, summary=ReportSummary.from_results(results))

    def summary_rows(self) -> List[List[str]]:
        pad = [""] * (len(self.header) - 2)
        s = self.summary
        return [
            ["SUMMARY", ""] + pad,
            ["Total Tests", str(s.total)] + pad,
            ["Passed", str(s.passed)] + pad,
            ["Failed", str(s.failed)] + pad,
            ["Skipped", str(s.skipped)] + pad,
            ["Success Rate", f"{s.success_rate}%"] + pad,
        ]

    def to_csv(self) -> str:
        """Serialize to CSV text, every field quoted."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(self.header)
        writer.writerows(self.rows)
        buffer.write("\n")
        writer.writerows(self.summary_rows())
        return buffer.getvalue()


class SuiteOutcome(BaseModel):
    """Everything a caller needs after a suite run."""

    run_id: str
    results: List[TestResult] = Field(default_factory=list)
    summary: ReportSummary = Field(default_factory=ReportSummary)
    report_path: Optional[str] = None
    aborted: bool = False
    error: Optional[str] = None
    started_at: Optional[str] = None
    ended_at: Optional[str] = None

    @property
    def exit_code(self) -> int:
        if self.aborted:
            return 2
        if self.error or self.summary.failed > 0:
            return 1
        return 0
