"""
Result Recorder - accumulates scenario results and writes the CSV report
"""
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from ..config import settings
from ..errors import ReportWriteError
from ..models import ReportDocument, ReportSummary, TestResult
from ..utils.helpers import filename_timestamp

logger = logging.getLogger(__name__)


class ResultRecorder:
    """
    Ordered, unbounded store of TestResults for one suite run.

    Owned by whoever runs the suite and passed to the flow runner; there
    is no module-level store.
    """

    def __init__(self, reports_dir: Optional[Path] = None):
        self.reports_dir = Path(reports_dir or settings.REPORTS_DIR)
        self._results: List[TestResult] = []

    def record(self, result: TestResult):
        self._results.append(result)
        logger.info("Test Result Added: %s - %s", result.test_name, result.status.value)

    def reset(self):
        self._results = []
        logger.info("Test results cleared")

    @property
    def results(self) -> Tuple[TestResult, ...]:
        return tuple(self._results)

    def __len__(self):
        return len(self._results)

    def summary(self) -> ReportSummary:
        return ReportSummary.from_results(self._results)

    def render(self) -> ReportDocument:
        """Build the report from the results, in recording order."""
        return ReportDocument.from_results(self._results)

    def write(self, directory: Optional[Path] = None) -> Path:
        """
        Persist the rendered report.

        The filename embeds a microsecond timestamp and gets a counter
        suffix if that name is already taken, so earlier reports are never
        overwritten.

        Returns:
            Path of the written file

        Raises:
            ReportWriteError: the file could not be created or written
        """
        directory = Path(directory or self.reports_dir)
        body = self.render().to_csv()
        try:
            directory.mkdir(parents=True, exist_ok=True)
            path = self._unique_path(directory)
            with open(path, "x", encoding="utf-8", newline="") as f:
                f.write(body)
        except OSError as e:
            raise ReportWriteError(f"Could not write report to {directory}: {e}") from e

        logger.info("Report generated: %s", path)
        return path

    def _unique_path(self, directory: Path) -> Path:
        stem = f"TestReport_{filename_timestamp()}"
        path = directory / f"{stem}.csv"
        counter = 1
        while path.exists():
            path = directory / f"{stem}_{counter}.csv"
            counter += 1
        return path
