"""
Artifact Capture - Captures screenshots and UI hierarchy dumps on failure
"""
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from selenium.common.exceptions import WebDriverException

from ..config import settings
from ..utils.helpers import sanitize_filename
from .controller import StepExecutor

logger = logging.getLogger(__name__)


class ArtifactCapture:
    """
    Writes what the device showed when a scenario failed: a PNG screenshot
    and the UiAutomator hierarchy XML, one pair per failure, listed in the
    run directory's index.json.
    """

    def __init__(self, run_id: str, artifacts_dir: Optional[Path] = None):
        self.run_id = run_id
        self.artifacts_dir = Path(artifacts_dir or settings.ARTIFACTS_DIR) / run_id
        self.artifacts_dir.mkdir(parents=True, exist_ok=True)
        self.artifact_index: List[Dict] = []

    def capture_all(self, executor: StepExecutor, test_name: str) -> List[str]:
        """
        Capture every artifact the session can provide.

        Capture is best-effort: a dead session yields fewer files, never
        an exception.

        Args:
            executor: Executor bound to the session to capture from
            test_name: Name of the scenario that failed

        Returns:
            Filenames written, relative to the run directory
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        prefix = f"{sanitize_filename(test_name)}_{timestamp}"

        written = []
        for capture in (self.capture_screenshot, self.capture_hierarchy):
            try:
                written.append(capture(executor, prefix))
            except (WebDriverException, OSError) as e:
                logger.warning("Artifact capture %s failed for %s: %s", capture.__name__, test_name, e)

        self.artifact_index.append({
            "test_name": test_name,
            "timestamp": timestamp,
            "artifacts": written,
        })
        try:
            self._save_index()
        except OSError as e:
            logger.warning("Could not update artifact index in %s: %s", self.artifacts_dir, e)
        return written

    def capture_screenshot(self, executor: StepExecutor, prefix: str) -> str:
        filename = f"{prefix}_screenshot.png"
        (self.artifacts_dir / filename).write_bytes(executor.screenshot_png())
        return filename

    def capture_hierarchy(self, executor: StepExecutor, prefix: str) -> str:
        filename = f"{prefix}_hierarchy.xml"
        (self.artifacts_dir / filename).write_text(executor.page_source(), encoding="utf-8")
        return filename

    def _save_index(self):
        """Save the artifact index."""
        index_path = self.artifacts_dir / "index.json"
        index_path.write_text(
            json.dumps(self.artifact_index, indent=2),
            encoding="utf-8",
        )
