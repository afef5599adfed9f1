import logging
import subprocess
from typing import List, Optional

from ..errors import AppResetWarning

logger = logging.getLogger(__name__)

ADB_TEXT_KW = dict(text=True, encoding="utf-8", errors="ignore")


class AdbShell:
    """Out-of-band device commands used to reset the app under test.

    Only process-level actions live here. Anything that touches the UI goes
    through the Appium session instead.
    """

    def __init__(self, adb_path: str = "adb", serial: Optional[str] = None, timeout: float = 30):
        self.adb_path = adb_path
        self.serial = serial
        self.timeout = timeout

    def _command(self, *args: str) -> List[str]:
        cmd = [self.adb_path]
        if self.serial:
            cmd += ["-s", self.serial]
        return cmd + list(args)

    def run(self, *args: str) -> str:
        """Run an adb command and return its stdout.

        Any failure (missing binary, non-zero exit, hang) is reported as
        AppResetWarning so callers can treat it as best-effort.
        """
        cmd = self._command(*args)
        logger.debug("[ADB] %s", " ".join(cmd))
        try:
            proc = subprocess.run(
                cmd, check=True, capture_output=True, timeout=self.timeout, **ADB_TEXT_KW
            )
        except FileNotFoundError as e:
            raise AppResetWarning(f"adb executable not found: {self.adb_path}") from e
        except subprocess.TimeoutExpired as e:
            raise AppResetWarning(f"'{' '.join(cmd)}' timed out after {self.timeout}s") from e
        except subprocess.CalledProcessError as e:
            output = ((e.stderr or "") + (e.stdout or "")).strip()
            raise AppResetWarning(
                f"'{' '.join(cmd)}' exited with {e.returncode}: {output}"
            ) from e
        return (proc.stdout or "").strip()

    def force_stop(self, package: str) -> str:
        return self.run("shell", "am", "force-stop", package)

    def clear_data(self, package: str) -> str:
        # pm clear wipes data and cache in one go
        out = self.run("shell", "pm", "clear", package)
        if out and "Success" not in out:
            raise AppResetWarning(f"pm clear {package} reported: {out}")
        return out

    def reset_permissions(self, package: str) -> str:
        return self.run("shell", "pm", "reset-permissions", package)
