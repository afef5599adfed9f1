"""
Utility helper functions
"""
import re
from datetime import datetime
from typing import Optional

# Characters rejected by at least one of ext4, NTFS or SMB shares
UNSAFE_FILENAME_CHARS = re.compile(r'[<>"/\\|?*\x00-\x1f]')


def sanitize_filename(name: str, max_length: int = 100) -> str:
    """
    Make a scenario name or timestamp usable as a filename.

    Args:
        name: Original name
        max_length: Longest name returned

    Returns:
        Name with unsafe characters dropped, colons as dashes and
        whitespace runs as single underscores
    """
    cleaned = UNSAFE_FILENAME_CHARS.sub("", name).replace(":", "-")
    cleaned = re.sub(r"\s+", "_", cleaned.strip())
    return cleaned[:max_length]


def format_duration(ms: int) -> str:
    """Render milliseconds as 850ms, 4.2s or 3m 07s."""
    if ms < 1000:
        return f"{ms}ms"
    seconds = ms / 1000
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, seconds = divmod(int(seconds), 60)
    return f"{minutes}m {seconds:02d}s"


def truncate_text(text: Optional[str], max_length: int = 100, suffix: str = "...") -> str:
    """
    Flatten driver output onto one line and cap its length.

    Appium error messages carry multi-line stack traces; log lines should not.
    """
    if not text:
        return ""
    flat = " ".join(text.split())
    if len(flat) <= max_length:
        return flat
    return flat[:max_length - len(suffix)] + suffix


def timestamp_now() -> str:
    return datetime.now().isoformat()


def filename_timestamp(moment: Optional[datetime] = None) -> str:
    """Timestamp safe to embed in a filename, microsecond resolution."""
    moment = moment or datetime.now()
    return sanitize_filename(moment.strftime("%Y-%m-%d %H:%M:%S.%f"))


def duration_ms(start: str, end: str) -> int:
    """Milliseconds between two ISO timestamps, 0 when unparsable."""
    try:
        elapsed = datetime.fromisoformat(end) - datetime.fromisoformat(start)
    except (TypeError, ValueError):
        return 0
    return int(elapsed.total_seconds() * 1000)
