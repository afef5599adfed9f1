"""Utilities package"""
from .helpers import (
    duration_ms,
    filename_timestamp,
    format_duration,
    sanitize_filename,
    timestamp_now,
    truncate_text,
)

__all__ = [
    "duration_ms",
    "filename_timestamp",
    "format_duration",
    "sanitize_filename",
    "timestamp_now",
    "truncate_text",
]
