"""Presentation helpers for sizes, timestamps and permission bits."""

from __future__ import annotations

import os
from datetime import datetime, timezone

_SIZE_UNITS = ("B", "KB", "MB", "GB")


def format_size(num_bytes: int) -> str:
    """``500 B``, ``1.5 KB``, ``1.0 MB``: whole bytes, one decimal above that, GB at most."""
    size = float(num_bytes)
    unit = 0
    while size >= 1024 and unit < len(_SIZE_UNITS) - 1:
        size /= 1024
        unit += 1
    if unit == 0:
        return f"{int(num_bytes)} B"
    return f"{size:.1f} {_SIZE_UNITS[unit]}"


def iso_timestamp(epoch_seconds: float) -> str:
    """UTC ISO-8601 with millisecond precision and a ``Z`` suffix."""
    dt = datetime.fromtimestamp(epoch_seconds, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def birth_time(st: os.stat_result) -> float:
    # st_birthtime exists on macOS/BSD (and Windows on 3.12+); Linux falls back to ctime.
    return getattr(st, "st_birthtime", st.st_ctime)


def octal_mode(st_mode: int) -> str:
    return format(st_mode, "o")
