"""
Time utility functions for the Teamsheet application.

This module contains the wall-clock helpers used by the timing and
lineup services. Every mutation reads the clock once through ``now_ts``.
"""
import math
import time
from datetime import datetime
from typing import Optional


def fmt_mmss(seconds: float) -> str:
    """
    Format seconds as MM:SS string.

    Args:
        seconds: Number of seconds to format

    Returns:
        Formatted time string in MM:SS format

    Example:
        >>> fmt_mmss(90)
        '01:30'
        >>> fmt_mmss(3661)
        '61:01'
    """
    total = round_seconds(max(0.0, seconds))
    m = total // 60
    s = total % 60
    return f"{m:02d}:{s:02d}"


def now_ts() -> float:
    """
    Get current timestamp in epoch seconds.

    Returns:
        Current time as floating point epoch seconds
    """
    return time.time()


def round_seconds(value: float) -> int:
    """Round to the nearest whole second, halves rounding up."""
    return int(math.floor(value + 0.5))


def local_date_str(ts: Optional[float] = None) -> str:
    """Return the local calendar date for ``ts`` as ``YYYY-MM-DD``."""
    moment = datetime.fromtimestamp(ts if ts is not None else now_ts())
    return moment.strftime("%Y-%m-%d")


def local_time_str(ts: Optional[float] = None) -> str:
    """Return the local wall-clock time for ``ts`` as ``HH:MM``."""
    moment = datetime.fromtimestamp(ts if ts is not None else now_ts())
    return moment.strftime("%H:%M")
