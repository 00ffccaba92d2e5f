"""
Utilities package for the Teamsheet application.

This package contains utility functions used throughout the application.
"""
from .time_utils import fmt_mmss, now_ts, round_seconds, local_date_str, local_time_str
from .constants import (
    APP_TITLE, DEFAULT_TEAM_NAME, BENCH, FIELD, INACTIVE, HOME, AWAY,
    TIMER_STOPPED, TIMER_RUNNING, EVENT_GOAL, RECORD_KEYS
)

__all__ = [
    "fmt_mmss", "now_ts", "round_seconds", "local_date_str", "local_time_str",
    "APP_TITLE", "DEFAULT_TEAM_NAME", "BENCH", "FIELD", "INACTIVE", "HOME", "AWAY",
    "TIMER_STOPPED", "TIMER_RUNNING", "EVENT_GOAL", "RECORD_KEYS"
]
