"""Application configuration. Load overrides from the environment."""

import logging
import os

from dotenv import load_dotenv

from .constants import DEFAULT_DATA_DIR, DEFAULT_HOST, DEFAULT_LOG_LEVEL, DEFAULT_PORT

load_dotenv()


def get_data_dir() -> str:
    """Return the directory holding the persisted records."""
    return os.environ.get("TEAMSHEET_DATA_DIR") or DEFAULT_DATA_DIR


def get_host() -> str:
    """Return the interface the local API binds to."""
    return os.environ.get("TEAMSHEET_HOST") or DEFAULT_HOST


def get_port() -> int:
    """Return TEAMSHEET_PORT as int. Raises if it is not a number."""
    raw = os.environ.get("TEAMSHEET_PORT")
    if not raw:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"TEAMSHEET_PORT must be an integer, got {raw!r}")


def get_log_level() -> int:
    """Return the configured logging level, falling back to INFO."""
    name = (os.environ.get("TEAMSHEET_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO
