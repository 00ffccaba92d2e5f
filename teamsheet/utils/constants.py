"""
Constants for the Teamsheet application.

This module contains configuration constants used throughout the application.
"""

# Application metadata
APP_TITLE = "Teamsheet"
DEFAULT_TEAM_NAME = "Your Team"
DEFAULT_OPPONENT = "Unknown"

# Persisted record keys (one document per key)
KEY_TEAM_NAME = "teamName"
KEY_TEAM_LOGO = "teamLogo"
KEY_PLAYERS = "players"
KEY_GAMES = "games"
KEY_SAVED_LINEUPS = "savedLineups"
KEY_GAME_HISTORY = "gameHistory"

RECORD_KEYS = (
    KEY_TEAM_NAME,
    KEY_TEAM_LOGO,
    KEY_PLAYERS,
    KEY_GAMES,
    KEY_SAVED_LINEUPS,
    KEY_GAME_HISTORY,
)

# Player locations
BENCH = "bench"
FIELD = "field"
INACTIVE = "inactive"

ROSTER_LOCATIONS = (BENCH, FIELD)
GAME_LOCATIONS = (BENCH, FIELD, INACTIVE)
# Locations where a running per-player timer is finalized on exit
ACCRUING_LOCATIONS = (FIELD, INACTIVE)

# Fixture venue and scoring sides
HOME = "home"
AWAY = "away"
TEAMS = (HOME, AWAY)
VENUES = (HOME, AWAY)

# Match clock status
TIMER_STOPPED = "stopped"
TIMER_RUNNING = "running"
TIMER_STATUSES = (TIMER_STOPPED, TIMER_RUNNING)

# Ledger event kinds
EVENT_GOAL = "goal"

# Playtime bands (share of elapsed game time, in percent)
PLAYTIME_BAND_MID_PCT = 25
PLAYTIME_BAND_HIGH_PCT = 50

# Local server and storage defaults
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 7122
DEFAULT_DATA_DIR = "teamsheet_data"
DEFAULT_LOG_LEVEL = "INFO"
