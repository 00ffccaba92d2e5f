"""
Teamsheet

Roster, fixture and in-game lineup tracking for a single coach: who is on
the field, how long each player has played, the match clock and the goal
ledger, persisted locally and validated on every load.
"""
from .models import Player, Game, TeamState
from .services import ServiceFactory, StateStore, PersistenceService
from .utils import fmt_mmss, now_ts, APP_TITLE

__version__ = "1.0.0"

__all__ = [
    "Player", "Game", "TeamState", "ServiceFactory", "StateStore",
    "PersistenceService", "fmt_mmss", "now_ts", "APP_TITLE"
]
