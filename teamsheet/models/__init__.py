"""
Models package for the Teamsheet application.

This package contains the core data models used throughout the application.
"""
from .player import Player, FieldPosition
from .lineup import PlayerLineupState, LineupSlot, SavedLineup, default_lineup
from .game import Game, GameEvent
from .team_state import TeamState, GameHistory
from .game_report import GameReport, PlayerGameSummary

__all__ = [
    "Player", "FieldPosition", "PlayerLineupState", "LineupSlot", "SavedLineup",
    "default_lineup", "Game", "GameEvent", "TeamState", "GameHistory",
    "GameReport", "PlayerGameSummary"
]
