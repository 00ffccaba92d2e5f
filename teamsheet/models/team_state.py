"""
TeamState model for the Teamsheet application.

This module contains the TeamState dataclass which represents the complete
in-memory snapshot of the application: team identity, roster, fixtures,
saved lineups and the season/competition history.
"""
import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .game import Game
from .lineup import SavedLineup
from .player import Player
from ..utils.constants import (
    DEFAULT_TEAM_NAME, KEY_GAME_HISTORY, KEY_GAMES, KEY_PLAYERS,
    KEY_SAVED_LINEUPS, KEY_TEAM_LOGO, KEY_TEAM_NAME
)


def _push_recent(values: List[str], value: Optional[str]) -> List[str]:
    if not value or not value.strip():
        return values
    value = value.strip()
    return [value] + [existing for existing in values if existing != value]


@dataclass
class GameHistory:
    """Most-recently-used season and competition tags, newest first."""
    seasons: List[str] = field(default_factory=list)
    competitions: List[str] = field(default_factory=list)

    def record(self, season: Optional[str] = None, competition: Optional[str] = None) -> None:
        """Move the given tags to the front; blank tags are ignored."""
        self.seasons = _push_recent(self.seasons, season)
        self.competitions = _push_recent(self.competitions, competition)

    def most_recent_season(self) -> Optional[str]:
        return self.seasons[0] if self.seasons else None

    def most_recent_competition(self) -> Optional[str]:
        return self.competitions[0] if self.competitions else None

    def to_dict(self) -> Dict[str, List[str]]:
        return {"seasons": list(self.seasons), "competitions": list(self.competitions)}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'GameHistory':
        if not data:
            return cls()
        return cls(
            seasons=list(data.get("seasons", [])),
            competitions=list(data.get("competitions", [])),
        )


@dataclass
class TeamState:
    """
    Represents the complete application state.

    Attributes:
        team_name: Display name of the coached team
        team_logo: Logo reference (data URI or path), None when unset
        players: Roster in insertion order
        games: Fixtures sorted by date
        saved_lineups: Named roster arrangements
        game_history: Recently used season/competition tags
    """
    team_name: str = DEFAULT_TEAM_NAME
    team_logo: Optional[str] = None
    players: List[Player] = field(default_factory=list)
    games: List[Game] = field(default_factory=list)
    saved_lineups: List[SavedLineup] = field(default_factory=list)
    game_history: GameHistory = field(default_factory=GameHistory)

    def copy(self) -> 'TeamState':
        """Deep copy used as a mutation draft."""
        return copy.deepcopy(self)

    def find_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def find_game(self, game_id: str) -> Optional[Game]:
        return next((g for g in self.games if g.id == game_id), None)

    def find_saved_lineup(self, name: str) -> Optional[SavedLineup]:
        return next((sl for sl in self.saved_lineups if sl.name == name), None)

    def player_ids(self) -> List[str]:
        return [p.id for p in self.players]

    def sort_games(self) -> None:
        """Keep fixtures ordered by date; the sort is stable for equal dates."""
        self.games.sort(key=lambda g: g.date)

    def to_records(self) -> Dict[str, Any]:
        """
        Serialize to one JSON-ready value per persisted record key.

        Returns:
            Mapping of record key to document
        """
        return {
            KEY_TEAM_NAME: self.team_name,
            KEY_TEAM_LOGO: self.team_logo,
            KEY_PLAYERS: [p.to_dict() for p in self.players],
            KEY_GAMES: [g.to_dict() for g in self.games],
            KEY_SAVED_LINEUPS: [sl.to_dict() for sl in self.saved_lineups],
            KEY_GAME_HISTORY: self.game_history.to_dict(),
        }
