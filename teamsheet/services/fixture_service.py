"""
Fixture service for the Teamsheet application.

This module creates, edits and deletes fixtures and keeps the most recently
used season and competition tags for defaulting new fixtures.
"""
import copy
import logging
import uuid
from typing import Optional

from ..models import Game, default_lineup
from ..utils.constants import VENUES
from .state_store import StateStore

logger = logging.getLogger(__name__)

# Fields a coach can edit directly; clock, lineup and ledger are engine-owned
TEXT_GAME_FIELDS = ("opponent", "date", "time", "location", "season", "competition")
EDITABLE_GAME_FIELDS = TEXT_GAME_FIELDS + ("is_explicitly_finished",)


class FixtureService:
    """Service for fixture records and the season/competition history."""

    def __init__(self, store: StateStore):
        self.store = store

    def add_game(
        self,
        opponent: str,
        date: str,
        time: str,
        location: str,
        season: Optional[str] = None,
        competition: Optional[str] = None,
    ) -> Game:
        """
        Create a fixture with a bench-only lineup of the current roster.

        Args:
            opponent: Opponent name
            date: Kickoff date as "YYYY-MM-DD"
            time: Kickoff time as "HH:MM"
            location: "home" or "away"
            season: Optional season tag
            competition: Optional competition tag

        Returns:
            The new fixture

        Raises:
            ValueError: If location is not "home" or "away"
        """
        if location not in VENUES:
            raise ValueError(f"Unknown fixture location: {location!r}")

        with self.store.transaction() as tx:
            draft = tx.draft
            game = Game(
                id=str(uuid.uuid4()),
                opponent=opponent,
                date=date,
                time=time,
                location=location,
                season=(season or "").strip(),
                competition=(competition or "").strip(),
                lineup=default_lineup(draft.player_ids()),
            )
            draft.games.append(game)
            draft.sort_games()
            draft.game_history.record(season, competition)
        logger.info("Added game %s vs %s on %s", game.id, opponent, date)
        return copy.deepcopy(self.store.state.find_game(game.id))

    def update_game(self, game_id: str, **updates) -> None:
        """
        Edit a fixture's descriptive fields.

        Season and competition are trimmed and pushed to the history.
        Clearing ``is_explicitly_finished`` lets the clock be started again.

        Raises:
            ValueError: If a field is not editable, has the wrong type, or
                location is invalid
        """
        unknown = set(updates) - set(EDITABLE_GAME_FIELDS)
        if unknown:
            raise ValueError(f"Fields not editable: {', '.join(sorted(unknown))}")
        for field_name in TEXT_GAME_FIELDS:
            if field_name in updates and not isinstance(updates[field_name], str):
                raise ValueError(f"{field_name} must be a string")
        if "is_explicitly_finished" in updates and not isinstance(updates["is_explicitly_finished"], bool):
            raise ValueError("is_explicitly_finished must be a boolean")
        if "location" in updates and updates["location"] not in VENUES:
            raise ValueError(f"Unknown fixture location: {updates['location']!r}")

        with self.store.transaction() as tx:
            draft = tx.draft
            game = draft.find_game(game_id)
            if game is None:
                tx.abandon("update_game: unknown game %s", game_id)
                return
            for field_name, value in updates.items():
                if field_name in ("season", "competition") and isinstance(value, str):
                    value = value.strip()
                setattr(game, field_name, value)
            draft.sort_games()
            draft.game_history.record(game.season, game.competition)

    def delete_game(self, game_id: str) -> None:
        with self.store.transaction() as tx:
            if tx.draft.find_game(game_id) is None:
                tx.abandon("delete_game: unknown game %s", game_id)
                return
            tx.draft.games = [g for g in tx.draft.games if g.id != game_id]

    def get_game(self, game_id: str) -> Optional[Game]:
        return self.store.state.find_game(game_id)

    def get_most_recent_season(self) -> Optional[str]:
        return self.store.state.game_history.most_recent_season()

    def get_most_recent_competition(self) -> Optional[str]:
        return self.store.state.game_history.most_recent_competition()
