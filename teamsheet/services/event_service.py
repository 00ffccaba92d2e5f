"""Event ledger service for the Teamsheet application."""

import logging
import uuid
from dataclasses import replace
from typing import Optional

from ..models import GameEvent
from ..utils import now_ts
from ..utils.constants import TEAMS
from .state_store import StateStore

logger = logging.getLogger(__name__)


class EventService:
    """
    Append and undo scoring events.

    A fixture's score is a projection of its ledger, so recording or
    removing an event is the only way to change it.
    """

    def __init__(self, store: StateStore):
        self.store = store

    def add_game_event(
        self,
        game_id: str,
        team: str,
        scorer_player_id: Optional[str] = None,
        assist_player_id: Optional[str] = None,
    ) -> Optional[GameEvent]:
        """
        Record a goal at the end of a fixture's ledger.

        Args:
            game_id: Fixture id
            team: "home" or "away"
            scorer_player_id: Roster id of the scorer, if tracked
            assist_player_id: Roster id of the assisting player, if tracked

        Returns:
            The recorded event, or None for an unknown fixture

        Raises:
            ValueError: If team is not "home" or "away"
        """
        if team not in TEAMS:
            raise ValueError(f"Unknown team: {team!r}")

        event = GameEvent(
            id=str(uuid.uuid4()),
            team=team,
            scorer_player_id=scorer_player_id,
            assist_player_id=assist_player_id,
            timestamp=now_ts(),
        )
        with self.store.transaction() as tx:
            game = tx.draft.find_game(game_id)
            if game is None:
                tx.abandon("add_game_event: unknown game %s", game_id)
                return None
            game.record_goal(event)
        return replace(event)

    def remove_last_game_event(self, game_id: str, team: str) -> Optional[GameEvent]:
        """
        Undo the most recent goal of one team.

        Returns:
            The removed event, or None when nothing was removed
        """
        with self.store.transaction() as tx:
            game = tx.draft.find_game(game_id)
            removed = game.undo_goal(team) if game is not None else None
            if removed is None:
                tx.abandon("remove_last_game_event: no %s event in game %s", team, game_id)
                return None
        return removed

    def get_player_goal_count(self, game_id: str, player_id: str) -> int:
        game = self.store.state.find_game(game_id)
        if game is None:
            return 0
        return sum(1 for ev in game.events if ev.scorer_player_id == player_id)

    def get_player_assist_count(self, game_id: str, player_id: str) -> int:
        game = self.store.state.find_game(game_id)
        if game is None:
            return 0
        return sum(1 for ev in game.events if ev.assist_player_id == player_id)
