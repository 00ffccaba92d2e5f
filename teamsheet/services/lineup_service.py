"""
Lineup service for the Teamsheet application.

This module moves players between bench, field and inactive within one
fixture, keeping per-player timers and substitution counters consistent
with the match clock.
"""
import copy
import logging
from dataclasses import replace
from typing import List, Optional

from ..models import FieldPosition, PlayerLineupState, default_lineup
from ..utils import now_ts
from ..utils.constants import ACCRUING_LOCATIONS, BENCH, FIELD, GAME_LOCATIONS
from .state_store import StateStore

logger = logging.getLogger(__name__)


class LineupService:
    """Fixture-scoped lineup state machine."""

    def __init__(self, store: StateStore):
        self.store = store

    def move_player_in_game(
        self,
        game_id: str,
        player_id: str,
        source_location: str,
        target_location: str,
        position: Optional[FieldPosition] = None,
    ) -> None:
        """
        Move one player within a fixture's lineup.

        Leaving the field or inactive finalizes a running stint. Entering the
        field while the clock runs starts a new stint. Only bench to field and
        field to bench moves count as substitutions.

        Args:
            game_id: Fixture id
            player_id: Roster player id
            source_location: Location the presentation layer moved the player from
            target_location: "bench", "field" or "inactive"
            position: Pitch position, kept only when the target is the field

        Raises:
            ValueError: If a location is not one of bench/field/inactive
        """
        for location in (source_location, target_location):
            if location not in GAME_LOCATIONS:
                raise ValueError(f"Unknown lineup location: {location!r}")

        now = now_ts()
        with self.store.transaction() as tx:
            game = tx.draft.find_game(game_id)
            entry = game.lineup_entry(player_id) if game is not None else None
            if entry is None:
                tx.abandon("move_player_in_game: no lineup entry for %s in %s", player_id, game_id)
                return

            if source_location in ACCRUING_LOCATIONS and entry.has_active_timer:
                entry.finalize_timer(now)

            if target_location == FIELD:
                if game.is_running and not entry.has_active_timer:
                    entry.start_timer(now)
            else:
                entry.playtimer_start_time = None

            if source_location == BENCH and target_location == FIELD:
                entry.subbed_on_count += 1
            elif source_location == FIELD and target_location == BENCH:
                entry.subbed_off_count += 1

            entry.location = target_location
            entry.position = position if target_location == FIELD else None

    def reset_game_lineup(self, game_id: str) -> List[PlayerLineupState]:
        """
        Replace a fixture's lineup with a bench-only lineup of the current roster.

        Returns:
            The new lineup (also returned for unknown fixtures, uncommitted)
        """
        with self.store.transaction() as tx:
            lineup = default_lineup(tx.draft.player_ids())
            game = tx.draft.find_game(game_id)
            if game is None:
                tx.abandon("reset_game_lineup: unknown game %s", game_id)
                return lineup
            game.lineup = lineup
        return [replace(entry) for entry in lineup]

    def get_game_lineup(self, game_id: str) -> Optional[List[PlayerLineupState]]:
        """
        Return a copy of a fixture's lineup, creating a bench lineup on first access.

        Returns:
            The lineup, or None for an unknown fixture
        """
        game = self.store.state.find_game(game_id)
        if game is None:
            return None
        if game.lineup is not None:
            return copy.deepcopy(game.lineup)

        with self.store.transaction() as tx:
            draft_game = tx.draft.find_game(game_id)
            draft_game.lineup = default_lineup(tx.draft.player_ids())
        return copy.deepcopy(self.store.state.find_game(game_id).lineup)
