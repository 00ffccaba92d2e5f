"""Timer service for the Teamsheet application: match clock and player stints."""

import logging
from typing import Optional

from ..models import Game, TeamState
from ..utils import now_ts, local_date_str, local_time_str
from ..utils.constants import FIELD, TIMER_RUNNING, TIMER_STOPPED
from .state_store import StateStore

logger = logging.getLogger(__name__)


class TimerService:
    """Service for the per-fixture match clock and per-player playtime timers."""

    def __init__(self, store: StateStore):
        self.store = store

    # ------------------------------------------------------------------
    # Match clock
    # ------------------------------------------------------------------
    def start_game_timer(self, game_id: str) -> None:
        """Start or resume the match clock.

        The first start of a fixture marks the players on the field as
        starters. Every field player gets a running stint, and the fixture
        date/time are moved to now since the match is being played live.
        """

        now = now_ts()
        with self.store.transaction() as tx:
            game = tx.draft.find_game(game_id)
            if game is None:
                tx.abandon("start_game_timer: unknown game %s", game_id)
                return
            if game.is_explicitly_finished:
                tx.abandon("start_game_timer: game %s is finished", game_id)
                return
            if game.is_running and game.timer_start_time is not None:
                tx.abandon("start_game_timer: game %s already running", game_id)
                return

            current_date, current_time = local_date_str(now), local_time_str(now)
            if game.date != current_date:
                game.date = current_date
            if game.time != current_time:
                game.time = current_time

            starting_fresh = game.timer_elapsed_seconds == 0
            for entry in game.lineup or []:
                on_field = entry.location == FIELD
                if on_field:
                    entry.playtimer_start_time = now
                if starting_fresh:
                    entry.is_starter = on_field

            game.timer_status = TIMER_RUNNING
            game.timer_start_time = now
            game.is_explicitly_finished = False

    def stop_game_timer(self, game_id: str) -> None:
        """Pause the match clock and finalize every running player stint."""

        now = now_ts()
        with self.store.transaction() as tx:
            game = tx.draft.find_game(game_id)
            if game is None or not (game.is_running and game.timer_start_time is not None):
                tx.abandon("stop_game_timer: game %s is not running", game_id)
                return
            game.finalize_clock(now)

    def mark_game_as_finished(self, game_id: str) -> None:
        """Stop the clock if needed and flag the fixture as finished."""

        now = now_ts()
        with self.store.transaction() as tx:
            game = tx.draft.find_game(game_id)
            if game is None:
                tx.abandon("mark_game_as_finished: unknown game %s", game_id)
                return
            game.finalize_clock(now)
            game.timer_status = TIMER_STOPPED
            game.timer_start_time = None
            game.is_explicitly_finished = True

    # ------------------------------------------------------------------
    # Player timers
    # ------------------------------------------------------------------
    def start_player_timer_in_game(self, game_id: str, player_id: str) -> None:
        """Arm a field player's timer while the clock runs, if not already armed."""

        now = now_ts()
        with self.store.transaction() as tx:
            game = tx.draft.find_game(game_id)
            if game is None or not game.is_running:
                tx.abandon("start_player_timer_in_game: game %s is not running", game_id)
                return
            entry = game.lineup_entry(player_id)
            if entry is None or entry.location != FIELD or entry.has_active_timer:
                tx.abandon("start_player_timer_in_game: player %s cannot start", player_id)
                return
            entry.start_timer(now)

    def stop_player_timer_in_game(self, game_id: str, player_id: str) -> None:
        """Finalize a player's running stint, if any."""

        now = now_ts()
        with self.store.transaction() as tx:
            game = tx.draft.find_game(game_id)
            entry = game.lineup_entry(player_id) if game is not None else None
            if entry is None or not entry.has_active_timer:
                tx.abandon("stop_player_timer_in_game: no running timer for %s", player_id)
                return
            entry.finalize_timer(now)

    # ------------------------------------------------------------------
    # Query helpers
    # ------------------------------------------------------------------
    def _game(self, game_id: str) -> Optional[Game]:
        state: TeamState = self.store.state
        return state.find_game(game_id)

    def get_game_elapsed_seconds(self, game_id: str, now: Optional[float] = None) -> float:
        """Return the displayed clock value; unknown games read as zero."""

        game = self._game(game_id)
        if game is None:
            return 0.0
        return game.elapsed_seconds(now if now is not None else now_ts())

    def get_player_playtime_seconds(
        self, game_id: str, player_id: str, now: Optional[float] = None
    ) -> float:
        """Return a player's live playtime in a fixture, including a running stint."""

        game = self._game(game_id)
        entry = game.lineup_entry(player_id) if game is not None else None
        if entry is None:
            return 0.0
        return entry.live_playtime_seconds(now if now is not None else now_ts())
