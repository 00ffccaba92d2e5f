"""Per-fixture player summaries for the Teamsheet application."""

from __future__ import annotations

from collections import Counter
from typing import List, Optional

from ..models import GameReport, PlayerGameSummary
from ..utils import fmt_mmss, now_ts
from ..utils.constants import PLAYTIME_BAND_HIGH_PCT, PLAYTIME_BAND_MID_PCT
from .state_store import StateStore


def classify_playtime(share_pct: float) -> str:
    """Band a player's share of elapsed game time: low, mid or high."""
    if share_pct >= PLAYTIME_BAND_HIGH_PCT:
        return "high"
    if share_pct >= PLAYTIME_BAND_MID_PCT:
        return "mid"
    return "low"


class ReportService:
    """Build display snapshots of a fixture from the committed state."""

    def __init__(self, store: StateStore) -> None:
        self.store = store

    def build_game_report(self, game_id: str, now: Optional[float] = None) -> Optional[GameReport]:
        """Build a :class:`GameReport` for one fixture, or None if unknown."""

        state = self.store.state
        game = state.find_game(game_id)
        if game is None:
            return None

        now = now if now is not None else now_ts()
        elapsed = game.elapsed_seconds(now)
        goals = Counter(ev.scorer_player_id for ev in game.events if ev.scorer_player_id)
        assists = Counter(ev.assist_player_id for ev in game.events if ev.assist_player_id)

        summaries: List[PlayerGameSummary] = []
        for player in state.players:
            entry = game.lineup_entry(player.id)
            if entry is None:
                continue
            playtime = entry.live_playtime_seconds(now)
            share = (playtime / elapsed) * 100.0 if elapsed > 0 else 0.0
            summaries.append(
                PlayerGameSummary(
                    player_id=player.id,
                    name=player.full_name,
                    initials=player.initials(),
                    number=player.number,
                    location=entry.location,
                    is_starter=entry.is_starter,
                    subbed_on_count=entry.subbed_on_count,
                    subbed_off_count=entry.subbed_off_count,
                    playtime_seconds=playtime,
                    playtime_display=fmt_mmss(playtime),
                    playtime_share=share,
                    playtime_band=classify_playtime(share),
                    goals=goals[player.id],
                    assists=assists[player.id],
                )
            )

        return GameReport(
            game_id=game.id,
            generated_ts=now,
            elapsed_seconds=elapsed,
            elapsed_display=fmt_mmss(elapsed),
            home_score=game.home_score,
            away_score=game.away_score,
            is_running=game.is_running,
            is_finished=game.is_explicitly_finished,
            players=summaries,
        )
