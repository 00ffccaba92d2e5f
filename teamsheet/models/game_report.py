"""Dataclasses representing per-fixture player summaries."""

from dataclasses import dataclass, field
from typing import List


@dataclass
class PlayerGameSummary:
    """Display information for one player within one fixture."""

    player_id: str
    name: str
    initials: str
    number: str
    location: str
    is_starter: bool
    subbed_on_count: int
    subbed_off_count: int
    playtime_seconds: float
    playtime_display: str
    playtime_share: float
    playtime_band: str
    goals: int
    assists: int


@dataclass
class GameReport:
    """Snapshot of a fixture's clock, score and player summaries."""

    game_id: str
    generated_ts: float
    elapsed_seconds: float
    elapsed_display: str
    home_score: int
    away_score: int
    is_running: bool
    is_finished: bool
    players: List[PlayerGameSummary] = field(default_factory=list)
