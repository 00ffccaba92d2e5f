"""
Lineup models for the Teamsheet application.

PlayerLineupState is the per-fixture bookkeeping for one roster player:
where the player is, how long they have played and how often they were
substituted. SavedLineup is a named roster-wide arrangement kept for reuse.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .player import FieldPosition, position_to_dict
from ..utils.constants import BENCH
from ..utils.time_utils import round_seconds


@dataclass
class PlayerLineupState:
    """
    Per-fixture state of one player.

    Attributes:
        id: Roster player id
        location: "bench", "field" or "inactive"
        position: Pitch position while on the field
        playtime_seconds: Finalized playing time
        playtimer_start_time: Epoch seconds when the running stint started,
            None while the player is not accruing time
        is_starter: Whether the player was on the field at the first kickoff
        subbed_on_count: Bench to field moves
        subbed_off_count: Field to bench moves
    """
    id: str
    location: str = BENCH
    position: Optional[FieldPosition] = None
    playtime_seconds: int = 0
    playtimer_start_time: Optional[float] = None
    is_starter: bool = False
    subbed_on_count: int = 0
    subbed_off_count: int = 0

    @classmethod
    def fresh(cls, player_id: str) -> 'PlayerLineupState':
        """Bench entry with zeroed timers and counters."""
        return cls(id=player_id)

    @property
    def has_active_timer(self) -> bool:
        return self.playtimer_start_time is not None

    def start_timer(self, now_ts: float) -> None:
        """
        Start a playing stint unless one is already running.

        Args:
            now_ts: Current timestamp in epoch seconds
        """
        if self.playtimer_start_time is None:
            self.playtimer_start_time = now_ts

    def finalize_timer(self, now_ts: float) -> None:
        """
        Fold the running stint into playtime_seconds and clear the timer.

        Args:
            now_ts: Current timestamp in epoch seconds
        """
        if self.playtimer_start_time is not None:
            self.playtime_seconds = round_seconds(
                self.playtime_seconds + (now_ts - self.playtimer_start_time)
            )
        self.playtimer_start_time = None

    def live_playtime_seconds(self, now_ts: float) -> float:
        """
        Playtime including the running stint, unrounded, for display.

        Args:
            now_ts: Current timestamp in epoch seconds

        Returns:
            Seconds played so far in this fixture
        """
        if self.playtimer_start_time is None:
            return float(self.playtime_seconds)
        return self.playtime_seconds + (now_ts - self.playtimer_start_time)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "location": self.location,
            "position": position_to_dict(self.position),
            "playtimeSeconds": self.playtime_seconds,
            "playtimerStartTime": self.playtimer_start_time,
            "isStarter": self.is_starter,
            "subbedOnCount": self.subbed_on_count,
            "subbedOffCount": self.subbed_off_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlayerLineupState':
        """Create from a normalized dictionary."""
        return cls(
            id=data["id"],
            location=data.get("location", BENCH),
            position=FieldPosition.from_dict(data.get("position")),
            playtime_seconds=data.get("playtimeSeconds", 0),
            playtimer_start_time=data.get("playtimerStartTime"),
            is_starter=data.get("isStarter", False),
            subbed_on_count=data.get("subbedOnCount", 0),
            subbed_off_count=data.get("subbedOffCount", 0),
        )


def default_lineup(player_ids: List[str]) -> List[PlayerLineupState]:
    """Build a bench-only lineup for the given roster ids, in roster order."""
    return [PlayerLineupState.fresh(player_id) for player_id in player_ids]


@dataclass
class LineupSlot:
    """One player's entry in a saved lineup."""
    id: str
    location: str = BENCH
    position: Optional[FieldPosition] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "location": self.location,
            "position": position_to_dict(self.position),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LineupSlot':
        return cls(
            id=data["id"],
            location=data.get("location", BENCH),
            position=FieldPosition.from_dict(data.get("position")),
        )


@dataclass
class SavedLineup:
    """A named snapshot of every roster player's ad-hoc location."""
    name: str
    players: List[LineupSlot] = field(default_factory=list)

    def slot_for(self, player_id: str) -> Optional[LineupSlot]:
        return next((slot for slot in self.players if slot.id == player_id), None)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "players": [slot.to_dict() for slot in self.players]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SavedLineup':
        return cls(
            name=data["name"],
            players=[LineupSlot.from_dict(slot) for slot in data.get("players", [])],
        )
