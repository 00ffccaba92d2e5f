"""
Game (fixture) model for the Teamsheet application.

A Game owns its lineup and its event ledger outright. The score is not
stored state: ``home_score`` and ``away_score`` are projections of the
ledger, so the ledger methods below are the only way a score can change.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .lineup import PlayerLineupState
from ..utils.constants import (
    AWAY, EVENT_GOAL, FIELD, HOME, TIMER_RUNNING, TIMER_STOPPED, ACCRUING_LOCATIONS
)
from ..utils.time_utils import round_seconds


@dataclass
class GameEvent:
    """A scoring event in a fixture's ledger."""
    id: str
    team: str
    timestamp: float
    type: str = EVENT_GOAL
    scorer_player_id: Optional[str] = None
    assist_player_id: Optional[str] = None

    def involves(self, player_id: str) -> bool:
        return player_id in (self.scorer_player_id, self.assist_player_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "team": self.team,
            "scorerPlayerId": self.scorer_player_id,
            "assistPlayerId": self.assist_player_id,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GameEvent':
        return cls(
            id=data["id"],
            type=data.get("type", EVENT_GOAL),
            team=data["team"],
            scorer_player_id=data.get("scorerPlayerId"),
            assist_player_id=data.get("assistPlayerId"),
            timestamp=data["timestamp"],
        )


@dataclass
class Game:
    """
    Represents one fixture and all of its match-time state.

    Attributes:
        id: Unique identifier
        opponent: Opponent name
        date: Kickoff date as "YYYY-MM-DD"
        time: Kickoff time as "HH:MM"
        location: "home" or "away"
        season: Optional season tag
        competition: Optional competition tag
        timer_status: "stopped" or "running"
        timer_start_time: Epoch seconds when the clock was last started
        timer_elapsed_seconds: Finalized clock total
        is_explicitly_finished: Set by the coach; blocks restarting the clock
        lineup: One entry per roster player, or None until first access
        events: Scoring ledger in insertion (chronological) order
    """
    id: str
    opponent: str
    date: str
    time: str
    location: str = HOME
    season: str = ""
    competition: str = ""
    timer_status: str = TIMER_STOPPED
    timer_start_time: Optional[float] = None
    timer_elapsed_seconds: int = 0
    is_explicitly_finished: bool = False
    lineup: Optional[List[PlayerLineupState]] = None
    events: List[GameEvent] = field(default_factory=list)

    # ------------------------------------------------------------------
    # Score projection and ledger writers
    # ------------------------------------------------------------------
    @property
    def home_score(self) -> int:
        return self.score_for(HOME)

    @property
    def away_score(self) -> int:
        return self.score_for(AWAY)

    def score_for(self, team: str) -> int:
        return sum(1 for event in self.events if event.team == team)

    def record_goal(self, event: GameEvent) -> GameEvent:
        """Append a goal to the end of the ledger."""
        self.events.append(event)
        return event

    def undo_goal(self, team: str) -> Optional[GameEvent]:
        """
        Remove the most recent event for ``team`` only.

        Events of the other team recorded after it stay in place.

        Returns:
            The removed event, or None when the team has no events
        """
        for index in range(len(self.events) - 1, -1, -1):
            if self.events[index].team == team:
                return self.events.pop(index)
        return None

    def drop_player(self, player_id: str) -> None:
        """Remove every reference to a deleted roster player."""
        if self.lineup is not None:
            self.lineup = [entry for entry in self.lineup if entry.id != player_id]
        self.events = [event for event in self.events if not event.involves(player_id)]

    # ------------------------------------------------------------------
    # Clock helpers
    # ------------------------------------------------------------------
    @property
    def is_running(self) -> bool:
        return self.timer_status == TIMER_RUNNING

    def elapsed_seconds(self, now_ts: float) -> float:
        """Displayed clock value; unrounded while running."""
        if self.is_running and self.timer_start_time is not None:
            return self.timer_elapsed_seconds + (now_ts - self.timer_start_time)
        return float(self.timer_elapsed_seconds)

    def finalize_clock(self, now_ts: float) -> None:
        """
        Stop the clock and fold every running player stint into playtime.

        Does nothing unless the clock is running with a recorded start.
        Field and inactive players are both finalized.
        """
        if not (self.is_running and self.timer_start_time is not None):
            return
        self.timer_elapsed_seconds = round_seconds(
            self.timer_elapsed_seconds + (now_ts - self.timer_start_time)
        )
        self.timer_start_time = None
        self.timer_status = TIMER_STOPPED
        for entry in self.lineup or []:
            if entry.location in ACCRUING_LOCATIONS and entry.has_active_timer:
                entry.finalize_timer(now_ts)

    def lineup_entry(self, player_id: str) -> Optional[PlayerLineupState]:
        if self.lineup is None:
            return None
        return next((entry for entry in self.lineup if entry.id == player_id), None)

    def field_entries(self) -> List[PlayerLineupState]:
        return [entry for entry in self.lineup or [] if entry.location == FIELD]

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert game to dictionary for JSON serialization.

        The score fields are written for readers of the stored document;
        they are derived again from the ledger on load.
        """
        return {
            "id": self.id,
            "opponent": self.opponent,
            "date": self.date,
            "time": self.time,
            "location": self.location,
            "season": self.season,
            "competition": self.competition,
            "homeScore": self.home_score,
            "awayScore": self.away_score,
            "timerStatus": self.timer_status,
            "timerStartTime": self.timer_start_time,
            "timerElapsedSeconds": self.timer_elapsed_seconds,
            "isExplicitlyFinished": self.is_explicitly_finished,
            "lineup": [entry.to_dict() for entry in self.lineup] if self.lineup is not None else None,
            "events": [event.to_dict() for event in self.events],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Game':
        """Create game from a normalized dictionary."""
        lineup = data.get("lineup")
        return cls(
            id=data["id"],
            opponent=data.get("opponent", ""),
            date=data.get("date", ""),
            time=data.get("time", ""),
            location=data.get("location", HOME),
            season=data.get("season", ""),
            competition=data.get("competition", ""),
            timer_status=data.get("timerStatus", TIMER_STOPPED),
            timer_start_time=data.get("timerStartTime"),
            timer_elapsed_seconds=data.get("timerElapsedSeconds", 0),
            is_explicitly_finished=data.get("isExplicitlyFinished", False),
            lineup=[PlayerLineupState.from_dict(p) for p in lineup] if lineup is not None else None,
            events=[GameEvent.from_dict(ev) for ev in data.get("events", [])],
        )
