"""
Validation of persisted records for the Teamsheet application.

Stored documents are untrusted: they may come from an older version, a hand
edit or an interrupted write. Each record key has its own validation pass
that turns a parsed JSON value into a normalized document and reports one
of three outcomes: valid, repaired (some elements dropped or defaulted), or
rejected (the whole key is unusable and must be reset).
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from ..utils.constants import (
    AWAY, BENCH, DEFAULT_OPPONENT, DEFAULT_TEAM_NAME, EVENT_GOAL, GAME_LOCATIONS,
    HOME, KEY_GAME_HISTORY, KEY_GAMES, KEY_PLAYERS, KEY_SAVED_LINEUPS,
    KEY_TEAM_LOGO, KEY_TEAM_NAME, ROSTER_LOCATIONS, TEAMS, TIMER_STATUSES,
    TIMER_STOPPED, VENUES
)

logger = logging.getLogger(__name__)


class RecordStatus(Enum):
    """Outcome of validating one record key."""
    VALID = "valid"
    REPAIRED = "repaired"
    REJECTED = "rejected"


class RecordResult:
    """Normalized value of a record plus the problems found while reading it."""

    def __init__(self, key: str, value: Any, status: RecordStatus = RecordStatus.VALID):
        self.key = key
        self.value = value
        self.status = status
        self.issues: List[str] = []

    def add_issue(self, message: str, *args: Any) -> None:
        """Record a dropped or defaulted element and mark the record repaired."""
        text = message % args if args else message
        logger.warning("%s: %s", self.key, text)
        self.issues.append(text)
        if self.status is RecordStatus.VALID:
            self.status = RecordStatus.REPAIRED

    @classmethod
    def rejected(cls, key: str, default: Any, reason: str) -> 'RecordResult':
        result = cls(key, default, RecordStatus.REJECTED)
        result.issues.append(reason)
        return result

    @property
    def is_rejected(self) -> bool:
        return self.status is RecordStatus.REJECTED


# ----------------------------------------------------------------------
# Primitive coercions
# ----------------------------------------------------------------------
def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _number_or(value: Any, default: Any) -> Any:
    return value if _is_number(value) else default


def _bool_or(value: Any, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _str_or(value: Any, default: str) -> str:
    return value if isinstance(value, str) else default


def _choice(value: Any, allowed, default: str) -> str:
    return value if value in allowed else default


def _record_id(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    if _is_number(value):
        return str(value)
    return None


def _position(value: Any, result: RecordResult, owner: str) -> Optional[Dict[str, float]]:
    if value is None:
        return None
    if isinstance(value, dict) and _is_number(value.get("x")) and _is_number(value.get("y")):
        return {"x": value["x"], "y": value["y"]}
    result.add_issue("malformed position for %s, cleared: %r", owner, value)
    return None


# ----------------------------------------------------------------------
# Per-key passes
# ----------------------------------------------------------------------
def validate_team_name(raw: Any, today: str) -> RecordResult:
    if not isinstance(raw, str):
        return RecordResult.rejected(KEY_TEAM_NAME, DEFAULT_TEAM_NAME, "team name is not a string")
    return RecordResult(KEY_TEAM_NAME, raw)


def validate_team_logo(raw: Any, today: str) -> RecordResult:
    if not isinstance(raw, str):
        return RecordResult.rejected(KEY_TEAM_LOGO, None, "team logo is not a string")
    return RecordResult(KEY_TEAM_LOGO, raw)


def validate_players(raw: Any, today: str) -> RecordResult:
    if not isinstance(raw, list):
        return RecordResult.rejected(KEY_PLAYERS, [], "players record is not a list")

    result = RecordResult(KEY_PLAYERS, [])
    for item in raw:
        player_id = _record_id(item.get("id")) if isinstance(item, dict) else None
        if player_id is None:
            result.add_issue("invalid player data (no id), skipping: %r", item)
            continue
        result.value.append({
            "id": player_id,
            "firstName": _str_or(item.get("firstName"), ""),
            "lastName": _str_or(item.get("lastName"), ""),
            "number": _str_or(item.get("number"), ""),
            "location": _choice(item.get("location"), ROSTER_LOCATIONS, BENCH),
            "position": _position(item.get("position"), result, f"player {player_id}"),
        })
    return result


def _lineup_entry(item: Any, game_id: str, result: RecordResult) -> Optional[Dict[str, Any]]:
    player_id = _record_id(item.get("id")) if isinstance(item, dict) else None
    if player_id is None:
        result.add_issue("invalid player lineup data in game %s, skipping player: %r", game_id, item)
        return None
    return {
        "id": player_id,
        "location": _choice(item.get("location"), GAME_LOCATIONS, BENCH),
        "position": _position(item.get("position"), result, f"lineup entry {player_id}"),
        "playtimeSeconds": _number_or(item.get("playtimeSeconds"), 0),
        "playtimerStartTime": _number_or(item.get("playtimerStartTime"), None),
        "isStarter": _bool_or(item.get("isStarter"), False),
        "subbedOnCount": _number_or(item.get("subbedOnCount"), 0),
        "subbedOffCount": _number_or(item.get("subbedOffCount"), 0),
    }


def _event(item: Any, game_id: str, result: RecordResult) -> Optional[Dict[str, Any]]:
    if (
        not isinstance(item, dict)
        or _record_id(item.get("id")) is None
        or item.get("type") != EVENT_GOAL
        or not item.get("team")
        or not _is_number(item.get("timestamp"))
    ):
        result.add_issue("invalid game event data in game %s, skipping event: %r", game_id, item)
        return None
    scorer = item.get("scorerPlayerId")
    assist = item.get("assistPlayerId")
    return {
        "id": _record_id(item["id"]),
        "type": EVENT_GOAL,
        "team": _choice(item["team"], TEAMS, HOME),
        "scorerPlayerId": scorer if isinstance(scorer, str) else None,
        "assistPlayerId": assist if isinstance(assist, str) else None,
        "timestamp": item["timestamp"],
    }


def _game(item: Any, today: str, result: RecordResult) -> Optional[Dict[str, Any]]:
    game_id = _record_id(item.get("id")) if isinstance(item, dict) else None
    if game_id is None:
        result.add_issue("invalid game data (no id), skipping: %r", item)
        return None

    raw_lineup = item.get("lineup")
    lineup = None
    if isinstance(raw_lineup, list):
        lineup = [
            entry for entry in (_lineup_entry(p, game_id, result) for p in raw_lineup)
            if entry is not None
        ]

    raw_events = item.get("events")
    events: List[Dict[str, Any]] = []
    if isinstance(raw_events, list):
        events = [
            ev for ev in (_event(e, game_id, result) for e in raw_events)
            if ev is not None
        ]

    for team, field_name in ((HOME, "homeScore"), (AWAY, "awayScore")):
        stored = item.get(field_name)
        derived = sum(1 for ev in events if ev["team"] == team)
        if _is_number(stored) and stored != derived:
            result.add_issue(
                "game %s stored %s=%s differs from ledger count %s, using ledger",
                game_id, field_name, stored, derived,
            )

    return {
        "id": game_id,
        "opponent": _str_or(item.get("opponent"), DEFAULT_OPPONENT),
        "date": _str_or(item.get("date"), today),
        "time": _str_or(item.get("time"), ""),
        "location": _choice(item.get("location"), VENUES, HOME),
        "season": _str_or(item.get("season"), ""),
        "competition": _str_or(item.get("competition"), ""),
        "timerStatus": _choice(item.get("timerStatus"), TIMER_STATUSES, TIMER_STOPPED),
        "timerStartTime": _number_or(item.get("timerStartTime"), None),
        "timerElapsedSeconds": _number_or(item.get("timerElapsedSeconds"), 0),
        "isExplicitlyFinished": _bool_or(item.get("isExplicitlyFinished"), False),
        "lineup": lineup,
        "events": events,
    }


def validate_games(raw: Any, today: str) -> RecordResult:
    if not isinstance(raw, list):
        return RecordResult.rejected(KEY_GAMES, [], "games record is not a list")

    result = RecordResult(KEY_GAMES, [])
    for item in raw:
        game = _game(item, today, result)
        if game is not None:
            result.value.append(game)
    return result


def validate_saved_lineups(raw: Any, today: str) -> RecordResult:
    if not isinstance(raw, list):
        return RecordResult.rejected(KEY_SAVED_LINEUPS, [], "saved lineups record is not a list")

    result = RecordResult(KEY_SAVED_LINEUPS, [])
    for item in raw:
        name = item.get("name") if isinstance(item, dict) else None
        if not isinstance(name, str) or not name.strip():
            result.add_issue("invalid saved lineup (no name), skipping: %r", item)
            continue
        raw_slots = item.get("players")
        if not isinstance(raw_slots, list):
            result.add_issue("saved lineup %r has no player list, treating as empty", name)
            raw_slots = []
        slots = []
        for slot in raw_slots:
            slot_id = _record_id(slot.get("id")) if isinstance(slot, dict) else None
            if slot_id is None:
                result.add_issue("invalid slot in saved lineup %r, skipping: %r", name, slot)
                continue
            slots.append({
                "id": slot_id,
                "location": _choice(slot.get("location"), ROSTER_LOCATIONS, BENCH),
                "position": _position(slot.get("position"), result, f"slot {slot_id}"),
            })
        result.value.append({"name": name, "players": slots})
    return result


def validate_game_history(raw: Any, today: str) -> RecordResult:
    if not isinstance(raw, dict):
        return RecordResult.rejected(
            KEY_GAME_HISTORY, {"seasons": [], "competitions": []}, "game history is not an object"
        )

    result = RecordResult(KEY_GAME_HISTORY, {})
    for field_name in ("seasons", "competitions"):
        values = raw.get(field_name)
        if not isinstance(values, list):
            result.value[field_name] = []
            continue
        kept = [v for v in values if isinstance(v, str) and v.strip()]
        if len(kept) != len(values):
            result.add_issue("dropped %s blank or non-string %s", len(values) - len(kept), field_name)
        result.value[field_name] = kept
    return result


VALIDATORS: Dict[str, Callable[[Any, str], RecordResult]] = {
    KEY_TEAM_NAME: validate_team_name,
    KEY_TEAM_LOGO: validate_team_logo,
    KEY_PLAYERS: validate_players,
    KEY_GAMES: validate_games,
    KEY_SAVED_LINEUPS: validate_saved_lineups,
    KEY_GAME_HISTORY: validate_game_history,
}


def validate_record(key: str, raw: Any, today: str) -> RecordResult:
    """
    Validate the parsed document stored under ``key``.

    Args:
        key: One of the persisted record keys
        raw: Parsed JSON value
        today: Local date used when a fixture has no usable date

    Returns:
        RecordResult with the normalized document
    """
    return VALIDATORS[key](raw, today)
