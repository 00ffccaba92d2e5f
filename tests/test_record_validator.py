"""Tests for validation of stored records."""

from teamsheet.services.record_validator import RecordStatus, validate_record
from teamsheet.utils.constants import (
    KEY_GAME_HISTORY, KEY_GAMES, KEY_PLAYERS, KEY_SAVED_LINEUPS, KEY_TEAM_LOGO, KEY_TEAM_NAME
)

TODAY = "2026-10-18"


def _valid_game():
    return {
        "id": "g1",
        "opponent": "City",
        "date": "2025-02-01",
        "time": "10:00",
        "location": "away",
        "season": "2025",
        "competition": "League",
        "homeScore": 1,
        "awayScore": 0,
        "timerStatus": "running",
        "timerStartTime": 1000.5,
        "timerElapsedSeconds": 30,
        "isExplicitlyFinished": False,
        "lineup": [
            {
                "id": "p1",
                "location": "field",
                "position": {"x": 10, "y": 20},
                "playtimeSeconds": 30,
                "playtimerStartTime": 1000.5,
                "isStarter": True,
                "subbedOnCount": 0,
                "subbedOffCount": 0,
            }
        ],
        "events": [
            {
                "id": "e1",
                "type": "goal",
                "team": "home",
                "scorerPlayerId": "p1",
                "assistPlayerId": None,
                "timestamp": 1010,
            }
        ],
    }


def test_valid_game_passes_unchanged():
    result = validate_record(KEY_GAMES, [_valid_game()], TODAY)

    assert result.status is RecordStatus.VALID
    assert result.issues == []
    game = result.value[0]
    assert game["timerStatus"] == "running"
    assert game["lineup"][0]["position"] == {"x": 10, "y": 20}
    assert game["events"][0]["scorerPlayerId"] == "p1"


def test_validation_is_idempotent():
    first = validate_record(KEY_GAMES, [_valid_game(), {"id": "g2"}], TODAY)
    second = validate_record(KEY_GAMES, first.value, TODAY)

    assert second.value == first.value
    assert second.status is RecordStatus.VALID


def test_stored_score_mismatch_is_reported():
    game = _valid_game()
    game["homeScore"] = 4

    result = validate_record(KEY_GAMES, [game], TODAY)

    assert result.status is RecordStatus.REPAIRED
    assert any("homeScore" in issue for issue in result.issues)
    assert len(result.value[0]["events"]) == 1


def test_event_fields_are_normalized():
    game = _valid_game()
    game["events"] = [
        {"id": 5, "type": "goal", "team": "visitors", "scorerPlayerId": 3, "timestamp": 1},
        {"id": "e2", "type": "goal", "team": "", "timestamp": 2},
        {"id": "e3", "type": "goal", "team": "away", "timestamp": "yesterday"},
    ]

    events = validate_record(KEY_GAMES, [game], TODAY).value[0]["events"]

    assert events == [{
        "id": "5",
        "type": "goal",
        "team": "home",
        "scorerPlayerId": None,
        "assistPlayerId": None,
        "timestamp": 1,
    }]


def test_unknown_timer_status_and_location_fall_back():
    game = _valid_game()
    game["timerStatus"] = "paused"
    game["location"] = "neutral"
    game["lineup"][0]["location"] = "injured"

    value = validate_record(KEY_GAMES, [game], TODAY).value[0]

    assert value["timerStatus"] == "stopped"
    assert value["location"] == "home"
    assert value["lineup"][0]["location"] == "bench"


def test_non_list_records_are_rejected():
    for key in (KEY_PLAYERS, KEY_GAMES, KEY_SAVED_LINEUPS):
        result = validate_record(key, {"oops": True}, TODAY)
        assert result.is_rejected
        assert result.value == []


def test_team_identity_must_be_strings():
    assert validate_record(KEY_TEAM_NAME, "Harbour FC", TODAY).value == "Harbour FC"
    assert validate_record(KEY_TEAM_NAME, 42, TODAY).is_rejected
    assert validate_record(KEY_TEAM_LOGO, ["x"], TODAY).is_rejected


def test_saved_lineups_skip_nameless_entries():
    result = validate_record(KEY_SAVED_LINEUPS, [
        {"name": "Attack", "players": [{"id": "p1", "location": "field", "position": {"x": 1, "y": 2}}, {}]},
        {"name": "  ", "players": []},
        {"name": "Empty"},
    ], TODAY)

    assert result.status is RecordStatus.REPAIRED
    assert [sl["name"] for sl in result.value] == ["Attack", "Empty"]
    assert result.value[0]["players"] == [{"id": "p1", "location": "field", "position": {"x": 1, "y": 2}}]
    assert result.value[1]["players"] == []


def test_game_history_drops_blank_tags():
    result = validate_record(KEY_GAME_HISTORY, {"seasons": ["2025", "", 7], "competitions": "Cup"}, TODAY)

    assert result.value == {"seasons": ["2025"], "competitions": []}
    assert result.status is RecordStatus.REPAIRED

    rejected = validate_record(KEY_GAME_HISTORY, ["2025"], TODAY)
    assert rejected.is_rejected
    assert rejected.value == {"seasons": [], "competitions": []}
