"""Tests for the local JSON API."""

import pytest

from teamsheet.services import ServiceFactory
from teamsheet.ui.web_app import create_app


@pytest.fixture
def client():
    services = ServiceFactory().create_complete_service_suite()
    app = create_app(services)
    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client


def _add_player(client, first="Ann", last="Lee", number="4"):
    response = client.post("/api/players", json={"firstName": first, "lastName": last, "number": number})
    assert response.status_code == 201
    return response.get_json()["player"]


def _add_game(client, opponent="City", date="2025-02-01"):
    response = client.post("/api/games", json={"opponent": opponent, "date": date, "time": "10:00"})
    assert response.status_code == 201
    return response.get_json()["game"]


def test_state_starts_with_defaults(client):
    data = client.get("/api/state").get_json()

    assert data["success"] is True
    assert data["state"]["teamName"] == "Your Team"
    assert data["state"]["players"] == []


def test_player_validation_errors(client):
    response = client.post("/api/players", json={"firstName": "", "number": "abc"})

    assert response.status_code == 400
    errors = response.get_json()["errors"]
    assert "First name is required" in errors
    assert "Player number must be numeric" in errors


def test_update_and_delete_player(client):
    player = _add_player(client)

    response = client.patch(f"/api/players/{player['id']}", json={"number": "11"})
    assert response.get_json()["player"]["number"] == "11"

    assert client.patch("/api/players/missing", json={"number": "1"}).status_code == 404

    client.delete(f"/api/players/{player['id']}")
    assert client.get("/api/state").get_json()["state"]["players"] == []


def test_swap_and_move_players(client):
    a = _add_player(client, "Ann")
    b = _add_player(client, "Ben")

    client.post(f"/api/players/{a['id']}/move", json={"location": "field", "position": {"x": 10, "y": 20}})
    players = client.post("/api/players/swap", json={"first": a["id"], "second": b["id"]}).get_json()["players"]

    by_id = {p["id"]: p for p in players}
    assert by_id[b["id"]]["location"] == "field"
    assert by_id[b["id"]]["position"] == {"x": 10.0, "y": 20.0}
    assert by_id[a["id"]]["location"] == "bench"


def test_invalid_location_is_bad_request(client):
    player = _add_player(client)

    response = client.post(f"/api/players/{player['id']}/move", json={"location": "stands"})

    assert response.status_code == 400
    assert response.get_json()["success"] is False


def test_saved_lineups(client):
    _add_player(client)

    assert client.post("/api/lineups", json={"name": " "}).status_code == 400
    assert client.post("/api/lineups", json={"name": "Attack"}).status_code == 201
    assert client.post("/api/lineups/Attack/load").status_code == 200
    assert client.post("/api/lineups/Nope/load").status_code == 404

    client.delete("/api/lineups/Attack")
    assert client.get("/api/state").get_json()["state"]["savedLineups"] == []


def test_game_flow(client, monkeypatch):
    player = _add_player(client)
    game = _add_game(client)
    game_id = game["id"]

    monkeypatch.setattr("teamsheet.services.timer_service.now_ts", lambda: 1000.0)
    monkeypatch.setattr("teamsheet.services.lineup_service.now_ts", lambda: 1000.0)
    client.post(f"/api/games/{game_id}/lineup/move", json={"playerId": player["id"], "from": "bench", "to": "field"})
    client.post(f"/api/games/{game_id}/timer/start")

    monkeypatch.setattr("teamsheet.services.timer_service.now_ts", lambda: 1045.0)
    data = client.post(f"/api/games/{game_id}/timer/stop").get_json()

    entry = data["game"]["lineup"][0]
    assert entry["playtimeSeconds"] == 45
    assert entry["isStarter"] is True
    assert entry["subbedOnCount"] == 1
    assert data["game"]["timerElapsedSeconds"] == 45
    assert data["report"]["players"][0]["playtime_display"] == "00:45"

    client.post(f"/api/games/{game_id}/events", json={"team": "home", "scorerPlayerId": player["id"]})
    client.post(f"/api/games/{game_id}/events", json={"team": "away"})
    data = client.post(f"/api/games/{game_id}/events/undo", json={"team": "home"}).get_json()
    assert data["game"]["homeScore"] == 0
    assert data["game"]["awayScore"] == 1

    data = client.post(f"/api/games/{game_id}/timer/finish").get_json()
    assert data["game"]["isExplicitlyFinished"] is True
    assert data["report"]["is_finished"] is True


def test_game_endpoints_errors(client):
    assert client.post("/api/games", json={"opponent": ""}).status_code == 400
    assert client.get("/api/games/missing").status_code == 404

    game = _add_game(client)
    assert client.post(f"/api/games/{game['id']}/timer/rewind").status_code == 404
    assert client.post(f"/api/games/{game['id']}/events", json={"team": "neutral"}).status_code == 400
    assert client.patch(f"/api/games/{game['id']}", json={"events": []}).status_code == 400


def test_update_game_rejects_non_string_fields(client):
    game = _add_game(client)

    response = client.patch(f"/api/games/{game['id']}", json={"date": 5})

    assert response.status_code == 400
    assert client.get(f"/api/games/{game['id']}").get_json()["game"]["date"] == "2025-02-01"


def test_finished_game_reopened_by_edit(client):
    game_id = _add_game(client)["id"]
    client.post(f"/api/games/{game_id}/timer/finish")

    data = client.patch(f"/api/games/{game_id}", json={"isExplicitlyFinished": False}).get_json()
    assert data["game"]["isExplicitlyFinished"] is False

    data = client.post(f"/api/games/{game_id}/timer/start").get_json()
    assert data["game"]["timerStatus"] == "running"


def test_update_game_and_history(client):
    game = _add_game(client)

    data = client.patch(f"/api/games/{game['id']}", json={"season": "2025", "competition": "Cup"}).get_json()
    assert data["game"]["season"] == "2025"

    history = client.get("/api/history").get_json()
    assert history["mostRecentSeason"] == "2025"
    assert history["mostRecentCompetition"] == "Cup"


def test_update_team(client):
    data = client.put("/api/team", json={"name": " Harbour FC ", "logo": "logo.png"}).get_json()
    assert data["teamName"] == "Harbour FC"
    assert data["teamLogo"] == "logo.png"

    assert client.put("/api/team", json={"name": ""}).status_code == 400
