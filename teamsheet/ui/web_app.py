"""
Web application module for Teamsheet.

This module contains the local Flask server exposing the roster, fixture,
lineup, clock and ledger operations as JSON endpoints for the presentation
layer. Input checking for form fields happens here; the services trust
their arguments.
"""
import logging
from dataclasses import asdict
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..models import FieldPosition
from ..services.roster_service import validate_player_fields
from ..services.service_factory import ServiceFactory
from ..utils import config

logger = logging.getLogger(__name__)


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _parse_position(raw: Any) -> Optional[FieldPosition]:
    """Read an optional {"x": .., "y": ..} payload."""
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError("position must be an object with x and y")
    try:
        return FieldPosition(x=float(raw["x"]), y=float(raw["y"]))
    except (KeyError, TypeError, ValueError):
        raise ValueError("position must be an object with numeric x and y")


def _optional_str(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


def create_app(services: Optional[Dict[str, Any]] = None) -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Args:
        services: Service suite from ServiceFactory; built from the configured
            data directory when omitted

    Returns:
        Configured Flask application instance
    """
    if services is None:
        services = ServiceFactory.for_data_dir(config.get_data_dir()).create_complete_service_suite()

    app = Flask(__name__)
    app.config["TEAMSHEET_SERVICES"] = services

    store = services["store"]
    roster = services["roster"]
    fixtures = services["fixtures"]
    timer = services["timer"]
    lineup = services["lineup"]
    events = services["events"]
    templates = services["templates"]
    reports = services["reports"]

    @app.errorhandler(ValueError)
    def handle_value_error(e):
        return jsonify({"success": False, "error": str(e)}), 400

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled error serving %s", request.path)
        return jsonify({"success": False, "error": str(e)}), 500

    def _game_payload(game_id: str):
        game = store.state.find_game(game_id)
        if game is None:
            return jsonify({"success": False, "error": "Game not found"}), 404
        report = reports.build_game_report(game_id)
        return jsonify({"success": True, "game": game.to_dict(), "report": asdict(report)})

    # ==================== State ==================== #

    @app.route("/api/state", methods=["GET"])
    def get_state():
        """Return every persisted record of the current state."""
        return jsonify({"success": True, "state": store.state.to_records()})

    @app.route("/api/team", methods=["PUT"])
    def update_team():
        data = _json_body()
        if "name" in data:
            name = _optional_str(data, "name")
            if not name or not name.strip():
                raise ValueError("Team name is required")
            roster.set_team_name(name.strip())
        if "logo" in data:
            roster.set_team_logo(_optional_str(data, "logo"))
        return jsonify({"success": True, "teamName": store.state.team_name, "teamLogo": store.state.team_logo})

    @app.route("/api/history", methods=["GET"])
    def get_history():
        return jsonify({
            "success": True,
            "history": store.state.game_history.to_dict(),
            "mostRecentSeason": fixtures.get_most_recent_season(),
            "mostRecentCompetition": fixtures.get_most_recent_competition(),
        })

    # ==================== Roster ==================== #

    @app.route("/api/players", methods=["POST"])
    def add_player():
        data = _json_body()
        first_name = (_optional_str(data, "firstName") or "").strip()
        last_name = (_optional_str(data, "lastName") or "").strip()
        number = (_optional_str(data, "number") or "").strip()
        errors = validate_player_fields(first_name, last_name, number)
        if errors:
            return jsonify({"success": False, "errors": errors}), 400
        player = roster.add_player(first_name, last_name, number)
        return jsonify({"success": True, "player": player.to_dict()}), 201

    @app.route("/api/players/<player_id>", methods=["PATCH"])
    def update_player(player_id):
        if store.state.find_player(player_id) is None:
            return jsonify({"success": False, "error": "Player not found"}), 404
        data = _json_body()
        first_name = _optional_str(data, "firstName")
        last_name = _optional_str(data, "lastName")
        number = _optional_str(data, "number")
        errors = validate_player_fields(first_name, last_name, number)
        if errors:
            return jsonify({"success": False, "errors": errors}), 400
        roster.update_player(player_id, first_name=first_name, last_name=last_name, number=number)
        return jsonify({"success": True, "player": store.state.find_player(player_id).to_dict()})

    @app.route("/api/players/<player_id>", methods=["DELETE"])
    def delete_player(player_id):
        roster.delete_player(player_id)
        return jsonify({"success": True})

    @app.route("/api/players/<player_id>/move", methods=["POST"])
    def move_player(player_id):
        data = _json_body()
        roster.move_player(player_id, data.get("location"), _parse_position(data.get("position")))
        return jsonify({"success": True})

    @app.route("/api/players/swap", methods=["POST"])
    def swap_players():
        data = _json_body()
        roster.swap_players(data.get("first"), data.get("second"))
        return jsonify({"success": True, "players": [p.to_dict() for p in store.state.players]})

    @app.route("/api/lineup/reset", methods=["POST"])
    def reset_roster_lineup():
        roster.reset_lineup()
        return jsonify({"success": True})

    # ==================== Saved lineups ==================== #

    @app.route("/api/lineups", methods=["POST"])
    def save_lineup():
        name = (_optional_str(_json_body(), "name") or "").strip()
        if not name:
            return jsonify({"success": False, "error": "Please enter a name"}), 400
        templates.save_lineup(name)
        return jsonify({"success": True}), 201

    @app.route("/api/lineups/<name>/load", methods=["POST"])
    def load_lineup(name):
        if not templates.load_lineup(name):
            return jsonify({"success": False, "error": f"Lineup '{name}' not found"}), 404
        return jsonify({"success": True, "players": [p.to_dict() for p in store.state.players]})

    @app.route("/api/lineups/<name>", methods=["DELETE"])
    def delete_lineup(name):
        templates.delete_lineup(name)
        return jsonify({"success": True})

    # ==================== Games ==================== #

    @app.route("/api/games", methods=["POST"])
    def add_game():
        data = _json_body()
        opponent = (_optional_str(data, "opponent") or "").strip()
        if not opponent:
            return jsonify({"success": False, "error": "Opponent is required"}), 400
        game = fixtures.add_game(
            opponent,
            _optional_str(data, "date") or "",
            _optional_str(data, "time") or "",
            data.get("location", "home"),
            season=_optional_str(data, "season"),
            competition=_optional_str(data, "competition"),
        )
        return jsonify({"success": True, "game": game.to_dict()}), 201

    @app.route("/api/games/<game_id>", methods=["GET"])
    def get_game(game_id):
        lineup.get_game_lineup(game_id)
        return _game_payload(game_id)

    @app.route("/api/games/<game_id>", methods=["PATCH"])
    def update_game(game_id):
        updates = _json_body()
        if "isExplicitlyFinished" in updates:
            updates["is_explicitly_finished"] = updates.pop("isExplicitlyFinished")
        fixtures.update_game(game_id, **updates)
        return _game_payload(game_id)

    @app.route("/api/games/<game_id>", methods=["DELETE"])
    def delete_game(game_id):
        fixtures.delete_game(game_id)
        return jsonify({"success": True})

    @app.route("/api/games/<game_id>/timer/<action>", methods=["POST"])
    def game_timer(game_id, action):
        actions = {
            "start": timer.start_game_timer,
            "stop": timer.stop_game_timer,
            "finish": timer.mark_game_as_finished,
        }
        if action not in actions:
            return jsonify({"success": False, "error": f"Unknown timer action '{action}'"}), 404
        actions[action](game_id)
        return _game_payload(game_id)

    @app.route("/api/games/<game_id>/players/<player_id>/timer/<action>", methods=["POST"])
    def player_timer(game_id, player_id, action):
        if action == "start":
            timer.start_player_timer_in_game(game_id, player_id)
        elif action == "stop":
            timer.stop_player_timer_in_game(game_id, player_id)
        else:
            return jsonify({"success": False, "error": f"Unknown timer action '{action}'"}), 404
        return _game_payload(game_id)

    @app.route("/api/games/<game_id>/lineup/move", methods=["POST"])
    def move_player_in_game(game_id):
        data = _json_body()
        lineup.move_player_in_game(
            game_id,
            data.get("playerId"),
            data.get("from"),
            data.get("to"),
            _parse_position(data.get("position")),
        )
        return _game_payload(game_id)

    @app.route("/api/games/<game_id>/lineup/reset", methods=["POST"])
    def reset_game_lineup(game_id):
        lineup.reset_game_lineup(game_id)
        return _game_payload(game_id)

    @app.route("/api/games/<game_id>/events", methods=["POST"])
    def add_game_event(game_id):
        data = _json_body()
        events.add_game_event(
            game_id,
            data.get("team"),
            scorer_player_id=_optional_str(data, "scorerPlayerId"),
            assist_player_id=_optional_str(data, "assistPlayerId"),
        )
        return _game_payload(game_id)

    @app.route("/api/games/<game_id>/events/undo", methods=["POST"])
    def remove_last_game_event(game_id):
        events.remove_last_game_event(game_id, _json_body().get("team"))
        return _game_payload(game_id)

    return app


def run_web_app(host: Optional[str] = None, port: Optional[int] = None) -> None:
    """
    Run the web application.

    Args:
        host: Host address to bind to (default: localhost only)
        port: Port number to listen on
    """
    app = create_app()
    app.run(host=host or config.get_host(), port=port or config.get_port(), debug=False)
