"""
Persistence service for the Teamsheet application.

This module reads the application state from a key-value store through the
record validators, and writes every committed change back to the store.
"""
import json
import logging
import os
from typing import Any, Dict, List, Optional

from ..models import Game, GameHistory, Player, SavedLineup, TeamState
from ..utils import now_ts, local_date_str
from ..utils.constants import (
    KEY_GAME_HISTORY, KEY_GAMES, KEY_PLAYERS, KEY_SAVED_LINEUPS,
    KEY_TEAM_LOGO, KEY_TEAM_NAME, RECORD_KEYS
)
from .record_validator import RecordResult, validate_record
from .state_store import StateStore
from .storage import KeyValueStore

logger = logging.getLogger(__name__)


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


class PersistenceService:
    """
    Gateway between the in-memory TeamState and a durable KeyValueStore.

    Reading validates and repairs each record key independently. Writing is
    driven by state commits: only keys whose serialized form changed since
    the last load or write are written.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store
        self._written: Dict[str, str] = {}

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------
    def load_record(self, key: str, today: Optional[str] = None) -> Optional[RecordResult]:
        """
        Read and validate one record key.

        Args:
            key: Record key to read
            today: Fallback fixture date, defaults to the local date

        Returns:
            RecordResult, or None when the key is absent
        """
        try:
            text = self.store.get(key)
            if text is None:
                return None
            raw = json.loads(text)
        except ValueError as e:
            # Undecodable bytes surface here too (UnicodeDecodeError)
            logger.error("Error parsing stored record %r: %s", key, e)
            self._discard(key)
            return RecordResult.rejected(key, None, f"unparsable document: {e}")

        if raw is None:
            return None

        result = validate_record(key, raw, today or local_date_str(now_ts()))
        if result.is_rejected:
            logger.warning("Rejected stored record %r: %s", key, "; ".join(result.issues))
            self._discard(key)
        else:
            # Repaired or reformatted records are rewritten on the next commit
            self._written[key] = text
        return result

    def load_state(self, today: Optional[str] = None) -> TeamState:
        """
        Rebuild the full TeamState from the store.

        Absent, unparsable and rejected keys fall back to their defaults.

        Returns:
            TeamState instance
        """
        state = TeamState()
        for key in RECORD_KEYS:
            result = self.load_record(key, today)
            if result is None or result.is_rejected:
                continue
            self._apply(state, key, result.value)
        return state

    @staticmethod
    def _apply(state: TeamState, key: str, value: Any) -> None:
        if key == KEY_TEAM_NAME:
            state.team_name = value
        elif key == KEY_TEAM_LOGO:
            state.team_logo = value
        elif key == KEY_PLAYERS:
            state.players = [Player.from_dict(p) for p in value]
        elif key == KEY_GAMES:
            state.games = [Game.from_dict(g) for g in value]
        elif key == KEY_SAVED_LINEUPS:
            state.saved_lineups = [SavedLineup.from_dict(sl) for sl in value]
        elif key == KEY_GAME_HISTORY:
            state.game_history = GameHistory.from_dict(value)

    def _discard(self, key: str) -> None:
        self._written.pop(key, None)
        try:
            self.store.remove(key)
            logger.warning("Removed potentially corrupted record %r", key)
        except OSError as e:
            logger.error("Failed to remove corrupted record %r: %s", key, e)

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------
    def save_state(self, state: TeamState) -> List[str]:
        """
        Write every record key whose serialized value changed.

        Returns:
            Keys that were written
        """
        written = []
        for key, value in state.to_records().items():
            text = _dumps(value)
            if self._written.get(key) == text:
                continue
            try:
                self.store.set(key, text)
            except OSError as e:
                logger.error("Error writing record %r: %s", key, e)
                continue
            self._written[key] = text
            written.append(key)
        return written

    def on_commit(self, previous: TeamState, current: TeamState) -> None:
        """StateStore observer: write through after each commit."""
        written = self.save_state(current)
        if written:
            logger.debug("Wrote records: %s", ", ".join(written))

    def attach(self, state_store: StateStore) -> None:
        state_store.subscribe(self.on_commit)

    # ------------------------------------------------------------------
    # Backups
    # ------------------------------------------------------------------
    @staticmethod
    def export_backup(state: TeamState, file_path: str) -> None:
        """
        Save all records to a single JSON file.

        Raises:
            OSError: If the file cannot be written
        """
        directory = os.path.dirname(file_path)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)

        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(state.to_records(), f, indent=2)

    @staticmethod
    def import_backup(file_path: str, today: Optional[str] = None) -> TeamState:
        """
        Load a backup written by ``export_backup``.

        Each record in the file goes through the same validation as the
        store. Records missing from the file keep their defaults.

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If the file is not a JSON object
        """
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"Backup file not found: {file_path}")

        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("Backup file must contain a JSON object")

        state = TeamState()
        for key in RECORD_KEYS:
            if data.get(key) is None:
                continue
            result = validate_record(key, data[key], today or local_date_str(now_ts()))
            if not result.is_rejected:
                PersistenceService._apply(state, key, result.value)
        return state
