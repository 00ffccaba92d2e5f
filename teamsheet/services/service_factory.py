"""
Service Factory for dependency injection.

This module builds the state store, wires the persistence adapter to it and
creates every service against the same store.
"""
import logging
from typing import Dict, Optional

from ..models import TeamState
from .event_service import EventService
from .fixture_service import FixtureService
from .lineup_service import LineupService
from .persistence_service import PersistenceService
from .report_service import ReportService
from .roster_service import RosterService
from .state_store import StateStore
from .storage import InMemoryStore, JsonFileStore, KeyValueStore
from .template_service import TemplateService
from .timer_service import TimerService

logger = logging.getLogger(__name__)


class ServiceFactory:
    """
    Factory for creating service instances bound to one StateStore.

    The initial state is read through the PersistenceService, which is then
    subscribed to the store so that every commit is written through.
    """

    def __init__(self, kv_store: Optional[KeyValueStore] = None):
        """
        Initialize the factory.

        Args:
            kv_store: Durable store; defaults to an in-memory store
        """
        self.kv_store = kv_store if kv_store is not None else InMemoryStore()
        self.persistence_service = PersistenceService(self.kv_store)
        self._state_store: Optional[StateStore] = None

    @classmethod
    def for_data_dir(cls, data_dir: str) -> 'ServiceFactory':
        """Factory backed by JSON files in ``data_dir``."""
        return cls(JsonFileStore(data_dir))

    def get_state_store(self) -> StateStore:
        """Get the singleton state store, loading it on first use."""
        if self._state_store is None:
            state: TeamState = self.persistence_service.load_state()
            self._state_store = StateStore(state)
            self.persistence_service.attach(self._state_store)
            logger.info(
                "Loaded %s players, %s games, %s saved lineups",
                len(state.players), len(state.games), len(state.saved_lineups),
            )
        return self._state_store

    def create_complete_service_suite(self) -> Dict[str, object]:
        """
        Create a complete suite of services sharing one state store.

        Returns:
            Dictionary containing all configured services
        """
        store = self.get_state_store()
        return {
            'store': store,
            'persistence': self.persistence_service,
            'roster': RosterService(store),
            'fixtures': FixtureService(store),
            'timer': TimerService(store),
            'lineup': LineupService(store),
            'events': EventService(store),
            'templates': TemplateService(store),
            'reports': ReportService(store),
        }
