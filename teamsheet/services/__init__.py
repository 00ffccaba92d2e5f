"""
Services package for the Teamsheet application.

This package contains the lineup and timekeeping engine, the persistence
gateway and the factory that wires them to one state store.
"""
from .storage import KeyValueStore, InMemoryStore, JsonFileStore
from .state_store import StateStore, Transaction
from .record_validator import RecordResult, RecordStatus, validate_record
from .persistence_service import PersistenceService
from .timer_service import TimerService
from .lineup_service import LineupService
from .event_service import EventService
from .roster_service import RosterService, PlayerValidationError, validate_player_fields
from .template_service import TemplateService
from .fixture_service import FixtureService
from .report_service import ReportService
from .service_factory import ServiceFactory

__all__ = [
    "KeyValueStore", "InMemoryStore", "JsonFileStore", "StateStore", "Transaction",
    "RecordResult", "RecordStatus", "validate_record", "PersistenceService",
    "TimerService", "LineupService", "EventService", "RosterService",
    "PlayerValidationError", "validate_player_fields", "TemplateService",
    "FixtureService", "ReportService", "ServiceFactory"
]
