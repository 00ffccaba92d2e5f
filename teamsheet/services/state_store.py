"""
Explicit state container for the Teamsheet application.

Every mutation works on a private deep copy of the latest committed
TeamState and installs it in a single step, so no partially applied change
is ever observable. Observers (the persistence adapter, a UI) are called
after each commit with the previous and the new snapshot.
"""
import logging
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional

from ..models import TeamState

logger = logging.getLogger(__name__)

CommitObserver = Callable[[TeamState, TeamState], None]


class Transaction:
    """A draft of the next state; discarded when abandoned or on error."""

    def __init__(self, draft: TeamState):
        self.draft = draft
        self.abandoned = False

    def abandon(self, reason: Optional[str] = None, *args: object) -> None:
        """Leave the committed state untouched, logging why at debug level."""
        if reason:
            logger.debug("No-op: " + reason, *args)
        self.abandoned = True


class StateStore:
    """Holds the committed TeamState and notifies observers on commit."""

    def __init__(self, state: Optional[TeamState] = None):
        self._state = state if state is not None else TeamState()
        self._observers: List[CommitObserver] = []
        self._in_transaction = False

    @property
    def state(self) -> TeamState:
        """The latest committed snapshot. Treat as read-only."""
        return self._state

    def subscribe(self, observer: CommitObserver) -> None:
        self._observers.append(observer)

    def unsubscribe(self, observer: CommitObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    @contextmanager
    def transaction(self) -> Iterator[Transaction]:
        """
        Open a mutation against a copy of the latest committed state.

        Raises:
            RuntimeError: If a transaction is already open
        """
        if self._in_transaction:
            raise RuntimeError("Nested state transactions are not supported")

        self._in_transaction = True
        try:
            tx = Transaction(self._state.copy())
            yield tx
        finally:
            self._in_transaction = False

        if not tx.abandoned:
            self.commit(tx.draft)

    def commit(self, new_state: TeamState) -> TeamState:
        """Install ``new_state`` and notify observers."""
        previous = self._state
        self._state = new_state
        for observer in list(self._observers):
            observer(previous, new_state)
        return new_state
