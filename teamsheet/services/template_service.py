"""Saved lineup (template) service for the Teamsheet application."""

import logging
from dataclasses import replace

from ..models import LineupSlot, SavedLineup
from ..utils.constants import BENCH
from .state_store import StateStore

logger = logging.getLogger(__name__)


class TemplateService:
    """Save, load and delete named roster-wide arrangements."""

    def __init__(self, store: StateStore):
        self.store = store

    def save_lineup(self, name: str) -> None:
        """
        Snapshot every player's ad-hoc location under ``name``.

        A template with the same name is replaced. Blank names are ignored.
        """
        name = (name or "").strip()
        if not name:
            logger.warning("save_lineup called without a name, ignoring")
            return

        with self.store.transaction() as tx:
            draft = tx.draft
            snapshot = SavedLineup(
                name=name,
                players=[
                    LineupSlot(id=p.id, location=p.location, position=replace(p.position) if p.position else None)
                    for p in draft.players
                ],
            )
            draft.saved_lineups = [sl for sl in draft.saved_lineups if sl.name != name]
            draft.saved_lineups.append(snapshot)

    def load_lineup(self, name: str) -> bool:
        """
        Apply a saved template to the roster.

        Players in the template take its location and position; players not
        in it are sent to the bench.

        Returns:
            True if the template exists, False otherwise
        """
        with self.store.transaction() as tx:
            saved = tx.draft.find_saved_lineup(name)
            if saved is None:
                logger.warning("Lineup %r not found", name)
                tx.abandon()
                return False

            for player in tx.draft.players:
                slot = saved.slot_for(player.id)
                if slot is None:
                    player.place(BENCH)
                else:
                    player.location = slot.location
                    player.position = replace(slot.position) if slot.position else None
        return True

    def delete_lineup(self, name: str) -> None:
        with self.store.transaction() as tx:
            if tx.draft.find_saved_lineup(name) is None:
                tx.abandon("delete_lineup: unknown lineup %r", name)
                return
            tx.draft.saved_lineups = [sl for sl in tx.draft.saved_lineups if sl.name != name]
