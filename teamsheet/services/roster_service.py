"""
Roster service for the Teamsheet application.

This module manages the list of players: adding and removing them (keeping
every fixture lineup, ledger and saved lineup in step with the roster), name
and number edits, and the free-form bench/field arrangement used outside of
any fixture.
"""
import logging
import uuid
from dataclasses import replace
from typing import List, Optional

from ..models import FieldPosition, Player, PlayerLineupState
from ..utils.constants import BENCH, FIELD, ROSTER_LOCATIONS
from .state_store import StateStore

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 50


class PlayerValidationError(Exception):
    """Raised by the presentation layer when player form input is invalid."""
    pass


def validate_player_fields(
    first_name: Optional[str], last_name: Optional[str], number: Optional[str]
) -> List[str]:
    """
    Validate player form input and return a list of validation errors.

    The roster service trusts its inputs; callers check them here first.

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    if first_name is not None:
        if not first_name.strip():
            errors.append("First name is required")
        elif len(first_name.strip()) > MAX_NAME_LENGTH:
            errors.append(f"First name must be at most {MAX_NAME_LENGTH} characters")

    if last_name is not None and len(last_name.strip()) > MAX_NAME_LENGTH:
        errors.append(f"Last name must be at most {MAX_NAME_LENGTH} characters")

    if number:
        if not number.strip().isdigit():
            errors.append("Player number must be numeric")
        elif not 0 <= int(number) <= 99:
            errors.append("Player number must be between 0 and 99")

    return errors


class RosterService:
    """Service class for roster membership and ad-hoc player arrangement."""

    def __init__(self, store: StateStore):
        self.store = store

    # ------------------------------------------------------------------
    # Team identity
    # ------------------------------------------------------------------
    def set_team_name(self, name: str) -> None:
        with self.store.transaction() as tx:
            tx.draft.team_name = name

    def set_team_logo(self, logo: Optional[str]) -> None:
        with self.store.transaction() as tx:
            tx.draft.team_logo = logo

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------
    def add_player(self, first_name: str, last_name: str, number: str) -> Player:
        """
        Append a bench-located player to the roster.

        Fixtures that already have a lineup get a fresh bench entry for the
        new player; fixtures without one are initialized on first access.

        Returns:
            The new player
        """
        player = Player(
            id=str(uuid.uuid4()),
            first_name=first_name,
            last_name=last_name,
            number=number,
        )
        with self.store.transaction() as tx:
            tx.draft.players.append(player)
            for game in tx.draft.games:
                if game.lineup is not None:
                    game.lineup.append(PlayerLineupState.fresh(player.id))
        logger.info("Added player %s (%s)", player.id, player.full_name)
        return replace(player)

    def update_player(
        self,
        player_id: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        number: Optional[str] = None,
    ) -> None:
        """Edit name and number fields; None leaves a field unchanged."""
        with self.store.transaction() as tx:
            player = tx.draft.find_player(player_id)
            if player is None:
                tx.abandon("update_player: unknown player %s", player_id)
                return
            if first_name is not None:
                player.first_name = first_name
            if last_name is not None:
                player.last_name = last_name
            if number is not None:
                player.number = number

    def delete_player(self, player_id: str) -> None:
        """
        Remove a player and every reference to them.

        Fixture lineup entries, ledger events naming the player as scorer or
        assist, and saved lineup slots all go in the same commit.
        """
        with self.store.transaction() as tx:
            draft = tx.draft
            if draft.find_player(player_id) is None:
                tx.abandon("delete_player: unknown player %s", player_id)
                return
            draft.players = [p for p in draft.players if p.id != player_id]
            for game in draft.games:
                game.drop_player(player_id)
            for saved in draft.saved_lineups:
                saved.players = [slot for slot in saved.players if slot.id != player_id]
        logger.info("Deleted player %s", player_id)

    # ------------------------------------------------------------------
    # Ad-hoc arrangement
    # ------------------------------------------------------------------
    def move_player(
        self, player_id: str, target_location: str, position: Optional[FieldPosition] = None
    ) -> None:
        """
        Place a player on the bench or the field outside match context.

        Raises:
            ValueError: If target_location is not "bench" or "field"
        """
        if target_location not in ROSTER_LOCATIONS:
            raise ValueError(f"Unknown roster location: {target_location!r}")

        with self.store.transaction() as tx:
            player = tx.draft.find_player(player_id)
            if player is None:
                tx.abandon("move_player: unknown player %s", player_id)
                return
            player.place(target_location, position)

    def swap_players(self, first_id: str, second_id: str) -> None:
        """
        Swap two players' arrangement.

        Two field players exchange positions. A field player and a bench
        player exchange location and position. Two bench players: no-op.
        """
        with self.store.transaction() as tx:
            first = tx.draft.find_player(first_id)
            second = tx.draft.find_player(second_id)
            if first is None or second is None or first_id == second_id:
                tx.abandon("swap_players: cannot swap %s and %s", first_id, second_id)
                return

            if first.location == FIELD and second.location == FIELD:
                first.position, second.position = second.position, first.position
            elif first.location != second.location:
                first.location, second.location = second.location, first.location
                first.position, second.position = second.position, first.position
            else:
                tx.abandon("swap_players: both players on %s", first.location)

    def reset_lineup(self) -> None:
        """Send every player to the bench."""
        with self.store.transaction() as tx:
            for player in tx.draft.players:
                player.place(BENCH)
