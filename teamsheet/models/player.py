"""
Player model for the Teamsheet application.

This module contains the Player dataclass which represents a roster member
and its ad-hoc arrangement outside of any fixture, plus the FieldPosition
value shared by roster, lineup and template records.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..utils.constants import BENCH, FIELD


@dataclass
class FieldPosition:
    """A point on the pitch drawing, in the presentation layer's coordinates."""
    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary for JSON serialization."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['FieldPosition']:
        """Create from dictionary, or None when no position is stored."""
        if not data:
            return None
        return cls(x=data["x"], y=data["y"])


def position_to_dict(position: Optional[FieldPosition]) -> Optional[Dict[str, float]]:
    return position.to_dict() if position is not None else None


@dataclass
class Player:
    """
    Represents a roster member.

    Attributes:
        id: Unique identifier, referenced by fixtures, events and templates
        first_name: Player's first name
        last_name: Player's last name
        number: Jersey number as entered by the coach
        location: Ad-hoc location outside match context ("bench" or "field")
        position: Pitch position when location is "field"
    """
    id: str
    first_name: str = ""
    last_name: str = ""
    number: str = ""
    location: str = BENCH
    position: Optional[FieldPosition] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def initials(self) -> str:
        """Return upper-cased initials, e.g. "JD" for John Doe."""
        return f"{self.first_name[:1]}{self.last_name[:1]}".upper()

    def place(self, location: str, position: Optional[FieldPosition] = None) -> None:
        """
        Set the ad-hoc location; a position is only kept on the field.

        Args:
            location: "bench" or "field"
            position: Pitch position, ignored unless location is "field"
        """
        self.location = location
        self.position = position if location == FIELD else None

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert player to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the player
        """
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "number": self.number,
            "location": self.location,
            "position": position_to_dict(self.position),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Player':
        """
        Create player from a normalized dictionary.

        Args:
            data: Dictionary representation of player

        Returns:
            Player instance
        """
        return cls(
            id=data["id"],
            first_name=data.get("firstName", ""),
            last_name=data.get("lastName", ""),
            number=data.get("number", ""),
            location=data.get("location", BENCH),
            position=FieldPosition.from_dict(data.get("position")),
        )
