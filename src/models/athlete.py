"""Athlete data model for the fantasy squad builder."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class Position(IntEnum):
    """Position class, encoded the same way as the remote API."""

    GOALKEEPER = 1
    DEFENDER = 2
    MIDFIELDER = 3
    FORWARD = 4

    @property
    def display_name(self) -> str:
        """Human-readable position name."""
        return POSITION_NAMES[self]

    @property
    def abbreviation(self) -> str:
        """Short position label (GK, DEF, MID, FWD)."""
        return POSITION_ABBREVIATIONS[self]


POSITION_NAMES = {
    Position.GOALKEEPER: "Goalkeeper",
    Position.DEFENDER: "Defender",
    Position.MIDFIELDER: "Midfielder",
    Position.FORWARD: "Forward",
}

POSITION_ABBREVIATIONS = {
    Position.GOALKEEPER: "GK",
    Position.DEFENDER: "DEF",
    Position.MIDFIELDER: "MID",
    Position.FORWARD: "FWD",
}


@dataclass(frozen=True)
class Athlete:
    """
    A selectable athlete from the catalog.

    Attributes:
        id: Unique identifier for the athlete.
        name: Athlete's display name.
        position: Position class (keeper, defender, midfielder, forward).
        cost: Price in millions (budget currency).
        team_id: ID of the team the athlete plays for.
        team_name: Name of that team, when the catalog provides it.
    """

    id: int
    name: str
    position: Position
    cost: float
    team_id: int
    team_name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate athlete data after initialization."""
        if self.cost < 0:
            raise ValueError("cost cannot be negative")

    @property
    def team_label(self) -> str:
        """Team name, or a generic label if the name is unknown."""
        return self.team_name or f"Team {self.team_id}"
