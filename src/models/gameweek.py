"""Gameweek data model."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Gameweek:
    """
    A discrete scoring period.

    Attributes:
        id: Unique identifier for the gameweek.
        start_time: Start of the gameweek as an ISO string.
        end_time: End of the gameweek, when known.
        is_complete: Whether every fixture in the gameweek has been played.
        is_current: Whether this is the gameweek currently open for selection.
    """

    id: int
    start_time: str
    end_time: Optional[str] = None
    is_complete: bool = False
    is_current: bool = False

    def __post_init__(self) -> None:
        """Validate gameweek data."""
        if self.id < 1:
            raise ValueError("gameweek id must be positive")

    @property
    def name(self) -> str:
        return f"Gameweek {self.id}"
