"""Data models for the fantasy squad builder."""

from .athlete import POSITION_ABBREVIATIONS, POSITION_NAMES, Athlete, Position
from .gameweek import Gameweek
from .squad import (
    DEFAULT_BUDGET,
    MAX_PER_TEAM,
    POSITION_MINIMUMS,
    SQUAD_SIZE,
    STARTER_COUNT,
    CommittedSquad,
    DraftSquad,
    SquadEntry,
    SquadPayload,
    squad_cost,
)

__all__ = [
    # Athlete
    "Athlete",
    "Position",
    "POSITION_ABBREVIATIONS",
    "POSITION_NAMES",
    # Gameweek
    "Gameweek",
    # Squad
    "DEFAULT_BUDGET",
    "MAX_PER_TEAM",
    "POSITION_MINIMUMS",
    "SQUAD_SIZE",
    "STARTER_COUNT",
    "CommittedSquad",
    "DraftSquad",
    "SquadEntry",
    "SquadPayload",
    "squad_cost",
]
