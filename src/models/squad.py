"""Draft squad data model and wire formats."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Optional

from .athlete import Athlete, Position


# Game constants
SQUAD_SIZE = 15
STARTER_COUNT = 11
MAX_PER_TEAM = 3
DEFAULT_BUDGET = 100.0

# Minimum athletes per position over the whole squad
POSITION_MINIMUMS = {
    Position.GOALKEEPER: 2,
    Position.DEFENDER: 5,
    Position.MIDFIELDER: 5,
    Position.FORWARD: 3,
}


def check_position_minimums(minimums: dict[Position, int], squad_size: int) -> None:
    """
    Check that the position minimums fill the squad exactly.

    They then also act as maximums once the squad size check passes.

    Raises:
        ValueError: If the minimums do not add up to the squad size.
    """
    total = sum(minimums.values())
    if total != squad_size:
        raise ValueError(
            f"Position minimums add up to {total}, squad size is {squad_size}"
        )


check_position_minimums(POSITION_MINIMUMS, SQUAD_SIZE)


def squad_cost(athletes: list[Athlete]) -> float:
    """Total cost of a list of athletes, rounded to hide float noise."""
    return round(sum(a.cost for a in athletes), 2)


@dataclass
class DraftSquad:
    """
    The roster being edited for one gameweek.

    Owned by a single SquadBuilder, which is the only thing that mutates it.

    Attributes:
        gameweek_id: The gameweek this draft applies to.
        budget_cap: Maximum total cost of the selected athletes.
        athletes: Selected athletes, unique by id.
        starter_ids: IDs of selected athletes who start.
        captain_id: ID of the captain (must be a starter).
        vice_captain_id: ID of the vice-captain (must be a starter).
    """

    gameweek_id: int
    budget_cap: float = DEFAULT_BUDGET
    athletes: list[Athlete] = field(default_factory=list)
    starter_ids: list[int] = field(default_factory=list)
    captain_id: Optional[int] = None
    vice_captain_id: Optional[int] = None

    @property
    def total_cost(self) -> float:
        """Calculate total cost of the squad."""
        return squad_cost(self.athletes)

    @property
    def budget_remaining(self) -> float:
        """Calculate remaining budget."""
        return round(self.budget_cap - self.total_cost, 2)

    @property
    def squad_size(self) -> int:
        """Return number of athletes in squad."""
        return len(self.athletes)

    @property
    def starter_count(self) -> int:
        return len(self.starter_ids)

    @property
    def athlete_ids(self) -> list[int]:
        return [a.id for a in self.athletes]

    @property
    def team_counts(self) -> dict[int, int]:
        """Count athletes per team id."""
        return dict(Counter(a.team_id for a in self.athletes))

    @property
    def position_counts(self) -> dict[Position, int]:
        """Count athletes per position, including positions with none."""
        counts = Counter(a.position for a in self.athletes)
        return {position: counts.get(position, 0) for position in Position}

    @property
    def starters(self) -> list[Athlete]:
        """Starting athletes in the order they were promoted."""
        by_id = {a.id: a for a in self.athletes}
        return [by_id[i] for i in self.starter_ids if i in by_id]

    @property
    def bench(self) -> list[Athlete]:
        starter_ids = set(self.starter_ids)
        return [a for a in self.athletes if a.id not in starter_ids]

    def get_athlete(self, athlete_id: int) -> Optional[Athlete]:
        """Get a selected athlete by ID."""
        return next((a for a in self.athletes if a.id == athlete_id), None)

    def is_selected(self, athlete_id: int) -> bool:
        return self.get_athlete(athlete_id) is not None

    def is_starter(self, athlete_id: int) -> bool:
        return athlete_id in self.starter_ids


@dataclass(frozen=True)
class SquadPayload:
    """
    Squad as id lists, the shape sent to and received from the remote API.

    Used both for saving a draft and for random candidates from the server.
    """

    gameweek_id: int
    player_ids: tuple[int, ...]
    starter_ids: tuple[int, ...]
    captain_id: Optional[int] = None
    vice_captain_id: Optional[int] = None

    @classmethod
    def from_draft(cls, draft: DraftSquad) -> "SquadPayload":
        """Serialize a draft squad."""
        return cls(
            gameweek_id=draft.gameweek_id,
            player_ids=tuple(draft.athlete_ids),
            starter_ids=tuple(draft.starter_ids),
            captain_id=draft.captain_id,
            vice_captain_id=draft.vice_captain_id,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SquadPayload":
        """
        Parse the camelCase API representation.

        Raises:
            ValueError: If a required field is missing or not an integer.
        """
        try:
            gameweek_id = int(data["gameweekId"])
            player_ids = tuple(int(i) for i in data.get("playerIds") or [])
            starter_ids = tuple(int(i) for i in data.get("starterIds") or [])
            captain_id = _optional_id(data.get("captainId"))
            vice_captain_id = _optional_id(data.get("viceCaptainId"))
        except KeyError as e:
            raise ValueError(f"Squad payload missing field {e}") from e
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid squad payload: {e}") from e

        return cls(
            gameweek_id=gameweek_id,
            player_ids=player_ids,
            starter_ids=starter_ids,
            captain_id=captain_id,
            vice_captain_id=vice_captain_id,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase API representation."""
        return {
            "gameweekId": self.gameweek_id,
            "playerIds": list(self.player_ids),
            "starterIds": list(self.starter_ids),
            "captainId": self.captain_id,
            "viceCaptainId": self.vice_captain_id,
        }


@dataclass(frozen=True)
class SquadEntry:
    """One athlete's slot in a committed squad."""

    player_id: int
    is_starter: bool = False
    is_captain: bool = False
    is_vice: bool = False


@dataclass
class CommittedSquad:
    """
    A squad saved on the server for a user and gameweek.

    Attributes:
        id: Server-side squad ID, used for updates.
        user_id: Owner of the squad.
        gameweek_id: Gameweek the squad applies to.
        entries: One entry per selected athlete.
        captain_id: Captain ID reported at squad level, if any.
        vice_captain_id: Vice-captain ID reported at squad level, if any.
        total_cost: Cost reported by the server.
        total_points: Points scored, once the gameweek is played.
    """

    id: int
    user_id: int
    gameweek_id: int
    entries: list[SquadEntry] = field(default_factory=list)
    captain_id: Optional[int] = None
    vice_captain_id: Optional[int] = None
    total_cost: Optional[float] = None
    total_points: Optional[float] = None

    def to_payload(self) -> SquadPayload:
        """Convert to id lists; role flags on entries take precedence."""
        captain = next((e.player_id for e in self.entries if e.is_captain), None)
        vice = next((e.player_id for e in self.entries if e.is_vice), None)
        return SquadPayload(
            gameweek_id=self.gameweek_id,
            player_ids=tuple(e.player_id for e in self.entries),
            starter_ids=tuple(e.player_id for e in self.entries if e.is_starter),
            captain_id=captain if captain is not None else self.captain_id,
            vice_captain_id=vice if vice is not None else self.vice_captain_id,
        )


def _optional_id(value: Any) -> Optional[int]:
    if value is None:
        return None
    return int(value)
