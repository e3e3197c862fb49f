"""Squad composition validation for fantasy squad building."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..models.athlete import POSITION_ABBREVIATIONS, POSITION_NAMES, Athlete, Position
from ..models.squad import (
    DEFAULT_BUDGET,
    MAX_PER_TEAM,
    POSITION_MINIMUMS,
    SQUAD_SIZE,
    STARTER_COUNT,
    DraftSquad,
    squad_cost,
)


# Plural labels used in position quota messages
POSITION_PLURALS = {
    Position.GOALKEEPER: "goalkeepers",
    Position.DEFENDER: "defenders",
    Position.MIDFIELDER: "midfielders",
    Position.FORWARD: "forwards",
}


@dataclass(frozen=True)
class SquadViolation:
    """A single rule the squad breaks."""

    code: str
    message: str


@dataclass
class ValidationResult:
    """
    Result of a validation check.

    Attributes:
        is_valid: Whether the validation passed.
        errors: Every violation found, in check order (empty if valid).
    """

    is_valid: bool
    errors: list[SquadViolation] = field(default_factory=list)

    @property
    def messages(self) -> list[str]:
        """Human-readable violation descriptions."""
        return [e.message for e in self.errors]

    @property
    def codes(self) -> list[str]:
        return [e.code for e in self.errors]


def _format_money(value: float) -> str:
    return f"£{value:g}m"


def validate_squad(
    athletes: list[Athlete],
    starter_ids: Iterable[int],
    budget_cap: float = DEFAULT_BUDGET,
) -> ValidationResult:
    """
    Validate squad composition against the game rules.

    Every check runs; the result lists all violations rather than the first.

    Args:
        athletes: Selected athletes.
        starter_ids: IDs of the starting athletes.
        budget_cap: Maximum total cost.

    Returns:
        ValidationResult with one violation per broken rule.
    """
    starter_ids = list(starter_ids)
    errors: list[SquadViolation] = []

    # Squad size check
    if len(athletes) != SQUAD_SIZE:
        errors.append(
            SquadViolation(
                code="SQUAD_SIZE",
                message=f"Squad must have exactly {SQUAD_SIZE} players "
                f"(you have {len(athletes)})",
            )
        )

    # Starter count check
    if len(starter_ids) != STARTER_COUNT:
        errors.append(
            SquadViolation(
                code="STARTER_COUNT",
                message=f"Must have exactly {STARTER_COUNT} starters "
                f"(you have {len(starter_ids)})",
            )
        )

    # Starters must be in the squad
    selected_ids = {a.id for a in athletes}
    unknown = [i for i in starter_ids if i not in selected_ids]
    if unknown:
        errors.append(
            SquadViolation(
                code="UNKNOWN_STARTER",
                message="Some starter IDs are not in the squad: "
                + ", ".join(str(i) for i in unknown),
            )
        )

    # Budget check
    total = squad_cost(athletes)
    if total > budget_cap:
        errors.append(
            SquadViolation(
                code="OVER_BUDGET",
                message=f"Squad cost (£{total:.1f}m) exceeds budget "
                f"({_format_money(budget_cap)})",
            )
        )

    # Position minimums, counted over the whole squad
    position_counts = Counter(a.position for a in athletes)
    for position, minimum in POSITION_MINIMUMS.items():
        count = position_counts.get(position, 0)
        if count < minimum:
            errors.append(
                SquadViolation(
                    code="POSITION_MINIMUM",
                    message=f"Must have at least {minimum} "
                    f"{POSITION_PLURALS[position]} (you have {count})",
                )
            )

    # Team limit check
    team_counts = Counter(a.team_id for a in athletes)
    for team_id, count in team_counts.items():
        if count > MAX_PER_TEAM:
            team_label = next(a.team_label for a in athletes if a.team_id == team_id)
            errors.append(
                SquadViolation(
                    code="TEAM_LIMIT",
                    message=f"Cannot have more than {MAX_PER_TEAM} players "
                    f"from {team_label} (you have {count})",
                )
            )

    return ValidationResult(is_valid=len(errors) == 0, errors=errors)


def validate_roles(
    starter_ids: Iterable[int],
    captain_id: Optional[int],
    vice_captain_id: Optional[int],
) -> ValidationResult:
    """
    Check captain and vice-captain assignment for saving.

    Both roles are required, both must be starters and they must differ.
    """
    starters = set(starter_ids)
    errors: list[SquadViolation] = []

    if captain_id is None:
        errors.append(
            SquadViolation(code="MISSING_CAPTAIN", message="Please select a captain")
        )
    elif captain_id not in starters:
        errors.append(
            SquadViolation(
                code="CAPTAIN_NOT_STARTER", message="Captain must be a starter"
            )
        )

    if vice_captain_id is None:
        errors.append(
            SquadViolation(
                code="MISSING_VICE_CAPTAIN", message="Please select a vice-captain"
            )
        )
    elif vice_captain_id not in starters:
        errors.append(
            SquadViolation(
                code="VICE_CAPTAIN_NOT_STARTER",
                message="Vice-captain must be a starter",
            )
        )

    if captain_id is not None and captain_id == vice_captain_id:
        errors.append(
            SquadViolation(
                code="CAPTAIN_IS_VICE",
                message="Captain and vice-captain must be different players",
            )
        )

    return ValidationResult(is_valid=len(errors) == 0, errors=errors)


def validate_draft(draft: DraftSquad) -> ValidationResult:
    """
    Full save-time validation of a draft squad.

    Args:
        draft: The draft to validate.

    Returns:
        Composition violations followed by role violations.
    """
    composition = validate_squad(draft.athletes, draft.starter_ids, draft.budget_cap)
    roles = validate_roles(draft.starter_ids, draft.captain_id, draft.vice_captain_id)
    errors = composition.errors + roles.errors
    return ValidationResult(is_valid=len(errors) == 0, errors=errors)


def get_position_name(position: int) -> str:
    """Position name for a position code, "Unknown" if not recognised."""
    try:
        return POSITION_NAMES[Position(position)]
    except ValueError:
        return "Unknown"


def get_position_abbr(position: int) -> str:
    """Position abbreviation for a position code, "?" if not recognised."""
    try:
        return POSITION_ABBREVIATIONS[Position(position)]
    except ValueError:
        return "?"


def get_squad_slots_remaining(draft: DraftSquad) -> int:
    """
    Get the number of squad slots remaining.

    Args:
        draft: The current draft.

    Returns:
        Number of athletes that can still be added.
    """
    return max(0, SQUAD_SIZE - draft.squad_size)


def get_starter_slots_remaining(draft: DraftSquad) -> int:
    return max(0, STARTER_COUNT - draft.starter_count)


def get_available_slots_for_team(draft: DraftSquad, team_id: int) -> int:
    """
    Get the number of athletes that can still be taken from a team.

    Args:
        draft: The current draft.
        team_id: The team to check.

    Returns:
        Remaining allowance before the team limit is exceeded.
    """
    return max(0, MAX_PER_TEAM - draft.team_counts.get(team_id, 0))


def get_position_shortfall(draft: DraftSquad) -> dict[Position, int]:
    """Athletes still needed per position to meet the minimums."""
    counts = draft.position_counts
    return {
        position: max(0, minimum - counts[position])
        for position, minimum in POSITION_MINIMUMS.items()
    }
