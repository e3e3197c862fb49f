"""Squad builder: the legal edit operations on a draft squad."""

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from ..models.athlete import Athlete
from ..models.squad import (
    DEFAULT_BUDGET,
    SQUAD_SIZE,
    STARTER_COUNT,
    DraftSquad,
    SquadPayload,
)
from .candidate import resolve_payload
from .validator import ValidationResult, validate_draft


class EditStatus(Enum):
    """Outcome of a single edit."""

    APPLIED = "applied"
    UNCHANGED = "unchanged"
    REJECTED = "rejected"


@dataclass(frozen=True)
class EditResult:
    """
    Result of an edit operation.

    Rejected edits carry a code and a user-facing message and leave the
    draft exactly as it was.
    """

    status: EditStatus
    code: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def applied(cls) -> "EditResult":
        return cls(EditStatus.APPLIED)

    @classmethod
    def unchanged(cls) -> "EditResult":
        return cls(EditStatus.UNCHANGED)

    @classmethod
    def rejected(cls, code: str, message: str) -> "EditResult":
        return cls(EditStatus.REJECTED, code=code, message=message)

    @property
    def ok(self) -> bool:
        """True unless the edit was rejected."""
        return self.status != EditStatus.REJECTED


@dataclass(frozen=True)
class SquadSummary:
    """Figures shown alongside the draft, recomputed after every edit."""

    cost_used: float
    budget_remaining: float
    selected_count: int
    starter_count: int


class SquadBuilder:
    """
    Owns one draft squad and applies edits to it.

    Squad size, starter count and role assignment are enforced on every
    edit. Budget, position and team rules are left to validate().
    """

    def __init__(self, draft: DraftSquad) -> None:
        """
        Initialize the builder.

        Args:
            draft: The draft to take ownership of.
        """
        self._draft = draft
        self.summary = self._summarize()

    @classmethod
    def empty(cls, gameweek_id: int, budget_cap: float = DEFAULT_BUDGET) -> "SquadBuilder":
        """Start a new, empty draft."""
        return cls(DraftSquad(gameweek_id=gameweek_id, budget_cap=budget_cap))

    @classmethod
    def from_payload(
        cls,
        payload: SquadPayload,
        catalog: Mapping[int, Athlete],
        budget_cap: float = DEFAULT_BUDGET,
    ) -> "SquadBuilder":
        """
        Build a draft from id lists (a committed squad or a random candidate).

        Raises:
            CandidateResolutionError: If any id is missing from the catalog.
            CandidateStructureError: If the id lists break the edit rules.
        """
        return cls(resolve_payload(payload, catalog, budget_cap))

    @property
    def draft(self) -> DraftSquad:
        return self._draft

    @property
    def gameweek_id(self) -> int:
        return self._draft.gameweek_id

    def _summarize(self) -> SquadSummary:
        return SquadSummary(
            cost_used=self._draft.total_cost,
            budget_remaining=self._draft.budget_remaining,
            selected_count=self._draft.squad_size,
            starter_count=self._draft.starter_count,
        )

    def _applied(self) -> EditResult:
        self.summary = self._summarize()
        return EditResult.applied()

    def _clear_roles(self, athlete_id: int) -> None:
        if self._draft.captain_id == athlete_id:
            self._draft.captain_id = None
        if self._draft.vice_captain_id == athlete_id:
            self._draft.vice_captain_id = None

    def add_athlete(self, athlete: Athlete) -> EditResult:
        """Add an athlete to the squad."""
        if self._draft.is_selected(athlete.id):
            return EditResult.unchanged()
        if self._draft.squad_size >= SQUAD_SIZE:
            return EditResult.rejected(
                "SQUAD_FULL", "Squad is full! Remove a player first."
            )
        self._draft.athletes.append(athlete)
        return self._applied()

    def remove_athlete(self, athlete_id: int) -> EditResult:
        """Remove an athlete, dropping them from starters and any role."""
        athlete = self._draft.get_athlete(athlete_id)
        if athlete is None:
            return EditResult.unchanged()
        self._draft.athletes.remove(athlete)
        if athlete_id in self._draft.starter_ids:
            self._draft.starter_ids.remove(athlete_id)
        self._clear_roles(athlete_id)
        return self._applied()

    def add_starter(self, athlete_id: int) -> EditResult:
        """Promote a selected athlete to the starting eleven."""
        if not self._draft.is_selected(athlete_id):
            return EditResult.rejected(
                "NOT_IN_SQUAD", "Only players in your squad can start."
            )
        if self._draft.is_starter(athlete_id):
            return EditResult.unchanged()
        if self._draft.starter_count >= STARTER_COUNT:
            return EditResult.rejected(
                "STARTERS_FULL", f"Maximum {STARTER_COUNT} starters allowed!"
            )
        self._draft.starter_ids.append(athlete_id)
        return self._applied()

    def remove_starter(self, athlete_id: int) -> EditResult:
        """Move a starter to the bench, dropping any role they hold."""
        if not self._draft.is_starter(athlete_id):
            return EditResult.unchanged()
        self._draft.starter_ids.remove(athlete_id)
        self._clear_roles(athlete_id)
        return self._applied()

    def toggle_starter(self, athlete_id: int) -> EditResult:
        if self._draft.is_starter(athlete_id):
            return self.remove_starter(athlete_id)
        return self.add_starter(athlete_id)

    def set_captain(self, athlete_id: int) -> EditResult:
        """Make a starter captain; they stop being vice-captain."""
        if not self._draft.is_starter(athlete_id):
            return EditResult.rejected(
                "CAPTAIN_NOT_STARTER", "Captain must be a starter!"
            )
        if self._draft.captain_id == athlete_id:
            return EditResult.unchanged()
        self._draft.captain_id = athlete_id
        if self._draft.vice_captain_id == athlete_id:
            self._draft.vice_captain_id = None
        return self._applied()

    def set_vice_captain(self, athlete_id: int) -> EditResult:
        """Make a starter vice-captain; they stop being captain."""
        if not self._draft.is_starter(athlete_id):
            return EditResult.rejected(
                "VICE_CAPTAIN_NOT_STARTER", "Vice-captain must be a starter!"
            )
        if self._draft.vice_captain_id == athlete_id:
            return EditResult.unchanged()
        self._draft.vice_captain_id = athlete_id
        if self._draft.captain_id == athlete_id:
            self._draft.captain_id = None
        return self._applied()

    def clear_captain(self) -> EditResult:
        if self._draft.captain_id is None:
            return EditResult.unchanged()
        self._draft.captain_id = None
        return self._applied()

    def clear_vice_captain(self) -> EditResult:
        if self._draft.vice_captain_id is None:
            return EditResult.unchanged()
        self._draft.vice_captain_id = None
        return self._applied()

    def validate(self) -> ValidationResult:
        """Run full save-time validation on the draft."""
        return validate_draft(self._draft)

    def to_payload(self) -> SquadPayload:
        """Serialize the draft for saving."""
        return SquadPayload.from_draft(self._draft)
