"""Squad editing session: wires the builder to the catalog and gateway."""

import logging
from dataclasses import dataclass
from typing import Optional

from ..analysis.builder import SquadBuilder
from ..analysis.candidate import CandidateError, CandidateStructureError
from ..analysis.validator import ValidationResult
from ..models import DEFAULT_BUDGET, Athlete, CommittedSquad
from .base import ServiceError
from .catalog import CatalogProvider
from .squads import SquadGateway


logger = logging.getLogger(__name__)


class SessionError(Exception):
    """Raised when an action needs state the session does not have yet."""

    pass


@dataclass
class SaveResult:
    """
    Outcome of a save attempt.

    Attributes:
        saved: Whether the squad was sent to the server.
        validation: Validation run before saving.
        squad: The squad as stored by the server, when saved.
    """

    saved: bool
    validation: ValidationResult
    squad: Optional[CommittedSquad] = None


class SquadSession:
    """
    One user's squad editing session.

    Holds a single SquadBuilder for the selected gameweek. Remote failures
    propagate as ServiceError and never change the draft.
    """

    def __init__(
        self,
        user_id: int,
        catalog: CatalogProvider,
        gateway: SquadGateway,
        budget_cap: float = DEFAULT_BUDGET,
    ) -> None:
        self.user_id = user_id
        self.catalog_provider = catalog
        self.gateway = gateway
        self.budget_cap = budget_cap
        self.athletes: list[Athlete] = []
        self.catalog: dict[int, Athlete] = {}
        self.selected_gameweek_id: Optional[int] = None
        self.committed: Optional[CommittedSquad] = None
        self._builder: Optional[SquadBuilder] = None

    @property
    def builder(self) -> SquadBuilder:
        """The active builder."""
        if self._builder is None:
            raise SessionError("No gameweek is open")
        return self._builder

    @property
    def has_draft(self) -> bool:
        return self._builder is not None

    def load_catalog(self, use_cache: bool = True) -> list[Athlete]:
        """
        Fetch the athlete catalog.

        Raises:
            ServiceError: If the catalog cannot be loaded.
        """
        self.use_catalog(self.catalog_provider.list_athletes(use_cache=use_cache))
        return self.athletes

    def use_catalog(self, athletes: list[Athlete]) -> None:
        """Replace the loaded catalog (e.g. with offline sample data)."""
        self.athletes = list(athletes)
        self.catalog = {a.id: a for a in self.athletes}

    def open_gameweek(self, gameweek_id: int) -> SquadBuilder:
        """
        Select a gameweek and load its squad, or start an empty draft.

        On failure the previous selection and draft are kept.

        Raises:
            ServiceError: If the squad cannot be fetched.
            CandidateError: If the stored squad does not match the catalog.
        """
        previous = self.selected_gameweek_id
        self.selected_gameweek_id = gameweek_id
        try:
            squad = self.gateway.fetch_squad(self.user_id, gameweek_id)
            self.apply_fetched_squad(gameweek_id, squad)
        except (ServiceError, CandidateError):
            if self.selected_gameweek_id == gameweek_id:
                self.selected_gameweek_id = previous
            raise
        return self.builder

    def start_empty(self, gameweek_id: int) -> SquadBuilder:
        """Select a gameweek with a new, empty draft, without contacting the server."""
        self.selected_gameweek_id = gameweek_id
        self.apply_fetched_squad(gameweek_id, None)
        return self.builder

    def apply_fetched_squad(
        self, gameweek_id: int, squad: Optional[CommittedSquad]
    ) -> bool:
        """
        Replace the draft with a fetched squad.

        Responses for a gameweek that is no longer selected are ignored.

        Returns:
            True if the draft was replaced.
        """
        if gameweek_id != self.selected_gameweek_id:
            logger.info(
                "Ignoring stale squad for gameweek %s (selected %s)",
                gameweek_id,
                self.selected_gameweek_id,
            )
            return False

        if squad is None:
            builder = SquadBuilder.empty(gameweek_id, self.budget_cap)
        else:
            builder = SquadBuilder.from_payload(
                squad.to_payload(), self.catalog, self.budget_cap
            )

        self._builder = builder
        self.committed = squad
        return True

    def generate_random(self) -> ValidationResult:
        """
        Replace the draft with a server-generated random squad.

        Returns:
            Full validation of the new draft; the generator is not trusted.

        Raises:
            SessionError: If no gameweek is selected.
            ServiceError: If the request fails.
            CandidateError: If the candidate cannot be resolved or is malformed.
        """
        if self.selected_gameweek_id is None:
            raise SessionError("Select a gameweek first")

        gameweek_id = self.selected_gameweek_id
        candidate = self.gateway.generate_random_candidate(self.user_id, gameweek_id)
        if candidate.gameweek_id != gameweek_id:
            raise CandidateStructureError(
                f"Random squad is for gameweek {candidate.gameweek_id}, "
                f"expected {gameweek_id}"
            )
        builder = SquadBuilder.from_payload(candidate, self.catalog, self.budget_cap)

        self._builder = builder
        validation = builder.validate()
        if not validation.is_valid:
            logger.warning(
                "Random squad for gameweek %s failed validation: %s",
                gameweek_id,
                "; ".join(validation.messages),
            )
        return validation

    def save(self) -> SaveResult:
        """
        Validate the draft and save it if it passes.

        Updates the user's squad for the gameweek if one exists, otherwise
        creates one. No version check is made: the last save wins.

        Raises:
            ServiceError: If the save fails; the draft is left as it was.
        """
        builder = self.builder
        validation = builder.validate()
        if not validation.is_valid:
            return SaveResult(saved=False, validation=validation)

        payload = builder.to_payload()
        existing = self.gateway.fetch_squad(self.user_id, builder.gameweek_id)
        if existing is not None:
            squad = self.gateway.update_squad(existing.id, payload)
        else:
            squad = self.gateway.create_squad(self.user_id, payload)

        self.committed = squad
        logger.info("Saved squad %s for gameweek %s", squad.id, builder.gameweek_id)
        return SaveResult(saved=True, validation=validation, squad=squad)
