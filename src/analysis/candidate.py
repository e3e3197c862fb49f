"""Resolve squad id lists against the athlete catalog."""

from typing import Mapping

from ..models.athlete import Athlete
from ..models.squad import (
    DEFAULT_BUDGET,
    SQUAD_SIZE,
    STARTER_COUNT,
    DraftSquad,
    SquadPayload,
)


class CandidateError(Exception):
    """Base exception for squads that cannot become the active draft."""

    retryable = False


class CandidateResolutionError(CandidateError):
    """
    Raised when some squad ids are not in the loaded catalog.

    Usually the catalog is still loading or stale, so trying again later
    can succeed.
    """

    retryable = True

    def __init__(self, missing_ids: list[int], expected: int) -> None:
        self.missing_ids = missing_ids
        self.expected = expected
        self.found = expected - len(missing_ids)
        super().__init__(
            f"Could not find all players (found {self.found}/{expected}). "
            "Players may still be loading. Please try again in a moment."
        )


class CandidateStructureError(CandidateError):
    """Raised when a squad's id lists could never be built by hand."""

    pass


def check_structure(payload: SquadPayload) -> None:
    """
    Check that id lists respect the limits enforced on every edit.

    Raises:
        CandidateStructureError: On the first broken limit.
    """
    player_ids = list(payload.player_ids)
    starter_ids = list(payload.starter_ids)

    if len(set(player_ids)) != len(player_ids):
        raise CandidateStructureError("Squad contains duplicate players")
    if len(player_ids) > SQUAD_SIZE:
        raise CandidateStructureError(
            f"Squad has {len(player_ids)} players (maximum {SQUAD_SIZE})"
        )
    if len(set(starter_ids)) != len(starter_ids):
        raise CandidateStructureError("Squad contains duplicate starters")
    if len(starter_ids) > STARTER_COUNT:
        raise CandidateStructureError(
            f"Squad has {len(starter_ids)} starters (maximum {STARTER_COUNT})"
        )
    if not set(starter_ids) <= set(player_ids):
        raise CandidateStructureError("Some starters are not in the squad")
    if payload.captain_id is not None and payload.captain_id not in starter_ids:
        raise CandidateStructureError("Captain must be a starter")
    if payload.vice_captain_id is not None and payload.vice_captain_id not in starter_ids:
        raise CandidateStructureError("Vice-captain must be a starter")
    if payload.captain_id is not None and payload.captain_id == payload.vice_captain_id:
        raise CandidateStructureError("Captain cannot also be vice-captain")


def resolve_payload(
    payload: SquadPayload,
    catalog: Mapping[int, Athlete],
    budget_cap: float = DEFAULT_BUDGET,
) -> DraftSquad:
    """
    Build a draft squad from id lists.

    Nothing is partially applied: either every id resolves and the structure
    is sound, or an exception is raised.

    Args:
        payload: Squad as id lists.
        catalog: Loaded athletes keyed by id.
        budget_cap: Budget for the resulting draft.

    Returns:
        A new DraftSquad. It still needs full validation before saving.

    Raises:
        CandidateResolutionError: If any player id is not in the catalog.
        CandidateStructureError: If the id lists break the edit rules.
    """
    missing = [i for i in payload.player_ids if i not in catalog]
    if missing:
        raise CandidateResolutionError(missing, expected=len(payload.player_ids))

    check_structure(payload)

    return DraftSquad(
        gameweek_id=payload.gameweek_id,
        budget_cap=budget_cap,
        athletes=[catalog[i] for i in payload.player_ids],
        starter_ids=list(payload.starter_ids),
        captain_id=payload.captain_id,
        vice_captain_id=payload.vice_captain_id,
    )
