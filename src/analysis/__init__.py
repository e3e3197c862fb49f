"""Squad composition rules and the draft squad builder."""

from .builder import EditResult, EditStatus, SquadBuilder, SquadSummary
from .candidate import (
    CandidateError,
    CandidateResolutionError,
    CandidateStructureError,
    check_structure,
    resolve_payload,
)
from .filters import (
    AthleteFilter,
    extract_teams,
    filter_athletes,
    sanitize_search_query,
)
from .validator import (
    SquadViolation,
    ValidationResult,
    get_available_slots_for_team,
    get_position_abbr,
    get_position_name,
    get_position_shortfall,
    get_squad_slots_remaining,
    get_starter_slots_remaining,
    validate_draft,
    validate_roles,
    validate_squad,
)

__all__ = [
    # Builder
    "EditResult",
    "EditStatus",
    "SquadBuilder",
    "SquadSummary",
    # Candidate
    "CandidateError",
    "CandidateResolutionError",
    "CandidateStructureError",
    "check_structure",
    "resolve_payload",
    # Filters
    "AthleteFilter",
    "extract_teams",
    "filter_athletes",
    "sanitize_search_query",
    # Validator
    "SquadViolation",
    "ValidationResult",
    "get_available_slots_for_team",
    "get_position_abbr",
    "get_position_name",
    "get_position_shortfall",
    "get_squad_slots_remaining",
    "get_starter_slots_remaining",
    "validate_draft",
    "validate_roles",
    "validate_squad",
]
