"""Remote collaborators for the fantasy squad builder."""

from .base import (
    ApiClient,
    AuthenticationError,
    FetchError,
    NotFoundError,
    ParseError,
    RateLimitError,
    ServiceError,
)
from .catalog import (
    CatalogProvider,
    create_sample_athletes,
    parse_athlete,
    parse_position,
    PLAYERS_ENDPOINT,
)
from .gameweeks import GameweekService, parse_gameweek, GAMEWEEKS_ENDPOINT
from .session import SaveResult, SessionError, SquadSession
from .squads import (
    SquadGateway,
    parse_committed_squad,
    parse_payload,
    SQUADS_ENDPOINT,
)

__all__ = [
    # Base
    "ApiClient",
    "AuthenticationError",
    "FetchError",
    "NotFoundError",
    "ParseError",
    "RateLimitError",
    "ServiceError",
    # Catalog
    "CatalogProvider",
    "create_sample_athletes",
    "parse_athlete",
    "parse_position",
    "PLAYERS_ENDPOINT",
    # Gameweeks
    "GameweekService",
    "parse_gameweek",
    "GAMEWEEKS_ENDPOINT",
    # Session
    "SaveResult",
    "SessionError",
    "SquadSession",
    # Squads
    "SquadGateway",
    "parse_committed_squad",
    "parse_payload",
    "SQUADS_ENDPOINT",
]
