"""Runtime configuration for the fantasy squad builder."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .models.squad import DEFAULT_BUDGET


# Default API location for local development
DEFAULT_API_BASE_URL = "https://localhost:7010"

# Default cache directory
DEFAULT_CACHE_DIR = Path(__file__).parent.parent / "data" / "cache"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    """
    Settings read from the environment.

    Attributes:
        api_base_url: Root URL of the fantasy API.
        access_token: Bearer token sent with every request, if any.
        user_id: ID of the signed-in user.
        request_timeout: Seconds before a request is abandoned.
        cache_dir: Directory for cached API responses.
        cache_ttl_hours: Cache time-to-live in hours.
        budget_cap: Budget applied to new drafts.
        log_level: Root logging level name.
    """

    api_base_url: str = DEFAULT_API_BASE_URL
    access_token: Optional[str] = None
    user_id: Optional[int] = None
    request_timeout: float = 30.0
    cache_dir: Path = DEFAULT_CACHE_DIR
    cache_ttl_hours: int = 1
    budget_cap: float = DEFAULT_BUDGET
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ).

        Raises:
            ValueError: If a numeric variable cannot be parsed.
        """
        env = os.environ if environ is None else environ

        user_id = env.get("FANTASY_USER_ID")
        return cls(
            api_base_url=env.get("FANTASY_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
            access_token=env.get("FANTASY_API_TOKEN") or None,
            user_id=_parse_number(int, "FANTASY_USER_ID", user_id) if user_id else None,
            request_timeout=_parse_number(
                float, "FANTASY_REQUEST_TIMEOUT", env.get("FANTASY_REQUEST_TIMEOUT", "30")
            ),
            cache_dir=Path(env.get("FANTASY_CACHE_DIR", str(DEFAULT_CACHE_DIR))),
            cache_ttl_hours=_parse_number(
                int, "FANTASY_CACHE_TTL_HOURS", env.get("FANTASY_CACHE_TTL_HOURS", "1")
            ),
            budget_cap=_parse_number(
                float, "FANTASY_BUDGET_CAP", env.get("FANTASY_BUDGET_CAP", str(DEFAULT_BUDGET))
            ),
            log_level=env.get("FANTASY_LOG_LEVEL", "INFO").upper(),
        )


def _parse_number(kind: type, name: str, value: str):
    try:
        return kind(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number, got {value!r}")


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging for the application."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
