"""Gameweek lookups."""

from typing import Any

from ..models import Gameweek
from .base import ApiClient, ParseError


GAMEWEEKS_ENDPOINT = "/api/Gameweeks"


def parse_gameweek(data: dict[str, Any]) -> Gameweek:
    """
    Parse a gameweek from the API representation.

    Raises:
        ParseError: If a required field is missing or invalid.
    """
    if not isinstance(data, dict):
        raise ParseError("Expected a gameweek object")
    try:
        return Gameweek(
            id=int(data["id"]),
            start_time=str(data["startTime"]),
            end_time=data.get("endTime"),
            is_complete=bool(data.get("isComplete", False)),
            is_current=bool(data.get("isCurrent", False)),
        )
    except KeyError as e:
        raise ParseError(f"Gameweek missing field {e}")
    except (TypeError, ValueError) as e:
        raise ParseError(f"Invalid gameweek data: {e}")


class GameweekService:
    """Read-only access to gameweeks."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def get_current(self) -> Gameweek:
        return parse_gameweek(self.client.get(f"{GAMEWEEKS_ENDPOINT}/current"))

    def get_gameweek(self, gameweek_id: int) -> Gameweek:
        return parse_gameweek(self.client.get(f"{GAMEWEEKS_ENDPOINT}/{gameweek_id}"))

    def list_gameweeks(self, use_cache: bool = True) -> list[Gameweek]:
        """All gameweeks, ordered by id."""
        data = self.client.get(GAMEWEEKS_ENDPOINT, use_cache=use_cache)
        return sorted((parse_gameweek(item) for item in data or []), key=lambda g: g.id)
