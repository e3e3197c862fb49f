"""Catalog provider: the athletes available for selection."""

import logging
from typing import Any

from ..analysis.filters import AthleteFilter, matches_search
from ..models import Athlete, Position
from .base import ApiClient, ParseError


logger = logging.getLogger(__name__)

PLAYERS_ENDPOINT = "/api/Players"


def parse_position(code: Any) -> Position:
    """
    Parse a remote position code to Position enum.

    Args:
        code: Position code (1=GK, 2=DEF, 3=MID, 4=FWD).

    Returns:
        Position enum value.

    Raises:
        ParseError: If the code is not a known position.
    """
    try:
        return Position(int(code))
    except (TypeError, ValueError):
        raise ParseError(f"Unknown position: {code!r}")


def parse_athlete(data: dict[str, Any]) -> Athlete:
    """
    Parse one athlete from the API representation.

    Args:
        data: Player object as returned by the API.

    Returns:
        Athlete instance.

    Raises:
        ParseError: If a required field is missing or invalid.
    """
    try:
        athlete_id = int(data["id"])
        team_id = int(data["teamId"])
        cost = float(data["cost"])
    except KeyError as e:
        raise ParseError(f"Player missing field {e}")
    except (TypeError, ValueError) as e:
        raise ParseError(f"Invalid player data: {e}")

    try:
        return Athlete(
            id=athlete_id,
            name=data.get("name") or f"Player {athlete_id}",
            position=parse_position(data.get("position")),
            cost=cost,
            team_id=team_id,
            team_name=data.get("teamName") or None,
        )
    except ValueError as e:
        raise ParseError(f"Invalid player {athlete_id}: {e}")


def _parse_list(data: Any) -> list[Athlete]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise ParseError("Expected a list of players")
    return [parse_athlete(item) for item in data]


class CatalogProvider:
    """
    Read-only source of selectable athletes.

    The full list is treated as complete; there is no pagination.
    """

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def list_athletes(self, use_cache: bool = True) -> list[Athlete]:
        """
        Fetch every athlete.

        Args:
            use_cache: Whether to use a cached response if available.

        Raises:
            ServiceError: If the request or parsing fails.
        """
        athletes = _parse_list(self.client.get(PLAYERS_ENDPOINT, use_cache=use_cache))
        logger.info("Loaded %d athletes", len(athletes))
        return athletes

    def catalog_by_id(self, use_cache: bool = True) -> dict[int, Athlete]:
        """Every athlete keyed by id."""
        return {a.id: a for a in self.list_athletes(use_cache=use_cache)}

    def get_athlete(self, athlete_id: int) -> Athlete:
        return parse_athlete(self.client.get(f"{PLAYERS_ENDPOINT}/{athlete_id}"))

    def search_athletes(self, criteria: AthleteFilter) -> list[Athlete]:
        """
        Search athletes on the server, then apply the name search locally.

        Args:
            criteria: Filter criteria.

        Returns:
            Matching athletes in the order the server returned them.
        """
        data = self.client.post(f"{PLAYERS_ENDPOINT}/search", criteria.to_search_dict())
        return [a for a in _parse_list(data) if matches_search(a, criteria.search)]


SAMPLE_TEAMS = {
    1: "Webster Gorloks",
    2: "Greenville Panthers",
    3: "Fontbonne Griffins",
    4: "Spalding Golden Eagles",
    5: "Westminster Blue Jays",
    6: "Eureka Red Devils",
    7: "Principia Panthers",
    8: "Blackburn Beavers",
}

# (id, name, position, cost, team_id); three athletes per team
SAMPLE_ATHLETES = [
    (1, "Marcus Hale", Position.GOALKEEPER, 4.5, 1),
    (2, "Diego Ortiz", Position.GOALKEEPER, 5.0, 2),
    (3, "Sam Kowalski", Position.GOALKEEPER, 5.5, 3),
    (4, "Tyler Brooks", Position.DEFENDER, 4.5, 4),
    (5, "Jonah Reyes", Position.DEFENDER, 5.0, 5),
    (6, "Eli Novak", Position.DEFENDER, 5.0, 6),
    (7, "Caleb Price", Position.DEFENDER, 5.5, 7),
    (8, "Owen Fletcher", Position.DEFENDER, 6.0, 8),
    (9, "Nate Alvarez", Position.DEFENDER, 6.5, 1),
    (10, "Luke Harmon", Position.DEFENDER, 7.0, 2),
    (11, "Ben Whitaker", Position.MIDFIELDER, 5.0, 3),
    (12, "Adrian Cole", Position.MIDFIELDER, 5.5, 4),
    (13, "Isaac Moreno", Position.MIDFIELDER, 6.5, 5),
    (14, "Gavin Shaw", Position.MIDFIELDER, 7.5, 6),
    (15, "Miles Dunn", Position.MIDFIELDER, 8.0, 7),
    (16, "Ryan O'Neill", Position.MIDFIELDER, 9.0, 8),
    (17, "Carlos Vega", Position.MIDFIELDER, 10.0, 1),
    (18, "Theo Grant", Position.MIDFIELDER, 11.5, 2),
    (19, "Jack Palmer", Position.FORWARD, 6.0, 3),
    (20, "Andre Simmons", Position.FORWARD, 7.5, 4),
    (21, "Kofi Mensah", Position.FORWARD, 8.5, 5),
    (22, "Liam Becker", Position.FORWARD, 9.5, 6),
    (23, "Mateo Rossi", Position.FORWARD, 10.5, 7),
    (24, "Dylan Foster", Position.FORWARD, 12.0, 8),
]


def create_sample_athletes() -> list[Athlete]:
    """
    Create a sample catalog for offline use and testing.

    Returns:
        Athletes covering every position, enough for a legal squad.
    """
    return [
        Athlete(
            id=athlete_id,
            name=name,
            position=position,
            cost=cost,
            team_id=team_id,
            team_name=SAMPLE_TEAMS[team_id],
        )
        for athlete_id, name, position, cost, team_id in SAMPLE_ATHLETES
    ]
