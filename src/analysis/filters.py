"""Athlete search and filtering."""

import re
from dataclasses import dataclass
from typing import Any, Optional

from bs4 import BeautifulSoup

from ..models.athlete import Athlete, Position


# Sort keys accepted by the remote search endpoint that can also be applied locally
LOCAL_SORT_KEYS = {
    "cost": lambda a: a.cost,
    "name": lambda a: a.name.lower(),
}


def sanitize_search_query(query: Optional[str]) -> str:
    """
    Strip HTML from a search query and normalise whitespace.

    Args:
        query: Raw text typed by the user.

    Returns:
        Plain-text query, empty if nothing usable remains.
    """
    if not query:
        return ""
    text = BeautifulSoup(query, "html.parser").get_text()
    return re.sub(r"\s+", " ", text).strip()


@dataclass
class AthleteFilter:
    """
    Criteria for narrowing the athlete list.

    Attributes:
        search: Case-insensitive name fragment.
        position: Only athletes in this position.
        team_id: Only athletes from this team.
        min_cost: Lowest cost to include.
        max_cost: Highest cost to include.
        sort_by: Sort key (e.g. "cost", "name", "points").
        descending: Sort direction.
    """

    search: str = ""
    position: Optional[Position] = None
    team_id: Optional[int] = None
    min_cost: Optional[float] = None
    max_cost: Optional[float] = None
    sort_by: Optional[str] = None
    descending: bool = True

    @property
    def has_remote_criteria(self) -> bool:
        """Whether anything besides the name search is set."""
        return any(
            value is not None
            for value in (self.position, self.team_id, self.min_cost, self.max_cost, self.sort_by)
        )

    def to_search_dict(self) -> dict[str, Any]:
        """Body for the remote player search endpoint."""
        body: dict[str, Any] = {}
        if self.position is not None:
            body["position"] = int(self.position)
        if self.team_id is not None:
            body["teamId"] = self.team_id
        if self.min_cost is not None:
            body["minCost"] = self.min_cost
        if self.max_cost is not None:
            body["maxCost"] = self.max_cost
        if self.sort_by:
            body["sortBy"] = self.sort_by
            body["sortOrder"] = "desc" if self.descending else "asc"
        return body


def matches_search(athlete: Athlete, search: str) -> bool:
    query = sanitize_search_query(search).lower()
    return not query or query in athlete.name.lower()


def filter_athletes(athletes: list[Athlete], criteria: AthleteFilter) -> list[Athlete]:
    """
    Filter athletes locally.

    Args:
        athletes: Athletes to filter.
        criteria: Filter criteria.

    Returns:
        Matching athletes, sorted when a local sort key is given.
    """
    filtered = [a for a in athletes if matches_search(a, criteria.search)]

    if criteria.position is not None:
        filtered = [a for a in filtered if a.position == criteria.position]

    if criteria.team_id is not None:
        filtered = [a for a in filtered if a.team_id == criteria.team_id]

    if criteria.min_cost is not None:
        filtered = [a for a in filtered if a.cost >= criteria.min_cost]

    if criteria.max_cost is not None:
        filtered = [a for a in filtered if a.cost <= criteria.max_cost]

    sort_key = LOCAL_SORT_KEYS.get(criteria.sort_by or "")
    if sort_key is not None:
        filtered = sorted(filtered, key=sort_key, reverse=criteria.descending)

    return filtered


def extract_teams(athletes: list[Athlete]) -> list[tuple[int, str]]:
    """Unique (team_id, team_label) pairs sorted by label."""
    teams: dict[int, str] = {}
    for athlete in athletes:
        teams.setdefault(athlete.team_id, athlete.team_label)
    return sorted(teams.items(), key=lambda item: item[1])
