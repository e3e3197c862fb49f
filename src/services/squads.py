"""Persistence gateway for committed squads."""

import logging
from typing import Any, Optional

from ..models import CommittedSquad, SquadEntry, SquadPayload
from .base import ApiClient, NotFoundError, ParseError


logger = logging.getLogger(__name__)

SQUADS_ENDPOINT = "/api/Squads"


def parse_committed_squad(data: dict[str, Any]) -> CommittedSquad:
    """
    Parse a squad from the API representation.

    Args:
        data: Squad object as returned by the API.

    Returns:
        CommittedSquad instance.

    Raises:
        ParseError: If a required field is missing or invalid.
    """
    if not isinstance(data, dict):
        raise ParseError("Expected a squad object")
    try:
        entries = [
            SquadEntry(
                player_id=int(item["playerId"]),
                is_starter=bool(item.get("isStarter", False)),
                is_captain=bool(item.get("isCaptain", False)),
                is_vice=bool(item.get("isVice", False)),
            )
            for item in data.get("players") or []
        ]
        return CommittedSquad(
            id=int(data["id"]),
            user_id=int(data["userId"]),
            gameweek_id=int(data["gameweekId"]),
            entries=entries,
            captain_id=_optional_int(data.get("captainId")),
            vice_captain_id=_optional_int(data.get("viceCaptainId")),
            total_cost=_optional_float(data.get("totalCost")),
            total_points=_optional_float(data.get("totalPoints")),
        )
    except KeyError as e:
        raise ParseError(f"Squad missing field {e}")
    except (TypeError, ValueError) as e:
        raise ParseError(f"Invalid squad data: {e}")


def parse_payload(data: Any) -> SquadPayload:
    """
    Parse id lists (e.g. a random candidate) from the API representation.

    Raises:
        ParseError: If the payload is malformed.
    """
    if not isinstance(data, dict):
        raise ParseError("Expected a squad payload object")
    try:
        return SquadPayload.from_dict(data)
    except ValueError as e:
        raise ParseError(str(e))


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


def _optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


class SquadGateway:
    """
    Create, read, update and delete committed squads.

    Saves are blind overwrites: there is no version check, so the last
    writer for a user and gameweek wins.
    """

    def __init__(self, client: ApiClient) -> None:
        self.client = client

    def fetch_squad(self, user_id: int, gameweek_id: int) -> Optional[CommittedSquad]:
        """
        Fetch the user's squad for a gameweek.

        Returns:
            The committed squad, or None if the user has not saved one.

        Raises:
            ServiceError: For any failure other than "not found".
        """
        try:
            data = self.client.get(f"{SQUADS_ENDPOINT}/user/{user_id}/gameweek/{gameweek_id}")
        except NotFoundError:
            logger.debug("No squad for user %s gameweek %s", user_id, gameweek_id)
            return None
        if data is None:
            return None
        return parse_committed_squad(data)

    def list_user_squads(self, user_id: int) -> list[CommittedSquad]:
        data = self.client.get(f"{SQUADS_ENDPOINT}/user/{user_id}")
        return [parse_committed_squad(item) for item in data or []]

    def get_squad(self, squad_id: int) -> CommittedSquad:
        return parse_committed_squad(self.client.get(f"{SQUADS_ENDPOINT}/{squad_id}"))

    def create_squad(self, user_id: int, payload: SquadPayload) -> CommittedSquad:
        """Create a squad for the user."""
        logger.info("Creating squad for user %s gameweek %s", user_id, payload.gameweek_id)
        data = self.client.post(f"{SQUADS_ENDPOINT}/user/{user_id}", payload.to_dict())
        return parse_committed_squad(data)

    def update_squad(self, squad_id: int, payload: SquadPayload) -> CommittedSquad:
        """Overwrite an existing squad."""
        logger.info("Updating squad %s for gameweek %s", squad_id, payload.gameweek_id)
        data = self.client.put(f"{SQUADS_ENDPOINT}/{squad_id}", payload.to_dict())
        return parse_committed_squad(data)

    def delete_squad(self, squad_id: int) -> None:
        self.client.delete(f"{SQUADS_ENDPOINT}/{squad_id}")

    def generate_random_candidate(self, user_id: int, gameweek_id: int) -> SquadPayload:
        """
        Ask the server for a randomly generated squad.

        The candidate is only id lists; it still has to be resolved against
        the catalog and validated before it can be trusted.
        """
        data = self.client.post(
            f"{SQUADS_ENDPOINT}/user/{user_id}/random/gameweek/{gameweek_id}", {}
        )
        return parse_payload(data)
