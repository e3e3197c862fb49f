"""Tests for data models."""

import pytest

from src.models import (
    DEFAULT_BUDGET,
    POSITION_MINIMUMS,
    SQUAD_SIZE,
    Athlete,
    CommittedSquad,
    DraftSquad,
    Gameweek,
    Position,
    SquadEntry,
    SquadPayload,
)
from src.models.squad import check_position_minimums


def make_athlete(
    id: int,
    position: Position = Position.MIDFIELDER,
    cost: float = 5.0,
    team_id: int = 1,
) -> Athlete:
    """Helper to create test athletes."""
    return Athlete(
        id=id,
        name=f"Athlete {id}",
        position=position,
        cost=cost,
        team_id=team_id,
    )


class TestPosition:
    """Tests for Position enum."""

    def test_codes_match_remote_encoding(self) -> None:
        """Test position codes 1-4."""
        assert Position(1) == Position.GOALKEEPER
        assert Position(2) == Position.DEFENDER
        assert Position(3) == Position.MIDFIELDER
        assert Position(4) == Position.FORWARD

    def test_display_names(self) -> None:
        assert Position.GOALKEEPER.display_name == "Goalkeeper"
        assert Position.FORWARD.abbreviation == "FWD"

    def test_unknown_code_raises(self) -> None:
        with pytest.raises(ValueError):
            Position(5)


class TestAthlete:
    """Tests for Athlete model."""

    def test_create_athlete(self) -> None:
        """Test basic athlete creation."""
        athlete = Athlete(
            id=7,
            name="Marcus Hale",
            position=Position.GOALKEEPER,
            cost=4.5,
            team_id=1,
            team_name="Webster Gorloks",
        )
        assert athlete.name == "Marcus Hale"
        assert athlete.position == Position.GOALKEEPER
        assert athlete.team_label == "Webster Gorloks"

    def test_team_label_fallback(self) -> None:
        """Test team label when the name is unknown."""
        athlete = make_athlete(1, team_id=12)
        assert athlete.team_label == "Team 12"

    def test_negative_cost_raises(self) -> None:
        """Test that negative cost raises error."""
        with pytest.raises(ValueError, match="cost cannot be negative"):
            make_athlete(1, cost=-1.0)

    def test_athlete_is_immutable(self) -> None:
        athlete = make_athlete(1)
        with pytest.raises(AttributeError):
            athlete.cost = 10.0  # type: ignore[misc]


class TestGameConstants:
    """Tests for the game rule constants."""

    def test_position_minimums_fill_squad(self) -> None:
        """The minimums must add up to exactly the squad size."""
        assert sum(POSITION_MINIMUMS.values()) == SQUAD_SIZE

    def test_mismatched_minimums_raise(self) -> None:
        minimums = dict(POSITION_MINIMUMS)
        minimums[Position.FORWARD] = 4
        with pytest.raises(ValueError, match="add up to 16, squad size is 15"):
            check_position_minimums(minimums, SQUAD_SIZE)

    def test_matching_minimums_pass(self) -> None:
        check_position_minimums(POSITION_MINIMUMS, SQUAD_SIZE)


class TestDraftSquad:
    """Tests for DraftSquad model."""

    def test_empty_draft(self) -> None:
        """Test empty draft defaults."""
        draft = DraftSquad(gameweek_id=3)
        assert draft.budget_cap == DEFAULT_BUDGET
        assert draft.squad_size == 0
        assert draft.total_cost == 0
        assert draft.budget_remaining == DEFAULT_BUDGET
        assert draft.captain_id is None

    def test_total_cost_hides_float_noise(self) -> None:
        """Test that summing tenths gives a clean total."""
        athletes = [make_athlete(i, cost=0.1) for i in range(1, 4)]
        draft = DraftSquad(gameweek_id=1, athletes=athletes)
        assert draft.total_cost == 0.3

    def test_counts(self) -> None:
        """Test team and position counts."""
        draft = DraftSquad(
            gameweek_id=1,
            athletes=[
                make_athlete(1, Position.GOALKEEPER, team_id=1),
                make_athlete(2, Position.DEFENDER, team_id=1),
                make_athlete(3, Position.DEFENDER, team_id=2),
            ],
        )
        assert draft.team_counts == {1: 2, 2: 1}
        assert draft.position_counts[Position.DEFENDER] == 2
        assert draft.position_counts[Position.FORWARD] == 0

    def test_starters_and_bench(self) -> None:
        """Test starters keep promotion order and the rest are bench."""
        athletes = [make_athlete(i) for i in range(1, 5)]
        draft = DraftSquad(gameweek_id=1, athletes=athletes, starter_ids=[3, 1])
        assert [a.id for a in draft.starters] == [3, 1]
        assert [a.id for a in draft.bench] == [2, 4]
        assert draft.is_starter(3) is True
        assert draft.is_starter(2) is False

    def test_get_athlete(self) -> None:
        draft = DraftSquad(gameweek_id=1, athletes=[make_athlete(1)])
        assert draft.get_athlete(1) is not None
        assert draft.get_athlete(99) is None


class TestSquadPayload:
    """Tests for the squad wire format."""

    def test_from_draft(self) -> None:
        """Test serializing a draft."""
        draft = DraftSquad(
            gameweek_id=4,
            athletes=[make_athlete(1), make_athlete(2)],
            starter_ids=[2],
            captain_id=2,
        )
        payload = SquadPayload.from_draft(draft)
        assert payload.gameweek_id == 4
        assert payload.player_ids == (1, 2)
        assert payload.starter_ids == (2,)
        assert payload.captain_id == 2
        assert payload.vice_captain_id is None

    def test_to_dict_uses_api_keys(self) -> None:
        """Test camelCase keys."""
        payload = SquadPayload(
            gameweek_id=2,
            player_ids=(1, 2, 3),
            starter_ids=(1, 2),
            captain_id=1,
            vice_captain_id=2,
        )
        assert payload.to_dict() == {
            "gameweekId": 2,
            "playerIds": [1, 2, 3],
            "starterIds": [1, 2],
            "captainId": 1,
            "viceCaptainId": 2,
        }

    def test_from_dict(self) -> None:
        """Test parsing the API representation."""
        payload = SquadPayload.from_dict(
            {
                "gameweekId": "5",
                "playerIds": [10, 11],
                "starterIds": [10],
                "captainId": 10,
                "viceCaptainId": None,
            }
        )
        assert payload.gameweek_id == 5
        assert payload.player_ids == (10, 11)
        assert payload.vice_captain_id is None

    def test_from_dict_missing_gameweek_raises(self) -> None:
        with pytest.raises(ValueError, match="gameweekId"):
            SquadPayload.from_dict({"playerIds": []})

    def test_from_dict_bad_ids_raise(self) -> None:
        with pytest.raises(ValueError, match="Invalid squad payload"):
            SquadPayload.from_dict({"gameweekId": 1, "playerIds": ["abc"]})

    def test_from_dict_bad_role_ids_raise(self) -> None:
        """Test role ids that are not integers raise ValueError, not TypeError."""
        with pytest.raises(ValueError, match="Invalid squad payload"):
            SquadPayload.from_dict({"gameweekId": 1, "captainId": {}})
        with pytest.raises(ValueError, match="Invalid squad payload"):
            SquadPayload.from_dict({"gameweekId": 1, "viceCaptainId": [2]})


class TestCommittedSquad:
    """Tests for CommittedSquad model."""

    def test_to_payload_uses_entry_flags(self) -> None:
        """Test that role flags on entries take precedence."""
        squad = CommittedSquad(
            id=9,
            user_id=1,
            gameweek_id=3,
            entries=[
                SquadEntry(player_id=1, is_starter=True, is_captain=True),
                SquadEntry(player_id=2, is_starter=True, is_vice=True),
                SquadEntry(player_id=3),
            ],
            captain_id=2,
            vice_captain_id=1,
        )
        payload = squad.to_payload()
        assert payload.player_ids == (1, 2, 3)
        assert payload.starter_ids == (1, 2)
        assert payload.captain_id == 1
        assert payload.vice_captain_id == 2

    def test_to_payload_falls_back_to_squad_roles(self) -> None:
        """Test top-level role ids are used when no entry is flagged."""
        squad = CommittedSquad(
            id=9,
            user_id=1,
            gameweek_id=3,
            entries=[
                SquadEntry(player_id=1, is_starter=True),
                SquadEntry(player_id=2, is_starter=True),
            ],
            captain_id=2,
            vice_captain_id=1,
        )
        payload = squad.to_payload()
        assert payload.captain_id == 2
        assert payload.vice_captain_id == 1


class TestGameweek:
    """Tests for Gameweek model."""

    def test_name(self) -> None:
        gameweek = Gameweek(id=3, start_time="2026-09-05T12:00:00Z")
        assert gameweek.name == "Gameweek 3"
        assert gameweek.is_current is False

    def test_invalid_id_raises(self) -> None:
        with pytest.raises(ValueError, match="gameweek id must be positive"):
            Gameweek(id=0, start_time="2026-09-05T12:00:00Z")
