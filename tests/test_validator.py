"""Tests for squad validation utilities."""

import pytest

from src.analysis.validator import (
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
from src.models import Athlete, DraftSquad, Position


def make_athlete(
    id: int,
    position: Position = Position.MIDFIELDER,
    cost: float = 6.0,
    team_id: int = None,
    team_name: str = None,
) -> Athlete:
    """Helper to create test athletes; each gets its own team by default."""
    return Athlete(
        id=id,
        name=f"Athlete {id}",
        position=position,
        cost=cost,
        team_id=id if team_id is None else team_id,
        team_name=team_name,
    )


SQUAD_LAYOUT = (
    [Position.GOALKEEPER] * 2
    + [Position.DEFENDER] * 5
    + [Position.MIDFIELDER] * 5
    + [Position.FORWARD] * 3
)


def make_valid_athletes(cost: float = 6.0) -> list[Athlete]:
    """Create 15 athletes split 2/5/5/3, all from different teams."""
    return [
        make_athlete(i + 1, position=position, cost=cost)
        for i, position in enumerate(SQUAD_LAYOUT)
    ]


def starters_of(athletes: list[Athlete]) -> list[int]:
    return [a.id for a in athletes[:11]]


def make_valid_draft() -> DraftSquad:
    athletes = make_valid_athletes()
    return DraftSquad(
        gameweek_id=1,
        athletes=athletes,
        starter_ids=starters_of(athletes),
        captain_id=1,
        vice_captain_id=3,
    )


class TestValidateSquad:
    """Tests for validate_squad function."""

    def test_valid_squad(self) -> None:
        """Test a 2/5/5/3 squad under budget with 11 starters."""
        athletes = make_valid_athletes()
        result = validate_squad(athletes, starters_of(athletes), 100)

        assert result.is_valid is True
        assert result.errors == []

    def test_exactly_at_budget_is_valid(self) -> None:
        """Test that spending the whole budget is allowed."""
        athletes = make_valid_athletes(cost=7.0)
        athletes = athletes[:10] + [
            make_athlete(a.id, position=a.position, cost=6.0) for a in athletes[10:]
        ]
        result = validate_squad(athletes, starters_of(athletes), 100)

        assert result.is_valid is True

    def test_fourteen_athletes(self) -> None:
        """Test that a short squad names the actual count."""
        athletes = make_valid_athletes()[:14]
        result = validate_squad(athletes, starters_of(athletes))

        assert result.is_valid is False
        size_errors = [e for e in result.errors if e.code == "SQUAD_SIZE"]
        assert len(size_errors) == 1
        assert "15" in size_errors[0].message
        assert "(you have 14)" in size_errors[0].message

    def test_sixteen_athletes(self) -> None:
        """Test that the size check is exact, not a maximum."""
        athletes = make_valid_athletes() + [make_athlete(16)]
        result = validate_squad(athletes, starters_of(athletes))

        assert "SQUAD_SIZE" in result.codes

    def test_starter_count(self) -> None:
        """Test that fewer than 11 starters is reported."""
        athletes = make_valid_athletes()
        result = validate_squad(athletes, starters_of(athletes)[:10])

        assert result.codes == ["STARTER_COUNT"]
        assert "(you have 10)" in result.messages[0]

    def test_unknown_starter(self) -> None:
        """Test starters that are not in the squad."""
        athletes = make_valid_athletes()
        starter_ids = starters_of(athletes)[:10] + [99]
        result = validate_squad(athletes, starter_ids)

        assert result.codes == ["UNKNOWN_STARTER"]
        assert "99" in result.messages[0]

    def test_over_budget_scenario(self) -> None:
        """Test 101.2 against a cap of 100 gives exactly one violation."""
        athletes = make_valid_athletes(cost=6.8)
        athletes[-1] = make_athlete(15, position=Position.FORWARD, cost=6.0)
        result = validate_squad(athletes, starters_of(athletes), 100)

        assert result.is_valid is False
        assert len(result.errors) == 1
        assert result.errors[0].code == "OVER_BUDGET"
        assert "101.2" in result.errors[0].message
        assert "100" in result.errors[0].message

    def test_position_minimum(self) -> None:
        """Test one violation per position below its minimum."""
        athletes = make_valid_athletes()
        # Swap a defender for a third goalkeeper
        athletes[2] = make_athlete(3, position=Position.GOALKEEPER)
        result = validate_squad(athletes, starters_of(athletes))

        assert result.codes == ["POSITION_MINIMUM"]
        assert result.messages[0] == "Must have at least 5 defenders (you have 4)"

    def test_quotas_count_bench(self) -> None:
        """Test that quotas cover all 15, not just starters."""
        athletes = make_valid_athletes()
        # Starters exclude both goalkeepers
        starter_ids = [a.id for a in athletes[2:13]]
        result = validate_squad(athletes, starter_ids)

        assert result.is_valid is True

    def test_team_limit(self) -> None:
        """Test that four athletes from one team names the team."""
        athletes = make_valid_athletes()
        for i in range(4):
            a = athletes[i]
            athletes[i] = make_athlete(
                a.id, position=a.position, team_id=50, team_name="Webster Gorloks"
            )
        result = validate_squad(athletes, starters_of(athletes))

        assert result.codes == ["TEAM_LIMIT"]
        assert "Webster Gorloks" in result.messages[0]
        assert "(you have 4)" in result.messages[0]

    def test_team_limit_without_name(self) -> None:
        """Test team label fallback in the team limit message."""
        athletes = make_valid_athletes()
        for i in range(4):
            a = athletes[i]
            athletes[i] = make_athlete(a.id, position=a.position, team_id=50)
        result = validate_squad(athletes, starters_of(athletes))

        assert "Team 50" in result.messages[0]

    def test_three_from_one_team_is_allowed(self) -> None:
        athletes = make_valid_athletes()
        for i in range(3):
            a = athletes[i]
            athletes[i] = make_athlete(a.id, position=a.position, team_id=50)
        result = validate_squad(athletes, starters_of(athletes))

        assert result.is_valid is True

    def test_reports_every_violation(self) -> None:
        """Test that checks do not stop at the first failure."""
        result = validate_squad([], [])

        assert result.codes == [
            "SQUAD_SIZE",
            "STARTER_COUNT",
            "POSITION_MINIMUM",
            "POSITION_MINIMUM",
            "POSITION_MINIMUM",
            "POSITION_MINIMUM",
        ]

    def test_idempotent(self) -> None:
        """Test that validating twice gives the same result and mutates nothing."""
        athletes = make_valid_athletes()[:13]
        starter_ids = starters_of(athletes)
        before = (list(athletes), list(starter_ids))

        first = validate_squad(athletes, starter_ids)
        second = validate_squad(athletes, starter_ids)

        assert first == second
        assert (athletes, starter_ids) == before


class TestValidateRoles:
    """Tests for validate_roles function."""

    def test_valid_roles(self) -> None:
        result = validate_roles([1, 2, 3], captain_id=1, vice_captain_id=2)
        assert result.is_valid is True

    def test_missing_roles(self) -> None:
        """Test that both roles are required."""
        result = validate_roles([1, 2, 3], captain_id=None, vice_captain_id=None)
        assert result.codes == ["MISSING_CAPTAIN", "MISSING_VICE_CAPTAIN"]

    def test_roles_must_be_starters(self) -> None:
        result = validate_roles([1, 2], captain_id=5, vice_captain_id=6)
        assert result.codes == ["CAPTAIN_NOT_STARTER", "VICE_CAPTAIN_NOT_STARTER"]

    def test_captain_cannot_be_vice(self) -> None:
        result = validate_roles([1, 2], captain_id=1, vice_captain_id=1)
        assert result.codes == ["CAPTAIN_IS_VICE"]


class TestValidateDraft:
    """Tests for validate_draft function."""

    def test_valid_draft(self) -> None:
        result = validate_draft(make_valid_draft())
        assert isinstance(result, ValidationResult)
        assert result.is_valid is True

    def test_missing_captain_fails(self) -> None:
        """Test that an incomplete role assignment is an error, not a warning."""
        draft = make_valid_draft()
        draft.captain_id = None
        result = validate_draft(draft)

        assert result.is_valid is False
        assert result.codes == ["MISSING_CAPTAIN"]

    def test_composition_errors_come_first(self) -> None:
        draft = DraftSquad(gameweek_id=1)
        result = validate_draft(draft)

        assert result.codes[0] == "SQUAD_SIZE"
        assert result.codes[-2:] == ["MISSING_CAPTAIN", "MISSING_VICE_CAPTAIN"]

    def test_uses_draft_budget(self) -> None:
        draft = make_valid_draft()
        draft.budget_cap = 80
        result = validate_draft(draft)

        assert result.codes == ["OVER_BUDGET"]
        assert "£80m" in result.messages[0]


class TestHelpers:
    """Tests for display and slot helpers."""

    @pytest.mark.parametrize(
        "code,name,abbr",
        [
            (1, "Goalkeeper", "GK"),
            (2, "Defender", "DEF"),
            (3, "Midfielder", "MID"),
            (4, "Forward", "FWD"),
            (7, "Unknown", "?"),
        ],
    )
    def test_position_labels(self, code: int, name: str, abbr: str) -> None:
        assert get_position_name(code) == name
        assert get_position_abbr(code) == abbr

    def test_slots_remaining(self) -> None:
        athletes = make_valid_athletes()[:10]
        draft = DraftSquad(gameweek_id=1, athletes=athletes, starter_ids=[1, 2, 3])

        assert get_squad_slots_remaining(draft) == 5
        assert get_starter_slots_remaining(draft) == 8

    def test_available_slots_for_team(self) -> None:
        athletes = [make_athlete(i, team_id=7) for i in range(1, 3)]
        draft = DraftSquad(gameweek_id=1, athletes=athletes)

        assert get_available_slots_for_team(draft, 7) == 1
        assert get_available_slots_for_team(draft, 8) == 3

    def test_position_shortfall(self) -> None:
        athletes = make_valid_athletes()[:4]  # 2 GK, 2 DEF
        draft = DraftSquad(gameweek_id=1, athletes=athletes)

        assert get_position_shortfall(draft) == {
            Position.GOALKEEPER: 0,
            Position.DEFENDER: 3,
            Position.MIDFIELDER: 5,
            Position.FORWARD: 3,
        }
