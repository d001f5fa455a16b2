import os, sys
import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from foursome.services.validation import (
    ValidationError,
    validate_event,
    validate_handicaps,
    validate_hole,
    validate_team,
    validate_team_round,
)


def test_accepts_hole_aliases() -> None:
    hole = validate_hole({"hole": 3, "par": 4, "score": 5})
    assert (hole.holeNumber, hole.par, hole.strokes) == (3, 4, 5)
    assert validate_hole({"holeNumber": 1, "par": 3, "strokes": 3.0}).strokes == 3


@pytest.mark.parametrize(
    "raw, msg",
    [
        ("4", "must be an object"),
        ({"holeNumber": 1, "par": 4}, "must include"),
        ({"holeNumber": 0, "par": 4, "strokes": 4}, "between 1 and 18"),
        ({"holeNumber": 19, "par": 4, "strokes": 4}, "between 1 and 18"),
        ({"holeNumber": 1, "par": 6, "strokes": 4}, "par must be 3, 4 or 5"),
        ({"holeNumber": 1, "par": 4, "strokes": 0}, ">= 1"),
        ({"holeNumber": 1, "par": 4, "strokes": True}, "boolean"),
        ({"holeNumber": 1, "par": 4, "strokes": "x"}, "integer"),
        ({"holeNumber": 1, "par": 4, "strokes": 4.5}, "integer"),
    ],
    ids=[
        "not-an-object",
        "missing-strokes",
        "hole-zero",
        "hole-nineteen",
        "bad-par",
        "zero-strokes",
        "boolean",
        "non-integer",
        "fractional",
    ],
)
def test_rejects_invalid_holes(raw, msg) -> None:
    with pytest.raises(ValidationError) as exc:
        validate_hole(raw)
    assert msg.lower() in str(exc.value).lower()


def test_round_holes_are_sorted() -> None:
    team_round = validate_team_round(
        {
            "teamId": "a",
            "holes": [
                {"holeNumber": 2, "par": 3, "strokes": 3},
                {"holeNumber": 1, "par": 4, "strokes": 5},
            ],
        },
        team_names={"a": "Alpha"},
    )
    assert team_round.teamName == "Alpha"
    assert [h.holeNumber for h in team_round.holes] == [1, 2]


def test_round_rejects_repeated_hole() -> None:
    hole = {"holeNumber": 1, "par": 4, "strokes": 4}
    with pytest.raises(ValidationError, match="more than once"):
        validate_team_round({"teamId": "a", "holes": [hole, hole]})


def test_round_rejects_more_than_eighteen_holes() -> None:
    holes = [{"holeNumber": (i % 18) + 1, "par": 4, "strokes": 4} for i in range(19)]
    with pytest.raises(ValidationError, match="at most 18"):
        validate_team_round({"teamId": "a", "holes": holes})


def test_team_players_can_be_names() -> None:
    team = validate_team({"id": "a", "name": "Alpha", "players": ["Kim", {"id": "p9", "name": "Lee"}]})
    assert [(p.id, p.name) for p in team.players] == [("a-p1", "Kim"), ("p9", "Lee")]


def test_event_rejects_duplicate_team_ids() -> None:
    with pytest.raises(ValidationError, match="more than once"):
        validate_event([{"id": "a", "name": "A"}, {"id": "a", "name": "B"}], [])


def test_event_adds_teams_only_seen_in_rounds() -> None:
    teams, rounds = validate_event(
        [{"id": "a", "name": "A"}],
        [{"teamId": "b", "teamName": "B", "holes": []}],
    )
    assert [t.id for t in teams] == ["a", "b"]
    assert rounds[0].holes == ()


def test_handicaps() -> None:
    assert validate_handicaps(None) == {}
    assert validate_handicaps({"a": 3.0, "b": 1.5, "c": None}) == {"a": 3, "b": 1.5}
    for bad in ({"a": True}, {"a": "x"}, {"a": float("inf")}, ["a"]):
        with pytest.raises(ValidationError):
            validate_handicaps(bad)
