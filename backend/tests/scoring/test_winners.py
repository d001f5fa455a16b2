import os, sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))
from foursome.models import HoleRecord, TeamRound
from foursome.sample_data import sample_rounds
from foursome.scoring.winners import (
    TieBreak,
    adjusted_totals,
    compute_winners,
    decide_winners,
    resolve_tie_break,
)


def _card(team_id, strokes):
    return TeamRound(
        teamId=team_id,
        teamName=team_id,
        holes=tuple(
            HoleRecord(holeNumber=i, par=4, strokes=s) for i, s in enumerate(strokes, start=1)
        ),
    )


def test_raw_totals_of_sample_event():
    totals = {c.teamId: c.rawTotal for c in adjusted_totals(sample_rounds())}
    assert totals == {"team1": 83, "team2": 78, "team3": 78, "team4": 79}


def test_tied_sample_event_returns_both_teams():
    winners = compute_winners(sample_rounds())
    assert [w.teamId for w in winners] == ["team2", "team3"]
    assert all(w.adjustedTotal == 78 for w in winners)


def test_handicap_changes_the_winner():
    winners = compute_winners(sample_rounds(), {"team1": 6})
    assert [(w.teamId, w.adjustedTotal) for w in winners] == [("team1", 77)]
    assert winners[0].handicap == 6


def test_missing_handicaps_count_as_zero():
    winners = compute_winners(sample_rounds(), {"team4": 1.5})
    assert [(w.teamId, w.adjustedTotal) for w in winners] == [("team4", 77.5)]


def test_co_winners_are_listed_highest_handicap_first():
    winners = compute_winners(sample_rounds(), {"team1": 5})
    assert [w.teamId for w in winners] == ["team1", "team2", "team3"]


def test_no_teams_or_no_holes_gives_no_winner():
    assert compute_winners([]) == []
    assert compute_winners([_card("a", [])]) == []


def test_teams_without_holes_are_not_candidates():
    winners = compute_winners([_card("a", []), _card("b", [5, 5])])
    assert [w.teamId for w in winners] == ["b"]
    assert winners[0].holesPlayed == 2


def test_higher_handicap_breaks_the_tie():
    co_winners = compute_winners(sample_rounds(), {"team1": 5})
    champions = resolve_tie_break(co_winners, TieBreak.HIGHER_HANDICAP)
    assert [c.teamId for c in champions] == ["team1"]
    assert resolve_tie_break(co_winners, TieBreak.NONE) == co_winners


def test_equal_handicaps_stay_tied():
    result = decide_winners(sample_rounds(), {"team2": 2, "team3": 2})
    assert result.is_tie
    assert [c.teamId for c in result.champions] == ["team2", "team3"]
    assert result.tieBreak == "higher_handicap"


def test_decide_winners_single_winner():
    result = decide_winners(sample_rounds(), {"team2": 1}, TieBreak.NONE)
    assert not result.is_tie
    assert [c.teamId for c in result.coWinners] == ["team2"]
    assert result.champions == result.coWinners
    assert result.tieBreak == "none"


def test_first_duplicate_card_is_the_one_scored():
    winners = compute_winners([_card("a", [4, 4]), _card("a", [3, 3]), _card("b", [4, 3])])
    assert [(w.teamId, w.rawTotal) for w in winners] == [("b", 7)]


def test_handicap_decides_between_equal_raw_totals():
    rounds = [_card("a", [4] * 18), _card("b", [4] * 18)]
    winners = compute_winners(rounds, {"a": 0, "b": 5})
    assert [(w.teamId, w.rawTotal, w.adjustedTotal) for w in winners] == [("b", 72, 67)]


def test_three_way_tie():
    rounds = [_card(t, [4] * 17) for t in ("a", "b", "c")]
    winners = compute_winners(rounds)
    assert [w.adjustedTotal for w in winners] == [68, 68, 68]
    assert [w.teamId for w in winners] == ["a", "b", "c"]
