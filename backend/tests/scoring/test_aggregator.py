import os, sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))
from foursome.models import HoleRecord, Team, TeamRound
from foursome.scoring.aggregator import (
    aggregate,
    canonical_rounds,
    counts_for_category,
    tally_round,
)
from foursome.scoring.classifier import AWARD_CATEGORIES, Category


def _card(team_id, strokes, pars=None, name=None):
    pars = pars or [4] * len(strokes)
    return TeamRound(
        teamId=team_id,
        teamName=name or team_id,
        holes=tuple(
            HoleRecord(holeNumber=i, par=p, strokes=s)
            for i, (p, s) in enumerate(zip(pars, strokes), start=1)
        ),
    )


def _counts(aggregated, team_id):
    return {c.category: c.count for c in aggregated[team_id]}


def test_tally_counts_each_category():
    card = _card("a", [2, 3, 4, 4, 5, 8, 6])
    counts = tally_round(card)
    assert counts == {
        Category.EAGLE: 1,
        Category.BIRDIE: 1,
        Category.PAR: 2,
        Category.BOGEY: 1,
        Category.DOUBLE_PAR: 1,
    }


def test_tally_of_missing_card_is_all_zero():
    assert tally_round(None) == {category: 0 for category in AWARD_CATEGORIES}


def test_aggregate_gives_roster_teams_explicit_zeros():
    roster = [Team(id="a", name="A"), Team(id="b", name="B")]
    result = aggregate([_card("a", [3, 4])], roster)
    assert list(result) == ["a", "b"]
    assert _counts(result, "b") == {category: 0 for category in AWARD_CATEGORIES}
    assert [c.category for c in result["a"]] == list(AWARD_CATEGORIES)
    assert result["a"][0].teamName == "A"


def test_aggregate_adds_teams_only_seen_in_rounds():
    result = aggregate([_card("x", [4])], [Team(id="a", name="A")])
    assert list(result) == ["a", "x"]
    assert _counts(result, "x")[Category.PAR] == 1


def test_duplicate_cards_keep_the_first():
    first = _card("a", [3, 3])
    second = _card("a", [4, 4])
    rounds = canonical_rounds([first, second])
    assert rounds["a"] is not second
    result = aggregate([first, second])
    assert _counts(result, "a")[Category.BIRDIE] == 2
    assert _counts(result, "a")[Category.PAR] == 0


def test_duplicate_hole_numbers_keep_the_first():
    card = TeamRound(
        teamId="a",
        teamName="A",
        holes=(
            HoleRecord(holeNumber=1, par=4, strokes=3),
            HoleRecord(holeNumber=1, par=4, strokes=4),
        ),
    )
    assert tally_round(canonical_rounds([card])["a"])[Category.BIRDIE] == 1
    assert _counts(aggregate([card]), "a")[Category.PAR] == 0


def test_counts_for_category_picks_one_category():
    result = aggregate([_card("a", [3]), _card("b", [4])])
    birdies = counts_for_category(result, Category.BIRDIE)
    assert [(c.teamId, c.count) for c in birdies] == [("a", 1), ("b", 0)]


def test_empty_input():
    assert aggregate([]) == {}


def test_all_fours_on_the_standard_course():
    from foursome.scoring.ranker import rank
    from foursome.scoring.scorecard import STANDARD_PARS

    result = aggregate([_card("a", [4] * 18, list(STANDARD_PARS), name="Team A")])
    assert _counts(result, "a") == {
        Category.EAGLE: 0,
        Category.BIRDIE: 4,
        Category.PAR: 10,
        Category.BOGEY: 4,
        Category.DOUBLE_PAR: 0,
    }
    [entry] = rank(counts_for_category(result, Category.PAR))
    assert (entry.teamName, entry.count, entry.rank) == ("Team A", 10, 1)
