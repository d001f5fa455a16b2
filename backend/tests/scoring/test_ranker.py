import os, sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))
from foursome.models import CategoryCount
from foursome.sample_data import sample_rounds, sample_teams
from foursome.scoring.aggregator import aggregate
from foursome.scoring.classifier import Category
from foursome.scoring.ranker import RankingMode, group_number, rank, rank_awards


def _counts(*pairs, category=Category.BIRDIE):
    return [
        CategoryCount(teamId=team_id, teamName=team_id, category=category, count=count)
        for team_id, count in pairs
    ]


def _ranks(entries):
    return [(e.teamId, e.rank) for e in entries]


def test_dense_ranking_shares_ranks_without_gaps():
    entries = rank(_counts(("a", 5), ("b", 5), ("c", 3), ("d", 2), ("e", 1)))
    assert _ranks(entries) == [("a", 1), ("b", 1), ("c", 2), ("d", 3)]


def test_competition_ranking_skips_after_ties():
    entries = rank(
        _counts(("a", 5), ("b", 5), ("c", 3), ("d", 2)),
        mode=RankingMode.COMPETITION,
    )
    # d would be 4th
    assert _ranks(entries) == [("a", 1), ("b", 1), ("c", 3)]


def test_competition_ranking_1224():
    entries = rank(
        _counts(("a", 6), ("b", 4), ("c", 4), ("d", 1)),
        mode=RankingMode.COMPETITION,
        max_rank=4,
    )
    assert [e.rank for e in entries] == [1, 2, 2, 4]


def test_zero_counts_are_never_ranked():
    entries = rank(_counts(("a", 0), ("b", 0), ("c", 1)))
    assert _ranks(entries) == [("c", 1)]
    assert rank(_counts(("a", 0))) == []


def test_tie_on_last_rank_keeps_every_team():
    entries = rank(_counts(("a", 4), ("b", 3), ("c", 2), ("d", 2), ("e", 2)))
    assert _ranks(entries) == [("a", 1), ("b", 2), ("c", 3), ("d", 3), ("e", 3)]


def test_ties_are_listed_by_group_number():
    counts = [
        CategoryCount(teamId="t1", teamName="10-Owls", category=Category.PAR, count=3),
        CategoryCount(teamId="t2", teamName="2-Hawks", category=Category.PAR, count=3),
        CategoryCount(teamId="t3", teamName="Eagles", category=Category.PAR, count=3),
    ]
    assert [e.teamName for e in rank(counts)] == ["2-Hawks", "10-Owls", "Eagles"]


def test_group_number():
    assert group_number("3-Dragons") == 3
    assert group_number("Dragons") == 999
    assert group_number("-3 Dragons") == 999
    assert group_number("") == 999


def test_rank_awards_on_sample_event():
    awards = rank_awards(aggregate(sample_rounds(), sample_teams()))
    assert awards[Category.EAGLE] == []
    assert _ranks(awards[Category.BIRDIE]) == [("team1", 1), ("team3", 1)]
    assert _ranks(awards[Category.PAR]) == [("team4", 1), ("team3", 2), ("team2", 3)]
    assert [e.count for e in awards[Category.PAR]] == [14, 13, 12]
    assert _ranks(awards[Category.BOGEY]) == [("team2", 1), ("team1", 2), ("team3", 3)]
    assert _ranks(awards[Category.DOUBLE_PAR]) == [("team1", 1), ("team3", 2), ("team4", 2)]


def test_rank_awards_competition_mode():
    awards = rank_awards(
        aggregate(sample_rounds(), sample_teams()), mode=RankingMode.COMPETITION
    )
    assert _ranks(awards[Category.BIRDIE]) == [("team1", 1), ("team3", 1)]
    assert _ranks(awards[Category.DOUBLE_PAR]) == [("team1", 1), ("team3", 2), ("team4", 2)]


def test_ranking_is_idempotent():
    counts = _counts(("a", 3), ("b", 1), ("c", 3), ("d", 2))
    first = rank(counts)
    again = rank(
        [
            CategoryCount(teamId=e.teamId, teamName=e.teamName, category=Category.BIRDIE, count=e.count)
            for e in first
        ]
    )
    assert first == again
    assert len({e.rank for e in first}) <= 3
