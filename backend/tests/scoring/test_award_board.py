import os, sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))
from foursome.sample_data import sample_rounds, sample_teams
from foursome.scoring.aggregator import aggregate
from foursome.scoring.board import BOARD_CATEGORIES, award_board
from foursome.scoring.classifier import Category
from foursome.scoring.ranker import rank_awards


def test_board_has_one_row_per_rank():
    awards = rank_awards(aggregate(sample_rounds(), sample_teams()))
    rows = award_board(awards)
    assert [row.rank for row in rows] == [1, 2, 3]
    for row in rows:
        assert list(row.cells) == list(BOARD_CATEGORIES)
        assert Category.EAGLE not in row.cells


def test_board_cells_hold_tied_teams():
    awards = rank_awards(aggregate(sample_rounds(), sample_teams()))
    first, second, third = award_board(awards)
    assert [e.teamId for e in first.cells[Category.BIRDIE]] == ["team1", "team3"]
    assert second.cells[Category.BIRDIE] == []
    assert [e.teamId for e in second.cells[Category.DOUBLE_PAR]] == ["team3", "team4"]
    assert [e.teamId for e in third.cells[Category.PAR]] == ["team2"]


def test_empty_awards_give_empty_cells():
    rows = award_board({})
    assert all(cell == [] for row in rows for cell in row.cells.values())
