"""Foursome scoring engine: classification, aggregation, rankings, winners."""

from . import aggregator, board, classifier, ranker, scorecard, winners
from .aggregator import aggregate, canonical_rounds
from .board import award_board
from .classifier import AWARD_CATEGORIES, Category, category_label, classify
from .ranker import RankingMode, group_number, rank, rank_awards
from .scorecard import STANDARD_PARS, build_scorecards, course_pars
from .winners import TieBreak, compute_winners, decide_winners, resolve_tie_break

__all__ = [
    "aggregator",
    "board",
    "classifier",
    "ranker",
    "scorecard",
    "winners",
    "AWARD_CATEGORIES",
    "Category",
    "RankingMode",
    "STANDARD_PARS",
    "TieBreak",
    "aggregate",
    "award_board",
    "build_scorecards",
    "canonical_rounds",
    "category_label",
    "classify",
    "compute_winners",
    "course_pars",
    "decide_winners",
    "group_number",
    "rank",
    "rank_awards",
    "resolve_tie_break",
]
