"""Pivot per-category award lists into rank rows for a table view."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence

from ..models import AwardEntry
from .classifier import Category
from .ranker import MAX_AWARD_RANK

BOARD_CATEGORIES: tuple[Category, ...] = (
    Category.BIRDIE,
    Category.PAR,
    Category.BOGEY,
    Category.DOUBLE_PAR,
)


@dataclass
class AwardBoardRow:
    rank: int
    cells: dict[Category, list[AwardEntry]] = field(default_factory=dict)


def award_board(
    awards: Mapping[Category, Sequence[AwardEntry]],
    categories: Sequence[Category] = BOARD_CATEGORIES,
    max_rank: int = MAX_AWARD_RANK,
) -> list[AwardBoardRow]:
    rows = [AwardBoardRow(rank=r) for r in range(1, max_rank + 1)]
    for row in rows:
        for category in categories:
            row.cells[category] = [
                entry for entry in awards.get(category, ()) if entry.rank == row.rank
            ]
    return rows
