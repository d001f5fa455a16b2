"""Tie-aware award rankings."""

from __future__ import annotations

import re
from enum import Enum
from typing import Sequence

from ..models import AwardEntry, CategoryCount
from .aggregator import counts_for_category
from .classifier import AWARD_CATEGORIES, Category

MAX_AWARD_RANK = 3
NO_GROUP = 999

_GROUP_PREFIX = re.compile(r"^(\d+)-")


class RankingMode(str, Enum):
    # 5, 5, 3, 2 -> 1, 1, 2, 3
    DENSE = "dense"
    # 5, 5, 3, 2 -> 1, 1, 3, 4
    COMPETITION = "competition"


def group_number(team_name: str) -> int:
    """Return the display group encoded as ``"<n>-name"``, or 999."""
    match = _GROUP_PREFIX.match(team_name or "")
    return int(match.group(1)) if match else NO_GROUP


def display_key(team_id: str, team_name: str) -> tuple[int, str, str]:
    return (group_number(team_name), team_name, team_id)


def rank(
    counts: Sequence[CategoryCount],
    *,
    mode: RankingMode = RankingMode.DENSE,
    max_rank: int = MAX_AWARD_RANK,
) -> list[AwardEntry]:
    """Rank one award category.

    Zero counts are dropped, equal counts share a rank and only ranks up to
    ``max_rank`` are kept, so a tie on the last rank keeps every tied team.
    Teams sharing a rank are listed by display group, then name.
    """
    scoring = [c for c in counts if c.count > 0]
    scoring.sort(key=lambda c: (-c.count, *display_key(c.teamId, c.teamName)))

    entries: list[AwardEntry] = []
    current_rank = 0
    previous_count = None
    for position, count in enumerate(scoring):
        if count.count != previous_count:
            if mode is RankingMode.COMPETITION:
                current_rank = position + 1
            else:
                current_rank += 1
            previous_count = count.count
        if current_rank > max_rank:
            break
        entries.append(
            AwardEntry(
                teamId=count.teamId,
                teamName=count.teamName,
                count=count.count,
                rank=current_rank,
            )
        )
    return entries


def rank_awards(
    aggregated: dict[str, list[CategoryCount]],
    *,
    mode: RankingMode = RankingMode.DENSE,
    max_rank: int = MAX_AWARD_RANK,
) -> dict[Category, list[AwardEntry]]:
    """Run ``rank`` once per award category."""
    return {
        category: rank(
            counts_for_category(aggregated, category), mode=mode, max_rank=max_rank
        )
        for category in AWARD_CATEGORIES
    }
