"""Fold team rounds into per-category counts."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from ..models import CategoryCount, HoleRecord, Team, TeamRound
from .classifier import AWARD_CATEGORIES, Category, classify

logger = logging.getLogger(__name__)


def canonical_rounds(team_rounds: Iterable[TeamRound]) -> dict[str, TeamRound]:
    """Return one round per team id, keeping the first one encountered.

    Foursome teams play a single ball, so a second card for the same team is
    a duplicate upload rather than another player's score. Duplicate hole
    numbers inside a card also keep their first occurrence.
    """
    rounds: dict[str, TeamRound] = {}
    for team_round in team_rounds:
        if team_round.teamId in rounds:
            logger.info(
                "Ignoring duplicate scorecard for team %s (%s)",
                team_round.teamId,
                team_round.teamName,
            )
            continue
        rounds[team_round.teamId] = TeamRound(
            teamId=team_round.teamId,
            teamName=team_round.teamName,
            holes=tuple(_unique_holes(team_round.holes)),
        )
    return rounds


def _unique_holes(holes: Iterable[HoleRecord]) -> list[HoleRecord]:
    seen: set[int] = set()
    unique: list[HoleRecord] = []
    for hole in holes:
        if hole.holeNumber in seen:
            continue
        seen.add(hole.holeNumber)
        unique.append(hole)
    return unique


def tally_round(team_round: TeamRound | None) -> dict[Category, int]:
    """Count award categories for a single card; missing card means zeros."""
    counts = {category: 0 for category in AWARD_CATEGORIES}
    if team_round is None:
        return counts
    for hole in team_round.holes:
        category = classify(hole.strokes, hole.par)
        if category in counts:
            counts[category] += 1
    return counts


def aggregate(
    team_rounds: Sequence[TeamRound],
    roster: Sequence[Team] | None = None,
) -> dict[str, list[CategoryCount]]:
    """Return award category counts for every known team.

    Teams listed in ``roster`` but without a card get explicit zero counts.
    Ordering follows the roster, then teams only present in ``team_rounds``.
    """
    rounds = canonical_rounds(team_rounds)

    names: dict[str, str] = {}
    for team in roster or ():
        names.setdefault(team.id, team.name)
    for team_id, team_round in rounds.items():
        names.setdefault(team_id, team_round.teamName)

    result: dict[str, list[CategoryCount]] = {}
    for team_id, team_name in names.items():
        counts = tally_round(rounds.get(team_id))
        result[team_id] = [
            CategoryCount(
                teamId=team_id,
                teamName=team_name,
                category=category,
                count=counts[category],
            )
            for category in AWARD_CATEGORIES
        ]
    return result


def counts_for_category(
    aggregated: dict[str, list[CategoryCount]], category: Category
) -> list[CategoryCount]:
    """Pick one category's counts out of an ``aggregate`` result."""
    return [
        count
        for counts in aggregated.values()
        for count in counts
        if count.category == category
    ]
