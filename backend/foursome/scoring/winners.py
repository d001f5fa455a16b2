"""Handicap-adjusted winner selection."""

from __future__ import annotations

from enum import Enum
from typing import Mapping, Sequence

from ..models import TeamRound, WinnerCandidate, WinnerResult
from .aggregator import canonical_rounds
from .ranker import display_key


class TieBreak(str, Enum):
    # Equal adjusted totals: the team carrying the higher handicap wins.
    HIGHER_HANDICAP = "higher_handicap"
    # Equal adjusted totals stay co-winners.
    NONE = "none"


def adjusted_totals(
    team_rounds: Sequence[TeamRound],
    handicaps: Mapping[str, float] | None = None,
) -> list[WinnerCandidate]:
    """Build a candidate for every team that has at least one scored hole."""
    handicaps = handicaps or {}
    candidates: list[WinnerCandidate] = []
    for team_id, team_round in canonical_rounds(team_rounds).items():
        if not team_round.holes:
            continue
        raw_total = sum(hole.strokes for hole in team_round.holes)
        handicap = handicaps.get(team_id) or 0
        candidates.append(
            WinnerCandidate(
                teamId=team_id,
                teamName=team_round.teamName,
                rawTotal=raw_total,
                handicap=handicap,
                adjustedTotal=raw_total - handicap,
                holesPlayed=len(team_round.holes),
            )
        )
    return candidates


def _winner_order(candidate: WinnerCandidate) -> tuple:
    return (-candidate.handicap, *display_key(candidate.teamId, candidate.teamName))


def compute_winners(
    team_rounds: Sequence[TeamRound],
    handicaps: Mapping[str, float] | None = None,
) -> list[WinnerCandidate]:
    """Return every team sharing the lowest adjusted total.

    Missing handicaps count as 0. Co-winners are listed with the highest
    handicap first. No teams or no scored holes give an empty list.
    """
    candidates = adjusted_totals(team_rounds, handicaps)
    if not candidates:
        return []
    best = min(c.adjustedTotal for c in candidates)
    winners = [c for c in candidates if c.adjustedTotal == best]
    winners.sort(key=_winner_order)
    return winners


def resolve_tie_break(
    co_winners: Sequence[WinnerCandidate],
    rule: TieBreak = TieBreak.HIGHER_HANDICAP,
) -> list[WinnerCandidate]:
    """Narrow a co-winner list with ``rule``.

    ``HIGHER_HANDICAP`` keeps the teams sharing the highest handicap, which can
    still be more than one team.
    """
    if rule is TieBreak.NONE or len(co_winners) <= 1:
        return list(co_winners)
    top = max(c.handicap for c in co_winners)
    return [c for c in co_winners if c.handicap == top]


def decide_winners(
    team_rounds: Sequence[TeamRound],
    handicaps: Mapping[str, float] | None = None,
    rule: TieBreak = TieBreak.HIGHER_HANDICAP,
) -> WinnerResult:
    co_winners = compute_winners(team_rounds, handicaps)
    return WinnerResult(
        coWinners=co_winners,
        champions=resolve_tie_break(co_winners, rule),
        tieBreak=rule.value,
    )
