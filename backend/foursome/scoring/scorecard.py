"""Per-team scorecard summaries (nines, totals, to-par)."""

from __future__ import annotations

from typing import Sequence

from ..models import HOLES_PER_ROUND, Team, TeamRound, TeamScorecard
from .aggregator import canonical_rounds, tally_round
from .ranker import group_number

STANDARD_PARS: tuple[int, ...] = (4, 3, 4, 5, 4, 3, 4, 4, 5, 4, 3, 4, 5, 4, 3, 4, 4, 5)
FRONT_NINE = slice(0, 9)
BACK_NINE = slice(9, 18)


def course_pars(team_rounds: Sequence[TeamRound]) -> tuple[int, ...]:
    """Pars of the first complete card, else the standard layout."""
    for team_round in team_rounds:
        if len(team_round.holes) != HOLES_PER_ROUND:
            continue
        by_hole = {hole.holeNumber: hole.par for hole in team_round.holes}
        if len(by_hole) == HOLES_PER_ROUND:
            return tuple(by_hole[n] for n in range(1, HOLES_PER_ROUND + 1))
    return STANDARD_PARS


def build_scorecards(
    team_rounds: Sequence[TeamRound],
    roster: Sequence[Team] | None = None,
) -> list[TeamScorecard]:
    rounds = canonical_rounds(team_rounds)
    pars = course_pars(team_rounds)

    teams: dict[str, Team] = {}
    for team in roster or ():
        teams.setdefault(team.id, team)
    for team_id, team_round in rounds.items():
        teams.setdefault(team_id, Team(id=team_id, name=team_round.teamName))

    cards: list[TeamScorecard] = []
    for team in teams.values():
        team_round = rounds.get(team.id)
        strokes: list[int | None] = [None] * HOLES_PER_ROUND
        if team_round is not None:
            for hole in team_round.holes:
                if 1 <= hole.holeNumber <= HOLES_PER_ROUND:
                    strokes[hole.holeNumber - 1] = hole.strokes

        front = sum(s or 0 for s in strokes[FRONT_NINE])
        back = sum(s or 0 for s in strokes[BACK_NINE])
        # to-par only counts the holes that were played
        played_pars = [p if s is not None else 0 for p, s in zip(pars, strokes)]
        front_par = sum(played_pars[FRONT_NINE])
        back_par = sum(played_pars[BACK_NINE])
        counts = tally_round(team_round)
        cards.append(
            TeamScorecard(
                teamId=team.id,
                teamName=team.name,
                groupNumber=group_number(team.name),
                players=team.players,
                holes=tuple(strokes),
                frontNine=front,
                backNine=back,
                total=front + back,
                frontNineToPar=front - front_par,
                backNineToPar=back - back_par,
                totalToPar=front + back - front_par - back_par,
                counts={category.value: n for category, n in counts.items()},
            )
        )

    # stable: teams without a group keep roster order at the end
    cards.sort(key=lambda card: card.groupNumber)
    return cards
