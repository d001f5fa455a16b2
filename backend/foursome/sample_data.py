"""Built-in demo event shown until real scores are uploaded."""

from __future__ import annotations

from .models import HoleRecord, Player, Team, TeamRound
from .scoring.scorecard import STANDARD_PARS

_PLAYERS = (
    Player(id="1", name="김철수"),
    Player(id="2", name="이영희"),
    Player(id="3", name="박민수"),
    Player(id="4", name="최지원"),
    Player(id="5", name="정수연"),
    Player(id="6", name="강호동"),
    Player(id="7", name="송지효"),
    Player(id="8", name="유재석"),
)

_STROKES = {
    "team1": (4, 3, 5, 6, 4, 6, 4, 5, 4, 4, 3, 5, 5, 4, 4, 4, 8, 5),
    "team2": (5, 3, 4, 5, 5, 3, 4, 4, 6, 4, 4, 4, 5, 5, 3, 4, 4, 6),
    "team3": (4, 4, 4, 5, 4, 3, 5, 4, 5, 8, 3, 4, 4, 4, 3, 5, 4, 5),
    "team4": (6, 3, 4, 5, 4, 3, 4, 5, 5, 4, 3, 4, 6, 4, 6, 4, 4, 5),
}


def sample_teams() -> list[Team]:
    return [
        Team(id=team_id, name=team_id, players=_PLAYERS[i * 2 : i * 2 + 2])
        for i, team_id in enumerate(_STROKES)
    ]


def sample_rounds() -> list[TeamRound]:
    return [
        TeamRound(
            teamId=team_id,
            teamName=team_id,
            holes=tuple(
                HoleRecord(holeNumber=number, par=par, strokes=strokes)
                for number, (par, strokes) in enumerate(zip(STANDARD_PARS, card), start=1)
            ),
        )
        for team_id, card in _STROKES.items()
    ]
