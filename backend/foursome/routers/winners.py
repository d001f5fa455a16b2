from typing import Mapping, Sequence

from fastapi import APIRouter, Depends

from ..config import WINNER_TIE_BREAK
from ..models import Team, WinnerResult
from ..schemas import WinnerCandidateOut, WinnersIn, WinnersOut
from ..scoring import TieBreak, decide_winners
from ..services.validation import ValidationError, validate_handicaps
from ..state import EventBoard, get_event_board
from .event import invalid_scores

router = APIRouter(prefix="/winners", tags=["winners"])


def default_tie_break() -> TieBreak:
    return TieBreak(WINNER_TIE_BREAK)


def _winners_out(result: WinnerResult, teams: Sequence[Team]) -> WinnersOut:
    by_id: Mapping[str, Team] = {team.id: team for team in teams}
    return WinnersOut(
        coWinners=[
            WinnerCandidateOut.from_candidate(c, by_id.get(c.teamId))
            for c in result.coWinners
        ],
        champions=[
            WinnerCandidateOut.from_candidate(c, by_id.get(c.teamId))
            for c in result.champions
        ],
        tieBreak=result.tieBreak,
        isTie=result.is_tie,
    )


# GET /api/v0/winners uses the handicaps stored on the board
@router.get("", response_model=WinnersOut)
async def get_winners(
    board: EventBoard = Depends(get_event_board),
    rule: TieBreak = Depends(default_tie_break),
) -> WinnersOut:
    snapshot = board.snapshot
    result = decide_winners(snapshot.rounds, snapshot.handicaps, rule)
    return _winners_out(result, snapshot.teams)


# POST /api/v0/winners scores the board with ad-hoc handicaps, nothing is stored
@router.post("", response_model=WinnersOut)
async def compute_winners_with_handicaps(
    body: WinnersIn,
    board: EventBoard = Depends(get_event_board),
    rule: TieBreak = Depends(default_tie_break),
) -> WinnersOut:
    try:
        handicaps = validate_handicaps(body.handicaps)
    except ValidationError as exc:
        raise invalid_scores(exc)
    if body.tieBreak is not None:
        rule = TieBreak(body.tieBreak)
    snapshot = board.snapshot
    result = decide_winners(snapshot.rounds, handicaps, rule)
    return _winners_out(result, snapshot.teams)
