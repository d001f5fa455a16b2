from typing import Mapping, Optional, Sequence

from fastapi import APIRouter, Depends, Query

from ..config import RANKING_MODE
from ..exceptions import ProblemDetail, UnknownAwardCategory
from ..models import AwardEntry, Team
from ..schemas import (
    AwardBoardOut,
    AwardBoardRowOut,
    AwardCategoryOut,
    AwardEntryOut,
    AwardsOut,
    EventIn,
)
from ..scoring import (
    AWARD_CATEGORIES,
    Category,
    RankingMode,
    aggregate,
    award_board,
    category_label,
    rank_awards,
)
from ..scoring.board import BOARD_CATEGORIES
from ..scoring.classifier import parse_category
from ..services.validation import ValidationError, validate_event
from ..state import EventBoard, EventSnapshot, get_event_board
from .event import invalid_scores

router = APIRouter(
    prefix="/awards",
    tags=["awards"],
    responses={404: {"model": ProblemDetail}},
)


def ranking_mode() -> RankingMode:
    return RankingMode(RANKING_MODE)


def _compute_awards(
    teams: Sequence[Team], rounds, mode: RankingMode
) -> dict[Category, list[AwardEntry]]:
    return rank_awards(aggregate(rounds, teams), mode=mode)


def board_awards(board: EventBoard, mode: RankingMode) -> dict[Category, list[AwardEntry]]:
    def compute(snapshot: EventSnapshot):
        return _compute_awards(snapshot.teams, snapshot.rounds, mode)

    return board.memoized(("awards", mode), compute)


def _category_out(
    category: Category,
    entries: Sequence[AwardEntry],
    teams: Mapping[str, Team],
    locale: Optional[str],
) -> AwardCategoryOut:
    return AwardCategoryOut(
        category=category.value,
        label=category_label(category, locale),
        entries=[AwardEntryOut.from_entry(e, teams.get(e.teamId)) for e in entries],
    )


def _awards_out(
    awards: Mapping[Category, Sequence[AwardEntry]],
    teams: Sequence[Team],
    mode: RankingMode,
    locale: Optional[str],
) -> AwardsOut:
    by_id = {team.id: team for team in teams}
    return AwardsOut(
        rankingMode=mode.value,
        awards=[
            _category_out(category, awards.get(category, []), by_id, locale)
            for category in AWARD_CATEGORIES
        ],
    )


# GET /api/v0/awards?locale=ko
@router.get("", response_model=AwardsOut)
async def list_awards(
    locale: Optional[str] = Query(None, description="Label language, 'ko' or 'en'"),
    board: EventBoard = Depends(get_event_board),
    mode: RankingMode = Depends(ranking_mode),
) -> AwardsOut:
    awards = board_awards(board, mode)
    return _awards_out(awards, board.snapshot.teams, mode, locale)


# POST /api/v0/awards ranks a posted event without touching the board
@router.post("", response_model=AwardsOut)
async def rank_posted_event(
    body: EventIn,
    locale: Optional[str] = Query(None),
    mode: RankingMode = Depends(ranking_mode),
) -> AwardsOut:
    try:
        teams, rounds = validate_event(
            [t.model_dump() for t in body.teams],
            [r.model_dump() for r in body.rounds],
        )
    except ValidationError as exc:
        raise invalid_scores(exc)
    return _awards_out(_compute_awards(teams, rounds, mode), teams, mode, locale)


@router.get("/board", response_model=AwardBoardOut)
async def get_award_board(
    locale: Optional[str] = Query(None),
    board: EventBoard = Depends(get_event_board),
    mode: RankingMode = Depends(ranking_mode),
) -> AwardBoardOut:
    awards = board_awards(board, mode)
    teams = {team.id: team for team in board.snapshot.teams}
    rows = award_board(awards)
    return AwardBoardOut(
        categories=[
            _category_out(category, awards.get(category, []), teams, locale)
            for category in BOARD_CATEGORIES
        ],
        rows=[
            AwardBoardRowOut(
                rank=row.rank,
                cells={
                    category.value: [
                        AwardEntryOut.from_entry(e, teams.get(e.teamId)) for e in entries
                    ]
                    for category, entries in row.cells.items()
                },
            )
            for row in rows
        ],
    )


# GET /api/v0/awards/birdie
@router.get("/{category}", response_model=AwardCategoryOut)
async def get_award(
    category: str,
    locale: Optional[str] = Query(None),
    board: EventBoard = Depends(get_event_board),
    mode: RankingMode = Depends(ranking_mode),
) -> AwardCategoryOut:
    try:
        resolved = parse_category(category)
    except ValueError:
        raise UnknownAwardCategory(category)
    if resolved not in AWARD_CATEGORIES:
        raise UnknownAwardCategory(category)
    awards = board_awards(board, mode)
    teams = {team.id: team for team in board.snapshot.teams}
    return _category_out(resolved, awards.get(resolved, []), teams, locale)
