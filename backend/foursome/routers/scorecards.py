import logging
from typing import List

from fastapi import APIRouter, Depends, File, Request, UploadFile

from ..cache import ContentCache
from ..config import (
    EXTRACTION_CACHE_SIZE,
    EXTRACTION_CACHE_TTL,
    GEMINI_API_KEYS,
    GEMINI_MODEL,
    GEMINI_VISION_MODELS,
    MAX_SCORECARD_PHOTO_SIZE,
)
from ..exceptions import ProblemDetail
from ..rate_limit import limiter, photo_rate_limit
from ..schemas import (
    EventOut,
    ExtractorStatusOut,
    PhotoResultOut,
    PhotoUploadOut,
    ScorecardsOut,
    TeamScorecardOut,
)
from ..scoring import build_scorecards, course_pars
from ..services.extraction import GeminiScoreExtractor, ScorecardReader
from ..services.photo_uploads import read_photo_upload
from ..state import EventBoard, EventSnapshot, get_event_board

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scorecards", tags=["scorecards"])

scorecard_reader = ScorecardReader(
    GeminiScoreExtractor(
        GEMINI_API_KEYS,
        model=GEMINI_MODEL,
        models=GEMINI_VISION_MODELS,
    ),
    ContentCache(EXTRACTION_CACHE_SIZE, EXTRACTION_CACHE_TTL),
)


def get_scorecard_reader() -> ScorecardReader:
    return scorecard_reader


def _summary(snapshot: EventSnapshot) -> ScorecardsOut:
    pars = list(course_pars(snapshot.rounds))
    cards = build_scorecards(snapshot.rounds, snapshot.teams)
    return ScorecardsOut(
        pars=pars,
        parTotal=sum(pars),
        teams=[TeamScorecardOut.from_card(card) for card in cards],
    )


# GET /api/v0/scorecards
@router.get("", response_model=ScorecardsOut)
async def list_scorecards(board: EventBoard = Depends(get_event_board)) -> ScorecardsOut:
    return board.memoized("scorecards", _summary)


# POST /api/v0/scorecards/photos
@router.post(
    "/photos",
    response_model=PhotoUploadOut,
    responses={
        413: {"model": ProblemDetail},
        415: {"model": ProblemDetail},
        422: {"model": ProblemDetail},
        503: {"model": ProblemDetail},
    },
)
@limiter.limit(photo_rate_limit)
async def upload_scorecard_photos(
    request: Request,
    files: List[UploadFile] = File(...),
    board: EventBoard = Depends(get_event_board),
    reader: ScorecardReader = Depends(get_scorecard_reader),
) -> PhotoUploadOut:
    # read every photo before touching the board so one bad file changes nothing
    photos = [
        await read_photo_upload(file, max_size=MAX_SCORECARD_PHOTO_SIZE) for file in files
    ]
    results: list[PhotoResultOut] = []
    extractions = []
    for photo in photos:
        extracted, cached = await reader.read(photo)
        extractions.append(extracted)
        results.append(
            PhotoResultOut(
                filename=photo.filename,
                fingerprint=photo.fingerprint,
                cached=cached,
                teams=len(extracted.teams),
            )
        )
    logger.info(
        "Read %d scorecard photo(s), %d from cache",
        len(results),
        sum(1 for r in results if r.cached),
    )
    snapshot = await board.add_photo_results(extractions)
    return PhotoUploadOut(photos=results, event=EventOut.from_snapshot(snapshot))


# GET /api/v0/scorecards/extractor
@router.get("/extractor", response_model=ExtractorStatusOut)
async def extractor_status(
    reader: ScorecardReader = Depends(get_scorecard_reader),
) -> ExtractorStatusOut:
    provider = reader.provider
    configured = provider.configured
    return ExtractorStatusOut(
        configured=configured,
        available=await provider.available() if configured else False,
        models=list(provider.models),
    )
