import logging

from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import PlainTextResponse

from ..exceptions import ProblemDetail, UnsupportedUpload, http_problem
from ..schemas import EventIn, EventOut, HandicapsIn, HandicapsOut
from ..services.uploads import MAX_UPLOAD_SIZE, parse_upload, sample_csv, upload_kind
from ..services.validation import ValidationError, validate_event, validate_handicaps
from ..state import EventBoard, get_event_board

logger = logging.getLogger(__name__)

# Resource-only prefix; no /api or /api/v0 here
router = APIRouter(
    prefix="/event",
    tags=["event"],
    responses={422: {"model": ProblemDetail}},
)


def invalid_scores(exc: ValidationError):
    return http_problem(status_code=422, detail=exc.detail, code="invalid_scores")


# GET /api/v0/event
@router.get("", response_model=EventOut)
async def get_event(board: EventBoard = Depends(get_event_board)) -> EventOut:
    return EventOut.from_snapshot(board.snapshot)


# PUT /api/v0/event
@router.put("", response_model=EventOut)
async def replace_event(
    body: EventIn, board: EventBoard = Depends(get_event_board)
) -> EventOut:
    try:
        teams, rounds = validate_event(
            [t.model_dump() for t in body.teams],
            [r.model_dump() for r in body.rounds],
        )
    except ValidationError as exc:
        raise invalid_scores(exc)
    snapshot = await board.replace(teams, rounds, source="manual")
    return EventOut.from_snapshot(snapshot)


@router.post("/reset", response_model=EventOut)
async def reset_event(board: EventBoard = Depends(get_event_board)) -> EventOut:
    return EventOut.from_snapshot(await board.reset())


@router.post(
    "/upload",
    response_model=EventOut,
    responses={415: {"model": ProblemDetail}, 413: {"model": ProblemDetail}},
)
async def upload_scores(
    file: UploadFile = File(...),
    board: EventBoard = Depends(get_event_board),
) -> EventOut:
    if not upload_kind(file.filename):
        raise UnsupportedUpload("upload a .csv or .json score file")

    data = await file.read(MAX_UPLOAD_SIZE + 1)
    if len(data) > MAX_UPLOAD_SIZE:
        raise http_problem(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="Uploaded file too large",
            code="upload_too_large",
        )
    try:
        teams, rounds = parse_upload(file.filename, data)
    except ValidationError as exc:
        raise invalid_scores(exc)
    if not rounds:
        raise http_problem(
            status_code=422, detail="the file contains no scores", code="invalid_scores"
        )

    logger.info("Loaded %d teams from %s", len(teams), file.filename)
    snapshot = await board.replace(teams, rounds, source="upload")
    return EventOut.from_snapshot(snapshot)


@router.get("/sample.csv", response_class=PlainTextResponse)
async def download_sample_csv() -> PlainTextResponse:
    return PlainTextResponse(
        sample_csv(),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="golf_score_sample.csv"'},
    )


@router.get("/handicaps", response_model=HandicapsOut)
async def get_handicaps(board: EventBoard = Depends(get_event_board)) -> HandicapsOut:
    snapshot = board.snapshot
    return HandicapsOut(handicaps=dict(snapshot.handicaps), revision=snapshot.revision)


@router.put("/handicaps", response_model=HandicapsOut)
async def set_handicaps(
    body: HandicapsIn, board: EventBoard = Depends(get_event_board)
) -> HandicapsOut:
    try:
        handicaps = validate_handicaps(body.handicaps)
    except ValidationError as exc:
        raise invalid_scores(exc)
    snapshot = await board.set_handicaps(handicaps)
    return HandicapsOut(handicaps=dict(snapshot.handicaps), revision=snapshot.revision)
