from typing import TYPE_CHECKING, Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import AwardEntry, Team, TeamRound, TeamScorecard, WinnerCandidate
from .scoring.classifier import classify

if TYPE_CHECKING:
    from .state import EventSnapshot


class PlayerIn(BaseModel):
    id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=200)


class TeamIn(BaseModel):
    id: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=200)
    players: List[PlayerIn] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @field_validator("id", mode="before")
    @classmethod
    def _validate_id(cls, value: str) -> str:
        if not isinstance(value, str):
            raise TypeError("id must be a string")
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("id must not be empty")
        if any(ch.isspace() for ch in trimmed):
            raise ValueError("id must not contain whitespace")
        return trimmed


class HoleIn(BaseModel):
    # raw values; services.validation rejects booleans and non-integers
    holeNumber: Any
    par: Any
    strokes: Any


class TeamRoundIn(BaseModel):
    teamId: str
    teamName: Optional[str] = None
    holes: List[HoleIn] = Field(default_factory=list)


class EventIn(BaseModel):
    teams: List[TeamIn] = Field(default_factory=list)
    rounds: List[TeamRoundIn] = Field(default_factory=list)


class PlayerOut(BaseModel):
    id: str
    name: str


class TeamOut(BaseModel):
    id: str
    name: str
    players: List[PlayerOut]

    @classmethod
    def from_team(cls, team: Team) -> "TeamOut":
        return cls(
            id=team.id,
            name=team.name,
            players=[PlayerOut(id=p.id, name=p.name) for p in team.players],
        )


class HoleOut(BaseModel):
    holeNumber: int
    par: int
    strokes: int
    category: str


class TeamRoundOut(BaseModel):
    teamId: str
    teamName: str
    holes: List[HoleOut]

    @classmethod
    def from_round(cls, team_round: TeamRound) -> "TeamRoundOut":
        return cls(
            teamId=team_round.teamId,
            teamName=team_round.teamName,
            holes=[
                HoleOut(
                    holeNumber=h.holeNumber,
                    par=h.par,
                    strokes=h.strokes,
                    category=classify(h.strokes, h.par).value,
                )
                for h in team_round.holes
            ],
        )


class EventOut(BaseModel):
    teams: List[TeamOut]
    rounds: List[TeamRoundOut]
    handicaps: Dict[str, float]
    source: Literal["sample", "manual", "upload", "photo"]
    revision: int

    @classmethod
    def from_snapshot(cls, snapshot: "EventSnapshot") -> "EventOut":
        return cls(
            teams=[TeamOut.from_team(t) for t in snapshot.teams],
            rounds=[TeamRoundOut.from_round(r) for r in snapshot.rounds],
            handicaps=dict(snapshot.handicaps),
            source=snapshot.source,
            revision=snapshot.revision,
        )


class HandicapsIn(BaseModel):
    handicaps: Dict[str, Any] = Field(default_factory=dict)


class HandicapsOut(BaseModel):
    handicaps: Dict[str, float]
    revision: int


class AwardEntryOut(BaseModel):
    teamId: str
    teamName: str
    count: int
    rank: int
    players: List[PlayerOut] = Field(default_factory=list)

    @classmethod
    def from_entry(cls, entry: AwardEntry, team: Optional[Team] = None) -> "AwardEntryOut":
        return cls(
            teamId=entry.teamId,
            teamName=entry.teamName,
            count=entry.count,
            rank=entry.rank,
            players=[PlayerOut(id=p.id, name=p.name) for p in team.players] if team else [],
        )


class AwardCategoryOut(BaseModel):
    category: str
    label: str
    entries: List[AwardEntryOut]


class AwardsOut(BaseModel):
    rankingMode: str
    awards: List[AwardCategoryOut]


class AwardBoardRowOut(BaseModel):
    rank: int
    cells: Dict[str, List[AwardEntryOut]]


class AwardBoardOut(BaseModel):
    categories: List[AwardCategoryOut]
    rows: List[AwardBoardRowOut]


class WinnerCandidateOut(BaseModel):
    teamId: str
    teamName: str
    rawTotal: int
    handicap: float
    adjustedTotal: float
    holesPlayed: int
    players: List[PlayerOut] = Field(default_factory=list)

    @classmethod
    def from_candidate(
        cls, candidate: WinnerCandidate, team: Optional[Team] = None
    ) -> "WinnerCandidateOut":
        return cls(
            teamId=candidate.teamId,
            teamName=candidate.teamName,
            rawTotal=candidate.rawTotal,
            handicap=candidate.handicap,
            adjustedTotal=candidate.adjustedTotal,
            holesPlayed=candidate.holesPlayed,
            players=[PlayerOut(id=p.id, name=p.name) for p in team.players] if team else [],
        )


class WinnersOut(BaseModel):
    coWinners: List[WinnerCandidateOut]
    champions: List[WinnerCandidateOut]
    tieBreak: str
    isTie: bool


class WinnersIn(BaseModel):
    handicaps: Dict[str, Any] = Field(default_factory=dict)
    tieBreak: Optional[Literal["higher_handicap", "none"]] = None


class TeamScorecardOut(BaseModel):
    teamId: str
    teamName: str
    groupNumber: int
    players: List[PlayerOut]
    holes: List[Optional[int]]
    frontNine: int
    backNine: int
    total: int
    frontNineToPar: int
    backNineToPar: int
    totalToPar: int
    counts: Dict[str, int]

    @classmethod
    def from_card(cls, card: TeamScorecard) -> "TeamScorecardOut":
        return cls(
            teamId=card.teamId,
            teamName=card.teamName,
            groupNumber=card.groupNumber,
            players=[PlayerOut(id=p.id, name=p.name) for p in card.players],
            holes=list(card.holes),
            frontNine=card.frontNine,
            backNine=card.backNine,
            total=card.total,
            frontNineToPar=card.frontNineToPar,
            backNineToPar=card.backNineToPar,
            totalToPar=card.totalToPar,
            counts=dict(card.counts),
        )


class ScorecardsOut(BaseModel):
    pars: List[int]
    parTotal: int
    teams: List[TeamScorecardOut]


class PhotoResultOut(BaseModel):
    filename: str
    fingerprint: str
    cached: bool
    teams: int


class PhotoUploadOut(BaseModel):
    photos: List[PhotoResultOut]
    event: EventOut


class ExtractorStatusOut(BaseModel):
    configured: bool
    available: bool
    models: List[str]
