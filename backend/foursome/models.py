"""In-memory domain records for a foursome event.

Everything here is immutable. Ingestion builds ``Team`` and ``TeamRound``
values; the scoring package derives the rest on every pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .scoring.classifier import Category

HOLES_PER_ROUND = 18


@dataclass(frozen=True)
class Player:
    id: str
    name: str


@dataclass(frozen=True)
class Team:
    id: str
    name: str
    players: tuple[Player, ...] = ()


@dataclass(frozen=True)
class HoleRecord:
    holeNumber: int
    par: int
    strokes: int


@dataclass(frozen=True)
class TeamRound:
    """One team's card. Foursome play: one ball, one score per hole."""

    teamId: str
    teamName: str
    holes: tuple[HoleRecord, ...] = ()


@dataclass(frozen=True)
class CategoryCount:
    teamId: str
    teamName: str
    category: Category
    count: int


@dataclass(frozen=True)
class AwardEntry:
    teamId: str
    teamName: str
    count: int
    rank: int


@dataclass(frozen=True)
class WinnerCandidate:
    teamId: str
    teamName: str
    rawTotal: int
    handicap: float
    adjustedTotal: float
    holesPlayed: int = HOLES_PER_ROUND


@dataclass(frozen=True)
class WinnerResult:
    coWinners: list[WinnerCandidate] = field(default_factory=list)
    champions: list[WinnerCandidate] = field(default_factory=list)
    tieBreak: str = "none"

    @property
    def is_tie(self) -> bool:
        return len(self.coWinners) > 1


@dataclass(frozen=True)
class TeamScorecard:
    teamId: str
    teamName: str
    groupNumber: int
    players: tuple[Player, ...]
    holes: tuple[Optional[int], ...]
    frontNine: int
    backNine: int
    total: int
    frontNineToPar: int
    backNineToPar: int
    totalToPar: int
    counts: dict[str, int]

