"""Process-local event board: the roster, cards and handicaps being scored.

Nothing is persisted. Every change bumps ``revision``; derived results
(awards, scorecards) are memoised per revision so reads between uploads do
not recompute.
"""

from __future__ import annotations

from asyncio import Lock
from dataclasses import dataclass, field
import logging
from typing import Any, Callable, Hashable, Mapping, Sequence

from .models import Team, TeamRound
from .sample_data import sample_rounds, sample_teams
from .services.extraction import ExtractedScorecard, convert_to_rounds

logger = logging.getLogger(__name__)

SOURCES = ("sample", "manual", "upload", "photo")


@dataclass(frozen=True)
class EventSnapshot:
    teams: tuple[Team, ...]
    rounds: tuple[TeamRound, ...]
    handicaps: Mapping[str, float] = field(default_factory=dict)
    source: str = "sample"
    revision: int = 0
    photos: int = 0


class EventBoard:
    def __init__(
        self,
        teams: Sequence[Team] = (),
        rounds: Sequence[TeamRound] = (),
        *,
        handicaps: Mapping[str, float] | None = None,
        source: str = "manual",
    ) -> None:
        self._lock = Lock()
        self._snapshot = EventSnapshot(
            teams=tuple(teams),
            rounds=tuple(rounds),
            handicaps=dict(handicaps or {}),
            source=source,
        )
        self._memo: dict[Hashable, Any] = {}

    @classmethod
    def from_sample(cls) -> "EventBoard":
        return cls(sample_teams(), sample_rounds(), source="sample")

    @property
    def snapshot(self) -> EventSnapshot:
        return self._snapshot

    def memoized(self, key: Hashable, compute: Callable[[EventSnapshot], Any]) -> Any:
        """Return ``compute(snapshot)``, cached until the next change."""
        snapshot = self._snapshot
        memo_key = (snapshot.revision, key)
        if memo_key not in self._memo:
            self._memo = {k: v for k, v in self._memo.items() if k[0] == snapshot.revision}
            self._memo[memo_key] = compute(snapshot)
        return self._memo[memo_key]

    def _commit(self, **changes: Any) -> EventSnapshot:
        current = self._snapshot
        values = {
            "teams": current.teams,
            "rounds": current.rounds,
            "handicaps": current.handicaps,
            "source": current.source,
            "photos": current.photos,
        }
        values.update(changes)
        self._snapshot = EventSnapshot(revision=current.revision + 1, **values)
        logger.info(
            "Event board revision %d (%s): %d teams, %d cards",
            self._snapshot.revision,
            self._snapshot.source,
            len(self._snapshot.teams),
            len(self._snapshot.rounds),
        )
        return self._snapshot

    async def replace(
        self, teams: Sequence[Team], rounds: Sequence[TeamRound], *, source: str = "manual"
    ) -> EventSnapshot:
        if source not in SOURCES:
            raise ValueError(f"unknown event source {source!r}")
        known = {team.id for team in teams}
        async with self._lock:
            handicaps = {k: v for k, v in self._snapshot.handicaps.items() if k in known}
            return self._commit(
                teams=tuple(teams),
                rounds=tuple(rounds),
                handicaps=handicaps,
                source=source,
                photos=0,
            )

    async def add_photo_results(
        self, extractions: Sequence[ExtractedScorecard]
    ) -> EventSnapshot:
        """Append teams read from photos; the first photo replaces other sources.

        Photos are numbered in upload order across calls, and the number
        prefixes each team name.
        """
        async with self._lock:
            current = self._snapshot
            if current.source == "photo":
                teams, rounds = list(current.teams), list(current.rounds)
                handicaps = dict(current.handicaps)
                photos = current.photos
            else:
                teams, rounds, handicaps, photos = [], [], {}, 0
            for extracted in extractions:
                photos += 1
                photo_teams, photo_rounds = convert_to_rounds(extracted, photos)
                teams.extend(photo_teams)
                rounds.extend(photo_rounds)
            return self._commit(
                teams=tuple(teams),
                rounds=tuple(rounds),
                handicaps=handicaps,
                source="photo",
                photos=photos,
            )

    async def set_handicaps(self, handicaps: Mapping[str, float]) -> EventSnapshot:
        async with self._lock:
            return self._commit(handicaps=dict(handicaps))

    async def reset(self) -> EventSnapshot:
        async with self._lock:
            return self._commit(
                teams=tuple(sample_teams()),
                rounds=tuple(sample_rounds()),
                handicaps={},
                source="sample",
                photos=0,
            )


event_board = EventBoard.from_sample()


def get_event_board() -> EventBoard:
    return event_board
