"""Read team scores from scorecard photos through a vision model.

The core only ever sees validated ``TeamRound`` values. This module owns the
provider seam (``ScoreExtractionProvider``), the Gemini implementation with
its API-key fallback, clean-up of the model's best-effort JSON and the
content-addressed cache that keeps a re-uploaded photo from being read twice.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import Any, Callable, Optional, Protocol, Sequence

from google import genai
from google.genai import types
from pydantic import BaseModel, Field

from ..cache import ContentCache
from ..exceptions import ExtractorUnavailable, ScoreExtractionFailed
from ..models import HOLES_PER_ROUND, HoleRecord, Player, Team, TeamRound
from ..scoring.scorecard import STANDARD_PARS
from .photo_uploads import ScorecardPhoto

logger = logging.getLogger(__name__)

MIN_STROKES = 1
MAX_STROKES = 12
DEFAULT_PAR = 4

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")

PROMPT = """
Read this golf scorecard photo carefully and return ONLY a JSON object of the
form:

{
  "teams": [
    {
      "teamName": "A Team",
      "scores": [4, 3, 5, 4, 4, 3, 4, 4, 5, 4, 3, 4, 5, 4, 3, 4, 4, 5],
      "players": [{"name": "Player name"}]
    }
  ],
  "holes": 18,
  "pars": [4, 3, 4, 5, 4, 3, 4, 4, 5, 4, 3, 4, 5, 4, 3, 4, 4, 5]
}

Rules:
- Teams play foursome: one score per hole per team. Read holes 1 to 18 in order.
- Use the team labels printed on the card ("A Team", "B Team", ...). If none
  are printed, name them "Team 1", "Team 2" from top to bottom.
- Copy player names exactly as written.
- A blank or unreadable score is replaced by that hole's par. Scores are 1-12.
- Pars are printed next to the hole numbers and are always 3, 4 or 5.
- The same photo must always give the same answer. No prose, no comments.
"""


class ExtractedPlayer(BaseModel):
    name: str


class ExtractedTeam(BaseModel):
    teamName: str
    scores: list[int] = Field(default_factory=list)
    players: list[ExtractedPlayer] = Field(default_factory=list)


class ExtractedScorecard(BaseModel):
    teams: list[ExtractedTeam]
    holes: int = HOLES_PER_ROUND
    pars: list[int] = Field(default_factory=lambda: list(STANDARD_PARS))


class ScoreExtractionProvider(Protocol):
    models: Sequence[str]

    @property
    def configured(self) -> bool: ...

    async def available(self) -> bool: ...

    async def extract(self, photo: ScorecardPhoto) -> ExtractedScorecard: ...


def parse_model_reply(text: str) -> dict[str, Any]:
    """Pull the JSON object out of a model reply that may wrap it in prose."""
    if not text or not text.strip():
        raise ScoreExtractionFailed("the model returned an empty reply")
    match = _JSON_OBJECT.search(text)
    candidate = match.group(0) if match else text
    try:
        payload = json.loads(candidate)
    except json.JSONDecodeError:
        raise ScoreExtractionFailed("the model reply is not valid JSON")
    if not isinstance(payload, dict):
        raise ScoreExtractionFailed("the model reply is not a JSON object")
    return payload


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def normalize_pars(raw: Any) -> list[int]:
    if not isinstance(raw, list) or len(raw) != HOLES_PER_ROUND:
        return list(STANDARD_PARS)
    pars = []
    for value in raw:
        par = _to_int(value)
        pars.append(par if par in (3, 4, 5) else DEFAULT_PAR)
    return pars


def normalize_scores(raw: Any, pars: Sequence[int]) -> list[int]:
    """Pad or cut to 18 holes; unreadable strokes fall back to the hole's par."""
    values = list(raw) if isinstance(raw, list) else []
    values = values[:HOLES_PER_ROUND]
    scores = []
    for index in range(HOLES_PER_ROUND):
        strokes = _to_int(values[index]) if index < len(values) else None
        if strokes is None or not MIN_STROKES <= strokes <= MAX_STROKES:
            strokes = pars[index]
        scores.append(strokes)
    return scores


def normalize_extraction(payload: dict[str, Any]) -> ExtractedScorecard:
    teams_raw = payload.get("teams")
    if not isinstance(teams_raw, list) or not teams_raw:
        raise ScoreExtractionFailed(
            "no teams were found; upload a photo of a filled-in scorecard"
        )
    pars = normalize_pars(payload.get("pars"))

    teams: list[ExtractedTeam] = []
    for team_index, team_raw in enumerate(teams_raw, start=1):
        team_raw = team_raw if isinstance(team_raw, dict) else {}
        name = team_raw.get("teamName")
        name = name.strip() if isinstance(name, str) and name.strip() else f"Team {team_index}"
        players = []
        players_raw = team_raw.get("players")
        for player_index, player_raw in enumerate(
            players_raw if isinstance(players_raw, list) else [], start=1
        ):
            player_name = player_raw.get("name") if isinstance(player_raw, dict) else None
            if not isinstance(player_name, str) or not player_name.strip():
                player_name = f"Player {player_index}"
            players.append(ExtractedPlayer(name=player_name.strip()))
        teams.append(
            ExtractedTeam(
                teamName=name,
                scores=normalize_scores(team_raw.get("scores"), pars),
                players=players,
            )
        )
    return ExtractedScorecard(teams=teams, holes=HOLES_PER_ROUND, pars=pars)


def convert_to_rounds(
    extracted: ExtractedScorecard, image_order: int
) -> tuple[list[Team], list[TeamRound]]:
    """Turn one photo's teams into roster entries and cards.

    ``image_order`` (1-based upload position) prefixes team names as
    ``"<order>-<name>"`` so rankings can group teams by photo.
    """
    pars = extracted.pars if len(extracted.pars) == HOLES_PER_ROUND else list(STANDARD_PARS)
    teams: list[Team] = []
    rounds: list[TeamRound] = []
    for team_index, team_data in enumerate(extracted.teams, start=1):
        team_id = f"team-{image_order}-{team_index}"
        team_name = f"{image_order}-{team_data.teamName}"
        players = tuple(
            Player(id=f"player-{image_order}-{team_index}-{player_index}", name=p.name)
            for player_index, p in enumerate(team_data.players, start=1)
        )
        teams.append(Team(id=team_id, name=team_name, players=players))
        holes = tuple(
            HoleRecord(holeNumber=number, par=pars[number - 1], strokes=strokes)
            for number, strokes in enumerate(team_data.scores[:HOLES_PER_ROUND], start=1)
        )
        rounds.append(TeamRound(teamId=team_id, teamName=team_name, holes=holes))
    return teams, rounds


class GeminiScoreExtractor:
    """Gemini vision provider.

    API keys are tried in order; the first key whose client answers a probe
    is kept for later calls until a call with it fails.
    """

    def __init__(
        self,
        api_keys: Sequence[str],
        *,
        model: str = "gemini-1.5-flash",
        models: Optional[Sequence[str]] = None,
        client_factory: Callable[..., Any] = genai.Client,
        retry_delay: float = 1.0,
    ) -> None:
        self._api_keys = list(api_keys)
        self._model = model
        self.models = tuple(models) if models else (model,)
        self._client_factory = client_factory
        self._retry_delay = retry_delay
        self._client: Any = None
        self._client_key: Optional[str] = None
        self._lock = asyncio.Lock()

    @property
    def configured(self) -> bool:
        return bool(self._api_keys)

    def _probe(self, key: str) -> Any:
        client = self._client_factory(api_key=key)
        response = client.models.generate_content(model=self._model, contents="ping")
        if not response.text:
            raise ScoreExtractionFailed("empty probe reply")
        return client

    async def _working_client(self) -> Any:
        async with self._lock:
            if self._client is not None and self._client_key in self._api_keys:
                return self._client
            for index, key in enumerate(self._api_keys, start=1):
                try:
                    client = await asyncio.to_thread(self._probe, key)
                except Exception as exc:
                    logger.warning("Gemini API key #%d failed its probe: %s", index, exc)
                    if index < len(self._api_keys):
                        await asyncio.sleep(self._retry_delay)
                    continue
                logger.info("Using Gemini API key #%d", index)
                self._client, self._client_key = client, key
                return client
            self._client, self._client_key = None, None
            return None

    async def available(self) -> bool:
        return await self._working_client() is not None

    def _generate(self, client: Any, photo: ScorecardPhoto) -> str:
        response = client.models.generate_content(
            model=self._model,
            contents=[
                types.Part.from_bytes(data=photo.data, mime_type=photo.mime_type),
                PROMPT,
            ],
            config=types.GenerateContentConfig(
                temperature=0.1,
                top_k=1,
                top_p=0.8,
                response_mime_type="application/json",
            ),
        )
        return response.text or ""

    async def extract(self, photo: ScorecardPhoto) -> ExtractedScorecard:
        client = await self._working_client()
        if client is None:
            raise ExtractorUnavailable("every configured Gemini API key failed")
        try:
            reply = await asyncio.to_thread(self._generate, client, photo)
        except Exception as exc:
            logger.error("Gemini extraction failed for %s: %s", photo.filename or photo.fingerprint[:12], exc)
            async with self._lock:
                self._client, self._client_key = None, None
            raise ScoreExtractionFailed("the vision service could not read the photo")
        return normalize_extraction(parse_model_reply(reply))


class ScorecardReader:
    """Cache-backed front for a provider, keyed by photo fingerprint."""

    def __init__(self, provider: ScoreExtractionProvider, cache: ContentCache) -> None:
        self.provider = provider
        self.cache = cache

    async def read(self, photo: ScorecardPhoto) -> tuple[ExtractedScorecard, bool]:
        """Return the extraction and whether it came from the cache."""
        cached = await self.cache.get(photo.fingerprint)
        if cached is not None:
            logger.debug("Extraction cache hit for %s", photo.fingerprint[:12])
            return cached, True
        extracted = await self.provider.extract(photo)
        await self.cache.set(photo.fingerprint, extracted)
        return extracted, False
