"""Parse uploaded score files (CSV or JSON) into a roster and team cards.

CSV files carry one row per player with the team name and 18 hole columns.
In foursome play the team shares one ball, so the first row of a team that
has any scores becomes the team card; further rows only add players.

JSON files are either ``{"teams": [...], "rounds": [...]}`` with rounds in
the API shape, or the dashboard export ``{"teams": [...], "scorecards":
[...]}`` whose holes use ``hole``/``par``/``score`` keys.
"""

from __future__ import annotations

import csv
import io
import json
import logging
from pathlib import Path
from typing import Any, Optional

from ..models import HOLES_PER_ROUND, HoleRecord, Player, Team, TeamRound
from ..scoring.scorecard import STANDARD_PARS
from .validation import ValidationError, validate_event

logger = logging.getLogger(__name__)

PLAYER_COLUMNS = ("플레이어", "player", "name", "이름")
TEAM_COLUMNS = ("팀", "team", "팀명")
SUPPORTED_EXTENSIONS = frozenset({".csv", ".json"})
MAX_UPLOAD_SIZE = 1024 * 1024


def _hole_columns(number: int) -> tuple[str, ...]:
    return (f"hole{number}", f"홀{number}", str(number))


def _cell(row: dict[str, str], columns: tuple[str, ...]) -> Optional[str]:
    for column in columns:
        value = (row.get(column) or "").strip()
        if value:
            return value
    return None


def _decode(data: bytes) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise ValidationError("Uploaded file must be UTF-8 encoded text.")


def parse_csv_upload(data: bytes) -> tuple[list[Team], list[TeamRound]]:
    text = _decode(data)
    lines = [line for line in text.splitlines() if line.strip()]
    if len(lines) < 2:
        raise ValidationError("CSV file is empty or has no header row.")

    reader = csv.reader(lines)
    headers = [h.strip() for h in next(reader)]
    rows: list[dict[str, str]] = []
    for values in reader:
        if len(values) != len(headers):
            logger.debug("Skipping CSV row with %d cells (header has %d)", len(values), len(headers))
            continue
        rows.append({h: v.strip() for h, v in zip(headers, values)})

    teams: dict[str, Team] = {}
    players: dict[str, list[Player]] = {}
    cards: dict[str, TeamRound] = {}
    player_ids: dict[str, str] = {}

    for row in rows:
        player_name = _cell(row, PLAYER_COLUMNS)
        if not player_name:
            raise ValidationError("A CSV row is missing the player name.")
        team_name = _cell(row, TEAM_COLUMNS)
        if player_name not in player_ids:
            player_ids[player_name] = f"player_{len(player_ids) + 1}"
        if not team_name:
            continue

        if team_name not in teams:
            team_id = f"team_{len(teams) + 1}"
            teams[team_name] = Team(id=team_id, name=team_name)
            players[team_name] = []
        team = teams[team_name]
        player = Player(id=player_ids[player_name], name=player_name)
        if all(p.id != player.id for p in players[team_name]):
            players[team_name].append(player)

        if team.id in cards:
            continue
        holes: list[HoleRecord] = []
        for number in range(1, HOLES_PER_ROUND + 1):
            raw = _cell(row, _hole_columns(number))
            if raw is None:
                continue
            try:
                strokes = int(raw)
            except ValueError:
                continue
            if strokes > 0:
                holes.append(
                    HoleRecord(holeNumber=number, par=STANDARD_PARS[number - 1], strokes=strokes)
                )
        if holes:
            cards[team.id] = TeamRound(teamId=team.id, teamName=team.name, holes=tuple(holes))

    roster = [
        Team(id=team.id, name=team.name, players=tuple(players[name]))
        for name, team in teams.items()
    ]
    return roster, list(cards.values())


def _scorecards_to_rounds(
    scorecards: list[Any], team_names: dict[str, str]
) -> list[dict[str, Any]]:
    rounds: list[dict[str, Any]] = []
    for card in scorecards:
        if not isinstance(card, dict):
            raise ValidationError("Each scorecard must be an object with teamId and holes.")
        team_id = card.get("teamId")
        rounds.append(
            {
                "teamId": team_id,
                "teamName": card.get("teamName") or team_names.get(team_id),
                "holes": card.get("holes") or [],
            }
        )
    return rounds


def _collapse_player_cards(rounds: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Dashboard exports may hold one card per player; keep each team's first."""
    seen: set[Any] = set()
    collapsed: list[dict[str, Any]] = []
    for card in rounds:
        if card.get("teamId") in seen:
            continue
        seen.add(card.get("teamId"))
        collapsed.append(card)
    return collapsed


def parse_json_upload(data: bytes) -> tuple[list[Team], list[TeamRound]]:
    try:
        payload = json.loads(_decode(data))
    except json.JSONDecodeError as exc:
        raise ValidationError(f"JSON file could not be parsed: {exc.msg}.")
    if not isinstance(payload, dict) or "teams" not in payload:
        raise ValidationError("JSON file must contain 'teams' and 'rounds' or 'scorecards'.")

    teams_raw = payload.get("teams") or []
    team_names = {
        t.get("id"): t.get("name") for t in teams_raw if isinstance(t, dict)
    }
    if "rounds" in payload:
        rounds_raw = payload.get("rounds") or []
    elif "scorecards" in payload:
        rounds_raw = _collapse_player_cards(
            _scorecards_to_rounds(payload.get("scorecards") or [], team_names)
        )
    else:
        raise ValidationError("JSON file must contain 'rounds' or 'scorecards'.")
    return validate_event(teams_raw, rounds_raw)


def upload_kind(filename: str | None) -> str:
    suffix = Path(filename or "").suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        return ""
    return suffix.lstrip(".")


def parse_upload(filename: str | None, data: bytes) -> tuple[list[Team], list[TeamRound]]:
    """Dispatch on the file extension; callers check ``upload_kind`` first."""
    kind = upload_kind(filename)
    if kind == "csv":
        return parse_csv_upload(data)
    if kind == "json":
        return parse_json_upload(data)
    raise ValidationError("Unsupported file type; upload a CSV or JSON file.")


def sample_csv() -> str:
    header = ["player", "team"] + [f"hole{n}" for n in range(1, HOLES_PER_ROUND + 1)]
    rows = [
        ["김철수", "1-드래곤즈", 4, 3, 5, 6, 4, 3, 4, 4, 5, 4, 3, 4, 5, 4, 3, 4, 4, 5],
        ["이영희", "1-드래곤즈", 5, 3, 4, 5, 4, 3, 4, 5, 4, 4, 3, 4, 5, 4, 3, 4, 4, 5],
        ["박민수", "2-타이거즈", 4, 3, 4, 5, 5, 3, 4, 4, 5, 4, 3, 5, 5, 4, 3, 4, 4, 5],
    ]
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return buffer.getvalue()
