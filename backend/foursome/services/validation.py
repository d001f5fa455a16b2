import math
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ..models import HOLES_PER_ROUND, HoleRecord, Player, Team, TeamRound

VALID_PARS = frozenset({3, 4, 5})


class ValidationError(Exception):
    """Raised when submitted scores or rosters are invalid."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


def _require_int(raw: Any, label: str) -> int:
    # bool is a subclass of int
    if isinstance(raw, bool):
        raise ValidationError(f"{label} must be an integer (not a boolean).")
    if isinstance(raw, float) and not raw.is_integer():
        raise ValidationError(f"{label} must be an integer.")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be an integer.")


def _require_text(raw: Any, label: str) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise ValidationError(f"{label} must be a non-empty string.")
    return raw.strip()


def _first_present(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return None


def validate_hole(raw: Any, *, label: str = "Hole") -> HoleRecord:
    """Validate one hole entry.

    Accepts ``holeNumber``/``hole``, ``par`` and ``strokes``/``score`` keys.
    """
    if not isinstance(raw, Mapping):
        raise ValidationError(f"{label} must be an object with hole, par and strokes.")

    hole_number = _first_present(raw, "holeNumber", "hole")
    par = raw.get("par")
    strokes = _first_present(raw, "strokes", "score")
    if hole_number is None or par is None or strokes is None:
        raise ValidationError(f"{label} must include hole number, par and strokes.")

    hole_number = _require_int(hole_number, f"{label} hole number")
    par = _require_int(par, f"{label} par")
    strokes = _require_int(strokes, f"{label} strokes")

    if not 1 <= hole_number <= HOLES_PER_ROUND:
        raise ValidationError(
            f"{label} hole number must be between 1 and {HOLES_PER_ROUND}."
        )
    if par not in VALID_PARS:
        raise ValidationError(f"{label} par must be 3, 4 or 5.")
    if strokes < 1:
        raise ValidationError(f"{label} strokes must be >= 1.")
    return HoleRecord(holeNumber=hole_number, par=par, strokes=strokes)


def validate_team_round(raw: Any, *, team_names: Optional[Mapping[str, str]] = None) -> TeamRound:
    """Validate a team card: at most 18 holes, each hole number once."""
    if not isinstance(raw, Mapping):
        raise ValidationError("Each round must be an object with teamId and holes.")

    team_id = _require_text(raw.get("teamId"), "Round teamId")
    team_name = raw.get("teamName") or (team_names or {}).get(team_id) or team_id
    team_name = _require_text(team_name, f"Round {team_id} teamName")

    holes_raw = raw.get("holes")
    if holes_raw is None:
        holes_raw = []
    if not isinstance(holes_raw, Sequence) or isinstance(holes_raw, (str, bytes)):
        raise ValidationError(f"Round {team_id} holes must be a list.")
    if len(holes_raw) > HOLES_PER_ROUND:
        raise ValidationError(
            f"Round {team_id} has {len(holes_raw)} holes; at most {HOLES_PER_ROUND} are allowed."
        )

    holes: List[HoleRecord] = []
    seen: set[int] = set()
    for i, hole_raw in enumerate(holes_raw, start=1):
        hole = validate_hole(hole_raw, label=f"Round {team_id} hole #{i}")
        if hole.holeNumber in seen:
            raise ValidationError(
                f"Round {team_id} lists hole {hole.holeNumber} more than once."
            )
        seen.add(hole.holeNumber)
        holes.append(hole)

    holes.sort(key=lambda h: h.holeNumber)
    return TeamRound(teamId=team_id, teamName=team_name, holes=tuple(holes))


def validate_team(raw: Any) -> Team:
    if not isinstance(raw, Mapping):
        raise ValidationError("Each team must be an object with id and name.")
    team_id = _require_text(raw.get("id"), "Team id")
    name = _require_text(raw.get("name") or team_id, f"Team {team_id} name")

    players_raw = raw.get("players") or []
    if not isinstance(players_raw, Sequence) or isinstance(players_raw, (str, bytes)):
        raise ValidationError(f"Team {team_id} players must be a list.")
    players: List[Player] = []
    for i, player in enumerate(players_raw, start=1):
        if isinstance(player, str):
            player = {"name": player}
        if not isinstance(player, Mapping):
            raise ValidationError(f"Team {team_id} player #{i} must be an object.")
        player_name = _require_text(player.get("name"), f"Team {team_id} player #{i} name")
        player_id = player.get("id") or f"{team_id}-p{i}"
        players.append(Player(id=str(player_id), name=player_name))
    return Team(id=team_id, name=name, players=tuple(players))


def validate_event(
    teams_raw: Sequence[Any], rounds_raw: Sequence[Any]
) -> Tuple[List[Team], List[TeamRound]]:
    """Validate a roster and its cards; team ids must be unique in the roster."""
    if not isinstance(teams_raw, Sequence) or isinstance(teams_raw, (str, bytes)):
        raise ValidationError("teams must be a list.")
    if not isinstance(rounds_raw, Sequence) or isinstance(rounds_raw, (str, bytes)):
        raise ValidationError("rounds must be a list.")

    teams: List[Team] = []
    seen: set[str] = set()
    for raw in teams_raw:
        team = validate_team(raw)
        if team.id in seen:
            raise ValidationError(f"Team id '{team.id}' is listed more than once.")
        seen.add(team.id)
        teams.append(team)

    names = {team.id: team.name for team in teams}
    rounds = [validate_team_round(raw, team_names=names) for raw in rounds_raw]
    for team_round in rounds:
        if team_round.teamId not in seen:
            seen.add(team_round.teamId)
            teams.append(Team(id=team_round.teamId, name=team_round.teamName))
    return teams, rounds


def validate_handicaps(raw: Any) -> Dict[str, float]:
    """Return a clean ``teamId -> handicap`` map; partial maps are fine."""
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ValidationError("Handicaps must be an object mapping team ids to numbers.")
    handicaps: Dict[str, float] = {}
    for team_id, value in raw.items():
        if value is None:
            continue
        if isinstance(value, bool):
            raise ValidationError(f"Handicap for {team_id} must be a number (not a boolean).")
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ValidationError(f"Handicap for {team_id} must be a number.")
        if not math.isfinite(number):
            raise ValidationError(f"Handicap for {team_id} must be finite.")
        handicaps[str(team_id)] = int(number) if number.is_integer() else number
    return handicaps
