import logging
import os

logger = logging.getLogger(__name__)


def _canon_prefix(val):
    """
    Normalize API prefix to always be exactly like '/api':
      - defaults to '/api' when unset/empty
      - ensures a single leading slash
      - removes any trailing slash (except for root)
    """
    val = (val or "/api").strip()
    if not val.startswith("/"):
        val = "/" + val
    if len(val) > 1 and val.endswith("/"):
        val = val[:-1]
    return val


def _split_keys(raw):
    return [k.strip() for k in (raw or "").split(",") if k.strip()]


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("%s is not a valid integer (got %r); defaulting to %d", name, raw, default)
        return default
    if value <= 0:
        logger.warning("%s must be positive; defaulting to %d", name, default)
        return default
    return value


def _choice_env(name: str, choices: set[str], default: str) -> str:
    raw = (os.getenv(name) or "").strip().lower()
    if not raw:
        return default
    if raw not in choices:
        logger.warning(
            "%s must be one of %s (got %r); defaulting to %s",
            name,
            ", ".join(sorted(choices)),
            raw,
            default,
        )
        return default
    return raw


API_PREFIX = _canon_prefix(os.getenv("API_PREFIX"))

# Comma separated; tried in order until one answers.
GEMINI_API_KEYS = _split_keys(os.getenv("GEMINI_API_KEYS") or os.getenv("GEMINI_API_KEY"))
GEMINI_MODEL = (os.getenv("GEMINI_MODEL") or "gemini-1.5-flash").strip()
GEMINI_VISION_MODELS = ("gemini-1.5-flash", "gemini-1.5-pro")

RANKING_MODE = _choice_env("RANKING_MODE", {"dense", "competition"}, "dense")
WINNER_TIE_BREAK = _choice_env(
    "WINNER_TIE_BREAK", {"higher_handicap", "none"}, "higher_handicap"
)

EXTRACTION_CACHE_SIZE = _int_env("EXTRACTION_CACHE_SIZE", 64)
EXTRACTION_CACHE_TTL = float(_int_env("EXTRACTION_CACHE_TTL", 24 * 60 * 60))
MAX_SCORECARD_PHOTO_SIZE = _int_env("MAX_SCORECARD_PHOTO_SIZE", 5 * 1024 * 1024)
PHOTO_RATE_LIMIT = (os.getenv("PHOTO_RATE_LIMIT") or "10/minute").strip()


def rate_limits_disabled() -> bool:
    return (os.getenv("DISABLE_RATE_LIMITS") or "").lower() == "true"
