"""Sentry wiring for the awards API.

Everything is read from the environment when ``init_sentry`` runs; without
``SENTRY_DSN`` nothing is sent.
"""

from dataclasses import dataclass
import logging
import os
from typing import Any, Optional

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration

logger = logging.getLogger(__name__)

# Score files and scorecard photos never leave the process.
UPLOAD_PATH_SUFFIXES = ("/event/upload", "/scorecards/photos")


@dataclass(frozen=True)
class SentrySettings:
    dsn: str
    environment: Optional[str] = None
    release: Optional[str] = None
    traces_sample_rate: float = 0.0
    profiles_sample_rate: float = 0.0


def parse_sample_rate(env_var: str, default: float = 0.0) -> float:
    raw_value = (os.getenv(env_var) or "").strip()
    if not raw_value:
        return default
    try:
        value = float(raw_value)
    except ValueError:
        logger.warning("%s is not a number (got %r); using %.2f", env_var, raw_value, default)
        return default
    if not 0 <= value <= 1:
        logger.warning("%s must be between 0 and 1 (got %s); using %.2f", env_var, value, default)
        return default
    return value


def sentry_settings() -> Optional[SentrySettings]:
    dsn = (os.getenv("SENTRY_DSN") or "").strip()
    if not dsn:
        return None
    return SentrySettings(
        dsn=dsn,
        environment=(os.getenv("SENTRY_ENVIRONMENT") or "").strip() or None,
        release=(os.getenv("SENTRY_RELEASE") or "").strip() or None,
        traces_sample_rate=parse_sample_rate("SENTRY_TRACES_SAMPLE_RATE"),
        profiles_sample_rate=parse_sample_rate("SENTRY_PROFILES_SAMPLE_RATE"),
    )


def sentry_enabled() -> bool:
    return sentry_settings() is not None


def drop_upload_bodies(event: dict[str, Any], hint: dict[str, Any]) -> dict[str, Any]:
    """``before_send`` hook: strip request bodies of score and photo uploads."""
    request = event.get("request") or {}
    url = (request.get("url") or "").split("?", 1)[0].rstrip("/")
    if url.endswith(UPLOAD_PATH_SUFFIXES):
        request.pop("data", None)
    return event


def init_sentry() -> bool:
    settings = sentry_settings()
    if settings is None:
        logger.info("SENTRY_DSN not provided; Sentry stays off.")
        return False

    sentry_sdk.init(
        dsn=settings.dsn,
        integrations=[FastApiIntegration()],
        environment=settings.environment,
        release=settings.release,
        traces_sample_rate=settings.traces_sample_rate,
        profiles_sample_rate=settings.profiles_sample_rate,
        send_default_pii=False,
        before_send=drop_upload_bodies,
    )
    logger.info(
        "Sentry enabled (environment=%s, traces=%.2f)",
        settings.environment or "default",
        settings.traces_sample_rate,
    )
    return True
