"""Ingestion services: validation, file uploads, photo extraction."""

from .validation import (
    ValidationError,
    validate_event,
    validate_handicaps,
    validate_hole,
    validate_team,
    validate_team_round,
)
from .uploads import parse_csv_upload, parse_json_upload, parse_upload, sample_csv

__all__ = [
    "ValidationError",
    "validate_event",
    "validate_handicaps",
    "validate_hole",
    "validate_team",
    "validate_team_round",
    "parse_csv_upload",
    "parse_json_upload",
    "parse_upload",
    "sample_csv",
]
