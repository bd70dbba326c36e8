"""
Environment variable loading and validation for the Subtaste trainer.

- SUBTASTE_API_URL: taste API base URL (default: http://localhost:5000)
- SUBTASTE_API_TOKEN: Bearer token for the taste API (optional)
- SUBTASTE_PROFILE_ID: active profile; empty means the account's own genome
- SUBTASTE_SIGNAL_LIMIT: how many recent signals feed the governance scorer
- SUBTASTE_CARDS_PER_ROUND: cards rebuilt after each resolution
- SUBTASTE_BEST_WORST_WEIGHT: weight override for best/worst likert signals
- SUBTASTE_REQUEST_TIMEOUT_SEC: HTTP timeout for taste API calls
- SUBTASTE_FOLIO_ID / SUBTASTE_PROJECT_ID: opaque routing fields passed through on signals
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is subtaste_trainer/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_API_URL = "http://localhost:5000"
DEFAULT_SIGNAL_LIMIT = 100
DEFAULT_CARDS_PER_ROUND = 1
DEFAULT_BEST_WORST_WEIGHT = 1.6
DEFAULT_REQUEST_TIMEOUT_SEC = 15.0


def load_trainer_env() -> None:
    """Load .env from project root. Safe to call multiple times."""
    load_dotenv(_ENV_PATH)


def _get_str(name: str) -> str | None:
    raw = (os.getenv(name) or "").strip()
    return raw or None


def _get_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _get_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def get_api_url() -> str:
    """Return SUBTASTE_API_URL without trailing slash."""
    load_trainer_env()
    return (_get_str("SUBTASTE_API_URL") or DEFAULT_API_URL).rstrip("/")


def get_api_token() -> str | None:
    load_trainer_env()
    return _get_str("SUBTASTE_API_TOKEN")


def get_profile_id() -> str | None:
    load_trainer_env()
    return _get_str("SUBTASTE_PROFILE_ID")


def get_signal_limit() -> int:
    load_trainer_env()
    return _get_int("SUBTASTE_SIGNAL_LIMIT", DEFAULT_SIGNAL_LIMIT)


def get_cards_per_round() -> int:
    load_trainer_env()
    return _get_int("SUBTASTE_CARDS_PER_ROUND", DEFAULT_CARDS_PER_ROUND)


def get_best_worst_weight() -> float:
    load_trainer_env()
    return _get_float("SUBTASTE_BEST_WORST_WEIGHT", DEFAULT_BEST_WORST_WEIGHT)


def get_request_timeout_sec() -> float:
    load_trainer_env()
    return _get_float("SUBTASTE_REQUEST_TIMEOUT_SEC", DEFAULT_REQUEST_TIMEOUT_SEC)


def get_routing_fields() -> dict[str, str]:
    """
    Return the opaque routing fields (folioId, projectId) that ride along on
    every submitted signal. Unset fields are omitted.
    """
    load_trainer_env()
    routing: dict[str, str] = {}
    folio_id = _get_str("SUBTASTE_FOLIO_ID")
    project_id = _get_str("SUBTASTE_PROJECT_ID")
    if folio_id:
        routing["folioId"] = folio_id
    if project_id:
        routing["projectId"] = project_id
    return routing
