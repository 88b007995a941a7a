from __future__ import annotations

import logging
import os
from typing import Optional
from urllib.parse import urljoin

logger = logging.getLogger(__name__)

ROOT_DIR = os.path.normpath(os.path.join(os.path.dirname(__file__), os.pardir, os.pardir))


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number, using %s", name, raw, default)
        return default


def resolve_api_base(dev: bool, raw: Optional[str]) -> str:
    """Return the prefix for API calls.

    Development builds, and builds without an override, talk to the same
    origin that served them, so the base is empty.
    """
    if dev:
        return ""
    return (raw or "").strip()


def api_url(path: str, base: Optional[str] = None) -> str:
    """Join ``path`` onto the API base with exactly one '/' between them."""
    if base is None:
        base = API_BASE
    if not base:
        return path
    return f"{base.rstrip('/')}/{path.lstrip('/')}"


def absolute_url(url: str, origin: Optional[str] = None) -> str:
    """Resolve a root-relative URL against the configured origin."""
    if url.startswith(("http://", "https://")):
        return url
    return urljoin((origin or ORIGIN).rstrip("/") + "/", url)


# Build mode and base URL override
DEV = _env_flag("CARDTRACKER_DEV")
RAW_API_BASE = os.getenv("CARDTRACKER_API_BASE_URL")
API_BASE = resolve_api_base(DEV, RAW_API_BASE)

# Same-origin requests need somewhere to go outside a browser
ORIGIN = os.getenv("CARDTRACKER_ORIGIN", "http://localhost:8080")

HTTP_TIMEOUT = _env_float("CARDTRACKER_HTTP_TIMEOUT", 15.0)

STORAGE_PATH = os.getenv("CARDTRACKER_STORAGE_PATH", os.path.join(ROOT_DIR, "settings", "storage.json"))
STORAGE_KEY = "auth_user"

LOG_DIR = os.getenv("CARDTRACKER_LOG_DIR", os.path.join(ROOT_DIR, "debug", "logs"))

# Endpoints
LOGIN_PATH = "/api/auth/login"
CARDS_PATH = "/api/cards"
CARDS_BY_EXPANSION_NAME_PATH = "/api/cards/by-expansion-name"
CARDS_BY_NUMBER_PATH = "/api/cards/by-number"
EXPANSIONS_PATH = "/api/expansions"
EXPANSION_CARDS_PATH = "/api/expansions/{exp_id}/cards"
EXPANSIONS_BY_NAME_PATH = "/api/expansions/by-name/{name}"
OFFERS_PATH = "/api/offers"
OFFERS_BY_CARD_NAME_PATH = "/api/offers/by-card-name"

DEFAULT_HEADERS = {
    "Accept": "application/json",
}

logger.debug("Config resolved: dev=%s raw=%r api_base=%r origin=%s", DEV, RAW_API_BASE, API_BASE, ORIGIN)
