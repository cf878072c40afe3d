"""Configuration for environment variables and runtime knobs.

Provides a simple config object with the Elasticsearch connection, index
naming and REST routing parameters. This keeps the rest of the codebase
decoupled from direct env access.
"""

from __future__ import annotations

import os
from typing import Optional, Tuple

from dotenv import load_dotenv

# Load .env for local dev if available
load_dotenv()


def parse_shield_credentials(value: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """Split an ``ES_SHIELD`` value (``user:password``) into its parts.

    Returns ``(None, None)`` when the value is unset or blank.
    """
    if not value or not value.strip():
        return None, None
    user, sep, password = value.strip().partition(":")
    if not sep or not user:
        raise ValueError("ES_SHIELD must be formatted as 'username:password'")
    return user, password


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    # Base
    DATA_DIR = os.getenv("EP_DATA_DIR", os.path.abspath(os.path.join(os.getcwd(), "data")))

    # Persisted options (generated index prefix)
    OPTIONS_PATH = os.path.join(DATA_DIR, "options.json")

    # Elasticsearch connection
    ES_HOST = os.getenv("EP_HOST", "http://localhost:9200")
    ES_USERNAME, ES_PASSWORD = parse_shield_credentials(os.getenv("ES_SHIELD"))
    ES_REQUEST_TIMEOUT = float(os.getenv("EP_REQUEST_TIMEOUT", "10"))
    ES_VERIFY_CERTS = _env_bool("EP_VERIFY_CERTS", "true")

    # Index naming: an explicit prefix wins over the generated one
    INDEX_PREFIX = os.getenv("EP_INDEX_PREFIX", "")
    SITE_URL = os.getenv("EP_SITE_URL", "http://localhost")

    # REST routing
    REST_NAMESPACE = os.getenv("EP_REST_NAMESPACE", "bigwing/elasticpress").strip("/")
    REST_VERSION = 1

    # Public base URL advertised to the autosuggest script; the request host when unset
    PUBLIC_URL = os.getenv("EP_PUBLIC_URL", "")

    CORS_ORIGINS = os.getenv("EP_CORS_ORIGINS", "*")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def rest_prefix(cfg: Config = Config) -> str:
    """URL prefix for the versioned REST routes, e.g. ``/bigwing/elasticpress/v1``."""
    return f"/{cfg.REST_NAMESPACE}/v{cfg.REST_VERSION}"


def ensure_data_dirs(cfg: Config = Config) -> None:
    """Ensure required data directories exist."""
    for p in [cfg.DATA_DIR, os.path.dirname(cfg.OPTIONS_PATH)]:
        os.makedirs(p, exist_ok=True)
