"""Application configuration and defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _default_api_url() -> str:
    """Return the backend API base URL.

    Checks CHARTDECK_API_URL first, falling back to a local backend.
    """
    url = os.environ.get("CHARTDECK_API_URL", "").strip()
    if url:
        return url.rstrip("/")
    return "http://localhost:8080/api/v1"


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _default_repo_cache_ttl() -> float | None:
    # Unset means the repository list is kept for the life of the process
    raw = os.environ.get("CHARTDECK_REPO_CACHE_TTL", "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


@dataclass
class Settings:
    api_url: str = field(default_factory=_default_api_url)
    timeout: float = field(default_factory=lambda: _env_float("CHARTDECK_TIMEOUT", 30.0))
    repo_cache_ttl: float | None = field(default_factory=_default_repo_cache_ttl)
    refresh_attempts: int = field(default_factory=lambda: _env_int("CHARTDECK_REFRESH_ATTEMPTS", 6))
    refresh_delay: float = field(default_factory=lambda: _env_float("CHARTDECK_REFRESH_DELAY", 1.0))
    refresh_max_delay: float = field(default_factory=lambda: _env_float("CHARTDECK_REFRESH_MAX_DELAY", 5.0))
    refresh_backoff: float = 2.0
    default_output: str = "table"
    default_namespace: str = "default"
    user_agent: str = "chartdeck/0.1"


# Global singleton
settings = Settings()
