"""Runtime settings read from the environment (and an optional ``.env`` file)."""

from __future__ import annotations

import os
from dataclasses import dataclass

from component_library.core.github import repo_from_raw_base

DEFAULT_DATABASE_URL = "postgresql+asyncpg://localhost/component_library"
DEFAULT_GITHUB_REPO = "NafisMahmudAyon/aspect-ui-components-folders"
DEFAULT_BASE_URL = f"https://raw.githubusercontent.com/{DEFAULT_GITHUB_REPO}"
DEFAULT_OUTPUT_FILE = "component-data.json"
DEFAULT_PORT = 3000
DEFAULT_REQUEST_DELAY = 0.1  # seconds between distinct file fetches
DEFAULT_MAX_RETRIES = 3


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, built once by the composition root."""

    database_url: str = DEFAULT_DATABASE_URL
    port: int = DEFAULT_PORT
    base_url: str = DEFAULT_BASE_URL
    github_repo: str = DEFAULT_GITHUB_REPO
    request_delay: float = DEFAULT_REQUEST_DELAY
    max_retries: int = DEFAULT_MAX_RETRIES
    github_token: str | None = None

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from ``COMPONENT_LIBRARY_*`` variables.

        Raises ``ValueError`` for malformed numeric values or a retry
        bound below 1.
        """
        base_url = os.environ.get("COMPONENT_LIBRARY_BASE_URL", DEFAULT_BASE_URL).rstrip("/")
        # an overridden base URL implies its own repository unless one is given
        github_repo = (
            os.environ.get("COMPONENT_LIBRARY_REPO")
            or repo_from_raw_base(base_url)
            or DEFAULT_GITHUB_REPO
        )
        settings = cls(
            database_url=os.environ.get("COMPONENT_LIBRARY_DATABASE_URL", DEFAULT_DATABASE_URL),
            port=_env_int("PORT", DEFAULT_PORT),
            base_url=base_url,
            github_repo=github_repo,
            request_delay=_env_float("COMPONENT_LIBRARY_REQUEST_DELAY", DEFAULT_REQUEST_DELAY),
            max_retries=_env_int("COMPONENT_LIBRARY_MAX_RETRIES", DEFAULT_MAX_RETRIES),
            github_token=os.environ.get("GITHUB_TOKEN") or None,
        )
        if settings.max_retries < 1:
            raise ValueError("COMPONENT_LIBRARY_MAX_RETRIES must be >= 1")
        if settings.request_delay < 0:
            raise ValueError("COMPONENT_LIBRARY_REQUEST_DELAY must be >= 0")
        return settings
