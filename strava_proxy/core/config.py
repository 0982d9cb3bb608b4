"""Application settings and environment helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

from .errors import ConfigurationMissing


# Maps Settings field -> environment variable.
_REQUIRED_ENV = {
    "client_id": "STRAVA_CLIENT_ID",
    "client_secret": "STRAVA_CLIENT_SECRET",
    "redirect_uri": "STRAVA_REDIRECT_URI",
    "frontend_origin": "FRONTEND_URL",
    "cookie_signing_secret": "SESSION_SECRET",
}

DEFAULT_PORT = 10000
DEFAULT_HTTP_TIMEOUT = 20.0


def _env(name: str) -> str:
    return (os.getenv(name) or "").strip()


def _env_int(name: str, default: int) -> int:
    raw = _env(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _env_float(name: str, default: float) -> float:
    raw = _env(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number") from exc


@dataclass(frozen=True)
class Settings:
    """Explicit configuration handed to every component at construction."""

    client_id: str
    client_secret: str
    redirect_uri: str
    frontend_origin: str
    cookie_signing_secret: str
    port: int = DEFAULT_PORT
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        # FRONTEND_URL is often pasted with a trailing slash.
        object.__setattr__(self, "frontend_origin", self.frontend_origin.rstrip("/"))

    @property
    def default_next_url(self) -> str:
        """Front-end page the browser lands on when no usable ``next`` is given."""

        return f"{self.frontend_origin}/challenge"

    def missing(self, *fields: str) -> List[str]:
        """Return the names of empty required fields (all of them by default)."""

        names = fields or tuple(_REQUIRED_ENV)
        return [name for name in names if not getattr(self, name)]

    def require(self, *fields: str) -> None:
        missing = self.missing(*fields)
        if missing:
            raise ConfigurationMissing(missing)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Settings":
        """Build settings from the process environment, failing on absent values."""

        load_dotenv(env_file, override=False)

        values = {field: _env(var) for field, var in _REQUIRED_ENV.items()}
        missing = [_REQUIRED_ENV[field] for field, value in values.items() if not value]
        if missing:
            raise ConfigurationMissing(missing)

        return cls(
            **values,
            port=_env_int("PORT", DEFAULT_PORT),
            http_timeout=_env_float("HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT),
            log_level=_env("LOG_LEVEL") or "INFO",
        )


__all__ = ["DEFAULT_HTTP_TIMEOUT", "DEFAULT_PORT", "Settings"]
