"""Error taxonomy shared by services and routes.

Every error carries a short machine-readable ``code``. Browser-facing routes
put it in a redirect query string, API routes return it as ``{"error": code}``.
"""

from __future__ import annotations

from typing import Iterable, Optional


class ProxyError(Exception):
    """Base class for errors the proxy knows how to report."""


class NotAuthorized(ProxyError):
    """No usable token cookie on the request."""

    code = "not_authorized"

    def __init__(self, message: str = "Strava is not connected") -> None:
        super().__init__(message)


class UpstreamError(ProxyError):
    """A call to Strava failed."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class UpstreamExchangeFailed(UpstreamError):
    """Authorization-code exchange or token refresh was rejected or unreachable."""

    code = "strava_token"


class UpstreamFetchFailed(UpstreamError):
    """Activities call failed after a token was obtained."""

    code = "activities_failed"


class ConfigurationMissing(ProxyError):
    """Required server configuration is absent."""

    code = "configuration_missing"

    def __init__(self, fields: Iterable[str]) -> None:
        self.fields = list(fields)
        super().__init__(
            "Missing required configuration: " + ", ".join(self.fields)
        )


__all__ = [
    "ConfigurationMissing",
    "NotAuthorized",
    "ProxyError",
    "UpstreamError",
    "UpstreamExchangeFailed",
    "UpstreamFetchFailed",
]
