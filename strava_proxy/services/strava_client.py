"""Thin async client for the Strava OAuth and activities endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx

from ..core import (
    DEFAULT_HTTP_TIMEOUT,
    Settings,
    UpstreamError,
    UpstreamExchangeFailed,
    UpstreamFetchFailed,
)

logger = logging.getLogger(__name__)

AUTH_BASE = "https://www.strava.com/oauth/authorize"
TOKEN_URL = "https://www.strava.com/oauth/token"
DEAUTHORIZE_URL = "https://www.strava.com/oauth/deauthorize"
API_BASE = "https://www.strava.com/api/v3"
SCOPES = "read,activity:read_all"


class StravaClient:
    """Strava calls used by the proxy.

    Each method opens a short-lived ``httpx.AsyncClient``. Tests pass an
    ``httpx.MockTransport`` as ``transport``.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.settings.http_timeout or DEFAULT_HTTP_TIMEOUT,
            transport=self.transport,
        )

    def authorize_url(self, state: str) -> str:
        """Generate the Strava OAuth authorization URL."""

        params = {
            "client_id": self.settings.client_id,
            "response_type": "code",
            "redirect_uri": self.settings.redirect_uri,
            "approval_prompt": "auto",
            "scope": SCOPES,
            "state": state,
        }
        return f"{AUTH_BASE}?{urlencode(params)}"

    async def _token_request(self, data: Dict[str, Any]) -> Dict[str, Any]:
        payload = {
            "client_id": self.settings.client_id,
            "client_secret": self.settings.client_secret,
            **data,
        }
        grant_type = data["grant_type"]
        try:
            async with self._client() as client:
                response = await client.post(TOKEN_URL, data=payload)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as exc:
            body = exc.response.text
            logger.error(
                "Strava %s grant failed: %s %s",
                grant_type,
                exc.response.status_code,
                body,
            )
            raise UpstreamExchangeFailed(
                f"Strava rejected the {grant_type} grant",
                status_code=exc.response.status_code,
                body=body,
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Strava %s grant failed: %s", grant_type, exc)
            raise UpstreamExchangeFailed(
                f"Strava {grant_type} grant could not be completed"
            ) from exc

    async def exchange_code_for_token(self, code: str) -> Dict[str, Any]:
        """Exchange an authorization code for an access token."""

        return await self._token_request(
            {"code": code, "grant_type": "authorization_code"}
        )

    async def refresh_access_token(self, refresh_token: str) -> Dict[str, Any]:
        """Refresh an expired access token."""

        return await self._token_request(
            {"grant_type": "refresh_token", "refresh_token": refresh_token}
        )

    async def list_activities(
        self, access_token: str, page: str, per_page: str
    ) -> Any:
        """Return one page of the athlete's activities as Strava sent it."""

        try:
            async with self._client() as client:
                response = await client.get(
                    f"{API_BASE}/athlete/activities",
                    headers={"Authorization": f"Bearer {access_token}"},
                    params={"page": page, "per_page": per_page},
                )
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as exc:
            body = exc.response.text
            logger.error(
                "Activities request failed: %s %s", exc.response.status_code, body
            )
            raise UpstreamFetchFailed(
                "Strava activities request failed",
                status_code=exc.response.status_code,
                body=body,
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Activities request failed: %s", exc)
            raise UpstreamFetchFailed("Strava activities request failed") from exc

    async def deauthorize(self, access_token: str) -> None:
        """Revoke the application's access for the token's athlete."""

        try:
            async with self._client() as client:
                response = await client.post(
                    DEAUTHORIZE_URL, params={"access_token": access_token}
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(
                "Strava deauthorize failed",
                status_code=exc.response.status_code,
                body=exc.response.text,
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Strava deauthorize failed: {exc}") from exc


__all__ = [
    "API_BASE",
    "AUTH_BASE",
    "DEAUTHORIZE_URL",
    "SCOPES",
    "StravaClient",
    "TOKEN_URL",
]
