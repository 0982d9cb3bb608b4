"""Browser-facing Strava connect / disconnect flow.

Every method returns the front-end URL the browser should be redirected to.
Failures are reported as a short ``error=`` code in that URL, never raised.

``state`` only carries the return URL through Strava and back; it is not
checked as an anti-forgery token.
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlencode, urlsplit, urlunsplit

from starlette.responses import Response

from ..core import Settings, UpstreamError, UpstreamExchangeFailed
from ..models import TokenRecord
from .strava_client import StravaClient
from .token_store import CookieTokenStore

logger = logging.getLogger(__name__)


def is_absolute_url(value: Optional[str]) -> bool:
    if not value:
        return False
    parts = urlsplit(value)
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def with_query(url: str, **params: str) -> str:
    """Append ``params`` to ``url``, keeping any query it already has."""

    parts = urlsplit(url)
    extra = urlencode(params)
    query = f"{parts.query}&{extra}" if parts.query else extra
    return urlunsplit(parts._replace(query=query))


class OAuthFlow:
    def __init__(
        self,
        settings: Settings,
        store: CookieTokenStore,
        strava: StravaClient,
    ) -> None:
        self.settings = settings
        self.store = store
        self.strava = strava

    def resolve_next(self, next_url: Optional[str]) -> str:
        if is_absolute_url(next_url):
            return next_url
        return self.settings.default_next_url

    def begin_authorization(self, next_url: Optional[str] = None) -> str:
        """Return the Strava authorize URL that round-trips ``next_url``.

        Raises ``ConfigurationMissing`` without a client id or redirect URI.
        """

        self.settings.require("client_id", "redirect_uri")
        return self.strava.authorize_url(state=self.resolve_next(next_url))

    async def complete_authorization(
        self,
        code: Optional[str],
        state: Optional[str],
        response: Response,
    ) -> str:
        """Exchange ``code`` and store the token on ``response``."""

        destination = self.resolve_next(state)
        if not code:
            logger.warning("OAuth callback without code")
            return with_query(destination, error="missing_code")

        try:
            data = await self.strava.exchange_code_for_token(code)
            record = TokenRecord.from_exchange(data)
        except UpstreamExchangeFailed as exc:
            logger.warning("Token exchange failed, redirecting with error: %s", exc)
            return with_query(destination, error=UpstreamExchangeFailed.code)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            logger.error("Token exchange returned an incomplete token: %s", exc)
            return with_query(destination, error=UpstreamExchangeFailed.code)

        self.store.write(response, record)
        logger.info("Strava connected for athlete %s", record.athlete_id)
        return with_query(destination, connected="1")

    async def disconnect(
        self,
        record: Optional[TokenRecord],
        next_url: Optional[str],
        response: Response,
    ) -> str:
        """Best-effort revoke at Strava, then always forget the cookie."""

        if record is not None and record.access_token:
            try:
                await self.strava.deauthorize(record.access_token)
                logger.info("Strava deauthorized athlete %s", record.athlete_id)
            except UpstreamError as exc:
                logger.warning("Strava deauthorize warn: %s %s", exc, exc.body or "")

        self.store.clear(response)
        return with_query(self.resolve_next(next_url), disconnected="1")

    def logout(self, response: Response) -> None:
        self.store.clear(response)


__all__ = ["OAuthFlow", "is_absolute_url", "with_query"]
