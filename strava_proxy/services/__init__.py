"""Service layer: cookie store, Strava client, token lifecycle and OAuth flow."""

from dataclasses import dataclass
from typing import Optional

import httpx

from ..core import Settings
from .oauth_flow import OAuthFlow, is_absolute_url, with_query
from .strava_client import StravaClient
from .token_store import COOKIE_MAX_AGE, COOKIE_NAME, CookieTokenStore
from .tokens import TokenManager


@dataclass
class Services:
    """Components wired from one :class:`Settings` instance."""

    settings: Settings
    store: CookieTokenStore
    strava: StravaClient
    tokens: TokenManager
    oauth: OAuthFlow

    @classmethod
    def build(
        cls,
        settings: Settings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "Services":
        store = CookieTokenStore(settings.cookie_signing_secret)
        strava = StravaClient(settings, transport=transport)
        return cls(
            settings=settings,
            store=store,
            strava=strava,
            tokens=TokenManager(store, strava),
            oauth=OAuthFlow(settings, store, strava),
        )


__all__ = [
    "COOKIE_MAX_AGE",
    "COOKIE_NAME",
    "CookieTokenStore",
    "OAuthFlow",
    "Services",
    "StravaClient",
    "TokenManager",
    "is_absolute_url",
    "with_query",
]
