"""Access-token lifecycle: validity check, refresh on demand, cookie persistence.

Refresh happens inside whichever request first sees an expired token; there is
no background timer. Two concurrent requests from one browser may both refresh,
and the cookie from the last response wins.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

from starlette.requests import Request
from starlette.responses import Response

from ..core import NotAuthorized, UpstreamExchangeFailed, unix_now
from ..models import TokenRecord
from .strava_client import StravaClient
from .token_store import CookieTokenStore

logger = logging.getLogger(__name__)


class TokenManager:
    def __init__(
        self,
        store: CookieTokenStore,
        strava: StravaClient,
        *,
        clock: Callable[[], int] = unix_now,
    ) -> None:
        self.store = store
        self.strava = strava
        self.clock = clock

    async def ensure_fresh(
        self, record: TokenRecord, now: Optional[int] = None
    ) -> Tuple[TokenRecord, bool]:
        """Return a usable record and whether it had to be refreshed.

        Raises ``UpstreamExchangeFailed`` when Strava refuses the refresh.
        """

        if now is None:
            now = self.clock()
        if record.is_valid(now):
            return record, False

        logger.info("Refreshing Strava token for athlete %s", record.athlete_id)
        data = await self.strava.refresh_access_token(record.refresh_token)
        try:
            return record.refreshed(data), True
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            logger.error("Strava refresh response is incomplete: %s", exc)
            raise UpstreamExchangeFailed("Incomplete refresh response") from exc

    async def get_valid_access_token(self, request: Request, response: Response) -> str:
        """Return an access token for the request's cookie.

        A refreshed record is written to ``response`` so it outlives this
        request. Raises ``NotAuthorized`` when no record is present.
        """

        record = self.store.read(request)
        if record is None:
            raise NotAuthorized()

        record, refreshed = await self.ensure_fresh(record)
        if refreshed:
            self.store.write(response, record)
        return record.access_token


__all__ = ["TokenManager"]
