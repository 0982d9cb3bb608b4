"""Signed cookie codec for :class:`TokenRecord`.

The record is serialised the same way Starlette's ``SessionMiddleware`` keeps
its session: JSON, base64 and an itsdangerous timestamp signature keyed by the
server secret. The browser holds the only copy.
"""

from __future__ import annotations

import logging
from typing import Optional

from itsdangerous import BadData, URLSafeTimedSerializer
from pydantic import ValidationError
from starlette.requests import Request
from starlette.responses import Response

from ..models import TokenRecord

logger = logging.getLogger(__name__)

COOKIE_NAME = "strava"
COOKIE_MAX_AGE = 30 * 24 * 3600
COOKIE_PATH = "/"
# Front end and API live on different origins, so the cookie has to be
# SameSite=None, which browsers only accept together with Secure.
COOKIE_SAMESITE = "none"
COOKIE_SECURE = True
COOKIE_HTTPONLY = True

_SALT = "strava-token"


class CookieTokenStore:
    """Reads, writes and clears the token cookie."""

    def __init__(
        self,
        secret_key: str,
        *,
        cookie_name: str = COOKIE_NAME,
        max_age: int = COOKIE_MAX_AGE,
    ) -> None:
        self.serializer = URLSafeTimedSerializer(secret_key, salt=_SALT)
        self.cookie_name = cookie_name
        self.max_age = max_age

    def encode(self, record: TokenRecord) -> str:
        return self.serializer.dumps(record.model_dump())

    def decode(self, value: Optional[str]) -> Optional[TokenRecord]:
        """Return the record in ``value``, or ``None`` if it is unusable."""

        if not value:
            return None
        try:
            payload = self.serializer.loads(value, max_age=self.max_age)
        except BadData:
            logger.info("Discarding token cookie with bad signature or payload")
            return None
        try:
            return TokenRecord.model_validate(payload)
        except ValidationError:
            logger.info("Discarding token cookie with malformed record")
            return None

    def read(self, request: Request) -> Optional[TokenRecord]:
        return self.decode(request.cookies.get(self.cookie_name))

    def write(self, response: Response, record: TokenRecord) -> None:
        response.set_cookie(
            self.cookie_name,
            self.encode(record),
            max_age=self.max_age,
            path=COOKIE_PATH,
            secure=COOKIE_SECURE,
            httponly=COOKIE_HTTPONLY,
            samesite=COOKIE_SAMESITE,
        )

    def clear(self, response: Response) -> None:
        # Browsers only drop the cookie when these match what write() set.
        response.delete_cookie(
            self.cookie_name,
            path=COOKIE_PATH,
            secure=COOKIE_SECURE,
            httponly=COOKIE_HTTPONLY,
            samesite=COOKIE_SAMESITE,
        )


__all__ = [
    "COOKIE_MAX_AGE",
    "COOKIE_NAME",
    "CookieTokenStore",
]
