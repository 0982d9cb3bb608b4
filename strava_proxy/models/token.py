"""Strava OAuth token record kept in the browser cookie."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel

# Seconds before ``expires_at`` at which a token stops being used.
EXPIRY_MARGIN_SECONDS = 60


class TokenRecord(BaseModel):
    """Strava OAuth credentials for one browser session."""

    access_token: str
    refresh_token: str
    expires_at: int
    athlete_id: Optional[int] = None

    def is_valid(self, now: int) -> bool:
        return self.expires_at - EXPIRY_MARGIN_SECONDS > now

    @classmethod
    def from_exchange(cls, data: Dict[str, Any]) -> "TokenRecord":
        """Build a record from an ``authorization_code`` token response."""

        athlete = data.get("athlete") or {}
        return cls(
            access_token=data["access_token"],
            refresh_token=data["refresh_token"],
            expires_at=int(data["expires_at"]),
            athlete_id=athlete.get("id"),
        )

    def refreshed(self, data: Dict[str, Any]) -> "TokenRecord":
        """Return the record replaced by a ``refresh_token`` grant response.

        Strava does not send the athlete back on refresh, so ``athlete_id``
        is carried over from this record.
        """

        return TokenRecord(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token") or self.refresh_token,
            expires_at=int(data["expires_at"]),
            athlete_id=self.athlete_id,
        )


__all__ = ["EXPIRY_MARGIN_SECONDS", "TokenRecord"]
