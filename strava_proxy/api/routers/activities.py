"""JSON API used by the front end: connection status and activity listing."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request, Response

from ...core import NotAuthorized, UpstreamError, UpstreamFetchFailed
from ...services import Services
from ..dependencies import get_services, json_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["strava"])


@router.get("/status")
def status(
    request: Request, services: Services = Depends(get_services)
) -> Dict[str, Optional[Any]]:
    """Report whether the browser holds a usable Strava token."""

    record = services.store.read(request)
    if record is None:
        return {"connected": False, "athlete_id": None}
    return {
        "connected": record.is_valid(services.tokens.clock()),
        "athlete_id": record.athlete_id,
    }


@router.get("/activities")
async def activities(
    request: Request,
    response: Response,
    page: str = "1",
    per_page: str = "30",
    services: Services = Depends(get_services),
):
    """Pass one page of Strava activities through unchanged.

    ``page`` and ``per_page`` go to Strava as given; Strava enforces its own
    limits.
    """

    try:
        access_token = await services.tokens.get_valid_access_token(request, response)
        return await services.strava.list_activities(access_token, page, per_page)
    except NotAuthorized:
        return json_error(401, NotAuthorized.code)
    except UpstreamError as exc:
        logger.error("Activities error: %s", exc)
        # A refresh may already have succeeded; keep it.
        return json_error(500, UpstreamFetchFailed.code, cookies_from=response)


__all__ = ["router"]
