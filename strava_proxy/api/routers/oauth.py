"""Strava connect, callback, disconnect and logout routes.

These are hit by full-page browser navigations, so they always answer with a
redirect back to the front end (or plain text for ``/logout``).
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import PlainTextResponse, RedirectResponse

from ...services import Services
from ..dependencies import get_services, redirect

router = APIRouter(tags=["oauth"])


@router.get("/auth/strava")
def strava_authorize(
    next: Optional[str] = None,
    services: Services = Depends(get_services),
) -> RedirectResponse:
    """Send the browser to Strava's consent page."""

    return redirect(services.oauth.begin_authorization(next))


@router.get("/oauth/callback")
async def strava_callback(
    response: Response,
    code: Optional[str] = None,
    state: Optional[str] = None,
    services: Services = Depends(get_services),
) -> RedirectResponse:
    """Exchange the authorization code and return to the front end."""

    url = await services.oauth.complete_authorization(code, state, response)
    return redirect(url, cookies_from=response)


@router.get("/disconnect")
async def strava_disconnect(
    request: Request,
    response: Response,
    next: Optional[str] = None,
    services: Services = Depends(get_services),
) -> RedirectResponse:
    record = services.store.read(request)
    url = await services.oauth.disconnect(record, next, response)
    return redirect(url, cookies_from=response)


@router.get("/logout", response_class=PlainTextResponse)
def logout(response: Response, services: Services = Depends(get_services)) -> str:
    """Forget the local cookie without contacting Strava."""

    services.oauth.logout(response)
    return "Logged out. Cookie cleared."


__all__ = ["router"]
