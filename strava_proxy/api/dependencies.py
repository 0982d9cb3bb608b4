"""FastAPI dependencies and response helpers shared across routes."""

from __future__ import annotations

from typing import Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse, RedirectResponse

from ..services import Services


def get_services(request: Request) -> Services:
    """Return the components the app factory attached to ``app.state``."""

    return request.app.state.services


def carry_cookies(target: Response, source: Response) -> Response:
    """Copy ``Set-Cookie`` headers from a sub-response onto ``target``."""

    target.headers.raw.extend(
        (name, value) for name, value in source.headers.raw if name == b"set-cookie"
    )
    return target


def redirect(url: str, cookies_from: Optional[Response] = None) -> RedirectResponse:
    response = RedirectResponse(url, status_code=302)
    if cookies_from is not None:
        carry_cookies(response, cookies_from)
    return response


def json_error(
    status_code: int, code: str, cookies_from: Optional[Response] = None
) -> JSONResponse:
    response = JSONResponse({"error": code}, status_code=status_code)
    if cookies_from is not None:
        carry_cookies(response, cookies_from)
    return response


__all__ = ["carry_cookies", "get_services", "json_error", "redirect"]
