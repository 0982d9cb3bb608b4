"""System-level API endpoints."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["system"])


@router.get("/", response_class=PlainTextResponse)
def index() -> str:
    return "Globalsport API is running. Use /auth/strava to connect Strava."


@router.get("/healthz", response_class=PlainTextResponse)
def healthz() -> str:
    """Liveness probe."""

    return "OK"


__all__ = ["router"]
