"""API assembly helpers."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..core import ConfigurationMissing
from .routers import ALL_ROUTERS

logger = logging.getLogger(__name__)


async def _configuration_missing(
    request: Request, exc: ConfigurationMissing
) -> JSONResponse:
    logger.error("%s (%s)", exc, request.url.path)
    return JSONResponse({"error": exc.code}, status_code=500)


def register_routes(app: FastAPI) -> None:
    """Attach all application routers and error handlers to the given app."""

    app.add_exception_handler(ConfigurationMissing, _configuration_missing)
    for router in ALL_ROUTERS:
        app.include_router(router)


__all__ = ["register_routes"]
