"""FastAPI application factory and configuration."""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import register_routes
from .core import Settings, configure_logging
from .services import Services

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Build the app from ``settings`` (read from the environment when omitted).

    ``transport`` replaces the network for Strava calls; tests use it.
    """

    if settings is None:
        settings = Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(title="Globalsport Strava API", version="1.0.0")
    app.state.services = Services.build(settings, transport=transport)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_origin],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_routes(app)
    logger.info("Strava proxy configured for %s", settings.frontend_origin)
    return app


def main() -> None:
    import uvicorn

    settings = Settings.from_env()
    app = create_app(settings)
    # Deployed behind an HTTPS-terminating proxy.
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        proxy_headers=True,
        forwarded_allow_ips="*",
    )


__all__ = ["create_app", "main"]
