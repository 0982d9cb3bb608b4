"""Aggregate API routers."""

from fastapi import APIRouter

from .activities import router as activities_router
from .oauth import router as oauth_router
from .system import router as system_router

ALL_ROUTERS: tuple[APIRouter, ...] = (
    system_router,
    oauth_router,
    activities_router,
)

__all__ = ["ALL_ROUTERS"]
