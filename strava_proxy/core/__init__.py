"""Core configuration and infrastructure helpers."""

from .config import DEFAULT_HTTP_TIMEOUT, DEFAULT_PORT, Settings
from .errors import (
    ConfigurationMissing,
    NotAuthorized,
    ProxyError,
    UpstreamError,
    UpstreamExchangeFailed,
    UpstreamFetchFailed,
)
from .logging import configure_logging
from .time import unix_now

__all__ = [
    "ConfigurationMissing",
    "DEFAULT_HTTP_TIMEOUT",
    "DEFAULT_PORT",
    "NotAuthorized",
    "ProxyError",
    "Settings",
    "UpstreamError",
    "UpstreamExchangeFailed",
    "UpstreamFetchFailed",
    "configure_logging",
    "unix_now",
]
