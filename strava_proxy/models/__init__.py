"""Model exports."""

from .token import EXPIRY_MARGIN_SECONDS, TokenRecord

__all__ = [
    "EXPIRY_MARGIN_SECONDS",
    "TokenRecord",
]
