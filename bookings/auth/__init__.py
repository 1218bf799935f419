"""OAuth token providers."""

from .base import (
    AuthTokenProvider,
    TokenFailure,
    TokenFailureKind,
    TokenGranted,
    TokenResult,
)

__all__ = [
    "AuthTokenProvider",
    "TokenFailure",
    "TokenFailureKind",
    "TokenGranted",
    "TokenResult",
]
