"""Abstract base class for OAuth token providers.

A provider resolves a stored external identity (the link between one of our
users and their Google account) to a short-lived Google access token.
Failures are classified by the provider and returned, not raised.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Union


class TokenFailureKind(str, Enum):
    NO_CONNECTION = "no_connection"
    RETRIEVAL_ERROR = "retrieval_error"  # expired or revoked grant
    OTHER = "other"


@dataclass(frozen=True)
class TokenGranted:
    token: str


@dataclass(frozen=True)
class TokenFailure:
    kind: TokenFailureKind
    message: str = ""


TokenResult = Union[TokenGranted, TokenFailure]


class AuthTokenProvider(ABC):
    """Abstract OAuth token source."""

    @abstractmethod
    async def get_token(self, external_user_id: str) -> TokenResult:
        """Fetch a fresh Google access token for the given user.

        Args:
            external_user_id: The auth provider's identifier for the user.

        Returns:
            ``TokenGranted`` with the access token, or ``TokenFailure``
            describing why none could be obtained.
        """
