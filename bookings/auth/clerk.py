"""Clerk-backed token provider.

Clerk stores the OAuth grant made when a user signs in with Google.  Its
Backend API hands out the current access token for that grant:

    GET /v1/users/{user_id}/oauth_access_tokens/oauth_google

The response is a list of token objects (wrapped in ``{"data": [...]}`` by
newer API versions).  An empty list means the user never connected Google.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from bookings.config import settings
from bookings.errors import ConfigurationError

from .base import (
    AuthTokenProvider,
    TokenFailure,
    TokenFailureKind,
    TokenGranted,
    TokenResult,
)

logger = logging.getLogger(__name__)

RETRIEVAL_ERROR_CODE = "oauth_token_retrieval_error"


class ClerkTokenProvider(AuthTokenProvider):
    """AuthTokenProvider backed by the Clerk Backend API."""

    def __init__(
        self,
        secret_key: str | None = None,
        api_url: str | None = None,
        oauth_provider: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._secret_key = secret_key or settings.clerk_secret_key
        if not self._secret_key:
            raise ConfigurationError(
                "Clerk secret key must be provided via constructor argument "
                "or CLERK_SECRET_KEY env var."
            )
        self._api_url = (api_url or settings.clerk_api_url).rstrip("/")
        self._oauth_provider = oauth_provider or settings.clerk_oauth_provider
        self._client = client or httpx.AsyncClient(
            timeout=settings.http_timeout_seconds
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_token(self, external_user_id: str) -> TokenResult:
        url = (
            f"{self._api_url}/users/{external_user_id}"
            f"/oauth_access_tokens/{self._oauth_provider}"
        )
        try:
            resp = await self._client.get(
                url, headers={"Authorization": f"Bearer {self._secret_key}"}
            )
        except httpx.HTTPError as exc:
            logger.warning("Clerk request for user %s failed: %s", external_user_id, exc)
            return TokenFailure(TokenFailureKind.OTHER, str(exc))

        if resp.is_error:
            return self._classify_error(external_user_id, resp)

        try:
            payload = resp.json()
        except ValueError:
            logger.warning("Clerk returned a non-JSON body for user %s", external_user_id)
            return TokenFailure(TokenFailureKind.OTHER, "Malformed response from Clerk")

        token = _first_token(payload)
        if not token:
            logger.info("User %s has no Google connection", external_user_id)
            return TokenFailure(
                TokenFailureKind.NO_CONNECTION, "Google Calendar not connected"
            )
        return TokenGranted(token)

    @staticmethod
    def _classify_error(external_user_id: str, resp: httpx.Response) -> TokenFailure:
        codes: list[str] = []
        try:
            errors = resp.json().get("errors")
        except (ValueError, AttributeError):
            errors = None
        if isinstance(errors, list):
            codes = [e.get("code", "") for e in errors if isinstance(e, dict)]

        logger.warning(
            "Clerk token lookup for user %s failed: HTTP %s %s",
            external_user_id,
            resp.status_code,
            codes,
        )
        if RETRIEVAL_ERROR_CODE in codes:
            return TokenFailure(TokenFailureKind.RETRIEVAL_ERROR, RETRIEVAL_ERROR_CODE)
        return TokenFailure(
            TokenFailureKind.OTHER, f"Clerk responded with HTTP {resp.status_code}"
        )


def _first_token(payload: Any) -> str:
    items = payload.get("data", []) if isinstance(payload, dict) else payload
    if not isinstance(items, list) or not items:
        return ""
    first = items[0]
    return first.get("token", "") if isinstance(first, dict) else ""
