"""Identity Client — verifies bearer tokens against the hosted identity service.

Invariants:
    - One GET {auth_url}/auth/v1/user per protected request; no token caching
    - 401/403 from the service → AuthenticationError("Invalid user")
    - Transport failures, 5xx and non-JSON bodies → IdentityServiceError (503)

Design Decisions:
    - Remote verification over local JWT decoding: the identity service owns signing keys
      and revocation, and we never see its secret
    - Shared httpx.AsyncClient per process: connection reuse across requests
"""

import logging
from dataclasses import dataclass, field
from uuid import UUID

import httpx

from app.core.errors import AuthenticationError, IdentityServiceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Verified caller as reported by the identity service."""
    id: UUID
    email: str | None
    user_metadata: dict = field(default_factory=dict)


class IdentityClient:
    """Thin async wrapper around the identity service's user endpoint."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_key = api_key
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"), timeout=timeout_seconds, transport=transport,
        )

    async def verify(self, token: str) -> Identity:
        try:
            response = await self._client.get(
                "/auth/v1/user",
                headers={
                    "Authorization": f"Bearer {token}",
                    "apikey": self._api_key,
                },
            )
        except httpx.HTTPError as e:
            logger.error(f"Identity service unreachable: {e}")
            raise IdentityServiceError("unreachable")

        if response.status_code in (400, 401, 403, 404):
            raise AuthenticationError("Invalid user")
        if response.status_code >= 500:
            logger.error(
                f"Identity service returned {response.status_code}",
            )
            raise IdentityServiceError(f"status {response.status_code}")

        try:
            data = response.json()
        except ValueError:
            logger.error("Identity service returned a non-JSON body")
            raise IdentityServiceError("malformed response")
        try:
            user_id = UUID(str(data["id"]))
        except (KeyError, TypeError, ValueError):
            raise AuthenticationError("Invalid user")
        return Identity(
            id=user_id,
            email=data.get("email"),
            user_metadata=data.get("user_metadata") or {},
        )

    async def close(self) -> None:
        await self._client.aclose()
