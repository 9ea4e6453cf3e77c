"""API Dependencies — authenticated user, admin guard and external client providers.

Invariants:
    - Missing Authorization header → 401 "No authorization header"
    - Token verified remotely on every request; the local users row is created lazily
    - Admin-only routes depend on require_admin (403 "Unauthorized" otherwise)
    - External clients are process-wide and overridable via app.dependency_overrides

Design Decisions:
    - Clients built lazily from settings (lru_cache) so tests can override them without
      network access or real keys
"""

from functools import lru_cache

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.core.domain_types import UserRole
from app.core.errors import AuthenticationError, ErrorContext, PermissionDeniedError
from app.infrastructure.ai_providers import AIProviders
from app.infrastructure.database import get_db
from app.infrastructure.identity_client import IdentityClient
from app.infrastructure.stripe_gateway import StripeGateway
from app.models import User
from app.services.account import ensure_user


@lru_cache
def get_identity_client() -> IdentityClient:
    settings = get_settings()
    return IdentityClient(
        settings.auth_url, settings.auth_api_key, settings.auth_timeout_seconds,
    )


@lru_cache
def get_stripe_gateway() -> StripeGateway:
    settings = get_settings()
    return StripeGateway(
        settings.stripe_secret_key,
        settings.stripe_api_version,
        settings.stripe_webhook_secret,
    )


@lru_cache
def get_ai_providers() -> AIProviders:
    return AIProviders(get_settings().ai_request_timeout_seconds)


def _bearer_token(authorization: str) -> str:
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() == "bearer":
        token = token.strip()
    else:
        token = authorization.strip()
    if not token:
        raise AuthenticationError("Invalid user")
    return token


async def get_current_user(
    authorization: str | None = Header(None),
    db: AsyncSession = Depends(get_db),
    identity_client: IdentityClient = Depends(get_identity_client),
) -> User:
    if not authorization:
        raise AuthenticationError("No authorization header")
    identity = await identity_client.verify(_bearer_token(authorization))
    return await ensure_user(db, identity)


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != UserRole.ADMIN.value:
        raise PermissionDeniedError(
            "Unauthorized", ErrorContext(user_id=str(user.id)),
        )
    return user
