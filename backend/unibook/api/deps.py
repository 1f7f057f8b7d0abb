"""
FastAPI dependencies for the store, identity and notification collaborators.

Tests swap implementations through app.dependency_overrides on get_store
and get_notifier; the identity provider follows the store.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
import structlog

from unibook.infrastructure import get_store
from unibook.models.identity import Identity
from unibook.services.identity_service import TokenIdentityProvider
from unibook.services.interfaces.identity import IdentityProvider
from unibook.services.interfaces.kv_store import KeyValueStore
from unibook.services.notification_service import get_notifier

bearer_scheme = HTTPBearer(auto_error=False)


def get_identity_provider(store: KeyValueStore = Depends(get_store)) -> IdentityProvider:
    return TokenIdentityProvider(store)


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    provider: IdentityProvider = Depends(get_identity_provider),
) -> Optional[Identity]:
    """
    Verified identity for the bearer token, or None when no token was sent.
    Handlers decide whether None is acceptable; an invalid token is always a 401.
    """
    if credentials is None:
        return None
    identity = await provider.verify_token(credentials.credentials)
    structlog.contextvars.bind_contextvars(user_id=identity.id)
    return identity


__all__ = ["get_store", "get_notifier", "get_identity_provider", "get_current_identity"]
