"""
Token-based identity provider.

Accounts live in the key-value store under `user:<email>` and tokens are
HS256 JWTs carrying the user's id, email, name and role. The booking side
only ever sees the Identity returned by verify_token.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

import jwt

from unibook.core.config import get_settings
from unibook.core.errors import UnauthorizedError, ValidationError
from unibook.core.logging import get_logger
from unibook.core.security import (
    MAX_PASSWORD_BYTES,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from unibook.models.identity import Identity, ROLE_ADMIN, ROLE_USER
from unibook.services.interfaces.identity import IdentityProvider
from unibook.services.interfaces.kv_store import KeyValueStore
from unibook.services.interfaces.notification import NotificationSink

logger = get_logger(__name__)

VALID_ROLES = (ROLE_USER, ROLE_ADMIN)


class TokenIdentityProvider(IdentityProvider):

    def __init__(self, store: KeyValueStore, key_prefix: Optional[str] = None):
        self.store = store
        self.key_prefix = key_prefix or get_settings().USER_KEY_PREFIX

    def _key(self, email: str) -> str:
        return f"{self.key_prefix}{email.strip().lower()}"

    async def verify_token(self, token: str) -> Identity:
        if not token:
            raise UnauthorizedError("Unauthorized - No access token provided")
        try:
            claims = decode_access_token(token)
        except jwt.InvalidTokenError as e:
            logger.warning("token_rejected", reason=str(e))
            raise UnauthorizedError("Unauthorized - Invalid access token")

        if not claims.get("sub") or not claims.get("email"):
            raise UnauthorizedError("Unauthorized - Invalid access token")

        return Identity(
            id=claims["sub"],
            email=claims["email"],
            role=claims.get("role", ROLE_USER),
            name=claims.get("name", ""),
        )

    async def create_user(self, email: str, password: str, name: str, role: str = ROLE_USER) -> Identity:
        if not email or not password or not name:
            raise ValidationError("Email, password, and name are required")
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        if role not in VALID_ROLES:
            raise ValidationError(f"Unknown role: {role}")

        key = self._key(email)
        if await self.store.get(key) is not None:
            logger.warning("registration_failed", reason="email_exists", email=email)
            raise ValidationError("A user with this email address has already been registered")

        record = {
            "id": str(uuid.uuid4()),
            "email": email.strip().lower(),
            "name": name,
            "role": role,
            "hashed_password": hash_password(password),
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        await self.store.set(key, record)

        logger.info("user_registered", user_id=record["id"], email=record["email"], role=role)
        return Identity(id=record["id"], email=record["email"], role=role, name=name)

    async def authenticate(self, email: str, password: str) -> str:
        record = await self.store.get(self._key(email)) if email else None

        if not record or not verify_password(password, record.get("hashed_password", "")):
            logger.warning("login_failed", email=email)
            raise UnauthorizedError("Invalid email or password")

        token = create_access_token(data={
            "sub": record["id"],
            "email": record["email"],
            "name": record.get("name", ""),
            "role": record.get("role", ROLE_USER),
        })
        logger.info("user_logged_in", user_id=record["id"])
        return token


DEMO_ACCOUNTS = (
    {"type": "admin", "email": "admin@university.edu", "password": "admin123", "name": "Admin User", "role": ROLE_ADMIN},
    {"type": "user", "email": "user@university.edu", "password": "user123", "name": "John Student", "role": ROLE_USER},
)


async def register_account(
    provider: IdentityProvider,
    notifier: NotificationSink,
    email: str,
    password: str,
    name: str,
) -> Identity:
    """Public signup. New accounts always get the user role."""
    identity = await provider.create_user(email, password, name, role=ROLE_USER)
    notifier.deliver(
        "welcome",
        identity.email,
        "Welcome to UniBook - Account Created",
        f"Hi {name},\n\nYour UniBook account has been successfully created!\n\n"
        "You can now login and start booking university facilities.\n\n"
        f"Best regards,\n{get_settings().NOTIFICATION_SENDER}",
    )
    return identity


async def init_demo_accounts(provider: IdentityProvider) -> list[dict]:
    """
    Create the demo admin and user accounts.
    Safe to call repeatedly: existing accounts are reported, not recreated.
    """
    results = []
    for account in DEMO_ACCOUNTS:
        entry = {"type": account["type"], "email": account["email"]}
        try:
            await provider.create_user(
                account["email"], account["password"], account["name"], role=account["role"]
            )
            entry["success"] = True
        except ValidationError as e:
            if "already been registered" in e.message:
                entry.update(success=True, note="already exists")
            else:
                entry.update(success=False, error=e.message)
        results.append(entry)
    logger.info("demo_accounts_initialized", results=results)
    return results
