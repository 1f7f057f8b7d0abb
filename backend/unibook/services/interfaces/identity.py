"""
Identity provider interface.
"""

from abc import ABC, abstractmethod

from unibook.models.identity import Identity, ROLE_USER


class IdentityProvider(ABC):
    """
    Verifies bearer tokens and owns user accounts.

    The booking engine never reads session state; handlers call
    verify_token per request and pass the Identity explicitly.
    """

    @abstractmethod
    async def verify_token(self, token: str) -> Identity:
        """Return the verified identity or raise UnauthorizedError."""

    @abstractmethod
    async def create_user(self, email: str, password: str, name: str, role: str = ROLE_USER) -> Identity:
        """Create an account. Raises ValidationError if the email is taken."""

    @abstractmethod
    async def authenticate(self, email: str, password: str) -> str:
        """Return an access token for valid credentials or raise UnauthorizedError."""
