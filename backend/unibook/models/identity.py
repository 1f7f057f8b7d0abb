"""
Verified identity produced by the identity provider for a bearer token.
"""

from pydantic import BaseModel

ROLE_USER = "user"
ROLE_ADMIN = "admin"


class Identity(BaseModel):
    id: str
    email: str
    role: str = ROLE_USER
    name: str = ""
