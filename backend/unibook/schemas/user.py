"""
Pydantic schemas for account request/response validation.
"""

from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from unibook.core.security import MAX_PASSWORD_BYTES


class SignupRequest(BaseModel):
    # Presence is checked by the identity provider so a missing field is a 400
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, max_length=MAX_PASSWORD_BYTES)
    name: Optional[str] = Field(None, max_length=100)


class SignupResponse(BaseModel):
    success: bool = True
    message: str = "User created successfully"
    user_id: str


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class DemoAccountResult(BaseModel):
    type: str
    email: str
    success: bool
    note: Optional[str] = None
    error: Optional[str] = None


class DemoInitResponse(BaseModel):
    success: bool = True
    message: str = "Demo accounts initialized"
    results: list[DemoAccountResult]
