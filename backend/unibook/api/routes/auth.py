"""
Account endpoints: signup, login and demo account seeding.
"""

from fastapi import APIRouter, Depends

from unibook.api.deps import get_identity_provider, get_notifier
from unibook.schemas.user import DemoInitResponse, SignupRequest, SignupResponse, Token, UserLogin
from unibook.services.identity_service import init_demo_accounts, register_account
from unibook.services.interfaces.identity import IdentityProvider
from unibook.services.interfaces.notification import NotificationSink

router = APIRouter(tags=["Authentication"])


@router.post("/signup", response_model=SignupResponse)
async def signup(
    data: SignupRequest,
    provider: IdentityProvider = Depends(get_identity_provider),
    notifier: NotificationSink = Depends(get_notifier),
):
    """Create a user account. Admin accounts cannot be created here."""
    identity = await register_account(provider, notifier, data.email, data.password, data.name)
    return SignupResponse(user_id=identity.id)


@router.post("/auth/login", response_model=Token)
async def login(data: UserLogin, provider: IdentityProvider = Depends(get_identity_provider)):
    """Authenticate and receive a bearer token."""
    token = await provider.authenticate(data.email, data.password)
    return Token(access_token=token)


@router.post("/init-demo", response_model=DemoInitResponse)
async def init_demo(provider: IdentityProvider = Depends(get_identity_provider)):
    """Create the demo admin and user accounts (idempotent)."""
    results = await init_demo_accounts(provider)
    return DemoInitResponse(results=results)
