"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from unibook.api.routes import admin, auth, bookings, facilities
from unibook.core.config import get_settings

api_router = APIRouter(prefix=get_settings().API_PREFIX)
api_router.include_router(auth.router)
api_router.include_router(facilities.router)
api_router.include_router(bookings.router)
api_router.include_router(admin.router)
