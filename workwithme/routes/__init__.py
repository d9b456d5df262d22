"""APIRouter registration for the How to Work With Me API."""

from __future__ import annotations

from fastapi import APIRouter

from workwithme.routes.admin import auth_router as admin_auth_router
from workwithme.routes.admin import router as admin_router
from workwithme.routes.catalog import router as catalog_router
from workwithme.routes.profiles import router as profiles_router

api_router = APIRouter()
api_router.include_router(catalog_router, tags=["Catalog"])
api_router.include_router(profiles_router, tags=["Profiles"])
api_router.include_router(admin_auth_router, tags=["Admin"])
api_router.include_router(admin_router, tags=["Admin"])

__all__ = ["api_router"]
