"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from udyog_saathi.api.routes.auth_routes import router as auth_router
from udyog_saathi.api.routes.listing_routes import router as listing_router
from udyog_saathi.api.routes.application_routes import router as application_router
from udyog_saathi.api.routes.chat_routes import router as chat_router
from udyog_saathi.api.routes.assistant_routes import router as assistant_router
from udyog_saathi.api.routes.system_routes import router as system_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(listing_router)
api_router.include_router(application_router)
api_router.include_router(chat_router)
api_router.include_router(assistant_router)
api_router.include_router(system_router)
