"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from gradlinkup.api.routes.auth_routes import router as auth_router
from gradlinkup.api.routes.role_routes import router as role_router
from gradlinkup.api.routes.candidate_routes import router as candidate_router
from gradlinkup.api.routes.company_routes import router as company_router
from gradlinkup.api.routes.storage_routes import router as storage_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(role_router)
api_router.include_router(candidate_router)
api_router.include_router(company_router)
api_router.include_router(storage_router)
