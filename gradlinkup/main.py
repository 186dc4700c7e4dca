"""
GradLinkUp - Main Application

FastAPI backend connecting student candidates with internship offers:
- PostgreSQL for profiles, companies, internships, applications
- MongoDB GridFS for resume files
- Identity provider JWTs for authentication

Run: uvicorn gradlinkup.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from gradlinkup import __version__
from gradlinkup.api.routes import api_router
from gradlinkup.core.config import get_settings
from gradlinkup.db.mongodb import init_mongo_indexes
from gradlinkup.db.schema import init_schema

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="GradLinkUp",
    description="""
    Internship board connecting student candidates with companies.

    ## Features
    - **Role selection**: First sign-in provisions a candidate or company profile
    - **Candidates**: Dashboard, profile editing, resume upload
    - **Companies**: Dashboard with application counts, internship posting

    ## Storage
    - PostgreSQL: profiles, companies, internships, applications
    - MongoDB GridFS: resume files
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    """Catch-all for unknown paths; every other HTTP error keeps the default shape."""
    if exc.status_code == 404 and exc.detail == "Not Found":
        return JSONResponse(
            status_code=404,
            content={"detail": "Page not found", "path": request.url.path}
        )
    return await http_exception_handler(request, exc)


# Startup event
@app.on_event("startup")
async def startup_event():
    """Create tables and MongoDB indexes on startup."""
    try:
        init_schema()
    except Exception as e:
        logger.error(f"Schema initialization failed: {e}")
    try:
        init_mongo_indexes()
    except Exception as e:
        logger.warning(f"MongoDB index initialization failed: {e}")


@app.get("/", tags=["Index"])
async def index():
    """Landing info."""
    return {
        "app": "GradLinkUp",
        "version": __version__,
        "sign_in": "/api/auth/session",
        "docs": "/docs"
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    from gradlinkup.db.postgres import test_postgres_connection
    from gradlinkup.db.mongodb import test_mongo_connection

    return {
        "status": "healthy",
        "database": "connected" if test_postgres_connection() else "disconnected",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
