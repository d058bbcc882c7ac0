"""
Campus Internship & Placement Hub - Main Application

FastAPI host around the placement core:
- In-memory catalog (users, opportunities, applications)
- Skill-based opportunity recommendations
- Application lifecycle with mentor approval

Run: uvicorn app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import api_router
from app.core.config import get_settings
from app.core.exceptions import (
    DeadlinePassed,
    DuplicateApplication,
    IdTaken,
    InvalidInput,
    InvalidState,
    NotFound,
    PlacementError,
)
from app.db.catalog import get_catalog
from app.db.seed import seed_demo_data
from app.utils.clock import system_today

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)

# Domain error -> HTTP status
ERROR_STATUS = {
    NotFound: 404,
    DuplicateApplication: 409,
    DeadlinePassed: 400,
    InvalidState: 409,
    InvalidInput: 422,
    IdTaken: 500,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.seed_demo_data:
        seed_demo_data(get_catalog(), system_today())
    yield


# Create FastAPI app
app = FastAPI(
    title="Campus Internship & Placement Hub",
    description="""
    Internship and placement portal core.

    ## Features
    - **Opportunities**: Placement cell posts listings; everyone can browse
    - **Recommendations**: Skill-overlap matching for students
    - **Applications**: Apply, mentor approval, interview, offer, completion feedback
    - **Dashboards**: One view per role

    The acting user is named by the `X-User-Id` header.
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PlacementError)
async def placement_error_handler(request: Request, exc: PlacementError):
    """Translate core errors into the same {"detail": ...} body HTTPException uses."""
    status_code = ERROR_STATUS.get(type(exc), 400)
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error": type(exc).__name__},
    )


# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/health", tags=["Health"])
async def health_check():
    catalog = get_catalog()
    return {
        "status": "healthy",
        "users": len(catalog.list_users()),
        "opportunities": len(catalog.list_opportunities()),
        "applications": len(catalog.list_applications()),
    }
