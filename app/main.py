# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Songbook API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.auth import routes as auth_routes
from app.config import settings
from app.exceptions import (
    SongbookException,
    http_exception_handler,
    songbook_exception_handler,
    unexpected_exception_handler,
)
from app.routers import health, songs
from core.services.song_repository import SongRepository

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Builds the song repository from the validated settings. The Supabase
    client itself is created on the first query.
    """
    logger.info(f"Starting Songbook API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    app.state.song_repository = SongRepository(settings.supabase_config())

    yield

    logger.info("Shutting down Songbook API")


# Create FastAPI application
app = FastAPI(
    title="Songbook API",
    description="""
## Song Catalog API

Browse, create and edit songs: title, author, key, chords and audio links.

### Quick Start

```bash
# List songs
curl http://localhost:8000/api/songs

# Fetch one song
curl "http://localhost:8000/api/songs?title=Amazing%20Grace"

# Create a song (Supabase Auth token required)
curl -X POST http://localhost:8000/api/songs \\
  -H "Authorization: Bearer $TOKEN" \\
  -H "Content-Type: application/json" \\
  -d '{"Title": "Amazing Grace", "SongKey": "G"}'

# Change only the chords
curl -X PATCH http://localhost:8000/api/songs/{id} \\
  -H "Authorization: Bearer $TOKEN" \\
  -H "Content-Type: application/json" \\
  -d '{"Chords": "G C G D"}'
```
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Songs",
            "description": "Browse, create and edit songs",
        },
        {
            "name": "Auth",
            "description": "Check Supabase Auth tokens",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(SongbookException)
async def handle_songbook_exception(request: Request, exc: SongbookException):
    """Handle custom Songbook exceptions."""
    return await songbook_exception_handler(request, exc)


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    """Handle framework HTTP errors (auth failures, unknown routes)."""
    return await http_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    return await unexpected_exception_handler(request, exc)


# =============================================================================
# Routers
# =============================================================================

app.include_router(
    songs.router,
    prefix="/api/songs",
    tags=["Songs"]
)

app.include_router(
    auth_routes.router,
    prefix="/api/auth",
    tags=["Auth"]
)

app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """Root endpoint - returns API info."""
    return {
        "name": "Songbook API",
        "version": __version__,
        "docs": "/docs",
        "health": "/api/health",
    }
