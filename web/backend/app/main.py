"""FastAPI application for the verdict moderation service.

Provides REST API endpoints wrapping the verdict package for:
- Image and text moderation through the configured cloud analyzers
- Evaluation of caller-supplied signals against the decision engine
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the verdict package is importable by adding the project root to sys.path.
_project_root = str(Path(__file__).resolve().parents[3])
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from verdict import __version__
from web.backend.app.routers import moderate

app = FastAPI(
    title="verdict API",
    description=(
        "REST API for content moderation. Fuses safe-search, label, "
        "sentiment and category signals into a single verdict."
    ),
    version=__version__,
)

# ---------------------------------------------------------------------------
# CORS middleware (allow all origins for development)
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(moderate.router)


# ---------------------------------------------------------------------------
# Root and health-check endpoints
# ---------------------------------------------------------------------------


@app.get("/", tags=["meta"])
async def root():
    """Return basic API information."""
    return {
        "name": "verdict API",
        "version": __version__,
        "description": "Content moderation REST API",
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


@app.get("/health", tags=["meta"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
