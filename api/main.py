"""Combo Builder API: FastAPI entry point.

Registers middleware, routers, and lifecycle hooks. The combo builder
vertical is mounted under /api/combo-builder/, the receiver log under /api/.
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.observability.logging_setup import setup_logging

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

CORS_ORIGINS = os.getenv(
    "CORS_ORIGINS", "http://localhost:3000,http://localhost:3001"
).split(",")
DEBUG = os.getenv("DEBUG", "true").lower() == "true"
CREATE_TABLES = os.getenv("DB_CREATE_TABLES", "false").lower() == "true"
VERSION = "0.1.0"


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown hooks."""
    from core.database import close_db, init_db

    setup_logging("DEBUG" if DEBUG else None)
    if CREATE_TABLES:
        await init_db()
    logger.info("Combo Builder API started")
    yield
    await close_db()
    logger.info("Combo Builder API shutting down")


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Combo Builder",
    description="Storefront combo builder admin: design editor, templates and discounts",
    version=VERSION,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

from verticals.combo_builder.router import receiver_router, router as combo_router  # noqa: E402

app.include_router(combo_router, prefix="/api/combo-builder", tags=["Combo Builder"])
app.include_router(receiver_router, prefix="/api", tags=["Receiver"])


# ---------------------------------------------------------------------------
# Health & root
# ---------------------------------------------------------------------------

@app.get("/health")
async def health():
    return {"status": "healthy", "version": VERSION}


@app.get("/")
async def root():
    return {
        "name": "Combo Builder",
        "version": VERSION,
        "docs": "/docs",
        "verticals": ["combo_builder"],
        "description": "Storefront combo builder admin",
    }
