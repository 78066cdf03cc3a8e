"""AdPulse — FastAPI Application Entry Point.

Marketing performance dashboard backend over published spreadsheet snapshots.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from adpulse.config import settings
from adpulse.api.dashboard_routes import router as dashboard_router
from adpulse.core.logging import get_logger

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info("🚀 AdPulse starting up...")
    if not settings.spreadsheet_id:
        logger.warning("SPREADSHEET_ID is not set — every load will fail")
    logger.info(f"📊 Snapshot scope: {settings.snapshot_scope}")
    yield
    logger.info("AdPulse shut down")


app = FastAPI(
    title="AdPulse",
    description="Pull marketing snapshots from a published sheet, aggregate them, and compare periods.",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(dashboard_router)


@app.get("/health", tags=["System"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "adpulse",
        "version": "1.0.0",
    }
