"""
Voice Receptionist Backend - Main Application

This is the entry point for the FastAPI application.
It handles:
- POST /voice: booking decision pipeline for one caller turn
- POST /stream: aggregation of a live interaction session
- Startup wiring of every external capability and shutdown cleanup
"""
from contextlib import asynccontextmanager
import logging
from datetime import datetime, UTC

from fastapi import FastAPI

from receptionist.api import router as api_router
from receptionist.config.settings import settings
from receptionist.models.database import init_db, close_db
from receptionist.services.factory import build_services
from receptionist.services.metrics import start_metrics_server

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _log_configuration():
    logger.info("--- Configured Settings ---")
    logger.info(f"PORT: {settings.API_PORT}")
    logger.info(f"GOOGLE_PROJECT_ID: {'Set' if settings.GOOGLE_PROJECT_ID else 'Not Set'}")
    logger.info(f"GOOGLE_API_KEY: {'Set' if settings.GOOGLE_API_KEY else 'Not Set'}")
    logger.info(f"DB_HOST: {settings.DB_HOST}")
    logger.info(f"LANGUAGE_CACHE_BACKEND: {settings.LANGUAGE_CACHE_BACKEND}")
    logger.info(f"EASY_APPOINTMENTS_URL: {settings.EASY_APPOINTMENTS_URL or 'Not Set'}")
    logger.info(f"EASY_APPOINTMENTS_API_KEY: {'Set' if settings.EASY_APPOINTMENTS_API_KEY else 'Not Set'}")
    logger.info(f"ULTRAVOX_TTS_URL: {settings.ULTRAVOX_TTS_URL or 'Not Set (placeholder TTS will be used)'}")
    logger.info("---------------------------")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events using the modern FastAPI pattern.
    """
    # === STARTUP ===
    logger.info("🚀 Starting Voice Receptionist Backend...")
    _log_configuration()

    await init_db()
    logger.info("✅ Database tables created")

    app.state.services = await build_services(settings)
    logger.info("✅ Pipeline services initialized")

    if settings.METRICS_PORT:
        start_metrics_server(settings.METRICS_PORT)

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info("🛑 Shutting down...")
    await app.state.services.close()
    await close_db()


app = FastAPI(
    title="Voice Receptionist Backend",
    description="Voice appointment booking with language detection and call analytics",
    version="1.0.0",
    lifespan=lifespan
)

# Include REST API routes
app.include_router(api_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Voice Receptionist",
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/status")
async def status():
    """Status endpoint."""
    return {
        "status": "ok",
        "timestamp": datetime.now(UTC).isoformat(),
    }
