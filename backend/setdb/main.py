"""
setdb Bootstrap API - FastAPI Application

Health probes and bootstrap status for the set game database, with an optional
bootstrap run at startup for container init hooks.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from setdb.config import get_settings
from setdb.core.logging import configure_logging
from setdb.database.connections import get_mongo_client, close_connections
from setdb.routers import bootstrap, health
from setdb.services.bootstrap_service import BootstrapService

logger = logging.getLogger("setdb")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Run the bootstrap when BOOTSTRAP_ON_STARTUP is set

    Shutdown:
    - Close the MongoDB connection
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Starting up setdb bootstrap API...")

    if settings.bootstrap_on_startup:
        client = await get_mongo_client()
        try:
            report = await BootstrapService(client, settings).run()
        except ValueError as e:
            logger.warning(f"Bootstrap skipped: {e}")
        else:
            if report.succeeded:
                print(report.confirmation_message)
            else:
                logger.warning(f"Bootstrap failed at {report.failed_step.target}")

    yield

    logger.info("Shutting down setdb bootstrap API...")
    await close_connections()
    logger.info("Database connections closed")


app = FastAPI(
    title="setdb Bootstrap API",
    description="Health and bootstrap status of the set game MongoDB database.",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(bootstrap.router)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": "setdb Bootstrap API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }
