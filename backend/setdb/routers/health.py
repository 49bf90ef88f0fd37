"""
Liveness and readiness probes for container orchestration.

Readiness only checks that the administrative MongoDB connection answers;
whether the database is bootstrapped is reported by /bootstrap/status.
"""
from fastapi import APIRouter, status
from pymongo.errors import PyMongoError

from setdb.config import get_settings
from setdb.database.connections import get_mongo_client

router = APIRouter(tags=["Health"])


async def _mongodb_state() -> str:
    try:
        client = await get_mongo_client()
        await client.admin.command("ping")
    except (PyMongoError, OSError) as e:
        return f"unhealthy: {e}"
    return "healthy"


@router.get("/health", status_code=status.HTTP_200_OK, summary="Liveness probe")
async def health_check():
    """The process is up and serving requests."""
    return {"status": "healthy"}


@router.get("/health/ready", status_code=status.HTTP_200_OK, summary="Readiness probe")
async def readiness_check():
    """Ping the MongoDB server the bootstrap administers."""
    checks = {"api": "healthy", "mongodb": await _mongodb_state()}
    ready = all(state == "healthy" for state in checks.values())
    return {
        "status": "healthy" if ready else "degraded",
        "database": get_settings().app_db_name,
        "checks": checks,
    }
