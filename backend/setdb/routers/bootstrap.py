"""
Bootstrap status router.

Read-only: provisioning happens through the CLI or at startup.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from pymongo.errors import ConnectionFailure, PyMongoError

from setdb.config import get_settings
from setdb.database.connections import get_mongo_client
from setdb.models.bootstrap import BootstrapStatus
from setdb.services.bootstrap_service import BootstrapService

router = APIRouter(prefix="/bootstrap", tags=["Bootstrap"])


async def get_bootstrap_service() -> BootstrapService:
    """Dependency to get BootstrapService instance."""
    client = await get_mongo_client()
    return BootstrapService(client, get_settings())


@router.get(
    "/status",
    response_model=BootstrapStatus,
    summary="Whether the application database is bootstrapped",
)
async def bootstrap_status(service: BootstrapService = Depends(get_bootstrap_service)):
    try:
        return await service.verify()
    except ConnectionFailure as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"MongoDB unavailable: {e}",
        )
    except PyMongoError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        )
