"""
MongoDB connection management.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from setdb.config import Settings, get_settings

# Process-wide client used by the API
_mongo_client: Optional[AsyncIOMotorClient] = None


def create_mongo_client(settings: Settings) -> AsyncIOMotorClient:
    """Build an administrative client from settings (no I/O until first use)."""
    return AsyncIOMotorClient(settings.mongo_uri, **settings.mongo_client_kwargs())


async def get_mongo_client() -> AsyncIOMotorClient:
    """Get or create the shared MongoDB client."""
    global _mongo_client
    if _mongo_client is None:
        _mongo_client = create_mongo_client(get_settings())
    return _mongo_client


async def close_connections():
    """Close the shared MongoDB client."""
    global _mongo_client

    if _mongo_client is not None:
        _mongo_client.close()
        _mongo_client = None


async def get_database(db_name: str) -> AsyncIOMotorDatabase:
    """Get a specific MongoDB database by name."""
    client = await get_mongo_client()
    return client[db_name]


@asynccontextmanager
async def mongo_client(settings: Optional[Settings] = None) -> AsyncIterator[AsyncIOMotorClient]:
    """
    Scoped administrative client.

    The client is closed on exit, whether or not the body raised.
    """
    client = create_mongo_client(settings or get_settings())
    try:
        yield client
    finally:
        client.close()
