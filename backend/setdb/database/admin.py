"""
Administrative commands issued against the MongoDB server.

Users are created in the database they are scoped to, so that database is
also the user's authentication database.
"""
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase


def role_binding(role: str, db_name: str) -> dict:
    """A role document scoped to one database."""
    return {"role": role, "db": db_name}


async def ping_database(db: AsyncIOMotorDatabase) -> dict:
    """Round-trip to the server through the given database."""
    return await db.command("ping")


async def get_user(db: AsyncIOMotorDatabase, username: str) -> Optional[dict]:
    """Return the user document from usersInfo, or None if the user doesn't exist."""
    result = await db.command({"usersInfo": {"user": username, "db": db.name}})
    users = result.get("users", [])
    return users[0] if users else None


async def create_user(
    db: AsyncIOMotorDatabase,
    username: str,
    password: str,
    roles: list[dict],
) -> None:
    """Create a user in db."""
    await db.command("createUser", username, pwd=password, roles=roles)


async def update_user(
    db: AsyncIOMotorDatabase,
    username: str,
    password: str,
    roles: list[dict],
) -> None:
    """Replace an existing user's password and roles."""
    await db.command("updateUser", username, pwd=password, roles=roles)


async def list_databases(client: AsyncIOMotorClient) -> list[str]:
    """Names of all databases on the server."""
    return await client.list_database_names()
