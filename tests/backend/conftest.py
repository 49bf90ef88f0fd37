"""
Backend-specific test fixtures.

mongomock cannot emulate user management commands, so the functions in
setdb.database.admin are replaced with AsyncMocks while collections live in
the in-memory database.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest


# =============================================================================
# Administrative Command Fixtures
# =============================================================================

@pytest.fixture
def admin_commands():
    """
    Patch the administrative commands used by BootstrapService.

    Defaults describe a fresh server: ping succeeds and no user exists.
    Configure per test:

        admin_commands.get_user.return_value = {...}
        admin_commands.ping_database.side_effect = ServerSelectionTimeoutError("down")
    """
    mocks = SimpleNamespace(
        ping_database=AsyncMock(return_value={"ok": 1.0}),
        get_user=AsyncMock(return_value=None),
        create_user=AsyncMock(return_value=None),
        update_user=AsyncMock(return_value=None),
    )
    with patch("setdb.database.admin.ping_database", mocks.ping_database), \
         patch("setdb.database.admin.get_user", mocks.get_user), \
         patch("setdb.database.admin.create_user", mocks.create_user), \
         patch("setdb.database.admin.update_user", mocks.update_user):
        yield mocks


@pytest.fixture
def existing_user() -> dict:
    """usersInfo document for an already provisioned app_user."""
    return {
        "_id": "rust_app_db.app_user",
        "userId": "6f1c3e1a-0000-0000-0000-000000000000",
        "user": "app_user",
        "db": "rust_app_db",
        "roles": [{"role": "readWrite", "db": "rust_app_db"}],
        "mechanisms": ["SCRAM-SHA-1", "SCRAM-SHA-256"],
    }


@pytest.fixture
def mock_command_db():
    """A motor-like database whose command() is an AsyncMock."""
    db = MagicMock()
    db.name = "rust_app_db"
    db.command = AsyncMock(return_value={"ok": 1.0})
    return db
