"""
Application database configuration.
Stores players, games and statistics for the set game backend.
"""

DB_NAME = "rust_app_db"

# Application principal
APP_USER = "app_user"
APP_ROLE = "readWrite"


class Collections:
    """Collection names in rust_app_db."""
    PLAYERS = "setplayers"
    GAMES = "setgames"
    STATS = "setstats"

    # Creation order
    ALL = (PLAYERS, GAMES, STATS)


# Manifest describing what a bootstrap run provisions
DB_MANIFEST = {
    "db_name": DB_NAME,
    "purpose": "Set game players, games and statistics",
    "collections": list(Collections.ALL),
    "principal": {"user": APP_USER, "roles": [{"role": APP_ROLE, "db": DB_NAME}]},
}
