"""
Database module - MongoDB connections, administrative commands and database definitions.

Connections are imported from setdb.database.connections directly; this package
only re-exports the database definitions, which the settings module depends on.
"""
from setdb.database.databases import rust_app_db

__all__ = ["rust_app_db"]
