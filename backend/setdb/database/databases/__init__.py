"""
Database definitions and collection constants.
"""
from setdb.database.databases import rust_app_db

__all__ = ["rust_app_db"]
