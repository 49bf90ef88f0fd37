"""
API Routers module.
"""
from setdb.routers import bootstrap, health

__all__ = ["bootstrap", "health"]
