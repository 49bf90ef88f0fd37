"""
Service layer for bootstrap logic.
"""
from setdb.services.bootstrap_service import BootstrapService

__all__ = ["BootstrapService"]
