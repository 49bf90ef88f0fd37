"""
Core module - Error classification and logging setup.
"""
from setdb.core.errors import BootstrapError, classify_error
from setdb.core.logging import configure_logging

__all__ = [
    "BootstrapError",
    "classify_error",
    "configure_logging",
]
