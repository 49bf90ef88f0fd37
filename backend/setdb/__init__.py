"""
setdb - MongoDB bootstrap for the set game backend.
"""
__version__ = "0.1.0"
