"""
Classification of MongoDB driver faults into bootstrap error kinds.
"""
from typing import Optional

from pymongo.errors import CollectionInvalid, ConnectionFailure, OperationFailure

from setdb.models.bootstrap import ErrorKind, StepKind

# Server error codes
UNAUTHORIZED = 13
AUTHENTICATION_FAILED = 18
NAMESPACE_EXISTS = 48
DUPLICATE_KEY = 11000
USER_ALREADY_EXISTS = 51003


class BootstrapError(Exception):
    """A bootstrap step failed."""

    def __init__(self, kind: ErrorKind, message: str, step: Optional[StepKind] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.step = step

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"


def classify_error(exc: Exception, step: Optional[StepKind] = None) -> ErrorKind:
    """
    Map a driver exception to an ErrorKind.

    Args:
        exc: Exception raised by pymongo/motor
        step: Step that raised it; older servers report an existing user
            as a duplicate key on createUser

    Returns:
        The matching ErrorKind, OPERATION_FAILED when nothing more specific fits
    """
    if isinstance(exc, ConnectionFailure):
        return ErrorKind.CONNECTION_UNAVAILABLE
    if isinstance(exc, CollectionInvalid):
        return ErrorKind.DUPLICATE_COLLECTION
    if isinstance(exc, OperationFailure):
        code = exc.code
        if code in (UNAUTHORIZED, AUTHENTICATION_FAILED):
            return ErrorKind.PERMISSION_DENIED
        if code == NAMESPACE_EXISTS:
            return ErrorKind.DUPLICATE_COLLECTION
        if code == USER_ALREADY_EXISTS:
            return ErrorKind.DUPLICATE_PRINCIPAL
        if code == DUPLICATE_KEY and step == StepKind.CREATE_PRINCIPAL:
            return ErrorKind.DUPLICATE_PRINCIPAL
    return ErrorKind.OPERATION_FAILED
