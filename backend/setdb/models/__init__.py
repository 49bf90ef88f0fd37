"""
Pydantic models for bootstrap results and verification.
"""
from setdb.models.bootstrap import (
    BootstrapReport,
    BootstrapStatus,
    CollectionStatus,
    ErrorKind,
    ExistingPolicy,
    PrincipalStatus,
    StepKind,
    StepResult,
    StepStatus,
)

__all__ = [
    "BootstrapReport",
    "BootstrapStatus",
    "CollectionStatus",
    "ErrorKind",
    "ExistingPolicy",
    "PrincipalStatus",
    "StepKind",
    "StepResult",
    "StepStatus",
]
