"""
Bootstrap result models.

Every administrative step of a bootstrap run produces a StepResult;
a run produces a BootstrapReport. Verification produces a BootstrapStatus.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field


class ExistingPolicy(str, Enum):
    """What a run does with entities that already exist."""
    ENSURE = "ensure"   # reconcile the principal, keep collections
    SKIP = "skip"       # leave everything that exists untouched
    STRICT = "strict"   # any existing entity is a failure


class StepKind(str, Enum):
    """Administrative steps, in execution order."""
    SELECT_DATABASE = "select_database"
    CREATE_PRINCIPAL = "create_principal"
    CREATE_COLLECTION = "create_collection"


class StepStatus(str, Enum):
    """Outcome of a single step."""
    SELECTED = "selected"
    CREATED = "created"
    UPDATED = "updated"
    EXISTS = "exists"
    FAILED = "failed"


class ErrorKind(str, Enum):
    """Classified failure kinds."""
    DUPLICATE_PRINCIPAL = "duplicate_principal"
    DUPLICATE_COLLECTION = "duplicate_collection"
    CONNECTION_UNAVAILABLE = "connection_unavailable"
    PERMISSION_DENIED = "permission_denied"
    OPERATION_FAILED = "operation_failed"


class StepResult(BaseModel):
    """Result of one administrative step."""
    step: StepKind
    target: str = Field(..., description="Database, user or collection name")
    status: StepStatus
    error_kind: Optional[ErrorKind] = None
    message: Optional[str] = None

    @computed_field
    @property
    def ok(self) -> bool:
        return self.status != StepStatus.FAILED


class BootstrapReport(BaseModel):
    """
    Ordered results of one bootstrap run.

    Steps after the first failure are never attempted, so a failed report
    always ends with the failing step.
    """
    database: str
    policy: ExistingPolicy
    steps: list[StepResult] = Field(default_factory=list)
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: Optional[datetime] = None

    @computed_field
    @property
    def succeeded(self) -> bool:
        return all(step.ok for step in self.steps)

    @property
    def failed_step(self) -> Optional[StepResult]:
        for step in self.steps:
            if not step.ok:
                return step
        return None

    @property
    def confirmation_message(self) -> str:
        return f"Database initialized: {self.database}"

    def raise_for_failure(self) -> None:
        """Raise BootstrapError if any step failed."""
        failed = self.failed_step
        if failed is None:
            return
        from setdb.core.errors import BootstrapError
        raise BootstrapError(
            failed.error_kind or ErrorKind.OPERATION_FAILED,
            failed.message or f"{failed.step.value} failed for {failed.target}",
            step=failed.step,
        )


class PrincipalStatus(BaseModel):
    """Observed state of the application user."""
    username: str
    exists: bool
    roles: list[dict] = Field(default_factory=list)
    has_role: bool = False


class CollectionStatus(BaseModel):
    """Observed state of one configured collection."""
    name: str
    exists: bool
    document_count: int = 0


class BootstrapStatus(BaseModel):
    """Read-only view of what a bootstrap run should have produced."""
    database: str
    principal: PrincipalStatus
    collections: list[CollectionStatus]
    unexpected_collections: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def complete(self) -> bool:
        return self.principal.has_role and all(c.exists for c in self.collections)
