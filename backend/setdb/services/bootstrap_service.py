"""
Bootstrap service: provisions the application principal and collections.
"""
import logging
from datetime import datetime, timezone
from functools import partial
from typing import Awaitable, Callable, Optional

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from setdb.config import Settings
from setdb.core.errors import classify_error
from setdb.database import admin
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

logger = logging.getLogger(__name__)

Step = Callable[[], Awaitable[StepResult]]


class BootstrapService:
    """Runs and verifies the bootstrap of a single target database."""

    def __init__(
        self,
        client: AsyncIOMotorClient,
        settings: Settings,
        policy: Optional[ExistingPolicy] = None,
    ):
        """
        Initialize with an administrative client.

        Args:
            client: Connected (or lazily connecting) motor client
            settings: Bootstrap settings
            policy: Overrides settings.on_existing
        """
        self.client = client
        self.settings = settings
        self.policy = policy or settings.on_existing
        self.db = client[settings.app_db_name]

    @property
    def role_bindings(self) -> list[dict]:
        return [admin.role_binding(self.settings.app_db_role, self.db.name)]

    async def run(self) -> BootstrapReport:
        """
        Execute every step in order, stopping at the first failure.

        Returns:
            BootstrapReport with one StepResult per attempted step

        Raises:
            ValueError: If no application password is configured
        """
        password = self.settings.app_password()

        report = BootstrapReport(database=self.db.name, policy=self.policy)
        steps: list[Step] = [
            self._select_database,
            partial(self._ensure_principal, password),
        ]
        steps.extend(
            partial(self._ensure_collection, name)
            for name in self.settings.app_collections
        )

        logger.info(f"Bootstrapping {self.db.name} (policy={self.policy.value})")
        for step in steps:
            result = await step()
            report.steps.append(result)
            if not result.ok:
                logger.error(
                    f"Step {result.step.value} failed for {result.target}: "
                    f"{result.error_kind.value if result.error_kind else 'unknown'} - {result.message}"
                )
                break
            logger.info(f"{result.step.value} {result.target}: {result.status.value}")

        report.finished_at = datetime.now(timezone.utc)
        if report.succeeded:
            logger.info(report.confirmation_message)
        return report

    async def verify(self) -> BootstrapStatus:
        """
        Inspect the principal and collections without changing anything.

        Raises:
            PyMongoError: If the server cannot be queried
        """
        user = await admin.get_user(self.db, self.settings.app_db_user)
        roles = _normalize_roles(user.get("roles", [])) if user else []
        principal = PrincipalStatus(
            username=self.settings.app_db_user,
            exists=user is not None,
            roles=roles,
            has_role=all(binding in roles for binding in self.role_bindings),
        )

        existing = set(await self.db.list_collection_names())
        collections = []
        for name in self.settings.app_collections:
            count = await self.db[name].count_documents({}) if name in existing else 0
            collections.append(CollectionStatus(name=name, exists=name in existing, document_count=count))

        unexpected = sorted(
            name for name in existing
            if name not in self.settings.app_collections and not name.startswith("system.")
        )
        return BootstrapStatus(
            database=self.db.name,
            principal=principal,
            collections=collections,
            unexpected_collections=unexpected,
        )

    # ==================== Steps ====================

    async def _select_database(self) -> StepResult:
        try:
            await admin.ping_database(self.db)
        except PyMongoError as e:
            return _failed(StepKind.SELECT_DATABASE, self.db.name, e)
        return StepResult(step=StepKind.SELECT_DATABASE, target=self.db.name, status=StepStatus.SELECTED)

    async def _ensure_principal(self, password: str) -> StepResult:
        kind = StepKind.CREATE_PRINCIPAL
        username = self.settings.app_db_user
        try:
            existing = await admin.get_user(self.db, username)
            if existing is None:
                await admin.create_user(self.db, username, password, self.role_bindings)
                return StepResult(step=kind, target=username, status=StepStatus.CREATED)

            if self.policy == ExistingPolicy.STRICT:
                return StepResult(
                    step=kind,
                    target=username,
                    status=StepStatus.FAILED,
                    error_kind=ErrorKind.DUPLICATE_PRINCIPAL,
                    message=f"User {username!r} already exists in {self.db.name}",
                )
            if self.policy == ExistingPolicy.SKIP:
                return StepResult(step=kind, target=username, status=StepStatus.EXISTS)

            await admin.update_user(self.db, username, password, self.role_bindings)
            return StepResult(step=kind, target=username, status=StepStatus.UPDATED)
        except PyMongoError as e:
            return _failed(kind, username, e)

    async def _ensure_collection(self, name: str) -> StepResult:
        kind = StepKind.CREATE_COLLECTION
        try:
            if name in await self.db.list_collection_names():
                if self.policy == ExistingPolicy.STRICT:
                    return StepResult(
                        step=kind,
                        target=name,
                        status=StepStatus.FAILED,
                        error_kind=ErrorKind.DUPLICATE_COLLECTION,
                        message=f"Collection {name!r} already exists in {self.db.name}",
                    )
                return StepResult(step=kind, target=name, status=StepStatus.EXISTS)

            await self.db.create_collection(name)
        except PyMongoError as e:
            return _failed(kind, name, e)
        return StepResult(step=kind, target=name, status=StepStatus.CREATED)


def _failed(step: StepKind, target: str, exc: PyMongoError) -> StepResult:
    return StepResult(
        step=step,
        target=target,
        status=StepStatus.FAILED,
        error_kind=classify_error(exc, step),
        message=str(exc),
    )


def _normalize_roles(roles: list[dict]) -> list[dict]:
    # usersInfo may add fields beyond role/db
    return [{"role": r.get("role"), "db": r.get("db")} for r in roles]
