"""
Command line entry point.

Usage:
    setdb-bootstrap init [--policy ensure|skip|strict]
    setdb-bootstrap status
    setdb-bootstrap doctor

Environment Variables:
    MONGO_URI: Administrative MongoDB connection string
    MONGO_ADMIN_USERNAME / MONGO_ADMIN_PASSWORD: Administrative credentials
    APP_DB_NAME: Target database (default: rust_app_db)
    APP_DB_USER / APP_DB_PASSWORD / APP_DB_PASSWORD_FILE: Application principal
    APP_COLLECTIONS: JSON list of collections to create
    ON_EXISTING: Repeat-run policy (default: ensure)
    LOG_LEVEL: Logging level (default: INFO)
"""
import argparse
import asyncio
import logging
from typing import Optional, Sequence

from pydantic import ValidationError
from pymongo.errors import PyMongoError

from setdb.config import Settings, get_settings
from setdb.core.errors import classify_error
from setdb.core.logging import configure_logging
from setdb.database import admin
from setdb.database.connections import mongo_client
from setdb.models.bootstrap import ExistingPolicy
from setdb.services.bootstrap_service import BootstrapService

logger = logging.getLogger("setdb")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="setdb-bootstrap",
        description="Provision the application user and collections of the set game database.",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init", help="Create the user and collections.")
    init_parser.add_argument(
        "--policy",
        choices=[policy.value for policy in ExistingPolicy],
        default=None,
        help="What to do with entities that already exist (default: ON_EXISTING).",
    )

    subparsers.add_parser("status", help="Report whether the database is bootstrapped.")
    subparsers.add_parser("doctor", help="Check the connection and list databases.")
    return parser


async def run_init(settings: Settings, policy: Optional[ExistingPolicy] = None) -> int:
    async with mongo_client(settings) as client:
        service = BootstrapService(client, settings, policy=policy)
        report = await service.run()

    if not report.succeeded:
        return EXIT_FAILED
    print(report.confirmation_message)
    return EXIT_OK


async def run_status(settings: Settings) -> int:
    async with mongo_client(settings) as client:
        service = BootstrapService(client, settings)
        try:
            status = await service.verify()
        except PyMongoError as e:
            logger.error(f"Status check failed ({classify_error(e).value}): {e}")
            return EXIT_FAILED

    print(status.model_dump_json(indent=2))
    return EXIT_OK if status.complete else EXIT_FAILED


async def run_doctor(settings: Settings) -> int:
    logger.info(f"Connecting to MongoDB at: {settings.mongo_uri}")
    async with mongo_client(settings) as client:
        try:
            await client.admin.command("ping")
            names = await admin.list_databases(client)
        except PyMongoError as e:
            logger.error(f"MongoDB connection failed ({classify_error(e).value}): {e}")
            return EXIT_FAILED

    print("Available databases:")
    for name in names:
        print(f"  - {name}")
    print("MongoDB connection successful!")
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as e:
        configure_logging(args.log_level or "INFO")
        logger.error(f"Invalid configuration: {e}")
        return EXIT_CONFIG

    configure_logging(args.log_level or settings.log_level)

    try:
        if args.command == "init":
            policy = ExistingPolicy(args.policy) if args.policy else None
            return asyncio.run(run_init(settings, policy))
        if args.command == "status":
            return asyncio.run(run_status(settings))
        return asyncio.run(run_doctor(settings))
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_CONFIG


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
