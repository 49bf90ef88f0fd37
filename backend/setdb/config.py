"""
Bootstrap configuration loaded from environment variables.
"""
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from setdb.database.databases import rust_app_db
from setdb.models.bootstrap import ExistingPolicy

# Characters MongoDB rejects in database names
_INVALID_DB_NAME_CHARS = set('/\\. "$*<>:|?')
_MAX_DB_NAME_LENGTH = 63


class Settings(BaseSettings):
    """Bootstrap settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # MongoDB administrative connection
    mongo_uri: str = "mongodb://mongodb:27017"
    mongo_admin_username: Optional[str] = None
    mongo_admin_password: Optional[SecretStr] = None
    mongo_auth_source: str = "admin"
    mongo_server_selection_timeout_ms: int = 5000

    # Target database and application principal
    app_db_name: str = rust_app_db.DB_NAME
    app_db_user: str = rust_app_db.APP_USER
    app_db_password: Optional[SecretStr] = None
    app_db_password_file: Optional[Path] = None
    app_db_role: str = rust_app_db.APP_ROLE
    app_collections: list[str] = list(rust_app_db.Collections.ALL)

    # Behaviour
    on_existing: ExistingPolicy = ExistingPolicy.ENSURE
    bootstrap_on_startup: bool = False
    log_level: str = "INFO"

    @field_validator("app_db_name")
    @classmethod
    def _validate_db_name(cls, value: str) -> str:
        if not value:
            raise ValueError("database name must not be empty")
        if len(value) > _MAX_DB_NAME_LENGTH:
            raise ValueError(f"database name longer than {_MAX_DB_NAME_LENGTH} characters")
        bad = sorted(_INVALID_DB_NAME_CHARS.intersection(value))
        if bad:
            raise ValueError(f"database name contains invalid characters: {''.join(bad)!r}")
        return value

    @field_validator("app_collections")
    @classmethod
    def _validate_collections(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("at least one collection is required")
        if len(set(value)) != len(value):
            raise ValueError("collection names must be unique")
        for name in value:
            if not name or "$" in name or "\x00" in name:
                raise ValueError(f"invalid collection name: {name!r}")
            if name.startswith("system."):
                raise ValueError(f"reserved collection name: {name!r}")
        return value

    @field_validator("app_db_user", "app_db_role")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @model_validator(mode="after")
    def _admin_password_needs_username(self) -> "Settings":
        if self.mongo_admin_password is not None and not self.mongo_admin_username:
            raise ValueError("MONGO_ADMIN_PASSWORD is set without MONGO_ADMIN_USERNAME")
        return self

    def app_password(self) -> str:
        """
        Resolve the application user's password.

        APP_DB_PASSWORD wins over APP_DB_PASSWORD_FILE.

        Raises:
            ValueError: If neither source is configured or the file is unreadable or empty
        """
        if self.app_db_password is not None:
            return self.app_db_password.get_secret_value()
        if self.app_db_password_file is not None:
            try:
                password = self.app_db_password_file.read_text().strip()
            except OSError as e:
                raise ValueError(f"cannot read password file {self.app_db_password_file}: {e}") from e
            if not password:
                raise ValueError(f"password file {self.app_db_password_file} is empty")
            return password
        raise ValueError("APP_DB_PASSWORD or APP_DB_PASSWORD_FILE must be set")

    def mongo_client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for the administrative MongoDB client."""
        kwargs: dict[str, Any] = {
            "serverSelectionTimeoutMS": self.mongo_server_selection_timeout_ms,
        }
        if self.mongo_admin_username:
            kwargs["username"] = self.mongo_admin_username
            if self.mongo_admin_password is not None:
                kwargs["password"] = self.mongo_admin_password.get_secret_value()
            kwargs["authSource"] = self.mongo_auth_source
        return kwargs


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
