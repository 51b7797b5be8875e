"""Storage configuration."""

import os

from pydantic import BaseModel, Field, model_validator

from core.exceptions import ConfigError

DATABASE_URL_ENV = "DASHBOARD_DATABASE_URL"
DATABASE_PASSWORD_ENV = "DASHBOARD_DATABASE_PASSWORD"
POOL_MIN_ENV = "DASHBOARD_POOL_MIN"
POOL_MAX_ENV = "DASHBOARD_POOL_MAX"


class StorageConfig(BaseModel):
    """
    Connection settings for the invoice store.

    The URL identifies the endpoint, the password is the access credential.
    Both are required; there is no placeholder fallback.
    """

    database_url: str = Field(
        ...,
        description="PostgreSQL DSN or URL, without the password",
        min_length=1,
    )
    database_password: str = Field(
        ...,
        description="Password for the database role",
        min_length=1,
    )
    pool_min_connections: int = Field(
        default=2,
        description="Connections opened when the pool is created",
        ge=1,
    )
    pool_max_connections: int = Field(
        default=20,
        description="Upper bound on pooled connections",
        ge=1,
        le=100,
    )
    revalidate_path: str = Field(
        default="/dashboard/invoices",
        description="Page invalidated after every invoice mutation",
    )

    @model_validator(mode="after")
    def pool_bounds_ordered(self) -> "StorageConfig":
        if self.pool_min_connections > self.pool_max_connections:
            raise ValueError("pool_min_connections cannot exceed pool_max_connections")
        return self


def load_storage_config() -> StorageConfig:
    """
    Build StorageConfig from environment variables. Fails fast.

    Raises:
        ConfigError: If DASHBOARD_DATABASE_URL or DASHBOARD_DATABASE_PASSWORD
            is unset or empty.
    """
    database_url = os.getenv(DATABASE_URL_ENV)
    database_password = os.getenv(DATABASE_PASSWORD_ENV)

    if not database_url:
        raise ConfigError(f"{DATABASE_URL_ENV} environment variable is required")

    if not database_password:
        raise ConfigError(f"{DATABASE_PASSWORD_ENV} environment variable is required")

    kwargs = {
        "database_url": database_url,
        "database_password": database_password,
    }
    if os.getenv(POOL_MIN_ENV):
        kwargs["pool_min_connections"] = os.getenv(POOL_MIN_ENV)
    if os.getenv(POOL_MAX_ENV):
        kwargs["pool_max_connections"] = os.getenv(POOL_MAX_ENV)

    return StorageConfig(**kwargs)
