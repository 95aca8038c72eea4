"""Typed view of the ``config`` section of ``config.yaml``."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field
from sqlalchemy.engine import make_url

Environment = Literal["development", "production", "test"]


class CORSConfig(BaseModel):
    origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed to call the API from a browser",
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default_factory=lambda: ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default_factory=lambda: ["*"])


class JWTConfig(BaseModel):
    """Access token settings. Tokens are HS256-signed with ``secret``."""

    secret: str | None = Field(default=None, description="Shared signing secret")
    issuer: str = Field(default="meredith", description="iss of issued tokens")
    audiences: list[str] = Field(
        default_factory=lambda: ["meredith-api"],
        description="aud values accepted on incoming tokens",
    )
    allowed_algorithms: list[str] = Field(default_factory=lambda: ["HS256"])
    expires_in_seconds: int = Field(default=3600, description="Lifetime of issued tokens")
    clock_skew: int = Field(default=60, description="Leeway for exp/nbf/iat checks")
    cookie_name: str = Field(default="auth", description="Cookie read when no bearer header is sent")


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: Literal["json", "plain"] = Field(
        default="json", description="Format of the file sink; the console is always plain"
    )
    file: str | None = Field(default="logs/app.log", description="File sink path; empty disables it")
    max_size_mb: int = Field(default=10, description="Rotation size of the file sink")
    backup_count: int = Field(default=5, description="Rotated files kept")


class DatabaseConfig(BaseModel):
    """Connection settings.

    Outside production the password travels in ``url``. In production it is
    read from ``password_file`` or from the variable named by
    ``password_env_var``, in that order.
    """

    url: str = Field(default="sqlite:///./meredith.db")
    environment_mode: str = Field(default="development")
    echo: bool = Field(default=False, description="Log every SQL statement")
    pool_size: int = 20
    max_overflow: int = 10
    pool_timeout: int = Field(default=30, description="Seconds to wait for a pooled connection")
    pool_recycle: int = Field(default=1800, description="Seconds before a connection is replaced")
    password_env_var: str | None = None
    password_file: str | None = None

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def password(self) -> str | None:
        """Resolve the password for ``environment_mode``.

        Raises:
            FileNotFoundError: ``password_file`` is set but missing
            ValueError: the named variable is unset, or the mode is unknown
        """
        if self.environment_mode in ("development", "test"):
            return make_url(self.url).password

        if self.environment_mode != "production":
            raise ValueError(
                "Invalid environment_mode; must be 'development', 'production', or 'test'"
            )

        if self.password_file:
            return Path(self.password_file).read_text().strip()
        if self.password_env_var:
            value = os.getenv(self.password_env_var)
            if not value:
                raise ValueError(f"Environment variable {self.password_env_var} not set")
            return value
        return make_url(self.url).password

    @property
    def connection_string(self) -> str:
        """``url`` with the resolved password filled in."""
        url = make_url(self.url)
        if url.password:
            if self.environment_mode == "production":
                logger.warning("Database password is embedded in the URL in production")
        else:
            password = self.password
            if password:
                url = url.set(password=password)
        return url.render_as_string(hide_password=False)


class AppConfig(BaseModel):
    environment: Environment = "development"
    host: str = "localhost"
    port: int = 8000
    cors: CORSConfig = Field(default_factory=CORSConfig)

    @property
    def base_url(self) -> str:
        scheme = "https" if self.environment == "production" else "http"
        return f"{scheme}://{self.host}:{self.port}"


class ConfigData(BaseModel):
    """Root of the configuration tree."""

    app: AppConfig = Field(default_factory=AppConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    jwt: JWTConfig = Field(default_factory=JWTConfig)
