"""
Configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields.  When
``ENVIRONMENT`` is unset the service runs as ``production``: error
detail is withheld and the seed route is not mounted.  Each
instantiation re-reads the environment, which lets tests build an
isolated ``Settings`` after adjusting ``os.environ``.
"""

import os
from dataclasses import dataclass, field
from typing import List


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _split_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: os.getenv("PROJECT_NAME", "Blog API"))
    api_version: str = field(default_factory=lambda: os.getenv("API_VERSION", "1.0.0"))
    environment: str = field(default_factory=lambda: os.getenv("ENVIRONMENT", "production"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "5000")))

    # Connection string for MongoDB.  When the URI names a database
    # (``mongodb://host/mernapp``) that database is used, otherwise
    # ``database_name`` applies.
    mongodb_uri: str = field(
        default_factory=lambda: os.getenv("MONGODB_URI", "mongodb://localhost:27017/mernapp")
    )
    database_name: str = field(default_factory=lambda: os.getenv("MONGODB_DATABASE", "mernapp"))
    server_selection_timeout_ms: int = field(
        default_factory=lambda: int(os.getenv("MONGODB_TIMEOUT_MS", "5000"))
    )
    # Bound on the health check ping, kept short so the endpoint answers
    # promptly while the server is down.
    health_timeout_ms: int = field(default_factory=lambda: int(os.getenv("HEALTH_TIMEOUT_MS", "1000")))

    cors_origins: List[str] = field(
        default_factory=lambda: _split_origins(os.getenv("CORS_ORIGINS", "*"))
    )

    # The seed endpoint wipes both collections.  It is mounted only when
    # this flag is set, and the flag is off by default in production.
    enable_seed: bool = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        self.environment = self.environment.strip().lower()
        if self.enable_seed is None:
            self.enable_seed = _env_flag("ENABLE_SEED", self.environment != "production")

    @property
    def debug(self) -> bool:
        """Raw error text is echoed to clients only in development."""
        return self.environment == "development"


# Instantiate settings once for the launcher and the module-level app.
# Tests construct their own ``Settings`` and pass it to ``create_app``.
settings = Settings()
