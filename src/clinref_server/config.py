"""Server configuration — reads settings from environment variables.

All settings have sensible defaults for local development.  Catalog
sources and load tuning come from the SDK's ``CLINREF_*`` variables.
"""

import os
from dataclasses import dataclass, field

from clinref_catalog.config import LoaderSettings, load_loader_settings


@dataclass(frozen=True)
class ServerSettings:
    """Immutable server configuration read from environment at startup."""

    # Network
    host: str = "0.0.0.0"
    port: int = 8080

    # CORS: comma-separated origins, or "*" for wide-open dev mode
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    # Logging
    log_level: str = "INFO"

    # Catalog sources, timeout and retry policy
    loader: LoaderSettings = field(default_factory=LoaderSettings)


def load_settings() -> ServerSettings:
    """Build settings from ``SERVER_*`` and ``CLINREF_*`` environment variables."""
    raw_origins = os.getenv("SERVER_CORS_ORIGINS", "*")
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]

    return ServerSettings(
        host=os.getenv("SERVER_HOST", "0.0.0.0"),
        port=int(os.getenv("SERVER_PORT", "8080")),
        cors_origins=origins,
        log_level=os.getenv("SERVER_LOG_LEVEL", "INFO").upper(),
        loader=load_loader_settings(),
    )
