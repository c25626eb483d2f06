"""Loader configuration — reads settings from environment variables.

All settings have sensible defaults for local development: both catalogs
load from the datasets bundled under ``clinref_catalog/data``.
"""

import os
from dataclasses import dataclass

from clinref_catalog.constants import DEFAULT_CODES_PATH, DEFAULT_DRUGS_PATH


@dataclass(frozen=True)
class LoaderSettings:
    """Immutable catalog loader configuration."""

    # Primary sources: a filesystem path or an http(s) URL
    codes_source: str = str(DEFAULT_CODES_PATH)
    drugs_source: str = str(DEFAULT_DRUGS_PATH)

    # Upper bound for one whole load attempt, retries included
    timeout_seconds: float = 10.0

    # Transient fetch failures are retried up to this many attempts in total
    max_attempts: int = 3

    # First retry waits this long; each further retry doubles it
    backoff_seconds: float = 0.5


def load_loader_settings() -> LoaderSettings:
    """Build settings from ``CLINREF_*`` environment variables."""
    return LoaderSettings(
        codes_source=os.getenv("CLINREF_CODES_SOURCE") or str(DEFAULT_CODES_PATH),
        drugs_source=os.getenv("CLINREF_DRUGS_SOURCE") or str(DEFAULT_DRUGS_PATH),
        timeout_seconds=float(os.getenv("CLINREF_LOAD_TIMEOUT", "10")),
        max_attempts=int(os.getenv("CLINREF_LOAD_MAX_ATTEMPTS", "3")),
        backoff_seconds=float(os.getenv("CLINREF_LOAD_BACKOFF", "0.5")),
    )
