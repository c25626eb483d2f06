"""Observability models returned by the loader and the matcher."""

import enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class LoadMode(str, enum.Enum):
    """Which dataset a loaded catalog came from."""

    PRIMARY = "primary"
    FALLBACK = "fallback"


class CatalogStatus(BaseModel):
    """Snapshot of a loader's state.

    ``errors`` explains a fallback load (fetch failure, corrupt payload or
    integrity violations).  It is empty for a clean primary load.
    """

    name: str
    loaded: bool = False
    using_fallback: bool = False
    record_count: int = 0
    mode: Optional[LoadMode] = None
    source: str = ""
    version: Optional[str] = None
    errors: list[str] = []
    loaded_at: Optional[datetime] = None


class ValidationReport(BaseModel):
    """Result of a catalog integrity scan."""

    is_valid: bool
    errors: list[str] = []
