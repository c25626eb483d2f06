"""CatalogLoader — loads one immutable catalog snapshot per process.

The loader is the single source of truth for reference data at runtime.
``load()`` is called once at startup (or lazily by the first query) and:

  1. fetches the primary source, retrying transient failures with
     exponential backoff;
  2. decodes and parses the payload into a snapshot;
  3. validates the snapshot (non-empty, unique keys, foreign keys);
  4. on any failure, or if the whole attempt exceeds the timeout, serves
     the embedded fallback dataset instead.

Concurrent callers share one in-flight attempt and all receive the same
snapshot object.  ``load()`` never raises.

Usage::

    loader = CodeCatalogLoader(source_from_uri("data/icd10_codes.json"))
    catalog = await loader.load()
    loader.status().using_fallback
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Generic, Optional, TypeVar

from pydantic import ValidationError

from clinref_catalog.catalog import CodeCatalog, DrugCatalog
from clinref_catalog.config import LoaderSettings
from clinref_catalog.constants import CODES_CATALOG, DRUGS_CATALOG
from clinref_catalog.convert import derive_categories
from clinref_catalog.errors import (
    CatalogError,
    CatalogFormatError,
    CatalogIntegrityError,
    TransientSourceError,
)
from clinref_catalog.fallback import fallback_code_catalog, fallback_drug_catalog
from clinref_catalog.models.codes import CatalogMetadata, Category, ReferenceCode
from clinref_catalog.models.drugs import Drug, DrugInteraction
from clinref_catalog.models.status import CatalogStatus, LoadMode
from clinref_catalog.sources import CatalogSource, decode_payload

logger = logging.getLogger(__name__)

CatalogT = TypeVar("CatalogT", CodeCatalog, DrugCatalog)


# ---------------------------------------------------------------------------
# Base loader
# ---------------------------------------------------------------------------

class CatalogLoader(ABC, Generic[CatalogT]):
    """Load-once, coalescing, degrading loader for one catalog.

    Subclasses supply parsing, validation and the fallback dataset.
    """

    name: str = "catalog"

    def __init__(self, source: CatalogSource, settings: LoaderSettings | None = None) -> None:
        self._source = source
        self._settings = settings or LoaderSettings()
        self._catalog: Optional[CatalogT] = None
        self._pending: Optional[asyncio.Future[CatalogT]] = None
        self._status = CatalogStatus(name=self.name, source=source.describe())

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def load(self) -> CatalogT:
        """Return the loaded snapshot, loading it on first call.

        Callers arriving while a load is in flight await the same attempt.
        Cancelling one caller does not cancel the shared attempt.
        """
        if self._catalog is not None:
            return self._catalog
        if self._pending is None:
            self._pending = asyncio.ensure_future(self._load_once())
        return await asyncio.shield(self._pending)

    def status(self) -> CatalogStatus:
        """Report ``loaded`` / ``using_fallback`` / ``record_count`` and friends."""
        return self._status

    @property
    def catalog(self) -> Optional[CatalogT]:
        """The loaded snapshot, or ``None`` before ``load()`` completes."""
        return self._catalog

    # ------------------------------------------------------------------
    # Subclass hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _parse(self, data: Any) -> CatalogT:
        """Turn decoded data into a snapshot; raise ``CatalogFormatError``."""
        ...

    @abstractmethod
    def _validate(self, catalog: CatalogT) -> list[str]:
        """Return integrity violations (empty list when valid)."""
        ...

    @abstractmethod
    def _fallback(self) -> CatalogT:
        """Build the embedded fallback snapshot."""
        ...

    @abstractmethod
    def _version(self, catalog: CatalogT) -> str:
        ...

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def _load_once(self) -> CatalogT:
        timeout = self._settings.timeout_seconds
        try:
            catalog = await asyncio.wait_for(self._load_primary(), timeout=timeout)
        except asyncio.TimeoutError:
            return self._use_fallback([f"load timed out after {timeout:g}s"])
        except CatalogIntegrityError as exc:
            return self._use_fallback(exc.errors)
        except CatalogError as exc:
            return self._use_fallback([str(exc)])
        except Exception as exc:
            # load() must always hand back a usable catalog
            logger.exception("Unexpected error loading %s catalog", self.name)
            return self._use_fallback([f"unexpected error: {exc!r}"])

        self._finish(catalog, LoadMode.PRIMARY, [])
        logger.info(
            "%s catalog loaded from %s: %d records (version %s)",
            self.name,
            self._source.describe(),
            len(catalog),
            self._version(catalog),
        )
        return catalog

    async def _load_primary(self) -> CatalogT:
        raw = await self._fetch_with_retry()
        data = decode_payload(raw, self._source.format)
        catalog = self._parse(data)
        errors = self._validate(catalog)
        if errors:
            for error in errors:
                logger.warning("%s catalog integrity: %s", self.name, error)
            raise CatalogIntegrityError(errors)
        return catalog

    async def _fetch_with_retry(self) -> bytes:
        attempts = max(1, self._settings.max_attempts)
        for attempt in range(1, attempts + 1):
            try:
                return await self._source.fetch()
            except TransientSourceError as exc:
                if attempt == attempts:
                    raise
                delay = self._settings.backoff_seconds * 2 ** (attempt - 1)
                logger.warning(
                    "%s catalog fetch attempt %d/%d failed (%s); retrying in %.2fs",
                    self.name,
                    attempt,
                    attempts,
                    exc,
                    delay,
                )
                await asyncio.sleep(delay)
        raise AssertionError("unreachable")

    def _use_fallback(self, errors: list[str]) -> CatalogT:
        catalog = self._fallback()
        logger.warning(
            "Using fallback %s catalog (%d records) instead of %s: %s",
            self.name,
            len(catalog),
            self._source.describe(),
            "; ".join(errors),
        )
        self._finish(catalog, LoadMode.FALLBACK, errors)
        return catalog

    def _finish(self, catalog: CatalogT, mode: LoadMode, errors: list[str]) -> None:
        self._catalog = catalog
        self._status = CatalogStatus(
            name=self.name,
            loaded=True,
            using_fallback=mode is LoadMode.FALLBACK,
            record_count=len(catalog),
            mode=mode,
            source=self._source.describe(),
            version=self._version(catalog),
            errors=errors,
            loaded_at=datetime.now(timezone.utc),
        )


# ---------------------------------------------------------------------------
# Concrete loaders
# ---------------------------------------------------------------------------

class CodeCatalogLoader(CatalogLoader[CodeCatalog]):
    """Loads the ICD-10 code catalog."""

    name = CODES_CATALOG

    def _parse(self, data: Any) -> CodeCatalog:
        return parse_code_catalog(data)

    def _validate(self, catalog: CodeCatalog) -> list[str]:
        return catalog.find_integrity_errors()

    def _fallback(self) -> CodeCatalog:
        return fallback_code_catalog()

    def _version(self, catalog: CodeCatalog) -> str:
        return catalog.metadata.version


class DrugCatalogLoader(CatalogLoader[DrugCatalog]):
    """Loads the curated drug / interaction catalog."""

    name = DRUGS_CATALOG

    def _parse(self, data: Any) -> DrugCatalog:
        return parse_drug_catalog(data)

    def _validate(self, catalog: DrugCatalog) -> list[str]:
        return catalog.find_integrity_errors()

    def _fallback(self) -> DrugCatalog:
        return fallback_drug_catalog()

    def _version(self, catalog: DrugCatalog) -> str:
        return catalog.version


# ---------------------------------------------------------------------------
# Payload parsing
# ---------------------------------------------------------------------------

def parse_code_catalog(data: Any) -> CodeCatalog:
    """Parse a decoded code payload.

    Accepts either the record-object shape ``{metadata, categories, codes}``
    or a bare array of code records, in which case categories are derived
    from each record's ``categoryCode`` / ``category``.
    """
    if isinstance(data, list):
        raw_codes, raw_categories, raw_meta = data, None, None
    elif isinstance(data, dict):
        raw_codes = data.get("codes")
        raw_categories = data.get("categories")
        raw_meta = data.get("metadata")
    else:
        raise CatalogFormatError(
            f"expected a record array or object, got {type(data).__name__}"
        )

    if not isinstance(raw_codes, list):
        raise CatalogFormatError("'codes' must be a list of records")
    if raw_categories is not None and not isinstance(raw_categories, list):
        raise CatalogFormatError("'categories' must be a list of records")

    try:
        codes = [ReferenceCode.model_validate(raw) for raw in raw_codes]
        if raw_categories is None:
            categories = derive_categories(codes)
        else:
            categories = [Category.model_validate(raw) for raw in raw_categories]
        metadata = CatalogMetadata.model_validate(raw_meta) if raw_meta else None
    except ValidationError as exc:
        raise CatalogFormatError(
            f"invalid code catalog record ({exc.error_count()} validation errors)"
        ) from exc

    return CodeCatalog(codes, categories, metadata)


def parse_drug_catalog(data: Any) -> DrugCatalog:
    """Parse a decoded ``{drugs, interactions}`` payload."""
    if not isinstance(data, dict):
        raise CatalogFormatError(f"expected a record object, got {type(data).__name__}")

    raw_drugs = data.get("drugs")
    raw_interactions = data.get("interactions") or []
    if not isinstance(raw_drugs, list):
        raise CatalogFormatError("'drugs' must be a list of records")
    if not isinstance(raw_interactions, list):
        raise CatalogFormatError("'interactions' must be a list of records")

    version = data.get("version")
    if version is None and isinstance(data.get("metadata"), dict):
        version = data["metadata"].get("version")

    try:
        drugs = [Drug.model_validate(raw) for raw in raw_drugs]
        interactions = [DrugInteraction.model_validate(raw) for raw in raw_interactions]
    except ValidationError as exc:
        raise CatalogFormatError(
            f"invalid drug catalog record ({exc.error_count()} validation errors)"
        ) from exc

    return DrugCatalog(drugs, interactions, version=str(version or "unknown"))
