"""ReferenceData — the owned handle for both reference catalogs.

Constructed once at startup and passed to consumers by reference; there is
no module-level "loaded database" state.

Usage::

    reference = ReferenceData.from_settings(load_loader_settings())
    await reference.initialize()

    reference.codes.get_by_code("J06.9")
    reference.interactions.find_pair("warfarin", "aspirin")
    reference.status()["icd10"].using_fallback
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from clinref_catalog.config import LoaderSettings
from clinref_catalog.icd10 import CodeLookupEngine
from clinref_catalog.interactions import InteractionMatcher
from clinref_catalog.loader import CodeCatalogLoader, DrugCatalogLoader
from clinref_catalog.models.status import CatalogStatus
from clinref_catalog.sources import source_from_uri

logger = logging.getLogger(__name__)


class ReferenceData:
    """Owns the code and drug loaders and the engines built on them."""

    def __init__(self, code_loader: CodeCatalogLoader, drug_loader: DrugCatalogLoader) -> None:
        self._code_loader = code_loader
        self._drug_loader = drug_loader
        self._codes: Optional[CodeLookupEngine] = None
        self._interactions: Optional[InteractionMatcher] = None

    @classmethod
    def from_settings(cls, settings: LoaderSettings | None = None) -> ReferenceData:
        """Build loaders for the sources named in *settings*."""
        settings = settings or LoaderSettings()
        return cls(
            CodeCatalogLoader(
                source_from_uri(settings.codes_source, timeout=settings.timeout_seconds),
                settings,
            ),
            DrugCatalogLoader(
                source_from_uri(settings.drugs_source, timeout=settings.timeout_seconds),
                settings,
            ),
        )

    async def initialize(self) -> ReferenceData:
        """Load both catalogs concurrently and build the engines.

        Safe to call more than once; later calls reuse the loaded snapshots.
        """
        code_catalog, drug_catalog = await asyncio.gather(
            self._code_loader.load(),
            self._drug_loader.load(),
        )
        if self._codes is None or self._codes.catalog is not code_catalog:
            self._codes = CodeLookupEngine(code_catalog)
        if self._interactions is None or self._interactions.catalog is not drug_catalog:
            self._interactions = InteractionMatcher(drug_catalog)

        for status in self.status().values():
            if status.using_fallback:
                logger.warning("%s catalog is running on the limited fallback dataset", status.name)
        return self

    @property
    def initialized(self) -> bool:
        return self._codes is not None and self._interactions is not None

    @property
    def codes(self) -> CodeLookupEngine:
        if self._codes is None:
            raise RuntimeError("ReferenceData.initialize() has not been awaited")
        return self._codes

    @property
    def interactions(self) -> InteractionMatcher:
        if self._interactions is None:
            raise RuntimeError("ReferenceData.initialize() has not been awaited")
        return self._interactions

    def status(self) -> dict[str, CatalogStatus]:
        """Loader status keyed by catalog name."""
        return {
            self._code_loader.name: self._code_loader.status(),
            self._drug_loader.name: self._drug_loader.status(),
        }
