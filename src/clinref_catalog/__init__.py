"""clinref_catalog — read-only reference data lookup for clinical UIs.

Public API:
    ReferenceData       — owns both catalogs; ``await initialize()`` once
    CodeLookupEngine    — ICD-10 code resolution, search and suggestions
    InteractionMatcher  — pairwise / N-way drug interaction lookup
    CodeCatalogLoader   — load-once loader for the code catalog
    DrugCatalogLoader   — load-once loader for the drug catalog
    LoaderSettings      — loader sources, timeout and retry tuning

Snapshots:
    CodeCatalog         — immutable codes + categories
    DrugCatalog         — immutable drugs + interactions

Sources:
    FileSource, HttpSource, StaticSource, source_from_uri
"""

from clinref_catalog.catalog import CodeCatalog, DrugCatalog
from clinref_catalog.config import LoaderSettings, load_loader_settings
from clinref_catalog.icd10 import CodeLookupEngine
from clinref_catalog.interactions import InteractionMatcher
from clinref_catalog.loader import CatalogLoader, CodeCatalogLoader, DrugCatalogLoader
from clinref_catalog.models import (
    CatalogStatus,
    Category,
    Drug,
    DrugCategory,
    DrugInteraction,
    EvidenceLevel,
    InteractionSeverity,
    LoadMode,
    ReferenceCode,
    ValidationReport,
)
from clinref_catalog.reference import ReferenceData
from clinref_catalog.sources import FileSource, HttpSource, StaticSource, source_from_uri

__all__ = [
    # Owner & engines
    "ReferenceData",
    "CodeLookupEngine",
    "InteractionMatcher",
    # Loading
    "CatalogLoader",
    "CodeCatalogLoader",
    "DrugCatalogLoader",
    "LoaderSettings",
    "load_loader_settings",
    "FileSource",
    "HttpSource",
    "StaticSource",
    "source_from_uri",
    # Snapshots
    "CodeCatalog",
    "DrugCatalog",
    # Models
    "CatalogStatus",
    "Category",
    "Drug",
    "DrugCategory",
    "DrugInteraction",
    "EvidenceLevel",
    "InteractionSeverity",
    "LoadMode",
    "ReferenceCode",
    "ValidationReport",
]
