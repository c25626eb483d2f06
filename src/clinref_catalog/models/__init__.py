"""Public model re-exports for clinref_catalog.

Consumers should import from ``clinref_catalog.models`` rather than
reaching into sub-modules directly.
"""

# --- Codes ---
from clinref_catalog.models.codes import CatalogMetadata, Category, ReferenceCode

# --- Drugs ---
from clinref_catalog.models.drugs import (
    Drug,
    DrugCategory,
    DrugInteraction,
    EvidenceLevel,
    InteractionSeverity,
)

# --- Status ---
from clinref_catalog.models.status import CatalogStatus, LoadMode, ValidationReport

__all__ = [
    # Codes
    "CatalogMetadata",
    "Category",
    "ReferenceCode",
    # Drugs
    "Drug",
    "DrugCategory",
    "DrugInteraction",
    "EvidenceLevel",
    "InteractionSeverity",
    # Status
    "CatalogStatus",
    "LoadMode",
    "ValidationReport",
]
