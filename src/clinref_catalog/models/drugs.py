"""Pydantic models and enumerations for the drug-interaction catalog.

Severity, evidence level and drug category are closed enumerations.  Every
per-severity property is a lookup over a table with one entry per member,
so adding a member without extending the tables fails at import time.
"""

import enum
from typing import Optional

from clinref_catalog.models.base import CatalogModel


class InteractionSeverity(str, enum.Enum):
    """Clinical risk of a drug pair, from most to least severe."""

    MAJOR = "Major"
    MODERATE = "Moderate"
    MINOR = "Minor"
    UNKNOWN = "Unknown"

    @property
    def rank(self) -> int:
        """Sort key: 0 is the most severe."""
        return _SEVERITY_RANK[self]

    @property
    def description(self) -> str:
        return _SEVERITY_DESCRIPTIONS[self]

    @property
    def color(self) -> str:
        """Display colour used by the interaction-checking UI."""
        return _SEVERITY_COLORS[self]


_SEVERITY_RANK: dict[InteractionSeverity, int] = {
    InteractionSeverity.MAJOR: 0,
    InteractionSeverity.MODERATE: 1,
    InteractionSeverity.MINOR: 2,
    InteractionSeverity.UNKNOWN: 3,
}

_SEVERITY_DESCRIPTIONS: dict[InteractionSeverity, str] = {
    InteractionSeverity.MAJOR: "Potentially life-threatening or causing permanent damage",
    InteractionSeverity.MODERATE: "May cause significant clinical consequences",
    InteractionSeverity.MINOR: "Limited clinical significance",
    InteractionSeverity.UNKNOWN: "Clinical significance unknown",
}

_SEVERITY_COLORS: dict[InteractionSeverity, str] = {
    InteractionSeverity.MAJOR: "red",
    InteractionSeverity.MODERATE: "orange",
    InteractionSeverity.MINOR: "yellow",
    InteractionSeverity.UNKNOWN: "gray",
}

def _require_exhaustive(name: str, table: dict) -> None:
    missing = set(InteractionSeverity) - set(table)
    if missing:
        raise RuntimeError(
            f"{name} has no entry for {sorted(member.value for member in missing)}"
        )


_require_exhaustive("_SEVERITY_RANK", _SEVERITY_RANK)
_require_exhaustive("_SEVERITY_DESCRIPTIONS", _SEVERITY_DESCRIPTIONS)
_require_exhaustive("_SEVERITY_COLORS", _SEVERITY_COLORS)


class EvidenceLevel(str, enum.Enum):
    """Strength of the literature behind an interaction record."""

    ESTABLISHED = "Established"
    PROBABLE = "Probable"
    SUSPECTED = "Suspected"
    UNKNOWN = "Unknown"


class DrugCategory(str, enum.Enum):
    """Therapeutic area of a drug."""

    CARDIOVASCULAR = "Cardiovascular"
    NEUROLOGICAL = "Neurological"
    ENDOCRINE = "Endocrine"
    GASTROINTESTINAL = "Gastrointestinal"
    RESPIRATORY = "Respiratory"
    INFECTIOUS_DISEASE = "Infectious Disease"
    PAIN_MANAGEMENT = "Pain Management"
    MENTAL_HEALTH = "Mental Health"
    ONCOLOGY = "Oncology"
    IMMUNOLOGY = "Immunology"
    OTHER = "Other"


class Drug(CatalogModel):
    """A curated drug entry.

    ``id`` is the key interactions refer to.  ``name``, ``generic_name`` and
    every entry of ``brand_names`` are accepted as user-facing aliases.
    """

    id: str
    name: str
    generic_name: str
    brand_names: tuple[str, ...] = ()
    category: DrugCategory = DrugCategory.OTHER
    active_ingredients: tuple[str, ...] = ()
    mechanism: str = ""
    common_uses: tuple[str, ...] = ()
    fda_approved: bool = True


class DrugInteraction(CatalogModel):
    """Interaction between an unordered pair of drugs."""

    id: str
    drug1_id: str
    drug2_id: str
    drug1_name: str = ""
    drug2_name: str = ""
    severity: InteractionSeverity = InteractionSeverity.UNKNOWN
    mechanism: str = ""
    description: str = ""
    clinical_effect: str = ""
    management_recommendation: str = ""
    evidence_level: EvidenceLevel = EvidenceLevel.UNKNOWN
    sources: tuple[str, ...] = ()
    last_updated: Optional[str] = None

    @property
    def pair(self) -> frozenset[str]:
        """The unordered drug-id pair this record covers."""
        return frozenset((self.drug1_id, self.drug2_id))
