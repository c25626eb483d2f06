"""Immutable catalog snapshots.

A snapshot is built once by a loader and shared by every consumer for the
process lifetime.  Construction only indexes records; it never drops or
rejects anything.  Invariant violations are reported by the
``find_*_errors`` methods so the loader (and self-check tooling) can
surface them.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from clinref_catalog.models.codes import CatalogMetadata, Category, ReferenceCode
from clinref_catalog.models.drugs import Drug, DrugInteraction
from clinref_catalog.normalization import normalize_name

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Code catalog
# ---------------------------------------------------------------------------

class CodeCatalog:
    """Codes and categories of one loaded snapshot.

    Attributes:
        metadata    — CatalogMetadata (synthesized when the payload has none)
        categories  — tuple[Category, ...] in payload order
        codes       — tuple[ReferenceCode, ...] in payload order
    """

    def __init__(
        self,
        codes: Iterable[ReferenceCode],
        categories: Iterable[Category] = (),
        metadata: Optional[CatalogMetadata] = None,
    ) -> None:
        self.codes: tuple[ReferenceCode, ...] = tuple(codes)
        self.categories: tuple[Category, ...] = tuple(categories)
        self.metadata = metadata or CatalogMetadata(
            total_codes=len(self.codes),
            total_categories=len(self.categories),
        )

        # First occurrence wins; duplicates are reported, not hidden
        self._by_code: dict[str, ReferenceCode] = {}
        for item in self.codes:
            self._by_code.setdefault(item.code, item)
        self._categories: dict[str, Category] = {}
        for cat in self.categories:
            self._categories.setdefault(cat.code, cat)

    def __len__(self) -> int:
        return len(self.codes)

    def get(self, code: str) -> Optional[ReferenceCode]:
        return self._by_code.get(code)

    def get_category(self, category_code: str) -> Optional[Category]:
        return self._categories.get(category_code)

    def find_integrity_errors(self) -> list[str]:
        """Return one message per violated invariant (empty when valid)."""
        errors: list[str] = []
        if not self.codes:
            errors.append("catalog contains no codes")

        seen: set[str] = set()
        for item in self.codes:
            if item.code in seen:
                errors.append(f"Code {item.code}: duplicate entry")
            seen.add(item.code)
            if item.category_code not in self._categories:
                errors.append(
                    f"Code {item.code}: categoryCode '{item.category_code}' not found"
                )
        return errors


# ---------------------------------------------------------------------------
# Drug catalog
# ---------------------------------------------------------------------------

class DrugCatalog:
    """Drugs and interactions of one loaded snapshot.

    Two indexes are built on construction:

        aliases — normalized id / name / generic name / brand name → Drug
        pairs   — frozenset({drug1_id, drug2_id}) → DrugInteraction
    """

    def __init__(
        self,
        drugs: Iterable[Drug],
        interactions: Iterable[DrugInteraction] = (),
        version: str = "unknown",
    ) -> None:
        self.drugs: tuple[Drug, ...] = tuple(drugs)
        self.interactions: tuple[DrugInteraction, ...] = tuple(interactions)
        self.version = version

        self._by_id: dict[str, Drug] = {}
        self._aliases: dict[str, Drug] = {}
        # (drug id, normalized alias) -> id of the drug that kept the alias
        self._alias_collisions: dict[tuple[str, str], str] = {}
        for drug in self.drugs:
            self._by_id.setdefault(drug.id, drug)
            for alias in (drug.id, drug.name, drug.generic_name, *drug.brand_names):
                key = normalize_name(alias)
                owner = self._aliases.setdefault(key, drug)
                if owner.id != drug.id:
                    logger.debug(
                        "Alias '%s' of %s already taken by %s", alias, drug.id, owner.id,
                    )
                    self._alias_collisions.setdefault((drug.id, key), owner.id)

        self._pairs: dict[frozenset[str], DrugInteraction] = {}
        for interaction in self.interactions:
            self._pairs.setdefault(interaction.pair, interaction)

    def __len__(self) -> int:
        return len(self.drugs)

    def get_by_id(self, drug_id: str) -> Optional[Drug]:
        return self._by_id.get(drug_id)

    def resolve(self, name: str) -> Optional[Drug]:
        """Resolve a user-supplied drug name or alias, case-insensitively."""
        return self._aliases.get(normalize_name(name))

    def interaction_between(self, drug_a: str, drug_b: str) -> Optional[DrugInteraction]:
        """Look up the interaction for an unordered pair of drug ids."""
        return self._pairs.get(frozenset((drug_a, drug_b)))

    def find_reference_errors(self) -> list[str]:
        """One message per interaction reference that names no known drug id."""
        errors: list[str] = []
        for interaction in self.interactions:
            if interaction.drug1_id not in self._by_id:
                errors.append(
                    f"Interaction {interaction.id}: drug1Id '{interaction.drug1_id}' not found"
                )
            if interaction.drug2_id not in self._by_id:
                errors.append(
                    f"Interaction {interaction.id}: drug2Id '{interaction.drug2_id}' not found"
                )
        return errors

    def find_integrity_errors(self) -> list[str]:
        """Reference errors plus emptiness, duplicates and shared aliases.

        A name or brand claimed by two different drugs would make ``resolve``
        silently pick the first one, so each collision is reported.
        """
        errors: list[str] = []
        if not self.drugs:
            errors.append("catalog contains no drugs")

        seen_ids: set[str] = set()
        for drug in self.drugs:
            if drug.id in seen_ids:
                errors.append(f"Drug {drug.id}: duplicate id")
            seen_ids.add(drug.id)

        for (drug_id, alias), owner_id in self._alias_collisions.items():
            errors.append(f"Drug {drug_id}: alias '{alias}' already used by {owner_id}")

        errors.extend(self.find_reference_errors())

        seen_pairs: dict[frozenset[str], str] = {}
        for interaction in self.interactions:
            first = seen_pairs.setdefault(interaction.pair, interaction.id)
            if first != interaction.id:
                errors.append(
                    f"Interaction {interaction.id}: duplicates pair already defined by {first}"
                )
        return errors
