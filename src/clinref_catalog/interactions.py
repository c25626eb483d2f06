"""InteractionMatcher — pairwise and N-way drug interaction lookup.

Drug names come straight from user input, so resolution is forgiving:
case and surrounding/internal whitespace are ignored and any of a drug's
id, name, generic name or brand names is accepted.  An unrecognized name is
not an error; it simply produces no interaction.
"""

from __future__ import annotations

from typing import Optional, Sequence

from clinref_catalog.catalog import DrugCatalog
from clinref_catalog.models.drugs import Drug, DrugCategory, DrugInteraction
from clinref_catalog.models.status import ValidationReport
from clinref_catalog.normalization import normalize_name


class InteractionMatcher:
    """Interaction queries over one :class:`DrugCatalog` snapshot."""

    def __init__(self, catalog: DrugCatalog) -> None:
        self._catalog = catalog

    @property
    def catalog(self) -> DrugCatalog:
        return self._catalog

    def find_pair(self, drug_a: str, drug_b: str) -> Optional[DrugInteraction]:
        """Return the interaction between two named drugs, if one is defined.

        Either name failing to resolve yields ``None``.  The pair is
        unordered: ``find_pair(a, b) == find_pair(b, a)``.
        """
        first = self._catalog.resolve(drug_a)
        second = self._catalog.resolve(drug_b)
        if first is None or second is None:
            return None
        return self._catalog.interaction_between(first.id, second.id)

    def find_all(self, drug_names: Sequence[str]) -> list[DrugInteraction]:
        """Check every unordered pair of *drug_names*.

        Pairs are generated as (0, 1), (0, 2), ..., (1, 2), ... and matches
        are returned in that order.
        """
        found: list[DrugInteraction] = []
        for i, name_a in enumerate(drug_names):
            for name_b in drug_names[i + 1:]:
                interaction = self.find_pair(name_a, name_b)
                if interaction is not None:
                    found.append(interaction)
        return found

    def validate_catalog(self) -> ValidationReport:
        """Confirm both drug references of every interaction resolve."""
        errors = self._catalog.find_reference_errors()
        return ValidationReport(is_valid=not errors, errors=errors)

    # ------------------------------------------------------------------
    # Drug lookups
    # ------------------------------------------------------------------

    def get_drug(self, identifier: str) -> Optional[Drug]:
        """Resolve an id, name, generic name or brand name."""
        return self._catalog.resolve(identifier)

    def search_drugs(self, term: str) -> list[Drug]:
        """Substring search over names, brand names and active ingredients."""
        needle = normalize_name(term)
        if not needle:
            return []
        results: list[Drug] = []
        for drug in self._catalog.drugs:
            haystack = (
                drug.name,
                drug.generic_name,
                *drug.brand_names,
                *drug.active_ingredients,
            )
            if any(needle in normalize_name(value) for value in haystack):
                results.append(drug)
        return results

    def interactions_for(self, drug_name: str) -> list[DrugInteraction]:
        """All interactions involving one drug, in catalog order."""
        drug = self._catalog.resolve(drug_name)
        if drug is None:
            return []
        return [
            interaction
            for interaction in self._catalog.interactions
            if drug.id in (interaction.drug1_id, interaction.drug2_id)
        ]

    def drugs_by_category(self, category: DrugCategory | str) -> list[Drug]:
        category = DrugCategory(category)
        return [drug for drug in self._catalog.drugs if drug.category is category]

    @staticmethod
    def categories() -> list[DrugCategory]:
        return list(DrugCategory)
