"""CodeLookupEngine — read-only queries over a loaded code catalog.

Every method is a pure function of the snapshot it was built with.  A miss
(unknown code, blank search term) is an ordinary outcome and yields ``None``
or an empty list, never an exception.

The search policies are simple heuristics sized for a UI: results keep
catalog order inside each tier, and the caps (50 search results, 5
suggestions, 10 related codes) are part of the contract.
"""

from __future__ import annotations

import logging
from typing import Optional

from clinref_catalog.catalog import CodeCatalog
from clinref_catalog.constants import (
    DEFAULT_ADVANCED_SEARCH_LIMIT,
    MAX_CATEGORY_RESULTS,
    MAX_RELATED_CODES,
    MAX_SEARCH_RESULTS,
    MAX_SUGGESTIONS,
    MIN_SUGGESTION_TOKEN_LENGTH,
)
from clinref_catalog.models.codes import CatalogMetadata, Category, ReferenceCode
from clinref_catalog.normalization import (
    base_code,
    category_stem,
    normalize_code,
    split_code_query,
)

logger = logging.getLogger(__name__)


def _matches(item: ReferenceCode, text: str) -> bool:
    """Substring match of lowercased *text* against full / short description."""
    if text in item.description.lower():
        return True
    return bool(item.short_description and text in item.short_description.lower())


class CodeLookupEngine:
    """Lookup operations over one :class:`CodeCatalog` snapshot."""

    def __init__(self, catalog: CodeCatalog) -> None:
        self._catalog = catalog

    @property
    def catalog(self) -> CodeCatalog:
        return self._catalog

    @property
    def metadata(self) -> CatalogMetadata:
        return self._catalog.metadata

    # ------------------------------------------------------------------
    # Code resolution
    # ------------------------------------------------------------------

    def get_by_code(self, code: str) -> Optional[ReferenceCode]:
        """Resolve a code string using three tiers, first hit wins.

        1. exact match of the string as given;
        2. normalized match: case, missing dot and trailing wildcards fixed,
           then placeholder / encounter suffixes stripped to the base code
           (``t81.4xxa`` → ``T81.4``);
        3. partial match for ``"<code> <text>"`` queries: a code starting
           with the query's base code (or its 3-character category) whose
           description contains the text.

        Returns ``None`` when nothing matches.
        """
        if not code or not code.strip():
            return None

        # Tier 1: exact
        item = self._catalog.get(code)
        if item is not None:
            return item

        # Tier 2: normalized / base code
        for candidate in dict.fromkeys((normalize_code(code), base_code(code))):
            item = self._catalog.get(candidate)
            if item is not None:
                logger.debug("Resolved '%s' via normalized code %s", code, candidate)
                return item

        # Tier 3: code prefix + description text
        token, text = split_code_query(code)
        if token is None or not text:
            return None
        base = base_code(token)
        for prefix in dict.fromkeys((normalize_code(token), base, category_stem(base))):
            for item in self._catalog.codes:
                if item.code.startswith(prefix) and text in item.description.lower():
                    logger.debug("Resolved '%s' via prefix %s + text", code, prefix)
                    return item
        return None

    # ------------------------------------------------------------------
    # Text search
    # ------------------------------------------------------------------

    def search_by_description(self, term: str) -> list[ReferenceCode]:
        """Case-insensitive description search, at most 50 results.

        Exact matches on the full or short description come first, then
        substring matches on description, short description or synonyms.
        A blank term yields an empty list.
        """
        needle = term.strip().lower()
        if not needle:
            return []

        exact: list[ReferenceCode] = []
        partial: list[ReferenceCode] = []
        for item in self._catalog.codes:
            short = (item.short_description or "").lower()
            if item.description.lower() == needle or short == needle:
                exact.append(item)
            elif _matches(item, needle) or any(needle in s.lower() for s in item.synonyms):
                partial.append(item)
            if len(exact) >= MAX_SEARCH_RESULTS:
                break
        return (exact + partial)[:MAX_SEARCH_RESULTS]

    def suggest_codes(self, text: str) -> list[ReferenceCode]:
        """Suggest up to 5 codes for free-text diagnosis wording.

        Stage 1 matches the whole text as a substring.  Only when stage 1
        finds nothing does stage 2 match each word longer than 3 characters
        on its own, deduplicating by code.
        """
        needle = text.strip().lower()
        if not needle:
            return []

        suggestions: list[ReferenceCode] = []
        for item in self._catalog.codes:
            if _matches(item, needle):
                suggestions.append(item)
                if len(suggestions) >= MAX_SUGGESTIONS:
                    return suggestions
        if suggestions:
            return suggestions

        words = [w for w in needle.split() if len(w) > MIN_SUGGESTION_TOKEN_LENGTH]
        logger.debug("No direct suggestion for '%s'; trying tokens %s", needle, words)
        seen: set[str] = set()
        for word in words:
            for item in self._catalog.codes:
                if item.code in seen or not _matches(item, word):
                    continue
                seen.add(item.code)
                suggestions.append(item)
                if len(suggestions) >= MAX_SUGGESTIONS:
                    return suggestions
        return suggestions

    def advanced_search(
        self,
        term: str | None = None,
        category: str | None = None,
        code_range: str | None = None,
        limit: int = DEFAULT_ADVANCED_SEARCH_LIMIT,
    ) -> list[ReferenceCode]:
        """Combine a text term, a category and a code range, in catalog order.

        ``term`` matches description, short description or the code itself;
        ``category`` matches a category title or category code;
        ``code_range`` is an inclusive lexical range such as ``"A00-B99"``.
        A non-positive ``limit`` means the default of 50.
        """
        if limit <= 0:
            limit = DEFAULT_ADVANCED_SEARCH_LIMIT
        needle = (term or "").strip().lower()
        low = high = None
        if code_range:
            start, sep, end = code_range.partition("-")
            if sep and start.strip() and end.strip():
                low, high = normalize_code(start), normalize_code(end)

        results: list[ReferenceCode] = []
        for item in self._catalog.codes:
            if len(results) >= limit:
                break
            if needle and not (_matches(item, needle) or needle in item.code.lower()):
                continue
            if category and category not in (item.category, item.category_code):
                continue
            if low is not None and not (low <= item.code <= high):
                # ranges name 3-character categories; keep their subcodes too
                if not (low <= item.code[:3] <= high):
                    continue
            results.append(item)
        return results

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def get_related_codes(self, code: str) -> list[ReferenceCode]:
        """Up to 10 other codes sharing the code's category, in catalog order."""
        item = self.get_by_code(code)
        if item is None:
            return []
        related: list[ReferenceCode] = []
        for other in self._catalog.codes:
            if other.category_code == item.category_code and other.code != item.code:
                related.append(other)
                if len(related) >= MAX_RELATED_CODES:
                    break
        return related

    def get_category_for_code(self, code: str) -> Optional[Category]:
        item = self.get_by_code(code)
        if item is None:
            return None
        return self._catalog.get_category(item.category_code)

    def get_by_category(self, category: str) -> list[ReferenceCode]:
        """Codes whose category title or category code equals *category* (max 100)."""
        results: list[ReferenceCode] = []
        for item in self._catalog.codes:
            if category in (item.category, item.category_code):
                results.append(item)
                if len(results) >= MAX_CATEGORY_RESULTS:
                    break
        return results

    def get_categories(self) -> list[Category]:
        return list(self._catalog.categories)
