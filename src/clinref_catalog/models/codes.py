"""Pydantic models for the medical-code catalog.

These mirror the serialized ICD-10 catalog produced by
:mod:`clinref_catalog.convert`:

  - CatalogMetadata: version and totals block
  - Category: ICD grouping keyed by category code
  - ReferenceCode: one billable / reportable code

Field names are snake_case in Python; the serialized catalogs use camelCase
(``categoryCode``, ``shortDescription``), so both spellings are accepted.
"""

from typing import Optional

from clinref_catalog.models.base import CatalogModel


class CatalogMetadata(CatalogModel):
    """Header of a serialized code catalog."""

    version: str = "unknown"
    total_codes: int = 0
    total_categories: int = 0
    generated_at: Optional[str] = None


class Category(CatalogModel):
    """Code grouping.  ``range`` is the display label (e.g. "A00-B99")."""

    code: str
    title: str
    range: str = "Unknown"


class ReferenceCode(CatalogModel):
    """A single reference code.

    ``synonyms`` are search aids only; ``related_codes`` is carried through
    from the full catalog format but lookups derive relations from
    ``category_code``.
    """

    code: str
    description: str
    category: str = ""
    category_code: str = ""
    short_description: Optional[str] = None
    synonyms: tuple[str, ...] = ()
    related_codes: tuple[str, ...] = ()
