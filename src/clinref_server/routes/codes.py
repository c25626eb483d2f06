"""ICD-10 code endpoints — lookup, search, suggestions and categories.

Collection endpoints return an empty list on a miss; single-record
endpoints raise ``KeyError`` which the global handler turns into 404.
Static paths are declared before ``/{code}`` so they are matched first.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from clinref_catalog.constants import DEFAULT_ADVANCED_SEARCH_LIMIT, MAX_CATEGORY_RESULTS
from clinref_catalog.icd10 import CodeLookupEngine
from clinref_catalog.models.codes import Category, ReferenceCode

from clinref_server.dependencies import get_codes

router = APIRouter(prefix="/codes", tags=["codes"])


# ------------------------------------------------------------------
# Search
# ------------------------------------------------------------------

@router.get("")
def advanced_search(
    term: Optional[str] = None,
    category: Optional[str] = None,
    code_range: Optional[str] = Query(None, description='Inclusive range, e.g. "A00-B99"'),
    limit: int = Query(DEFAULT_ADVANCED_SEARCH_LIMIT, ge=1, le=MAX_CATEGORY_RESULTS),
    codes: CodeLookupEngine = Depends(get_codes),
) -> list[ReferenceCode]:
    """Filter codes by text term, category and code range."""
    return codes.advanced_search(term=term, category=category, code_range=code_range, limit=limit)


@router.get("/search")
def search_codes(
    q: str = "",
    codes: CodeLookupEngine = Depends(get_codes),
) -> list[ReferenceCode]:
    """Description search — exact matches first, at most 50 results."""
    return codes.search_by_description(q)


@router.get("/suggest")
def suggest_codes(
    text: str = "",
    codes: CodeLookupEngine = Depends(get_codes),
) -> list[ReferenceCode]:
    """Suggest up to 5 codes for free-text diagnosis wording."""
    return codes.suggest_codes(text)


# ------------------------------------------------------------------
# Categories
# ------------------------------------------------------------------

@router.get("/categories")
def list_categories(
    codes: CodeLookupEngine = Depends(get_codes),
) -> list[Category]:
    return codes.get_categories()


@router.get("/categories/{category}")
def list_codes_in_category(
    category: str,
    codes: CodeLookupEngine = Depends(get_codes),
) -> list[ReferenceCode]:
    """Codes in a category, matched by category code or title (max 100)."""
    return codes.get_by_category(category)


# ------------------------------------------------------------------
# Single code
# ------------------------------------------------------------------

@router.get("/{code}")
def get_code(
    code: str,
    codes: CodeLookupEngine = Depends(get_codes),
) -> ReferenceCode:
    item = codes.get_by_code(code)
    if item is None:
        raise KeyError(f"code {code!r} not found")
    return item


@router.get("/{code}/related")
def get_related_codes(
    code: str,
    codes: CodeLookupEngine = Depends(get_codes),
) -> list[ReferenceCode]:
    return codes.get_related_codes(code)


@router.get("/{code}/category")
def get_code_category(
    code: str,
    codes: CodeLookupEngine = Depends(get_codes),
) -> Category:
    category = codes.get_category_for_code(code)
    if category is None:
        raise KeyError(f"no category for code {code!r}")
    return category
