"""FastAPI dependency injection — hands routes the engines built at startup."""

from fastapi import Request

from clinref_catalog.icd10 import CodeLookupEngine
from clinref_catalog.interactions import InteractionMatcher
from clinref_catalog.reference import ReferenceData


def get_reference(request: Request) -> ReferenceData:
    """Return the ReferenceData handle from ``app.state``."""
    return request.app.state.reference


def get_codes(request: Request) -> CodeLookupEngine:
    return get_reference(request).codes


def get_interactions(request: Request) -> InteractionMatcher:
    return get_reference(request).interactions
