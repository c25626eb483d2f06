"""Catalog status endpoint for the diagnostic / debug UI."""

from fastapi import APIRouter, Depends

from clinref_catalog.models.status import CatalogStatus
from clinref_catalog.reference import ReferenceData

from clinref_server.dependencies import get_reference

router = APIRouter(tags=["status"])


@router.get("/status")
def catalog_status(
    reference: ReferenceData = Depends(get_reference),
) -> dict[str, CatalogStatus]:
    """Loader status per catalog; ``using_fallback`` drives the limited-data banner."""
    return reference.status()
