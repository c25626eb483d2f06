"""Drug catalog endpoints — search, alias lookup and per-drug interactions."""

from fastapi import APIRouter, Depends

from clinref_catalog.interactions import InteractionMatcher
from clinref_catalog.models.drugs import Drug, DrugCategory, DrugInteraction

from clinref_server.dependencies import get_interactions

router = APIRouter(prefix="/drugs", tags=["drugs"])


@router.get("")
def search_drugs(
    q: str = "",
    matcher: InteractionMatcher = Depends(get_interactions),
) -> list[Drug]:
    """Substring search; a blank query lists the whole catalog."""
    if not q.strip():
        return list(matcher.catalog.drugs)
    return matcher.search_drugs(q)


@router.get("/categories")
def list_drug_categories() -> list[str]:
    return [c.value for c in InteractionMatcher.categories()]


@router.get("/categories/{category}")
def list_drugs_in_category(
    category: str,
    matcher: InteractionMatcher = Depends(get_interactions),
) -> list[Drug]:
    """Drugs in a therapeutic category; unknown categories are a 400."""
    return matcher.drugs_by_category(DrugCategory(category))


@router.get("/{name}")
def get_drug(
    name: str,
    matcher: InteractionMatcher = Depends(get_interactions),
) -> Drug:
    """Resolve a drug by id, name, generic name or brand name."""
    drug = matcher.get_drug(name)
    if drug is None:
        raise KeyError(f"drug {name!r} not found")
    return drug


@router.get("/{name}/interactions")
def get_drug_interactions(
    name: str,
    matcher: InteractionMatcher = Depends(get_interactions),
) -> list[DrugInteraction]:
    return matcher.interactions_for(name)
