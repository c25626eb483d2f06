"""Interaction-check endpoints consumed by the interaction checker UI."""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from clinref_catalog.interactions import InteractionMatcher
from clinref_catalog.models.drugs import DrugInteraction
from clinref_catalog.models.status import ValidationReport

from clinref_server.dependencies import get_interactions

router = APIRouter(prefix="/interactions", tags=["interactions"])


class InteractionCheckRequest(BaseModel):
    """Body of ``POST /interactions/check``: the drugs a patient takes."""

    drugs: list[str] = Field(default_factory=list)


@router.get("/pair")
def find_pair(
    a: str,
    b: str,
    matcher: InteractionMatcher = Depends(get_interactions),
) -> Optional[DrugInteraction]:
    """The interaction between two drugs, or ``null`` when none is known."""
    return matcher.find_pair(a, b)


@router.post("/check")
def check_interactions(
    body: InteractionCheckRequest,
    matcher: InteractionMatcher = Depends(get_interactions),
) -> list[DrugInteraction]:
    """Every known interaction among the listed drugs, in pair order."""
    return matcher.find_all(body.drugs)


@router.get("/validate")
def validate_catalog(
    matcher: InteractionMatcher = Depends(get_interactions),
) -> ValidationReport:
    return matcher.validate_catalog()
