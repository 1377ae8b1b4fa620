"""Stage sets available on each pipeline board."""

from __future__ import annotations

from typing import Dict, List, Optional

from src.models.lead_models import DEFAULT_STATUS, PipelineType

PURCHASE_STATUSES: List[str] = [
    "New",
    "Contacted",
    "Qualified",
    "Proposal",
    "Visit",
    "Offer",
    "Offre",
    "Deposit",
    "Signed",
    "Gagné",
    "Perdu",
]

RENTAL_STATUSES: List[str] = [
    "New",
    "Contacted",
    "Qualified",
    "Visit",
    "Offre",
    "Deposit",
    "Signed",
    "Gagné",
    "Perdu",
]

# The owners board reuses the buyer stage names with a mandate meaning:
# Proposal = mandate under negotiation, Signed = mandate signed,
# Visit = on the market, Deposit = compromis signed, Gagné = sale closed.
OWNERS_STATUSES: List[str] = [
    "New",
    "Contacted",
    "Qualified",
    "Proposal",
    "Signed",
    "Visit",
    "Offer",
    "Deposit",
    "Gagné",
    "Perdu",
]

PIPELINE_LABELS: Dict[str, str] = {
    PipelineType.PURCHASE.value: "Achat",
    PipelineType.RENTAL.value: "Location",
    PipelineType.OWNERS.value: "Propriétaires",
}


def statuses_for_pipeline(pipeline_type: Optional[str]) -> List[str]:
    """Return the ordered stages of a board; unknown boards use the purchase set."""
    if pipeline_type == PipelineType.OWNERS.value:
        return list(OWNERS_STATUSES)
    if pipeline_type == PipelineType.RENTAL.value:
        return list(RENTAL_STATUSES)
    return list(PURCHASE_STATUSES)


def is_status_valid_for_pipeline(status: str, pipeline_type: Optional[str]) -> bool:
    return status in statuses_for_pipeline(pipeline_type)


def recommended_status_for_transition(status: str, target_pipeline: str) -> str:
    """Keep the current stage when the target board has it, else restart at New."""
    if is_status_valid_for_pipeline(status, target_pipeline):
        return status
    return DEFAULT_STATUS


def pipeline_type_label(pipeline_type: Optional[str]) -> str:
    return PIPELINE_LABELS.get(pipeline_type or "", PIPELINE_LABELS["purchase"])
