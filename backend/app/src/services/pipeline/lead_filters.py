"""Filters applied to the pipeline board before it is sorted."""

from __future__ import annotations

from typing import Iterable, List, Optional

from pydantic import BaseModel, Field

from src.models.lead_models import BEDROOMS_OVERFLOW, Lead
from src.services.lead_mapping.lead_mapping import extract_numeric_value


class LeadFilters(BaseModel):
    """Criteria selected on the board; unset criteria do not filter."""

    status: Optional[str] = None
    pipeline_type: Optional[str] = None
    min_budget: Optional[float] = Field(default=None, ge=0)
    max_budget: Optional[float] = Field(default=None, ge=0)
    property_type: Optional[str] = None
    location: Optional[str] = None
    assigned_to: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    timeframe: Optional[str] = None
    min_bedrooms: Optional[int] = Field(default=None, ge=0)
    max_bedrooms: Optional[int] = Field(default=None, ge=0)


def _contains(haystack: Optional[str], needle: str) -> bool:
    return bool(haystack) and needle.lower() in haystack.lower()


def filter_by_status(leads: List[Lead], status: Optional[str]) -> List[Lead]:
    if not status:
        return leads
    return [lead for lead in leads if lead.status == status]


def filter_by_pipeline(leads: List[Lead], pipeline_type: Optional[str]) -> List[Lead]:
    if not pipeline_type:
        return leads
    return [lead for lead in leads if lead.pipeline_type == pipeline_type]


def filter_by_budget(
    leads: List[Lead],
    min_budget: Optional[float] = None,
    max_budget: Optional[float] = None,
) -> List[Lead]:
    """Keep leads whose budget falls in range; leads without a budget drop out."""
    if not min_budget and not max_budget:
        return leads

    kept = []
    for lead in leads:
        if not lead.budget:
            continue
        amount = extract_numeric_value(lead.budget)
        if min_budget and amount < min_budget:
            continue
        if max_budget and amount > max_budget:
            continue
        kept.append(lead)
    return kept


def filter_by_property_type(
    leads: List[Lead], property_type: Optional[str]
) -> List[Lead]:
    if not property_type:
        return leads
    return [
        lead
        for lead in leads
        if _contains(lead.property_type, property_type)
        or any(_contains(kind, property_type) for kind in lead.property_types)
    ]


def filter_by_location(leads: List[Lead], location: Optional[str]) -> List[Lead]:
    if not location:
        return leads
    return [
        lead
        for lead in leads
        if _contains(lead.desired_location, location)
        or _contains(lead.country, location)
    ]


def filter_by_agent(leads: List[Lead], agent_id: Optional[str]) -> List[Lead]:
    if not agent_id:
        return leads
    return [lead for lead in leads if lead.assigned_to == agent_id]


def filter_by_tags(leads: List[Lead], tags: Optional[List[str]]) -> List[Lead]:
    if not tags:
        return leads
    return [
        lead
        for lead in leads
        if any(_contains(lead_tag, tag) for tag in tags for lead_tag in lead.tags)
    ]


def filter_by_timeframe(leads: List[Lead], timeframe: Optional[str]) -> List[Lead]:
    if not timeframe:
        return leads
    return [lead for lead in leads if _contains(lead.purchase_timeframe, timeframe)]


def _bedrooms_match(
    count: int, min_bedrooms: Optional[int], max_bedrooms: Optional[int]
) -> bool:
    if min_bedrooms is not None and count < min_bedrooms:
        return False
    if max_bedrooms is None:
        return True
    if count >= BEDROOMS_OVERFLOW and max_bedrooms >= BEDROOMS_OVERFLOW:
        return True
    return count <= max_bedrooms


def filter_by_bedrooms(
    leads: List[Lead],
    min_bedrooms: Optional[int] = None,
    max_bedrooms: Optional[int] = None,
) -> List[Lead]:
    """Keep leads where any selected bedroom count falls in range."""
    if min_bedrooms is None and max_bedrooms is None:
        return leads
    return [
        lead
        for lead in leads
        if any(
            _bedrooms_match(count, min_bedrooms, max_bedrooms)
            for count in lead.bedrooms or []
        )
    ]


def apply_filters(leads: Iterable[Lead], filters: Optional[LeadFilters]) -> List[Lead]:
    """Run every active filter over a copy of ``leads``."""
    result = list(leads)
    if filters is None:
        return result

    result = filter_by_status(result, filters.status)
    result = filter_by_pipeline(result, filters.pipeline_type)
    result = filter_by_budget(result, filters.min_budget, filters.max_budget)
    result = filter_by_property_type(result, filters.property_type)
    result = filter_by_location(result, filters.location)
    result = filter_by_agent(result, filters.assigned_to)
    result = filter_by_tags(result, filters.tags)
    result = filter_by_timeframe(result, filters.timeframe)
    result = filter_by_bedrooms(result, filters.min_bedrooms, filters.max_bedrooms)
    return result
