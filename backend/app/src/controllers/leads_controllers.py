"""Expose the pipeline leads and their actions over HTTP."""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from src.logger_config import get_logger
from src.models.lead_models import Lead, LeadScore, SortMode
from src.repositories.interactions.dependencies import get_db
from src.repositories.interactions.schemas.leads_schema import (
    ActionCreate,
    ActionUpdate,
    LeadCreate,
)
from src.services.interactions.leads_service import LeadService, get_lead_service
from src.services.pipeline.clock import get_now
from src.services.pipeline.lead_filters import LeadFilters
from src.services.pipeline.priority_sorter import explain_score

logger = get_logger("leads.controller")

leads_router = APIRouter(prefix="/leads", tags=["Leads"])


def _internal_error(exc: Exception) -> HTTPException:
    logger.exception("Leads request failed: %s", exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
    )


def _not_found(exc: LookupError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@leads_router.get("", response_model=List[Lead])
def list_leads(
    sort: SortMode = Query(SortMode.PRIORITY, description="Ordering of the board."),
    status_filter: Optional[str] = Query(None, alias="status"),
    pipeline_type: Optional[str] = Query(None, alias="pipelineType"),
    min_budget: Optional[float] = Query(None, alias="minBudget", ge=0),
    max_budget: Optional[float] = Query(None, alias="maxBudget", ge=0),
    property_type: Optional[str] = Query(None, alias="propertyType"),
    location: Optional[str] = None,
    assigned_to: Optional[str] = Query(None, alias="assignedTo"),
    tags: List[str] = Query([]),
    timeframe: Optional[str] = None,
    min_bedrooms: Optional[int] = Query(None, alias="minBedrooms", ge=0),
    max_bedrooms: Optional[int] = Query(None, alias="maxBedrooms", ge=0),
    db: Session = Depends(get_db),
    service: LeadService = Depends(get_lead_service),
    now: datetime = Depends(get_now),
) -> List[Lead]:
    """
    Return the leads of a board, filtered and ordered.

    Returns:
        List[Lead]: Leads in display order, most urgent first by default.
    """
    filters = LeadFilters(
        status=status_filter,
        pipeline_type=pipeline_type,
        min_budget=min_budget,
        max_budget=max_budget,
        property_type=property_type,
        location=location,
        assigned_to=assigned_to,
        tags=tags,
        timeframe=timeframe,
        min_bedrooms=min_bedrooms,
        max_bedrooms=max_bedrooms,
    )
    try:
        return service.list_leads(db, now, filters=filters, sort_mode=sort)
    except Exception as e:
        raise _internal_error(e)


@leads_router.get("/{lead_id}", response_model=Lead)
def get_lead(
    lead_id: str,
    db: Session = Depends(get_db),
    service: LeadService = Depends(get_lead_service),
) -> Lead:
    try:
        return service.get(db, lead_id)
    except LookupError as e:
        raise _not_found(e)
    except Exception as e:
        raise _internal_error(e)


@leads_router.get("/{lead_id}/score", response_model=LeadScore)
def get_lead_score(
    lead_id: str,
    db: Session = Depends(get_db),
    service: LeadService = Depends(get_lead_service),
    now: datetime = Depends(get_now),
) -> LeadScore:
    """Explain how the lead's priority was computed."""
    try:
        return explain_score(service.get(db, lead_id), now)
    except LookupError as e:
        raise _not_found(e)
    except Exception as e:
        raise _internal_error(e)


@leads_router.post("", response_model=Lead, status_code=status.HTTP_201_CREATED)
def create_lead(
    lead_in: LeadCreate,
    db: Session = Depends(get_db),
    service: LeadService = Depends(get_lead_service),
    now: datetime = Depends(get_now),
) -> Lead:
    try:
        return service.create(db, lead_in, now)
    except Exception as e:
        raise _internal_error(e)


@leads_router.put("/{lead_id}", response_model=Lead)
def update_lead(
    lead_id: str,
    lead: Lead,
    db: Session = Depends(get_db),
    service: LeadService = Depends(get_lead_service),
    now: datetime = Depends(get_now),
) -> Lead:
    """Save an edited lead; its action history is managed by the actions routes."""
    lead.id = lead_id
    try:
        return service.update(db, lead, now)
    except LookupError as e:
        raise _not_found(e)
    except Exception as e:
        raise _internal_error(e)


@leads_router.delete("/{lead_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_lead(
    lead_id: str,
    db: Session = Depends(get_db),
    service: LeadService = Depends(get_lead_service),
) -> None:
    try:
        service.delete(db, lead_id)
    except LookupError as e:
        raise _not_found(e)
    except Exception as e:
        raise _internal_error(e)


@leads_router.post(
    "/{lead_id}/actions", response_model=Lead, status_code=status.HTTP_201_CREATED
)
def add_action(
    lead_id: str,
    action_in: ActionCreate,
    db: Session = Depends(get_db),
    service: LeadService = Depends(get_lead_service),
    now: datetime = Depends(get_now),
) -> Lead:
    try:
        return service.add_action(db, lead_id, action_in, now)
    except LookupError as e:
        raise _not_found(e)
    except Exception as e:
        raise _internal_error(e)


@leads_router.patch("/{lead_id}/actions/{action_id}", response_model=Lead)
def update_action(
    lead_id: str,
    action_id: str,
    changes: ActionUpdate,
    db: Session = Depends(get_db),
    service: LeadService = Depends(get_lead_service),
) -> Lead:
    try:
        return service.update_action(db, lead_id, action_id, changes)
    except LookupError as e:
        raise _not_found(e)
    except Exception as e:
        raise _internal_error(e)


@leads_router.post("/{lead_id}/actions/{action_id}/complete", response_model=Lead)
def complete_action(
    lead_id: str,
    action_id: str,
    db: Session = Depends(get_db),
    service: LeadService = Depends(get_lead_service),
    now: datetime = Depends(get_now),
) -> Lead:
    try:
        return service.complete_action(db, lead_id, action_id, now)
    except LookupError as e:
        raise _not_found(e)
    except Exception as e:
        raise _internal_error(e)


@leads_router.delete("/{lead_id}/actions/{action_id}", response_model=Lead)
def delete_action(
    lead_id: str,
    action_id: str,
    db: Session = Depends(get_db),
    service: LeadService = Depends(get_lead_service),
) -> Lead:
    try:
        return service.delete_action(db, lead_id, action_id)
    except LookupError as e:
        raise _not_found(e)
    except Exception as e:
        raise _internal_error(e)
