"""Pydantic schemas for lead and action requests."""

from typing import List, Optional, Union
from pydantic import StringConstraints
from typing import Annotated

from src.models.lead_models import CamelModel


class LeadCreate(CamelModel):
    """Payload required to create a new lead."""

    name: Annotated[str, StringConstraints(min_length=1, max_length=160)]
    email: Optional[Annotated[str, StringConstraints(max_length=160)]] = None
    phone: Optional[Annotated[str, StringConstraints(max_length=40)]] = None
    status: Optional[str] = None
    tags: List[str] = []
    source: Optional[str] = None
    pipeline_type: Optional[str] = None
    assigned_to: Optional[str] = None
    budget: Optional[str] = None
    budget_min: Optional[str] = None
    currency: Optional[str] = None
    desired_location: Optional[str] = None
    property_type: Optional[str] = None
    property_types: List[str] = []
    bedrooms: Optional[Union[int, List[int]]] = None
    nationality: Optional[str] = None
    country: Optional[str] = None
    purchase_timeframe: Optional[str] = None
    notes: Optional[str] = None


class ActionCreate(CamelModel):
    """Payload to schedule or log an action on a lead."""

    action_type: Optional[str] = None
    scheduled_date: Optional[str] = None
    completed_date: Optional[str] = None
    notes: Optional[str] = None


class ActionUpdate(CamelModel):
    """Fields allowed to change on an existing action."""

    scheduled_date: Optional[str] = None
    notes: Optional[str] = None
