"""Service layer for leads and their follow-up actions.

Everything leaving this module is in the domain shape; stored rows only go
through the lead mapper.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional, Union

from fastapi import Depends
from sqlalchemy.orm import Session

from src.logger_config import get_logger
from src.models.lead_models import (
    DEFAULT_STATUS,
    ActionHistory,
    Lead,
    SortMode,
    TaskType,
)
from src.repositories.interactions.crud.leads_crud import CRUDLead
from src.repositories.interactions.models.leads_model import LeadsModel
from src.repositories.interactions.schemas.leads_schema import (
    ActionCreate,
    ActionUpdate,
    LeadCreate,
)
from src.services.lead_mapping.lead_mapping import (
    action_history_to_record,
    to_domain,
    to_persisted,
)
from src.services.pipeline.lead_filters import LeadFilters, apply_filters
from src.services.pipeline.pipeline_rules import (
    pipeline_type_label,
    recommended_status_for_transition,
)
from src.services.pipeline.priority_sorter import parse_date, score_and_sort

logger = get_logger(__name__)

# Assigned once at creation and never rewritten by an update.
IMMUTABLE_COLUMNS = ("id", "created_at")


class LeadNotFoundError(LookupError):
    """Raised when no lead matches the requested id."""


class ActionNotFoundError(LookupError):
    """Raised when a lead has no action with the requested id."""


def _normalize_date(value: Optional[str]) -> Optional[str]:
    parsed = parse_date(value)
    if parsed is None:
        if value:
            logger.warning("Dropping invalid action date: %r", value)
        return None
    return parsed.isoformat()


def pending_actions(lead: Lead) -> List[ActionHistory]:
    """Actions not completed yet, in the order they were added."""
    return [action for action in lead.action_history if not action.is_completed]


class LeadService:
    """Provide lead and action operations on top of the leads repository."""

    def __init__(self, repository: CRUDLead) -> None:
        self.repository = repository

    def _get_row(self, db: Session, lead_id: str) -> LeadsModel:
        row = self.repository.get(db, lead_id)
        if row is None:
            raise LeadNotFoundError(f"Lead {lead_id} not found")
        return row

    def get(self, db: Session, lead_id: str) -> Lead:
        return to_domain(self._get_row(db, lead_id).as_record())

    def list_leads(
        self,
        db: Session,
        now: datetime,
        filters: Optional[LeadFilters] = None,
        sort_mode: Union[SortMode, str] = SortMode.PRIORITY,
    ) -> List[Lead]:
        """
        Fetch, filter and order the leads shown on a pipeline board.

        Args:
            db (Session): The database session.
            now (datetime): Reference time for follow-up urgency.
            filters (Optional[LeadFilters]): Board filters; None keeps every lead.
            sort_mode (SortMode): Ordering requested by the board.

        Returns:
            List[Lead]: Leads in display order.
        """
        pipeline_type = filters.pipeline_type if filters else None
        rows = self.repository.list(db, pipeline_type=pipeline_type)
        leads = [to_domain(row.as_record(), now=now) for row in rows]
        filtered = apply_filters(leads, filters)
        logger.debug(
            "Listing %d of %d leads sorted by %s", len(filtered), len(leads), sort_mode
        )
        return score_and_sort(filtered, sort_mode, now)

    def create(self, db: Session, lead_in: LeadCreate, now: datetime) -> Lead:
        data = lead_in.model_dump(exclude_none=True)
        data["id"] = str(uuid.uuid4())
        data["created_at"] = now.isoformat()
        data.setdefault("status", DEFAULT_STATUS)

        lead = to_domain(data, now=now)
        row = self.repository.create(db, to_persisted(lead))
        logger.info("Created lead %s (%s)", lead.id, lead.pipeline_type)
        return to_domain(row.as_record())

    def update(self, db: Session, lead: Lead, now: datetime) -> Lead:
        """
        Save an edited lead. Its action history is left as stored.

        Moving the lead to another pipeline restarts it at "New" when its
        stage does not exist on the target board, and schedules a call to
        requalify it.
        """
        if not lead.id:
            raise LeadNotFoundError("Lead id is required for an update")
        row = self._get_row(db, lead.id)
        previous_pipeline = to_domain(row.as_record()).pipeline_type
        moved = lead.pipeline_type != previous_pipeline
        if moved:
            status = recommended_status_for_transition(lead.status, lead.pipeline_type)
            if status != lead.status:
                logger.info(
                    "Lead %s: status %s is not used on the %s board, reset to %s",
                    lead.id,
                    lead.status,
                    lead.pipeline_type,
                    status,
                )
            lead.status = status

        record = to_persisted(lead)
        for column in IMMUTABLE_COLUMNS:
            record.pop(column, None)
        if lead.bedrooms and len(lead.bedrooms) > 1:
            logger.info(
                "Lead %s: only the first bedroom count of %s is stored",
                lead.id,
                lead.bedrooms,
            )

        row = self.repository.update(db, row, record)
        logger.info("Updated lead %s", lead.id)
        if moved:
            return self._requalify(db, lead.id, previous_pipeline, lead.pipeline_type, now)
        return to_domain(row.as_record())

    def _requalify(
        self,
        db: Session,
        lead_id: str,
        from_pipeline: str,
        to_pipeline: str,
        now: datetime,
    ) -> Lead:
        notes = (
            "À requalifier : Le lead est passé d'un pipeline "
            f"{pipeline_type_label(from_pipeline)} à {pipeline_type_label(to_pipeline)}. "
            "Veuillez requalifier le lead selon ses nouveaux besoins."
        )
        action_in = ActionCreate(
            action_type=TaskType.CALL.value,
            scheduled_date=now.isoformat(),
            notes=notes,
        )
        return self.add_action(db, lead_id, action_in, now)

    def delete(self, db: Session, lead_id: str) -> None:
        row = self._get_row(db, lead_id)
        self.repository.delete(db, row)
        logger.info("Deleted lead %s", lead_id)

    def _save_actions(
        self,
        db: Session,
        row: LeadsModel,
        actions: List[ActionHistory],
        **columns: object,
    ) -> Lead:
        row = self.repository.save_action_history(
            db, row, action_history_to_record(actions), **columns
        )
        return to_domain(row.as_record())

    def add_action(
        self,
        db: Session,
        lead_id: str,
        action_in: ActionCreate,
        now: datetime,
    ) -> Lead:
        """
        Append a new action to a lead.

        The lead's last contact becomes ``now`` and its next follow-up
        becomes the action's scheduled date (cleared when unscheduled).
        """
        row = self._get_row(db, lead_id)
        lead = to_domain(row.as_record())

        scheduled_date = _normalize_date(action_in.scheduled_date)
        action = ActionHistory(
            id=str(uuid.uuid4()),
            action_type=action_in.action_type or TaskType.NOTE.value,
            created_at=now.isoformat(),
            scheduled_date=scheduled_date,
            completed_date=_normalize_date(action_in.completed_date),
            notes=action_in.notes,
        )
        actions = lead.action_history + [action]
        logger.info("Adding %s action %s to lead %s", action.action_type, action.id, lead_id)

        return self._save_actions(
            db,
            row,
            actions,
            last_contacted_at=now.isoformat(),
            task_type=action.action_type,
            next_follow_up_date=scheduled_date,
        )

    def _find_action(self, lead: Lead, action_id: str) -> ActionHistory:
        for action in lead.action_history:
            if action.id == action_id:
                return action
        raise ActionNotFoundError(f"Action {action_id} not found on lead {lead.id}")

    def update_action(
        self,
        db: Session,
        lead_id: str,
        action_id: str,
        changes: ActionUpdate,
    ) -> Lead:
        row = self._get_row(db, lead_id)
        lead = to_domain(row.as_record())
        action = self._find_action(lead, action_id)

        data = changes.model_dump(exclude_unset=True)
        columns = {}
        if "scheduled_date" in data:
            action.scheduled_date = _normalize_date(data["scheduled_date"])
            pending = pending_actions(lead)
            # The latest pending action drives the lead's follow-up date.
            if pending and pending[-1] is action:
                columns["next_follow_up_date"] = action.scheduled_date
        if "notes" in data:
            action.notes = data["notes"]
        return self._save_actions(db, row, lead.action_history, **columns)

    def complete_action(
        self, db: Session, lead_id: str, action_id: str, now: datetime
    ) -> Lead:
        row = self._get_row(db, lead_id)
        lead = to_domain(row.as_record())
        action = self._find_action(lead, action_id)
        if action.is_completed:
            logger.debug("Action %s on lead %s is already completed", action_id, lead_id)
            return lead
        action.completed_date = now.isoformat()
        logger.info("Completed action %s on lead %s", action_id, lead_id)
        return self._save_actions(db, row, lead.action_history)

    def delete_action(self, db: Session, lead_id: str, action_id: str) -> Lead:
        row = self._get_row(db, lead_id)
        lead = to_domain(row.as_record())
        action = self._find_action(lead, action_id)
        remaining = [item for item in lead.action_history if item is not action]
        logger.info("Deleted action %s from lead %s", action_id, lead_id)
        return self._save_actions(db, row, remaining)


def get_lead_service(repository: CRUDLead = Depends()) -> LeadService:
    return LeadService(repository)
