"""CRUD helpers for leads."""

from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session

from src.repositories.interactions.models.leads_model import LeadsModel


class CRUDLead:
    """Database access for leads, working on stored column dicts."""

    def get(self, db: Session, lead_id: str) -> Optional[LeadsModel]:
        return db.query(LeadsModel).filter(LeadsModel.id == lead_id).first()

    def list(
        self, db: Session, pipeline_type: Optional[str] = None
    ) -> List[LeadsModel]:
        query = db.query(LeadsModel)
        if pipeline_type:
            query = query.filter(LeadsModel.pipeline_type == pipeline_type)
        return query.order_by(LeadsModel.created_at.desc()).all()

    def create(self, db: Session, record: Dict[str, Any]) -> LeadsModel:
        lead = LeadsModel(**record)
        db.add(lead)
        db.commit()
        db.refresh(lead)
        return lead

    def update(
        self,
        db: Session,
        lead: LeadsModel,
        record: Dict[str, Any],
    ) -> LeadsModel:
        for field, value in record.items():
            setattr(lead, field, value)
        db.add(lead)
        db.commit()
        db.refresh(lead)
        return lead

    def save_action_history(
        self,
        db: Session,
        lead: LeadsModel,
        action_history: List[Dict[str, Any]],
        **columns: Any,
    ) -> LeadsModel:
        """Replace the action history column, along with any related columns."""
        lead.action_history = list(action_history)
        for field, value in columns.items():
            setattr(lead, field, value)
        db.add(lead)
        db.commit()
        db.refresh(lead)
        return lead

    def delete(self, db: Session, lead: LeadsModel) -> None:
        db.delete(lead)
        db.commit()
