"""Seed helper for local development."""

import logging
from datetime import datetime, timedelta, timezone
from sqlalchemy.orm import Session

from src.repositories.interactions.crud.leads_crud import CRUDLead
from src.repositories.interactions.database import SessionLocal
from src.repositories.interactions.models.leads_model import LeadsModel
from src.repositories.interactions.schemas.leads_schema import LeadCreate
from src.services.interactions.leads_service import LeadService

logger = logging.getLogger(__name__)


def create_mock_data() -> None:
    """Populate the database with example leads when empty."""
    db: Session = SessionLocal()
    try:
        existing = db.query(LeadsModel).count()
        if existing:
            logger.info("Mock leads already present (%d records). Skipping.", existing)
            return

        logger.info("Creating demo leads for the purchase and owners boards.")
        now = datetime.now(timezone.utc)
        sample_leads = [
            {
                "name": "Claire Dubois",
                "email": "claire@example.com",
                "phone": "+33600000001",
                "status": "Visit",
                "tags": ["Vip"],
                "budget": "4 500 000",
                "desired_location": "Saint-Tropez",
                "property_types": ["Villa"],
                "bedrooms": [5],
                "nationality": "France",
            },
            {
                "name": "James Carter",
                "email": "james@example.com",
                "status": "New",
                "tags": ["Hot"],
                "budget": "2 000 000",
                "currency": "USD",
                "desired_location": "Megève",
                "property_types": ["Chalet"],
            },
            {
                "name": "Hélène Martin",
                "phone": "+33600000003",
                "status": "Signed",
                "pipeline_type": "owners",
                "notes": "Mandat exclusif sur une bastide à Gordes.",
            },
        ]
        service = LeadService(CRUDLead())
        for offset, lead in enumerate(sample_leads):
            service.create(db, LeadCreate(**lead), now - timedelta(days=offset))
        logger.info("Demo leads inserted with success.")
    except Exception as exc:  # pragma: no cover - defensive logging
        logger.error("Failed to seed mock leads: %s", exc)
        db.rollback()
    finally:
        db.close()


if __name__ == "__main__":  # pragma: no cover
    create_mock_data()
