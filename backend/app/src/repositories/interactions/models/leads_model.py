"""SQLAlchemy model for the leads table."""

from typing import Any, Dict

from sqlalchemy import JSON, Boolean, Column, Integer, String, Text
from src.repositories.interactions.database import Base


class LeadsModel(Base):  # type: ignore[misc]
    """Stored lead row. Dates are ISO-8601 text as written by the lead mapper."""

    __tablename__ = "leads"

    id = Column(String(36), primary_key=True)
    name = Column(String(160), nullable=True)
    salutation = Column(String(8), nullable=True)
    email = Column(String(160), nullable=True)
    phone = Column(String(40), nullable=True)
    phone_country_code = Column(String(8), nullable=True)
    phone_country_code_display = Column(String(16), nullable=True)
    location = Column(String(160), nullable=True)
    nationality = Column(String(80), nullable=True)
    tax_residence = Column(String(80), nullable=True)
    country = Column(String(80), nullable=True)
    preferred_language = Column(String(40), nullable=True)

    status = Column(String(32), nullable=True, index=True)
    tags = Column(JSON, nullable=True)
    source = Column(String(80), nullable=True)
    pipeline_type = Column(String(16), nullable=True, index=True)
    assigned_to = Column(String(36), nullable=True, index=True)

    property_reference = Column(String(80), nullable=True)
    url = Column(Text, nullable=True)
    budget = Column(String(40), nullable=True)
    budget_min = Column(String(40), nullable=True)
    currency = Column(String(3), nullable=True)
    desired_location = Column(String(160), nullable=True)
    property_type = Column(String(80), nullable=True)
    property_types = Column(JSON, nullable=True)
    bedrooms = Column(Integer, nullable=True)
    bathrooms = Column(Integer, nullable=True)
    living_area = Column(String(40), nullable=True)
    views = Column(JSON, nullable=True)
    amenities = Column(JSON, nullable=True)
    regions = Column(JSON, nullable=True)
    purchase_timeframe = Column(String(40), nullable=True)
    financing_method = Column(String(40), nullable=True)
    property_use = Column(String(40), nullable=True)

    task_type = Column(String(40), nullable=True)
    notes = Column(Text, nullable=True)
    internal_notes = Column(Text, nullable=True)

    created_at = Column(String(40), nullable=True)
    last_contacted_at = Column(String(40), nullable=True)
    next_follow_up_date = Column(String(40), nullable=True)
    imported_at = Column(String(40), nullable=True)
    integration_source = Column(String(80), nullable=True)
    external_id = Column(String(80), nullable=True)

    desired_price = Column(String(40), nullable=True)
    fees = Column(String(40), nullable=True)
    mandate_type = Column(String(40), nullable=True)
    furnished = Column(Boolean, nullable=True)
    email_envoye = Column(Boolean, nullable=True)

    action_history = Column(JSON, nullable=True)

    def as_record(self) -> Dict[str, Any]:
        """Return the row as a column-name keyed dict."""
        return {column.name: getattr(self, column.name) for column in self.__table__.columns}
