"""Domain models for leads handled by the brokerage pipeline."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


DEFAULT_CURRENCY = "EUR"
DEFAULT_STATUS = "New"
DEFAULT_PIPELINE_TYPE = "purchase"

# "8+" on buyer criteria, "10+" on owner listings.
BEDROOMS_OVERFLOW = 8
OWNER_BEDROOMS_OVERFLOW = 10


class LeadStatus(str, Enum):
    """Pipeline stages shared by the purchase, rental and owners boards."""

    NEW = "New"
    CONTACTED = "Contacted"
    QUALIFIED = "Qualified"
    PROPOSAL = "Proposal"
    VISIT = "Visit"
    OFFER = "Offer"
    OFFRE = "Offre"
    DEPOSIT = "Deposit"
    SIGNED = "Signed"
    WON = "Gagné"
    LOST = "Perdu"
    NOUVEAU_CONTACT = "NouveauContact"
    QUALIFICATION = "Qualification"
    MANDAT_PROPOSE = "MandatPropose"
    MANDAT_SIGNE = "MandatSigne"
    MANDAT_EXPIRE = "MandatExpire"
    INACTIF = "Inactif"


class LeadTag(str, Enum):
    VIP = "Vip"
    HOT = "Hot"
    SERIOUS = "Serious"
    COLD = "Cold"
    NO_RESPONSE = "No response"
    NO_PHONE = "No phone"
    FAKE = "Fake"


class TaskType(str, Enum):
    """Kinds of follow-up actions an agent can schedule."""

    CALL = "Call"
    VISIT = "Visites"
    COMPROMIS = "Compromis"
    DEED_OF_SALE = "Acte de vente"
    RENTAL_CONTRACT = "Contrat de Location"
    PROPOSAL = "Propositions"
    FOLLOW_UP = "Follow up"
    ESTIMATION = "Estimation"
    PROSPECTION = "Prospection"
    ADMIN = "Admin"
    NOTE = "Note"


class PipelineType(str, Enum):
    PURCHASE = "purchase"
    RENTAL = "rental"
    OWNERS = "owners"


class Currency(str, Enum):
    EUR = "EUR"
    USD = "USD"
    GBP = "GBP"
    CHF = "CHF"
    AED = "AED"
    MUR = "MUR"


class SortMode(str, Enum):
    """Orderings offered by the pipeline list."""

    PRIORITY = "priority"
    STAGE = "stage"
    URGENCY = "urgency"
    TAGS = "tags"
    NEWEST = "newest"
    OLDEST = "oldest"


class CamelModel(BaseModel):
    """Base model exposing camelCase aliases while keeping snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ActionHistory(CamelModel):
    """One scheduled or completed follow-up task attached to a lead."""

    id: Optional[str] = Field(default=None, description="Identifier of the action.")
    action_type: str = Field(
        default=TaskType.NOTE.value, description="Kind of task (call, visit...)."
    )
    scheduled_date: Optional[str] = Field(
        default=None, description="When the action is planned, if scheduled."
    )
    completed_date: Optional[str] = Field(
        default=None, description="When the action was done; marks it completed."
    )
    notes: Optional[str] = None
    created_at: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return bool(self.completed_date)


class Lead(CamelModel):
    """A buyer, renter or owner prospect tracked through a pipeline.

    Every field carries a default so partially filled leads (an edit in
    progress, a legacy row) can still be represented.
    """

    id: Optional[str] = None
    name: str = ""
    salutation: Optional[str] = None
    email: str = ""
    phone: str = ""
    phone_country_code: Optional[str] = None
    phone_country_code_display: Optional[str] = None
    location: str = ""
    nationality: str = ""
    tax_residence: Optional[str] = None
    country: Optional[str] = None
    preferred_language: Optional[str] = None

    status: str = DEFAULT_STATUS
    tags: List[str] = Field(default_factory=list)
    source: Optional[str] = None
    pipeline_type: str = DEFAULT_PIPELINE_TYPE
    assigned_to: Optional[str] = None

    property_reference: str = ""
    url: str = ""
    budget: str = ""
    budget_min: str = ""
    currency: str = DEFAULT_CURRENCY
    desired_location: str = ""
    property_type: str = ""
    property_types: List[str] = Field(default_factory=list)
    bedrooms: Optional[List[int]] = None
    bathrooms: Optional[int] = None
    living_area: Optional[str] = None
    views: List[str] = Field(default_factory=list)
    amenities: List[str] = Field(default_factory=list)
    regions: List[str] = Field(default_factory=list)
    purchase_timeframe: Optional[str] = None
    financing_method: Optional[str] = None
    property_use: Optional[str] = None

    task_type: Optional[str] = None
    notes: str = ""
    internal_notes: str = ""

    created_at: Optional[str] = None
    last_contacted_at: Optional[str] = None
    next_follow_up_date: Optional[str] = None

    imported_at: Optional[str] = None
    integration_source: Optional[str] = None
    external_id: Optional[str] = None

    desired_price: str = ""
    fees: str = ""
    mandate_type: Optional[str] = None
    furnished: bool = False
    email_sent: bool = False

    action_history: List[ActionHistory] = Field(default_factory=list)


class SimpleLead(CamelModel):
    """Compact projection of a lead used by list rows."""

    id: Optional[str] = None
    name: str = ""
    email: str = ""
    phone: str = ""
    status: str = DEFAULT_STATUS
    assigned_to: Optional[str] = None
    created_at: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    budget: str = ""
    location: str = ""
    pipeline_type: str = DEFAULT_PIPELINE_TYPE


class LeadScore(CamelModel):
    """Breakdown of the priority score computed for a lead."""

    lead_id: Optional[str] = None
    stage: int = Field(..., description="Weight of the pipeline stage.")
    tags: int = Field(..., description="Highest weight among the lead's tags.")
    urgency: int = Field(..., description="Weight of the next follow-up date.")
    total: int = Field(..., description="Sum of the three signals.")
