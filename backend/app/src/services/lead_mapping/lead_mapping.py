"""Translate stored lead rows into the domain Lead model and back.

Rows come from a loosely enforced store that accumulated records under
several field conventions, so every conversion here is total: missing or
malformed values fall back to a default instead of raising.

Writing a lead back is lossy for ``bedrooms``: the column holds a single
integer, so only the first selected count of a multi-select survives
``to_persisted``. Callers that need the whole selection must store it
through another path.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

from src.models.lead_models import (
    DEFAULT_CURRENCY,
    DEFAULT_PIPELINE_TYPE,
    DEFAULT_STATUS,
    ActionHistory,
    Currency,
    Lead,
    SimpleLead,
    TaskType,
)

# Domain attribute -> stored column, for the columns whose names differ.
RENAMED_COLUMNS: Dict[str, str] = {"email_sent": "email_envoye"}

TEXT_FIELDS = (
    "name",
    "email",
    "phone",
    "location",
    "nationality",
    "property_reference",
    "url",
    "budget",
    "budget_min",
    "desired_location",
    "property_type",
    "notes",
    "internal_notes",
    "desired_price",
    "fees",
)

OPTIONAL_TEXT_FIELDS = (
    "salutation",
    "phone_country_code",
    "phone_country_code_display",
    "tax_residence",
    "country",
    "preferred_language",
    "source",
    "assigned_to",
    "living_area",
    "purchase_timeframe",
    "financing_method",
    "property_use",
    "task_type",
    "integration_source",
    "external_id",
    "mandate_type",
)

LIST_FIELDS = ("tags", "property_types", "views", "amenities", "regions")

TIMESTAMP_FIELDS = (
    "last_contacted_at",
    "next_follow_up_date",
    "imported_at",
)

INT_FIELDS = ("bathrooms",)

BOOL_FIELDS = ("furnished", "email_sent")

CURRENCY_SYMBOLS = ("€", "$", "£")


def _column(field: str) -> str:
    return RENAMED_COLUMNS.get(field, field)


def _text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list, tuple, set)):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _optional_text(value: Any) -> Optional[str]:
    text = _text(value)
    return text or None


def _text_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value] if value.strip() else []
    if not isinstance(value, (list, tuple)):
        return []
    return [_text(item) for item in value if _text(item)]


def _timestamp(value: Any) -> Optional[str]:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return _optional_text(value)


def _int_or_none(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) and value.is_integer() else None
    if isinstance(value, str) and value.strip().isdecimal():
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _bool(value: Any) -> bool:
    return value is True


def _bedrooms(value: Any) -> Optional[List[int]]:
    """Normalize the scalar-or-list bedrooms column into a list of counts."""
    if isinstance(value, (list, tuple)):
        counts = [_int_or_none(item) for item in value]
        return [count for count in counts if count is not None and count >= 0]
    count = _int_or_none(value)
    if count is None or count < 0:
        return None
    return [count]


def _action(item: Mapping[str, Any]) -> ActionHistory:
    def pick(camel: str, snake: str) -> Any:
        return item.get(camel, item.get(snake))

    return ActionHistory(
        id=_optional_text(item.get("id")),
        action_type=_optional_text(pick("actionType", "action_type"))
        or TaskType.NOTE.value,
        scheduled_date=_timestamp(pick("scheduledDate", "scheduled_date")),
        completed_date=_timestamp(pick("completedDate", "completed_date")),
        notes=_optional_text(item.get("notes")),
        created_at=_timestamp(pick("createdAt", "created_at")),
    )


def action_history_from_record(value: Any) -> List[ActionHistory]:
    """Read the JSON action history column; anything but a list reads as empty."""
    if not isinstance(value, list):
        return []
    return [_action(item) for item in value if isinstance(item, Mapping)]


def action_history_to_record(actions: Iterable[ActionHistory]) -> List[Dict[str, Any]]:
    """Serialize actions for the JSON column, using the stored camelCase keys."""
    return [action.model_dump(by_alias=True) for action in actions]


def to_domain(persisted: Mapping[str, Any], now: Optional[datetime] = None) -> Lead:
    """Build a fully populated Lead from a stored row.

    Args:
        persisted: Row as returned by the store; any key may be missing or null.
        now: Used as ``created_at`` when the row has none. Defaults to the
            current UTC time.

    Returns:
        Lead: Never raises; unusable values are replaced by defaults.
    """
    if not isinstance(persisted, Mapping):
        persisted = {}

    values: Dict[str, Any] = {"id": _optional_text(persisted.get("id"))}

    for field in TEXT_FIELDS:
        values[field] = _text(persisted.get(_column(field)))
    for field in OPTIONAL_TEXT_FIELDS:
        values[field] = _optional_text(persisted.get(_column(field)))
    for field in LIST_FIELDS:
        values[field] = _text_list(persisted.get(_column(field)))
    for field in TIMESTAMP_FIELDS:
        values[field] = _timestamp(persisted.get(_column(field)))
    for field in INT_FIELDS:
        values[field] = _int_or_none(persisted.get(_column(field)))
    for field in BOOL_FIELDS:
        values[field] = _bool(persisted.get(_column(field)))

    values["status"] = _text(persisted.get("status")) or DEFAULT_STATUS
    values["pipeline_type"] = (
        _text(persisted.get("pipeline_type")) or DEFAULT_PIPELINE_TYPE
    )
    values["currency"] = _text(persisted.get("currency")) or DEFAULT_CURRENCY
    values["created_at"] = _timestamp(persisted.get("created_at")) or (
        now or datetime.now(timezone.utc)
    ).isoformat()
    values["bedrooms"] = _bedrooms(persisted.get("bedrooms"))
    values["action_history"] = action_history_from_record(
        persisted.get("action_history")
    )

    return Lead(**values)


def to_persisted(lead: Lead) -> Dict[str, Any]:
    """Flatten a Lead into the stored column layout.

    ``action_history`` is not part of the result; it is written through
    ``action_history_to_record``. ``bedrooms`` keeps only its first count.
    """
    record: Dict[str, Any] = {"id": lead.id}

    fields = (
        TEXT_FIELDS
        + OPTIONAL_TEXT_FIELDS
        + TIMESTAMP_FIELDS
        + INT_FIELDS
        + BOOL_FIELDS
        + ("status", "pipeline_type", "created_at")
    )
    for field in fields:
        record[_column(field)] = getattr(lead, field)
    for field in LIST_FIELDS:
        record[field] = list(getattr(lead, field))

    record["currency"] = lead.currency or DEFAULT_CURRENCY
    record["bedrooms"] = lead.bedrooms[0] if lead.bedrooms else None
    return record


def extract_numeric_value(value: Any) -> float:
    """Pull the number out of free-form budget text such as ``"1 500 000 €"``."""
    if not value:
        return 0
    numeric = re.sub(r"[^\d.]", "", str(value))
    match = re.match(r"\d*\.?\d+", numeric)
    return float(match.group()) if match else 0


def format_budget(budget: Optional[str], currency: str = DEFAULT_CURRENCY) -> str:
    """Render a budget with its currency symbol unless it already has one."""
    if not budget:
        return ""
    if any(symbol in budget for symbol in CURRENCY_SYMBOLS):
        return budget

    if currency == Currency.EUR.value:
        symbol = "€"
    elif currency == Currency.USD.value:
        symbol = "$"
    else:
        symbol = "£"
    return f"{budget} {symbol}"


def to_simple_lead(lead: Lead) -> SimpleLead:
    return SimpleLead(
        id=lead.id,
        name=lead.name,
        email=lead.email,
        phone=lead.phone,
        status=lead.status,
        assigned_to=lead.assigned_to,
        created_at=lead.created_at,
        tags=list(lead.tags),
        budget=lead.budget,
        location=lead.desired_location or lead.location,
        pipeline_type=lead.pipeline_type or DEFAULT_PIPELINE_TYPE,
    )
