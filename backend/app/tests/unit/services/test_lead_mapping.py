"""Test the lead mapper."""

from datetime import datetime, timezone

import pytest

from src.models.lead_models import ActionHistory, Lead
from src.services.lead_mapping.lead_mapping import (
    action_history_from_record,
    action_history_to_record,
    extract_numeric_value,
    format_budget,
    to_domain,
    to_persisted,
    to_simple_lead,
)


NOW = datetime(2025, 6, 4, 12, 0, tzinfo=timezone.utc)


def _full_lead(**overrides) -> Lead:
    values = dict(
        id="8f7c4b8e-0000-4000-8000-000000000001",
        name="Claire Dubois",
        salutation="Mme",
        email="claire@example.com",
        phone="+33600000001",
        location="Paris",
        nationality="France",
        tax_residence="France",
        country="France",
        status="Visit",
        tags=["Vip", "Hot"],
        source="Idealista",
        pipeline_type="purchase",
        assigned_to="agent-1",
        budget="4500000",
        budget_min="3000000",
        currency="USD",
        desired_location="Saint-Tropez",
        property_type="Villa",
        property_types=["Villa", "Penthouse"],
        bedrooms=[5],
        views=["Mer"],
        amenities=["Piscine"],
        purchase_timeframe="Moins de trois mois",
        notes="Wants sea view.",
        created_at="2025-05-01T10:00:00+00:00",
        last_contacted_at="2025-05-20T09:00:00+00:00",
        next_follow_up_date="2025-06-10T09:00:00+00:00",
        furnished=True,
        email_sent=True,
    )
    values.update(overrides)
    return Lead(**values)


class TestToDomain:
    """Test cases for reading stored rows."""

    def test_empty_record_gets_defaults(self) -> None:
        """Test that a row with no fields maps to a usable lead."""
        lead = to_domain({}, now=NOW)

        assert lead.id is None
        assert lead.status == "New"
        assert lead.tags == []
        assert lead.action_history == []
        assert lead.currency == "EUR"
        assert lead.pipeline_type == "purchase"
        assert lead.name == ""
        assert lead.bedrooms is None
        assert lead.created_at == NOW.isoformat()

    def test_null_fields_get_defaults(self) -> None:
        """Test that explicit nulls behave like missing fields."""
        lead = to_domain(
            {
                "id": "abc",
                "name": None,
                "tags": None,
                "status": None,
                "currency": None,
                "property_types": None,
                "furnished": None,
            },
            now=NOW,
        )

        assert lead.name == ""
        assert lead.tags == []
        assert lead.status == "New"
        assert lead.currency == "EUR"
        assert lead.property_types == []
        assert lead.furnished is False

    def test_created_at_defaults_to_current_time(self) -> None:
        """Test that created_at is filled when the caller gives no reference time."""
        lead = to_domain({})

        assert lead.created_at is not None
        assert datetime.fromisoformat(lead.created_at).tzinfo is not None

    @pytest.mark.parametrize("value", ["not-an-array", 42, {"id": "x"}, None])
    def test_malformed_action_history_reads_as_empty(self, value) -> None:
        """Test that a non-list action history column never raises."""
        lead = to_domain({"action_history": value})

        assert lead.action_history == []

    def test_action_history_items_are_mapped(self) -> None:
        """Test that stored camelCase action items become ActionHistory objects."""
        lead = to_domain(
            {
                "action_history": [
                    {
                        "id": "a1",
                        "actionType": "Call",
                        "scheduledDate": "2025-06-05T10:00:00+00:00",
                        "completedDate": None,
                        "notes": "Call back",
                        "createdAt": "2025-06-01T10:00:00+00:00",
                    },
                    "garbage",
                    {"id": "a2"},
                ]
            }
        )

        assert [action.id for action in lead.action_history] == ["a1", "a2"]
        assert lead.action_history[0].action_type == "Call"
        assert lead.action_history[0].is_completed is False
        assert lead.action_history[1].action_type == "Note"

    @pytest.mark.parametrize(
        "stored, expected",
        [
            (3, [3]),
            ([2, 3, 8], [2, 3, 8]),
            ("4", [4]),
            (None, None),
            ("many", None),
            (-1, None),
            ([1, "x", 2.0, -3], [1, 2]),
            ("²", None),
            (["³", 2], [2]),
        ],
    )
    def test_bedrooms_are_normalized_to_a_list(self, stored, expected) -> None:
        """Test the scalar-or-list bedrooms column."""
        assert to_domain({"bedrooms": stored}).bedrooms == expected

    @pytest.mark.parametrize("stored", ["²", "2.5", "deux", True])
    def test_non_integer_bathrooms_read_as_none(self, stored) -> None:
        """Test that superscripts and other non-integer text never raise."""
        assert to_domain({"bathrooms": stored}).bathrooms is None

    def test_scalar_text_and_list_values_are_coerced(self) -> None:
        """Test that numbers in text columns and scalars in list columns are accepted."""
        lead = to_domain({"budget": 1500000, "tags": "Hot", "views": 12})

        assert lead.budget == "1500000"
        assert lead.tags == ["Hot"]
        assert lead.views == []

    def test_datetime_values_are_rendered_as_iso_text(self) -> None:
        """Test that rows from drivers returning datetimes are accepted."""
        created = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

        lead = to_domain({"created_at": created})

        assert lead.created_at == created.isoformat()

    def test_renamed_column_is_read(self) -> None:
        """Test that email_envoye feeds email_sent."""
        assert to_domain({"email_envoye": True}).email_sent is True

    def test_non_mapping_input_gives_default_lead(self) -> None:
        """Test that a non-dict row still maps."""
        lead = to_domain(None, now=NOW)  # type: ignore[arg-type]

        assert lead.status == "New"


class TestToPersisted:
    """Test cases for writing leads back to the store."""

    def test_action_history_is_not_written(self) -> None:
        """Test that action history goes through its own channel."""
        lead = _full_lead(action_history=[ActionHistory(id="a1", action_type="Call")])

        record = to_persisted(lead)

        assert "action_history" not in record
        assert "actionHistory" not in record

    def test_multi_select_bedrooms_keep_first_value(self) -> None:
        """Test the documented lossy bedrooms write."""
        lead = _full_lead(bedrooms=[3, 5, 8])

        record = to_persisted(lead)

        assert record["bedrooms"] == 3
        assert to_domain(record).bedrooms == [3]

    def test_empty_bedrooms_are_written_as_null(self) -> None:
        """Test that an empty selection stores no value."""
        assert to_persisted(_full_lead(bedrooms=[]))["bedrooms"] is None

    def test_currency_defaults_to_eur(self) -> None:
        """Test that a cleared currency is stored as EUR."""
        assert to_persisted(_full_lead(currency=""))["currency"] == "EUR"

    def test_columns_use_stored_names(self) -> None:
        """Test that the output keys are the table's column names."""
        record = to_persisted(_full_lead())

        assert record["email_envoye"] is True
        assert "email_sent" not in record
        assert record["desired_location"] == "Saint-Tropez"
        assert record["property_types"] == ["Villa", "Penthouse"]

    @pytest.mark.parametrize("bedrooms", [None, [4]])
    def test_round_trip_is_lossless_without_multi_select(self, bedrooms) -> None:
        """Test that reading back a written lead reproduces it."""
        lead = _full_lead(bedrooms=bedrooms)

        assert to_domain(to_persisted(lead)).model_dump() == lead.model_dump()

    def test_partial_lead_is_written(self) -> None:
        """Test that an in-progress edit can be flattened."""
        record = to_persisted(Lead(name="Draft"))

        assert record["name"] == "Draft"
        assert record["id"] is None
        assert record["status"] == "New"


class TestActionHistoryChannel:
    """Test cases for the action history column helpers."""

    def test_to_record_uses_camel_case_keys(self) -> None:
        """Test that actions are stored with their camelCase keys."""
        records = action_history_to_record(
            [ActionHistory(id="a1", action_type="Visites", scheduled_date="2025-06-05")]
        )

        assert records == [
            {
                "id": "a1",
                "actionType": "Visites",
                "scheduledDate": "2025-06-05",
                "completedDate": None,
                "notes": None,
                "createdAt": None,
            }
        ]

    def test_snake_case_items_are_read(self) -> None:
        """Test that items written with snake_case keys are still understood."""
        actions = action_history_from_record(
            [{"id": "a1", "action_type": "Call", "completed_date": "2025-06-01"}]
        )

        assert actions[0].action_type == "Call"
        assert actions[0].is_completed is True


class TestHelpers:
    """Test cases for the display helpers."""

    @pytest.mark.parametrize(
        "budget, currency, expected",
        [
            ("1500000", "EUR", "1500000 €"),
            ("1500000", "USD", "1500000 $"),
            ("1500000", "GBP", "1500000 £"),
            ("2 M€", "USD", "2 M€"),
            ("", "EUR", ""),
            (None, "EUR", ""),
        ],
    )
    def test_format_budget(self, budget, currency, expected) -> None:
        assert format_budget(budget, currency) == expected

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("1 500 000 €", 1500000.0),
            ("2.5", 2.5),
            ("1.500.000", 1.5),
            ("on request", 0),
            (None, 0),
        ],
    )
    def test_extract_numeric_value(self, text, expected) -> None:
        assert extract_numeric_value(text) == expected

    def test_simple_lead_prefers_desired_location(self) -> None:
        """Test the list projection of a lead."""
        simple = to_simple_lead(_full_lead())

        assert simple.location == "Saint-Tropez"
        assert simple.tags == ["Vip", "Hot"]
        assert to_simple_lead(_full_lead(desired_location="")).location == "Paris"
