"""Test the leads CRUD against an in-memory database."""

from src.repositories.interactions.crud.leads_crud import CRUDLead
from src.services.lead_mapping.lead_mapping import to_domain


def _record(lead_id: str, **values):
    record = {"id": lead_id, "name": f"Lead {lead_id}", "status": "New"}
    record.update(values)
    return record


class TestCRUDLead:
    """Test cases for CRUDLead."""

    def setup_method(self) -> None:
        self.crud = CRUDLead()

    def test_create_and_get(self, db_session) -> None:
        """Test that JSON columns survive a write and a read."""
        self.crud.create(
            db_session,
            _record("lead-1", tags=["Vip", "Hot"], property_types=["Villa"], bedrooms=4),
        )

        row = self.crud.get(db_session, "lead-1")

        assert row is not None
        record = row.as_record()
        assert record["tags"] == ["Vip", "Hot"]
        assert record["property_types"] == ["Villa"]
        assert record["bedrooms"] == 4
        assert record["action_history"] is None

    def test_get_missing_returns_none(self, db_session) -> None:
        assert self.crud.get(db_session, "missing") is None

    def test_list_filters_pipeline_and_orders_newest_first(self, db_session) -> None:
        self.crud.create(db_session, _record("old", created_at="2025-01-01T00:00:00+00:00"))
        self.crud.create(db_session, _record("new", created_at="2025-03-01T00:00:00+00:00"))
        self.crud.create(
            db_session,
            _record("owner", pipeline_type="owners", created_at="2025-02-01T00:00:00+00:00"),
        )

        all_rows = self.crud.list(db_session)
        owners = self.crud.list(db_session, pipeline_type="owners")

        assert [row.id for row in all_rows] == ["new", "owner", "old"]
        assert [row.id for row in owners] == ["owner"]

    def test_update_sets_columns(self, db_session) -> None:
        row = self.crud.create(db_session, _record("lead-1"))

        updated = self.crud.update(db_session, row, {"status": "Visit", "tags": ["Hot"]})

        assert updated.status == "Visit"
        assert self.crud.get(db_session, "lead-1").tags == ["Hot"]

    def test_save_action_history_replaces_the_column(self, db_session) -> None:
        """Test the separate write path for actions."""
        row = self.crud.create(db_session, _record("lead-1"))
        actions = [{"id": "a1", "actionType": "Call", "scheduledDate": None}]

        self.crud.save_action_history(
            db_session, row, actions, last_contacted_at="2025-06-04T10:00:00+00:00"
        )
        self.crud.save_action_history(
            db_session, row, actions + [{"id": "a2", "actionType": "Visites"}]
        )

        lead = to_domain(self.crud.get(db_session, "lead-1").as_record())
        assert [action.id for action in lead.action_history] == ["a1", "a2"]
        assert lead.last_contacted_at == "2025-06-04T10:00:00+00:00"

    def test_delete(self, db_session) -> None:
        row = self.crud.create(db_session, _record("lead-1"))

        self.crud.delete(db_session, row)

        assert self.crud.get(db_session, "lead-1") is None
