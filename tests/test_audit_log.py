"""
Tests for the AuditLog model and service.

Verifies:
- AuditLogModel structure and to_dict()
- AuditService logging methods (create, update, delete, grouping actions)
- AuditService query methods (by entity, recent with filters)
"""

from datetime import datetime, timezone

import pytest

from portfolio_admin.db.audit_models import AuditLogModel
from portfolio_admin.db.audit_service import AuditService


class TestAuditLogModel:
    """Tests for AuditLogModel structure."""

    def test_model_has_required_columns(self):
        columns = {c.name for c in AuditLogModel.__table__.columns}
        assert {
            "id", "ts", "actor_kind", "actor_id", "action",
            "entity_kind", "entity_id", "before", "after", "note",
        } <= columns

    def test_to_dict_output(self):
        entry = AuditLogModel(
            id="entry-1",
            ts=datetime(2026, 1, 26, 12, 0, 0, tzinfo=timezone.utc),
            actor_kind="human",
            actor_id="user-1",
            action="renamed",
            entity_kind="Collection",
            entity_id="New Name",
            before={"name": "Old Name"},
            after={"name": "New Name"},
            note=None,
        )

        result = entry.to_dict()

        assert result["ts"] == "2026-01-26T12:00:00+00:00"
        assert result["actorKind"] == "human"
        assert result["entityKind"] == "Collection"
        assert result["before"] == {"name": "Old Name"}


class TestAuditService:
    """Tests for AuditService logging and queries."""

    @pytest.fixture
    def audit(self, db_session):
        return AuditService(db_session)

    def test_log_create(self, audit):
        entry = audit.log_create("Artwork", "a1", {"title": "Figure"}, actor_id="user-1")

        assert entry.action == "created"
        assert entry.before is None
        assert entry.after == {"title": "Figure"}
        assert entry.actor_kind == "human"

    def test_log_update_keeps_both_states(self, audit):
        entry = audit.log_update("Page", "p1", {"title": "A"}, {"title": "B"})
        assert entry.before == {"title": "A"}
        assert entry.after == {"title": "B"}
        assert entry.actor_id == "unknown"

    def test_log_delete(self, audit):
        entry = audit.log_delete("Media", "m1", {"title": "Photo"}, note="cleanup")
        assert entry.action == "deleted"
        assert entry.note == "cleanup"

    def test_system_actor(self, audit):
        entry = audit.log(
            "unassigned", "Exhibition", "Light|Hall|2024", actor_kind="system"
        )
        assert entry.actor_kind == "system"

    def test_query_by_entity(self, audit):
        audit.log_create("Artwork", "a1", {"v": 1})
        audit.log_update("Artwork", "a1", {"v": 1}, {"v": 2})
        audit.log_create("Artwork", "a2", {"v": 1})

        entries = audit.query_by_entity("Artwork", "a1")

        assert len(entries) == 2
        assert {e.action for e in entries} == {"created", "updated"}

    def test_query_recent_filters(self, audit):
        audit.log_create("Artwork", "a1", {})
        audit.log("assigned", "Collection", "Body Works", after={"artworkIds": ["a1"]})
        audit.log_delete("Artwork", "a1", {})

        assert len(audit.query_recent()) == 3
        assert [e.entity_id for e in audit.query_recent(entity_kind="Collection")] == [
            "Body Works"
        ]
        assert [e.action for e in audit.query_recent(action="deleted")] == ["deleted"]
        assert len(audit.query_recent(limit=1)) == 1
