"""
Audit Log Database Models.

Collections and exhibitions have no rows of their own, so the audit log is the
only place a rename, merge or deletion of one of them is recorded as a single
event. Entity CRUD is logged here as well.
"""

from typing import Any, Dict

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Enum,
    Index,
    String,
    Text,
)
from sqlalchemy.sql import func

from .base import Base


audit_actor_kind_enum = Enum(
    "human",
    "system",
    name="audit_actor_kind",
)

audit_action_enum = Enum(
    "created",
    "updated",
    "deleted",
    "renamed",
    "assigned",
    "unassigned",
    name="audit_action",
)


class AuditLogModel(Base):
    """One recorded change.

    ``entity_id`` is the row id for stored entities, the series name for a
    Collection and ``name|venue|dates`` (display only) for an Exhibition.
    """

    __tablename__ = "audit_log"

    id = Column(String(36), primary_key=True)
    ts = Column(
        DateTime(timezone=True),
        nullable=False,
        default=func.now(),
        index=True,
    )

    actor_kind = Column(audit_actor_kind_enum, nullable=False)
    actor_id = Column(String(128), nullable=False, index=True)

    action = Column(audit_action_enum, nullable=False, index=True)

    entity_kind = Column(String(50), nullable=False, index=True)
    entity_id = Column(String(1024), nullable=False)

    before = Column(JSON, nullable=True)
    after = Column(JSON, nullable=True)

    note = Column(Text, nullable=True)

    __table_args__ = (
        Index("ix_audit_log_entity", "entity_kind", "entity_id"),
        Index("ix_audit_log_ts_action", "ts", "action"),
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary."""
        return {
            "id": self.id,
            "ts": self.ts.isoformat() if self.ts else None,
            "actorKind": self.actor_kind,
            "actorId": self.actor_id,
            "action": self.action,
            "entityKind": self.entity_kind,
            "entityId": self.entity_id,
            "before": self.before,
            "after": self.after,
            "note": self.note,
        }
