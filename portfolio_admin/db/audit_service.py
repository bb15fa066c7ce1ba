"""
Audit Log Service.

Every mutating operation in ``portfolio_admin.content`` records an entry here
after its own writes have been committed.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session
from ulid import ULID

from .audit_models import AuditLogModel


class AuditService:
    """Service for managing audit log entries.

    Usage:
        audit = AuditService(db_session)
        audit.log_create("Artwork", artwork.id, snapshot, actor_id=user.id)
    """

    def __init__(self, db: Session):
        self.db = db

    def log(
        self,
        action: str,
        entity_kind: str,
        entity_id: str,
        before: Optional[Dict[str, Any]] = None,
        after: Optional[Dict[str, Any]] = None,
        actor_kind: str = "human",
        actor_id: str = "unknown",
        note: Optional[str] = None,
    ) -> AuditLogModel:
        """Record a single audit entry and commit it.

        Args:
            action: One of created, updated, deleted, renamed, assigned, unassigned
            entity_kind: Type of entity (e.g., "Artwork", "Collection", "Exhibition")
            entity_id: ID (or grouping name) of the entity
            before: State before the change, if meaningful
            after: State after the change, if meaningful
            actor_kind: "human" or "system"
            actor_id: ID of the acting user
            note: Optional human-readable note

        Returns:
            The created AuditLogModel
        """
        entry = AuditLogModel(
            id=str(ULID()),
            ts=datetime.now(timezone.utc),
            actor_kind=actor_kind,
            actor_id=actor_id,
            action=action,
            entity_kind=entity_kind,
            entity_id=entity_id,
            before=before,
            after=after,
            note=note,
        )

        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        return entry

    def log_create(
        self,
        entity_kind: str,
        entity_id: str,
        after: Dict[str, Any],
        actor_id: str = "unknown",
        note: Optional[str] = None,
    ) -> AuditLogModel:
        return self.log(
            "created", entity_kind, entity_id, after=after, actor_id=actor_id, note=note
        )

    def log_update(
        self,
        entity_kind: str,
        entity_id: str,
        before: Dict[str, Any],
        after: Dict[str, Any],
        actor_id: str = "unknown",
        note: Optional[str] = None,
    ) -> AuditLogModel:
        return self.log(
            "updated",
            entity_kind,
            entity_id,
            before=before,
            after=after,
            actor_id=actor_id,
            note=note,
        )

    def log_delete(
        self,
        entity_kind: str,
        entity_id: str,
        before: Dict[str, Any],
        actor_id: str = "unknown",
        note: Optional[str] = None,
    ) -> AuditLogModel:
        return self.log(
            "deleted", entity_kind, entity_id, before=before, actor_id=actor_id, note=note
        )

    # Query methods

    def query_by_entity(
        self,
        entity_kind: str,
        entity_id: str,
        limit: int = 100,
        offset: int = 0,
    ) -> List[AuditLogModel]:
        """Get audit history for a specific entity, newest first."""
        return (
            self.db.query(AuditLogModel)
            .filter(
                AuditLogModel.entity_kind == entity_kind,
                AuditLogModel.entity_id == entity_id,
            )
            .order_by(desc(AuditLogModel.ts))
            .offset(offset)
            .limit(limit)
            .all()
        )

    def query_recent(
        self,
        limit: int = 50,
        entity_kind: Optional[str] = None,
        action: Optional[str] = None,
    ) -> List[AuditLogModel]:
        """Get most recent audit entries, optionally filtered."""
        query = self.db.query(AuditLogModel)

        if entity_kind:
            query = query.filter(AuditLogModel.entity_kind == entity_kind)
        if action:
            query = query.filter(AuditLogModel.action == action)

        return query.order_by(desc(AuditLogModel.ts)).limit(limit).all()
