"""
Mutations of Collections and Exhibitions.

Both groupings live inside artwork rows, so every operation here is a rewrite
of artwork fields:

- Collections are changed with single bulk ``UPDATE`` statements on
  ``series``; each statement also bumps the row version.
- Exhibitions are changed one artwork at a time (read ``exhibition_history``,
  modify, write back, commit). Each row is guarded by its version, so a row
  changed by someone else in between fails on its own instead of being
  silently overwritten. There is no rollback across rows: rows already
  written stay written and the outcome is reported per row in a
  ``BulkResult``.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

import structlog
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..db.audit_service import AuditService
from ..db.models import ArtworkModel
from ..errors import (
    AppError,
    ErrorMessages,
    ErrorType,
    log_error,
    parse_db_error,
    wrap_errors,
)
from .enums import EntityKind
from .exhibition import BulkResult, ExhibitionEntry, ExhibitionKey
from .primitives import blank, utc_now

logger = structlog.get_logger()

HistoryTransform = Callable[[List[ExhibitionEntry]], Optional[List[ExhibitionEntry]]]


def _unique_ids(artwork_ids: Sequence[str]) -> List[str]:
    return list(dict.fromkeys(artwork_ids))


class CollectionService:
    """Service for Collection operations (bulk rewrites of ``series``)."""

    def __init__(self, db: Session):
        self.db = db
        self.audit = AuditService(db)

    def _set_series(self, criterion, value: Optional[str]) -> int:
        count = (
            self.db.query(ArtworkModel)
            .filter(criterion)
            .update(
                {
                    ArtworkModel.series: value,
                    ArtworkModel.version: ArtworkModel.version + 1,
                    ArtworkModel.updated_at: utc_now(),
                },
                synchronize_session=False,
            )
        )
        self.db.commit()
        return count

    def _require_name(self, name: Optional[str]) -> str:
        if blank(name):
            raise AppError(
                ErrorType.REQUIRED_FIELD,
                ErrorMessages.COLLECTION_NAME_REQUIRED,
                "Collection name is blank",
                {"field": "name"},
            )
        return name.strip()

    def _count_members(self, name: str) -> int:
        return self.db.query(ArtworkModel).filter(ArtworkModel.series == name).count()

    @wrap_errors("update", "Collection", ErrorMessages.COLLECTION_UPDATE_FAILED)
    def update_artworks_collection(
        self,
        artwork_ids: Sequence[str],
        collection_name: str,
        actor_id: str = "unknown",
    ) -> int:
        """Put artworks into a collection, replacing any previous one.

        Returns:
            Number of artworks updated
        """
        if not artwork_ids:
            raise AppError(
                ErrorType.VALIDATION_ERROR,
                ErrorMessages.COLLECTION_NO_ARTWORKS,
                "No artwork ids given",
            )
        name = self._require_name(collection_name)
        ids = _unique_ids(artwork_ids)

        count = self._set_series(ArtworkModel.id.in_(ids), name)
        if count == 0:
            raise AppError(
                ErrorType.NOT_FOUND,
                ErrorMessages.ARTWORK_NOT_FOUND,
                f"None of the artworks exist: {ids}",
            )

        logger.info("collection_assigned", collection=name, artworks=count)
        self.audit.log(
            "assigned",
            EntityKind.COLLECTION.value,
            name,
            after={"artworkIds": ids},
            actor_id=actor_id,
        )
        return count

    @wrap_errors("update", "Collection", ErrorMessages.COLLECTION_UPDATE_FAILED)
    def rename_collection(
        self, old_name: str, new_name: str, actor_id: str = "unknown"
    ) -> int:
        """Rename a collection. Renaming onto an existing name merges the two."""
        old = self._require_name(old_name)
        new = self._require_name(new_name)
        if old == new:
            raise AppError(
                ErrorType.VALIDATION_ERROR,
                ErrorMessages.COLLECTION_SAME_NAME,
                f"Old and new collection names are both {old!r}",
            )
        if self._count_members(old) == 0:
            raise AppError(
                ErrorType.NOT_FOUND,
                ErrorMessages.COLLECTION_NOT_FOUND,
                f"No artworks with series {old!r}",
            )

        count = self._set_series(ArtworkModel.series == old, new)

        logger.info("collection_renamed", old=old, new=new, artworks=count)
        self.audit.log(
            "renamed",
            EntityKind.COLLECTION.value,
            new,
            before={"name": old},
            after={"name": new, "artworkCount": count},
            actor_id=actor_id,
        )
        return count

    @wrap_errors("update", "Collection", ErrorMessages.COLLECTION_UPDATE_FAILED)
    def remove_artworks_from_collection(
        self, artwork_ids: Sequence[str], actor_id: str = "unknown"
    ) -> int:
        if not artwork_ids:
            raise AppError(
                ErrorType.VALIDATION_ERROR,
                ErrorMessages.NO_ARTWORKS_SELECTED,
                "No artwork ids given",
            )
        ids = _unique_ids(artwork_ids)
        count = self._set_series(
            ArtworkModel.id.in_(ids) & ArtworkModel.series.isnot(None), None
        )

        self.audit.log(
            "unassigned",
            EntityKind.COLLECTION.value,
            "*",
            before={"artworkIds": ids},
            actor_id=actor_id,
            note=f"{count} artwork(s) removed from their collection",
        )
        return count

    @wrap_errors("delete", "Collection", ErrorMessages.COLLECTION_DELETE_FAILED)
    def delete_collection(self, collection_name: str, actor_id: str = "unknown") -> int:
        """Dissolve a collection. The artworks themselves are kept."""
        name = self._require_name(collection_name)
        if self._count_members(name) == 0:
            raise AppError(
                ErrorType.NOT_FOUND,
                ErrorMessages.COLLECTION_NOT_FOUND,
                f"No artworks with series {name!r}",
            )

        count = self._set_series(ArtworkModel.series == name, None)

        logger.info("collection_deleted", collection=name, artworks=count)
        self.audit.log(
            "deleted",
            EntityKind.COLLECTION.value,
            name,
            before={"name": name, "artworkCount": count},
            actor_id=actor_id,
        )
        return count


class ExhibitionService:
    """Service for Exhibition operations (per-artwork history rewrites)."""

    def __init__(self, db: Session):
        self.db = db
        self.audit = AuditService(db)

    # Row helpers

    @staticmethod
    def _history(row: ArtworkModel) -> List[ExhibitionEntry]:
        return [ExhibitionEntry.model_validate(e) for e in row.exhibition_history or []]

    def _save(self, row: ArtworkModel, history: List[ExhibitionEntry]) -> None:
        """Write back a whole history array; the version check happens here."""
        row.exhibition_history = [
            e.model_dump(by_alias=True, mode="json") for e in history
        ]
        row.updated_at = utc_now()
        self.db.commit()

    def _apply(
        self, result: BulkResult, artwork_id: str, transform: HistoryTransform
    ) -> None:
        """Read-modify-write one artwork and record the outcome.

        ``transform`` returns the new history, or None when nothing changes.
        """
        try:
            row = self.db.get(ArtworkModel, artwork_id)
            if row is None:
                result.fail(artwork_id, ErrorType.NOT_FOUND, ErrorMessages.ARTWORK_NOT_FOUND)
                return
            new_history = transform(self._history(row))
            if new_history is None:
                result.unchanged.append(artwork_id)
                return
            self._save(row, new_history)
            result.succeeded.append(artwork_id)
        except ValidationError as exc:
            self.db.rollback()
            logger.warning(
                "exhibition_history_unreadable", artwork_id=artwork_id, error=str(exc)
            )
            result.fail(
                artwork_id,
                ErrorType.VALIDATION_ERROR,
                "Stored exhibition history could not be read.",
            )
        except SQLAlchemyError as exc:
            self.db.rollback()
            error = parse_db_error(exc, "update", "Artwork")
            log_error(error, artwork_id=artwork_id)
            result.fail(artwork_id, error.type, error.user_message)

    def _ids_with(self, key: ExhibitionKey) -> List[str]:
        """Ids of every artwork whose history holds an entry for ``key``."""
        rows = (
            self.db.query(ArtworkModel)
            .filter(ArtworkModel.exhibition_history.isnot(None))
            .all()
        )
        ids = []
        for row in rows:
            try:
                history = self._history(row)
            except ValidationError as exc:
                logger.warning(
                    "exhibition_history_unreadable", artwork_id=row.id, error=str(exc)
                )
                continue
            if any(e.key == key for e in history):
                ids.append(row.id)
        return ids

    @staticmethod
    def _check_quorum(
        result: BulkResult, error_type: ErrorType, user_message: str
    ) -> None:
        """Raise only if every row failed."""
        if result.failed and result.touched == 0:
            raise AppError(
                error_type,
                user_message,
                "; ".join(f"{f.id}: {f.message}" for f in result.failed),
                {"failed": [f.id for f in result.failed]},
            )
        if result.failed:
            logger.warning(
                "exhibition_partial_failure",
                succeeded=len(result.succeeded),
                unchanged=len(result.unchanged),
                failed=[f.id for f in result.failed],
            )

    @staticmethod
    def _require_key_fields(name: str, venue: str, dates: str) -> None:
        for field, value in (("name", name), ("venue", venue), ("dates", dates)):
            if blank(value):
                raise AppError(
                    ErrorType.REQUIRED_FIELD,
                    f"Exhibition {field} is required.",
                    f"Exhibition {field} is blank",
                    {"field": field},
                )

    def _validate_entry(self, entry: ExhibitionEntry) -> ExhibitionEntry:
        self._require_key_fields(entry.name, entry.venue, entry.dates)
        return entry

    def _validate_key(self, key: ExhibitionKey) -> ExhibitionKey:
        self._require_key_fields(key.name, key.venue, key.dates)
        return ExhibitionKey(key.name.strip(), key.venue.strip(), key.dates.strip())

    @staticmethod
    def _require_artworks(artwork_ids: Sequence[str]) -> List[str]:
        if not artwork_ids:
            raise AppError(
                ErrorType.VALIDATION_ERROR,
                ErrorMessages.NO_ARTWORKS_SELECTED,
                "No artwork ids given",
            )
        return _unique_ids(artwork_ids)

    # Operations

    @wrap_errors("update", "Exhibition", ErrorMessages.EXHIBITION_UPDATE_FAILED)
    def add_exhibition_to_artworks(
        self,
        artwork_ids: Sequence[str],
        entry: ExhibitionEntry,
        actor_id: str = "unknown",
    ) -> BulkResult:
        """Append ``entry`` to each artwork that does not already carry it."""
        ids = self._require_artworks(artwork_ids)
        entry = self._validate_entry(entry)
        key = entry.key

        def append(history: List[ExhibitionEntry]) -> Optional[List[ExhibitionEntry]]:
            if any(e.key == key for e in history):
                return None
            return history + [entry]

        result = BulkResult()
        for artwork_id in ids:
            self._apply(result, artwork_id, append)

        self._check_quorum(
            result, ErrorType.UPDATE_FAILED, ErrorMessages.EXHIBITION_UPDATE_FAILED
        )
        if result.succeeded:
            self.audit.log(
                "assigned",
                EntityKind.EXHIBITION.value,
                key.label(),
                after={"entry": entry.model_dump(by_alias=True, mode="json"),
                       "artworkIds": result.succeeded},
                actor_id=actor_id,
            )
        return result

    @wrap_errors("update", "Exhibition", ErrorMessages.EXHIBITION_UPDATE_FAILED)
    def update_exhibition(
        self,
        old_key: ExhibitionKey,
        new_entry: ExhibitionEntry,
        actor_id: str = "unknown",
    ) -> BulkResult:
        """Replace every embedded copy of an exhibition with ``new_entry``.

        Key fields may change, which renames or re-dates the exhibition. If an
        artwork already holds an entry under the new key the two collapse into
        one.
        """
        old_key = self._validate_key(old_key)
        new_entry = self._validate_entry(new_entry)
        new_key = new_entry.key

        ids = self._ids_with(old_key)
        if not ids:
            raise AppError(
                ErrorType.NOT_FOUND,
                ErrorMessages.EXHIBITION_NOT_FOUND,
                f"No artwork has exhibition {old_key.label()}",
            )

        def replace(history: List[ExhibitionEntry]) -> Optional[List[ExhibitionEntry]]:
            updated: List[ExhibitionEntry] = []
            for e in history:
                candidate = new_entry if e.key == old_key else e
                if candidate.key == new_key and any(u.key == new_key for u in updated):
                    continue
                updated.append(candidate)
            return None if updated == history else updated

        result = BulkResult()
        for artwork_id in ids:
            self._apply(result, artwork_id, replace)

        self._check_quorum(
            result, ErrorType.UPDATE_FAILED, ErrorMessages.EXHIBITION_UPDATE_FAILED
        )
        if result.succeeded:
            self.audit.log(
                "updated",
                EntityKind.EXHIBITION.value,
                new_key.label(),
                before=old_key._asdict(),
                after=new_entry.model_dump(by_alias=True, mode="json"),
                actor_id=actor_id,
            )
        return result

    @wrap_errors("delete", "Exhibition", ErrorMessages.EXHIBITION_DELETE_FAILED)
    def delete_exhibition(
        self, key: ExhibitionKey, actor_id: str = "unknown"
    ) -> BulkResult:
        """Remove an exhibition from every artwork that carries it."""
        key = self._validate_key(key)
        ids = self._ids_with(key)
        if not ids:
            raise AppError(
                ErrorType.NOT_FOUND,
                ErrorMessages.EXHIBITION_NOT_FOUND,
                f"No artwork has exhibition {key.label()}",
            )

        result = BulkResult()
        for artwork_id in ids:
            self._apply(result, artwork_id, self._without(key))

        self._check_quorum(
            result, ErrorType.DELETE_FAILED, ErrorMessages.EXHIBITION_DELETE_FAILED
        )
        if result.succeeded:
            self.audit.log(
                "deleted",
                EntityKind.EXHIBITION.value,
                key.label(),
                before={**key._asdict(), "artworkIds": result.succeeded},
                actor_id=actor_id,
            )
        return result

    @wrap_errors("update", "Exhibition", ErrorMessages.EXHIBITION_UPDATE_FAILED)
    def remove_artworks_from_exhibition(
        self,
        artwork_ids: Sequence[str],
        key: ExhibitionKey,
        actor_id: str = "unknown",
    ) -> BulkResult:
        """Drop the exhibition from the given artworks only."""
        ids = self._require_artworks(artwork_ids)
        key = self._validate_key(key)

        result = BulkResult()
        for artwork_id in ids:
            self._apply(result, artwork_id, self._without(key))

        # Raises only when no row was touched, like the other bulk operations.
        self._check_quorum(
            result, ErrorType.UPDATE_FAILED, ErrorMessages.EXHIBITION_UPDATE_FAILED
        )
        if result.succeeded:
            self.audit.log(
                "unassigned",
                EntityKind.EXHIBITION.value,
                key.label(),
                before={"artworkIds": result.succeeded},
                actor_id=actor_id,
            )
        return result

    @staticmethod
    def _without(key: ExhibitionKey) -> HistoryTransform:
        def remove(history: List[ExhibitionEntry]) -> Optional[List[ExhibitionEntry]]:
            kept = [e for e in history if e.key != key]
            return None if len(kept) == len(history) else kept

        return remove
