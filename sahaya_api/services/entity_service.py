"""
Generic service for every audit-trailed record type.

All status moves MUST go through EntityService.transition so that each one
appends exactly one history entry.
"""
import logging
import re
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic_core import to_jsonable_python
from sqlalchemy import JSON, Boolean, DateTime, Float, Integer, func, inspect
from sqlalchemy.orm import Session

from sahaya_api.exceptions import ValidationFailed
from sahaya_api.models.user import User
from sahaya_api.services.id_generator import IdGenerator, district_code
from sahaya_api.services.registry import EntityType

logger = logging.getLogger(__name__)

DEFAULT_PAGE_LIMIT = 50
MAX_PAGE_LIMIT = 100

# Never writable through create/update
IMMUTABLE_FIELDS = frozenset({
    "id",
    "human_id",
    "status_history",
    "comments",
    "created_at",
    "updated_at",
    "created_by_id",
})

SURROGATE_ID = re.compile(r"^[0-9]{1,18}$")


def invalid(field: str, message: str) -> ValidationFailed:
    return ValidationFailed(f"Invalid value for {field}", errors=[{"field": field, "message": message}])


class EntityService:
    """
    Operations shared by every record type, parameterised by an EntityType.

    Invariants:
    - human_id is assigned once, at creation, from the atomic counter
    - Every status change appends one history entry; a same-status update appends none
    - History and comments are only ever appended to
    - Lookups that match nothing return None; they never raise
    """

    def __init__(self, db: Session, entity_type: EntityType):
        self.db = db
        self.entity_type = entity_type
        self.model = entity_type.model
        self._columns = {attr.key: attr.columns[0] for attr in inspect(self.model).column_attrs}
        self._user_columns = frozenset(
            key for key, column in self._columns.items()
            if any(fk.target_fullname == "users.id" for fk in column.foreign_keys)
        )

    # Value handling

    def coerce(self, name: str, column_name: str, value: Any) -> Any:
        """Convert a raw (usually string) value to the column's Python type."""
        if value is None:
            return None
        column_type = self._columns[column_name].type
        enum_class = getattr(column_type, "enum_class", None)
        if enum_class is not None:
            try:
                return enum_class(value)
            except ValueError:
                allowed = ", ".join(member.value for member in enum_class)
                raise invalid(name, f"must be one of: {allowed}")
        if isinstance(column_type, Boolean):
            if isinstance(value, bool):
                return value
            lowered = str(value).strip().lower()
            if lowered in ("true", "1", "yes"):
                return True
            if lowered in ("false", "0", "no"):
                return False
            raise invalid(name, "must be true or false")
        if isinstance(column_type, Integer):
            try:
                return int(value)
            except (TypeError, ValueError):
                raise invalid(name, "must be an integer")
        if isinstance(column_type, Float):
            try:
                return float(value)
            except (TypeError, ValueError):
                raise invalid(name, "must be a number")
        if isinstance(column_type, DateTime):
            if isinstance(value, str):
                return self._parse_datetime(name, value)
            if isinstance(value, datetime) and value.tzinfo is not None:
                return value.replace(tzinfo=None) - value.utcoffset()
            return value
        if isinstance(column_type, JSON):
            return to_jsonable_python(value)
        return value

    def _parse_datetime(self, name: str, value: str) -> datetime:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise invalid(name, "must be an ISO 8601 date")
        if parsed.tzinfo is not None:
            parsed = parsed.replace(tzinfo=None) - (parsed.utcoffset() or timedelta(0))
        return parsed

    def coerce_status(self, status: Any) -> Enum:
        return self.coerce("status", "status", status)

    def writable(self, fields: Mapping[str, Any], creating: bool = False) -> Dict[str, Any]:
        """
        Drop immutable and unknown keys, coerce the rest.

        None for a NOT NULL column is rejected; on create it falls back to the
        column default when there is one. User references must exist.
        """
        values = {}
        for key, value in fields.items():
            if key in IMMUTABLE_FIELDS or key == "status" or key not in self._columns:
                continue
            column = self._columns[key]
            if value is None and not column.nullable:
                if creating and column.default is not None:
                    continue
                raise invalid(key, "may not be null")
            values[key] = self.coerce(key, key, value)
            if key in self._user_columns:
                self.require_user(key, values[key])
        return values

    def require_user(self, field: str, user_id: Optional[int]) -> Optional[int]:
        """Reject a user id that does not exist. None passes through."""
        if user_id is not None and self.db.get(User, user_id) is None:
            raise invalid(field, "no such user")
        return user_id

    # Lookup

    def get(self, identifier: Any):
        """Resolve a surrogate id (all digits) or a human id; None if neither matches."""
        identifier = str(identifier).strip() if identifier is not None else ""
        if not identifier:
            return None
        if SURROGATE_ID.match(identifier):
            return self.db.query(self.model).filter(self.model.id == int(identifier)).first()
        return self.db.query(self.model).filter(self.model.human_id == identifier).first()

    def filtered_query(self, filters: Mapping[str, Any]):
        query = self.db.query(self.model)
        for param, column_name in self.entity_type.filter_fields.items():
            raw = filters.get(param)
            if raw is None or raw == "":
                continue
            query = query.filter(getattr(self.model, column_name) == self.coerce(param, column_name, raw))

        date_column = getattr(self.model, self.entity_type.date_field)
        date_from = filters.get("date_from")
        if date_from:
            query = query.filter(date_column >= self._parse_datetime("date_from", date_from))
        date_to = filters.get("date_to")
        if date_to:
            upper = self._parse_datetime("date_to", date_to)
            if len(date_to.strip()) == 10:
                # A bare date covers the whole day
                query = query.filter(date_column < upper + timedelta(days=1))
            else:
                query = query.filter(date_column <= upper)
        return query

    def list(self, filters: Mapping[str, Any], page: int = 1, limit: int = DEFAULT_PAGE_LIMIT) -> Tuple[List[Any], int]:
        page = max(int(page or 1), 1)
        limit = min(max(int(limit or DEFAULT_PAGE_LIMIT), 1), MAX_PAGE_LIMIT)

        query = self.filtered_query(filters)
        total = query.count()
        items = (
            query.order_by(self.model.created_at.desc(), self.model.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return items, total

    # Writes

    def _next_human_id(self, entity) -> str:
        partition = None
        if self.entity_type.partition_field:
            partition = district_code(getattr(entity, self.entity_type.partition_field))
        return IdGenerator(self.db).next(self.entity_type.name, self.entity_type.id_prefix, partition)

    def create(self, fields: Mapping[str, Any], actor_id: Optional[int] = None):
        entity = self.model(**self.writable(fields, creating=True))
        status = self.entity_type.default_status
        entity.status = status
        entity.created_by_id = actor_id
        entity.human_id = self._next_human_id(entity)
        if self.entity_type.on_create:
            self.entity_type.on_create(entity)
        entity.record_status(status.value, actor_id, f"{self.entity_type.label} created")

        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        logger.info(
            "%s created: %s",
            self.entity_type.label,
            entity.human_id,
            extra={"entity_type": self.entity_type.name, "human_id": entity.human_id, "user_id": actor_id},
        )
        return entity

    def transition(self, entity, status: Any, actor_id: Optional[int] = None, comments: Optional[str] = None) -> bool:
        """
        Move entity to status, appending one history entry.

        Returns False, appending nothing, when entity is already in that status.
        Does not commit.
        """
        new_status = self.coerce_status(status)
        if entity.status == new_status:
            return False

        old_status = entity.status
        entity.record_status(new_status.value, actor_id, comments)
        entity.status = new_status
        if self.entity_type.on_status_change:
            self.entity_type.on_status_change(entity, new_status, actor_id)

        logger.info(
            "%s %s: %s -> %s",
            self.entity_type.label,
            entity.human_id,
            old_status.value if old_status is not None else None,
            new_status.value,
            extra={"entity_type": self.entity_type.name, "human_id": entity.human_id, "user_id": actor_id},
        )
        return True

    def save(self, entity):
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def update(
        self,
        identifier: Any,
        changes: Mapping[str, Any],
        actor_id: Optional[int] = None,
        status_comment: Optional[str] = None,
    ):
        entity = self.get(identifier)
        if entity is None:
            return None

        for key, value in self.writable(changes).items():
            setattr(entity, key, value)
        if changes.get("status") is not None:
            self.transition(entity, changes["status"], actor_id, status_comment or "Status updated")
        return self.save(entity)

    def change_status(
        self,
        identifier: Any,
        status: Any,
        actor_id: Optional[int] = None,
        comments: Optional[str] = None,
        extra: Optional[Mapping[str, Any]] = None,
    ):
        entity = self.get(identifier)
        if entity is None:
            return None

        for key, value in self.writable(extra or {}).items():
            setattr(entity, key, value)
        self.transition(entity, status, actor_id, comments or "Status updated")
        return self.save(entity)

    def assign(
        self,
        identifier: Any,
        assigned_to_id: Optional[int],
        actor_id: Optional[int] = None,
        notes: Optional[str] = None,
        extra: Optional[Mapping[str, Any]] = None,
    ):
        entity = self.get(identifier)
        if entity is None:
            return None

        entity.assigned_to_id = self.require_user("assigned_to", assigned_to_id)
        entity.assigned_at = datetime.utcnow()
        if notes is not None:
            entity.assignment_notes = notes
        for key, value in self.writable(extra or {}).items():
            setattr(entity, key, value)
        if self.entity_type.assign_status is not None:
            self.transition(entity, self.entity_type.assign_status, actor_id, notes or "Assigned")
        return self.save(entity)

    def add_comment(self, identifier: Any, author_id: Optional[int], text: str):
        entity = self.get(identifier)
        if entity is None:
            return None

        entity.add_comment(author_id, text)
        self.save(entity)
        return entity.comments

    def delete(self, identifier: Any, actor_id: Optional[int] = None):
        """Soft close: move to the type's closed status. Nothing is removed."""
        entity = self.get(identifier)
        if entity is None:
            return None

        self.transition(entity, self.entity_type.closed_status, actor_id, f"{self.entity_type.label} closed")
        return self.save(entity)

    # Statistics

    def _group_counts(self, query, field_name: str) -> Dict[str, int]:
        column = getattr(self.model, field_name)
        rows = query.with_entities(column, func.count(self.model.id)).group_by(column).all()
        counts = {}
        for value, count in rows:
            key = "UNSPECIFIED" if value is None else getattr(value, "value", value)
            counts[str(key)] = count
        return counts

    def stats(self, filters: Mapping[str, Any]) -> Dict[str, Any]:
        query = self.filtered_query(filters)
        total = query.count()
        summary: Dict[str, Any] = {"total": total, "by_status": self._group_counts(query, "status")}
        for field_name in self.entity_type.group_by_fields:
            summary[f"by_{field_name}"] = self._group_counts(query, field_name)
        if self.entity_type.pending_statuses:
            summary["pending"] = query.filter(self.model.status.in_(self.entity_type.pending_statuses)).count()
        for field_name in self.entity_type.sum_fields:
            column = getattr(self.model, field_name)
            summary[f"total_{field_name}"] = query.with_entities(func.coalesce(func.sum(column), 0)).scalar() or 0
        if self.entity_type.extra_stats:
            summary.update(self.entity_type.extra_stats(query, total))
        return summary
