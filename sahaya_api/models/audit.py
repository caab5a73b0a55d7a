"""
Audit-trail building blocks shared by every entity type.

Each entity table composed with AuditableMixin gets two append-only child
tables of its own, `<table>_status_history` and `<table>_comments`, generated
when the model class is mapped.
"""
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import declared_attr, relationship

from sahaya_api.database import Base


class StatusHistoryEntryMixin:
    """
    One status transition.

    Invariants:
    - Once written, never edited or deleted
    - Ordered by insertion (id)
    """
    id = Column(Integer, primary_key=True, autoincrement=True)
    status = Column(String, nullable=False)
    changed_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    comments = Column(Text, nullable=True)

    @declared_attr
    def changed_by_id(cls):
        return Column(Integer, ForeignKey("users.id"), nullable=True)


class CommentEntryMixin:
    """A free-text note on an entity. Append-only, ordered by insertion."""
    id = Column(Integer, primary_key=True, autoincrement=True)
    text = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    @declared_attr
    def author_id(cls):
        return Column(Integer, ForeignKey("users.id"), nullable=True)


class AuditableMixin:
    """
    Status + history log + comment log + assignment, composed into every entity.

    Invariants:
    - human_id is unique within the table and never changes after creation
    - status_history and comments only ever grow
    - the concrete class declares its own `status` column with its own enum
    """
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    human_id = Column(String, nullable=False, unique=True, index=True)

    assigned_at = Column(DateTime, nullable=True)
    assignment_notes = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    @declared_attr
    def assigned_to_id(cls):
        return Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

    @declared_attr
    def created_by_id(cls):
        return Column(Integer, ForeignKey("users.id"), nullable=True)

    @declared_attr
    def assigned_to(cls):
        return relationship("User", foreign_keys=f"{cls.__name__}.assigned_to_id")

    @declared_attr
    def status_history(cls):
        cls.StatusHistoryEntry = type(
            f"{cls.__name__}StatusHistoryEntry",
            (StatusHistoryEntryMixin, Base),
            dict(
                __tablename__=f"{cls.__tablename__}_status_history",
                entity_id=Column(
                    Integer, ForeignKey(f"{cls.__tablename__}.id"), nullable=False, index=True
                ),
            ),
        )
        return relationship(
            cls.StatusHistoryEntry,
            order_by=cls.StatusHistoryEntry.id,
            cascade="all, delete-orphan",
        )

    @declared_attr
    def comments(cls):
        cls.CommentEntry = type(
            f"{cls.__name__}CommentEntry",
            (CommentEntryMixin, Base),
            dict(
                __tablename__=f"{cls.__tablename__}_comments",
                entity_id=Column(
                    Integer, ForeignKey(f"{cls.__tablename__}.id"), nullable=False, index=True
                ),
            ),
        )
        return relationship(
            cls.CommentEntry,
            order_by=cls.CommentEntry.id,
            cascade="all, delete-orphan",
        )

    def record_status(self, status: str, changed_by_id=None, comments=None):
        """Append one history entry. Does not touch `status` itself."""
        entry = self.StatusHistoryEntry(
            status=status,
            changed_by_id=changed_by_id,
            changed_at=datetime.utcnow(),
            comments=comments,
        )
        self.status_history.append(entry)
        return entry

    def add_comment(self, author_id, text: str):
        entry = self.CommentEntry(author_id=author_id, text=text, created_at=datetime.utcnow())
        self.comments.append(entry)
        return entry


class IdCounter(Base):
    """
    Sequence state for human-readable IDs, one row per (type, partition, year).

    Only ever advanced by IdGenerator's single-statement upsert.
    """
    __tablename__ = "id_counters"

    entity_type = Column(String, primary_key=True)
    partition_key = Column(String, primary_key=True, default="")
    year = Column(Integer, primary_key=True)
    value = Column(Integer, nullable=False, default=0)
