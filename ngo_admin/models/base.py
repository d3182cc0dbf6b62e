"""
Shared columns for admin-managed records
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Column, DateTime, Uuid


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecordMixin:
    """
    Columns every admin record carries.

    Ids are generated by the persistence layer (UUID4), never by the
    client, so concurrent admin sessions cannot collide.
    """

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4,
                doc="Unique identifier assigned on insert")
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False,
                        doc="Timestamp of record creation")
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False,
                        doc="Timestamp of the last change")

    def __repr__(self):
        label = getattr(self, "title", None) or getattr(self, "name", None) or ""
        return f"<{self.__class__.__name__}(id={self.id}, '{str(label)[:50]}')>"
