"""
Legal aid models: tracked court cases and the law lookup catalogue
"""

from sqlalchemy import Column, String, Text, Boolean, JSON

from ngo_admin.db.database import Base
from ngo_admin.models.base import RecordMixin


class LegalCase(RecordMixin, Base):
    """
    A legal-aid case followed by the case tracker.

    Attributes:
        case_number (str): Court reference such as "CC/123/2024", unique
        status (str): pending, active, closed or archived
        urgent (bool): Flagged for priority follow-up
    """
    __tablename__ = "legal_cases"

    case_number = Column(String(100), nullable=False, unique=True, index=True)
    title = Column(String(300), nullable=False)
    court = Column(String(200), nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    petitioner = Column(String(200), nullable=False, default="")
    respondent = Column(String(200), nullable=False, default="")
    judge = Column(String(200), nullable=False, default="")
    urgent = Column(Boolean, nullable=False, default=False)


class Law(RecordMixin, Base):
    """A law entry searchable by title, act, keywords and summary"""
    __tablename__ = "laws"

    title = Column(String(300), nullable=False)
    act = Column(String(300), nullable=False)
    sections = Column(JSON, nullable=False, default=list)
    keywords = Column(JSON, nullable=False, default=list)
    summary = Column(Text, nullable=False)
    full_text = Column(Text, nullable=False, default="")
    verified = Column(Boolean, nullable=False, default=False)
