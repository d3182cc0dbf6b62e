"""
Video lecture model for the resources section
"""

from sqlalchemy import Column, String, Text, Boolean, Integer, Float, JSON

from ngo_admin.db.database import Base
from ngo_admin.models.base import RecordMixin


class VideoLecture(RecordMixin, Base):
    """A recorded lecture; status is one of Published, Draft, Review"""
    __tablename__ = "video_lectures"

    title = Column(String(300), nullable=False)
    instructor = Column(String(200), nullable=False)
    category = Column(String(100), nullable=False)
    description = Column(Text, nullable=False, default="")
    duration = Column(String(50), nullable=False, default="")
    views = Column(Integer, nullable=False, default=0)
    rating = Column(Float, nullable=False, default=0.0)
    thumbnail = Column(String(500), nullable=False, default="")
    level = Column(String(20), nullable=False, default="Beginner")
    tags = Column(JSON, nullable=False, default=list)
    status = Column(String(20), nullable=False, default="Draft")

    is_new = Column(Boolean, nullable=False, default=False)
    featured = Column(Boolean, nullable=False, default=False)
