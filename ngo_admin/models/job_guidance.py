"""
Job guidance models: freelance gigs and skill-training courses
"""

from sqlalchemy import Column, String, Text, Boolean, Integer, Float, JSON

from ngo_admin.db.database import Base
from ngo_admin.models.base import RecordMixin


class FreelanceGig(RecordMixin, Base):
    """A freelance work category recommended on the job guidance page"""
    __tablename__ = "freelance_gigs"

    title = Column(String(300), nullable=False)
    platform = Column(String(100), nullable=False, default="")
    category = Column(String(100), nullable=False)
    difficulty = Column(String(20), nullable=False, default="Easy")
    hourly_rate_min = Column(Integer, nullable=False, default=0)
    hourly_rate_max = Column(Integer, nullable=False, default=0)
    demand = Column(String(20), nullable=False, default="Medium")
    description = Column(Text, nullable=False)
    skills = Column(JSON, nullable=False, default=list)
    time_to_start = Column(String(100), nullable=False, default="")
    average_earnings = Column(String(100), nullable=False, default="")
    status = Column(String(20), nullable=False, default="Active")
    applications = Column(Integer, nullable=False, default=0)
    success_rate = Column(Integer, nullable=False, default=0)


class Course(RecordMixin, Base):
    """
    A skill-training course.

    Prices are whole rupees; original_price is the pre-discount price and
    may be empty.
    """
    __tablename__ = "courses"

    title = Column(String(300), nullable=False)
    category = Column(String(100), nullable=False)
    provider = Column(String(200), nullable=False, default="")
    duration = Column(String(100), nullable=False, default="")
    level = Column(String(20), nullable=False, default="Beginner")
    rating = Column(Float, nullable=False, default=0.0)
    students = Column(Integer, nullable=False, default=0)
    price = Column(Integer, nullable=False, default=0)
    original_price = Column(Integer, nullable=True)
    thumbnail = Column(String(500), nullable=False, default="")
    description = Column(Text, nullable=False)
    features = Column(JSON, nullable=False, default=list)
    syllabus = Column(JSON, nullable=False, default=list)
    certificate = Column(Boolean, nullable=False, default=False)
    job_assistance = Column(Boolean, nullable=False, default=False)
    is_free = Column(Boolean, nullable=False, default=False)
    is_popular = Column(Boolean, nullable=False, default=False)
    completion_rate = Column(Integer, nullable=True)
    status = Column(String(20), nullable=False, default="Draft")
