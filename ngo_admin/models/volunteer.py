"""
Volunteer Opportunity Database Model
"""

from sqlalchemy import Column, String, Text, Boolean, Integer, JSON

from ngo_admin.db.database import Base
from ngo_admin.models.base import RecordMixin


class VolunteerOpportunity(RecordMixin, Base):
    """
    A volunteer role listed on the homepage and volunteer page.

    List columns (requirements, skills_required, benefits) are stored as
    JSON arrays of strings.
    """
    __tablename__ = "volunteer_opportunities"

    title = Column(String(300), nullable=False)
    category = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(JSON, nullable=False, default=list)
    time_commitment = Column(String(100), nullable=False, default="")
    location = Column(String(300), nullable=False, default="")
    spots_available = Column(Integer, nullable=False, default=0)
    current_volunteers = Column(Integer, nullable=False, default=0)
    skills_required = Column(JSON, nullable=False, default=list)
    benefits = Column(JSON, nullable=False, default=list)
    icon = Column(String(50), nullable=False, default="")
    color = Column(String(50), nullable=False, default="")

    visible = Column(Boolean, nullable=False, default=True)
    urgent = Column(Boolean, nullable=False, default=False)
    remote = Column(Boolean, nullable=False, default=False)
