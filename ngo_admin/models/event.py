"""
Event Database Model

Events shown in the homepage events section and on the events page.

Database Schema:
- Primary key: UUID assigned on insert
- Display fields: title, date, time, location, description, image, category
- Counters: registrations and max capacity
- Flags: featured and visible

Dates and times are stored as the display strings admins type
("April 15, 2025", "7:00 PM - 10:00 PM"); multi-day ranges such as
"May 22-23, 2025" are common, so no date parsing is attempted.
"""

from sqlalchemy import Column, String, Text, Boolean, Integer

from ngo_admin.db.database import Base
from ngo_admin.models.base import RecordMixin


class Event(RecordMixin, Base):
    """
    SQLAlchemy model for an NGO event.

    Attributes:
        title (str): Event title, max 300 characters
        date (str): Display date, free text
        time (str): Display time range, free text
        location (str): Venue description
        description (str): Event description (unlimited text)
        image (str): Image URL or uploads path
        category (str): Optional grouping used by the category filter
        registrations (int): Number of registered attendees
        max_capacity (int): Venue capacity, 0 means unlimited
        featured (bool): Highlighted in the section slideshow
        visible (bool): Shown on the public site

    Example:
        event = Event(
            title="Annual Charity Gala",
            date="April 15, 2025",
            time="7:00 PM - 10:00 PM",
            location="Grand Ballroom, Metropolis Hotel",
            description="An elegant evening of fundraising",
        )
    """
    __tablename__ = "events"

    title = Column(String(300), nullable=False, doc="Event title")
    date = Column(String(100), nullable=False, doc="Display date string")
    time = Column(String(100), nullable=False, doc="Display time range")
    location = Column(String(300), nullable=False, doc="Venue description")
    description = Column(Text, nullable=False, doc="Event description")
    image = Column(String(500), nullable=False, default="", doc="Image URL or uploads path")
    category = Column(String(100), nullable=False, default="", doc="Event category")

    registrations = Column(Integer, nullable=False, default=0, doc="Registered attendees")
    max_capacity = Column(Integer, nullable=False, default=0, doc="Venue capacity")

    featured = Column(Boolean, nullable=False, default=False, doc="Highlighted in the slideshow")
    visible = Column(Boolean, nullable=False, default=True, doc="Shown on the public site")
