"""
Event registration model

One row per sign-up submitted from the public event form. The event's
title, date and location are copied onto the registration so exports and
the admin list keep making sense after the event itself is edited or
removed.
"""

from sqlalchemy import Column, Float, ForeignKey, Integer, String, Text, Uuid

from ngo_admin.db.database import Base
from ngo_admin.models.base import RecordMixin


class EventRegistration(RecordMixin, Base):
    """
    A person (and party) registered for an event.

    Attributes:
        event_id (UUID): Registered event, cleared if the event is deleted
        event_title (str): Event title at registration time
        name, email, phone (str): Contact details
        participants (int): Party size, at least 1
        status (str): confirmed, pending or cancelled
        payment_status (str): paid, pending or free
        amount (float): Amount paid or due, 0 for free events
    """
    __tablename__ = "event_registrations"

    event_id = Column(Uuid(as_uuid=True), ForeignKey("events.id", ondelete="SET NULL"), nullable=True, index=True)
    event_title = Column(String(300), nullable=False)
    event_date = Column(String(100), nullable=False, default="")
    event_location = Column(String(300), nullable=False, default="")

    name = Column(String(200), nullable=False)
    email = Column(String(320), nullable=False, index=True)
    phone = Column(String(50), nullable=False, default="")
    participants = Column(Integer, nullable=False, default=1)
    special_needs = Column(Text, nullable=False, default="")
    dietary_restrictions = Column(Text, nullable=False, default="")

    status = Column(String(20), nullable=False, default="pending", index=True)
    payment_status = Column(String(20), nullable=False, default="free")
    amount = Column(Float, nullable=False, default=0.0)
