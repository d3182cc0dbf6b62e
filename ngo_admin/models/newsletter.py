"""
Newsletter subscriber and campaign models
"""

from sqlalchemy import Column, String, Integer, Float, JSON

from ngo_admin.db.database import Base
from ngo_admin.models.base import RecordMixin


class Subscriber(RecordMixin, Base):
    """A newsletter subscriber; status is one of active, unsubscribed, bounced"""
    __tablename__ = "newsletter_subscribers"

    email = Column(String(320), nullable=False, unique=True, index=True)
    name = Column(String(200), nullable=False, default="")
    status = Column(String(20), nullable=False, default="active")
    source = Column(String(100), nullable=False, default="")
    tags = Column(JSON, nullable=False, default=list)


class NewsletterCampaign(RecordMixin, Base):
    """A newsletter mailing; status is one of draft, scheduled, sent"""
    __tablename__ = "newsletter_campaigns"

    subject = Column(String(300), nullable=False)
    status = Column(String(20), nullable=False, default="draft")
    scheduled_at = Column(String(100), nullable=False, default="")
    sent_at = Column(String(100), nullable=False, default="")
    recipients = Column(Integer, nullable=False, default=0)
    open_rate = Column(Float, nullable=True)
    click_rate = Column(Float, nullable=True)
