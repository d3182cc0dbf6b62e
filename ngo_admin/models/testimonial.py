from sqlalchemy import Column, String, Text, Boolean, Integer

from ngo_admin.db.database import Base
from ngo_admin.models.base import RecordMixin


class Testimonial(RecordMixin, Base):
    __tablename__ = "testimonials"

    quote = Column(Text, nullable=False)
    name = Column(String(200), nullable=False)
    role = Column(String(200), nullable=False, default="")
    image = Column(String(500), nullable=False, default="")
    rating = Column(Integer, nullable=False, default=5)
    display_order = Column(Integer, nullable=False, default=0)

    is_active = Column(Boolean, nullable=False, default=True)
    featured = Column(Boolean, nullable=False, default=False)
    verified = Column(Boolean, nullable=False, default=False)
