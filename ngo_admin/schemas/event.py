"""
Pydantic schemas for events
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .common import RecordResponse, require_text, optional_text, check_image_url


class EventBase(BaseModel):
    """Base schema for Event"""
    title: str = Field(..., min_length=1, max_length=300, description="Event title")
    date: str = Field(..., min_length=1, max_length=100, description="Display date, e.g. 'April 15, 2025'")
    time: str = Field(..., min_length=1, max_length=100, description="Display time range, e.g. '7:00 PM - 10:00 PM'")
    location: str = Field(..., min_length=1, max_length=300, description="Venue")
    description: str = Field(..., min_length=1, description="Event description")
    image: str = Field("", max_length=500, description="Image URL or uploads path")
    category: str = Field("", max_length=100)
    registrations: int = Field(0, ge=0)
    max_capacity: int = Field(0, ge=0, description="0 means unlimited")
    featured: bool = False
    visible: bool = True

    @field_validator('title', 'date', 'time', 'location', 'description')
    @classmethod
    def validate_required_text(cls, v, info):
        return require_text(v, info.field_name.capitalize())

    @field_validator('category')
    @classmethod
    def validate_category(cls, v):
        return optional_text(v)

    @field_validator('image')
    @classmethod
    def validate_image(cls, v):
        return check_image_url(v)


class EventCreate(EventBase):
    """Schema for creating a new Event"""
    pass


class EventUpdate(BaseModel):
    """Schema for updating an Event, every field optional"""
    title: Optional[str] = Field(None, min_length=1, max_length=300)
    date: Optional[str] = Field(None, min_length=1, max_length=100)
    time: Optional[str] = Field(None, min_length=1, max_length=100)
    location: Optional[str] = Field(None, min_length=1, max_length=300)
    description: Optional[str] = Field(None, min_length=1)
    image: Optional[str] = Field(None, max_length=500)
    category: Optional[str] = Field(None, max_length=100)
    registrations: Optional[int] = Field(None, ge=0)
    max_capacity: Optional[int] = Field(None, ge=0)
    featured: Optional[bool] = None
    visible: Optional[bool] = None

    @field_validator('title', 'date', 'time', 'location', 'description')
    @classmethod
    def validate_required_text(cls, v, info):
        return require_text(v, info.field_name.capitalize())

    @field_validator('image')
    @classmethod
    def validate_image(cls, v):
        return check_image_url(v)


class EventResponse(RecordResponse):
    """Schema for Event response"""
    title: str
    date: str
    time: str
    location: str
    description: str
    image: str = ""
    category: str = ""
    registrations: int = 0
    max_capacity: int = 0
    featured: bool = False
    visible: bool = True
