"""
Pydantic schemas for event registrations
"""

from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from .common import RecordResponse, require_text, optional_text

RegistrationStatus = Literal["confirmed", "pending", "cancelled"]
PaymentStatus = Literal["paid", "pending", "free"]


class EventRegistrationCreate(BaseModel):
    """Schema for recording a registration"""
    event_id: Optional[UUID] = None
    event_title: str = Field(..., min_length=1, max_length=300)
    event_date: str = Field("", max_length=100)
    event_location: str = Field("", max_length=300)
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: str = Field("", max_length=50)
    participants: int = Field(1, ge=1, le=100)
    special_needs: str = ""
    dietary_restrictions: str = ""
    status: RegistrationStatus = "pending"
    payment_status: PaymentStatus = "free"
    amount: float = Field(0.0, ge=0)

    @field_validator('event_title', 'name')
    @classmethod
    def validate_required_text(cls, v, info):
        return require_text(v, info.field_name.replace('_', ' ').capitalize())

    @field_validator('event_date', 'event_location', 'phone', 'special_needs', 'dietary_restrictions')
    @classmethod
    def validate_optional_text(cls, v):
        return optional_text(v)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()


class EventRegistrationUpdate(BaseModel):
    """Schema for updating a registration, usually just its status"""
    event_id: Optional[UUID] = None
    event_title: Optional[str] = Field(None, min_length=1, max_length=300)
    event_date: Optional[str] = Field(None, max_length=100)
    event_location: Optional[str] = Field(None, max_length=300)
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    participants: Optional[int] = Field(None, ge=1, le=100)
    special_needs: Optional[str] = None
    dietary_restrictions: Optional[str] = None
    status: Optional[RegistrationStatus] = None
    payment_status: Optional[PaymentStatus] = None
    amount: Optional[float] = Field(None, ge=0)

    @field_validator('event_title', 'name')
    @classmethod
    def validate_required_text(cls, v, info):
        return require_text(v, info.field_name.replace('_', ' ').capitalize())

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if v else v


class EventRegistrationResponse(RecordResponse):
    event_id: Optional[UUID] = None
    event_title: str
    event_date: str = ""
    event_location: str = ""
    name: str
    email: str
    phone: str = ""
    participants: int = 1
    special_needs: str = ""
    dietary_restrictions: str = ""
    status: str = "pending"
    payment_status: str = "free"
    amount: float = 0.0
