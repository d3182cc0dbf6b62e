"""
Pydantic schemas for newsletter subscribers and campaigns
"""

from datetime import datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, EmailStr, Field, field_validator

from .common import RecordResponse, require_text, split_list

SubscriberStatus = Literal["active", "unsubscribed", "bounced"]
CampaignStatus = Literal["draft", "scheduled", "sent"]


class SubscriberCreate(BaseModel):
    email: EmailStr
    name: str = Field("", max_length=200)
    status: SubscriberStatus = "active"
    source: str = Field("", max_length=100)
    tags: Union[List[str], str] = Field(default_factory=list)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v):
        return split_list(v)


class SubscriberUpdate(BaseModel):
    email: Optional[EmailStr] = None
    name: Optional[str] = Field(None, max_length=200)
    status: Optional[SubscriberStatus] = None
    source: Optional[str] = Field(None, max_length=100)
    tags: Optional[Union[List[str], str]] = None

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if v else v

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v):
        return split_list(v)


class SubscriberResponse(RecordResponse):
    email: str
    name: str = ""
    status: str = "active"
    source: str = ""
    tags: List[str] = Field(default_factory=list)
    subscribed_at: Optional[datetime] = Field(None, validation_alias="created_at")


class CampaignCreate(BaseModel):
    """Schema for creating a newsletter campaign"""
    subject: str = Field(..., min_length=1, max_length=300)
    status: CampaignStatus = "draft"
    scheduled_at: str = Field("", max_length=100)
    sent_at: str = Field("", max_length=100)
    recipients: int = Field(0, ge=0)
    open_rate: Optional[float] = Field(None, ge=0, le=100, description="Percentage of recipients who opened")
    click_rate: Optional[float] = Field(None, ge=0, le=100, description="Percentage of recipients who clicked")

    @field_validator('subject')
    @classmethod
    def validate_subject(cls, v):
        return require_text(v, "Subject")


class CampaignUpdate(BaseModel):
    subject: Optional[str] = Field(None, min_length=1, max_length=300)
    status: Optional[CampaignStatus] = None
    scheduled_at: Optional[str] = Field(None, max_length=100)
    sent_at: Optional[str] = Field(None, max_length=100)
    recipients: Optional[int] = Field(None, ge=0)
    open_rate: Optional[float] = Field(None, ge=0, le=100)
    click_rate: Optional[float] = Field(None, ge=0, le=100)

    @field_validator('subject')
    @classmethod
    def validate_subject(cls, v):
        return require_text(v, "Subject")


class CampaignResponse(RecordResponse):
    subject: str
    status: str = "draft"
    scheduled_at: str = ""
    sent_at: str = ""
    recipients: int = 0
    open_rate: Optional[float] = None
    click_rate: Optional[float] = None
