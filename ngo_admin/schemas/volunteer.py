"""
Pydantic schemas for volunteer opportunities
"""

from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from .common import RecordResponse, require_text, optional_text, split_list

LIST_FIELDS = ('requirements', 'skills_required', 'benefits')


class VolunteerOpportunityCreate(BaseModel):
    """Schema for creating a volunteer opportunity"""
    title: str = Field(..., min_length=1, max_length=300)
    category: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1)
    requirements: Union[List[str], str] = Field(default_factory=list)
    time_commitment: str = Field("", max_length=100, description="e.g. '4 hours/week'")
    location: str = Field("", max_length=300)
    spots_available: int = Field(0, ge=0)
    current_volunteers: int = Field(0, ge=0)
    skills_required: Union[List[str], str] = Field(default_factory=list)
    benefits: Union[List[str], str] = Field(default_factory=list)
    icon: str = Field("", max_length=50)
    color: str = Field("", max_length=50)
    visible: bool = True
    urgent: bool = False
    remote: bool = False

    @field_validator('title', 'category', 'description')
    @classmethod
    def validate_required_text(cls, v, info):
        return require_text(v, info.field_name.capitalize())

    @field_validator('time_commitment', 'location')
    @classmethod
    def validate_optional_text(cls, v):
        return optional_text(v)

    @field_validator(*LIST_FIELDS)
    @classmethod
    def validate_lists(cls, v):
        return split_list(v)


class VolunteerOpportunityUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=300)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1)
    requirements: Optional[Union[List[str], str]] = None
    time_commitment: Optional[str] = Field(None, max_length=100)
    location: Optional[str] = Field(None, max_length=300)
    spots_available: Optional[int] = Field(None, ge=0)
    current_volunteers: Optional[int] = Field(None, ge=0)
    skills_required: Optional[Union[List[str], str]] = None
    benefits: Optional[Union[List[str], str]] = None
    icon: Optional[str] = Field(None, max_length=50)
    color: Optional[str] = Field(None, max_length=50)
    visible: Optional[bool] = None
    urgent: Optional[bool] = None
    remote: Optional[bool] = None

    @field_validator('title', 'category', 'description')
    @classmethod
    def validate_required_text(cls, v, info):
        return require_text(v, info.field_name.capitalize())

    @field_validator(*LIST_FIELDS)
    @classmethod
    def validate_lists(cls, v):
        return split_list(v)


class VolunteerOpportunityResponse(RecordResponse):
    title: str
    category: str
    description: str
    requirements: List[str] = Field(default_factory=list)
    time_commitment: str = ""
    location: str = ""
    spots_available: int = 0
    current_volunteers: int = 0
    skills_required: List[str] = Field(default_factory=list)
    benefits: List[str] = Field(default_factory=list)
    icon: str = ""
    color: str = ""
    visible: bool = True
    urgent: bool = False
    remote: bool = False
