from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .common import RecordResponse, require_text, optional_text, check_image_url


class TestimonialCreate(BaseModel):
    quote: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    role: str = Field("", max_length=200, description="e.g. 'Monthly Donor since 2020'")
    image: str = Field("", max_length=500)
    rating: int = Field(5, ge=1, le=5)
    display_order: int = Field(0, ge=0)
    is_active: bool = True
    featured: bool = False
    verified: bool = False

    @field_validator('quote', 'name')
    @classmethod
    def validate_required_text(cls, v, info):
        return require_text(v, info.field_name.capitalize())

    @field_validator('role')
    @classmethod
    def validate_role(cls, v):
        return optional_text(v)

    @field_validator('image')
    @classmethod
    def validate_image(cls, v):
        return check_image_url(v)


class TestimonialUpdate(BaseModel):
    quote: Optional[str] = Field(None, min_length=1)
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    role: Optional[str] = Field(None, max_length=200)
    image: Optional[str] = Field(None, max_length=500)
    rating: Optional[int] = Field(None, ge=1, le=5)
    display_order: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None
    featured: Optional[bool] = None
    verified: Optional[bool] = None

    @field_validator('quote', 'name')
    @classmethod
    def validate_required_text(cls, v, info):
        return require_text(v, info.field_name.capitalize())

    @field_validator('image')
    @classmethod
    def validate_image(cls, v):
        return check_image_url(v)


class TestimonialResponse(RecordResponse):
    quote: str
    name: str
    role: str = ""
    image: str = ""
    rating: int = 5
    display_order: int = 0
    is_active: bool = True
    featured: bool = False
    verified: bool = False
