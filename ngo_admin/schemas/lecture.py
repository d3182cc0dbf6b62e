"""
Pydantic schemas for video lectures
"""

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from .common import RecordResponse, require_text, optional_text, split_list, check_image_url

LectureStatus = Literal["Published", "Draft", "Review"]
LectureLevel = Literal["Beginner", "Intermediate", "Advanced"]


class VideoLectureCreate(BaseModel):
    """Schema for creating a video lecture"""
    title: str = Field(..., min_length=1, max_length=300)
    instructor: str = Field(..., min_length=1, max_length=200)
    category: str = Field(..., min_length=1, max_length=100)
    description: str = ""
    duration: str = Field("", max_length=50, description="Display duration, e.g. '45:30'")
    views: int = Field(0, ge=0)
    rating: float = Field(0.0, ge=0, le=5)
    thumbnail: str = Field("", max_length=500)
    level: LectureLevel = "Beginner"
    tags: Union[List[str], str] = Field(default_factory=list)
    status: LectureStatus = "Draft"
    is_new: bool = False
    featured: bool = False

    @field_validator('title', 'instructor', 'category')
    @classmethod
    def validate_required_text(cls, v, info):
        return require_text(v, info.field_name.capitalize())

    @field_validator('description', 'duration')
    @classmethod
    def validate_optional_text(cls, v):
        return optional_text(v)

    @field_validator('thumbnail')
    @classmethod
    def validate_thumbnail(cls, v):
        return check_image_url(v)

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v):
        return split_list(v)


class VideoLectureUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=300)
    instructor: Optional[str] = Field(None, min_length=1, max_length=200)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    duration: Optional[str] = Field(None, max_length=50)
    views: Optional[int] = Field(None, ge=0)
    rating: Optional[float] = Field(None, ge=0, le=5)
    thumbnail: Optional[str] = Field(None, max_length=500)
    level: Optional[LectureLevel] = None
    tags: Optional[Union[List[str], str]] = None
    status: Optional[LectureStatus] = None
    is_new: Optional[bool] = None
    featured: Optional[bool] = None

    @field_validator('title', 'instructor', 'category')
    @classmethod
    def validate_required_text(cls, v, info):
        return require_text(v, info.field_name.capitalize())

    @field_validator('thumbnail')
    @classmethod
    def validate_thumbnail(cls, v):
        return check_image_url(v)

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v):
        return split_list(v)


class VideoLectureResponse(RecordResponse):
    title: str
    instructor: str
    category: str
    description: str = ""
    duration: str = ""
    views: int = 0
    rating: float = 0.0
    thumbnail: str = ""
    level: str = "Beginner"
    tags: List[str] = Field(default_factory=list)
    status: str = "Draft"
    is_new: bool = False
    featured: bool = False
