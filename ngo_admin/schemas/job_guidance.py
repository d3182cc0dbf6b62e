"""
Pydantic schemas for freelance gigs and skill-training courses
"""

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from .common import RecordResponse, require_text, optional_text, split_list, check_image_url

Difficulty = Literal["Easy", "Medium", "Hard"]
Demand = Literal["Low", "Medium", "High"]
GigStatus = Literal["Active", "Inactive"]
CourseLevel = Literal["Beginner", "Intermediate", "Advanced"]
CourseStatus = Literal["Active", "Draft", "Archived"]


class FreelanceGigCreate(BaseModel):
    """Schema for creating a freelance gig"""
    title: str = Field(..., min_length=1, max_length=300)
    platform: str = Field("", max_length=100)
    category: str = Field(..., min_length=1, max_length=100)
    difficulty: Difficulty = "Easy"
    hourly_rate_min: int = Field(0, ge=0, description="Minimum hourly rate in rupees")
    hourly_rate_max: int = Field(0, ge=0, description="Maximum hourly rate in rupees")
    demand: Demand = "Medium"
    description: str = Field(..., min_length=1)
    skills: Union[List[str], str] = Field(default_factory=list)
    time_to_start: str = Field("", max_length=100)
    average_earnings: str = Field("", max_length=100)
    status: GigStatus = "Active"
    applications: int = Field(0, ge=0)
    success_rate: int = Field(0, ge=0, le=100)

    @field_validator('title', 'category', 'description')
    @classmethod
    def validate_required_text(cls, v, info):
        return require_text(v, info.field_name.capitalize())

    @field_validator('platform', 'time_to_start', 'average_earnings')
    @classmethod
    def validate_optional_text(cls, v):
        return optional_text(v)

    @field_validator('skills')
    @classmethod
    def validate_skills(cls, v):
        return split_list(v)

    @model_validator(mode='after')
    def validate_rate_range(self):
        if self.hourly_rate_max and self.hourly_rate_min > self.hourly_rate_max:
            raise ValueError('Minimum hourly rate cannot exceed the maximum')
        return self


class FreelanceGigUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=300)
    platform: Optional[str] = Field(None, max_length=100)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    difficulty: Optional[Difficulty] = None
    hourly_rate_min: Optional[int] = Field(None, ge=0)
    hourly_rate_max: Optional[int] = Field(None, ge=0)
    demand: Optional[Demand] = None
    description: Optional[str] = Field(None, min_length=1)
    skills: Optional[Union[List[str], str]] = None
    time_to_start: Optional[str] = Field(None, max_length=100)
    average_earnings: Optional[str] = Field(None, max_length=100)
    status: Optional[GigStatus] = None
    applications: Optional[int] = Field(None, ge=0)
    success_rate: Optional[int] = Field(None, ge=0, le=100)

    @field_validator('title', 'category', 'description')
    @classmethod
    def validate_required_text(cls, v, info):
        return require_text(v, info.field_name.capitalize())

    @field_validator('skills')
    @classmethod
    def validate_skills(cls, v):
        return split_list(v)


class FreelanceGigResponse(RecordResponse):
    title: str
    platform: str = ""
    category: str
    difficulty: str = "Easy"
    hourly_rate_min: int = 0
    hourly_rate_max: int = 0
    demand: str = "Medium"
    description: str
    skills: List[str] = Field(default_factory=list)
    time_to_start: str = ""
    average_earnings: str = ""
    status: str = "Active"
    applications: int = 0
    success_rate: int = 0


class CourseCreate(BaseModel):
    """Schema for creating a skill-training course"""
    title: str = Field(..., min_length=1, max_length=300)
    category: str = Field(..., min_length=1, max_length=100)
    provider: str = Field("", max_length=200)
    duration: str = Field("", max_length=100)
    level: CourseLevel = "Beginner"
    rating: float = Field(0.0, ge=0, le=5)
    students: int = Field(0, ge=0)
    price: int = Field(0, ge=0, description="Price in rupees, 0 for free courses")
    original_price: Optional[int] = Field(None, ge=0)
    thumbnail: str = Field("", max_length=500)
    description: str = Field(..., min_length=1)
    features: Union[List[str], str] = Field(default_factory=list)
    syllabus: Union[List[str], str] = Field(default_factory=list)
    certificate: bool = False
    job_assistance: bool = False
    is_free: bool = False
    is_popular: bool = False
    completion_rate: Optional[int] = Field(None, ge=0, le=100)
    status: CourseStatus = "Draft"

    @field_validator('title', 'category', 'description')
    @classmethod
    def validate_required_text(cls, v, info):
        return require_text(v, info.field_name.capitalize())

    @field_validator('thumbnail')
    @classmethod
    def validate_thumbnail(cls, v):
        return check_image_url(v)

    @field_validator('features', 'syllabus')
    @classmethod
    def validate_lists(cls, v):
        return split_list(v)


class CourseUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=300)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    provider: Optional[str] = Field(None, max_length=200)
    duration: Optional[str] = Field(None, max_length=100)
    level: Optional[CourseLevel] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    students: Optional[int] = Field(None, ge=0)
    price: Optional[int] = Field(None, ge=0)
    original_price: Optional[int] = Field(None, ge=0)
    thumbnail: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = Field(None, min_length=1)
    features: Optional[Union[List[str], str]] = None
    syllabus: Optional[Union[List[str], str]] = None
    certificate: Optional[bool] = None
    job_assistance: Optional[bool] = None
    is_free: Optional[bool] = None
    is_popular: Optional[bool] = None
    completion_rate: Optional[int] = Field(None, ge=0, le=100)
    status: Optional[CourseStatus] = None

    @field_validator('title', 'category', 'description')
    @classmethod
    def validate_required_text(cls, v, info):
        return require_text(v, info.field_name.capitalize())

    @field_validator('thumbnail')
    @classmethod
    def validate_thumbnail(cls, v):
        return check_image_url(v)

    @field_validator('features', 'syllabus')
    @classmethod
    def validate_lists(cls, v):
        return split_list(v)


class CourseResponse(RecordResponse):
    title: str
    category: str
    provider: str = ""
    duration: str = ""
    level: str = "Beginner"
    rating: float = 0.0
    students: int = 0
    price: int = 0
    original_price: Optional[int] = None
    thumbnail: str = ""
    description: str
    features: List[str] = Field(default_factory=list)
    syllabus: List[str] = Field(default_factory=list)
    certificate: bool = False
    job_assistance: bool = False
    is_free: bool = False
    is_popular: bool = False
    completion_rate: Optional[int] = None
    status: str = "Draft"
