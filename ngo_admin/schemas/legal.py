"""
Pydantic schemas for legal-aid cases and laws
"""

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from .common import RecordResponse, require_text, optional_text, split_list

CaseStatus = Literal["pending", "active", "closed", "archived"]


class LegalCaseCreate(BaseModel):
    """Schema for creating a tracked case"""
    case_number: str = Field(..., min_length=1, max_length=100, description="Court reference, e.g. 'CC/123/2024'")
    title: str = Field(..., min_length=1, max_length=300)
    court: str = Field(..., min_length=1, max_length=200)
    status: CaseStatus = "pending"
    petitioner: str = Field("", max_length=200)
    respondent: str = Field("", max_length=200)
    judge: str = Field("", max_length=200)
    urgent: bool = False

    @field_validator('title', 'court')
    @classmethod
    def validate_required_text(cls, v, info):
        return require_text(v, info.field_name.capitalize())

    @field_validator('case_number')
    @classmethod
    def validate_case_number(cls, v):
        return require_text(v, "Case number").upper()

    @field_validator('petitioner', 'respondent', 'judge')
    @classmethod
    def validate_parties(cls, v):
        return optional_text(v)


class LegalCaseUpdate(BaseModel):
    case_number: Optional[str] = Field(None, min_length=1, max_length=100)
    title: Optional[str] = Field(None, min_length=1, max_length=300)
    court: Optional[str] = Field(None, min_length=1, max_length=200)
    status: Optional[CaseStatus] = None
    petitioner: Optional[str] = Field(None, max_length=200)
    respondent: Optional[str] = Field(None, max_length=200)
    judge: Optional[str] = Field(None, max_length=200)
    urgent: Optional[bool] = None

    @field_validator('title', 'court')
    @classmethod
    def validate_required_text(cls, v, info):
        return require_text(v, info.field_name.capitalize())

    @field_validator('case_number')
    @classmethod
    def validate_case_number(cls, v):
        v = require_text(v, "Case number")
        return v.upper() if v else v


class LegalCaseResponse(RecordResponse):
    case_number: str
    title: str
    court: str
    status: str = "pending"
    petitioner: str = ""
    respondent: str = ""
    judge: str = ""
    urgent: bool = False


class LawCreate(BaseModel):
    """Schema for adding a law to the lookup catalogue"""
    title: str = Field(..., min_length=1, max_length=300)
    act: str = Field(..., min_length=1, max_length=300)
    sections: Union[List[str], str] = Field(default_factory=list)
    keywords: Union[List[str], str] = Field(default_factory=list)
    summary: str = Field(..., min_length=1)
    full_text: str = ""
    verified: bool = False

    @field_validator('title', 'act', 'summary')
    @classmethod
    def validate_required_text(cls, v, info):
        return require_text(v, info.field_name.capitalize())

    @field_validator('sections', 'keywords')
    @classmethod
    def validate_lists(cls, v):
        return split_list(v)


class LawUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=300)
    act: Optional[str] = Field(None, min_length=1, max_length=300)
    sections: Optional[Union[List[str], str]] = None
    keywords: Optional[Union[List[str], str]] = None
    summary: Optional[str] = Field(None, min_length=1)
    full_text: Optional[str] = None
    verified: Optional[bool] = None

    @field_validator('title', 'act', 'summary')
    @classmethod
    def validate_required_text(cls, v, info):
        return require_text(v, info.field_name.capitalize())

    @field_validator('sections', 'keywords')
    @classmethod
    def validate_lists(cls, v):
        return split_list(v)


class LawResponse(RecordResponse):
    title: str
    act: str
    sections: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)
    summary: str
    full_text: str = ""
    verified: bool = False
