"""
Shared pydantic schemas and validators for admin records
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


def require_text(value: Optional[str], label: str = "Field") -> Optional[str]:
    """Strip a required string and reject empty or whitespace-only values"""
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError(f"{label} cannot be empty")
    return value


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip()


def split_list(value: Union[str, List[str], None]) -> Optional[List[str]]:
    """
    Normalize list fields.

    Form inputs send list fields as comma separated strings
    ("Communication, Organization"); API clients send arrays. Both end up
    as a list of stripped, non-empty strings.
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.split(",")
    return [str(item).strip() for item in value if str(item).strip()]


def check_image_url(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if value and not value.startswith(("http://", "https://", "/", "uploads/", "images/")):
        raise ValueError("Image URL must be a valid URL or path")
    return value


class RecordResponse(BaseModel):
    """Fields every record response carries"""
    id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PaginationMeta(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class RecordListData(BaseModel):
    """Paginated list payload"""
    items: List[Dict[str, Any]]
    pagination: PaginationMeta


class StatsData(BaseModel):
    """Numbers shown in an admin page's stats panel"""
    total_count: int
    active_count: int
    filtered_count: int
    active_percentage: float
    sums: Dict[str, float] = Field(default_factory=dict)
    by_status: Dict[str, int] = Field(default_factory=dict)
    by_category: Dict[str, int] = Field(default_factory=dict)


class BulkDeleteRequest(BaseModel):
    ids: List[UUID] = Field(..., min_length=1)


class StandardAPIResponse(BaseModel):
    """Standardized API response wrapper"""
    message: str
    data: Optional[Any] = None
    status: bool = True


def create_success_response(data: Any, message: str) -> StandardAPIResponse:
    """
    Create a standardized success response

    Args:
        data: Response data (list payload, single record or dict)
        message: Success message

    Returns:
        StandardAPIResponse with success status
    """
    return StandardAPIResponse(message=message, data=data, status=True)
