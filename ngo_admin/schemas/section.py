"""
Pydantic schemas for per-page section settings
"""

from typing import Any, Dict

from pydantic import BaseModel, Field


class SectionSettingsUpdate(BaseModel):
    """Partial update; keys not sent keep their current value"""
    settings: Dict[str, Any] = Field(..., description="Setting name to new value")


class SectionSettingsResponse(BaseModel):
    page: str
    settings: Dict[str, Any]
