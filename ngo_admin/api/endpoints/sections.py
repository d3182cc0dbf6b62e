"""
Section settings API Routes

Per-page display settings (titles, visibility, slideshow timing, ...).
Reads return the stored overrides merged over the page defaults.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ngo_admin.db.database import get_db
from ngo_admin.models.section_setting import DEFAULT_SECTION_SETTINGS
from ngo_admin.schemas.common import StandardAPIResponse, create_success_response
from ngo_admin.schemas.section import SectionSettingsResponse, SectionSettingsUpdate
from ngo_admin.services.section_settings import SectionSettingsService

router = APIRouter()


@router.get("/", response_model=StandardAPIResponse)
async def list_section_pages():
    """Pages that have section settings"""
    return create_success_response({"pages": sorted(DEFAULT_SECTION_SETTINGS)}, "Section pages retrieved")


@router.get("/{page}", response_model=StandardAPIResponse)
async def get_section_settings(page: str, db: AsyncSession = Depends(get_db)):
    settings = await SectionSettingsService(db).get(page)
    return create_success_response(
        SectionSettingsResponse(page=page, settings=settings),
        "Section settings retrieved"
    )


@router.put("/{page}", response_model=StandardAPIResponse)
async def update_section_settings(
    page: str,
    payload: SectionSettingsUpdate,
    db: AsyncSession = Depends(get_db)
):
    """
    Update section settings for a page.

    Only keys present in the body change. Unknown keys, values of the
    wrong type and values outside a setting's allowed choices are
    rejected with 400; an unknown page returns 404.
    """
    settings = await SectionSettingsService(db).update(page, payload.settings)
    return create_success_response(
        SectionSettingsResponse(page=page, settings=settings),
        "Section settings saved successfully"
    )


@router.post("/{page}/reset", response_model=StandardAPIResponse)
async def reset_section_settings(page: str, db: AsyncSession = Depends(get_db)):
    settings = await SectionSettingsService(db).reset(page)
    return create_success_response(
        SectionSettingsResponse(page=page, settings=settings),
        "Section settings reset to defaults"
    )
