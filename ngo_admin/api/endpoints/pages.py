"""
Page snapshot API Routes

One call that returns what an admin page needs on first load: its
section settings and every record of the page's primary entity.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ngo_admin.core.exceptions import SectionNotFoundError
from ngo_admin.db.database import get_db
from ngo_admin.registry import PAGE_ENTITIES, get_entity
from ngo_admin.schemas.common import StandardAPIResponse, create_success_response
from ngo_admin.services.resource import CrudResource
from ngo_admin.services.section_settings import SectionSettingsService

router = APIRouter()


@router.get("/{page}", response_model=StandardAPIResponse)
async def get_page_snapshot(page: str, db: AsyncSession = Depends(get_db)):
    if page not in PAGE_ENTITIES:
        raise SectionNotFoundError(page)

    config = get_entity(PAGE_ENTITIES[page])
    resource = CrudResource(config, db)
    records = await resource.list_all()
    section_settings = await SectionSettingsService(db).get(page)

    return create_success_response(
        {
            "page": page,
            "entity": config.name,
            "section_settings": section_settings,
            "items": resource.serialize_many(records),
        },
        f"{page} page retrieved"
    )
