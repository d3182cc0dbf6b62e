"""
Main API router that includes all endpoint routers
"""

from fastapi import APIRouter

from ngo_admin.api.endpoints import pages, sections, uploads
from ngo_admin.api.resource_router import build_crud_router
from ngo_admin.registry import ENTITIES

api_router = APIRouter()

# One uniform CRUD router per registered entity
for entity in ENTITIES:
    api_router.include_router(build_crud_router(entity), prefix=f"/{entity.name}", tags=[entity.label])

api_router.include_router(sections.router, prefix="/sections", tags=["Section Settings"])
api_router.include_router(pages.router, prefix="/pages", tags=["Pages"])
api_router.include_router(uploads.router, prefix="/uploads", tags=["Uploads"])
