"""
Uniform REST routes for a registered entity type

Every entity gets the same endpoints:

- GET /: List records with search, status and category filters and pagination
- GET /stats: Stats panel numbers
- GET /export: CSV download, for entities with export columns
- POST /bulk-delete: Delete several records (confirm=true required)
- GET /{id}: Get one record
- POST /: Create a record
- PUT /{id}, PATCH /{id}: Update the supplied fields of a record
- PATCH /{id}/toggle/{field}: Flip a boolean flag
- DELETE /{id}: Delete a record (confirm=true required)
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ngo_admin.core.config import settings
from ngo_admin.db.database import get_db
from ngo_admin.registry import EntityConfig
from ngo_admin.schemas.common import (
    BulkDeleteRequest,
    PaginationMeta,
    RecordListData,
    StandardAPIResponse,
    StatsData,
    create_success_response,
)
from ngo_admin.services.csv_export import export_filename, records_to_csv
from ngo_admin.services.resource import CrudResource, ListFilters, page_count

logger = structlog.get_logger()


def build_crud_router(config: EntityConfig) -> APIRouter:
    """Create the router for one entity type"""
    router = APIRouter()
    create_schema = config.create_schema
    update_schema = config.update_schema
    plural = config.name.replace("-", " ")

    @router.get("/", response_model=StandardAPIResponse)
    async def list_records(
        search: Optional[str] = Query(None, description="Case-insensitive text search"),
        status_filter: Optional[str] = Query(None, alias="status", description="Exact status, 'all' for any"),
        category: Optional[str] = Query(None, description="Exact category, 'all' for any"),
        page: int = Query(1, ge=1, description="Page number"),
        limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Items per page"),
        sort_by: str = Query("created_at", description="Sort column"),
        sort_order: str = Query("desc", pattern="^(asc|desc)$"),
        db: AsyncSession = Depends(get_db)
    ):
        resource = CrudResource(config, db)
        filters = ListFilters(search=search, status=status_filter, category=category)
        items, total = await resource.list(filters, page=page, limit=limit, sort_by=sort_by, sort_order=sort_order)

        data = RecordListData(
            items=resource.serialize_many(items),
            pagination=PaginationMeta(page=page, limit=limit, total=total, pages=page_count(total, limit)),
        )
        return create_success_response(data, f"Retrieved {len(items)} {plural}")

    @router.get("/stats", response_model=StandardAPIResponse)
    async def record_stats(
        search: Optional[str] = Query(None),
        status_filter: Optional[str] = Query(None, alias="status"),
        category: Optional[str] = Query(None),
        db: AsyncSession = Depends(get_db)
    ):
        resource = CrudResource(config, db)
        stats = await resource.stats(ListFilters(search=search, status=status_filter, category=category))
        return create_success_response(StatsData(**stats), f"{config.label} stats retrieved")

    if config.export_columns:
        @router.get("/export", response_class=Response)
        async def export_records(
            search: Optional[str] = Query(None),
            status_filter: Optional[str] = Query(None, alias="status"),
            category: Optional[str] = Query(None),
            db: AsyncSession = Depends(get_db)
        ):
            """Download the filtered records as CSV"""
            resource = CrudResource(config, db)
            records = await resource.list_all(ListFilters(search=search, status=status_filter, category=category))
            content = records_to_csv(config.export_columns, resource.serialize_many(records))
            logger.info("records_exported", entity=config.name, count=len(records))
            return Response(
                content=content,
                media_type="text/csv",
                headers={"Content-Disposition": f'attachment; filename="{export_filename(config.name)}"'},
            )

    @router.post("/bulk-delete", response_model=StandardAPIResponse)
    async def bulk_delete_records(
        payload: BulkDeleteRequest,
        confirm: bool = Query(False, description="Must be true to delete"),
        db: AsyncSession = Depends(get_db)
    ):
        resource = CrudResource(config, db)
        deleted = await resource.bulk_delete(payload.ids, confirm=confirm)
        return create_success_response({"deleted": deleted}, f"Deleted {deleted} {plural}")

    @router.get("/{record_id}", response_model=StandardAPIResponse)
    async def get_record(record_id: str, db: AsyncSession = Depends(get_db)):
        resource = CrudResource(config, db)
        record = await resource.get(record_id)
        return create_success_response(resource.serialize(record), f"{config.label} retrieved")

    @router.post("/", response_model=StandardAPIResponse, status_code=status.HTTP_201_CREATED)
    async def create_record(payload: create_schema, db: AsyncSession = Depends(get_db)):
        resource = CrudResource(config, db)
        record = await resource.create(payload)
        return create_success_response(resource.serialize(record), f"{config.label} created successfully")

    async def update_record(record_id: str, payload: update_schema, db: AsyncSession = Depends(get_db)):
        resource = CrudResource(config, db)
        record = await resource.update(record_id, payload)
        return create_success_response(resource.serialize(record), f"{config.label} updated successfully")

    router.add_api_route("/{record_id}", update_record, methods=["PUT"], response_model=StandardAPIResponse,
                         name=f"update_{config.name}")
    router.add_api_route("/{record_id}", update_record, methods=["PATCH"], response_model=StandardAPIResponse,
                         name=f"patch_{config.name}")

    @router.patch("/{record_id}/toggle/{field}", response_model=StandardAPIResponse)
    async def toggle_record_field(record_id: str, field: str, db: AsyncSession = Depends(get_db)):
        resource = CrudResource(config, db)
        record = await resource.toggle(record_id, field)
        return create_success_response(resource.serialize(record), f"{config.label} {field} toggled")

    @router.delete("/{record_id}", response_model=StandardAPIResponse)
    async def delete_record(
        record_id: str,
        confirm: bool = Query(False, description="Must be true to delete"),
        db: AsyncSession = Depends(get_db)
    ):
        resource = CrudResource(config, db)
        await resource.delete(record_id, confirm=confirm)
        return create_success_response({"id": record_id}, f"{config.label} deleted successfully")

    return router
