"""
Generic CRUD service over one registered entity type

One ``CrudResource`` instance serves one request: it wraps the request's
``AsyncSession`` and the entity's ``EntityConfig``. Every admin page uses
the same operations; only the config differs.
"""

import math
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union
from uuid import UUID

import structlog
from pydantic import BaseModel, ValidationError
from sqlalchemy import String, and_, asc, cast, desc, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ngo_admin.core.exceptions import (
    ConfirmationRequiredError,
    DuplicateRecordError,
    RecordNotFoundError,
    RecordValidationError,
)
from ngo_admin.registry import EntityConfig, is_all

logger = structlog.get_logger()


def validation_error_to_record_error(exc: ValidationError) -> RecordValidationError:
    """Collapse a pydantic ValidationError into the first failing field"""
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or None
    message = first.get("msg", "Invalid value")
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return RecordValidationError(message, field=field, value=first.get("input"))


def escape_like(term: str) -> str:
    """Make ``%`` and ``_`` in user input match literally"""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ListFilters(BaseModel):
    """Search and filter values shared by list and stats"""
    search: Optional[str] = None
    status: Optional[str] = None
    category: Optional[str] = None


class CrudResource:
    """CRUD operations for one entity type"""

    def __init__(self, config: EntityConfig, db: AsyncSession):
        self.config = config
        self.model = config.model
        self.db = db

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def serialize(self, record) -> Dict[str, Any]:
        """ORM record -> JSON-ready dict"""
        return self.config.response_schema.model_validate(record).model_dump(mode="json")

    def serialize_many(self, records: Iterable) -> List[Dict[str, Any]]:
        return [self.serialize(record) for record in records]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _filter_clauses(self, filters: Optional[ListFilters]) -> list:
        if filters is None:
            return []

        clauses = []
        if filters.search and filters.search.strip():
            pattern = f"%{escape_like(filters.search.strip())}%"
            list_fields = self.config.list_fields
            matches = []
            for name in self.config.search_fields:
                column = getattr(self.model, name)
                if name in list_fields:
                    # JSON arrays match when any element contains the term
                    matches.append(cast(column, String).ilike(pattern, escape="\\"))
                else:
                    matches.append(column.ilike(pattern, escape="\\"))
            clauses.append(or_(*matches))

        if self.config.status_field and not is_all(filters.status):
            clauses.append(getattr(self.model, self.config.status_field) == filters.status)

        if self.config.category_field and not is_all(filters.category):
            clauses.append(getattr(self.model, self.config.category_field) == filters.category)

        return clauses

    async def _count(self, clauses: list) -> int:
        query = select(func.count(self.model.id))
        if clauses:
            query = query.where(and_(*clauses))
        result = await self.db.execute(query)
        return result.scalar() or 0

    async def list(
        self,
        filters: Optional[ListFilters] = None,
        page: int = 1,
        limit: int = 20,
        sort_by: str = "created_at",
        sort_order: str = "desc",
    ) -> Tuple[List[Any], int]:
        """
        List records matching the filters.

        Args:
            filters: search / status / category values, ``all`` disables a filter
            page: page number starting from 1
            limit: items per page
            sort_by: one of the entity's sort fields
            sort_order: ``asc`` or ``desc``

        Returns:
            (records on the requested page, total matching records)
        """
        if sort_by not in self.config.sort_fields:
            raise RecordValidationError(
                f"Cannot sort {self.config.name} by '{sort_by}'",
                field="sort_by",
                value=sort_by,
            )
        if sort_order not in ("asc", "desc"):
            raise RecordValidationError("sort_order must be 'asc' or 'desc'", field="sort_order", value=sort_order)

        clauses = self._filter_clauses(filters)
        order = desc if sort_order == "desc" else asc

        query = select(self.model)
        if clauses:
            query = query.where(and_(*clauses))
        query = query.order_by(order(getattr(self.model, sort_by)), order(self.model.id))
        query = query.offset((page - 1) * limit).limit(limit)

        result = await self.db.execute(query)
        items = result.scalars().all()
        total = await self._count(clauses)
        return list(items), total

    async def list_all(self, filters: Optional[ListFilters] = None) -> List[Any]:
        """Every matching record, newest first"""
        query = select(self.model)
        clauses = self._filter_clauses(filters)
        if clauses:
            query = query.where(and_(*clauses))
        query = query.order_by(desc(self.model.created_at), desc(self.model.id))
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get(self, record_id: Union[UUID, str]):
        record = await self.db.get(self.model, self._coerce_id(record_id))
        if record is None:
            raise RecordNotFoundError(str(record_id), self.config.label)
        return record

    def _coerce_id(self, record_id: Union[UUID, str]) -> UUID:
        if isinstance(record_id, UUID):
            return record_id
        try:
            return UUID(str(record_id))
        except ValueError:
            raise RecordNotFoundError(str(record_id), self.config.label) from None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _validate(self, schema, data: Union[BaseModel, Dict[str, Any]], **dump_options) -> Dict[str, Any]:
        if isinstance(data, BaseModel):
            data = data.model_dump(**dump_options)
        try:
            return schema.model_validate(data).model_dump(**dump_options)
        except ValidationError as e:
            raise validation_error_to_record_error(e) from None

    async def _check_unique(self, values: Dict[str, Any], exclude_id: Optional[UUID] = None) -> None:
        for name in self.config.unique_fields:
            if name not in values:
                continue
            query = select(self.model.id).where(getattr(self.model, name) == values[name])
            if exclude_id is not None:
                query = query.where(self.model.id != exclude_id)
            result = await self.db.execute(query)
            if result.first() is not None:
                raise DuplicateRecordError(name, values[name], self.config.label)

    async def _commit(self, values: Dict[str, Any]) -> None:
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            if not self.config.unique_fields:
                raise RecordValidationError("Database integrity constraint violation") from None
            field = self.config.unique_fields[0]
            raise DuplicateRecordError(field, values.get(field), self.config.label) from None

    async def create(self, data: Union[BaseModel, Dict[str, Any]]):
        """Validate and insert a new record; the database assigns its id"""
        values = self._validate(self.config.create_schema, data)
        values.pop("id", None)
        await self._check_unique(values)

        record = self.model(**values)
        self.db.add(record)
        await self._commit(values)
        await self.db.refresh(record)

        logger.info("record_created", entity=self.config.name, id=str(record.id))
        return record

    async def update(self, record_id: Union[UUID, str], patch: Union[BaseModel, Dict[str, Any]]):
        """
        Replace the supplied fields of one record.

        Fields absent from the patch keep their value and the id never
        changes. The merged record must still satisfy the create rules,
        so required fields cannot be blanked and cross-field limits hold.
        """
        record = await self.get(record_id)
        changes = self._validate(self.config.update_schema, patch, exclude_unset=True)
        changes.pop("id", None)

        columns = self.model.__table__.columns
        changes = {
            name: value for name, value in changes.items()
            if value is not None or columns[name].nullable
        }

        merged = {name: getattr(record, name) for name in self.config.create_schema.model_fields}
        merged.update(changes)
        self._validate(self.config.create_schema, merged)
        await self._check_unique(changes, exclude_id=record.id)

        for name, value in changes.items():
            setattr(record, name, value)
        await self._commit(changes)
        await self.db.refresh(record)

        logger.info("record_updated", entity=self.config.name, id=str(record.id), fields=sorted(changes))
        return record

    async def delete(self, record_id: Union[UUID, str], confirm: bool = False) -> None:
        """Delete one record; refused unless the caller confirmed"""
        record = await self.get(record_id)
        if not confirm:
            raise ConfirmationRequiredError("delete", self.config.label)

        await self.db.delete(record)
        await self.db.commit()
        logger.info("record_deleted", entity=self.config.name, id=str(record_id))

    async def bulk_delete(self, record_ids: List[Union[UUID, str]], confirm: bool = False) -> int:
        """Delete several records in one transaction; any unknown id aborts the whole batch"""
        ids = []
        for record_id in record_ids:
            coerced = self._coerce_id(record_id)
            if coerced not in ids:
                ids.append(coerced)

        result = await self.db.execute(select(self.model).where(self.model.id.in_(ids)))
        records = list(result.scalars().all())
        found = {record.id for record in records}
        missing = [record_id for record_id in ids if record_id not in found]
        if missing:
            raise RecordNotFoundError(str(missing[0]), self.config.label)

        if not confirm:
            raise ConfirmationRequiredError("bulk delete", self.config.label)

        for record in records:
            await self.db.delete(record)
        await self.db.commit()

        logger.info("records_bulk_deleted", entity=self.config.name, count=len(records))
        return len(records)

    async def toggle(self, record_id: Union[UUID, str], field: str):
        """Flip one of the entity's boolean flags"""
        if field not in self.config.toggle_fields:
            raise RecordValidationError(
                f"Field '{field}' cannot be toggled on {self.config.name}",
                field=field,
            )

        record = await self.get(record_id)
        setattr(record, field, not bool(getattr(record, field)))
        await self.db.commit()
        await self.db.refresh(record)

        logger.info("record_toggled", entity=self.config.name, id=str(record.id), field=field,
                    value=getattr(record, field))
        return record

    # ------------------------------------------------------------------
    # Stats
    # ------------------------------------------------------------------

    async def stats(self, filters: Optional[ListFilters] = None) -> Dict[str, Any]:
        """Numbers for the page's stats panel"""
        total_count = await self._count([])
        filtered_count = await self._count(self._filter_clauses(filters))

        if self.config.active_field:
            active_column = getattr(self.model, self.config.active_field)
            active_count = await self._count([active_column == self.config.active_value])
        else:
            active_count = total_count

        sums = {}
        for name in self.config.sum_fields:
            result = await self.db.execute(select(func.coalesce(func.sum(getattr(self.model, name)), 0)))
            sums[name] = float(result.scalar() or 0)

        by_status = await self._group_counts(self.config.status_field)
        by_category = await self._group_counts(self.config.category_field)

        return {
            "total_count": total_count,
            "active_count": active_count,
            "filtered_count": filtered_count,
            "active_percentage": round(active_count / total_count * 100, 1) if total_count else 0.0,
            "sums": sums,
            "by_status": by_status,
            "by_category": by_category,
        }

    async def _group_counts(self, field: Optional[str]) -> Dict[str, int]:
        if not field:
            return {}
        column = getattr(self.model, field)
        result = await self.db.execute(select(column, func.count(self.model.id)).group_by(column))
        return {str(value): count for value, count in result.all()}


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0
