"""
Headless model of one admin list page

An ``EntityListPage`` holds the page's local collection, its filters and
paging, and the mutation handlers the page's buttons call. A UI layer
renders ``page_items`` and the stats panel and binds its controls to the
methods here; the rendered list is always a pure function of the
collection and the filters.

Sync modes:

- no ``api``: the page works on its local collection only; ``save_changes``
  marks the current state as saved.
- ``api`` with ``draft_mode=False`` (default): optimistic updates. The local
  collection changes first, the server call is awaited, and a failure rolls
  the local change back before re-raising.
- ``api`` with ``draft_mode=True``: edits stay local until ``save_changes``
  pushes them to the server.
"""

import copy
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Union
from uuid import uuid4

import structlog
from pydantic import ValidationError

from ngo_admin.client.api_client import AdminApiClient, writable
from ngo_admin.client.stats import PageStats, compute_stats
from ngo_admin.core.config import settings
from ngo_admin.core.exceptions import AdminError, RecordNotFoundError, RecordValidationError, RemoteSyncError
from ngo_admin.registry import EntityConfig, get_entity, is_all
from ngo_admin.schemas.common import split_list
from ngo_admin.services.csv_export import records_to_csv
from ngo_admin.services.resource import validation_error_to_record_error

logger = structlog.get_logger()

ConfirmCallback = Callable[[str], bool]


@dataclass
class PageFilters:
    search: str = ""
    status: str = "all"
    category: str = "all"


def matches_filters(config: EntityConfig, record: Dict[str, Any], filters: PageFilters) -> bool:
    """Same rules as the server: substring search, exact status and category, 'all' disables"""
    term = (filters.search or "").strip().lower()
    if term:
        found = False
        for name in config.search_fields:
            value = record.get(name)
            if isinstance(value, list):
                found = any(term in str(item).lower() for item in value)
            else:
                found = term in str(value or "").lower()
            if found:
                break
        if not found:
            return False

    if config.status_field and not is_all(filters.status):
        if record.get(config.status_field) != filters.status:
            return False

    if config.category_field and not is_all(filters.category):
        if record.get(config.category_field) != filters.category:
            return False

    return True


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def missing_required(config: EntityConfig, values: Dict[str, Any]) -> List[str]:
    return [name for name in config.required_fields if is_blank(values.get(name))]


def clean_values(config: EntityConfig, values: Dict[str, Any]) -> Dict[str, Any]:
    """Strip strings and split comma separated list fields"""
    list_fields = config.list_fields
    cleaned = {}
    for name, value in values.items():
        if name in list_fields and isinstance(value, str):
            value = split_list(value)
        elif isinstance(value, str):
            value = value.strip()
        cleaned[name] = value
    return cleaned


def _always_confirm(message: str) -> bool:
    return True


class EntityListPage:
    """Local state and mutation handlers of one admin page"""

    def __init__(
        self,
        config: Union[EntityConfig, str],
        api: Optional[AdminApiClient] = None,
        confirm: Optional[ConfirmCallback] = None,
        seed: Optional[List[Dict[str, Any]]] = None,
        draft_mode: bool = False,
        page_size: Optional[int] = None,
    ):
        self.config = get_entity(config) if isinstance(config, str) else config
        self.api = api
        self.confirm = confirm or _always_confirm
        self.draft_mode = draft_mode

        self.collection: List[Dict[str, Any]] = [dict(record) for record in (seed or [])]
        self._saved: List[Dict[str, Any]] = copy.deepcopy(self.collection)

        self.filters = PageFilters()
        self.page = 1
        self.page_size = page_size or settings.DEFAULT_PAGE_SIZE
        self.sort_by = "created_at"
        self.sort_order = "desc"

    # ------------------------------------------------------------------
    # Derived view
    # ------------------------------------------------------------------

    @property
    def syncs_immediately(self) -> bool:
        return self.api is not None and not self.draft_mode

    @property
    def ids(self) -> List[str]:
        return [record["id"] for record in self.collection]

    @property
    def visible(self) -> List[Dict[str, Any]]:
        """Collection filtered by the current filters, then sorted"""
        matching = [record for record in self.collection if matches_filters(self.config, record, self.filters)]

        def sort_key(record):
            value = record.get(self.sort_by)
            if isinstance(value, str):
                value = value.casefold()
            return (value is not None, value if value is not None else "")

        return sorted(matching, key=sort_key, reverse=self.sort_order == "desc")

    @property
    def total_pages(self) -> int:
        return math.ceil(len(self.visible) / self.page_size)

    @property
    def page_items(self) -> List[Dict[str, Any]]:
        start = (self.page - 1) * self.page_size
        return self.visible[start:start + self.page_size]

    @property
    def is_empty(self) -> bool:
        return not self.visible

    @property
    def stats(self) -> PageStats:
        return compute_stats(self.config, self.collection, self.visible)

    @property
    def has_changes(self) -> bool:
        return self.collection != self._saved

    def set_filters(self, search: Optional[str] = None, status: Optional[str] = None,
                    category: Optional[str] = None) -> None:
        """Change any of the filters; paging restarts at the first page"""
        if search is not None:
            self.filters.search = search
        if status is not None:
            self.filters.status = status
        if category is not None:
            self.filters.category = category
        self.page = 1

    def set_sort(self, sort_by: str, sort_order: str = "desc") -> None:
        if sort_by not in self.config.sort_fields:
            raise RecordValidationError(f"Cannot sort {self.config.name} by '{sort_by}'", field="sort_by")
        self.sort_by = sort_by
        self.sort_order = sort_order

    def set_page(self, page: int) -> None:
        self.page = min(max(page, 1), max(self.total_pages, 1))

    def export_csv(self) -> str:
        """CSV of the filtered view, in display order"""
        if not self.config.export_columns:
            raise RecordValidationError(f"{self.config.label} records cannot be exported")
        return records_to_csv(self.config.export_columns, self.visible)

    def find(self, record_id: str) -> Dict[str, Any]:
        return self.collection[self._index_of(record_id)]

    def _index_of(self, record_id: str) -> int:
        for index, record in enumerate(self.collection):
            if str(record["id"]) == str(record_id):
                return index
        raise RecordNotFoundError(record_id, self.config.label)

    def _provisional_id(self) -> str:
        existing = set(str(record_id) for record_id in self.ids)
        record_id = str(uuid4())
        while record_id in existing:
            record_id = str(uuid4())
        return record_id

    def _validate(self, values: Dict[str, Any]) -> Dict[str, Any]:
        try:
            return self.config.create_schema.model_validate(writable(values)).model_dump(mode="json")
        except ValidationError as e:
            raise validation_error_to_record_error(e) from None

    def _mark_saved(self, record_id: str, record: Optional[Dict[str, Any]]) -> None:
        """Mirror one synced change into the saved snapshot, keeping its position"""
        for index, saved in enumerate(self._saved):
            if str(saved["id"]) == str(record_id):
                if record is None:
                    del self._saved[index]
                else:
                    self._saved[index] = copy.deepcopy(record)
                return
        if record is not None:
            self._saved.append(copy.deepcopy(record))

    def _replace(self, record_id: str, record: Dict[str, Any]) -> None:
        self.collection[self._index_of(record_id)] = record

    # ------------------------------------------------------------------
    # Mutation handlers
    # ------------------------------------------------------------------

    async def create(self, draft: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Add a record from a form draft.

        Returns None and leaves the collection unchanged when a required
        field is empty. Otherwise the record is appended and returned.
        """
        values = clean_values(self.config, {**self.config.form_defaults(), **writable(draft)})
        missing = missing_required(self.config, values)
        if missing:
            logger.info("create_rejected", entity=self.config.name, missing=missing)
            return None

        record = self._validate(values)
        record["id"] = self._provisional_id()
        record["created_at"] = datetime.now(timezone.utc).isoformat()
        self.collection.append(record)

        if self.syncs_immediately:
            try:
                saved = await self.api.create_record(self.config, record)
            except AdminError as e:
                self.collection.remove(record)
                logger.warning("create_sync_failed", entity=self.config.name, error=str(e))
                raise
            self._replace(record["id"], saved)
            self._mark_saved(saved["id"], saved)
            record = saved

        logger.info("record_created", entity=self.config.name, id=str(record["id"]))
        return record

    async def update(self, record_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        """
        Replace the supplied fields of one record, keeping its id.

        Raises RecordNotFoundError for an unknown id; every other record
        is left untouched.
        """
        index = self._index_of(record_id)
        current = self.collection[index]

        changes = clean_values(self.config, writable(patch))
        changes = {name: value for name, value in changes.items() if current.get(name) != value}
        updated = {**current, **changes, "id": current["id"]}

        missing = missing_required(self.config, updated)
        if missing:
            raise RecordValidationError(f"{missing[0].replace('_', ' ').capitalize()} cannot be empty",
                                        field=missing[0])
        self._validate(updated)

        self.collection[index] = updated
        if self.syncs_immediately and changes:
            try:
                saved = await self.api.update_record(self.config, current["id"], changes)
            except AdminError as e:
                self.collection[index] = current
                logger.warning("update_sync_failed", entity=self.config.name, id=str(record_id), error=str(e))
                raise
            self.collection[index] = saved
            self._mark_saved(saved["id"], saved)
            updated = saved

        logger.info("record_updated", entity=self.config.name, id=str(record_id), fields=sorted(changes))
        return updated

    async def remove(self, record_id: str) -> bool:
        """
        Delete a record after the confirm callback agrees.

        A dismissed prompt leaves the collection unchanged and returns False.
        """
        index = self._index_of(record_id)
        record = self.collection[index]

        if not self.confirm(f"Are you sure you want to delete this {self.config.label.lower()}?"):
            logger.info("delete_cancelled", entity=self.config.name, id=str(record_id))
            return False

        del self.collection[index]
        if self.syncs_immediately:
            try:
                await self.api.delete_record(self.config, record["id"], confirm=True)
            except AdminError as e:
                self.collection.insert(index, record)
                logger.warning("delete_sync_failed", entity=self.config.name, id=str(record_id), error=str(e))
                raise
            self._mark_saved(record["id"], None)

        self.set_page(self.page)
        logger.info("record_deleted", entity=self.config.name, id=str(record_id))
        return True

    async def toggle_field(self, record_id: str, field: str) -> Dict[str, Any]:
        """Flip one of the entity's boolean flags"""
        if field not in self.config.toggle_fields:
            raise RecordValidationError(f"Field '{field}' cannot be toggled on {self.config.name}", field=field)

        index = self._index_of(record_id)
        current = self.collection[index]
        updated = {**current, field: not bool(current.get(field))}
        self.collection[index] = updated

        if self.syncs_immediately:
            try:
                saved = await self.api.toggle_field(self.config, current["id"], field)
            except AdminError as e:
                self.collection[index] = current
                logger.warning("toggle_sync_failed", entity=self.config.name, id=str(record_id), error=str(e))
                raise
            self.collection[index] = saved
            self._mark_saved(saved["id"], saved)
            updated = saved

        return updated

    # ------------------------------------------------------------------
    # Draft handling and sync
    # ------------------------------------------------------------------

    async def save_changes(self) -> bool:
        """
        Make the current collection the saved state.

        In draft mode with an api, pending deletes, creates and updates are
        pushed to the server first and new records take their server ids.
        Returns False when there was nothing to save.
        """
        if not self.has_changes:
            return False

        if self.api is not None and self.draft_mode:
            try:
                await self._push_drafts()
            except AdminError as e:
                logger.warning("save_sync_failed", entity=self.config.name, error=str(e))
                raise

        self._saved = copy.deepcopy(self.collection)
        logger.info("page_changes_saved", entity=self.config.name, count=len(self.collection))
        return True

    async def _push_drafts(self) -> None:
        """
        Push pending deletes, creates and updates one by one.

        Every call that succeeds is recorded in the saved snapshot right
        away, so after a failure the next ``save_changes`` resumes with
        what is still pending.
        """
        saved_by_id = {str(record["id"]): record for record in self._saved}
        current_ids = set(str(record_id) for record_id in self.ids)

        for record_id in list(saved_by_id):
            if record_id not in current_ids:
                await self.api.delete_record(self.config, record_id, confirm=True)
                self._mark_saved(record_id, None)

        for index, record in enumerate(list(self.collection)):
            saved = saved_by_id.get(str(record["id"]))
            if saved is None:
                pushed = await self.api.create_record(self.config, record)
            elif saved != record:
                changes = {name: value for name, value in writable(record).items() if saved.get(name) != value}
                pushed = await self.api.update_record(self.config, record["id"], changes)
            else:
                continue
            self.collection[index] = pushed
            self._mark_saved(pushed["id"], pushed)

    async def reset_changes(self) -> bool:
        """Restore the last saved state after the confirm callback agrees"""
        if not self.has_changes:
            return False
        if not self.confirm("Are you sure you want to discard all unsaved changes?"):
            return False

        self.collection = copy.deepcopy(self._saved)
        self.set_page(self.page)
        logger.info("page_changes_reset", entity=self.config.name)
        return True

    async def refresh(self) -> List[Dict[str, Any]]:
        """Replace the local collection with every record on the server"""
        if self.api is None:
            raise RemoteSyncError("This page has no API client to refresh from")

        try:
            records = await self.api.list_all(self.config)
        except AdminError as e:
            logger.warning("refresh_failed", entity=self.config.name, error=str(e))
            raise

        self.collection = records
        self._saved = copy.deepcopy(records)
        self.set_page(self.page)
        return self.collection
