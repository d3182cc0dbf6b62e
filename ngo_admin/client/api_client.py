"""
Async HTTP client for the admin API

Wraps ``httpx.AsyncClient`` with one method per server operation. Error
bodies are turned back into the matching ``AdminError`` subclass; network
failures and 5xx responses raise ``RemoteSyncError``.
"""

import mimetypes
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import httpx
import structlog

from ngo_admin.core.config import settings
from ngo_admin.core.exceptions import RemoteSyncError, error_from_envelope
from ngo_admin.registry import EntityConfig
from ngo_admin.services.image_upload import check_image

logger = structlog.get_logger()

EntityRef = Union[EntityConfig, str]

# Server-managed fields never sent back in a create or update body
READ_ONLY_FIELDS = ("id", "created_at", "updated_at", "subscribed_at")


def _entity_name(entity: EntityRef) -> str:
    return entity.name if isinstance(entity, EntityConfig) else entity


def writable(values: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if key not in READ_ONLY_FIELDS}


class AdminApiClient:
    """Client for the admin REST API"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or settings.ADMIN_API_URL).rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout or settings.ADMIN_API_TIMEOUT)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Perform one request; error responses raise the matching AdminError"""
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("remote_sync_failed", method=method, url=url, error=str(e))
            raise RemoteSyncError(f"Could not reach admin API: {e}") from e

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = {}
            message = body.get("message") or response.reason_phrase or "Request failed"
            details = body.get("details") or {}
            logger.warning(
                "remote_request_rejected",
                method=method,
                url=url,
                status_code=response.status_code,
                error_type=body.get("error_type"),
            )
            if response.status_code >= 500:
                raise RemoteSyncError(message, status_code=response.status_code, details=details)
            raise error_from_envelope(body.get("error_type", ""), message, response.status_code, details)

        return response

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        response = await self._send(method, path, **kwargs)
        try:
            return response.json().get("data")
        except ValueError:
            raise RemoteSyncError(f"Admin API returned a non-JSON body for {method} {path}") from None

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    async def list_records(
        self,
        entity: EntityRef,
        search: Optional[str] = None,
        status: Optional[str] = None,
        category: Optional[str] = None,
        page: int = 1,
        limit: int = settings.DEFAULT_PAGE_SIZE,
        sort_by: str = "created_at",
        sort_order: str = "desc",
    ) -> Dict[str, Any]:
        """One page of records: ``{"items": [...], "pagination": {...}}``"""
        params = {"page": page, "limit": limit, "sort_by": sort_by, "sort_order": sort_order}
        for key, value in (("search", search), ("status", status), ("category", category)):
            if value:
                params[key] = value
        return await self._request("GET", f"{_entity_name(entity)}/", params=params)

    async def list_all(self, entity: EntityRef, **filters) -> List[Dict[str, Any]]:
        """Every record, fetched page by page"""
        items = []
        page = 1
        while True:
            data = await self.list_records(entity, page=page, limit=settings.MAX_PAGE_SIZE, **filters)
            items.extend(data["items"])
            if page >= data["pagination"]["pages"]:
                return items
            page += 1

    async def get_record(self, entity: EntityRef, record_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"{_entity_name(entity)}/{record_id}")

    async def create_record(self, entity: EntityRef, values: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", f"{_entity_name(entity)}/", json=writable(values))

    async def update_record(
        self,
        entity: EntityRef,
        record_id: str,
        changes: Dict[str, Any],
        partial: bool = True,
    ) -> Dict[str, Any]:
        method = "PATCH" if partial else "PUT"
        return await self._request(method, f"{_entity_name(entity)}/{record_id}", json=writable(changes))

    async def toggle_field(self, entity: EntityRef, record_id: str, field: str) -> Dict[str, Any]:
        return await self._request("PATCH", f"{_entity_name(entity)}/{record_id}/toggle/{field}")

    async def delete_record(self, entity: EntityRef, record_id: str, confirm: bool = False) -> None:
        await self._request(
            "DELETE",
            f"{_entity_name(entity)}/{record_id}",
            params={"confirm": "true" if confirm else "false"},
        )

    async def bulk_delete(self, entity: EntityRef, record_ids: List[str], confirm: bool = False) -> int:
        data = await self._request(
            "POST",
            f"{_entity_name(entity)}/bulk-delete",
            params={"confirm": "true" if confirm else "false"},
            json={"ids": [str(record_id) for record_id in record_ids]},
        )
        return data["deleted"]

    async def get_stats(self, entity: EntityRef, **filters) -> Dict[str, Any]:
        params = {key: value for key, value in filters.items() if value}
        return await self._request("GET", f"{_entity_name(entity)}/stats", params=params)

    async def export_csv(self, entity: EntityRef, **filters) -> str:
        """CSV text of every record matching the filters"""
        params = {key: value for key, value in filters.items() if value}
        response = await self._send("GET", f"{_entity_name(entity)}/export", params=params)
        return response.text

    # ------------------------------------------------------------------
    # Sections and pages
    # ------------------------------------------------------------------

    async def get_section_settings(self, page: str) -> Dict[str, Any]:
        data = await self._request("GET", f"sections/{page}")
        return data["settings"]

    async def update_section_settings(self, page: str, values: Dict[str, Any]) -> Dict[str, Any]:
        data = await self._request("PUT", f"sections/{page}", json={"settings": values})
        return data["settings"]

    async def reset_section_settings(self, page: str) -> Dict[str, Any]:
        data = await self._request("POST", f"sections/{page}/reset")
        return data["settings"]

    async def get_page(self, page: str) -> Dict[str, Any]:
        return await self._request("GET", f"pages/{page}")

    # ------------------------------------------------------------------
    # Uploads
    # ------------------------------------------------------------------

    async def upload_image(
        self,
        source: Union[str, Path, bytes],
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
        scope: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Upload an image file.

        The type and size are checked locally first, with the same limits
        the server applies, so an oversized or non-image file never
        reaches the network.

        Args:
            source: File path or raw bytes
            filename: Name sent to the server; defaults to the path's name
            content_type: MIME type; guessed from the filename when omitted
            scope: Optional page scope with its own size limit

        Returns:
            Dictionary with url, filename, size and content_type

        Raises:
            FileTypeError: not an allowed image type
            FileSizeError: larger than the scope's limit
        """
        if isinstance(source, bytes):
            filename = filename or "upload"
            size = len(source)
        else:
            path = Path(source)
            filename = filename or path.name
            size = path.stat().st_size

        content_type = content_type or mimetypes.guess_type(filename)[0]
        check_image(filename, content_type, size, scope)

        content = source if isinstance(source, bytes) else Path(source).read_bytes()
        data = {"scope": scope} if scope else None
        return await self._request(
            "POST",
            "uploads/image",
            files={"image": (filename, content, content_type)},
            data=data,
        )
