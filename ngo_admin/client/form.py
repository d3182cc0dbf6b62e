"""
Add/edit form modal state machine
"""

import copy
from enum import Enum
from typing import Any, Dict, List, Optional

from ngo_admin.client.api_client import READ_ONLY_FIELDS
from ngo_admin.client.page import EntityListPage, is_blank
from ngo_admin.core.exceptions import FormStateError
from ngo_admin.registry import EntityConfig
from ngo_admin.schemas.common import split_list


class FormMode(str, Enum):
    CLOSED = "closed"
    OPEN_NEW = "open_new"
    OPEN_EDIT = "open_edit"


class FormModal:
    """
    One add/edit modal per page.

    ``open_new`` seeds the draft from the entity's form defaults,
    ``open_edit`` copies the record being edited. Only one modal can be
    open at a time.
    """

    def __init__(self, config: EntityConfig):
        self.config = config
        self.mode = FormMode.CLOSED
        self.draft: Dict[str, Any] = {}
        self.editing_id: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.mode != FormMode.CLOSED

    def _ensure_closed(self) -> None:
        if self.is_open:
            raise FormStateError(f"The {self.config.label.lower()} form is already open")

    def open_new(self) -> Dict[str, Any]:
        self._ensure_closed()
        self.draft = self.config.form_defaults()
        self.editing_id = None
        self.mode = FormMode.OPEN_NEW
        return self.draft

    def open_edit(self, record: Dict[str, Any]) -> Dict[str, Any]:
        self._ensure_closed()
        self.draft = {key: copy.deepcopy(value) for key, value in record.items() if key not in READ_ONLY_FIELDS}
        self.editing_id = record["id"]
        self.mode = FormMode.OPEN_EDIT
        return self.draft

    def set_field(self, name: str, value: Any) -> None:
        """Set one input; list fields accept comma separated text"""
        if not self.is_open:
            raise FormStateError("No form is open")
        if name in self.config.list_fields and isinstance(value, str):
            value = split_list(value)
        self.draft[name] = value

    @property
    def missing_fields(self) -> List[str]:
        return [name for name in self.config.required_fields if is_blank(self.draft.get(name))]

    @property
    def can_submit(self) -> bool:
        return self.is_open and not self.missing_fields

    async def submit(self, page: EntityListPage) -> Optional[Dict[str, Any]]:
        """
        Save the draft through the page's create or update handler.

        Does nothing and returns None while required fields are empty.
        The modal closes only after the page accepted the draft.
        """
        if not self.can_submit:
            return None

        if self.mode == FormMode.OPEN_NEW:
            result = await page.create(self.draft)
        else:
            result = await page.update(self.editing_id, self.draft)

        if result is not None:
            self.close()
        return result

    def cancel(self) -> None:
        self.close()

    def close(self) -> None:
        self.mode = FormMode.CLOSED
        self.draft = {}
        self.editing_id = None
