"""
Section Settings Service - per-page display settings stored as overrides
"""

import copy
from typing import Any, Dict

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ngo_admin.core.exceptions import RecordValidationError, SectionNotFoundError
from ngo_admin.models.section_setting import (
    DEFAULT_SECTION_SETTINGS,
    SECTION_SETTING_CHOICES,
    SectionSetting,
)

logger = structlog.get_logger()


def _same_kind(default: Any, value: Any) -> bool:
    """Check a new value against the type of the page default"""
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, int):
        return isinstance(value, int) and not isinstance(value, bool)
    if isinstance(default, float):
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    return isinstance(value, type(default))


class SectionSettingsService:
    """Read, update and reset the section settings of one admin page"""

    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def defaults_for(page: str) -> Dict[str, Any]:
        if page not in DEFAULT_SECTION_SETTINGS:
            raise SectionNotFoundError(page)
        return copy.deepcopy(DEFAULT_SECTION_SETTINGS[page])

    async def _stored(self, page: str):
        result = await self.db.execute(select(SectionSetting).where(SectionSetting.page == page))
        return result.scalar_one_or_none()

    async def get(self, page: str) -> Dict[str, Any]:
        """Stored overrides merged over the page defaults"""
        settings = self.defaults_for(page)
        stored = await self._stored(page)
        if stored and stored.settings:
            settings.update({k: v for k, v in stored.settings.items() if k in settings})
        return settings

    def validate(self, page: str, values: Dict[str, Any]) -> None:
        defaults = self.defaults_for(page)
        choices = SECTION_SETTING_CHOICES.get(page, {})

        for key, value in values.items():
            if key not in defaults:
                raise RecordValidationError(f"Unknown setting '{key}' for section '{page}'", field=key)
            if not _same_kind(defaults[key], value):
                raise RecordValidationError(
                    f"Setting '{key}' expects {type(defaults[key]).__name__}",
                    field=key,
                    value=value,
                )
            if key in choices and value not in choices[key]:
                allowed = ", ".join(str(choice) for choice in choices[key])
                raise RecordValidationError(f"Setting '{key}' must be one of: {allowed}", field=key, value=value)

    async def update(self, page: str, values: Dict[str, Any]) -> Dict[str, Any]:
        """Replace the given keys; keys not sent keep their current value"""
        self.validate(page, values)

        stored = await self._stored(page)
        if stored is None:
            stored = SectionSetting(page=page, settings=dict(values))
            self.db.add(stored)
        else:
            # Assign a new dict so the JSON column is marked dirty
            stored.settings = {**(stored.settings or {}), **values}
        await self.db.commit()

        logger.info("section_settings_updated", page=page, keys=sorted(values))
        return await self.get(page)

    async def reset(self, page: str) -> Dict[str, Any]:
        """Drop every stored override for the page"""
        defaults = self.defaults_for(page)
        stored = await self._stored(page)
        if stored is not None:
            await self.db.delete(stored)
            await self.db.commit()

        logger.info("section_settings_reset", page=page)
        return defaults
