"""
Headless admin client: list page state, form modal, stats panel and API sync
"""

from .api_client import AdminApiClient
from .form import FormModal, FormMode
from .page import EntityListPage, PageFilters
from .stats import PageStats, compute_stats

__all__ = [
    "AdminApiClient",
    "EntityListPage",
    "FormModal",
    "FormMode",
    "PageFilters",
    "PageStats",
    "compute_stats",
]
