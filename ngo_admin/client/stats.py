"""
Stats panel numbers derived from a page's local collection
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ngo_admin.registry import EntityConfig


@dataclass
class PageStats:
    total_count: int = 0
    active_count: int = 0
    filtered_count: int = 0
    active_percentage: float = 0.0
    sums: Dict[str, float] = field(default_factory=dict)
    by_status: Dict[str, int] = field(default_factory=dict)
    by_category: Dict[str, int] = field(default_factory=dict)


def percentage(part: int, whole: int) -> float:
    """Share of ``whole`` as a percentage rounded to one decimal; 0.0 when empty"""
    if not whole:
        return 0.0
    return round(part / whole * 100, 1)


def compute_stats(
    config: EntityConfig,
    collection: List[Dict[str, Any]],
    visible: Optional[List[Dict[str, Any]]] = None,
) -> PageStats:
    """
    Recompute the stats panel from scratch.

    ``visible`` is the filtered view; when omitted the whole collection
    counts as visible.
    """
    if visible is None:
        visible = collection

    active_count = sum(1 for record in collection if config.is_active(record))

    sums = {}
    for name in config.sum_fields:
        sums[name] = float(sum(record.get(name) or 0 for record in collection))

    by_status = {}
    if config.status_field:
        by_status = dict(Counter(str(record.get(config.status_field, "")) for record in collection))

    by_category = {}
    if config.category_field:
        by_category = dict(Counter(str(record.get(config.category_field, "")) for record in collection))

    return PageStats(
        total_count=len(collection),
        active_count=active_count,
        filtered_count=len(visible),
        active_percentage=percentage(active_count, len(collection)),
        sums=sums,
        by_status=by_status,
        by_category=by_category,
    )
