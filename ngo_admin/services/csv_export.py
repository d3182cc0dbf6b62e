"""
CSV export of admin records

An entity opts in by listing ``export_columns`` in its registry entry:
``(header, value)`` pairs where ``value`` is a field name or a callable
taking the serialized record.
"""

import csv
import io
from datetime import date, datetime
from typing import Any, Callable, Dict, Iterable, Optional, Sequence, Tuple, Union

ColumnValue = Union[str, Callable[[Dict[str, Any]], Any]]
ExportColumn = Tuple[str, ColumnValue]


def date_only(value: Any) -> str:
    """ISO timestamp -> YYYY-MM-DD"""
    if not value:
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value
    return value.date().isoformat() if isinstance(value, datetime) else str(value)


def money_or_free(value: Any) -> str:
    return f"${float(value):.2f}" if value else "Free"


def or_placeholder(value: Any, placeholder: str = "None") -> str:
    return value if value else placeholder


REGISTRATION_EXPORT_COLUMNS: Sequence[ExportColumn] = (
    ("ID", "id"),
    ("Event", "event_title"),
    ("Name", "name"),
    ("Email", "email"),
    ("Phone", "phone"),
    ("Participants", "participants"),
    ("Registration Date", lambda r: date_only(r.get("created_at"))),
    ("Status", "status"),
    ("Payment Status", lambda r: or_placeholder(r.get("payment_status"), "N/A")),
    ("Amount", lambda r: money_or_free(r.get("amount"))),
    ("Special Needs", lambda r: or_placeholder(r.get("special_needs"))),
    ("Dietary Restrictions", lambda r: or_placeholder(r.get("dietary_restrictions"))),
)


def records_to_csv(columns: Sequence[ExportColumn], records: Iterable[Dict[str, Any]]) -> str:
    """Render serialized records as CSV text with a header row"""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow([header for header, _ in columns])
    for record in records:
        writer.writerow([
            value(record) if callable(value) else record.get(value, "")
            for _, value in columns
        ])
    return buffer.getvalue()


def export_filename(entity_name: str, today: Optional[date] = None) -> str:
    return f"{entity_name}_{(today or date.today()).isoformat()}.csv"
