# core/normalize_utils.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, Mapping, Optional

import pandas as pd
from dateutil import parser


# -------------------------------
# Cell helpers
# -------------------------------
def is_blank(value: Any) -> bool:
    if value is None:
        return True
    try:
        if pd.isna(value):
            return True
    except (TypeError, ValueError):
        # lists / dicts are never "na"
        pass
    return str(value).strip() == ""


def safe_text(value: Any) -> str:
    """Stringify a sheet cell; None / NaN become an empty string."""
    if is_blank(value):
        return ""
    return str(value)


def first_present(row: Mapping[str, Any], keys: Iterable[str]) -> str:
    """
    Returns the first non-blank value among `keys`, as text.
    Order matters: the first key listed wins.
    """
    for k in keys:
        if k in row and not is_blank(row[k]):
            return safe_text(row[k])
    return ""


# -------------------------------
# Dates
# -------------------------------
_FILL_A = datetime(2000, 1, 1)
_FILL_B = datetime(2001, 2, 2)


def _parse_full_date(s: str) -> Optional[datetime]:
    """
    Day-first dateutil parse that insists on day, month and year.
    dateutil fills missing parts from its default, so parsing against two
    different defaults exposes partial inputs like "5" or "3.5".
    """
    try:
        a = parser.parse(s, dayfirst=True, default=_FILL_A)
        b = parser.parse(s, dayfirst=True, default=_FILL_B)
    except (ValueError, OverflowError, TypeError):
        return None
    if a.date() != b.date():
        return None
    return a


def parse_date(value: Any) -> Optional[date]:
    """
    Lenient calendar-date parse for sheet cells.
    Accepts ISO strings, ISO timestamps, datetime/date objects.
    Returns None for anything unparseable (never raises).
    """
    if is_blank(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    # bare numbers ("3.5", 5) are not dates
    if isinstance(value, (int, float)):
        return None

    s = str(value).strip()
    if s == "-":
        return None
    try:
        # ISO first so "2024-02-01" never goes through day-first guessing
        dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        dt = _parse_full_date(s)
        if dt is None:
            return None

    # sheet timestamps are UTC; aware values are read on the UTC calendar
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.date()


def format_display_date(value: Any) -> str:
    """
    DD/MM/YYYY display form used by the lists, the timeline and the export.
      - empty or "-"       -> "-"
      - unparseable text   -> returned unchanged
    """
    if is_blank(value) or str(value).strip() == "-":
        return "-"
    d = parse_date(value)
    if d is None:
        return str(value)
    return f"{d.day:02d}/{d.month:02d}/{d.year:04d}"


def to_input_date(value: Any) -> str:
    """YYYY-MM-DD for date inputs, or "" when the value is not a date."""
    d = parse_date(value)
    return d.isoformat() if d else ""


def edited_date_text(stored: Any, shown: Optional[date], picked: Optional[date]) -> str:
    """
    Cell text to write back from a date widget.
    An untouched widget keeps the stored cell verbatim, so free text
    like "a combinar" survives edits to other fields.
    """
    if picked == shown:
        return safe_text(stored) if not is_blank(stored) else (picked.isoformat() if picked else "")
    return picked.isoformat() if picked else ""


# -------------------------------
# Diagnostics
# -------------------------------
@dataclass
class MappingDiagnostics:
    """
    Optional counter of values that were silently coerced while mapping rows.
    Mapping behaves the same whether or not one is passed in.
    """
    unknown_statuses: int = 0
    dropped_documents: int = 0
    missing_ids: int = 0
    generated_ids: int = 0
    samples: Dict[str, list] = field(default_factory=dict)

    def note(self, kind: str, value: Any = None, max_samples: int = 5) -> None:
        setattr(self, kind, getattr(self, kind, 0) + 1)
        if value is not None:
            bucket = self.samples.setdefault(kind, [])
            if len(bucket) < max_samples:
                bucket.append(value)

    @property
    def total(self) -> int:
        return self.unknown_statuses + self.dropped_documents + self.missing_ids + self.generated_ids

    def as_dict(self) -> Dict[str, Any]:
        return {
            "unknown_statuses": self.unknown_statuses,
            "dropped_documents": self.dropped_documents,
            "missing_ids": self.missing_ids,
            "generated_ids": self.generated_ids,
            "total": self.total,
            "samples": dict(self.samples),
        }
