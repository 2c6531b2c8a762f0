# core/filters.py
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Collection, Dict, Iterable, List, Optional

from core.normalize_utils import parse_date
from core.schemas import PERIODS, AWBStatus, ShipmentRecord

SEARCH_FIELDS = ("supplier", "awb_number", "invoices", "brand", "material")


def _matches_search(record: ShipmentRecord, term: str) -> bool:
    if not term:
        return True
    return any(term in (getattr(record, f) or "").lower() for f in SEARCH_FIELDS)


def filter_records(
    records: Iterable[ShipmentRecord],
    search_term: str = "",
    statuses: Optional[Collection[AWBStatus]] = None,
) -> List[ShipmentRecord]:
    """
    Dashboard list filter.
      - search: case-insensitive substring over supplier / AWB / NF's / brand / material
      - statuses: empty or None = every status passes
    Both must match. Input order is kept; records are not copied or modified.
    """
    term = (search_term or "").lower()
    wanted = set(statuses or ())
    return [
        r for r in (records or [])
        if _matches_search(r, term) and (not wanted or r.status in wanted)
    ]


def status_counts(records: Iterable[ShipmentRecord]) -> Dict[AWBStatus, int]:
    """Count per status, every status present (zeros included), declaration order."""
    counts = {s: 0 for s in AWBStatus}
    for r in records or []:
        counts[r.status] += 1
    return counts


def records_with_status(records: Iterable[ShipmentRecord], status: Optional[AWBStatus]) -> List[ShipmentRecord]:
    if status is None:
        return list(records or [])
    return [r for r in (records or []) if r.status is status]


def _today(now: Optional[datetime]) -> date:
    return (now or datetime.now()).date()


def apply_period(records: Iterable[ShipmentRecord], period: str, now: Optional[datetime] = None) -> List[ShipmentRecord]:
    """
    Sidebar period selector ("today" / "week" / "month" / "all").
    Unknown periods behave like "all"; records without a usable dispatch date
    only survive "all".
    """
    days = PERIODS.get(period)
    if days is None:
        return list(records or [])

    cutoff = _today(now) - timedelta(days=days - 1)
    out = []
    for r in records or []:
        d = parse_date(r.dispatch_date)
        if d is not None and d >= cutoff:
            out.append(r)
    return out
