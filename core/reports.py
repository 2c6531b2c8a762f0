# core/reports.py
from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Tuple

import pandas as pd

from core.normalize import shipments_frame
from core.normalize_utils import format_display_date
from core.schemas import AWBStatus, ReportStats, ShipmentRecord

BRAND_TOP_N = 6
MATERIAL_TOP_N = 5
UNSPECIFIED_BRAND = "Não Informado"
UNSPECIFIED_MATERIAL = "Outros"

# (days, label) options offered by the reports screen
REPORT_PERIODS: List[Tuple[int, str]] = [
    (7, "Last 7 days"),
    (30, "Last 30 days"),
    (90, "Last 90 days"),
    (365, "Last 12 months"),
]
DEFAULT_REPORT_PERIOD = 30

_STATUS_BY_LABEL = {s.label: s for s in AWBStatus}


def window_frame(records: Iterable[ShipmentRecord], window_days: int, now: Optional[datetime] = None) -> pd.DataFrame:
    """
    Records dispatched on or after (today - window_days).
    Rows with a missing / unparseable dispatch date are left out.
    """
    df = shipments_frame(records)
    if df.empty:
        return df

    cutoff = (now or datetime.now()).date() - timedelta(days=int(window_days))
    df = df[df["dispatch_day"].notna()].copy()
    if df.empty:
        return df
    in_window = df["dispatch_day"].map(lambda d: d >= cutoff).astype(bool)
    return df[in_window].copy()


def _top_n(values: pd.Series, unspecified: str, n: int) -> List[Tuple[str, int]]:
    """
    Count per value, most frequent first; ties keep first-seen order.
    Blank values are grouped under `unspecified`.
    """
    if values.empty:
        return []
    keys = values.fillna("").astype(str)
    keys = keys.where(keys.str.strip() != "", unspecified)
    counts = keys.groupby(keys, sort=False).size()
    counts = counts.sort_values(ascending=False, kind="stable").head(n)
    return [(str(name).upper(), int(count)) for name, count in counts.items()]


def _percent(part: int, total: int) -> int:
    if not total:
        return 0
    # half-up, so 12.5% shows as 13%
    return int(math.floor(part / total * 100 + 0.5))


def _timeline(df: pd.DataFrame) -> List[Tuple[str, int]]:
    if df.empty:
        return []
    days = df["dispatch_day"].groupby(df["dispatch_day"], sort=False).size()
    # calendar order (year, month, day), never the DD/MM/YYYY string order
    ordered = sorted(days.items(), key=lambda kv: (kv[0].year, kv[0].month, kv[0].day))
    return [(format_display_date(d), int(c)) for d, c in ordered]


def compute_stats(records: Iterable[ShipmentRecord], window_days: int, now: Optional[datetime] = None) -> ReportStats:
    """
    Report figures for the records dispatched within the last `window_days`.
    Pure function of its inputs (plus `now`).
    """
    df = window_frame(records, window_days, now=now)
    total = int(len(df))

    if total == 0:
        return ReportStats(
            total=0,
            efficiency=0,
            delayed=0,
            status_distribution=[],
            brand_distribution=[],
            material_distribution=[],
            timeline=[],
        )

    status_counts = df["status"].value_counts()
    delivered = int(status_counts.get(AWBStatus.DELIVERED.label, 0))
    delayed = int(status_counts.get(AWBStatus.DELAYED.label, 0))

    status_distribution = [
        (s, int(status_counts.get(s.label, 0)))
        for s in AWBStatus
        if int(status_counts.get(s.label, 0)) > 0
    ]

    return ReportStats(
        total=total,
        efficiency=_percent(delivered, total),
        delayed=delayed,
        status_distribution=status_distribution,
        brand_distribution=_top_n(df["brand"], UNSPECIFIED_BRAND, BRAND_TOP_N),
        material_distribution=_top_n(df["material"], UNSPECIFIED_MATERIAL, MATERIAL_TOP_N),
        timeline=_timeline(df),
    )


def distribution_frame(pairs: List[Tuple[object, int]], name_col: str = "name", value_col: str = "value") -> pd.DataFrame:
    """(label, count) pairs -> two-column frame for chart widgets."""
    rows = [{name_col: str(k), value_col: int(v)} for k, v in (pairs or [])]
    return pd.DataFrame(rows, columns=[name_col, value_col])


def status_from_label(label: str) -> Optional[AWBStatus]:
    return _STATUS_BY_LABEL.get(label)
