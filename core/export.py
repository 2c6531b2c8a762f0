# core/export.py
from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional

from core.documents import pack
from core.normalize_utils import format_display_date
from core.schemas import ShipmentRecord

BOM = "\ufeff"
FIELD_SEP = ";"
LINE_SEP = "\n"

EXPORT_COLUMNS = [
    "Fornecedor",
    "Saida",
    "NFs",
    "AWB",
    "Status",
    "Chegada",
    "Marca",
    "Material",
    "Observacao",
    "Rastreio",
    "Documentos",
]


def _export_row(r: ShipmentRecord) -> List[str]:
    return [
        r.supplier,
        format_display_date(r.dispatch_date),
        r.invoices,
        r.awb_number,
        r.status.sheet_value,
        format_display_date(r.arrival_date),
        r.brand,
        r.material,
        r.remark,
        r.tracking_url,
        pack(r.documents),
    ]


def to_export_text(records: Iterable[ShipmentRecord]) -> str:
    """
    Semicolon-separated text for spreadsheet import (BOM first so Excel reads UTF-8).

    Values are written raw: a ";" inside a remark shifts the columns of that row.
    """
    header = FIELD_SEP.join(EXPORT_COLUMNS)
    rows = [FIELD_SEP.join(_export_row(r)) for r in (records or [])]
    return BOM + header + LINE_SEP + LINE_SEP.join(rows)


def to_export_bytes(records: Iterable[ShipmentRecord]) -> bytes:
    return to_export_text(records).encode("utf-8")


def export_filename(now: Optional[datetime] = None) -> str:
    ts = int((now or datetime.now()).timestamp() * 1000)
    return f"rastreamento_awb_{ts}.csv"
