# core/normalize.py
"""
Field mapping between remote sheet rows and canonical records.

External rows come from the sheet service as loose dicts:
  - headers in Portuguese, sometimes accented ("Saída", "Observação")
  - or the lower-case keys the app itself used to send ("saida", "observacao")
  - documents spread over PDF_1..PDF_11 columns

Canonical records are ShipmentRecord / UserAccount (core/schemas.py).
Every mapping here is pure: no I/O, no exceptions for bad data.
"""
from __future__ import annotations

import logging
import secrets
import string
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import pandas as pd

from core.documents import pack, row_slots, unpack
from core.normalize_utils import MappingDiagnostics, first_present, parse_date
from core.schemas import (
    DEFAULT_USER_NAME,
    SHIPMENT_DOCUMENTS,
    SHIPMENT_FIELDS,
    SHIPMENT_ID,
    SHIPMENT_KIND,
    SHIPMENT_STATUS,
    USER_FIELDS,
    USER_ID,
    USER_KIND,
    USER_ROLE,
    USER_STATUS,
    AccountStatus,
    Role,
    ShipmentRecord,
    UserAccount,
)
from core.status import normalize_status

logger = logging.getLogger(__name__)

Record = Union[ShipmentRecord, UserAccount]

_ID_ALPHABET = string.ascii_lowercase + string.digits
ID_LENGTH = 26


# -------------------------------
# Identity
# -------------------------------
def new_record_id() -> str:
    """Random opaque identifier for rows that are about to be written."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(ID_LENGTH))


def ensure_record_id(record: Record, diagnostics: Optional[MappingDiagnostics] = None) -> Record:
    """Returns the record unchanged if it has an id, else a copy with a fresh one."""
    if record.id.strip():
        return record
    if diagnostics is not None:
        diagnostics.note("generated_ids")
    return replace(record, id=new_record_id())


# -------------------------------
# Shipments
# -------------------------------
def shipment_to_canonical(row: Mapping[str, Any], diagnostics: Optional[MappingDiagnostics] = None) -> ShipmentRecord:
    record_id = first_present(row, SHIPMENT_ID.read_keys)
    if not record_id and diagnostics is not None:
        diagnostics.note("missing_ids")

    values = {f.name: first_present(row, f.read_keys) for f in SHIPMENT_FIELDS}

    documents = unpack(pack(row_slots(row), diagnostics))
    if not documents:
        # rows we wrote ourselves carry the packed column instead of PDF_n slots
        packed = unpack(first_present(row, SHIPMENT_DOCUMENTS.read_keys))
        documents = unpack(pack(packed, diagnostics))

    return ShipmentRecord(
        id=record_id,
        status=normalize_status(first_present(row, SHIPMENT_STATUS.read_keys), diagnostics),
        documents=documents,
        **values,
    )


def shipment_to_external(record: ShipmentRecord) -> Dict[str, str]:
    """
    Row in the exact header spelling the AWB sheet expects.
    The id is written as-is; call ensure_record_id() first for new rows.
    """
    out: Dict[str, str] = {SHIPMENT_ID.header: record.id}
    for f in SHIPMENT_FIELDS:
        out[f.header] = getattr(record, f.name) or ""
        if f.name == "awb_number":
            # sheet column order: Status sits between AWB and Chegada
            out[SHIPMENT_STATUS.header] = record.status.sheet_value
    out[SHIPMENT_DOCUMENTS.header] = pack(record.documents)
    return out


# -------------------------------
# Users
# -------------------------------
def _role_from_text(raw: str) -> Role:
    return Role.ADMIN if "admin" in (raw or "").lower() else Role.USER


def _account_status_from_text(raw: str) -> AccountStatus:
    key = (raw or "").strip().lower()
    if key in ("inativo", "inactive"):
        return AccountStatus.INACTIVE
    return AccountStatus.ACTIVE


def user_to_canonical(row: Mapping[str, Any]) -> UserAccount:
    values = {f.name: first_present(row, f.read_keys) for f in USER_FIELDS}
    if not values["name"]:
        values["name"] = DEFAULT_USER_NAME

    return UserAccount(
        id=first_present(row, USER_ID.read_keys),
        role=_role_from_text(first_present(row, USER_ROLE.read_keys)),
        status=_account_status_from_text(first_present(row, USER_STATUS.read_keys)),
        **values,
    )


def user_to_external(user: UserAccount) -> Dict[str, str]:
    out: Dict[str, str] = {USER_ID.header: user.id}
    for f in USER_FIELDS:
        out[f.header] = getattr(user, f.name) or ""
    out[USER_ROLE.header] = user.role.value
    out[USER_STATUS.header] = user.status.sheet_value
    return out


# -------------------------------
# Dispatch by entity kind
# -------------------------------
def to_canonical(kind: str, row: Mapping[str, Any], diagnostics: Optional[MappingDiagnostics] = None) -> Record:
    if kind == SHIPMENT_KIND:
        return shipment_to_canonical(row, diagnostics)
    if kind == USER_KIND:
        return user_to_canonical(row)
    raise ValueError(f"Unknown entity kind: {kind!r}")


def to_external(kind: str, record: Record) -> Dict[str, str]:
    if kind == SHIPMENT_KIND:
        return shipment_to_external(record)  # type: ignore[arg-type]
    if kind == USER_KIND:
        return user_to_external(record)  # type: ignore[arg-type]
    raise ValueError(f"Unknown entity kind: {kind!r}")


# -------------------------------
# Whole-sheet helpers
# -------------------------------
def normalize_shipments(rows: Iterable[Any], diagnostics: Optional[MappingDiagnostics] = None) -> List[ShipmentRecord]:
    out: List[ShipmentRecord] = []
    for row in rows or []:
        if not isinstance(row, Mapping):
            logger.debug("Skipping non-object AWB row: %r", row)
            continue
        out.append(shipment_to_canonical(row, diagnostics))
    if diagnostics is not None and diagnostics.total:
        logger.info("AWB mapping coerced values: %s", diagnostics.as_dict())
    return out


def normalize_users(rows: Iterable[Any]) -> List[UserAccount]:
    return [user_to_canonical(r) for r in (rows or []) if isinstance(r, Mapping)]


SHIPMENT_FRAME_COLUMNS = [
    "id",
    "supplier",
    "dispatch_date",
    "invoices",
    "awb_number",
    "status",
    "arrival_date",
    "brand",
    "material",
    "remark",
    "tracking_url",
    "documents",
    "dispatch_day",
]


def shipments_frame(records: Iterable[ShipmentRecord]) -> pd.DataFrame:
    """
    Tabular projection of canonical records (one row per record, input order).
    `status` holds the display label; `dispatch_day` the parsed date or None.
    """
    rows = []
    for r in records or []:
        rows.append(
            {
                "id": r.id,
                "supplier": r.supplier,
                "dispatch_date": r.dispatch_date,
                "invoices": r.invoices,
                "awb_number": r.awb_number,
                "status": r.status.label,
                "arrival_date": r.arrival_date,
                "brand": r.brand,
                "material": r.material,
                "remark": r.remark,
                "tracking_url": r.tracking_url,
                "documents": list(r.documents),
                "dispatch_day": parse_date(r.dispatch_date),
            }
        )
    if not rows:
        return pd.DataFrame(columns=SHIPMENT_FRAME_COLUMNS)
    return pd.DataFrame(rows, columns=SHIPMENT_FRAME_COLUMNS)
