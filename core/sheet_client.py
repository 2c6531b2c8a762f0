# core/sheet_client.py
"""
HTTP boundary to the spreadsheet web script.

  GET  <api_url>?sheet=<name>        -> JSON array of row objects
  POST <api_url>  {"action", "sheet", "data"}

Reads never raise: any failure is logged and yields an empty list.
Writes never raise: they return a WriteResult.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from core.normalize import (
    ensure_record_id,
    normalize_shipments,
    normalize_users,
    shipment_to_external,
    user_to_external,
)
from core.normalize_utils import MappingDiagnostics
from core.schemas import AWB_SHEET, USERS_SHEET, ShipmentRecord, UserAccount
from core.settings import AppConfig

logger = logging.getLogger(__name__)

ACTION_SAVE = "SAVE"
ACTION_DELETE = "DELETE"


@dataclass(frozen=True)
class WriteResult:
    ok: bool
    reason: str = ""
    status_code: Optional[int] = None
    record_id: str = ""

    @classmethod
    def failed(cls, reason: str, status_code: Optional[int] = None, record_id: str = "") -> "WriteResult":
        return cls(ok=False, reason=reason, status_code=status_code, record_id=record_id)


class SheetClient:
    """
    Thin wrapper over requests; `session` may be any object with get/post
    (a requests.Session, or a stub in tests).
    """

    def __init__(self, config: AppConfig, session: Any = None):
        self.config = config
        self._http = session if session is not None else requests

    # ----------------------------
    # Reads
    # ----------------------------
    def fetch_rows(self, sheet: str) -> List[Dict[str, Any]]:
        if not self.config.is_configured:
            logger.info("No endpoint configured; skipping read of sheet %r", sheet)
            return []

        try:
            r = self._http.get(
                self.config.api_url,
                params={"sheet": sheet},
                timeout=self.config.timeout_sec,
            )
            r.raise_for_status()
            data = r.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("Failed to read sheet %r: %s", sheet, e)
            return []

        if not isinstance(data, list):
            logger.warning("Sheet %r returned %s instead of a list; treating as empty", sheet, type(data).__name__)
            return []
        return [row for row in data if isinstance(row, dict)]

    def fetch_records(self, diagnostics: Optional[MappingDiagnostics] = None) -> List[ShipmentRecord]:
        return normalize_shipments(self.fetch_rows(AWB_SHEET), diagnostics)

    def fetch_users(self) -> List[UserAccount]:
        return normalize_users(self.fetch_rows(USERS_SHEET))

    # ----------------------------
    # Writes
    # ----------------------------
    def _post(self, action: str, sheet: str, data: Dict[str, Any], record_id: str = "") -> WriteResult:
        if not self.config.is_configured:
            return WriteResult.failed("no endpoint configured", record_id=record_id)

        payload = {"action": action, "sheet": sheet, "data": data}
        try:
            r = self._http.post(
                self.config.api_url,
                data=json.dumps(payload, ensure_ascii=False).encode("utf-8"),
                headers={"Content-Type": "text/plain;charset=utf-8"},
                timeout=self.config.timeout_sec,
            )
        except requests.RequestException as e:
            logger.warning("%s on sheet %r failed: %s", action, sheet, e)
            return WriteResult.failed(str(e), record_id=record_id)

        status = getattr(r, "status_code", None)
        if isinstance(status, int) and status >= 400:
            logger.warning("%s on sheet %r returned HTTP %s", action, sheet, status)
            return WriteResult.failed(f"HTTP {status}", status_code=status, record_id=record_id)

        # the script gives no reliable body; anything short of an HTTP error counts as saved
        return WriteResult(ok=True, status_code=status, record_id=record_id)

    def save_record(self, record: ShipmentRecord, diagnostics: Optional[MappingDiagnostics] = None) -> WriteResult:
        record = ensure_record_id(record, diagnostics)
        return self._post(ACTION_SAVE, AWB_SHEET, shipment_to_external(record), record_id=record.id)

    def save_user(self, user: UserAccount) -> WriteResult:
        user = ensure_record_id(user)
        return self._post(ACTION_SAVE, USERS_SHEET, user_to_external(user), record_id=user.id)

    def delete_record(self, record_id: str) -> WriteResult:
        if not (record_id or "").strip():
            return WriteResult.failed("missing id")
        return self._post(ACTION_DELETE, AWB_SHEET, {"id": record_id}, record_id=record_id)

    def delete_user(self, user_id: str) -> WriteResult:
        if not (user_id or "").strip():
            return WriteResult.failed("missing id")
        return self._post(ACTION_DELETE, USERS_SHEET, {"id": user_id}, record_id=user_id)
