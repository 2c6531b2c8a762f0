# core/status.py
from __future__ import annotations

import logging
from typing import Any, Optional

from core.normalize_utils import MappingDiagnostics, safe_text
from core.schemas import DEFAULT_STATUS, AWBStatus

logger = logging.getLogger(__name__)


# Spellings seen in the sheet that don't match a status exactly (accents dropped, etc.)
STATUS_ALIASES = {
    "em transito": AWBStatus.IN_TRANSIT,
    "disponivel": AWBStatus.AVAILABLE,
    "coleta parcial": AWBStatus.PARTIALLY_COLLECTED,
    "coletado parcialmente": AWBStatus.PARTIALLY_COLLECTED,
    "atrasada": AWBStatus.DELAYED,
    "aguardando": AWBStatus.AWAITING_WAYBILL,
    "coletado errado": AWBStatus.WRONG_COLLECTION,
}


def normalize_status(raw: Any, diagnostics: Optional[MappingDiagnostics] = None) -> AWBStatus:
    """
    Free-text status -> AWBStatus.

    Exact (case-insensitive) match against the sheet value or the English label
    of each status, in declaration order; then the alias table; otherwise the
    default (In Transit). Unknown text is coerced, never rejected.
    """
    key = safe_text(raw).strip().lower()

    for status in AWBStatus:
        if key == status.sheet_value.lower() or key == status.label.lower():
            return status

    if key in STATUS_ALIASES:
        return STATUS_ALIASES[key]

    if key:
        logger.debug("Unknown status %r coerced to %s", raw, DEFAULT_STATUS.label)
        if diagnostics is not None:
            diagnostics.note("unknown_statuses", safe_text(raw))
    return DEFAULT_STATUS
