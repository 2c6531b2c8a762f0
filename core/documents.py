# core/documents.py
from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence

from core.normalize_utils import MappingDiagnostics

DOCUMENT_SLOTS = 11
DELIMITER = "|"
LINK_PREFIX = "http"


def slot_key(n: int) -> str:
    return f"PDF_{n}"


def row_slots(row: Mapping[str, Any]) -> List[Any]:
    """PDF_1..PDF_11 values of an external row, None where the column is absent."""
    return [row.get(slot_key(i)) for i in range(1, DOCUMENT_SLOTS + 1)]


def pack(slots: Sequence[Any], diagnostics: Optional[MappingDiagnostics] = None) -> str:
    """
    Folds document slots into one "|"-delimited field.

    Only string values starting with "http" (case-sensitive) survive, in slot order.
    Anything else is dropped without error. "|" inside a URL is not escaped.
    """
    links: List[str] = []
    for value in slots:
        if value is None:
            continue
        text = str(value)
        if text.startswith(LINK_PREFIX):
            links.append(text)
        elif text.strip() and diagnostics is not None:
            diagnostics.note("dropped_documents", text)
    return DELIMITER.join(links)


def unpack(packed: Any) -> List[str]:
    """Inverse of pack(); an empty field yields no documents."""
    if not packed:
        return []
    return [part for part in str(packed).split(DELIMITER) if part.strip()]
