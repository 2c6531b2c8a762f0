from datetime import datetime

import pytest

from core.schemas import AWBStatus, ShipmentRecord


@pytest.fixture
def sheet_row():
    """An AWB row as the spreadsheet script returns it."""
    return {
        "ID": "abc123",
        "Fornecedor": "Acme Textiles",
        "Saída": "2024-01-31T03:00:00.000Z",
        "NF's": "1001, 1002",
        "AWB": "176-12345675",
        "Status": " em trânsito ",
        "Chegada": "2024-02-05",
        "Marca": "Nordic",
        "Material": "Fabric",
        "Observação": "Fragile",
        "Rastreio": "https://track.example/176-12345675",
        "PDF_1": "https://docs.example/invoice.pdf",
        "PDF_2": "",
        "PDF_3": "ftp://docs.example/old.pdf",
        "PDF_4": "http://docs.example/packing.pdf",
    }


@pytest.fixture
def now():
    return datetime(2024, 2, 10, 12, 0, 0)


def make_record(**kw) -> ShipmentRecord:
    base = dict(
        id="r1",
        supplier="Acme",
        dispatch_date="2024-02-01",
        invoices="1001",
        awb_number="176-0001",
        status=AWBStatus.IN_TRANSIT,
        brand="Nordic",
        material="Fabric",
    )
    base.update(kw)
    return ShipmentRecord(**base)


@pytest.fixture
def record_factory():
    return make_record
