import pytest

from core.normalize_utils import MappingDiagnostics
from core.schemas import DEFAULT_STATUS, AWBStatus
from core.status import normalize_status


def test_padded_accented_sheet_value_maps_to_in_transit():
    status = normalize_status(" em trânsito ")
    assert status is AWBStatus.IN_TRANSIT
    assert status.label == "In Transit"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Entregue", AWBStatus.DELIVERED),
        ("ENTREGUE", AWBStatus.DELIVERED),
        ("delivered", AWBStatus.DELIVERED),
        ("Disponível", AWBStatus.AVAILABLE),
        ("Coletado Parcial", AWBStatus.PARTIALLY_COLLECTED),
        ("atrasado", AWBStatus.DELAYED),
        ("Aguardando AWB", AWBStatus.AWAITING_WAYBILL),
        ("coleta errada", AWBStatus.WRONG_COLLECTION),
        ("ok", AWBStatus.OK),
        ("Partially Collected", AWBStatus.PARTIALLY_COLLECTED),
    ],
)
def test_exact_matches_ignore_case(raw, expected):
    assert normalize_status(raw) is expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("em transito", AWBStatus.IN_TRANSIT),
        ("EM TRANSITO", AWBStatus.IN_TRANSIT),
        ("disponivel", AWBStatus.AVAILABLE),
        ("coleta parcial", AWBStatus.PARTIALLY_COLLECTED),
    ],
)
def test_unaccented_aliases(raw, expected):
    assert normalize_status(raw) is expected


@pytest.mark.parametrize("raw", ["lost at sea", "", "   ", None, 42, 3.5, {"x": 1}])
def test_unknown_or_empty_input_falls_back_to_default(raw):
    assert normalize_status(raw) is DEFAULT_STATUS


def test_diagnostics_count_unknown_text_but_not_empty():
    diag = MappingDiagnostics()
    normalize_status("lost at sea", diag)
    normalize_status("", diag)
    normalize_status(None, diag)
    normalize_status("Entregue", diag)
    assert diag.unknown_statuses == 1
    assert diag.samples["unknown_statuses"] == ["lost at sea"]


def test_every_status_round_trips_through_its_sheet_value_and_label():
    for status in AWBStatus:
        assert normalize_status(status.sheet_value) is status
        assert normalize_status(status.label) is status
