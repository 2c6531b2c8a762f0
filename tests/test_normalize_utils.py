from datetime import date, datetime

import pytest

from core.normalize_utils import (
    MappingDiagnostics,
    edited_date_text,
    first_present,
    format_display_date,
    is_blank,
    parse_date,
    safe_text,
    to_input_date,
)


@pytest.mark.parametrize("value", [None, "", "   ", float("nan")])
def test_blank_values(value):
    assert is_blank(value)
    assert safe_text(value) == ""


def test_first_present_respects_key_order():
    row = {"b": "second", "a": "first"}
    assert first_present(row, ["a", "b"]) == "first"
    assert first_present(row, ["missing", "b"]) == "second"
    assert first_present(row, ["missing"]) == ""


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2024-01-31", date(2024, 1, 31)),
        ("2024-01-31T03:00:00.000Z", date(2024, 1, 31)),
        ("2024-02-01T01:30:00-03:00", date(2024, 2, 1)),
        ("31/01/2024", date(2024, 1, 31)),
        (datetime(2024, 3, 5, 10, 0), date(2024, 3, 5)),
        (date(2024, 3, 6), date(2024, 3, 6)),
    ],
)
def test_parse_date_accepts_sheet_formats(value, expected):
    assert parse_date(value) == expected


def test_parse_date_reads_aware_timestamps_on_utc_calendar():
    # 23:30 at -03:00 is already the next day in UTC
    assert parse_date("2024-01-31T23:30:00-03:00") == date(2024, 2, 1)


@pytest.mark.parametrize("value", [None, "", "-", "garbage"])
def test_parse_date_never_raises(value):
    assert parse_date(value) is None


@pytest.mark.parametrize("value", [3.5, 5, "3.5", "5", "março", "Feb 2024"])
def test_parse_date_rejects_partial_dates(value):
    # missing parts must not be filled in from today's date
    assert parse_date(value) is None


def test_partial_dates_are_displayed_raw():
    assert format_display_date("3.5") == "3.5"


def test_display_date_is_zero_padded_day_first():
    assert format_display_date("2024-02-01") == "01/02/2024"
    assert format_display_date("2024-01-31T03:00:00.000Z") == "31/01/2024"


def test_display_date_placeholders():
    assert format_display_date("") == "-"
    assert format_display_date(None) == "-"
    assert format_display_date("-") == "-"
    assert format_display_date("garbage") == "garbage"


def test_input_date():
    assert to_input_date("2024-02-01T10:00:00Z") == "2024-02-01"
    assert to_input_date("garbage") == ""


def test_untouched_date_widget_keeps_stored_text():
    assert edited_date_text("a definir", None, None) == "a definir"
    assert edited_date_text("a combinar", None, None) == "a combinar"
    assert edited_date_text("2024-01-31T03:00:00.000Z", date(2024, 1, 31), date(2024, 1, 31)) == "2024-01-31T03:00:00.000Z"
    assert edited_date_text("", None, None) == ""


def test_changed_date_widget_writes_iso_date():
    assert edited_date_text("a definir", None, date(2024, 2, 3)) == "2024-02-03"
    assert edited_date_text("2024-01-31", date(2024, 1, 31), date(2024, 2, 1)) == "2024-02-01"
    assert edited_date_text("2024-01-31", date(2024, 1, 31), None) == ""


def test_new_record_date_defaults_are_written():
    today = date(2024, 2, 10)
    assert edited_date_text("", today, today) == "2024-02-10"


def test_diagnostics_totals_and_samples():
    d = MappingDiagnostics()
    d.note("unknown_statuses", "a")
    d.note("unknown_statuses", "b")
    d.note("generated_ids")
    assert d.total == 3
    out = d.as_dict()
    assert out["unknown_statuses"] == 2
    assert out["samples"] == {"unknown_statuses": ["a", "b"]}
