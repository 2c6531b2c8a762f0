import json
from unittest.mock import MagicMock

import pytest
import requests

from core.normalize import ID_LENGTH
from core.normalize_utils import MappingDiagnostics
from core.schemas import AWBStatus, ShipmentRecord, UserAccount
from core.settings import AppConfig
from core.sheet_client import SheetClient

API = "https://script.example/exec"


def _response(payload=None, status=200, json_error=None):
    r = MagicMock()
    r.status_code = status
    if json_error is not None:
        r.json.side_effect = json_error
    else:
        r.json.return_value = payload
    return r


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session):
    return SheetClient(AppConfig(api_url=API, timeout_sec=5), session=session)


def _posted(session):
    _, kwargs = session.post.call_args
    return json.loads(kwargs["data"].decode("utf-8"))


# ----------------------------
# Reads
# ----------------------------
def test_fetch_rows_requests_the_named_sheet(client, session):
    session.get.return_value = _response([{"ID": "1"}, {"ID": "2"}])
    assert client.fetch_rows("AWB") == [{"ID": "1"}, {"ID": "2"}]
    args, kwargs = session.get.call_args
    assert args[0] == API
    assert kwargs["params"] == {"sheet": "AWB"}
    assert kwargs["timeout"] == 5


def test_fetch_rows_drops_non_object_entries(client, session):
    session.get.return_value = _response([{"ID": "1"}, "x", 3])
    assert client.fetch_rows("AWB") == [{"ID": "1"}]


@pytest.mark.parametrize("payload", [{"error": "boom"}, "text", None])
def test_non_list_body_reads_as_empty(client, session, payload):
    session.get.return_value = _response(payload)
    assert client.fetch_rows("AWB") == []


def test_unparseable_body_reads_as_empty(client, session):
    session.get.return_value = _response(json_error=ValueError("no json"))
    assert client.fetch_rows("AWB") == []


def test_transport_error_reads_as_empty(client, session):
    session.get.side_effect = requests.ConnectionError("down")
    assert client.fetch_rows("AWB") == []


def test_http_error_reads_as_empty(client, session):
    r = _response([{"ID": "1"}], status=500)
    r.raise_for_status.side_effect = requests.HTTPError("500")
    session.get.return_value = r
    assert client.fetch_rows("AWB") == []


def test_unconfigured_client_never_calls_out(session):
    c = SheetClient(AppConfig(api_url=""), session=session)
    assert c.fetch_rows("AWB") == []
    assert not c.save_record(ShipmentRecord(id="1")).ok
    session.get.assert_not_called()
    session.post.assert_not_called()


def test_fetch_records_and_users_map_rows(client, session):
    session.get.return_value = _response([{"ID": "1", "Status": "Entregue", "Fornecedor": "Acme"}, {"ID": "2", "Status": "???"}])
    diag = MappingDiagnostics()
    records = client.fetch_records(diag)
    assert [r.status for r in records] == [AWBStatus.DELIVERED, AWBStatus.IN_TRANSIT]
    assert diag.unknown_statuses == 1

    session.get.return_value = _response([{"ID": "u", "E-MAIL": "a@b.c", "PAPEL": "admin"}])
    users = client.fetch_users()
    assert users[0].email == "a@b.c"
    assert session.get.call_args[1]["params"] == {"sheet": "CADASTRO USUÁRIO"}


# ----------------------------
# Writes
# ----------------------------
def test_save_record_posts_sheet_row(client, session):
    session.post.return_value = _response(status=200)
    rec = ShipmentRecord(id="r1", supplier="Acme", status=AWBStatus.DELAYED, documents=["http://a"])
    result = client.save_record(rec)

    assert result.ok
    assert result.record_id == "r1"
    body = _posted(session)
    assert body["action"] == "SAVE"
    assert body["sheet"] == "AWB"
    assert body["data"]["ID"] == "r1"
    assert body["data"]["Fornecedor"] == "Acme"
    assert body["data"]["Status"] == "Atrasado"
    assert body["data"]["Documentos"] == "http://a"
    assert session.post.call_args[1]["timeout"] == 5


def test_save_record_generates_missing_id(client, session):
    session.post.return_value = _response(status=200)
    diag = MappingDiagnostics()
    result = client.save_record(ShipmentRecord(supplier="New"), diag)
    sent_id = _posted(session)["data"]["ID"]
    assert len(sent_id) == ID_LENGTH
    assert result.record_id == sent_id
    assert diag.generated_ids == 1


def test_save_user_posts_user_sheet(client, session):
    session.post.return_value = _response(status=200)
    client.save_user(UserAccount(id="u1", name="Ana", email="a@b.c"))
    body = _posted(session)
    assert body["sheet"] == "CADASTRO USUÁRIO"
    assert body["data"]["USUÁRIO"] == "Ana"
    assert body["data"]["PAPEL"] == "user"


def test_delete_payloads(client, session):
    session.post.return_value = _response(status=200)
    assert client.delete_record("r1").ok
    assert _posted(session) == {"action": "DELETE", "sheet": "AWB", "data": {"id": "r1"}}

    assert client.delete_user("u1").ok
    assert _posted(session) == {"action": "DELETE", "sheet": "CADASTRO USUÁRIO", "data": {"id": "u1"}}


def test_delete_without_id_is_refused(client, session):
    assert not client.delete_record("").ok
    assert not client.delete_user("  ").ok
    session.post.assert_not_called()


def test_write_transport_failure_is_reported_not_raised(client, session):
    session.post.side_effect = requests.Timeout("slow")
    result = client.delete_record("r1")
    assert not result.ok
    assert "slow" in result.reason


def test_write_http_error_is_reported(client, session):
    session.post.return_value = _response(status=503)
    result = client.save_record(ShipmentRecord(id="r1"))
    assert not result.ok
    assert result.status_code == 503
    assert result.reason == "HTTP 503"
