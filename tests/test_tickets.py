import re
import socket
import uuid
from fastapi.testclient import TestClient

from ticket_service.api.routes.tickets import SENTINEL_TICKET_ID, parse_ticket_id, render_ticket
from ticket_service.core.config import Settings
from ticket_service.main import create_app
from ticket_service.api.deps import get_ticket_store
from ticket_service.schemas.ticket import TicketRecord

client = TestClient(create_app(Settings(_env_file=None, ENV="test", TICKET_STORE="ephemeral")))

TICKET_PAGE = re.compile(
    r"<h3>Hi Visitor!</h3>Here is your ticket: <b>([0-9a-f-]{36})</b><br/>"
    r"Brought to you by: <b>(.+)</b><br/>"
)


class RecordingStore:
    def __init__(self):
        self.seen = []

    def find(self, ticket_id: int) -> TicketRecord:
        self.seen.append(ticket_id)
        return TicketRecord(id=ticket_id, bar_code=f"code-{ticket_id}")


def recording_client():
    store = RecordingStore()
    app = create_app(Settings(_env_file=None, ENV="test"))
    app.dependency_overrides[get_ticket_store] = lambda: store
    return TestClient(app), store


def test_ticket_page_for_numeric_id():
    r = client.get("/?id=5")
    assert r.status_code == 200, r.text
    assert r.headers["content-type"].startswith("text/html")
    m = TICKET_PAGE.fullmatch(r.text)
    assert m is not None, r.text
    uuid.UUID(m.group(1))


def test_ephemeral_bar_code_changes_between_requests():
    first = TICKET_PAGE.fullmatch(client.get("/?id=5").text).group(1)
    second = TICKET_PAGE.fullmatch(client.get("/?id=5").text).group(1)
    assert first != second


def test_non_numeric_id_uses_sentinel():
    c, store = recording_client()
    r = c.get("/?id=abc")
    assert r.status_code == 200
    assert store.seen == [SENTINEL_TICKET_ID]
    assert f"<b>code-{SENTINEL_TICKET_ID}</b>" in r.text


def test_missing_and_empty_id_use_sentinel():
    c, store = recording_client()
    assert c.get("/").status_code == 200
    assert c.get("/?id=").status_code == 200
    assert store.seen == [SENTINEL_TICKET_ID, SENTINEL_TICKET_ID]


def test_any_path_and_method_reach_handler():
    c, store = recording_client()
    assert c.get("/tickets/lookup?id=12").status_code == 200
    assert c.post("/?id=13").status_code == 200
    assert c.delete("/whatever?id=14").status_code == 200
    assert store.seen == [12, 13, 14]


def test_non_standard_methods_reach_handler():
    c, store = recording_client()
    assert c.request("TRACE", "/?id=1").status_code == 200
    assert c.request("PURGE", "/cache?id=2").status_code == 200
    assert store.seen == [1, 2]


def test_repeated_id_uses_first_value():
    c, store = recording_client()
    assert c.get("/?id=5&id=abc").status_code == 200
    assert c.get("/?id=abc&id=5").status_code == 200
    assert store.seen == [5, SENTINEL_TICKET_ID]


def test_hostname_rendered_verbatim(monkeypatch):
    monkeypatch.setattr(socket, "gethostname", lambda: "ticket-host-01")
    r = client.get("/?id=1")
    assert r.status_code == 200
    assert r.text.endswith("Brought to you by: <b>ticket-host-01</b><br/>")


def test_hostname_read_on_every_request(monkeypatch):
    names = iter(["node-a", "node-b"])
    monkeypatch.setattr(socket, "gethostname", lambda: next(names))
    assert "<b>node-a</b>" in client.get("/?id=1").text
    assert "<b>node-b</b>" in client.get("/?id=1").text


def test_real_hostname_in_page():
    r = client.get("/?id=2")
    assert TICKET_PAGE.fullmatch(r.text).group(2) == socket.gethostname()


def test_parse_ticket_id():
    assert parse_ticket_id("42") == 42
    assert parse_ticket_id(" 42 ") == 42
    assert parse_ticket_id("+7") == 7
    assert parse_ticket_id("-3") == -3
    assert parse_ticket_id("2147483647") == 2147483647
    assert parse_ticket_id("2147483648") == SENTINEL_TICKET_ID
    assert parse_ticket_id("-2147483649") == SENTINEL_TICKET_ID
    assert parse_ticket_id("1_000") == SENTINEL_TICKET_ID
    assert parse_ticket_id("\u00a042") == SENTINEL_TICKET_ID
    assert parse_ticket_id("\u0664\u0662") == SENTINEL_TICKET_ID
    assert parse_ticket_id("\t42\n") == 42
    assert parse_ticket_id("4.2") == SENTINEL_TICKET_ID
    assert parse_ticket_id("") == SENTINEL_TICKET_ID
    assert parse_ticket_id(None) == SENTINEL_TICKET_ID


def test_render_ticket_exact_markup():
    assert render_ticket("ABC", "host") == (
        "<h3>Hi Visitor!</h3>Here is your ticket: <b>ABC</b><br/>Brought to you by: <b>host</b><br/>"
    )
    assert "<b>&lt;x&gt;</b>" in render_ticket("<x>", "host")
    assert "<b>A&amp;B</b>" in render_ticket("A&B", "host")
