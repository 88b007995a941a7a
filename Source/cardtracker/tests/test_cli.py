import json

import pytest

from cardtracker import cli
from cardtracker.client import CardTrackerAPI
from cardtracker.persistence import MemoryKeyValueStore
from cardtracker.tests.mocks import ORIGIN, FakeHTTP, body, make_response, query


@pytest.fixture
def api():
    return CardTrackerAPI(storage=MemoryKeyValueStore(), base_url="", origin=ORIGIN, http=FakeHTTP())


def login(api):
    api.http.queue("POST", "/api/auth/login", make_response(200, {"username": "alice", "roles": ["user"], "token": "T1"}))
    assert cli.main(["login", "-u", "alice", "-p", "pw"], api=api) == 0


def test_commands_require_login(api, capsys):
    assert cli.main(["expansions", "list"], api=api) == 1
    assert "Not logged in" in capsys.readouterr().out
    assert api.http.sent == []


def test_login_then_list_offers(api, capsys):
    login(api)
    api.http.queue("GET", "/api/offers/by-card-name", make_response(200, [
        {"id": 7, "listedAt": "2024-05-01", "amount": "10.00", "currency": "PLN"},
    ]))
    assert cli.main(["offers", "list", "EXP1", "Charizard", "--from", "2024-01-01"], api=api) == 0

    printed = capsys.readouterr().out
    assert "Logged in as alice" in printed
    assert json.loads(printed[printed.index("[\n"):]) == [
        {"id": 7, "listed_at": "2024-05-01", "amount": "10.00", "currency": "PLN"},
    ]
    assert query(api.http.last) == {"expId": "EXP1", "cardName": "Charizard", "from": "2024-01-01"}


def test_card_patch_clear_flag(api):
    login(api)
    api.http.queue("PATCH", "/api/cards/001", make_response(204))
    assert cli.main(["cards", "patch", "EXP1", "001", "--clear-rarity"], api=api) == 0
    assert body(api.http.last) == {"rarity": None}


def test_offer_patch_mixed_fields(api):
    login(api)
    api.http.queue("PATCH", "/api/offers/3", make_response(204))
    assert cli.main(["offers", "patch", "3", "--amount", "9.99", "--clear-listed-at"], api=api) == 0
    assert body(api.http.last) == {"amount": "9.99", "listedAt": None}


def test_whoami_hides_token(api, capsys):
    login(api)
    capsys.readouterr()
    assert cli.main(["whoami"], api=api) == 0
    out = json.loads(capsys.readouterr().out)
    assert out == {"username": "alice", "roles": ["user"], "hasToken": True}


def test_backend_error_is_reported(api, capsys):
    login(api)
    api.http.queue("DELETE", "/api/offers/3", make_response(500))
    assert cli.main(["offers", "delete", "3"], api=api) == 1
    assert "[ERROR] Failed to delete offer" in capsys.readouterr().out


def test_failed_login_is_reported(api, capsys):
    api.http.queue("POST", "/api/auth/login", make_response(401))
    assert cli.main(["login", "-u", "alice", "-p", "bad"], api=api) == 1
    assert "[ERROR] Login failed" in capsys.readouterr().out


def test_logout(api, capsys):
    login(api)
    assert cli.main(["logout"], api=api) == 0
    assert not api.session.is_authenticated
    assert cli.main(["cards", "list", "Base"], api=api) == 1


def test_logout_without_session_succeeds(api, capsys):
    assert cli.main(["logout"], api=api) == 0
    assert "[INFO] Logged out" in capsys.readouterr().out
    assert api.http.sent == []


def test_mutations_print_confirmation(api, capsys):
    login(api)
    api.http.queue("POST", "/api/expansions", make_response(204))
    api.http.queue("DELETE", "/api/cards/by-number", make_response(204))
    capsys.readouterr()
    assert cli.main(["expansions", "upsert", "EXP1", "Base Set"], api=api) == 0
    assert cli.main(["cards", "delete", "EXP1", "001"], api=api) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["[INFO] Upserted expansion EXP1", "[INFO] Deleted card EXP1/001"]
