import pytest

from cardtracker.cards import CardsClient
from cardtracker.expansions import ExpansionsClient
from cardtracker.offers import OffersClient
from cardtracker.persistence import MemoryKeyValueStore
from cardtracker.session_manager import SessionStore
from cardtracker.tests.mocks import ORIGIN, FakeHTTP, make_response


@pytest.fixture
def http():
    return FakeHTTP()


@pytest.fixture
def storage():
    return MemoryKeyValueStore()


@pytest.fixture
def store(http, storage):
    return SessionStore(storage=storage, http=http, base_url="", origin=ORIGIN, timeout=5)


@pytest.fixture
def logged_in(http, store):
    http.queue("POST", "/api/auth/login", make_response(200, {"username": "alice", "roles": ["user"], "token": "T1"}))
    store.login("alice", "pw")
    return store


@pytest.fixture
def cards(logged_in, http):
    return CardsClient(logged_in, http=http, base_url="", origin=ORIGIN)


@pytest.fixture
def expansions(logged_in, http):
    return ExpansionsClient(logged_in, http=http, base_url="", origin=ORIGIN)


@pytest.fixture
def offers(logged_in, http):
    return OffersClient(logged_in, http=http, base_url="", origin=ORIGIN)
