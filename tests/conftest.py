import pytest

from tests.fakes import FakeSession
from userlist.api import UsersClient
from userlist.store import UserStore, call_inline


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(session):
    return UsersClient(url="https://example.test/users", session=session)


@pytest.fixture
def store(client):
    """Store whose fetches complete synchronously inside fetch_users()."""
    s = UserStore(client=client, run_async=call_inline, dispatch=call_inline)
    yield s
    s.close()
