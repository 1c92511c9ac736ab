import pytest

from tests.fakes import ERVIN, LEANNE
from userlist.errors import DecodeFailure
from userlist.models import User, decode_users


def test_decode_keeps_server_order_and_duplicates():
    payload = [ERVIN, LEANNE, ERVIN]
    users = decode_users(payload)
    assert [u.id for u in users] == [2, 1, 2]
    assert users[1] == User(1, "Leanne Graham", "Sincere@april.biz")


def test_extra_keys_are_ignored():
    user = User.from_json({**LEANNE, "username": "Bret", "address": {"city": "Gwenborough"}})
    assert user == User(1, "Leanne Graham", "Sincere@april.biz")


def test_user_is_immutable():
    user = User(1, "a", "b")
    with pytest.raises(AttributeError):
        user.name = "c"


@pytest.mark.parametrize("payload", [{"not": "an array"}, "users", None, 3])
def test_non_array_payload_is_decode_failure(payload):
    with pytest.raises(DecodeFailure):
        decode_users(payload)


@pytest.mark.parametrize("item", [
    {"name": "x", "email": "y"},
    {"id": "1", "name": "x", "email": "y"},
    {"id": True, "name": "x", "email": "y"},
    {"id": 1, "name": None, "email": "y"},
    {"id": 1, "name": "x"},
    ["id", 1],
])
def test_bad_element_fails_whole_payload(item):
    with pytest.raises(DecodeFailure):
        decode_users([LEANNE, item])
