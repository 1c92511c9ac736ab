"""
Design (models.py)
- Purpose: Define the immutable User record and its JSON decoding.
- Inputs: Field values, or one decoded JSON element.
- Outputs: User instances.
- Side effects: None.
- Thread-safety: Frozen dataclasses; safe to share between threads.
"""

from dataclasses import dataclass
from typing import Any, List

from .errors import DecodeFailure


@dataclass(frozen=True)
class User:
    """
    Design (User)
    - Purpose: One entry of the remote user list.
    - Fields:
        id: unique integer, also the row key.
        name: display name (not validated).
        email: display string (not validated as an address).
    """
    id: int
    name: str
    email: str

    @classmethod
    def from_json(cls, item: Any) -> "User":
        """
        Purpose: Build a User from one element of the response array.
        Inputs: item (decoded JSON value)
        Outputs: User
        Raises: DecodeFailure if the element is not a user-shaped object.
        """
        if not isinstance(item, dict):
            raise DecodeFailure(f"expected an object, got {type(item).__name__}")
        user_id = item.get("id")
        # bool is an int subclass; JSON true/false is not an id
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise DecodeFailure(f"'id' must be an integer, got {user_id!r}")
        for key in ("name", "email"):
            if not isinstance(item.get(key), str):
                raise DecodeFailure(f"'{key}' must be a string in user {user_id}")
        return cls(id=user_id, name=item["name"], email=item["email"])


def decode_users(payload: Any) -> List[User]:
    """Decode a whole response body; all-or-nothing, server order kept."""
    if not isinstance(payload, list):
        raise DecodeFailure(f"expected a JSON array, got {type(payload).__name__}")
    return [User.from_json(item) for item in payload]
