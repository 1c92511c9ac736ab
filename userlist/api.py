"""
Design (api.py)
- Purpose: The one network call of the app: GET the user list and decode it.
- Inputs: Endpoint URL (config.USERS_URL by default), optional requests.Session.
- Outputs: list[User] in server order.
- Side effects: One HTTP GET per fetch_users() call.
- Thread-safety: Meant to run on the store's worker thread; holds no mutable state
                 besides the Session, which is only closed from the UI thread at shutdown.
"""

import logging
from typing import List, Optional

import requests

from .config import REQUEST_TIMEOUT_SEC, USERS_URL
from .errors import DecodeFailure, InvalidEndpoint, TransportFailure
from .models import User, decode_users

logger = logging.getLogger(__name__)


class UsersClient:
    def __init__(self, url: str = USERS_URL, session: Optional[requests.Session] = None,
                 timeout: Optional[float] = REQUEST_TIMEOUT_SEC):
        self.url = url
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def fetch_users(self) -> List[User]:
        """
        Purpose: Download and decode the user list.
        Outputs: list[User], order as received.
        Raises:
            InvalidEndpoint: URL cannot be requested at all.
            TransportFailure: connection/TLS/timeout errors or a non-2xx status.
            DecodeFailure: body is not a JSON array of user objects.
        """
        logger.debug("GET %s", self.url)
        try:
            resp = self.session.get(self.url, timeout=self.timeout)
        except (requests.exceptions.MissingSchema,
                requests.exceptions.InvalidSchema,
                requests.exceptions.InvalidURL) as exc:
            raise InvalidEndpoint(f"{self.url!r} ({exc})") from exc
        except requests.exceptions.RequestException as exc:
            raise TransportFailure(str(exc) or type(exc).__name__) from exc

        try:
            resp.raise_for_status()
        except requests.exceptions.HTTPError as exc:
            raise TransportFailure(f"HTTP {resp.status_code} from {self.url}") from exc

        try:
            payload = resp.json()
        except ValueError as exc:
            raise DecodeFailure(f"body is not valid JSON ({exc})") from exc

        users = decode_users(payload)
        logger.debug("decoded %d users", len(users))
        return users

    def close(self) -> None:
        self.session.close()
