"""Test doubles for requests and the store's thread hooks."""

import json

import requests

LEANNE = {"id": 1, "name": "Leanne Graham", "email": "Sincere@april.biz"}
ERVIN = {"id": 2, "name": "Ervin Howell", "email": "Shanna@melissa.tv"}


class FakeResponse:
    def __init__(self, text: str, status_code: int = 200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Stands in for requests.Session; replies with queued responses or exceptions."""

    def __init__(self):
        self.replies = []
        self.calls = []
        self.closed = False

    def reply(self, body=None, status_code=200, text=None):
        self.replies.append(FakeResponse(text if text is not None else json.dumps(body), status_code))

    def fail(self, exc: Exception):
        self.replies.append(exc)

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def close(self):
        self.closed = True


class ManualRunner:
    """Collects callables instead of running them, so tests decide when work happens."""

    def __init__(self):
        self.pending = []

    def __call__(self, fn):
        self.pending.append(fn)

    def run_all(self):
        while self.pending:
            self.pending.pop(0)()
