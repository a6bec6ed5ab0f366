"""Shared test doubles for resumeup tests."""

import json
import logging

import pytest

from resumeup.auth.credentials import ClientIdentity, Credentials, TokenPair
from resumeup.errors import NotificationError


class FakeResponse:
    def __init__(self, body=None, status: int = 200, text=None):
        self.status_code = status
        self._body = body
        if text is not None:
            self.text = text
        else:
            self.text = json.dumps(body) if body is not None else ""

    def json(self):
        if self._body is None:
            raise ValueError("No JSON body")
        return self._body


class FakeSession:
    """requests.Session stand-in; queued items are responses or exceptions."""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    def _next(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self.responses:
            raise AssertionError(f"No response queued for {method} {url}")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def get(self, url, **kwargs):
        return self._next("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._next("POST", url, **kwargs)


class MemoryStore:
    """In-memory CredentialStore."""

    def __init__(self, access="old-access", refresh="old-refresh"):
        self.credentials = Credentials(
            identity=ClientIdentity(client_id="cid", client_secret="secret"),
            tokens=TokenPair(access_token=access, refresh_token=refresh),
        )
        self.saved = []

    def load(self):
        return self.credentials

    def save(self, tokens):
        self.saved.append(tokens)


class RecordingNotifier:
    def __init__(self, fail=False):
        self.messages = []
        self.fail = fail

    def send(self, text):
        if self.fail:
            raise NotificationError("telegram down")
        self.messages.append(text)


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Undo handlers installed by setup_logging() in CLI/log tests."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def make_item(
    resume_id="r1",
    title="Dev",
    access_type="clients",
    can_publish=True,
    next_publish_at=None,
):
    item = {"id": resume_id, "title": title, "can_publish_or_update": can_publish}
    if access_type is not None:
        item["access"] = {"type": {"id": access_type}}
    if next_publish_at is not None:
        item["next_publish_at"] = next_publish_at
    return item
