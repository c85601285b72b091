import json
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

# Ensure the src layout is importable as top-level `drycc`
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_ROOT = PROJECT_ROOT / "src"
if SRC_ROOT.exists() and str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from drycc import Client  # noqa: E402


class _StubResponse:
    def __init__(self, payload=None, status=200, headers=None, api_version="2.3", content=None):
        self.status_code = status
        self.headers = {"DRYCC_PLATFORM_VERSION": "v1.2.0"}
        if api_version is not None:
            self.headers["DRYCC_API_VERSION"] = api_version
        self.headers.update(headers or {})
        if content is None:
            content = b"" if payload is None else json.dumps(payload).encode()
        self.content = content


class FakeSession:
    """Stands in for requests.Session; replies from a queue or from a handler."""

    def __init__(self, replies=(), handler=None):
        self.replies = list(replies)
        self.handler = handler
        self.calls = []

    def request(self, method, url, headers=None, data=None, timeout=None, verify=None):
        call = SimpleNamespace(method=method, url=url, headers=headers or {}, data=data, timeout=timeout, verify=verify)
        self.calls.append(call)
        reply = self.handler(call) if self.handler else self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("DRYCC_CONTROLLER_URL", "DRYCC_TOKEN", "DRYCC_SERVICE_KEY", "DRYCC_VERIFY_SSL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def reply():
    return _StubResponse


@pytest.fixture
def make_client():
    def _make(*replies, handler=None, controller_url="drycc.test.io", token="abc123", **overrides):
        client = Client(controller_url, token, **overrides)
        client.session = FakeSession(replies, handler=handler)
        return client

    return _make
