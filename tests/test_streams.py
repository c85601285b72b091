import json
import ssl

import pytest

from drycc import AsyncClient, Client, TransportError
from drycc import streams as streams_mod
from drycc.api import AppLogsRequest, Command, PodLogsRequest
from drycc.resources import apps, ps


class _StubConnection:
    def __init__(self):
        self.sent = []
        self.closed = False

    def send(self, message):
        self.sent.append(message)

    def close(self):
        self.closed = True


def _patch_connect(monkeypatch, error=None):
    captured = {}

    def _connect(url, **kwargs):
        captured["url"] = url
        captured.update(kwargs)
        if error is not None:
            raise error
        captured["conn"] = _StubConnection()
        return captured["conn"]

    monkeypatch.setattr(streams_mod, "connect", _connect)
    return captured


def test_exec_over_wss(monkeypatch):
    captured = _patch_connect(monkeypatch)
    client = Client("https://drycc.test.io", "abc123", service_key="svc")
    conn = ps.exec_command(client, "myapp", "myapp-web-a", Command(tty=True, command=["/bin/sh"]))

    assert captured["url"] == "wss://drycc.test.io/v2/apps/myapp/pods/myapp-web-a/exec/"
    assert captured["additional_headers"] == {"Authorization": "token abc123", "X-Drycc-Service-Key": "svc"}
    assert captured["user_agent_header"] == client.user_agent
    assert captured["origin"] == "https://drycc.test.io"
    assert isinstance(captured["ssl"], ssl.SSLContext)
    assert captured["ssl"].verify_mode == ssl.CERT_REQUIRED
    assert json.loads(conn.sent[0]) == {"tty": True, "stdin": False, "command": ["/bin/sh"]}


def test_pod_logs_over_ws(monkeypatch):
    captured = _patch_connect(monkeypatch)
    client = Client("drycc.test.io", "abc123")
    conn = ps.logs(client, "myapp", "myapp-web-a", PodLogsRequest(lines=10, follow=True, container="web"))
    assert captured["url"] == "ws://drycc.test.io/v2/apps/myapp/pods/myapp-web-a/logs/"
    assert captured["ssl"] is None
    assert json.loads(conn.sent[0]) == {"lines": 10, "follow": True, "container": "web"}


def test_app_logs(monkeypatch):
    captured = _patch_connect(monkeypatch)
    client = Client("drycc.test.io", "abc123")
    apps.logs(client, "myapp", AppLogsRequest(lines=100))
    assert captured["url"] == "ws://drycc.test.io/v2/apps/myapp/logs/"
    assert json.loads(captured["conn"].sent[0]) == {"lines": 100, "follow": False, "timeout": 0}


def test_insecure_stream_skips_verification(monkeypatch):
    captured = _patch_connect(monkeypatch)
    client = Client("https://drycc.test.io", "abc123", verify_ssl=False)
    apps.logs(client, "myapp", AppLogsRequest())
    assert captured["ssl"].verify_mode == ssl.CERT_NONE
    assert captured["ssl"].check_hostname is False


def test_dial_failure_is_transport_error(monkeypatch):
    cause = ConnectionRefusedError("refused")
    _patch_connect(monkeypatch, error=cause)
    client = Client("drycc.test.io", "abc123")
    with pytest.raises(TransportError) as excinfo:
        ps.logs(client, "myapp", "myapp-web-a", PodLogsRequest())
    assert excinfo.value.__cause__ is cause


def test_streams_accept_async_client(monkeypatch):
    captured = _patch_connect(monkeypatch)
    client = AsyncClient("drycc.test.io", "abc123")
    ps.exec_command(client, "myapp", "myapp-web-a", Command(command=["ls"]))
    assert captured["url"] == "ws://drycc.test.io/v2/apps/myapp/pods/myapp-web-a/exec/"
