import pytest
import requests

from drycc import (
    API_VERSION,
    APIMismatchError,
    Client,
    Compatibility,
    InvalidEndpointError,
    NotFoundError,
    TimeoutError,
    TransportError,
    config as cfg,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("drycc.test.io", "http://drycc.test.io"),
        ("localhost:8000", "http://localhost:8000"),
        ("http://drycc.test.io", "http://drycc.test.io"),
        ("https://drycc.test.io", "https://drycc.test.io"),
        ("https://drycc.test.io:8443/", "https://drycc.test.io:8443/"),
    ],
)
def test_controller_url_normalization(raw, expected):
    client = Client(raw, "abc123")
    assert client.controller_url == expected


@pytest.mark.parametrize("raw", ["", None, "http://[::1", "drycc.test.io:notaport", "http://"])
def test_invalid_controller_url(raw):
    with pytest.raises(InvalidEndpointError):
        Client(raw, "abc123")


def test_construction_defaults():
    client = Client("drycc.test.io", "abc123")
    assert client.user_agent == f"Drycc Python SDK V{API_VERSION}"
    assert client.verify_ssl is True
    assert client.service_key == ""
    assert client.controller_api_version is None
    assert client.compatibility is Compatibility.UNKNOWN


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("DRYCC_CONTROLLER_URL", "https://env.drycc.io")
    monkeypatch.setenv("DRYCC_TOKEN", "env-token")
    monkeypatch.setenv("DRYCC_VERIFY_SSL", "false")
    client = Client()
    assert client.controller_url == "https://env.drycc.io"
    assert client.token == "env-token"
    assert client.verify_ssl is False
    assert client.session.verify is False


def test_explicit_arguments_beat_settings():
    with cfg(controller_url="cfg.drycc.io", token="cfg-token", page_size=25):
        client = Client("arg.drycc.io", verify_ssl=False)
    assert client.controller_url == "http://arg.drycc.io"
    assert client.token == "cfg-token"
    assert client.page_size == 25
    assert client.verify_ssl is False


def test_unknown_override_rejected():
    with pytest.raises(AttributeError):
        Client("drycc.test.io", "abc123", no_such_setting=1)


def test_request_headers_and_url(make_client, reply):
    client = make_client(reply({"id": "myapp"}), service_key="svc-key")
    res = client.request("GET", "/v2/apps/myapp/")
    call = client.session.calls[0]
    assert call.method == "GET"
    assert call.url == "http://drycc.test.io/v2/apps/myapp/"
    assert call.headers["Authorization"] == "token abc123"
    assert call.headers["X-Drycc-Service-Key"] == "svc-key"
    assert call.headers["User-Agent"] == client.user_agent
    assert "Content-Type" not in call.headers
    assert call.data is None
    assert call.verify is True
    assert res.json() == {"id": "myapp"}


def test_service_key_header_sent_empty_when_unset(make_client, reply):
    client = make_client(reply({}))
    client.request("GET", "/v2/apps/")
    assert client.session.calls[0].headers["X-Drycc-Service-Key"] == ""


def test_request_body_is_json(make_client, reply):
    client = make_client(reply({"id": "myapp"}, status=201))
    client.request("post", "/v2/apps/", '{"id": "myapp"}')
    call = client.session.calls[0]
    assert call.method == "POST"
    assert call.data == '{"id": "myapp"}'
    assert call.headers["Content-Type"] == "application/json"


def test_unsupported_method(make_client):
    client = make_client()
    with pytest.raises(ValueError):
        client.request("HEAD", "/v2/apps/")
    assert client.session.calls == []


def test_insecure_client_disables_verification(make_client, reply):
    client = make_client(reply({}), verify_ssl=False)
    client.request("GET", "/v2/apps/")
    assert client.session.calls[0].verify is False


def test_transport_failure(make_client):
    cause = requests.ConnectionError("connection refused")
    client = make_client(cause)
    with pytest.raises(TransportError) as excinfo:
        client.request("GET", "/v2/apps/")
    assert excinfo.value.__cause__ is cause
    assert excinfo.value.code == "transport"


def test_timeout_is_a_transport_failure(make_client):
    client = make_client(requests.Timeout("read timed out"))
    with pytest.raises(TimeoutError) as excinfo:
        client.request("GET", "/v2/apps/")
    assert isinstance(excinfo.value, TransportError)


def test_observed_versions_recorded(make_client, reply):
    client = make_client(reply({}))
    res = client.request("GET", "/v2/apps/")
    assert res.compatibility is Compatibility.COMPATIBLE
    assert client.controller_api_version == "2.3"
    assert client.controller_version == "v1.2.0"
    assert client.compatibility is Compatibility.COMPATIBLE


def test_minor_skew_does_not_fail(make_client, reply):
    client = make_client(reply({"id": "myapp"}, api_version="2.1"))
    res = client.request("GET", "/v2/apps/myapp/")
    assert res.ok
    assert res.compatibility is Compatibility.MINOR_SKEW
    assert client.compatibility is Compatibility.MINOR_SKEW
    assert client.controller_api_version == "2.1"
    assert res.json() == {"id": "myapp"}


def test_missing_version_header_does_not_fail(make_client, reply):
    client = make_client(reply({}, api_version=None))
    res = client.request("GET", "/v2/apps/")
    assert res.compatibility is Compatibility.UNKNOWN
    assert client.controller_api_version is None


@pytest.mark.parametrize("status", [200, 201, 404, 500])
def test_major_mismatch_fails_regardless_of_status(make_client, reply, status):
    client = make_client(reply({"detail": "whatever"}, status=status, api_version="3.0"))
    with pytest.raises(APIMismatchError) as excinfo:
        client.request("GET", "/v2/apps/")
    err = excinfo.value
    assert err.code == "api_mismatch"
    assert err.response.status_code == status
    assert err.details == {"server_version": "3.0", "client_version": API_VERSION}
    assert client.compatibility is Compatibility.INCOMPATIBLE


def test_observed_versions_recorded_on_error(make_client, reply):
    client = make_client(reply({"detail": "Not found."}, status=404, api_version="2.2"))
    with pytest.raises(NotFoundError):
        client.request("GET", "/v2/apps/missing/")
    assert client.controller_api_version == "2.2"
    assert client.compatibility is Compatibility.MINOR_SKEW


def test_websocket_url():
    assert Client("https://drycc.test.io", "t").websocket_url("v2/apps/a/logs/") == "wss://drycc.test.io/v2/apps/a/logs/"
    assert Client("drycc.test.io:8000", "t").websocket_url("/v2/apps/a/logs/") == "ws://drycc.test.io:8000/v2/apps/a/logs/"
