"""HTTP engine for the Drycc controller API.

Every resource operation funnels through two primitives:
- `Client.request(method, path, body)`: one authenticated round trip
- `Client.limited_request(path, results)`: walks a paged listing until the
  caller's budget or the controller's declared total is reached

Each response is checked against `API_VERSION` before its status is
classified: a different major version raises `APIMismatchError`, a minor skew
is recorded on the response, on the client and on listings but does not fail
the call.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, NamedTuple, Optional
from urllib.parse import SplitResult, urlencode, urlsplit, urlunsplit

import httpx
import requests
import structlog
from requests.structures import CaseInsensitiveDict

from .config import settings
from .errors import (
    APIMismatchError,
    InvalidEndpointError,
    TimeoutError,
    TransportError,
    UnexpectedError,
    classify,
)
from .version import (
    API_VERSION,
    API_VERSION_HEADER,
    PLATFORM_VERSION_HEADER,
    Compatibility,
    check_compatibility,
    worst,
)

logger = structlog.get_logger(__name__)

SERVICE_KEY_HEADER = "X-Drycc-Service-Key"
TOTAL_COUNT_HEADER = "X-Total-Count"

_METHODS = {"GET", "POST", "PUT", "PATCH", "DELETE"}


@dataclass
class Response:
    status_code: int
    headers: Mapping[str, str]
    content: bytes = b""
    api_version: str | None = None
    server_version: str | None = None
    compatibility: Compatibility = Compatibility.UNKNOWN

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """Decode the body; a body that is not JSON raises `UnexpectedError`."""
        try:
            return json.loads(self.content)
        except ValueError as exc:
            raise UnexpectedError(
                "response body is not valid JSON",
                details={"status": self.status_code, "body": self.text},
                status_code=self.status_code,
                response=self,
            ) from exc


class Listing(NamedTuple):
    """Result of a paged listing.

    `compatibility` is the most severe tier observed across every page.
    """

    items: List[Any]
    count: int
    compatibility: Compatibility


def _parse_endpoint(controller_url: str | None) -> tuple[str, SplitResult]:
    if not controller_url:
        raise InvalidEndpointError("controller URL is required")
    # bare hosts default to plain http
    if not controller_url.startswith(("http://", "https://")):
        controller_url = "http://" + controller_url
    try:
        parts = urlsplit(controller_url)
        parts.port  # validates the port component
    except ValueError as exc:
        raise InvalidEndpointError(f"invalid controller URL {controller_url!r}: {exc}") from exc
    if not parts.hostname:
        raise InvalidEndpointError(f"invalid controller URL {controller_url!r}: missing host")
    return controller_url, parts


def _with_query(path: str, query: Mapping[str, Any]) -> str:
    if not query:
        return path
    sep = "&" if "?" in path else "?"
    return f"{path}{sep}{urlencode(query, doseq=True)}"


def _decode_page(resp: Response) -> tuple[list[Any], Optional[int]]:
    """Return (items, declared total) for one page of a listing."""
    data = resp.json()
    declared: Any = resp.headers.get(TOTAL_COUNT_HEADER)
    if isinstance(data, list):
        page = data
    elif isinstance(data, dict) and isinstance(data.get("results"), list):
        page = data["results"]
        if declared is None:
            declared = data.get("count")
    else:
        raise UnexpectedError(
            "listing response is not a JSON array",
            details={"status": resp.status_code, "body": resp.text},
            status_code=resp.status_code,
            response=resp,
        )
    if declared is None:
        return page, None
    try:
        return page, int(declared)
    except (TypeError, ValueError) as exc:
        raise UnexpectedError(
            f"invalid total count {declared!r}",
            details={"status": resp.status_code, "body": resp.text},
            status_code=resp.status_code,
            response=resp,
        ) from exc


class _Pager:
    """State of one paginated listing: what to request next and when to stop.

    Pages are strictly sequential since each offset depends on what the
    previous page returned. Items never exceed a positive budget.
    """

    def __init__(
        self,
        results: int,
        page_size: int,
        max_pages: int,
        params: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.results = results
        self.page_size = max(1, page_size)
        self.max_pages = max(1, max_pages)
        self.params = dict(params or {})
        self.items: List[Any] = []
        self.total: Optional[int] = None
        self.pages = 0
        self.compatibility = Compatibility.COMPATIBLE
        self._limit = 0

    def next_path(self, path: str) -> str:
        query: Dict[str, Any] = dict(self.params)
        if self.results > 0:
            self._limit = min(self.page_size, self.results - len(self.items))
            query["limit"] = self._limit
            if self.items:
                query["offset"] = len(self.items)
        return _with_query(path, query)

    def feed(self, resp: Response) -> bool:
        """Consume one page; return True if another page should be requested."""
        self.compatibility = worst(self.compatibility, resp.compatibility)
        page, declared = _decode_page(resp)
        self.pages += 1
        if declared is not None:
            self.total = declared
        self.items.extend(page)
        if self.results <= 0:
            return False
        if len(self.items) >= self.results:
            del self.items[self.results :]
            return False
        if self.total is not None and len(self.items) >= self.total:
            return False
        if not page:
            return False
        if self.total is None and len(page) < self._limit:
            return False
        if self.pages >= self.max_pages:
            logger.warning(
                "pagination page cap reached",
                pages=self.pages,
                items=len(self.items),
                total=self.total,
            )
            return False
        return True

    def result(self) -> Listing:
        count = self.total if self.total is not None else len(self.items)
        return Listing(self.items, count, self.compatibility)


class Client:
    """Connection configuration for one controller plus the transport to reach it.

    Requests only read the configuration, so a client can be shared between
    threads. The observed-version fields (`controller_api_version`,
    `controller_version`, `compatibility`) are rewritten by every response
    received; concurrent callers get last-writer-wins values.
    """

    def __init__(
        self,
        controller_url: str | None = None,
        token: str | None = None,
        *,
        verify_ssl: bool | None = None,
        **overrides: Any,
    ) -> None:
        self._settings = settings()
        for k, v in overrides.items():
            if not hasattr(self._settings, k):
                raise AttributeError(f"Unknown setting: {k}")
            setattr(self._settings, k, v)
        s = self._settings
        if controller_url is not None:
            s.controller_url = controller_url
        if token is not None:
            s.token = token
        if verify_ssl is not None:
            s.verify_ssl = verify_ssl

        self.controller_url, self._endpoint = _parse_endpoint(s.controller_url)
        self.verify_ssl = s.verify_ssl
        self.token = s.token or ""
        self.service_key = s.service_key or ""
        self.user_agent = s.user_agent
        self.timeout = s.timeout
        self.page_size = s.page_size
        self.max_pages = s.max_pages

        self.controller_api_version: str | None = None
        self.controller_version: str | None = None
        self.compatibility = Compatibility.UNKNOWN

        if not self.verify_ssl:
            logger.warning("tls certificate verification disabled", controller=self.controller_url)
        self.session = self._create_session()

    def _create_session(self) -> Any:
        session = requests.Session()
        session.verify = self.verify_ssl
        return session

    @property
    def scheme(self) -> str:
        return self._endpoint.scheme

    def auth_headers(self) -> dict[str, str]:
        """Headers identifying and authenticating this client; shared with websocket streams."""
        return {
            "User-Agent": self.user_agent,
            "Authorization": f"token {self.token}",
            SERVICE_KEY_HEADER: self.service_key,
        }

    def url_for(self, path: str) -> str:
        return self.controller_url.rstrip("/") + "/" + path.lstrip("/")

    def websocket_url(self, path: str) -> str:
        scheme = "wss" if self.scheme == "https" else "ws"
        base = self._endpoint.path.rstrip("/")
        return urlunsplit((scheme, self._endpoint.netloc, f"{base}/{path.lstrip('/')}", "", ""))

    def _prepare(self, method: str, body: Any) -> tuple[str, dict[str, str]]:
        method = method.upper()
        if method not in _METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")
        headers = self.auth_headers()
        if body is not None:
            headers["Content-Type"] = "application/json"
        return method, headers

    def _finish(self, method: str, path: str, status_code: int, headers: Mapping[str, str], content: bytes) -> Response:
        headers = CaseInsensitiveDict(dict(headers))
        api_version = headers.get(API_VERSION_HEADER)
        resp = Response(
            status_code=status_code,
            headers=headers,
            content=content or b"",
            api_version=api_version,
            server_version=headers.get(PLATFORM_VERSION_HEADER),
            compatibility=check_compatibility(api_version),
        )
        previous = self.compatibility
        self.controller_api_version = resp.api_version
        self.controller_version = resp.server_version
        self.compatibility = resp.compatibility
        logger.debug("controller response", method=method, path=path, status=status_code, api_version=api_version)

        if resp.compatibility is Compatibility.INCOMPATIBLE:
            raise APIMismatchError(
                f"API version mismatch: controller speaks {api_version}, SDK speaks {API_VERSION}",
                details={"server_version": api_version, "client_version": API_VERSION},
                status_code=status_code,
                response=resp,
            )
        if resp.compatibility is Compatibility.MINOR_SKEW and previous is not Compatibility.MINOR_SKEW:
            logger.warning("controller api minor version skew", server=api_version, client=API_VERSION)
        if not resp.ok:
            raise classify(resp)
        return resp

    def request(self, method: str, path: str, body: bytes | str | None = None) -> Response:
        """Perform one authenticated round trip; raise the classified error on failure."""
        method, headers = self._prepare(method, body)
        try:
            raw = self.session.request(
                method,
                self.url_for(path),
                headers=headers,
                data=body,
                timeout=self.timeout,
                verify=self.verify_ssl,
            )
        except requests.Timeout as e:
            raise TimeoutError("request timed out") from e
        except requests.RequestException as e:
            raise TransportError(str(e)) from e
        return self._finish(method, path, raw.status_code, raw.headers, raw.content)

    def limited_request(
        self,
        path: str,
        results: int,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Listing:
        """Fetch up to `results` items from a listing (one default-sized page if <= 0).

        Returns a `Listing` of (items, count, compatibility): count is the
        controller's declared total, compatibility the most severe tier seen
        on any page. A failing page aborts the whole listing; no partial results are returned.
        """
        pager = _Pager(results, self.page_size, self.max_pages, params)
        while True:
            resp = self.request("GET", pager.next_path(path))
            if not pager.feed(resp):
                break
        return pager.result()


class AsyncClient(Client):
    """Asynchronous variant using httpx.AsyncClient."""

    def _create_session(self) -> Any:
        return None

    async def request(self, method: str, path: str, body: bytes | str | None = None) -> Response:
        method, headers = self._prepare(method, body)
        try:
            async with httpx.AsyncClient(verify=self.verify_ssl, timeout=self.timeout) as session:
                raw = await session.request(method, self.url_for(path), headers=headers, content=body)
        except httpx.TimeoutException as e:
            raise TimeoutError("request timed out") from e
        except httpx.HTTPError as e:
            raise TransportError(str(e)) from e
        return self._finish(method, path, raw.status_code, raw.headers, raw.content)

    async def limited_request(
        self,
        path: str,
        results: int,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Listing:
        pager = _Pager(results, self.page_size, self.max_pages, params)
        while True:
            resp = await self.request("GET", pager.next_path(path))
            if not pager.feed(resp):
                break
        return pager.result()
