"""Websocket streams for pod exec and log tailing.

Streams reuse the request header contract (`User-Agent`, `Authorization`,
`X-Drycc-Service-Key`) but not the request/response engine: once dialed, the
caller owns the connection and reads from it until it closes.
"""

from __future__ import annotations

import json
import ssl
from typing import TYPE_CHECKING, Any

import structlog
from websockets.exceptions import WebSocketException
from websockets.sync.client import ClientConnection, connect

from .api.base import Model
from .errors import TransportError

if TYPE_CHECKING:  # pragma: no cover
    from .client import Client

logger = structlog.get_logger(__name__)


def _ssl_context(client: "Client") -> ssl.SSLContext | None:
    if client.scheme != "https":
        return None
    ctx = ssl.create_default_context()
    if not client.verify_ssl:
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
    return ctx


def dial(client: "Client", path: str, payload: Model | dict[str, Any]) -> ClientConnection:
    """Open a websocket on `path`, send `payload` as the first JSON message, return the connection."""
    headers = client.auth_headers()
    user_agent = headers.pop("User-Agent")
    url = client.websocket_url(path)
    logger.debug("dialing stream", url=url)
    try:
        conn = connect(
            url,
            additional_headers=headers,
            user_agent_header=user_agent,
            origin=client.controller_url,
            ssl=_ssl_context(client),
            open_timeout=client.timeout,
        )
    except (OSError, WebSocketException) as exc:
        raise TransportError(str(exc)) from exc

    message = payload.to_dict() if isinstance(payload, Model) else payload
    try:
        conn.send(json.dumps(message))
    except WebSocketException as exc:
        conn.close()
        raise TransportError(str(exc)) from exc
    return conn
