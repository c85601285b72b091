from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover
    from .client import Response


class ErrorKind(str, Enum):
    INVALID_ENDPOINT = "invalid_endpoint"
    TRANSPORT = "transport"
    API_MISMATCH = "api_mismatch"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNPROCESSABLE = "unprocessable"
    UNEXPECTED = "unexpected"


class SDKError(Exception):
    """Base error for SDK exceptions (construction/transport/controller)."""

    kind: ErrorKind = ErrorKind.UNEXPECTED

    def __init__(
        self,
        message: str = "",
        code: str | None = None,
        details: dict | None = None,
        *,
        status_code: int | None = None,
        response: "Response | None" = None,
    ) -> None:
        super().__init__(message)
        self.code = code or self.kind.value
        self.details = details or {}
        self.status_code = status_code
        self.response = response


class InvalidEndpointError(SDKError):
    """Controller URL could not be parsed."""

    kind = ErrorKind.INVALID_ENDPOINT


class TransportError(SDKError):
    """Network/connection/TLS failure."""

    kind = ErrorKind.TRANSPORT


class TimeoutError(TransportError):
    """Deadline exceeded."""

    pass


class APIMismatchError(SDKError):
    """Controller advertises a different major API version than the SDK."""

    kind = ErrorKind.API_MISMATCH


class UnauthorizedError(SDKError):
    """401 Unauthorized."""

    kind = ErrorKind.UNAUTHORIZED


class ForbiddenError(SDKError):
    """403 Forbidden."""

    kind = ErrorKind.FORBIDDEN


class NotFoundError(SDKError):
    """404 Not Found."""

    kind = ErrorKind.NOT_FOUND


class ConflictError(SDKError):
    """409 Conflict, e.g. mounting an empty volume spec."""

    kind = ErrorKind.CONFLICT


class UnprocessableError(SDKError):
    """422 Unprocessable Entity, e.g. unmounting a path key that does not exist."""

    kind = ErrorKind.UNPROCESSABLE


class UnexpectedError(SDKError):
    """Any other non-2xx status; details carry the raw status and body."""

    kind = ErrorKind.UNEXPECTED


STATUS_MAP: dict[int, type[SDKError]] = {
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: UnprocessableError,
}


def _error_message(resp: "Response") -> str:
    try:
        data: Any = resp.json()
    except UnexpectedError:
        data = None
    if isinstance(data, dict) and data.get("detail"):
        return str(data["detail"])
    return resp.text or f"HTTP {resp.status_code}"


def classify(resp: "Response") -> SDKError:
    """Map a non-2xx response to its error kind; the response stays attached."""
    cls = STATUS_MAP.get(resp.status_code, UnexpectedError)
    details: dict[str, Any] = {}
    if cls is UnexpectedError:
        details = {"status": resp.status_code, "body": resp.text}
    return cls(_error_message(resp), details=details, status_code=resp.status_code, response=resp)
