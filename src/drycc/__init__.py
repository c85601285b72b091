"""
drycc – Python SDK for the Drycc controller API

Create a client holding the controller URL and token, then pass it to the
resource operations, which use it to make requests:

    from drycc import Client
    from drycc.resources import apps

    client = Client("drycc.example.com", "abc123")
    items, count, compatibility = apps.list_apps(client, 100)

Public surface:
- Engine: Client, AsyncClient, Response, Listing
- Versioning: API_VERSION, Compatibility, check_compatibility
- Config: configure, config (context manager), settings
- Errors: SDKError and one subclass per error kind
"""

__version__ = "0.1.0"

from .config import configure, config, settings
from .version import API_VERSION, DEFAULT_USER_AGENT, Compatibility, check_compatibility
from .client import Client, AsyncClient, Listing, Response
from .errors import (
    ErrorKind,
    SDKError,
    InvalidEndpointError,
    TransportError,
    TimeoutError,
    APIMismatchError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    ConflictError,
    UnprocessableError,
    UnexpectedError,
)

__all__ = [
    # Config
    "configure",
    "config",
    "settings",
    # Engine
    "Client",
    "AsyncClient",
    "Response",
    "Listing",
    # Versioning
    "API_VERSION",
    "DEFAULT_USER_AGENT",
    "Compatibility",
    "check_compatibility",
    # Errors
    "ErrorKind",
    "SDKError",
    "InvalidEndpointError",
    "TransportError",
    "TimeoutError",
    "APIMismatchError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "UnprocessableError",
    "UnexpectedError",
    "__version__",
]
