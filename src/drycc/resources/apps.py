from __future__ import annotations

import json
from typing import Any, Dict, Optional

from websockets.sync.client import ClientConnection

from ..api.apps import App, AppCreateRequest, AppLogsRequest, AppRunRequest, AppUpdateRequest
from ..client import Client, Listing
from ..streams import dial
from .base import sync_only


@sync_only
def list_apps(c: Client, results: int) -> Listing:
    """List the apps the user has access to."""
    listing = c.limited_request("/v2/apps/", results)
    return listing._replace(items=[App.from_dict(item) for item in listing.items])


@sync_only
def create(c: Client, app_id: str | None = None) -> App:
    """Create an app; the controller picks a name when `app_id` is empty."""
    body = json.dumps(AppCreateRequest(id=app_id or None).to_dict())
    res = c.request("POST", "/v2/apps/", body)
    return App.from_dict(res.json())


@sync_only
def get(c: Client, app_id: str) -> App:
    res = c.request("GET", f"/v2/apps/{app_id}/")
    return App.from_dict(res.json())


@sync_only
def transfer(c: Client, app_id: str, username: str) -> None:
    """Give ownership of an app to another user."""
    body = json.dumps(AppUpdateRequest(owner=username).to_dict())
    c.request("POST", f"/v2/apps/{app_id}/", body)


@sync_only
def delete(c: Client, app_id: str) -> None:
    c.request("DELETE", f"/v2/apps/{app_id}/")


@sync_only
def run(
    c: Client,
    app_id: str,
    command: str,
    volumes: Optional[Dict[str, Any]] = None,
    timeout: int | None = None,
    expires: int | None = None,
) -> Dict[str, Any]:
    """Run a one-off command in a new container of the app."""
    req = AppRunRequest(command=command, volumes=volumes or None, timeout=timeout or None, expires=expires or None)
    res = c.request("POST", f"/v2/apps/{app_id}/run/", json.dumps(req.to_dict()))
    return res.json()


def logs(c: Client, app_id: str, request: AppLogsRequest) -> ClientConnection:
    """Open a websocket streaming the app's aggregated logs."""
    return dial(c, f"v2/apps/{app_id}/logs/", request)
