"""Manage an app's volumes."""

from __future__ import annotations

import json

from ..api.volumes import Volume
from ..client import Client, Listing
from .base import sync_only


@sync_only
def list_volumes(c: Client, app_id: str, results: int) -> Listing:
    listing = c.limited_request(f"/v2/apps/{app_id}/volumes/", results)
    return listing._replace(items=[Volume.from_dict(item) for item in listing.items])


@sync_only
def get(c: Client, app_id: str, name: str) -> Volume:
    res = c.request("GET", f"/v2/apps/{app_id}/volumes/{name}/")
    return Volume.from_dict(res.json())


@sync_only
def create(c: Client, app_id: str, volume: Volume) -> Volume:
    body = json.dumps(volume.to_dict())
    res = c.request("POST", f"/v2/apps/{app_id}/volumes/", body)
    return Volume.from_dict(res.json())


@sync_only
def expand(c: Client, app_id: str, volume: Volume) -> Volume:
    """Resize `volume.name` to `volume.size`."""
    body = json.dumps(volume.to_dict())
    res = c.request("PATCH", f"/v2/apps/{app_id}/volumes/{volume.name}/", body)
    return Volume.from_dict(res.json())


@sync_only
def delete(c: Client, app_id: str, name: str) -> None:
    c.request("DELETE", f"/v2/apps/{app_id}/volumes/{name}/")


@sync_only
def mount(c: Client, app_id: str, name: str, volume: Volume) -> Volume:
    """Patch the mount paths of a volume and create a new release.

    For each process type key in `volume.path`:
    - missing on the volume: it is mounted
    - already mounted: the path is overwritten
    - set to None: it is unmounted
    - left out: it remains unchanged

    An empty `volume` raises `ConflictError`; unmounting a key that does not
    exist raises `UnprocessableError`.
    """
    body = json.dumps(volume.to_dict())
    res = c.request("PATCH", f"/v2/apps/{app_id}/volumes/{name}/path/", body)
    return Volume.from_dict(res.json())
