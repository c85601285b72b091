"""Manage an app's processes (pods)."""

from __future__ import annotations

import json
from typing import Dict, Iterable, List

from websockets.sync.client import ClientConnection

from ..api.pods import Command, ContainerState, Pod, PodIDs, PodLogsRequest, PodType
from ..client import Client, Listing
from ..streams import dial
from .base import sync_only


@sync_only
def list_pods(c: Client, app_id: str, results: int) -> Listing:
    listing = c.limited_request(f"/v2/apps/{app_id}/pods/", results)
    return listing._replace(items=[Pod.from_dict(item) for item in listing.items])


@sync_only
def describe(c: Client, app_id: str, pod_id: str, results: int) -> Listing:
    """Return the state of each container in a pod."""
    listing = c.limited_request(f"/v2/apps/{app_id}/pods/{pod_id}/describe/", results)
    return listing._replace(items=[ContainerState.from_dict(item) for item in listing.items])


@sync_only
def delete(c: Client, app_id: str, pod_ids: str) -> None:
    """Delete pods from an app; `pod_ids` is a comma separated list of pod names."""
    body = json.dumps(PodIDs(pod_ids=pod_ids).to_dict())
    c.request("DELETE", f"/v2/apps/{app_id}/pods/", body)


def exec_command(c: Client, app_id: str, pod_id: str, command: Command) -> ClientConnection:
    """Run a command in a pod's container over a websocket."""
    return dial(c, f"v2/apps/{app_id}/pods/{pod_id}/exec/", command)


def logs(c: Client, app_id: str, pod_id: str, request: PodLogsRequest) -> ClientConnection:
    """Open a websocket streaming a pod's logs."""
    return dial(c, f"v2/apps/{app_id}/pods/{pod_id}/logs/", request)


def by_type(pods: Iterable[Pod]) -> List[PodType]:
    """Group pods by process type; types and the pods within them are sorted by name."""
    grouped: Dict[str, PodType] = {}
    for pod in pods:
        grouped.setdefault(pod.type, PodType(type=pod.type)).pods.append(pod)
    for pod_type in grouped.values():
        pod_type.pods.sort(key=lambda p: p.name)
    return sorted(grouped.values(), key=lambda pt: pt.type)
