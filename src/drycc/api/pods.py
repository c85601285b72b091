from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .base import Model


@dataclass
class Pod(Model):
    release: str = ""
    type: str = ""
    name: str = ""
    state: str = ""
    ready: str = ""
    restarts: int = 0
    started: str = ""


@dataclass
class PodType:
    """Pods of an app grouped under one process type."""

    type: str
    pods: List[Pod] = field(default_factory=list)


@dataclass
class ContainerState(Model):
    """One container entry of GET /v2/apps/<app id>/pods/<pod id>/describe/."""

    _aliases = {"last_state": "lastState", "restart_count": "restartCount"}

    container: str = ""
    image: str = ""
    command: List[str] = field(default_factory=list)
    args: List[str] = field(default_factory=list)
    state: Dict[str, Any] = field(default_factory=dict)
    last_state: Dict[str, Any] = field(default_factory=dict)
    ready: bool = False
    restart_count: int = 0
    status: str = ""
    reason: str = ""
    message: str = ""


@dataclass
class Command(Model):
    """First message sent on the pod exec websocket."""

    tty: bool = False
    stdin: bool = False
    command: List[str] = field(default_factory=list)


@dataclass
class PodLogsRequest(Model):
    """First message sent on the pod logs websocket."""

    lines: int = 0
    follow: bool = False
    container: str = ""


@dataclass
class PodIDs(Model):
    """Body of DELETE /v2/apps/<app id>/pods/; a comma separated list of pod names."""

    pod_ids: str = ""
