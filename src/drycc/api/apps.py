from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from .base import Model


@dataclass
class App(Model):
    created: str = ""
    id: str = ""
    owner: str = ""
    updated: str = ""
    uuid: str = ""


@dataclass
class AppCreateRequest(Model):
    """Body of POST /v2/apps/."""

    id: str | None = None


@dataclass
class AppUpdateRequest(Model):
    """Body of POST /v2/apps/<app id>/."""

    owner: str | None = None


@dataclass
class AppRunRequest(Model):
    """Body of POST /v2/apps/<app id>/run."""

    command: str = ""
    volumes: Dict[str, Any] | None = None
    timeout: int | None = None
    expires: int | None = None


@dataclass
class AppLogsRequest(Model):
    """First message sent on the /v2/apps/<app id>/logs websocket."""

    lines: int = 0
    follow: bool = False
    timeout: int = 0
