from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from .base import Model


@dataclass
class Volume(Model):
    """An app's volume.

    `owner`, `app`, `created`, `updated` and `uuid` are set by the controller
    and cannot be updated. `path` maps process types to mount paths.
    """

    owner: str | None = None
    app: str | None = None
    created: str | None = None
    updated: str | None = None
    uuid: str | None = None
    name: str | None = None
    size: str | None = None
    path: Dict[str, Any] | None = None
    type: str | None = None
    parameters: Dict[str, Any] | None = None

