"""Manage an app's configuration values."""

from __future__ import annotations

import json
from typing import Iterable

from ..api.config import Config, ConfigSet, ConfigUnset, ConfigValue
from ..client import Client
from .base import sync_only


@sync_only
def get(c: Client, app_id: str) -> Config:
    res = c.request("GET", f"/v2/apps/{app_id}/config/")
    return Config.from_dict(res.json())


@sync_only
def set_values(c: Client, app_id: str, values: Iterable[ConfigValue]) -> Config:
    """Set config values and create a new release.

    Values that exist are overwritten; values left out remain unchanged.
    """
    body = json.dumps(ConfigSet(values=list(values)).to_dict())
    res = c.request("POST", f"/v2/apps/{app_id}/config/", body)
    return Config.from_dict(res.json())


@sync_only
def unset_values(c: Client, app_id: str, values: Iterable[ConfigValue]) -> Config:
    """Remove config values, matched by name, ptype and group."""
    nulled = [ConfigValue(name=v.name, value=None, ptype=v.ptype, group=v.group) for v in values]
    body = json.dumps(ConfigUnset(values=nulled).to_dict())
    res = c.request("POST", f"/v2/apps/{app_id}/config/", body)
    return Config.from_dict(res.json())
