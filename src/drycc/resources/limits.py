from __future__ import annotations

from typing import Any, Dict

from ..api.limits import LimitPlan, LimitSpec
from ..client import Client, Listing
from .base import sync_only


@sync_only
def specs(c: Client, keywords: str = "", results: int = 0) -> Listing:
    """List limit specs, optionally filtered by comma separated keywords."""
    params: Dict[str, Any] = {}
    if keywords:
        params["keywords"] = keywords
    listing = c.limited_request("/v2/limits/specs/", results, params)
    return listing._replace(items=[LimitSpec.from_dict(item) for item in listing.items])


@sync_only
def plans(c: Client, spec_id: str = "", cpu: int = 0, memory: int = 0, results: int = 0) -> Listing:
    """List limit plans; zero or empty filters are not sent."""
    params: Dict[str, Any] = {}
    if spec_id:
        params["spec-id"] = spec_id
    if cpu:
        params["cpu"] = cpu
    if memory:
        params["memory"] = memory
    listing = c.limited_request("/v2/limits/plans/", results, params)
    return listing._replace(items=[LimitPlan.from_dict(item) for item in listing.items])


@sync_only
def get_plan(c: Client, plan_id: str) -> LimitPlan:
    res = c.request("GET", f"/v2/limits/plans/{plan_id}/")
    return LimitPlan.from_dict(res.json())
