from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .base import Model


@dataclass
class LimitSpec(Model):
    """Entry of GET /v2/limits/specs/."""

    id: str = ""
    cpu: Dict[str, Any] = field(default_factory=dict)
    memory: Dict[str, Any] = field(default_factory=dict)
    features: Dict[str, Any] = field(default_factory=dict)
    keywords: List[str] = field(default_factory=list)
    disabled: bool = False


@dataclass
class LimitPlan(Model):
    """Entry of GET /v2/limits/plans/."""

    _nested = {"spec": (None, LimitSpec)}

    id: str = ""
    spec: LimitSpec = field(default_factory=LimitSpec)
    cpu: int = 0
    memory: int = 0
    features: Dict[str, Any] = field(default_factory=dict)
    disabled: bool = False
