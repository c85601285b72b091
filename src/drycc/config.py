from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, asdict, replace
from typing import Any
import os

from .version import DEFAULT_USER_AGENT

_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class Settings:
    """SDK configuration with environment overlay.

    Values passed to `drycc.Client` explicitly always win over these defaults.
    """

    controller_url: str | None = None
    token: str | None = None
    service_key: str | None = None
    # Disabling verification trusts any certificate the controller presents.
    verify_ssl: bool = True
    user_agent: str = DEFAULT_USER_AGENT

    timeout: float = 30.0

    # pagination knobs
    page_size: int = 100
    max_pages: int = 1000


_global_settings = Settings()
_stack: list[Settings] = []


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() not in _FALSE_VALUES


def _from_env(s: Settings) -> Settings:
    return replace(
        s,
        controller_url=os.getenv("DRYCC_CONTROLLER_URL", s.controller_url),
        token=os.getenv("DRYCC_TOKEN", s.token),
        service_key=os.getenv("DRYCC_SERVICE_KEY", s.service_key),
        verify_ssl=_env_bool("DRYCC_VERIFY_SSL", s.verify_ssl),
    )


def configure(**kwargs: Any) -> None:
    """Configure global SDK defaults.

    Example:
        configure(controller_url="drycc.example.com", page_size=50)
    """
    global _global_settings
    for k, v in kwargs.items():
        if not hasattr(_global_settings, k):
            raise AttributeError(f"Unknown setting: {k}")
        setattr(_global_settings, k, v)


@contextmanager
def config(**kwargs: Any):
    """Temporarily apply settings within a context."""
    global _global_settings
    _stack.append(Settings(**asdict(_global_settings)))
    try:
        configure(**kwargs)
        yield
    finally:
        prev = _stack.pop()
        _global_settings = prev


def settings() -> Settings:
    """Return the effective merged settings (env overlaid on current)."""
    return _from_env(_global_settings)
