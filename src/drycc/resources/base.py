from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

from ..client import AsyncClient

F = TypeVar("F", bound=Callable[..., Any])


def sync_only(fn: F) -> F:
    """Reject an `AsyncClient`, whose request methods return coroutines."""

    @functools.wraps(fn)
    def wrapper(c, *args, **kwargs):
        if isinstance(c, AsyncClient):
            raise TypeError(
                f"{fn.__name__}() needs a synchronous drycc.Client; "
                "with AsyncClient await request()/limited_request() directly"
            )
        return fn(c, *args, **kwargs)

    return wrapper  # type: ignore[return-value]
