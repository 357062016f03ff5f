"""Callback shape resolution for the extraction pipeline.

Every emission point can feed either a one-argument consumer ``(value)`` or a
two-argument consumer ``(value, page)``.  The shape is decided once, when the
callback is registered, and baked into a small adapter; emitting a value
afterwards involves no introspection.
"""
from __future__ import annotations

import inspect
from typing import Any, Callable, Optional, TypeVar

from site_spider.page.models import PageRecord

__all__ = ["Emitter", "wants_origin", "as_emitter"]

T = TypeVar("T")

#: What the pipeline calls for every emitted value.
Emitter = Callable[[T, PageRecord], None]

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def wants_origin(callback: Callable[..., Any]) -> bool:
    """Return True when *callback* declares at least two positional parameters.

    ``*args``-only callables and callables whose signature cannot be read are
    treated as one-argument consumers.
    """
    try:
        signature = inspect.signature(callback)
    except (TypeError, ValueError):
        return False
    positional = [p for p in signature.parameters.values() if p.kind in _POSITIONAL]
    return len(positional) >= 2


def as_emitter(callback: Callable[..., Any], include_origin: Optional[bool] = None) -> Emitter:
    """Wrap *callback* into an ``(value, page)`` emitter.

    *include_origin* overrides the signature inspection when given.
    """
    if include_origin is None:
        include_origin = wants_origin(callback)

    if include_origin:
        return callback

    def _value_only(value: Any, page: PageRecord) -> None:
        callback(value)

    return _value_only
