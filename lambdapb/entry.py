#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Host registration entry point.

``start`` wraps an application function and hands the resulting
``Handler`` to a host runtime. Receiving requests and sending responses is
the host's job; any object exposing ``start_handler(handler)`` works.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .core.data.config import HandlerConfig
from .core.handler import Handler, new_handler


@runtime_checkable
class HostRuntime(Protocol):
    """
    Execution environment that delivers payloads to a handler.
    """

    def start_handler(self, handler: Handler) -> Any:
        ...


def start(func: Any, host: HostRuntime, config: Optional[HandlerConfig] = None) -> Any:
    """
    Wrap ``func`` and register it with ``host``.

    An unsupported ``func`` is still registered: its handler answers every
    invocation with the validation error. Returns whatever
    ``host.start_handler`` returns, which for blocking hosts is never.
    """
    if not isinstance(host, HostRuntime):
        raise TypeError(f"host must provide start_handler(handler), got {type(host).__name__}")
    return host.start_handler(new_handler(func, config=config))
