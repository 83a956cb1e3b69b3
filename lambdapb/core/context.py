#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Invocation context carried alongside each payload.

Handlers receive the context as their first argument. Any object with the
``grpc.RpcContext`` method set qualifies, so a gRPC ``ServicerContext`` can
be passed straight through; ``InvocationContext`` is a standalone
implementation for hosts that are not gRPC servers.
"""

import threading
import time
import uuid
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, runtime_checkable

import grpc


@runtime_checkable
class InvocationContextLike(Protocol):
    """
    Cancellation/deadline capability required of a handler's first argument.
    """

    def is_active(self) -> bool:
        ...

    def time_remaining(self) -> Optional[float]:
        ...

    def cancel(self) -> None:
        ...

    def add_callback(self, callback: Callable[[], None]) -> bool:
        ...


class InvocationContext(grpc.RpcContext):
    """
    Deadline, cancellation and trace identifiers for one invocation.

    Usage Example:
        >>> ctx = InvocationContext.with_timeout(3.0, trace_id="abc")
        >>> ctx.is_active()
        True
        >>> ctx.cancel()
        >>> ctx.is_active()
        False
    """

    def __init__(
        self,
        deadline: Optional[float] = None,
        request_id: Optional[str] = None,
        trace_id: Optional[str] = None,
        values: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.deadline = deadline
        self.request_id = request_id or uuid.uuid4().hex
        self.trace_id = trace_id or uuid.uuid4().hex
        self._values: Dict[str, Any] = dict(values or {})
        self._lock = threading.Lock()
        self._cancelled = False
        self._callbacks: List[Callable[[], None]] = []

    @classmethod
    def background(cls) -> "InvocationContext":
        """Context that is never cancelled and has no deadline."""
        return cls()

    @classmethod
    def with_timeout(cls, seconds: float, **kwargs: Any) -> "InvocationContext":
        if seconds < 0:
            raise ValueError("timeout must be non-negative")
        return cls(deadline=time.time() + seconds, **kwargs)

    @classmethod
    def with_deadline(cls, deadline: float, **kwargs: Any) -> "InvocationContext":
        return cls(deadline=deadline, **kwargs)

    def value(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    @property
    def cancelled(self) -> bool:
        with self._lock:
            return self._cancelled

    def is_active(self) -> bool:
        if self.cancelled:
            return False
        remaining = self.time_remaining()
        return remaining is None or remaining > 0

    def time_remaining(self) -> Optional[float]:
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.time())

    def cancel(self) -> None:
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            callbacks, self._callbacks = self._callbacks, []

        for callback in callbacks:
            callback()

    def add_callback(self, callback: Callable[[], None]) -> bool:
        """
        Register a callback to run on cancellation.

        Returns False when the context is already inactive, in which case
        the callback is not registered.
        """
        if not self.is_active():
            return False
        with self._lock:
            if self._cancelled:
                return False
            self._callbacks.append(callback)
        return True

    def __repr__(self) -> str:
        return (
            f"InvocationContext(request_id={self.request_id!r}, "
            f"trace_id={self.trace_id!r}, deadline={self.deadline!r})"
        )
