#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Decorator helpers for declaring protobuf handlers.

Usage Example:
    >>> @handler
    ... def echo(ctx: InvocationContext, request: Input) -> Tuple[Output, Optional[Exception]]:
    ...     return Output(s=request.s), None
    >>> payload, err = echo.invoke(InvocationContext.background(), b'"CgFz"')
"""

from typing import Any, Callable, Optional, Union

from .core.data.config import HandlerConfig
from .core.handler import Handler, new_handler


def register(*, config: Optional[HandlerConfig] = None) -> Callable[[Callable[..., Any]], Handler]:
    """
    Decorate a function as a lambdapb handler.

    The decorated name becomes the ``Handler``; the undecorated function
    stays reachable as ``Handler.func``.
    """

    def decorator(func: Callable[..., Any]) -> Handler:
        return new_handler(func, config=config)

    return decorator


def handler(
    func: Optional[Callable[..., Any]] = None,
    *,
    config: Optional[HandlerConfig] = None,
) -> Union[Callable[[Callable[..., Any]], Handler], Handler]:
    """
    Public decorator entry supporting both:
    - @handler
    - @handler(config=...)
    """
    decorator = register(config=config)

    if func is not None and callable(func):
        return decorator(func)
    return decorator
