#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Static shape checks for handler callables.

A handler must look like::

    def handler(ctx: InvocationContext, request: InputMessage) -> Tuple[OutputMessage, Optional[Exception]]:
        ...

The checks read only the callable's signature and annotations. They run
once, when a handler is built, and never touch payload data. Rules are
evaluated in a fixed order and the first failure is reported:

1. the handler is not ``None``
2. the handler is a function value (any callable that is not a class)
3. it takes exactly two parameters
4. parameter one implements the context capability
5. parameter two is a concrete protobuf message class
6. the return annotation is a two-element ``Tuple``
7. return one is a protobuf message class
8. return two is an exception type, optionally wrapped in ``Optional``
"""

import inspect
import types
import typing
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple, Type, Union

from google.protobuf import message as protobuf_message

from .context import InvocationContextLike
from .utils.exceptions import (
    ArityMismatchError,
    FirstArgNotContextError,
    FirstReturnNotMessageError,
    HandlerValidationError,
    MissingHandlerError,
    NotAFunctionError,
    ReturnArityMismatchError,
    SecondArgNotMessageError,
    SecondReturnNotErrorError,
)

EXPECTED_ARGUMENTS = 2
EXPECTED_RETURNS = 2

_NONE_TYPE = type(None)

_UNION_ORIGINS = (Union, types.UnionType)


@dataclass(frozen=True)
class HandlerSignature:
    """
    Validated type descriptor of a handler.
    """

    input_type: Type[protobuf_message.Message]
    output_type: Type[protobuf_message.Message]
    error_type: Type[BaseException]
    is_coroutine: bool = False


def _describe(annotation: Any) -> str:
    if annotation is inspect.Signature.empty:
        return "<unannotated>"
    if isinstance(annotation, type):
        return annotation.__qualname__
    return repr(annotation)


def _unwrap_optional(annotation: Any) -> Any:
    """
    ``Optional[X]`` -> ``X``; anything else is returned unchanged.
    """
    if typing.get_origin(annotation) in _UNION_ORIGINS:
        members = [arg for arg in typing.get_args(annotation) if arg is not _NONE_TYPE]
        if len(members) == 1:
            return members[0]
    return annotation


def _is_class(annotation: Any) -> bool:
    return isinstance(annotation, type) and typing.get_origin(annotation) is None


def implements_context(annotation: Any) -> bool:
    annotation = _unwrap_optional(annotation)
    return _is_class(annotation) and issubclass(annotation, InvocationContextLike)


def implements_message(annotation: Any, instantiable: bool = False) -> bool:
    if not _is_class(annotation) or not issubclass(annotation, protobuf_message.Message):
        return False
    if instantiable:
        # Only generated classes carry a descriptor and can be allocated.
        return getattr(annotation, "DESCRIPTOR", None) is not None
    return True


def implements_error(annotation: Any) -> bool:
    annotation = _unwrap_optional(annotation)
    return _is_class(annotation) and issubclass(annotation, BaseException)


def _return_members(annotation: Any) -> Tuple[Any, ...]:
    """
    Split a return annotation into its declared values.
    """
    if annotation is inspect.Signature.empty or annotation is None or annotation is _NONE_TYPE:
        return ()
    if typing.get_origin(annotation) is tuple:
        members = typing.get_args(annotation)
        if members == ((),):
            return ()
        if Ellipsis in members:
            return (annotation,)
        return members
    return (annotation,)


def _read_signature(handler: Callable[..., Any]) -> inspect.Signature:
    try:
        signature = inspect.signature(handler)
    except (TypeError, ValueError) as exc:
        raise NotAFunctionError(handler_type=type(handler).__name__) from exc
    try:
        return inspect.signature(handler, eval_str=True)
    except Exception:
        # String annotations that fail to evaluate stay as strings and fail
        # the capability checks below.
        return signature


def _is_coroutine_handler(handler: Callable[..., Any]) -> bool:
    if inspect.iscoroutinefunction(handler):
        return True
    call = getattr(handler, "__call__", None)
    return call is not None and inspect.iscoroutinefunction(call)


def inspect_handler(handler: Any) -> HandlerSignature:
    """
    Check ``handler`` against the handler rules.

    Returns the validated descriptor, or raises the
    ``HandlerValidationError`` for the first rule that fails.
    """
    if handler is None:
        raise MissingHandlerError()
    if not callable(handler) or isinstance(handler, type):
        raise NotAFunctionError(handler_type=type(handler).__name__)

    signature = _read_signature(handler)
    parameters = list(signature.parameters.values())

    if len(parameters) != EXPECTED_ARGUMENTS:
        raise ArityMismatchError(actual=len(parameters), expected=EXPECTED_ARGUMENTS)

    context_annotation = parameters[0].annotation
    if not implements_context(context_annotation):
        raise FirstArgNotContextError(annotation=_describe(context_annotation))

    input_annotation = parameters[1].annotation
    if not implements_message(input_annotation, instantiable=True):
        raise SecondArgNotMessageError(annotation=_describe(input_annotation))

    returns = _return_members(signature.return_annotation)
    if len(returns) != EXPECTED_RETURNS:
        raise ReturnArityMismatchError(actual=len(returns), expected=EXPECTED_RETURNS)

    output_annotation, error_annotation = returns
    if not implements_message(_unwrap_optional(output_annotation)):
        raise FirstReturnNotMessageError(annotation=_describe(output_annotation))
    if not implements_error(error_annotation):
        raise SecondReturnNotErrorError(annotation=_describe(error_annotation))

    return HandlerSignature(
        input_type=input_annotation,
        output_type=_unwrap_optional(output_annotation),
        error_type=_unwrap_optional(error_annotation),
        is_coroutine=_is_coroutine_handler(handler),
    )


def validate_handler(handler: Any) -> Optional[HandlerValidationError]:
    """
    Return ``None`` when ``handler`` is acceptable, else the validation error.
    """
    try:
        inspect_handler(handler)
    except HandlerValidationError as exc:
        return exc
    return None
