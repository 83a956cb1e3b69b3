#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Byte-stream handler wrapping an application function.

``new_handler`` adapts a function shaped like::

    def echo(ctx: InvocationContext, request: Input) -> Tuple[Output, Optional[Exception]]

into a ``Handler`` whose ``invoke(ctx, payload)`` takes and returns the
JSON-quoted base64 envelope a host runtime moves around. Every call runs
the same pipeline:

    JSON string -> base64 -> protobuf Input -> echo(ctx, Input)
    -> protobuf Output -> base64 -> JSON string

``invoke`` returns ``(payload, None)`` on success and ``(None, error)`` on
any failure; it never raises and never returns both.

If the function does not have a supported shape, ``new_handler`` still
returns a ``Handler``. Hosts register handlers before the first request
arrives, so the problem is reported on every call instead of at
construction.

Usage Example:
    >>> handler = new_handler(echo)
    >>> payload, err = handler.invoke(InvocationContext.background(), b'"CAE="')
"""

import asyncio
import inspect
from typing import Any, Optional, Tuple

from google.protobuf import message as protobuf_message

from .data.backends import BytesLike, EnvelopeCodec
from .data.config import HandlerConfig
from .signature import HandlerSignature, inspect_handler
from .utils.async_helpers import AsyncExecutionHelper
from .utils.exceptions import (
    ExceptionFormatter,
    HandlerValidationError,
    InvocationError,
    MissingOutputError,
)
from .utils.logger import ModernLogger

InvokeResult = Tuple[Optional[bytes], Optional[BaseException]]


class Handler(ModernLogger):
    """
    Immutable adapter between a host runtime and one application function.

    A handler is either valid (wraps a function whose shape passed
    validation) or invalid (wraps the validation error and returns it from
    every call). Instances hold no per-call state and may be invoked
    concurrently.
    """

    def __init__(
        self,
        func: Any,
        signature: Optional[HandlerSignature] = None,
        validation_error: Optional[HandlerValidationError] = None,
        config: Optional[HandlerConfig] = None,
    ) -> None:
        if (signature is None) == (validation_error is None):
            raise ValueError("exactly one of signature or validation_error is required")

        config = config or HandlerConfig()
        name = getattr(func, "__qualname__", None) or type(func).__name__
        ModernLogger.__init__(self, name=f"Handler.{name}", level=config.log_level)

        self.func = func
        self.signature = signature
        self.validation_error = validation_error
        self.config = config
        self.codec = EnvelopeCodec.from_config(config)
        self._frozen = True

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise AttributeError("Handler is immutable")
        super().__setattr__(name, value)

    @property
    def is_valid(self) -> bool:
        return self.validation_error is None

    def __repr__(self) -> str:
        if self.validation_error is not None:
            return f"Handler(invalid: {self.validation_error})"
        input_name = self.signature.input_type.DESCRIPTOR.full_name
        output_name = self.signature.output_type.DESCRIPTOR.full_name
        return f"Handler({input_name} -> {output_name})"

    # ------------------------------------------------------------------
    # Invocation
    # ------------------------------------------------------------------

    def invoke(self, ctx: Any, payload: BytesLike) -> InvokeResult:
        """
        Decode ``payload``, call the wrapped function and encode its result.

        Coroutine functions are driven to completion before returning.
        """
        if self.validation_error is not None:
            return None, self.validation_error

        request, err = self._decode(payload)
        if err is not None:
            return None, err

        try:
            response = self.func(ctx, request)
            if inspect.isawaitable(response):
                response = AsyncExecutionHelper.run_sync(response)
        except Exception as exc:
            return self._raised(exc)

        return self._encode(response)

    async def ainvoke(self, ctx: Any, payload: BytesLike) -> InvokeResult:
        """
        Coroutine variant of ``invoke`` for hosts running an event loop.

        Synchronous functions run in a worker thread so they do not block
        the loop.
        """
        if self.validation_error is not None:
            return None, self.validation_error

        request, err = self._decode(payload)
        if err is not None:
            return None, err

        try:
            if self.signature.is_coroutine:
                response = await self.func(ctx, request)
            else:
                response = await asyncio.to_thread(self.func, ctx, request)
                if inspect.isawaitable(response):
                    response = await response
        except Exception as exc:
            return self._raised(exc)

        return self._encode(response)

    __call__ = invoke

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------

    def _decode(self, payload: BytesLike) -> Tuple[Optional[protobuf_message.Message], Optional[InvocationError]]:
        try:
            return self.codec.decode_message(payload, self.signature.input_type), None
        except InvocationError as exc:
            self.debug("Rejected payload: %s", exc)
            return None, exc

    def _encode(self, response: Any) -> InvokeResult:
        if not isinstance(response, tuple) or len(response) != 2:
            self.debug("Handler returned %s instead of a pair", type(response).__name__)
            return None, MissingOutputError(output_type=type(response).__name__)

        output, err = response
        if err is not None:
            if not isinstance(err, BaseException):
                err = InvocationError(str(err), error_type=type(err).__name__)
            self.debug("Handler returned error: %s", ExceptionFormatter.format_exception_summary(err))
            return None, err

        if not isinstance(output, protobuf_message.Message):
            return None, MissingOutputError(output_type=type(output).__name__)

        try:
            return self.codec.encode_message(output), None
        except InvocationError as exc:
            self.debug("Failed to encode output: %s", exc)
            return None, exc

    def _raised(self, exc: Exception) -> InvokeResult:
        self.warning(
            "Handler raised instead of returning an error: %s",
            ExceptionFormatter.format_exception_summary(exc),
            exc_info=True,
        )
        return None, exc


def new_handler(handler: Any, config: Optional[HandlerConfig] = None) -> Handler:
    """
    Build a ``Handler`` for ``handler``.

    Never raises for an unsupported function: the returned handler reports
    the validation error from every ``invoke`` call instead.
    """
    config = config or HandlerConfig.from_env()
    try:
        signature = inspect_handler(handler)
    except HandlerValidationError as exc:
        invalid = Handler(handler, validation_error=exc, config=config)
        invalid.warning("Handler failed validation: %s", exc)
        return invalid
    return Handler(handler, signature=signature, config=config)
