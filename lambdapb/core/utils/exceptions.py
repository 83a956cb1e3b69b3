#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Exception hierarchy for lambdapb.

Two families exist:

* ``HandlerValidationError`` subclasses describe why a callable cannot be
  adapted. They are produced once, when a handler is built, and replayed on
  every invocation of the resulting invalid handler.
* ``InvocationError`` subclasses describe why a single invocation failed
  before or after the wrapped function ran (envelope, base64 or protobuf
  problems). They abort only the call that raised them.

Errors returned or raised by the wrapped function itself are never wrapped
in either family; they reach the caller as-is. A returned error value that
is not an exception at all is reported as a plain ``InvocationError``.

Every lambdapb error carries a ``grpc.StatusCode`` so hosts can surface it
over gRPC without a translation table of their own.
"""

from typing import Any, Dict, Optional

import grpc


class LambdaPBError(Exception):
    """
    Base class for all lambdapb errors.
    """

    status_code = grpc.StatusCode.UNKNOWN

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        **details: Any,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details: Dict[str, Any] = {
            key: value for key, value in details.items() if value is not None
        }

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"

    def to_dict(self) -> Dict[str, Any]:
        """
        Structured form suitable for logging or error payloads.
        """
        data: Dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "status_code": self.status_code.name,
        }
        if self.details:
            data["details"] = dict(self.details)
        if self.cause is not None:
            data["cause"] = ExceptionFormatter.format_exception_summary(self.cause)
        return data


# ---------------------------------------------------------------------------
# Construction-time errors
# ---------------------------------------------------------------------------


class HandlerValidationError(LambdaPBError):
    """
    The supplied callable does not match the supported handler shape.
    """

    status_code = grpc.StatusCode.FAILED_PRECONDITION


class MissingHandlerError(HandlerValidationError):
    def __init__(self) -> None:
        super().__init__("handler is nil")


class NotAFunctionError(HandlerValidationError):
    def __init__(self, handler_type: Optional[str] = None) -> None:
        super().__init__("handler is not function", handler_type=handler_type)


class ArityMismatchError(HandlerValidationError):
    def __init__(self, actual: int, expected: int = 2) -> None:
        super().__init__(
            f"handler takes two arguments, but got {actual}",
            expected=expected,
            actual=actual,
        )
        self.expected = expected
        self.actual = actual


class FirstArgNotContextError(HandlerValidationError):
    def __init__(self, annotation: Optional[str] = None) -> None:
        super().__init__(
            "handler first argument should implement Context",
            annotation=annotation,
        )


class SecondArgNotMessageError(HandlerValidationError):
    def __init__(self, annotation: Optional[str] = None) -> None:
        super().__init__(
            "handler second argument should implement proto.Message",
            annotation=annotation,
        )


class ReturnArityMismatchError(HandlerValidationError):
    def __init__(self, actual: int, expected: int = 2) -> None:
        super().__init__(
            f"handler returns two values, but got {actual}",
            expected=expected,
            actual=actual,
        )
        self.expected = expected
        self.actual = actual


class FirstReturnNotMessageError(HandlerValidationError):
    def __init__(self, annotation: Optional[str] = None) -> None:
        super().__init__(
            "handler first return value should implement proto.Message",
            annotation=annotation,
        )


class SecondReturnNotErrorError(HandlerValidationError):
    def __init__(self, annotation: Optional[str] = None) -> None:
        super().__init__(
            "handler second return value should implement error",
            annotation=annotation,
        )


# ---------------------------------------------------------------------------
# Call-time errors
# ---------------------------------------------------------------------------


class InvocationError(LambdaPBError):
    """
    A single invocation failed outside of the wrapped function.
    """


class PayloadDecodeError(InvocationError):
    """Payload is not a JSON string literal."""

    status_code = grpc.StatusCode.INVALID_ARGUMENT


class Base64DecodeError(InvocationError):
    """JSON string contents are not valid standard base64."""

    status_code = grpc.StatusCode.INVALID_ARGUMENT


class MessageDecodeError(InvocationError):
    """Decoded bytes are not a valid encoding of the input message type."""

    status_code = grpc.StatusCode.INVALID_ARGUMENT


class MessageEncodeError(InvocationError):
    """The wrapped function's output message could not be serialized."""

    status_code = grpc.StatusCode.INTERNAL


class MissingOutputError(InvocationError):
    """The wrapped function reported success without an output message."""

    status_code = grpc.StatusCode.INTERNAL

    def __init__(self, output_type: Optional[str] = None) -> None:
        super().__init__("missing output", output_type=output_type)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class ExceptionFormatter:
    """
    String helpers for exceptions in log lines.
    """

    @staticmethod
    def format_exception_summary(exc: BaseException) -> str:
        message = str(exc)
        if not message:
            return exc.__class__.__name__
        return f"{exc.__class__.__name__}: {message}"

    @staticmethod
    def format_exception_chain(exc: BaseException) -> str:
        parts = []
        seen = set()
        current: Optional[BaseException] = exc
        while current is not None and id(current) not in seen:
            seen.add(id(current))
            parts.append(ExceptionFormatter.format_exception_summary(current))
            if isinstance(current, LambdaPBError) and current.cause is not None:
                current = current.cause
            else:
                current = current.__cause__ or current.__context__
        return " <- ".join(parts)


class ExceptionTranslator:
    """
    Wrap foreign exceptions into lambdapb error types.
    """

    @staticmethod
    def status_code_for(exc: BaseException) -> grpc.StatusCode:
        if isinstance(exc, LambdaPBError):
            return exc.status_code
        return grpc.StatusCode.UNKNOWN

    @classmethod
    def as_payload_decode_error(
        cls, exc: BaseException, message: str = "payload is not a JSON string"
    ) -> PayloadDecodeError:
        if isinstance(exc, PayloadDecodeError):
            return exc
        return PayloadDecodeError(f"{message}: {exc}", cause=exc, stage="json")

    @classmethod
    def as_base64_decode_error(
        cls, exc: BaseException, message: str = "illegal base64 data"
    ) -> Base64DecodeError:
        if isinstance(exc, Base64DecodeError):
            return exc
        return Base64DecodeError(f"{message}: {exc}", cause=exc, stage="base64")

    @classmethod
    def as_message_decode_error(
        cls,
        exc: BaseException,
        message_type: Optional[str] = None,
        message: str = "failed to decode message",
    ) -> MessageDecodeError:
        if isinstance(exc, MessageDecodeError):
            return exc
        return MessageDecodeError(
            f"{message}: {exc}",
            cause=exc,
            stage="protobuf",
            message_type=message_type,
        )

    @classmethod
    def as_message_encode_error(
        cls,
        exc: BaseException,
        message_type: Optional[str] = None,
        message: str = "failed to encode message",
    ) -> MessageEncodeError:
        if isinstance(exc, MessageEncodeError):
            return exc
        return MessageEncodeError(
            f"{message}: {exc}",
            cause=exc,
            stage="protobuf",
            message_type=message_type,
        )
