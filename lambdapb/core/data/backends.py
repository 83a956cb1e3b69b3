#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Wire codecs for handler payloads.

A payload crossing the invoke boundary is layered three times::

    protobuf message  ->  binary bytes  ->  standard base64  ->  JSON string

``ProtobufBackend`` owns the innermost layer and ``EnvelopeCodec`` the two
outer ones. Each layer reports failures with its own exception type so a
caller can tell which step rejected a payload.
"""

import base64
import binascii
import json
from typing import Any, Optional, Protocol, Type, TypeVar, Union, runtime_checkable

from google.protobuf import message as protobuf_message

from ..utils.exceptions import (
    Base64DecodeError,
    ExceptionTranslator,
    MessageEncodeError,
    PayloadDecodeError,
)
from .config import HandlerConfig

M = TypeVar("M", bound=protobuf_message.Message)

BytesLike = Union[bytes, bytearray, memoryview]

_QUOTE = b'"'


@runtime_checkable
class MessageBackend(Protocol):
    """Protocol defining the structured-message encode/decode primitive"""

    def serialize(self, message: Any) -> bytes:
        """Encode a message instance to bytes"""
        ...

    def deserialize(self, data: bytes, message_type: Type[Any]) -> Any:
        """Decode bytes into a fresh instance of ``message_type``"""
        ...


class ProtobufBackend:
    """Protocol Buffers binary wire format backend"""

    def __init__(self, deterministic: bool = False, discard_unknown_fields: bool = False):
        self.deterministic = deterministic
        self.discard_unknown_fields = discard_unknown_fields

    def serialize(self, message: protobuf_message.Message) -> bytes:
        """Serialize a message, failing if required fields are unset"""
        if not isinstance(message, protobuf_message.Message):
            raise MessageEncodeError(
                f"failed to encode message: {type(message).__name__} is not a protobuf message",
                message_type=type(message).__name__,
            )
        try:
            return message.SerializeToString(deterministic=self.deterministic)
        except (protobuf_message.Error, TypeError, ValueError) as e:
            raise ExceptionTranslator.as_message_encode_error(
                e, message_type=message.DESCRIPTOR.full_name
            ) from e

    def deserialize(self, data: bytes, message_type: Type[M]) -> M:
        """Allocate a zero-value ``message_type`` and parse ``data`` into it"""
        message = message_type()
        try:
            message.ParseFromString(data)
        except (protobuf_message.Error, TypeError, ValueError) as e:
            raise ExceptionTranslator.as_message_decode_error(
                e, message_type=message.DESCRIPTOR.full_name
            ) from e
        if self.discard_unknown_fields:
            message.DiscardUnknownFields()
        return message


class EnvelopeCodec:
    """
    JSON-string-of-base64 envelope around binary message bytes.
    """

    def __init__(self, backend: Optional[MessageBackend] = None, strict_base64: bool = True):
        if backend is None:
            backend = ProtobufBackend()
        elif not isinstance(backend, MessageBackend):
            raise TypeError(f"backend must provide serialize() and deserialize(), got {type(backend).__name__}")
        self.backend = backend
        self.strict_base64 = strict_base64

    @classmethod
    def from_config(cls, config: HandlerConfig) -> "EnvelopeCodec":
        return cls(
            backend=ProtobufBackend(
                deterministic=config.deterministic,
                discard_unknown_fields=config.discard_unknown_fields,
            ),
            strict_base64=config.strict_base64,
        )

    def unwrap(self, payload: BytesLike) -> bytes:
        """
        Strip the JSON and base64 layers, returning raw message bytes.
        """
        if not isinstance(payload, (bytes, bytearray, memoryview)):
            raise PayloadDecodeError(
                f"payload is not a JSON string: expected bytes, got {type(payload).__name__}",
                stage="json",
            )

        try:
            document = json.loads(bytes(payload).decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ExceptionTranslator.as_payload_decode_error(e) from e

        if not isinstance(document, str):
            raise PayloadDecodeError(
                f"payload is not a JSON string: got JSON {_json_kind(document)}",
                stage="json",
            )

        try:
            return base64.b64decode(document, validate=self.strict_base64)
        except (binascii.Error, ValueError) as e:
            raise ExceptionTranslator.as_base64_decode_error(e) from e

    def wrap(self, raw: bytes) -> bytes:
        """
        Base64-encode ``raw`` and quote it as a JSON string literal.

        The base64 alphabet needs no JSON escaping, so the result is
        byte-identical to ``json.dumps`` of the encoded text.
        """
        return _QUOTE + base64.b64encode(raw) + _QUOTE

    def decode_message(self, payload: BytesLike, message_type: Type[M]) -> M:
        return self.backend.deserialize(self.unwrap(payload), message_type)

    def encode_message(self, message: protobuf_message.Message) -> bytes:
        return self.wrap(self.backend.serialize(message))


def _json_kind(document: Any) -> str:
    if document is None:
        return "null"
    if isinstance(document, bool):
        return "boolean"
    if isinstance(document, (int, float)):
        return "number"
    if isinstance(document, list):
        return "array"
    if isinstance(document, dict):
        return "object"
    return type(document).__name__
