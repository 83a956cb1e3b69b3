#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tests for the JSON/base64/protobuf payload envelope.
"""

import json

import pytest

from lambdapb.core.data.backends import EnvelopeCodec, MessageBackend, ProtobufBackend
from lambdapb.core.data.config import HandlerConfig
from lambdapb.core.utils.exceptions import (
    Base64DecodeError,
    MessageDecodeError,
    MessageEncodeError,
    PayloadDecodeError,
)
from tests.testdata.messages import Input, Strict


def test_wrap_matches_documented_wire_example():
    codec = EnvelopeCodec()

    assert codec.wrap(b"\x08\x01") == b'"CAE="'
    assert codec.unwrap(b'"CAE="') == b"\x08\x01"


def test_wrap_is_byte_identical_to_json_string_quoting():
    codec = EnvelopeCodec()
    raw = bytes(range(256))

    wrapped = codec.wrap(raw)

    assert wrapped == json.dumps(wrapped[1:-1].decode("ascii")).encode("utf-8")


def test_decode_message_reads_all_fields():
    codec = EnvelopeCodec()
    payload = codec.wrap(Input(s="s", d=3.14, i=1, b=True).SerializeToString())

    message = codec.decode_message(payload, Input)

    assert message.s == "s"
    assert message.d == pytest.approx(3.14)
    assert message.i == 1
    assert message.b is True


def test_empty_string_decodes_to_zero_value_message():
    message = EnvelopeCodec().decode_message(b'""', Input)

    assert message == Input()


@pytest.mark.parametrize(
    "payload",
    [
        b"",
        b"CAE=",
        b'"CAE=',
        b"null",
        b"42",
        b'["CAE="]',
        b'{"payload": "CAE="}',
        b"\xff\xfe",
    ],
    ids=["empty", "unquoted", "unterminated", "null", "number", "array", "object", "not-utf8"],
)
def test_non_json_string_payloads_are_rejected(payload):
    with pytest.raises(PayloadDecodeError):
        EnvelopeCodec().unwrap(payload)


def test_non_bytes_payload_is_rejected():
    with pytest.raises(PayloadDecodeError):
        EnvelopeCodec().unwrap('"CAE="')


def test_bytearray_and_memoryview_payloads_are_accepted():
    codec = EnvelopeCodec()

    assert codec.unwrap(bytearray(b'"CAE="')) == b"\x08\x01"
    assert codec.unwrap(memoryview(b'"CAE="')) == b"\x08\x01"


@pytest.mark.parametrize("payload", [b'"CAE"', b'"C*E="', b'"C"'])
def test_invalid_base64_is_rejected(payload):
    with pytest.raises(Base64DecodeError):
        EnvelopeCodec().unwrap(payload)


def test_lenient_base64_discards_characters_outside_alphabet():
    codec = EnvelopeCodec(strict_base64=False)

    assert codec.unwrap(b'"C*AE="') == b"\x08\x01"


def test_truncated_message_bytes_are_rejected():
    codec = EnvelopeCodec()
    payload = codec.wrap(b"\x0a\x05ab")

    with pytest.raises(MessageDecodeError) as excinfo:
        codec.decode_message(payload, Input)

    assert excinfo.value.details["message_type"] == "testdata.Input"


def test_missing_required_field_fails_to_encode():
    with pytest.raises(MessageEncodeError):
        EnvelopeCodec().encode_message(Strict())


def test_non_message_output_fails_to_encode():
    with pytest.raises(MessageEncodeError):
        ProtobufBackend().serialize("not a message")


def test_discard_unknown_fields():
    raw = Input(s="s").SerializeToString() + b"\x48\x01"

    kept = ProtobufBackend().deserialize(raw, Input)
    dropped = ProtobufBackend(discard_unknown_fields=True).deserialize(raw, Input)

    assert kept.SerializeToString() == raw
    assert dropped.SerializeToString() == Input(s="s").SerializeToString()


def test_codec_from_config():
    codec = EnvelopeCodec.from_config(
        HandlerConfig(strict_base64=False, deterministic=True, discard_unknown_fields=True)
    )

    assert codec.strict_base64 is False
    assert codec.backend.deterministic is True
    assert codec.backend.discard_unknown_fields is True


def test_protobuf_backend_satisfies_message_backend():
    assert isinstance(ProtobufBackend(), MessageBackend)
    assert isinstance(EnvelopeCodec().backend, MessageBackend)


def test_codec_accepts_custom_message_backend():
    class RecordingBackend:
        def __init__(self):
            self.calls = []

        def serialize(self, message):
            self.calls.append("serialize")
            return message.SerializeToString()

        def deserialize(self, data, message_type):
            self.calls.append("deserialize")
            message = message_type()
            message.ParseFromString(data)
            return message

    backend = RecordingBackend()
    codec = EnvelopeCodec(backend=backend)

    payload = codec.encode_message(Input(i=1))
    decoded = codec.decode_message(payload, Input)

    assert payload == b'"CAE="'
    assert decoded.i == 1
    assert backend.calls == ["serialize", "deserialize"]


def test_codec_rejects_backend_without_message_primitives():
    with pytest.raises(TypeError, match="serialize"):
        EnvelopeCodec(backend=object())
