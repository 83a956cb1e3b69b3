#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Protobuf message classes for tests.

Descriptors mirror ``echo.proto`` and ``strict.proto`` in this directory and
are registered in a private pool so no protoc step is needed.
"""

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

_FieldProto = descriptor_pb2.FieldDescriptorProto

_SCALAR_FIELDS = (
    ("s", 1, _FieldProto.TYPE_STRING),
    ("d", 2, _FieldProto.TYPE_DOUBLE),
    ("i", 3, _FieldProto.TYPE_INT64),
    ("b", 4, _FieldProto.TYPE_BOOL),
)


def _echo_file() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="testdata/echo.proto",
        package="testdata",
        syntax="proto3",
    )
    for message_name in ("Input", "Output"):
        message_proto = file_proto.message_type.add(name=message_name)
        for field_name, number, field_type in _SCALAR_FIELDS:
            message_proto.field.add(
                name=field_name,
                json_name=field_name,
                number=number,
                type=field_type,
                label=_FieldProto.LABEL_OPTIONAL,
            )
    return file_proto


def _strict_file() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="testdata/strict.proto",
        package="testdata",
        syntax="proto2",
    )
    message_proto = file_proto.message_type.add(name="Strict")
    message_proto.field.add(
        name="id",
        json_name="id",
        number=1,
        type=_FieldProto.TYPE_STRING,
        label=_FieldProto.LABEL_REQUIRED,
    )
    return file_proto


_POOL = descriptor_pool.DescriptorPool()
_POOL.AddSerializedFile(_echo_file().SerializeToString())
_POOL.AddSerializedFile(_strict_file().SerializeToString())

Input = message_factory.GetMessageClass(_POOL.FindMessageTypeByName("testdata.Input"))
Output = message_factory.GetMessageClass(_POOL.FindMessageTypeByName("testdata.Output"))
Strict = message_factory.GetMessageClass(_POOL.FindMessageTypeByName("testdata.Strict"))
