#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
lambdapb public API with lazy imports.

Adapts functions of the shape ``(ctx, ProtoIn) -> (ProtoOut, error)`` into
byte-stream handlers that speak a JSON-quoted base64 protobuf envelope.
Protobuf and gRPC are only imported when the corresponding API objects are
requested.
"""

from importlib import import_module
from typing import Any, Dict, Tuple

from ._version import __version__

_EXPORT_MAP: Dict[str, Tuple[str, str]] = {
    "Handler": ("lambdapb.core.handler", "Handler"),
    "new_handler": ("lambdapb.core.handler", "new_handler"),
    "validate_handler": ("lambdapb.core.signature", "validate_handler"),
    "inspect_handler": ("lambdapb.core.signature", "inspect_handler"),
    "InvocationContext": ("lambdapb.core.context", "InvocationContext"),
    "HandlerConfig": ("lambdapb.core.data", "HandlerConfig"),
    "EnvelopeCodec": ("lambdapb.core.data", "EnvelopeCodec"),
    "handler": ("lambdapb.decorators", "handler"),
    "start": ("lambdapb.entry", "start"),
    "LambdaPBError": ("lambdapb.core.utils.exceptions", "LambdaPBError"),
    "HandlerValidationError": ("lambdapb.core.utils.exceptions", "HandlerValidationError"),
    "InvocationError": ("lambdapb.core.utils.exceptions", "InvocationError"),
}

__all__ = ["__version__", *sorted(_EXPORT_MAP.keys())]


def __getattr__(name: str) -> Any:
    """
    Resolve public API symbols lazily.
    """
    if name not in _EXPORT_MAP:
        raise AttributeError("module 'lambdapb' has no attribute '{0}'".format(name))

    module_name, attr_name = _EXPORT_MAP[name]
    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value
