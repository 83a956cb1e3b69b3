#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
lambdapb core module exports (lazy-loaded).
"""

from importlib import import_module
from typing import Any, Dict, Tuple

_EXPORT_MAP: Dict[str, Tuple[str, str]] = {
    "Handler": ("lambdapb.core.handler", "Handler"),
    "new_handler": ("lambdapb.core.handler", "new_handler"),
    "HandlerSignature": ("lambdapb.core.signature", "HandlerSignature"),
    "inspect_handler": ("lambdapb.core.signature", "inspect_handler"),
    "validate_handler": ("lambdapb.core.signature", "validate_handler"),
    "InvocationContext": ("lambdapb.core.context", "InvocationContext"),
    "InvocationContextLike": ("lambdapb.core.context", "InvocationContextLike"),
    "HandlerConfig": ("lambdapb.core.data", "HandlerConfig"),
    "EnvelopeCodec": ("lambdapb.core.data", "EnvelopeCodec"),
    "ProtobufBackend": ("lambdapb.core.data", "ProtobufBackend"),
}

__all__ = sorted(_EXPORT_MAP.keys())


def __getattr__(name: str) -> Any:
    if name not in _EXPORT_MAP:
        raise AttributeError("module 'lambdapb.core' has no attribute '{0}'".format(name))

    module_name, attr_name = _EXPORT_MAP[name]
    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value
