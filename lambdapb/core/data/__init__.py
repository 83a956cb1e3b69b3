#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Payload codecs and configuration for lambdapb handlers.
"""

from .config import HandlerConfig, parse_bool
from .backends import EnvelopeCodec, MessageBackend, ProtobufBackend

__all__ = [
    "HandlerConfig",
    "parse_bool",
    "EnvelopeCodec",
    "MessageBackend",
    "ProtobufBackend",
]
