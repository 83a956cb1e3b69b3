#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Handler configuration.

Settings can be passed explicitly or resolved from ``LAMBDAPB_*``
environment variables.
"""

import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

from ..utils.logger import resolve_log_level

ENV_PREFIX = "LAMBDAPB_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def parse_bool(value: str, name: str = "value") -> bool:
    """
    Parse an environment-style boolean.
    """
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


@dataclass(frozen=True)
class HandlerConfig:
    """
    Options that shape the envelope codec and handler logging.

    Attributes:
        strict_base64: Reject characters outside the standard base64
            alphabet instead of silently discarding them.
        deterministic: Serialize output messages with deterministic map
            ordering.
        discard_unknown_fields: Drop fields not present in the input
            message schema while decoding.
        log_level: Level applied to handler loggers. Left unset, they
            inherit the level of the ``lambdapb`` logger.
    """

    strict_base64: bool = True
    deterministic: bool = False
    discard_unknown_fields: bool = False
    log_level: Optional[str] = None

    def __post_init__(self) -> None:
        resolve_log_level(self.log_level)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "HandlerConfig":
        """
        Build a config from ``LAMBDAPB_*`` variables, falling back to
        defaults for anything unset.
        """
        env = os.environ if environ is None else environ
        values: Dict[str, Any] = {}

        for config_field in fields(cls):
            env_name = ENV_PREFIX + config_field.name.upper()
            raw = env.get(env_name)
            if raw is None or raw.strip() == "":
                continue
            if config_field.type in (bool, "bool"):
                values[config_field.name] = parse_bool(raw, env_name)
            else:
                values[config_field.name] = raw.strip().upper()

        return cls(**values)
