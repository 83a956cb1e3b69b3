#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Logging mixin shared by lambdapb components.

Classes inherit ``ModernLogger`` and log through ``self.debug``,
``self.info``, ``self.warning`` and ``self.error``. Loggers live under the
``lambdapb`` namespace; the library never installs output handlers, that is
left to the embedding application.
"""

import logging
from typing import Any, Optional, Union

ROOT_LOGGER_NAME = "lambdapb"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def resolve_log_level(level: Union[int, str, None]) -> int:
    """
    Convert a level name or number to a ``logging`` level.
    """
    if level is None:
        return logging.NOTSET
    if isinstance(level, int):
        return level

    resolved = logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


class ModernLogger:
    """
    Mixin that gives a component its own named logger.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        level: Union[int, str, None] = None,
    ) -> None:
        logger_name = name or self.__class__.__name__
        self._logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{logger_name}")
        if level is not None:
            self._logger.setLevel(resolve_log_level(level))

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.error(msg, *args, **kwargs)
