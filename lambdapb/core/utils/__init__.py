#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Utility exports for lambdapb core.
"""

from .logger import ModernLogger
from .exceptions import *  # noqa: F401,F403
from .exceptions import ExceptionFormatter, ExceptionTranslator
from .async_helpers import AsyncExecutionHelper

# Common formatter shortcuts
format_exception_chain = ExceptionFormatter.format_exception_chain
format_exception_summary = ExceptionFormatter.format_exception_summary

__all__ = [
    "ModernLogger",
    "AsyncExecutionHelper",
    "ExceptionFormatter",
    "ExceptionTranslator",
    "format_exception_chain",
    "format_exception_summary",
]
