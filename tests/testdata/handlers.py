#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Sample handler functions for tests.
"""

import asyncio
from typing import Optional, Tuple

from lambdapb.core.context import InvocationContext

from .messages import Input, Output


def Echo(ctx: InvocationContext, request: Input) -> Tuple[Output, Optional[Exception]]:
    return Output(s=request.s, d=request.d, i=request.i, b=request.b), None


def Err(ctx: InvocationContext, request: Input) -> Tuple[Optional[Output], Optional[Exception]]:
    return None, Exception("err")


async def AsyncEcho(ctx: InvocationContext, request: Input) -> Tuple[Output, Optional[Exception]]:
    await asyncio.sleep(0)
    return Output(s=request.s, d=request.d, i=request.i, b=request.b), None
