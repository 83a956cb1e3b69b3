#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Helpers for driving coroutines from synchronous call sites.
"""

import asyncio
import threading
from typing import Any, Awaitable, List


async def _await(awaitable: Awaitable[Any]) -> Any:
    return await awaitable


class AsyncExecutionHelper:
    """
    Run awaitables to completion from code that may or may not already be
    inside an event loop.
    """

    @staticmethod
    def run_sync(awaitable: Awaitable[Any], thread_name: str = "lambdapb-async") -> Any:
        """
        Block until ``awaitable`` completes and return its result.

        Behavior:
        - No running loop: runs on a fresh loop via ``asyncio.run``.
        - Running loop in this thread: runs on a fresh loop in a helper
          thread so the caller's loop is not re-entered.
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(_await(awaitable))

        outcome: List[Any] = []
        failure: List[BaseException] = []

        def _runner() -> None:
            try:
                outcome.append(asyncio.run(_await(awaitable)))
            except BaseException as exc:  # re-raised in the calling thread
                failure.append(exc)

        worker = threading.Thread(target=_runner, name=thread_name, daemon=True)
        worker.start()
        worker.join()

        if failure:
            raise failure[0]
        return outcome[0]
