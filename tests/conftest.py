#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Pytest bootstrap for local package imports.
"""

import base64
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


def envelope(message) -> bytes:
    """Wrap a message the way a host delivers it."""
    encoded = base64.b64encode(message.SerializeToString()).decode("ascii")
    return ('"' + encoded + '"').encode("utf-8")


@pytest.fixture
def ctx():
    from lambdapb.core.context import InvocationContext

    return InvocationContext.background()
