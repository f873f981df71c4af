from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared `du` listings in post-order and shuffled form.
3. Isolation of the root logger between tests.
"""

import logging
import os
import sys
from typing import List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from duvis.infra.logging import _CONFIGURED_FLAG_ATTR, _QUEUE_LISTENER_ATTR  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def postorder_lines() -> List[str]:
    """
    A small filesystem as `du` prints it (children before parents).

    Tree:
    proj 100
      src 60
        core 35
        util 20
      docs 30
      README 10
    """
    return [
        "35\tproj/src/core\n",
        "20\tproj/src/util\n",
        "60\tproj/src\n",
        "30\tproj/docs\n",
        "10\tproj/README\n",
        "100\tproj\n",
    ]


@pytest.fixture
def shuffled_lines(postorder_lines: List[str]) -> List[str]:
    """The same filesystem in an order only the pre-order builder accepts."""
    order = [3, 0, 5, 4, 2, 1]
    return [postorder_lines[i] for i in order]


@pytest.fixture(autouse=True)
def reset_logging() -> None:
    """Detach duvis' queue handlers so each test starts unconfigured."""
    yield
    root = logging.getLogger()

    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener is not None and getattr(listener, "_thread", None) is not None:
        listener.stop()
    setattr(root, _QUEUE_LISTENER_ATTR, None)

    for h in list(root.handlers):
        if getattr(h, "_duvis_handler", False):
            root.removeHandler(h)
            h.close()

    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        delattr(root, _CONFIGURED_FLAG_ATTR)
