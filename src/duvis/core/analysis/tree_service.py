from __future__ import annotations

"""
Tree Reconstruction Service.

Single entry point over the two builders. Selects the variant matching the
input order, times the build and reports the stage through logging. Holds no
state between calls: every build owns its record list and tree.

Both builders and the JSON form recurse once per tree level. `du` lines may
hold about two thousand components, deeper than the interpreter's default
recursion limit, so the limit is raised for the duration of a deep build.
"""

import contextlib
import logging
import sys
import time
from typing import Callable, Dict, Iterator, Sequence

from duvis.core.analysis.postorder_builder import build_postorder
from duvis.core.analysis.preorder_builder import build_preorder
from duvis.domain.constants import BUILD_ORDERS, ORDER_POSTORDER, ORDER_PREORDER
from duvis.domain.tree_models import DiskTree, Record

logger = logging.getLogger(__name__)

_BUILDERS: Dict[str, Callable[[Sequence[Record]], DiskTree]] = {
    ORDER_POSTORDER: build_postorder,
    ORDER_PREORDER: build_preorder,
}

# Stack frames spent per tree level (JSON encoding nests a dict and a list)
_FRAMES_PER_LEVEL = 3
_FRAME_MARGIN = 200


@contextlib.contextmanager
def recursion_headroom(levels: int) -> Iterator[None]:
    """
    Temporarily raise the recursion limit so `levels` nested levels fit.

    The limit is never lowered, and the previous value is restored on exit.
    """
    previous = sys.getrecursionlimit()
    needed = levels * _FRAMES_PER_LEVEL + _FRAME_MARGIN
    if needed <= previous // 2:
        yield
        return

    logger.debug(f"Raising recursion limit to {previous + needed} for {levels} tree levels.")
    sys.setrecursionlimit(previous + needed)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


def build_tree(records: Sequence[Record], order: str = ORDER_POSTORDER) -> DiskTree:
    """
    Reconstruct the directory tree encoded by a flat record list.

    Args:
        records: Parsed records.
        order: 'postorder' when the records come straight from `du`,
               'preorder' to sort them by path first.

    Returns:
        DiskTree: The fully built, read-only tree.

    Raises:
        ValueError: Unknown build order.
        TreeBuildError: Any structural violation in the records.
    """
    builder = _BUILDERS.get(order)
    if builder is None:
        raise ValueError(f"Unknown build order '{order}'. Expected one of: {', '.join(BUILD_ORDERS)}.")

    if order == ORDER_PREORDER:
        logger.debug("Sorting entries before build.")

    started = time.perf_counter()
    with recursion_headroom(_depth_span(records)):
        tree = builder(records)
    elapsed = time.perf_counter() - started

    logger.debug(f"Built {order} tree of {len(tree)} nodes in {elapsed:.3f}s.")
    return tree


def _depth_span(records: Sequence[Record]) -> int:
    """Upper bound on the relative depth any build of `records` can reach."""
    if not records:
        return 0
    lengths = [len(r.components) for r in records]
    return max(lengths) - min(lengths) + 1
