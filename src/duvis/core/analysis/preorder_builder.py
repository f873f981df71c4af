from __future__ import annotations

"""
Pre-order Tree Builder.

Sorts the records into path order, which places every directory immediately
before its whole subtree and the root first, then reconstructs the tree by
recursively partitioning index ranges.

Each node is built in three passes: count the direct children, fill them
(recursing into each child's contiguous subtree), then sort them for display.
The count pass lets each node's children list be allocated once at its final
size.
"""

import logging
from typing import List, Sequence

from duvis.core.analysis.comparators import sort_children, sort_records
from duvis.domain.errors import EmptyRootError, MissingEntryError
from duvis.domain.tree_models import DiskTree, Record

logger = logging.getLogger(__name__)


def build_preorder(records: Sequence[Record]) -> DiskTree:
    """
    Sort records into path order and build a tree from them.

    Every ancestor of every listed path must itself be listed.

    Args:
        records: Parsed records in any order.

    Returns:
        DiskTree: Tree over an arena in path order, rooted at index 0.

    Raises:
        EmptyRootError: No records, or the first record has no components.
        DuplicatePathError: Two records name the same path.
        MissingEntryError: A record's parent directory is not listed.
        DuplicateSiblingError: Two children tie on size and label.
    """
    if not records:
        raise EmptyRootError(None, "no records to build from")

    arena = sort_records(records)
    if not arena[0].components:
        raise EmptyRootError(0, "root record has no path components")

    tree = DiskTree.allocate(arena, 0)
    _build_range(tree, 0, len(arena), 0)

    logger.debug(f"Pre-order build complete: {len(arena)} nodes, base depth {tree.base_depth}.")
    return tree


def _build_range(tree: DiskTree, start: int, end: int, depth: int) -> None:
    """Build the node at `start`, whose subtree occupies `[start, end)`."""
    records = tree.records
    node = records[start]
    offset = depth + tree.base_depth
    tree.depths[start] = depth

    # Pass 1: count direct children
    n_children = 0
    for k in range(start + 1, end):
        if len(records[k].components) == offset + 1:
            n_children += 1
    children: List[int] = [0] * n_children

    # Pass 2: fill direct children and build their subtrees
    filled = 0
    i = start + 1
    while i < end:
        entry = records[i]
        if len(entry.components) != offset + 1 or entry.components[:offset] != node.components:
            raise MissingEntryError(
                i, f"no entry for the parent of '{entry.path}' (input line {entry.line_number})"
            )

        children[filled] = i
        filled += 1
        tree.parents[i] = start

        name = entry.components[offset]
        j = i + 1
        while (j < end and len(records[j].components) > offset + 1
               and records[j].components[offset] == name):
            j += 1

        _build_range(tree, i, j, depth + 1)
        i = j

    # Pass 3: display order
    tree.children[start] = children
    sort_children(tree, start)
