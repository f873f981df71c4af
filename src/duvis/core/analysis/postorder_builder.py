from __future__ import annotations

"""
Post-order Tree Builder.

Reconstructs the tree from records in the order `du` emits them: every
directory's descendants appear contiguously immediately before it, and the
last record is the root. The arena keeps input order; no sorting is needed to
find structure, only to order each node's children for display.
"""

import logging
from typing import Sequence, Set

from duvis.core.analysis.comparators import sort_children
from duvis.domain.errors import DuplicatePathError, EmptyRootError, MalformedHierarchyError
from duvis.domain.tree_models import DiskTree, Record

logger = logging.getLogger(__name__)


def build_postorder(records: Sequence[Record]) -> DiskTree:
    """
    Build a tree from post-order records.

    Args:
        records: Parsed records in `du` output order.

    Returns:
        DiskTree: Tree over an arena in input order, rooted at the last record.

    Raises:
        EmptyRootError: No records, or the root has no path components.
        MalformedHierarchyError: Records do not nest as post-order requires.
        DuplicatePathError: A directory lists the same child twice.
        DuplicateSiblingError: Two children tie on size and label.
    """
    if not records:
        raise EmptyRootError(None, "no records to build from")

    arena = list(records)
    root = len(arena) - 1
    if not arena[root].components:
        raise EmptyRootError(root, "root record has no path components")

    tree = DiskTree.allocate(arena, root)
    tree.depths[root] = 0
    _build_range(tree, 0, root, root, 0)

    logger.debug(f"Post-order build complete: {len(arena)} nodes, base depth {tree.base_depth}.")
    return tree


def _build_range(tree: DiskTree, start: int, end: int, parent: int, depth: int) -> None:
    """
    Attach the subtree whose descendants occupy `[start, end)`.

    `parent` is the directory record owning the range; in post-order it sits
    at `end`. Each direct child closes a run of deeper records that share the
    child's name at offset `len(parent)`; the run excludes the child itself.
    """
    records = tree.records
    prefix = records[parent].components
    offset = len(prefix)

    i = start
    while i < end:
        head = records[i]
        if len(head.components) <= offset or head.components[:offset] != prefix:
            raise MalformedHierarchyError(i, f"'{head.path}' is not inside '{records[parent].path}'")

        name = head.components[offset]

        # Walk the grandchildren of this run up to the child's own record
        j = i
        while (j < end and len(records[j].components) > offset + 1
               and records[j].components[offset] == name):
            j += 1

        if j == end:
            raise MalformedHierarchyError(i, f"no directory record closes '{head.path}'")

        child = records[j]
        if (len(child.components) != offset + 1
                or child.components[offset] != name
                or child.components[:offset] != prefix):
            raise MalformedHierarchyError(j, f"unexpected entry '{child.path}'")

        tree.depths[j] = depth + 1
        tree.parents[j] = parent
        tree.children[parent].append(j)

        if j > i:
            _build_range(tree, i, j, j, depth + 1)
        i = j + 1

    sort_children(tree, parent)
    _check_unique_labels(tree, parent)


def _check_unique_labels(tree: DiskTree, parent: int) -> None:
    seen: Set[str] = set()
    for child in tree.children[parent]:
        name = tree.records[child].name
        if name in seen:
            raise DuplicatePathError(child, f"duplicate path '{tree.records[child].path}'")
        seen.add(name)
