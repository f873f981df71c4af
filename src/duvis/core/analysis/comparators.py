from __future__ import annotations

"""
Record and Sibling Ordering.

Two total orders drive tree reconstruction:

- path order, used by the pre-order builder: component-wise comparison where a
  directory sorts immediately before its own contents;
- sibling order, used when fixing each node's children: descending size, then
  ascending label.

A tie in either order means the input contains duplicates. Ties are raised as
typed errors rather than resolved arbitrarily.
"""

import functools
from typing import List, Sequence

from duvis.domain.errors import DuplicatePathError, DuplicateSiblingError
from duvis.domain.tree_models import DiskTree, Record

# -----------------------------------------------------------------------------
# PATH ORDER
# -----------------------------------------------------------------------------

def compare_paths(a: Record, b: Record) -> int:
    """
    Order two records by their component sequences.

    Components are compared as strings (code-point order, identical to UTF-8
    byte order); when one sequence is a prefix of the other the shorter sorts
    first.

    Raises:
        DuplicatePathError: Both records name the same path.
    """
    for ca, cb in zip(a.components, b.components):
        if ca != cb:
            return -1 if ca < cb else 1

    na, nb = len(a.components), len(b.components)
    if na != nb:
        return na - nb

    raise DuplicatePathError(max(a.index, b.index), f"duplicate path '{a.path}'")


def sort_records(records: Sequence[Record]) -> List[Record]:
    """Return the records sorted in path order. Input is left untouched."""
    return sorted(records, key=functools.cmp_to_key(compare_paths))

# -----------------------------------------------------------------------------
# SIBLING ORDER
# -----------------------------------------------------------------------------

def compare_siblings(tree: DiskTree, a: int, b: int, parent: int) -> int:
    """
    Order two sibling arena slots for display.

    Args:
        tree: Tree owning both slots.
        a: Arena index of the first sibling.
        b: Arena index of the second sibling.
        parent: Arena index of their common parent, reported on ties.

    Raises:
        DuplicateSiblingError: Both siblings share size and label.
    """
    ra, rb = tree.records[a], tree.records[b]
    if ra.size != rb.size:
        return -1 if ra.size > rb.size else 1

    la, lb = ra.name, rb.name
    if la != lb:
        return -1 if la < lb else 1

    raise DuplicateSiblingError(parent, f"siblings tie on size {ra.size} and label '{la}'")


def sort_children(tree: DiskTree, parent: int) -> None:
    """Sort a node's children in place into display order."""
    key = functools.cmp_to_key(lambda a, b: compare_siblings(tree, a, b, parent))
    tree.children[parent].sort(key=key)
