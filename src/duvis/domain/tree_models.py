from __future__ import annotations

"""
Disk Usage Tree Data Models.

Defines the parsed input Record and the arena-backed DiskTree produced by the
builders. Nodes are addressed by stable indices into the arena; children are
stored as index lists, so no node ever holds a reference into a list that may
be resized. Renderers consume the tree through read-only TreeNode views.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Tuple

from duvis.domain.constants import PATH_SEPARATOR

# -----------------------------------------------------------------------------
# INPUT RECORDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Record:
    """
    One parsed `(size, path)` input line.

    Attributes:
        size: Unsigned size as reported by the source tool (opaque unit).
        components: Path segments, root first.
        index: 0-based position of the line in input order.
    """
    size: int
    components: Tuple[str, ...]
    index: int = 0

    @property
    def line_number(self) -> int:
        return self.index + 1

    @property
    def name(self) -> str:
        return self.components[-1] if self.components else ""

    @property
    def path(self) -> str:
        return PATH_SEPARATOR.join(self.components)


# -----------------------------------------------------------------------------
# ARENA TREE
# -----------------------------------------------------------------------------

@dataclass
class DiskTree:
    """
    Rooted tree reconstructed over an arena of records.

    The per-record fields (depths, children, parents) are populated exactly
    once by the builder that produced the tree and are read-only afterwards.

    Attributes:
        records: Arena of records in builder order.
        root: Arena index of the root record.
        base_depth: Component count of the root path.
        depths: Depth of each record relative to the root.
        children: Direct children of each record, in display order.
        parents: Parent arena index of each record (None for the root).
    """
    records: List[Record]
    root: int
    base_depth: int
    depths: List[int] = field(default_factory=list)
    children: List[List[int]] = field(default_factory=list)
    parents: List[Optional[int]] = field(default_factory=list)

    @classmethod
    def allocate(cls, records: List[Record], root: int) -> DiskTree:
        """Create an unbuilt tree with per-record slots sized to the arena."""
        n = len(records)
        return cls(
            records=records,
            root=root,
            base_depth=len(records[root].components),
            depths=[-1] * n,
            children=[[] for _ in range(n)],
            parents=[None] * n,
        )

    def __len__(self) -> int:
        return len(self.records)

    @property
    def root_node(self) -> TreeNode:
        return TreeNode(self, self.root)

    def node(self, index: int) -> TreeNode:
        return TreeNode(self, index)

    def label(self, index: int) -> str:
        """Last path component, or the whole root path for the root ('/' for `du /`)."""
        record = self.records[index]
        if index == self.root:
            return record.path or PATH_SEPARATOR
        return record.name

    def preorder(self) -> List[int]:
        """Arena indices in display order (parent first, children in order)."""
        order: List[int] = []
        stack = [self.root]
        while stack:
            idx = stack.pop()
            order.append(idx)
            stack.extend(reversed(self.children[idx]))
        return order

    def walk(self) -> Iterator[TreeNode]:
        for idx in self.preorder():
            yield TreeNode(self, idx)

    def max_depths(self) -> List[int]:
        """
        Compute the deepest relative depth found in each node's subtree.

        Returns:
            List[int]: Per-arena-index maximum depth (-1 for unreachable slots).
        """
        result = [-1] * len(self.records)
        for idx in reversed(self.preorder()):
            deepest = self.depths[idx]
            for child in self.children[idx]:
                if result[child] > deepest:
                    deepest = result[child]
            result[idx] = deepest
        return result


# -----------------------------------------------------------------------------
# RENDERER VIEW
# -----------------------------------------------------------------------------

class TreeNode:
    """Read-only view of one arena slot, as handed to renderers."""

    __slots__ = ("tree", "index")

    def __init__(self, tree: DiskTree, index: int):
        self.tree = tree
        self.index = index

    def __repr__(self) -> str:
        return f"TreeNode({self.label!r}, size={self.size}, depth={self.depth})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TreeNode):
            return NotImplemented
        return self.tree is other.tree and self.index == other.index

    def __hash__(self) -> int:
        return hash((id(self.tree), self.index))

    @property
    def record(self) -> Record:
        return self.tree.records[self.index]

    @property
    def size(self) -> int:
        return self.record.size

    @property
    def depth(self) -> int:
        return self.tree.depths[self.index]

    @property
    def label(self) -> str:
        return self.tree.label(self.index)

    @property
    def components(self) -> Tuple[str, ...]:
        return self.record.components

    @property
    def is_root(self) -> bool:
        return self.index == self.tree.root

    @property
    def parent(self) -> Optional[TreeNode]:
        parent = self.tree.parents[self.index]
        return TreeNode(self.tree, parent) if parent is not None else None

    @property
    def children(self) -> List[TreeNode]:
        return [TreeNode(self.tree, c) for c in self.tree.children[self.index]]

