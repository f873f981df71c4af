from __future__ import annotations

"""
Nested Rectangle Layout.

Computes the xdu-style diagram of a DiskTree as plain rectangles: the focus
node fills the first column at full height, each deeper level takes the next
column, and every child receives a slice of its parent's height proportional
to `size / parentSize`. Drawing is left to the GUI; this module is pure.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from duvis.domain.tree_models import DiskTree


@dataclass(frozen=True)
class Rect:
    """
    One laid-out node.

    Attributes:
        index: Arena index of the node.
        label: Text to draw.
        size: Node size.
        level: Depth relative to the focus node (0 for the focus).
        x, y, width, height: Screen geometry.
    """
    index: int
    label: str
    size: int
    level: int
    x: float
    y: float
    width: float
    height: float

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px < self.x + self.width and self.y <= py < self.y + self.height


def layout_rects(
        tree: DiskTree,
        width: float,
        height: float,
        focus: Optional[int] = None,
        max_levels: Optional[int] = None,
) -> List[Rect]:
    """
    Lay out the subtree under `focus` into a `width` x `height` area.

    Args:
        tree: The built tree.
        width: Drawing area width.
        height: Drawing area height.
        focus: Arena index shown as the first column (default: root).
        max_levels: Cap on the number of columns drawn.

    Returns:
        List[Rect]: Rectangles in display order, parents before children.
    """
    focus = tree.root if focus is None else focus
    base = tree.depths[focus]

    levels = tree.max_depths()[focus] - base + 1
    if max_levels is not None and max_levels > 0:
        levels = min(levels, max_levels)
    column = width / levels

    rects: List[Rect] = []
    stack: List[Tuple[int, float, float]] = [(focus, 0.0, float(height))]
    while stack:
        idx, y, h = stack.pop()
        record = tree.records[idx]
        level = tree.depths[idx] - base
        rects.append(Rect(idx, tree.label(idx), record.size, level, level * column, y, column, h))

        if level + 1 >= levels:
            continue

        spans: List[Tuple[int, float, float]] = []
        cy, bottom = y, y + h
        for child in tree.children[idx]:
            share = tree.records[child].size / record.size if record.size > 0 else 0.0
            ch = min(h * share, bottom - cy)
            spans.append((child, cy, ch))
            cy += ch
        stack.extend(reversed(spans))

    return rects


def find_rect_at(rects: List[Rect], px: float, py: float) -> Optional[Rect]:
    """Deepest rectangle containing the point, or None."""
    hit: Optional[Rect] = None
    for rect in rects:
        if rect.contains(px, py) and (hit is None or rect.level > hit.level):
            hit = rect
    return hit
