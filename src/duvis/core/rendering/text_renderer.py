from __future__ import annotations

"""
Text Renderers.

Stateless consumers of a built DiskTree: the indented hierarchy, the raw arena
listing and a nested plain-data form for JSON output. None of them sort;
children are walked in the order the builder fixed.
"""

from typing import Any, Dict, List

from duvis.domain.constants import DEFAULT_INDENT_WIDTH
from duvis.domain.tree_models import DiskTree, TreeNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree(tree: DiskTree, indent_width: int = DEFAULT_INDENT_WIDTH) -> List[str]:
    """
    Render the tree as indented lines, largest subtrees first.

    The root line shows the full root path; every other line shows the last
    path component. Each line is `indent(depth) + label + " " + size`.

    Args:
        tree: The built tree.
        indent_width: Spaces per depth level.

    Returns:
        List[str]: One line per node in display order.
    """
    lines: List[str] = []
    for node in tree.walk():
        lines.append(f"{_indent(node.depth, indent_width)}{node.label} {node.size}")
    return lines


def render_raw(tree: DiskTree, indent_width: int = DEFAULT_INDENT_WIDTH) -> List[str]:
    """
    Render records in arena order, indented by depth.

    Arena order is the input order for post-order builds and the path order
    for pre-order builds. Every line uses the last component, the root too.
    """
    lines: List[str] = []
    for idx, record in enumerate(tree.records):
        lines.append(f"{_indent(tree.depths[idx], indent_width)}{record.name} {record.size}")
    return lines


def tree_to_dict(node: TreeNode) -> Dict[str, Any]:
    """Convert a subtree into nested dictionaries for JSON serialization."""
    return {
        "label": node.label,
        "size": node.size,
        "depth": node.depth,
        "children": [tree_to_dict(child) for child in node.children],
    }

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _indent(depth: int, width: int) -> str:
    return " " * (width * max(depth, 0))
