from __future__ import annotations

"""
Unit tests for the Tree Service and the properties both builders share.

A seeded synthetic filesystem is emitted once in `du` post-order and once
shuffled; both builds must satisfy the structural invariants and agree on
every node's label, size and depth.
"""

import random
import sys
from collections import Counter
from typing import List, Tuple

import pytest

from duvis.core.analysis.tree_service import build_tree, recursion_headroom
from duvis.core.parsing.record_parser import parse_records
from duvis.core.rendering.text_renderer import render_tree
from duvis.domain.tree_models import DiskTree


def _synthetic_du(seed: int, max_depth: int = 4) -> List[str]:
    """Emit a random tree as post-order `du` lines."""
    rng = random.Random(seed)
    lines: List[str] = []

    def emit(path: str, depth: int) -> int:
        total = rng.randint(0, 8)
        if depth < max_depth:
            for k in range(rng.randint(0, 4)):
                total += emit(f"{path}/d{k}_{rng.randint(0, 99)}", depth + 1)
        lines.append(f"{total}\t{path}\n")
        return total

    emit("base/root", 0)
    return lines


def _signature(tree: DiskTree) -> Counter:
    return Counter((n.label, n.size, n.depth) for n in tree.walk())


def _check_invariants(tree: DiskTree) -> None:
    reached = 0
    for node in tree.walk():
        reached += 1
        if node.is_root:
            assert node.depth == 0
            continue
        parent = node.parent
        assert node.components[:-1] == parent.components
        assert node.depth == parent.depth + 1

        siblings = parent.children
        pos = siblings.index(node)
        if pos:
            prev = siblings[pos - 1]
            assert prev.size > node.size or (prev.size == node.size and prev.label < node.label)

    assert reached == len(tree)


@pytest.mark.parametrize("seed", [1, 7, 42, 2024])
def test_builders_agree_on_synthetic_trees(seed: int) -> None:
    lines = _synthetic_du(seed)
    shuffled = list(lines)
    random.Random(seed).shuffle(shuffled)

    post = build_tree(parse_records(lines), "postorder")
    pre = build_tree(parse_records(shuffled), "preorder")

    _check_invariants(post)
    _check_invariants(pre)
    assert _signature(post) == _signature(pre)
    assert [(n.label, n.size, n.depth) for n in post.walk()] == \
           [(n.label, n.size, n.depth) for n in pre.walk()]


def test_every_non_root_record_has_exactly_one_parent(postorder_lines: List[str]) -> None:
    tree = build_tree(parse_records(postorder_lines))

    owned: List[int] = [c for kids in tree.children for c in kids]
    assert sorted(owned) == sorted(i for i in range(len(tree)) if i != tree.root)


def test_default_order_is_postorder(postorder_lines: List[str]) -> None:
    tree = build_tree(parse_records(postorder_lines))

    assert tree.root == len(tree) - 1


def test_preorder_variant_accepts_postorder_input(postorder_lines: List[str]) -> None:
    tree = build_tree(parse_records(postorder_lines), "preorder")

    assert tree.root == 0
    assert tree.root_node.label == "proj"


def test_unknown_order_is_rejected(postorder_lines: List[str]) -> None:
    with pytest.raises(ValueError):
        build_tree(parse_records(postorder_lines), "breadth-first")


def test_max_depths_per_subtree(postorder_lines: List[str]) -> None:
    tree = build_tree(parse_records(postorder_lines))
    deepest: List[Tuple[str, int]] = [(n.label, tree.max_depths()[n.index]) for n in tree.walk()]

    assert deepest == [
        ("proj", 2), ("src", 2), ("core", 2), ("util", 2), ("docs", 1), ("README", 1),
    ]


def _chain(depth: int) -> List[str]:
    """A single directory chain `r/a/a/...` as post-order `du` lines."""
    paths = ["r" + "/a" * level for level in range(depth + 1)]
    return [f"{depth + 1 - level}\t{path}\n" for level, path in reversed(list(enumerate(paths)))]


@pytest.mark.parametrize("order", ["postorder", "preorder"])
def test_deep_chain_builds_past_default_recursion_limit(order: str) -> None:
    limit = sys.getrecursionlimit()
    depth = 1500

    tree = build_tree(parse_records(_chain(depth)), order)

    assert len(tree) == depth + 1
    assert max(tree.depths) == depth
    assert len(render_tree(tree)) == depth + 1
    assert sys.getrecursionlimit() == limit


def test_recursion_headroom_restores_limit() -> None:
    limit = sys.getrecursionlimit()

    with recursion_headroom(limit * 2):
        assert sys.getrecursionlimit() > limit * 2

    with recursion_headroom(1):
        assert sys.getrecursionlimit() == limit

    assert sys.getrecursionlimit() == limit
