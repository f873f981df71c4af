from __future__ import annotations

"""
Unit tests for the Pre-order Tree Builder.

Verifies sorting-based reconstruction from arbitrary input order, the
three-pass child assembly and the missing-entry / empty-root failures.
"""

from typing import List

import pytest

from duvis.core.analysis.preorder_builder import build_preorder
from duvis.core.parsing.record_parser import parse_records
from duvis.domain.errors import (
    DuplicatePathError,
    EmptyRootError,
    MissingEntryError,
)
from duvis.domain.tree_models import DiskTree, Record


def _build(lines: List[str]) -> DiskTree:
    return build_preorder(parse_records(lines))


def test_unsorted_flat_directory() -> None:
    """Scenario A in arbitrary order."""
    tree = _build(["60 a/y\n", "100 a\n", "40 a/x\n"])

    assert tree.root == 0
    assert tree.root_node.label == "a"
    assert [(c.label, c.size) for c in tree.root_node.children] == [("y", 60), ("x", 40)]


def test_equal_sizes_tie_break_alphabetically() -> None:
    """Scenario B."""
    tree = _build(["10 a\n", "5 a/b\n", "5 a/c\n"])

    assert [c.label for c in tree.root_node.children] == ["b", "c"]


def test_arena_is_path_ordered(shuffled_lines: List[str]) -> None:
    tree = _build(shuffled_lines)

    assert [r.path for r in tree.records] == [
        "proj", "proj/README", "proj/docs", "proj/src", "proj/src/core", "proj/src/util",
    ]
    assert tree.depths == [0, 1, 1, 1, 2, 2]
    assert tree.parents == [None, 0, 0, 0, 3, 3]


def test_children_follow_display_order(shuffled_lines: List[str]) -> None:
    tree = _build(shuffled_lines)

    assert [c.label for c in tree.root_node.children] == ["src", "docs", "README"]
    src = tree.root_node.children[0]
    assert [c.label for c in src.children] == ["core", "util"]


def test_deep_chain() -> None:
    tree = _build(["1 r/a/b/c\n", "4 r\n", "2 r/a/b\n", "3 r/a\n"])

    assert [n.depth for n in tree.walk()] == [0, 1, 2, 3]
    assert [n.label for n in tree.walk()] == ["r", "a", "b", "c"]


def test_missing_intermediate_directory() -> None:
    """Scenario D: a/b/c is listed but a/b is not."""
    with pytest.raises(MissingEntryError) as exc_info:
        _build(["10 a\n", "10 a/b/c\n"])

    assert exc_info.value.index == 1
    assert exc_info.value.kind == "missing_entry"


def test_missing_nested_directory_reports_its_index() -> None:
    with pytest.raises(MissingEntryError) as exc_info:
        _build(["9 r\n", "4 r/a\n", "1 r/a/x/y\n", "5 r/b\n"])

    assert exc_info.value.index == 2


def test_second_root_is_missing_entry() -> None:
    with pytest.raises(MissingEntryError):
        _build(["5 a\n", "5 b\n"])


def test_sibling_with_foreign_prefix_is_missing_entry() -> None:
    with pytest.raises(MissingEntryError):
        _build(["3 a\n", "2 a/b\n", "1 c/b/x\n"])


def test_zero_component_first_record_is_empty_root() -> None:
    """Scenario E."""
    records = [Record(size=3, components=("a",), index=0), Record(size=1, components=(), index=1)]

    with pytest.raises(EmptyRootError) as exc_info:
        build_preorder(records)

    assert exc_info.value.index == 0


def test_empty_input_is_empty_root() -> None:
    with pytest.raises(EmptyRootError):
        build_preorder([])


def test_duplicate_path_is_detected_while_sorting() -> None:
    with pytest.raises(DuplicatePathError):
        _build(["4 a\n", "1 a/x\n", "3 a/x\n"])



def test_missing_entry_names_the_input_line() -> None:
    """The reported index is in sorted order; the detail names the input line."""
    with pytest.raises(MissingEntryError) as exc_info:
        _build(["3 r/x/y\n", "9 r\n", "1 r/a\n"])

    assert exc_info.value.index == 2
    assert "input line 1" in str(exc_info.value)


def test_trailing_slash_root_after_sorting() -> None:
    tree = _build(["8 d/sub\n", "12 d/\n", "4 d/sub/f\n"])

    assert tree.root_node.label == "d"
    assert [n.label for n in tree.walk()] == ["d", "sub", "f"]
