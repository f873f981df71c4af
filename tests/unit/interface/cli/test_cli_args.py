from __future__ import annotations

"""
Unit tests for the CLI argument schema and its mapping to config overrides.
"""

import pytest

from duvis.interface.cli.args import args_to_overrides, build_parser


def _overrides(*argv: str):
    return args_to_overrides(build_parser().parse_args(list(argv)))


def test_no_flags_means_no_overrides() -> None:
    args = build_parser().parse_args([])

    assert args.input_file is None
    assert args_to_overrides(args) == {}


def test_input_file_positional() -> None:
    assert build_parser().parse_args(["du.txt"]).input_file == "du.txt"


def test_reconstruction_flags() -> None:
    assert _overrides("-p", "-0") == {"order": "preorder", "zero_terminated": True}


@pytest.mark.parametrize("flag, mode", [("-g", "gui"), ("-r", "raw"), ("--json", "json")])
def test_output_modes(flag: str, mode: str) -> None:
    assert _overrides(flag)["output_mode"] == mode


def test_output_modes_are_exclusive() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["-g", "-r"])


def test_diagnostics_and_layout_flags() -> None:
    out = _overrides("--debug", "--quiet", "--indent", "3", "--max-levels", "5")

    assert out == {"log_level": "DEBUG", "show_status": False, "indent_width": 3, "max_levels": 5}


def test_non_integer_indent_is_rejected() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--indent", "wide"])
