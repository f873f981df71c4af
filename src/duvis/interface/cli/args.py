from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides understood by the validator.
"""

import argparse
from typing import Any, Dict

from duvis.domain.constants import (
    ORDER_PREORDER,
    OUTPUT_GUI,
    OUTPUT_JSON,
    OUTPUT_RAW,
)

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the duvis CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="duvis",
        description="Visualize the output of du as a size-sorted tree.",
    )

    p.add_argument(
        "input_file",
        nargs="?",
        default=None,
        help="du output to read (default: standard input).",
    )

    # --- Tree Reconstruction ---
    p.add_argument(
        "-p", "--preorder",
        action="store_true",
        help="Sort entries by path before building (input need not be in du order).",
    )
    p.add_argument(
        "-0", "--null",
        dest="zero_terminated",
        action="store_true",
        help="Entries are NUL-terminated, as written by 'du -0'.",
    )

    # --- Output Selection ---
    out = p.add_mutually_exclusive_group()
    out.add_argument("-g", "--gui", action="store_true", help="Show the nested-rectangle viewer.")
    out.add_argument("-r", "--raw", action="store_true", help="Emit entries in build order, indented by depth.")
    out.add_argument("--json", dest="json_output", action="store_true", help="Emit the tree as JSON.")

    p.add_argument("--indent", dest="indent_width", type=int, default=None, help="Spaces per tree level.")
    p.add_argument(
        "--max-levels",
        dest="max_levels",
        type=int,
        default=None,
        help="Columns shown by the viewer (0: all).",
    )

    # --- Configuration and Diagnostics ---
    p.add_argument("--use-defaults", action="store_true", help="Ignore the saved configuration file.")
    p.add_argument("--dump-config", action="store_true", help="Print the effective configuration and exit.")
    p.add_argument("--save-config", action="store_true", help="Persist the effective configuration.")
    p.add_argument("--log-file", dest="log_file", default=None, help="Also write logs to this file.")
    p.add_argument("--quiet", action="store_true", help="Suppress progress messages.")
    p.add_argument("--debug", action="store_true", help="Elevate logging verbosity to DEBUG.")

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Only flags the user actually set appear in the result, so saved settings
    survive unless overridden.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.preorder:
        overrides["order"] = ORDER_PREORDER
    if args.zero_terminated:
        overrides["zero_terminated"] = True

    if args.gui:
        overrides["output_mode"] = OUTPUT_GUI
    elif args.raw:
        overrides["output_mode"] = OUTPUT_RAW
    elif args.json_output:
        overrides["output_mode"] = OUTPUT_JSON

    if args.indent_width is not None:
        overrides["indent_width"] = args.indent_width
    if args.max_levels is not None:
        overrides["max_levels"] = args.max_levels

    if args.debug:
        overrides["log_level"] = "DEBUG"
    if args.quiet:
        overrides["show_status"] = False

    return overrides
