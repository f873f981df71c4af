from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates one run: configuration loading and merging (defaults, saved
file, CLI overrides), logging bootstrap, input parsing, tree reconstruction
and output rendering. Domain errors become exit code 1 with a one-line
diagnostic; the process never prints a partial tree.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from duvis.core.analysis.tree_service import build_tree, recursion_headroom
from duvis.core.parsing.record_parser import parse_records
from duvis.core.rendering.text_renderer import render_raw, render_tree, tree_to_dict
from duvis.core.validator import validate_config
from duvis.domain.config import get_default_config, load_config, save_config
from duvis.domain.constants import ORDER_PREORDER, OUTPUT_GUI, OUTPUT_JSON, OUTPUT_RAW
from duvis.domain.errors import DuvisError
from duvis.domain.tree_models import DiskTree
from duvis.infra.fs import iter_input_lines
from duvis.infra.logging import LoggingConfig, configure_logging, get_logger
from duvis.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 bad input, 2 unreadable file,
             130 interrupted, 141 output pipe closed).
    """
    # Paths are written back exactly as they were read
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="surrogateescape")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Configuration hierarchy: defaults, saved file, CLI overrides
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    conf, warnings = validate_config(raw_conf, strict=False)

    # 3. Logging bootstrap (console on stderr, optional rotating file)
    configure_logging(LoggingConfig.from_settings(conf, log_file=args.log_file))
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.save_config:
        save_config(conf)

    if args.dump_config:
        print(json.dumps(conf, ensure_ascii=False, indent=2))
        return 0

    status = _StatusReporter(enabled=conf["show_status"])

    # 4. Parse and build
    try:
        status("Parsing du file.")
        records = parse_records(iter_input_lines(args.input_file, conf["zero_terminated"]))
        if not records:
            logger.debug("Empty input. Nothing to render.")
            return 0

        if conf["order"] == ORDER_PREORDER:
            status("Sorting entries.")
        status(f"Building tree ({conf['order']}).")
        tree = build_tree(records, conf["order"])

    except OSError as e:
        logger.error(f"Cannot read input: {e}")
        print(f"ERROR: cannot read input: {e}", file=sys.stderr)
        return 2
    except DuvisError as e:
        logger.debug(f"Build aborted: {e!r}")
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return 130

    # 5. Output rendering phase
    try:
        _emit(tree, conf, status)
    except BrokenPipeError:
        # Reader went away (e.g. `duvis du.txt | head`)
        logger.debug("Output pipe closed by reader.")
        _silence_stdout()
        return 141
    return 0

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow merge of the known, non-None override keys into the base."""
    out = dict(base)
    for k, v in overrides.items():
        if k in base and v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

class _StatusReporter:
    """Numbered progress messages, one per pipeline stage."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.passes = 0

    def __call__(self, msg: str) -> None:
        self.passes += 1
        if self.enabled:
            logger.info(f"({self.passes}) {msg}")


def _emit(tree: DiskTree, conf: Dict[str, Any], status: _StatusReporter) -> None:
    mode = conf["output_mode"]

    if mode == OUTPUT_GUI:
        status("Recording depths.")
        status("Rendering tree.")
        from duvis.interface.gui.app import show_treemap
        show_treemap(tree, conf)
        return

    if mode == OUTPUT_RAW:
        status("Emitting entries.")
        lines = render_raw(tree, conf["indent_width"])
    elif mode == OUTPUT_JSON:
        status("Emitting tree.")
        with recursion_headroom(max(tree.depths) + 1):
            lines = [json.dumps(tree_to_dict(tree.root_node), ensure_ascii=False, indent=2)]
    else:
        status("Emitting tree.")
        lines = render_tree(tree, conf["indent_width"])

    sys.stdout.write("\n".join(lines) + "\n")
    sys.stdout.flush()


def _silence_stdout() -> None:
    """Point stdout at the null device so the exit-time flush cannot fail again."""
    try:
        fd = sys.stdout.fileno()
    except (AttributeError, OSError, ValueError):
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, fd)
    os.close(devnull)


if __name__ == "__main__":
    sys.exit(main())
