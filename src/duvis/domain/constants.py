from __future__ import annotations

"""
Domain Constants.

Centralizes the limits of the record format, the supported build orders and
output modes, and the application versioning used by the config schema.
"""

from typing import Tuple

CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# RECORD FORMAT LIMITS
# -----------------------------------------------------------------------------

MAX_PATH_BYTES = 4096
MAX_SIZE_FIELD_BYTES = 32  # Digits plus the separator byte
MAX_LINE_BYTES = MAX_PATH_BYTES + MAX_SIZE_FIELD_BYTES

MAX_SIZE = 2 ** 64 - 1
PATH_SEPARATOR = "/"
SIZE_SEPARATORS = (" ", "\t")

# -----------------------------------------------------------------------------
# BUILD AND OUTPUT SELECTORS
# -----------------------------------------------------------------------------

ORDER_POSTORDER = "postorder"
ORDER_PREORDER = "preorder"
BUILD_ORDERS: Tuple[str, ...] = (ORDER_POSTORDER, ORDER_PREORDER)

OUTPUT_TREE = "tree"
OUTPUT_RAW = "raw"
OUTPUT_JSON = "json"
OUTPUT_GUI = "gui"
OUTPUT_MODES: Tuple[str, ...] = (OUTPUT_TREE, OUTPUT_RAW, OUTPUT_JSON, OUTPUT_GUI)

DEFAULT_INDENT_WIDTH = 2
