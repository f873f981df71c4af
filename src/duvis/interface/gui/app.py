from __future__ import annotations

"""
Nested-Rectangle Viewer.

CustomTkinter window that draws the rectangle layout of a built DiskTree.
Clicking a rectangle refocuses the diagram on that node; right-click or
Escape returns to its parent. The window only consumes the tree; all geometry
comes from the layout module.
"""

import logging
from typing import Any, Dict, List, Optional

import customtkinter as ctk

from duvis.core.rendering.rect_layout import Rect, find_rect_at, layout_rects
from duvis.domain.tree_models import DiskTree

logger = logging.getLogger(__name__)

_PALETTE = ("#4e79a7", "#f28e2b", "#59a14f", "#e15759", "#76b7b2", "#edc948", "#b07aa1")
_MIN_LABEL_HEIGHT = 14

# -----------------------------------------------------------------------------
# VIEWER WINDOW
# -----------------------------------------------------------------------------

class TreemapWindow(ctk.CTk):
    """Root window holding a single canvas with the diagram."""

    def __init__(self, tree: DiskTree, width: int, height: int, max_levels: int = 0, **kwargs: Any):
        super().__init__(**kwargs)
        self.tree = tree
        self.max_levels = max_levels or None
        self.focus_index = tree.root
        self.rects: List[Rect] = []

        ctk.set_appearance_mode("System")
        self.title(f"duvis - {tree.label(tree.root)}")
        self.geometry(f"{width}x{height}")
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        self.canvas = ctk.CTkCanvas(self, highlightthickness=0, bg="white")
        self.canvas.grid(row=0, column=0, sticky="nsew")

        self.canvas.bind("<Configure>", lambda _e: self.redraw())
        self.canvas.bind("<Button-1>", self._on_click)
        self.canvas.bind("<Button-3>", lambda _e: self._on_back())
        self.bind("<Escape>", lambda _e: self._on_back())

    def redraw(self) -> None:
        """Recompute the layout for the current canvas size and repaint."""
        width = max(self.canvas.winfo_width(), 1)
        height = max(self.canvas.winfo_height(), 1)
        self.rects = layout_rects(self.tree, width, height, self.focus_index, self.max_levels)

        self.canvas.delete("all")
        for rect in self.rects:
            if rect.height < 1:
                continue
            color = _PALETTE[rect.level % len(_PALETTE)]
            self.canvas.create_rectangle(
                rect.x, rect.y, rect.x + rect.width, rect.y + rect.height,
                fill=color, outline="black",
            )
            if rect.height >= _MIN_LABEL_HEIGHT:
                self.canvas.create_text(
                    rect.x + 4, rect.y + rect.height / 2,
                    text=f"{rect.label} {rect.size}", anchor="w",
                    width=max(rect.width - 8, 1),
                )

    def refocus(self, index: Optional[int]) -> None:
        if index is None or index == self.focus_index:
            return
        self.focus_index = index
        logger.debug(f"Viewer focus: {self.tree.records[index].path}")
        self.redraw()

    def _on_click(self, event: Any) -> None:
        hit = find_rect_at(self.rects, event.x, event.y)
        if hit is not None:
            self.refocus(hit.index)

    def _on_back(self) -> None:
        self.refocus(self.tree.parents[self.focus_index])

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def show_treemap(tree: DiskTree, config: Dict[str, Any]) -> None:
    """
    Open the viewer and block until it is closed.

    Args:
        tree: The built tree.
        config: Validated configuration (viewer size and column cap).
    """
    logger.info(f"Viewer opened on {len(tree)} nodes.")

    window = TreemapWindow(
        tree,
        width=config.get("gui_width", 1000),
        height=config.get("gui_height", 700),
        max_levels=config.get("max_levels", 0),
    )
    window.mainloop()
