"""Presentation layer for CLI output formatting.

Components:
- colors: palette and Pygments-based diff coloring
- tree_renderer: Rich trees for the changeset and pending changes explorers
- history_renderer: Rich tables for changeset listings
"""

from tfview.core.presentation.history_renderer import build_history_table, render_history
from tfview.core.presentation.tree_renderer import build_tree, render_tree

__all__ = [
    "build_history_table",
    "build_tree",
    "render_history",
    "render_tree",
]
