"""Rendering of expanded explorer trees with Rich."""

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from tfview.core.presentation.colors import TfviewColors
from tfview.domain.tree import ExpandedNode


def _label(node: ExpandedNode) -> str:
    descriptor = node.descriptor
    style = TfviewColors.DIRECTORY_STYLE if descriptor.is_directory else TfviewColors.FILE_STYLE
    return f"[{style}]{escape(descriptor.label)}[/]"


def _add_children(branch: Tree, nodes: Sequence[ExpandedNode]) -> None:
    for node in nodes:
        child = branch.add(_label(node))
        _add_children(child, node.children)


def build_tree(title: str, nodes: Sequence[ExpandedNode]) -> Tree:
    """Build a Rich tree from expanded explorer nodes.

    Args:
        title: Root label (markup allowed).
        nodes: Top-level nodes, children included.

    Returns:
        Tree ready to print.
    """
    tree = Tree(title, guide_style="dim")
    _add_children(tree, nodes)
    return tree


def render_tree(console: Console, title: str, nodes: Sequence[ExpandedNode]) -> None:
    console.print(build_tree(title, nodes))
