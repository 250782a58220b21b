"""
Node layout for rendering.

Positions come from recursive interval bisection: the root owns the
horizontal interval [0, width] and sits at its midpoint; each child takes
one half of its parent's interval. Levels are spaced a quarter of the
height apart, below a fixed top padding.
"""

from __future__ import annotations

from typing import Optional

from treewalk.core.tree.models import TreeNode

DEFAULT_NODE_RADIUS = 25.0
DEFAULT_TOP_MARGIN = 20.0
DEFAULT_TOP_PADDING = DEFAULT_NODE_RADIUS + DEFAULT_TOP_MARGIN


def compute_node_positions(
    root: Optional[TreeNode],
    width: float,
    height: float,
    *,
    top_padding: float = DEFAULT_TOP_PADDING,
) -> None:
    """
    Assign ``x`` and ``y`` to every node of the tree in place.

    Args:
        root: Tree root; nothing happens when it is None
        width: Width of the drawing area
        height: Height of the drawing area
        top_padding: Distance from the top edge to the root's centre

    Calling this repeatedly with the same arguments yields the same
    positions.
    """
    if root is None:
        return

    vertical_spacing = height / 4

    def _place(node: Optional[TreeNode], level: int, low: float, high: float) -> None:
        if node is None:
            return
        mid = (low + high) / 2
        node.x = mid
        node.y = top_padding + level * vertical_spacing
        _place(node.left, level + 1, low, mid)
        _place(node.right, level + 1, mid, high)

    _place(root, 0, 0.0, float(width))


__all__ = [
    "DEFAULT_NODE_RADIUS",
    "DEFAULT_TOP_MARGIN",
    "DEFAULT_TOP_PADDING",
    "compute_node_positions",
]
