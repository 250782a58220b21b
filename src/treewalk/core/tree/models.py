"""
Binary tree data models.

- TreeNode: a node of the binary tree being traversed
- TreeEdge: a parent/child link, as produced by ``get_all_edges``

Tree Structure (default tree):
        4
       / \\
      2   6
     / \\ / \\
    1  3 5  7

Node values are identity keys: the state manager tracks node states by
value, so values must be unique within one tree. ``x`` and ``y`` are layout
coordinates only and never influence traversal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel


class TreeNode(BaseModel):
    """
    A node in a binary tree.

    Attributes:
        value: Unique integer identifying the node
        left: Left child, or None for an absent child
        right: Right child, or None for an absent child
        x: Horizontal render coordinate (set by ``compute_node_positions``)
        y: Vertical render coordinate (set by ``compute_node_positions``)
    """

    value: int
    left: Optional[TreeNode] = None
    right: Optional[TreeNode] = None
    x: float = 0.0
    y: float = 0.0

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __str__(self) -> str:
        return f"TreeNode({self.value})"


@dataclass(frozen=True)
class TreeEdge:
    """Link from a parent node to one of its existing children."""

    parent: TreeNode
    child: TreeNode


def create_default_tree() -> TreeNode:
    """Build the canonical 7-node complete binary search tree (values 1-7)."""
    return TreeNode(
        value=4,
        left=TreeNode(value=2, left=TreeNode(value=1), right=TreeNode(value=3)),
        right=TreeNode(value=6, left=TreeNode(value=5), right=TreeNode(value=7)),
    )
