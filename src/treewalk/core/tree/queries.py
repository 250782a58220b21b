"""Depth-first queries over a binary tree. An absent root yields empty results."""

from __future__ import annotations

from typing import List, Optional

from treewalk.core.tree.models import TreeEdge, TreeNode


def get_all_nodes(root: Optional[TreeNode]) -> List[TreeNode]:
    """Return every node in preorder."""
    nodes: List[TreeNode] = []

    def _visit(node: Optional[TreeNode]) -> None:
        if node is None:
            return
        nodes.append(node)
        _visit(node.left)
        _visit(node.right)

    _visit(root)
    return nodes


def get_node_values(root: Optional[TreeNode]) -> List[int]:
    return [node.value for node in get_all_nodes(root)]


def get_all_edges(root: Optional[TreeNode]) -> List[TreeEdge]:
    """Return one edge per existing child link, in preorder discovery order."""
    edges: List[TreeEdge] = []

    def _visit(node: Optional[TreeNode]) -> None:
        if node is None:
            return
        if node.left is not None:
            edges.append(TreeEdge(parent=node, child=node.left))
            _visit(node.left)
        if node.right is not None:
            edges.append(TreeEdge(parent=node, child=node.right))
            _visit(node.right)

    _visit(root)
    return edges


def get_tree_depth(root: Optional[TreeNode]) -> int:
    if root is None:
        return 0
    return 1 + max(get_tree_depth(root.left), get_tree_depth(root.right))


def count_nodes(root: Optional[TreeNode]) -> int:
    if root is None:
        return 0
    return 1 + count_nodes(root.left) + count_nodes(root.right)


def count_absent_children(root: Optional[TreeNode]) -> int:
    """Count the empty child slots a recursive walk would call into."""
    if root is None:
        return 0
    return sum(
        1 if child is None else count_absent_children(child)
        for child in (root.left, root.right)
    )


def find_node(root: Optional[TreeNode], value: int) -> Optional[TreeNode]:
    """Return the first node holding ``value`` in preorder, or None."""
    if root is None:
        return None
    if root.value == value:
        return root
    found = find_node(root.left, value)
    if found is not None:
        return found
    return find_node(root.right, value)


__all__ = [
    "get_all_nodes",
    "get_node_values",
    "get_all_edges",
    "get_tree_depth",
    "count_nodes",
    "count_absent_children",
    "find_node",
]
