"""
Binary tree module.

Components:
- TreeNode / TreeEdge: tree data structures
- create_default_tree: the canonical 7-node tree
- compute_node_positions: interval-bisection layout
- get_all_nodes, get_all_edges, get_tree_depth, count_nodes, find_node:
  depth-first queries

Example:
    from treewalk.core.tree import create_default_tree, get_node_values

    root = create_default_tree()
    get_node_values(root)  # [4, 2, 1, 3, 6, 5, 7]
"""

from treewalk.core.tree.layout import DEFAULT_TOP_PADDING, compute_node_positions
from treewalk.core.tree.models import TreeEdge, TreeNode, create_default_tree
from treewalk.core.tree.queries import (
    count_absent_children,
    count_nodes,
    find_node,
    get_all_edges,
    get_all_nodes,
    get_node_values,
    get_tree_depth,
)

__all__ = [
    "TreeNode",
    "TreeEdge",
    "create_default_tree",
    "compute_node_positions",
    "DEFAULT_TOP_PADDING",
    "get_all_nodes",
    "get_node_values",
    "get_all_edges",
    "get_tree_depth",
    "count_nodes",
    "count_absent_children",
    "find_node",
]
