"""
Tests for the binary tree model.

Tests cover:
- create_default_tree
- compute_node_positions
- depth-first queries (nodes, edges, depth, count, find)
"""

from treewalk.core.tree import (
    DEFAULT_TOP_PADDING,
    TreeNode,
    compute_node_positions,
    count_absent_children,
    count_nodes,
    create_default_tree,
    find_node,
    get_all_edges,
    get_all_nodes,
    get_node_values,
    get_tree_depth,
)

from tests.utils.trees import build_chain, build_random_tree


class TestDefaultTree:
    """Tests for the canonical 7-node tree."""

    def test_default_tree_structure(self, default_tree):
        """Root 4, children 2 and 6, leaves 1 3 5 7."""
        assert default_tree.value == 4
        assert default_tree.left.value == 2
        assert default_tree.right.value == 6
        assert [default_tree.left.left.value, default_tree.left.right.value] == [1, 3]
        assert [default_tree.right.left.value, default_tree.right.right.value] == [5, 7]

    def test_default_tree_leaves_have_no_children(self, default_tree):
        """Depth-2 nodes are leaves."""
        for node in get_all_nodes(default_tree):
            if node.value in (1, 3, 5, 7):
                assert node.is_leaf()

    def test_default_tree_is_fresh_each_call(self):
        """Each call builds an independent tree."""
        first = create_default_tree()
        second = create_default_tree()
        first.x = 99.0

        assert first is not second
        assert second.x == 0.0


class TestQueries:
    """Tests for depth-first queries."""

    def test_get_all_nodes_preorder(self, default_tree):
        """Nodes come back in preorder."""
        assert get_node_values(default_tree) == [4, 2, 1, 3, 6, 5, 7]

    def test_get_all_edges_preorder_discovery(self, default_tree):
        """One edge per child link, in preorder discovery order."""
        edges = [(edge.parent.value, edge.child.value) for edge in get_all_edges(default_tree)]

        assert edges == [(4, 2), (2, 1), (2, 3), (4, 6), (6, 5), (6, 7)]

    def test_edges_reference_tree_nodes(self, default_tree):
        """Edges hold the actual node objects."""
        first = get_all_edges(default_tree)[0]

        assert first.parent is default_tree
        assert first.child is default_tree.left

    def test_depth_and_count(self, default_tree):
        """Default tree has depth 3 and 7 nodes."""
        assert get_tree_depth(default_tree) == 3
        assert count_nodes(default_tree) == 7

    def test_absent_children_of_complete_tree(self, default_tree):
        """A complete 7-node tree has 8 empty child slots."""
        assert count_absent_children(default_tree) == 8

    def test_find_node(self, default_tree):
        """find_node returns the node object or None."""
        assert find_node(default_tree, 5) is default_tree.right.left
        assert find_node(default_tree, 42) is None

    def test_find_node_returns_first_preorder_match(self):
        """With duplicate values the preorder-first node wins."""
        root = TreeNode(value=1, left=TreeNode(value=2, left=TreeNode(value=9)), right=TreeNode(value=9))

        assert find_node(root, 9) is root.left.left

    def test_empty_tree_queries(self):
        """An absent root degrades to empty results."""
        assert get_all_nodes(None) == []
        assert get_all_edges(None) == []
        assert get_tree_depth(None) == 0
        assert count_nodes(None) == 0
        assert count_absent_children(None) == 0
        assert find_node(None, 1) is None

    def test_chain_queries(self):
        """A degenerate chain has depth equal to its length."""
        chain = build_chain(5, side="right")

        assert get_tree_depth(chain) == 5
        assert count_nodes(chain) == 5
        assert len(get_all_edges(chain)) == 4
        assert count_absent_children(chain) == 6

    def test_edges_count_matches_nodes_on_random_trees(self):
        """Every non-root node has exactly one incoming edge."""
        for seed in range(20):
            root = build_random_tree(seed)
            n = count_nodes(root)
            assert len(get_all_edges(root)) == max(n - 1, 0)
            assert count_absent_children(root) == (n + 1 if n else 0)


class TestLayout:
    """Tests for compute_node_positions."""

    def test_default_layout(self, default_tree):
        """Nodes sit at interval midpoints, levels a quarter height apart."""
        compute_node_positions(default_tree, 800, 400)

        positions = {node.value: (node.x, node.y) for node in get_all_nodes(default_tree)}
        top = DEFAULT_TOP_PADDING
        assert positions[4] == (400.0, top)
        assert positions[2] == (200.0, top + 100)
        assert positions[6] == (600.0, top + 100)
        assert positions[1] == (100.0, top + 200)
        assert positions[3] == (300.0, top + 200)
        assert positions[5] == (500.0, top + 200)
        assert positions[7] == (700.0, top + 200)

    def test_layout_is_idempotent(self, default_tree):
        """Repeating the layout gives the same positions."""
        compute_node_positions(default_tree, 640, 480)
        first = [(n.x, n.y) for n in get_all_nodes(default_tree)]
        compute_node_positions(default_tree, 640, 480)
        second = [(n.x, n.y) for n in get_all_nodes(default_tree)]

        assert first == second

    def test_layout_custom_top_padding(self, default_tree):
        """The top padding shifts every level."""
        compute_node_positions(default_tree, 800, 400, top_padding=10)

        assert default_tree.y == 10
        assert default_tree.left.left.y == 210

    def test_layout_none_is_noop(self):
        """Laying out an absent root does nothing."""
        compute_node_positions(None, 800, 400)

    def test_layout_does_not_change_structure(self, default_tree):
        """Positions never affect node values or links."""
        before = get_node_values(default_tree)
        compute_node_positions(default_tree, 123, 456)

        assert get_node_values(default_tree) == before
