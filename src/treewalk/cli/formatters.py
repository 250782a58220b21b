"""Formatting helpers for CLI presentation."""

from __future__ import annotations

from typing import Optional, Sequence

from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from treewalk.core.listings import get_code_listing
from treewalk.core.state import AppState
from treewalk.core.steps import ExecutionStep, NodeState, StackFrame, frames_top_first
from treewalk.core.tree import TreeNode, get_all_nodes

NODE_STATE_STYLES = {
    NodeState.UNVISITED: "grey50",
    NodeState.PROCESSING: "yellow",
    NodeState.VISITED: "blue",
    NodeState.FINISHED: "green",
}


def style_for_state(state: NodeState | str) -> str:
    """Rich style for a node state; unknown states look unvisited."""
    try:
        return NODE_STATE_STYLES[NodeState(state)]
    except ValueError:
        return NODE_STATE_STYLES[NodeState.UNVISITED]


def format_node_value(value: Optional[int]) -> str:
    return "null" if value is None else str(value)


def format_output(values: Sequence[int]) -> str:
    return ", ".join(str(v) for v in values) if values else "<none>"


def build_listing_table(traversal_type: str, highlighted_line: int = 0) -> Table:
    table = Table(title=f"{traversal_type} listing", show_header=False, box=None)
    table.add_column("Line", style="dim", justify="right")
    table.add_column("Marker")
    table.add_column("Code")
    for number, line in enumerate(get_code_listing(traversal_type), start=1):
        if number == highlighted_line:
            table.add_row(str(number), "->", Text(line, style="bold reverse"))
        else:
            table.add_row(str(number), "", Text(line))
    return table


def build_steps_table(steps: Sequence[ExecutionStep], limit: Optional[int] = None) -> Table:
    table = Table(title="Execution steps")
    table.add_column("#", justify="right")
    table.add_column("Type", style="cyan")
    table.add_column("Node")
    table.add_column("Line", justify="right")
    table.add_column("Stack")
    table.add_column("State")
    table.add_column("Description", style="dim")
    shown = steps if limit is None else steps[:limit]
    for index, step in enumerate(shown):
        table.add_row(
            str(index),
            step.type.value,
            format_node_value(step.node_value),
            str(step.code_line),
            step.stack_action.value,
            Text(step.node_state.value, style=style_for_state(step.node_state)),
            step.description,
        )
    return table


def build_call_stack_table(frames: Sequence[StackFrame]) -> Table:
    """Frames listed top first, the way a call stack panel shows them."""
    table = Table(title=f"Call stack ({len(frames)})")
    table.add_column("Frame")
    table.add_column("Return address", style="dim")
    ordered = frames_top_first(frames)
    for position, frame in enumerate(ordered):
        label = Text(str(frame), style="bold" if position == 0 else "")
        table.add_row(label, frame.return_address)
    if not ordered:
        table.add_row(Text("<empty>", style="dim"), "")
    return table


def build_node_states_table(state: AppState) -> Table:
    table = Table(title="Node states")
    table.add_column("Node", justify="right")
    table.add_column("State")
    for value in sorted(state.node_states):
        node_state = state.node_states[value]
        table.add_row(str(value), Text(NodeState(node_state).value, style=style_for_state(node_state)))
    return table


def build_tree_view(root: Optional[TreeNode], state: Optional[AppState] = None) -> Tree:
    """Render the tree as a rich Tree, coloured by node state when given."""

    def _label(node: Optional[TreeNode], side: str) -> Text:
        if node is None:
            return Text(f"{side}: null", style="dim")
        node_state = state.get_node_state(node.value) if state is not None else NodeState.UNVISITED
        return Text(f"{side}: {node.value}" if side else str(node.value), style=style_for_state(node_state))

    def _add_children(branch: Tree, node: TreeNode) -> None:
        if node.is_leaf():
            return
        for side, child in (("L", node.left), ("R", node.right)):
            child_branch = branch.add(_label(child, side))
            if child is not None:
                _add_children(child_branch, child)

    if root is None:
        return Tree(Text("<empty tree>", style="dim"))
    tree = Tree(_label(root, ""))
    _add_children(tree, root)
    return tree


def build_positions_table(root: Optional[TreeNode]) -> Table:
    table = Table(title="Layout")
    table.add_column("Node", justify="right")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    for node in get_all_nodes(root):
        table.add_row(str(node.value), f"{node.x:.1f}", f"{node.y:.1f}")
    return table


__all__ = [
    "NODE_STATE_STYLES",
    "style_for_state",
    "format_node_value",
    "format_output",
    "build_listing_table",
    "build_steps_table",
    "build_call_stack_table",
    "build_node_states_table",
    "build_tree_view",
    "build_positions_table",
]
