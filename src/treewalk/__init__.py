"""
treewalk: step-through simulation of recursive binary-tree traversals.

Example:
    from treewalk import ExecutionEngine

    engine = ExecutionEngine()
    engine.initialize("preorder")
    engine.run_to_end()
    engine.get_state().traversal_output  # [4, 2, 1, 3, 6, 5, 7]
"""

from treewalk.config import Settings
from treewalk.core.engine import ExecutionEngine
from treewalk.core.state import AppState, StateManager, states_equal
from treewalk.core.steps import ExecutionStep, NodeState, StackAction, StackFrame, StepType
from treewalk.core.traversal import get_traversal_generator
from treewalk.core.tree import TreeNode, create_default_tree

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "ExecutionEngine",
    "AppState",
    "StateManager",
    "states_equal",
    "ExecutionStep",
    "NodeState",
    "StackAction",
    "StackFrame",
    "StepType",
    "get_traversal_generator",
    "TreeNode",
    "create_default_tree",
]
