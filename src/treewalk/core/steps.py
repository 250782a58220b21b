"""
Execution Step Model

An execution step is one atomic unit of simulated recursive execution. A
traversal is replayed as a precomputed list of steps; each step says which
listing line to highlight, what happens to the simulated call stack and
which visual state its node moves to.

Key concepts:
- Steps are immutable records built through the named factories on
  ExecutionStep; the factories are the only place that decides a step's
  stack action and node state
- A step whose ``node_value`` is None stands for a call made with an
  absent child
- CALL steps push a StackFrame, RETURN steps pop one, every other step
  leaves the stack alone
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, model_validator

from treewalk.core.listings import LISTING_LINE_COUNT


class StepType(str, Enum):
    """Kind of simulated execution step."""

    CALL = "CALL"  # Entering the function
    CHECK_NULL = "CHECK_NULL"  # Evaluating the null guard
    PROCESS_NODE = "PROCESS_NODE"  # Printing the node
    RECURSE_LEFT = "RECURSE_LEFT"  # About to call into the left child
    RECURSE_RIGHT = "RECURSE_RIGHT"  # About to call into the right child
    RETURN = "RETURN"  # Leaving the function


class NodeState(str, Enum):
    """Visual state of a tree node during the simulated execution."""

    UNVISITED = "unvisited"
    PROCESSING = "processing"
    VISITED = "visited"
    FINISHED = "finished"


class StackAction(str, Enum):
    """Effect of a step on the simulated call stack."""

    PUSH = "push"
    POP = "pop"
    NONE = "none"


_EXPECTED_STACK_ACTION = {
    StepType.CALL: StackAction.PUSH,
    StepType.RETURN: StackAction.POP,
}


class ExecutionStep(BaseModel):
    """
    One step of a simulated traversal.

    Attributes:
        type: Kind of step
        node_value: Value of the node involved, None for an absent child
        code_line: 1-indexed line of the order's listing to highlight
        stack_action: PUSH for CALL, POP for RETURN, NONE otherwise
        node_state: State to give ``node_value`` once the step is applied
            (ignored when node_value is None)
        description: Human-readable summary of the step

    Examples:
        >>> step = ExecutionStep.call(4, 1)
        >>> step.stack_action
        <StackAction.PUSH: 'push'>
        >>> step.node_state
        <NodeState.PROCESSING: 'processing'>
    """

    model_config = ConfigDict(frozen=True)

    type: StepType
    node_value: Optional[int] = None
    code_line: int = Field(ge=1, le=LISTING_LINE_COUNT)
    stack_action: StackAction
    node_state: NodeState
    description: str = ""

    @model_validator(mode="after")
    def _check_stack_action(self) -> "ExecutionStep":
        expected = _EXPECTED_STACK_ACTION.get(self.type, StackAction.NONE)
        if self.stack_action != expected:
            raise ValueError(
                f"{self.type.value} steps must use stack action {expected.value!r}, "
                f"got {self.stack_action.value!r}"
            )
        return self

    @property
    def has_node(self) -> bool:
        return self.node_value is not None

    @classmethod
    def call(cls, node_value: Optional[int], code_line: int) -> "ExecutionStep":
        return cls(
            type=StepType.CALL,
            node_value=node_value,
            code_line=code_line,
            stack_action=StackAction.PUSH,
            node_state=NodeState.PROCESSING if node_value is not None else NodeState.UNVISITED,
            description=(
                f"Call function with node {node_value}" if node_value is not None else "Call function with null"
            ),
        )

    @classmethod
    def check_null(cls, node_value: Optional[int], code_line: int) -> "ExecutionStep":
        return cls(
            type=StepType.CHECK_NULL,
            node_value=node_value,
            code_line=code_line,
            stack_action=StackAction.NONE,
            node_state=NodeState.PROCESSING if node_value is not None else NodeState.UNVISITED,
            description=(
                f"Check if node {node_value} is null (false)"
                if node_value is not None
                else "Check if node is null (true)"
            ),
        )

    @classmethod
    def process_node(cls, node_value: int, code_line: int) -> "ExecutionStep":
        return cls(
            type=StepType.PROCESS_NODE,
            node_value=node_value,
            code_line=code_line,
            stack_action=StackAction.NONE,
            node_state=NodeState.VISITED,
            description=f"Process/print node {node_value}",
        )

    @classmethod
    def recurse_left(cls, node_value: int, code_line: int) -> "ExecutionStep":
        return cls(
            type=StepType.RECURSE_LEFT,
            node_value=node_value,
            code_line=code_line,
            stack_action=StackAction.NONE,
            node_state=NodeState.PROCESSING,
            description=f"Recurse to left child of node {node_value}",
        )

    @classmethod
    def recurse_right(cls, node_value: int, code_line: int) -> "ExecutionStep":
        return cls(
            type=StepType.RECURSE_RIGHT,
            node_value=node_value,
            code_line=code_line,
            stack_action=StackAction.NONE,
            node_state=NodeState.PROCESSING,
            description=f"Recurse to right child of node {node_value}",
        )

    @classmethod
    def return_(
        cls,
        node_value: Optional[int],
        code_line: int,
        is_null_return: bool = False,
    ) -> "ExecutionStep":
        """
        Create a RETURN step.

        Args:
            node_value: Node being returned from, None for an absent child
            code_line: Listing line of the return
            is_null_return: True when returning from the null guard, in
                which case the node is left UNVISITED instead of FINISHED
        """
        return cls(
            type=StepType.RETURN,
            node_value=node_value,
            code_line=code_line,
            stack_action=StackAction.POP,
            node_state=NodeState.UNVISITED if is_null_return or node_value is None else NodeState.FINISHED,
            description=f"Return from node {node_value}" if node_value is not None else "Return from null check",
        )


class StackFrame(BaseModel):
    """
    Simulated activation record for one recursive call.

    Attributes:
        function_name: Name of the traversal function (e.g. ``inOrder``)
        node_value: Argument of the call, None for an absent child
        return_address: Where the call came from (e.g. ``line 1``)
    """

    function_name: str = Field(min_length=1)
    node_value: Optional[int] = None
    return_address: str = "caller"

    def __str__(self) -> str:
        node = self.node_value if self.node_value is not None else "null"
        return f"{self.function_name}({node})"


def top_frame(frames: Sequence[StackFrame]) -> Optional[StackFrame]:
    """Return the most recently pushed frame, or None for an empty stack."""
    return frames[-1] if frames else None


def frames_top_first(frames: Sequence[StackFrame]) -> List[StackFrame]:
    """Return frames in display order: most recent call first."""
    return list(reversed(frames))


__all__ = [
    "StepType",
    "NodeState",
    "StackAction",
    "ExecutionStep",
    "StackFrame",
    "top_frame",
    "frames_top_first",
]
