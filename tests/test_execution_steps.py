"""
Tests for the execution step model.

Tests cover:
- ExecutionStep factories and their derived fields
- ExecutionStep validation
- StackFrame display
- Stack display order helpers
"""

import pytest
from pydantic import ValidationError

from treewalk.core.steps import (
    ExecutionStep,
    NodeState,
    StackAction,
    StackFrame,
    StepType,
    frames_top_first,
    top_frame,
)


class TestStepFactories:
    """Tests for the six named step factories."""

    @pytest.mark.parametrize(
        "factory, step_type, stack_action, with_value, without_value",
        [
            (ExecutionStep.call, StepType.CALL, StackAction.PUSH, NodeState.PROCESSING, NodeState.UNVISITED),
            (ExecutionStep.check_null, StepType.CHECK_NULL, StackAction.NONE, NodeState.PROCESSING, NodeState.UNVISITED),
            (ExecutionStep.return_, StepType.RETURN, StackAction.POP, NodeState.FINISHED, NodeState.UNVISITED),
        ],
        ids=["call", "check_null", "return"],
    )
    def test_factories_accepting_absent_nodes(self, factory, step_type, stack_action, with_value, without_value):
        """Factories that may be called with None derive their fields from presence."""
        present = factory(4, 1)
        absent = factory(None, 2)

        assert present.type is step_type
        assert present.stack_action is stack_action
        assert present.node_state is with_value
        assert absent.stack_action is stack_action
        assert absent.node_value is None
        assert absent.node_state is without_value

    def test_process_node(self):
        """PROCESS_NODE marks the node visited and leaves the stack alone."""
        step = ExecutionStep.process_node(3, 4)

        assert step.type is StepType.PROCESS_NODE
        assert step.stack_action is StackAction.NONE
        assert step.node_state is NodeState.VISITED
        assert step.description == "Process/print node 3"

    @pytest.mark.parametrize(
        "factory, step_type, side",
        [
            (ExecutionStep.recurse_left, StepType.RECURSE_LEFT, "left"),
            (ExecutionStep.recurse_right, StepType.RECURSE_RIGHT, "right"),
        ],
    )
    def test_recurse_markers(self, factory, step_type, side):
        """Recurse markers keep the node processing."""
        step = factory(6, 5)

        assert step.type is step_type
        assert step.stack_action is StackAction.NONE
        assert step.node_state is NodeState.PROCESSING
        assert step.description == f"Recurse to {side} child of node 6"

    def test_null_return(self):
        """A null return leaves its node unvisited."""
        step = ExecutionStep.return_(None, 2, is_null_return=True)

        assert step.stack_action is StackAction.POP
        assert step.node_state is NodeState.UNVISITED
        assert step.description == "Return from null check"

    def test_descriptions(self):
        """Descriptions name the node or the null case."""
        assert ExecutionStep.call(4, 1).description == "Call function with node 4"
        assert ExecutionStep.call(None, 1).description == "Call function with null"
        assert ExecutionStep.check_null(4, 2).description == "Check if node 4 is null (false)"
        assert ExecutionStep.check_null(None, 2).description == "Check if node is null (true)"
        assert ExecutionStep.return_(4, 6).description == "Return from node 4"


class TestStepValidation:
    """Tests for ExecutionStep invariants."""

    def test_steps_are_frozen(self):
        """Steps cannot be mutated after creation."""
        step = ExecutionStep.call(1, 1)

        with pytest.raises(ValidationError):
            step.code_line = 3

    def test_push_only_on_call(self):
        """A non-CALL step carrying PUSH is rejected."""
        with pytest.raises(ValidationError):
            ExecutionStep(
                type=StepType.PROCESS_NODE,
                node_value=1,
                code_line=4,
                stack_action=StackAction.PUSH,
                node_state=NodeState.VISITED,
            )

    def test_return_requires_pop(self):
        """A RETURN step must pop."""
        with pytest.raises(ValidationError):
            ExecutionStep(
                type=StepType.RETURN,
                node_value=1,
                code_line=6,
                stack_action=StackAction.NONE,
                node_state=NodeState.FINISHED,
            )

    @pytest.mark.parametrize("line", [0, 7, -1])
    def test_code_line_within_listing(self, line):
        """Code lines must address the 6-line listing."""
        with pytest.raises(ValidationError):
            ExecutionStep.call(1, line)


class TestStackFrame:
    """Tests for StackFrame."""

    def test_frame_str(self):
        """Frames render as a call expression."""
        assert str(StackFrame(function_name="inOrder", node_value=4, return_address="line 1")) == "inOrder(4)"
        assert str(StackFrame(function_name="postOrder", node_value=None)) == "postOrder(null)"

    def test_frame_requires_function_name(self):
        """An empty function name is rejected."""
        with pytest.raises(ValidationError):
            StackFrame(function_name="", node_value=1)


class TestStackDisplayOrder:
    """Tests for the LIFO display helpers."""

    def test_most_recent_frame_first(self):
        """The last pushed frame is shown first and reported as top."""
        frames = [StackFrame(function_name="inOrder", node_value=v) for v in (4, 2, 1, None)]

        ordered = frames_top_first(frames)

        assert [f.node_value for f in ordered] == [None, 1, 2, 4]
        assert top_frame(frames) is frames[-1]

    def test_empty_stack(self):
        """An empty stack has no top frame."""
        assert top_frame([]) is None
        assert frames_top_first([]) == []

    def test_display_order_does_not_mutate_input(self):
        """Reordering for display leaves the stored stack untouched."""
        frames = [StackFrame(function_name="preOrder", node_value=v) for v in (1, 2)]

        frames_top_first(frames)

        assert [f.node_value for f in frames] == [1, 2]
