"""
Execution Engine: replays a traversal one step at a time.

The engine owns one tree, the generated step sequence for the selected
order, a StateManager and an auto-play timer. Its cursor is the state's
``current_step_index``, which ranges over [-1, total_steps - 1].

Stepping forward snapshots the state into history and applies the next
step. Stepping back installs the newest snapshot, so undo is exact rather
than recomputed; only the playback flag and speed keep their live values.
Running out of steps in either direction is reported by returning False and
never mutates anything.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from treewalk.config import Settings
from treewalk.core.listings import get_function_name, normalize_traversal_type
from treewalk.core.state import AppState, StateCallback, StateManager
from treewalk.core.steps import ExecutionStep, NodeState, StackAction, StackFrame, StepType
from treewalk.core.traversal import get_traversal_generator
from treewalk.core.tree import create_default_tree, get_node_values
from treewalk.core.tree.models import TreeNode
from treewalk.errors import StackUnderflowError
from treewalk.utils.logging import log_calls

from .timer import AutoPlayTimer, Scheduler

logger = logging.getLogger(__name__)


class ExecutionEngine:
    """Controls the traversal timeline: stepping, undo, reset and auto-play."""

    def __init__(
        self,
        tree: Optional[TreeNode] = None,
        *,
        settings: Optional[Settings] = None,
        scheduler: Optional[Scheduler] = None,
    ):
        self.settings = settings or Settings()
        self._tree = tree if tree is not None else create_default_tree()
        self._state_manager = StateManager(animation_speed=self.settings.animation_speed)
        self._steps: List[ExecutionStep] = []
        self._timer = AutoPlayTimer(scheduler)

    # Accessors

    def get_state_manager(self) -> StateManager:
        return self._state_manager

    def get_tree(self) -> TreeNode:
        return self._tree

    def get_steps(self) -> List[ExecutionStep]:
        return list(self._steps)

    def get_state(self) -> AppState:
        return self._state_manager.get_state()

    def subscribe(self, callback: StateCallback) -> Callable[[], None]:
        return self._state_manager.subscribe(callback)

    # Lifecycle

    @log_calls()
    def initialize(self, traversal_type: str = "inorder") -> None:
        """
        Generate the steps for ``traversal_type`` and reset to the start.

        Unknown traversal types behave exactly like ``"inorder"``.
        Re-initializing with the same type still performs a full reset.
        """
        self.pause()
        normalized = normalize_traversal_type(traversal_type)
        self._steps = get_traversal_generator(normalized).generate_steps(self._tree)

        self._state_manager.reset()
        self._state_manager.set_state(
            traversal_type=normalized,
            node_states=self._unvisited_node_states(),
        )
        logger.info("Initialized %s traversal with %d steps", normalized, len(self._steps))

    @log_calls()
    def reset(self) -> None:
        """Return to the start of the current traversal, keeping its steps."""
        self.pause()
        traversal_type = self._state_manager.get_state().traversal_type
        self._state_manager.reset()
        self._state_manager.set_state(
            traversal_type=traversal_type,
            node_states=self._unvisited_node_states(),
        )
        logger.info("Reset %s traversal", traversal_type)

    def _unvisited_node_states(self) -> Dict[int, NodeState]:
        return {value: NodeState.UNVISITED for value in get_node_values(self._tree)}

    # Stepping

    def next_step(self) -> bool:
        """
        Apply the next step.

        Returns:
            True if a step was applied, False if already at the last step

        Raises:
            StackUnderflowError: If a RETURN step finds the call stack empty;
                generated sequences never do this
        """
        state = self._state_manager.get_state()
        next_index = state.current_step_index + 1
        if next_index >= len(self._steps):
            return False

        step = self._steps[next_index]
        updates = self._build_step_updates(state, step, next_index)

        self._state_manager.push_history()
        self._state_manager.set_state(updates)
        logger.debug("Step %d: %s", next_index, step.description)
        return True

    def previous_step(self) -> bool:
        """
        Undo the last applied step.

        Returns:
            True if a snapshot was restored, False if already at the start
        """
        if self.is_at_start():
            return False
        previous = self._state_manager.pop_history()
        if previous is None:
            return False
        # Playback controls belong to the present, not to the snapshot.
        current = self._state_manager.get_state()
        self._state_manager.set_state(
            previous,
            is_playing=self._timer.active,
            animation_speed=current.animation_speed,
        )
        logger.debug("Stepped back to %d", previous.current_step_index)
        return True

    def run_to_end(self) -> int:
        """Step forward until the last step; return how many steps were applied."""
        applied = 0
        while self.next_step():
            applied += 1
        return applied

    def jump_to(self, index: int) -> int:
        """
        Move the cursor to ``index`` by stepping forward or back.

        The target is clamped to [-1, total_steps - 1]. Returns the index
        actually reached.
        """
        target = max(-1, min(index, len(self._steps) - 1))
        while self.get_current_step_index() < target and self.next_step():
            pass
        while self.get_current_step_index() > target and self.previous_step():
            pass
        return self.get_current_step_index()

    def _build_step_updates(self, state: AppState, step: ExecutionStep, index: int) -> dict:
        # ``state`` is a private copy, so its collections can be edited in place.
        call_stack = state.call_stack
        if step.stack_action is StackAction.PUSH:
            call_stack.append(
                StackFrame(
                    function_name=get_function_name(state.traversal_type),
                    node_value=step.node_value,
                    return_address=f"line {step.code_line}",
                )
            )
        elif step.stack_action is StackAction.POP:
            if not call_stack:
                raise StackUnderflowError(index)
            call_stack.pop()

        node_states = state.node_states
        if step.has_node:
            node_states[step.node_value] = step.node_state

        output = state.traversal_output
        if step.type is StepType.PROCESS_NODE and step.has_node:
            output.append(step.node_value)

        return {
            "current_step_index": index,
            "highlighted_line": step.code_line,
            "call_stack": call_stack,
            "node_states": node_states,
            "traversal_output": output,
        }

    # Queries

    def is_at_start(self) -> bool:
        return self._state_manager.get_state().current_step_index < 0

    def is_at_end(self) -> bool:
        return self._state_manager.get_state().current_step_index >= len(self._steps) - 1

    def get_current_step(self) -> Optional[ExecutionStep]:
        index = self._state_manager.get_state().current_step_index
        if 0 <= index < len(self._steps):
            return self._steps[index]
        return None

    def get_current_step_index(self) -> int:
        return self._state_manager.get_state().current_step_index

    def get_total_steps(self) -> int:
        return len(self._steps)

    def get_traversal_type(self) -> str:
        return self._state_manager.get_state().traversal_type

    def is_playing(self) -> bool:
        return self._state_manager.get_state().is_playing

    # Auto-play

    def play(self) -> None:
        """Start calling ``next_step`` every ``animation_speed`` ms. No-op if playing."""
        if self._timer.active:
            return
        speed = self._state_manager.get_state().animation_speed
        self._timer.start(speed, self._tick)
        self._state_manager.set_playing(True)
        logger.info("Auto-play started at %d ms per step", speed)

    def pause(self) -> None:
        """Stop auto-play; no scheduled tick fires after this returns."""
        was_active = self._timer.active
        self._timer.cancel()
        if self._state_manager.get_state().is_playing:
            self._state_manager.set_playing(False)
        if was_active:
            logger.info("Auto-play paused at step %d", self.get_current_step_index())

    def set_speed(self, ms: int) -> None:
        """
        Change the auto-play interval, restarting the timer if it is running.

        Raises:
            ValueError: If ``ms`` is not positive
        """
        if ms <= 0:
            raise ValueError(f"Animation speed must be positive, got {ms}")
        self._state_manager.set_animation_speed(ms)
        if self._timer.active:
            self.pause()
            self.play()

    def _tick(self) -> bool:
        if self.next_step():
            return True
        self.pause()
        return False


__all__ = ["ExecutionEngine"]
