"""
Application State Management

This module defines AppState, the complete snapshot of a simulated
traversal at one point in time, and StateManager, which owns the live state,
the undo history and the list of subscribers.

Key concepts:
- Every read returns an isolated copy and every write copies the
  collections it stores, so history snapshots are immune to later changes
- ``set_state`` is the only write path; the convenience mutators are thin
  wrappers around it
- Subscribers are notified synchronously after every write with a fresh
  copy of the resulting state
- History is a LIFO stack of full snapshots used purely for step-back
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel, Field, field_validator

from treewalk.core.listings import DEFAULT_TRAVERSAL_TYPE, normalize_traversal_type
from treewalk.core.steps import NodeState, StackFrame

logger = logging.getLogger(__name__)

DEFAULT_ANIMATION_SPEED = 500  # milliseconds per auto-play step

StateCallback = Callable[["AppState"], None]


class AppState(BaseModel):
    """
    Complete state of the visualizer at one point in the timeline.

    Attributes:
        current_step_index: Index of the last applied step, -1 before any
        call_stack: Simulated frames, bottom (oldest) to top (newest)
        node_states: Visual state of every tree node, keyed by node value
        highlighted_line: Listing line to highlight, 0 for none
        traversal_type: Order being simulated
        is_playing: Whether auto-play is running
        animation_speed: Milliseconds between auto-play steps
        traversal_output: Node values printed so far, in order

    Examples:
        >>> state = AppState()
        >>> state.current_step_index
        -1
        >>> clone = state.clone()
        >>> clone.traversal_output.append(4)
        >>> state.traversal_output
        []
    """

    current_step_index: int = -1
    call_stack: List[StackFrame] = Field(default_factory=list)
    node_states: Dict[int, NodeState] = Field(default_factory=dict)
    highlighted_line: int = Field(default=0, ge=0)
    traversal_type: str = DEFAULT_TRAVERSAL_TYPE
    is_playing: bool = False
    animation_speed: int = Field(default=DEFAULT_ANIMATION_SPEED, gt=0)
    traversal_output: List[int] = Field(default_factory=list)

    @field_validator("current_step_index")
    @classmethod
    def _validate_step_index(cls, v: int) -> int:
        if v < -1:
            raise ValueError(f"current_step_index must be >= -1, got {v}")
        return v

    @field_validator("traversal_type")
    @classmethod
    def _normalize_traversal_type(cls, v: str) -> str:
        return normalize_traversal_type(v)

    def clone(self) -> "AppState":
        """Create a deep copy sharing no mutable collection with this state."""
        return clone_state(self)

    def get_node_state(self, node_value: int) -> NodeState:
        return self.node_states.get(node_value, NodeState.UNVISITED)

    def __str__(self) -> str:
        stack = " > ".join(str(frame) for frame in self.call_stack) or "<empty>"
        return (
            f"AppState(step={self.current_step_index}, line={self.highlighted_line}, "
            f"stack={stack}, output={self.traversal_output})"
        )


STATE_FIELDS = tuple(AppState.model_fields)


def create_initial_state(animation_speed: int = DEFAULT_ANIMATION_SPEED) -> AppState:
    """Return the canonical state before any step has been applied."""
    return AppState(animation_speed=animation_speed)


def clone_state(state: AppState) -> AppState:
    """Deep-copy ``state``: new frame objects, new dict, new lists."""
    return AppState.model_construct(
        current_step_index=state.current_step_index,
        call_stack=[frame.model_copy() for frame in state.call_stack],
        node_states=dict(state.node_states),
        highlighted_line=state.highlighted_line,
        traversal_type=state.traversal_type,
        is_playing=state.is_playing,
        animation_speed=state.animation_speed,
        traversal_output=list(state.traversal_output),
    )


def states_equal(first: AppState, second: AppState) -> bool:
    """
    Compare two states field by field.

    Frames are compared by function name and node value only; their return
    addresses are presentation detail.
    """
    if first.current_step_index != second.current_step_index:
        return False
    if first.highlighted_line != second.highlighted_line:
        return False
    if first.traversal_type != second.traversal_type:
        return False
    if first.is_playing != second.is_playing:
        return False
    if first.animation_speed != second.animation_speed:
        return False
    if len(first.call_stack) != len(second.call_stack):
        return False
    for a, b in zip(first.call_stack, second.call_stack):
        if a.function_name != b.function_name or a.node_value != b.node_value:
            return False
    if first.node_states != second.node_states:
        return False
    return first.traversal_output == second.traversal_output


class _Subscription:
    """Registration handle for one subscriber."""

    __slots__ = ("callback",)

    def __init__(self, callback: StateCallback):
        self.callback = callback


class StateManager:
    """Holds the live AppState, its undo history and its subscribers."""

    def __init__(self, animation_speed: int = DEFAULT_ANIMATION_SPEED):
        self._default_speed = animation_speed
        self._state = create_initial_state(animation_speed)
        self._history: List[AppState] = []
        self._subscriptions: List[_Subscription] = []

    def get_state(self) -> AppState:
        """Return an independent copy of the current state."""
        return clone_state(self._state)

    def set_state(self, partial: Union[AppState, Mapping[str, Any], None] = None, **fields: Any) -> None:
        """
        Merge fields into the current state and notify subscribers.

        Args:
            partial: A full AppState to install, or a mapping of field names
                to new values
            **fields: Further field updates, applied after ``partial``

        Raises:
            KeyError: If a field name is not an AppState field
            pydantic.ValidationError: If a merged value is invalid
        """
        updates: Dict[str, Any] = {}
        if isinstance(partial, AppState):
            updates.update((name, getattr(partial, name)) for name in STATE_FIELDS)
        elif partial is not None:
            updates.update(partial)
        updates.update(fields)

        unknown = sorted(set(updates) - set(STATE_FIELDS))
        if unknown:
            raise KeyError(f"Unknown state field(s): {', '.join(unknown)}")

        merged = {name: getattr(self._state, name) for name in STATE_FIELDS}
        merged.update(updates)
        # Validation reuses frame instances, so copy before storing.
        self._state = clone_state(AppState(**merged))
        self._notify_subscribers()

    def push_history(self) -> None:
        self._history.append(clone_state(self._state))

    def pop_history(self) -> Optional[AppState]:
        """Remove and return the newest snapshot, or None when history is empty."""
        if not self._history:
            return None
        return self._history.pop()

    def clear_history(self) -> None:
        self._history = []

    def get_history_length(self) -> int:
        return len(self._history)

    def subscribe(self, callback: StateCallback) -> Callable[[], None]:
        """
        Register ``callback`` to receive a copy of the state after every write.

        Returns:
            A function removing exactly this registration; calling it again
            does nothing.
        """
        subscription = _Subscription(callback)
        self._subscriptions.append(subscription)

        def _unsubscribe() -> None:
            for index, registered in enumerate(self._subscriptions):
                if registered is subscription:
                    del self._subscriptions[index]
                    return

        return _unsubscribe

    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def reset(self) -> None:
        """Install the initial state, drop history and notify subscribers."""
        self._state = create_initial_state(self._default_speed)
        self._history = []
        self._notify_subscribers()

    def _notify_subscribers(self) -> None:
        # Iterate over a copy so callbacks may unsubscribe themselves.
        for subscription in list(self._subscriptions):
            subscription.callback(clone_state(self._state))

    # Convenience mutators

    def set_step_index(self, index: int) -> None:
        self.set_state(current_step_index=index)

    def set_highlighted_line(self, line: int) -> None:
        self.set_state(highlighted_line=line)

    def set_traversal_type(self, traversal_type: str) -> None:
        self.set_state(traversal_type=traversal_type)

    def set_playing(self, is_playing: bool) -> None:
        self.set_state(is_playing=is_playing)

    def set_animation_speed(self, speed: int) -> None:
        self.set_state(animation_speed=speed)

    def push_call_stack(self, frame: StackFrame) -> None:
        self.set_state(call_stack=[*self._state.call_stack, frame])

    def pop_call_stack(self) -> Optional[StackFrame]:
        """Pop the top frame and return it, or None when the stack is empty."""
        if not self._state.call_stack:
            return None
        popped = self._state.call_stack[-1].model_copy()
        self.set_state(call_stack=self._state.call_stack[:-1])
        return popped

    def set_node_state(self, node_value: int, state: NodeState) -> None:
        node_states = dict(self._state.node_states)
        node_states[node_value] = state
        self.set_state(node_states=node_states)

    def reset_node_states(self, node_values: Iterable[int]) -> None:
        self.set_state(node_states={value: NodeState.UNVISITED for value in node_values})

    def add_to_output(self, value: int) -> None:
        self.set_state(traversal_output=[*self._state.traversal_output, value])

    def clear_output(self) -> None:
        self.set_state(traversal_output=[])


__all__ = [
    "DEFAULT_ANIMATION_SPEED",
    "AppState",
    "StateCallback",
    "create_initial_state",
    "clone_state",
    "states_equal",
    "StateManager",
]
