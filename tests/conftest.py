"""
Shared fixtures for treewalk tests.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Callable, List

import pytest

from treewalk.core.engine import ExecutionEngine
from treewalk.core.tree import TreeNode, create_default_tree


@dataclass
class ManualHandle:
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass(order=True)
class _Scheduled:
    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    handle: ManualHandle = field(compare=False)


class ManualScheduler:
    """Deterministic stand-in for an event loop's ``call_later``."""

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: List[_Scheduled] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle()
        self._queue.append(_Scheduled(self.now + delay, next(self._seq), callback, handle))
        return handle

    def pending(self) -> int:
        return sum(1 for entry in self._queue if not entry.handle.cancelled)

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing due callbacks in order."""
        target = self.now + seconds
        while True:
            due = [e for e in self._queue if not e.handle.cancelled and e.due <= target + 1e-9]
            if not due:
                break
            entry = min(due)
            self._queue.remove(entry)
            self.now = entry.due
            entry.callback()
        self._queue = [e for e in self._queue if not e.handle.cancelled]
        self.now = target


@pytest.fixture
def default_tree() -> TreeNode:
    return create_default_tree()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def engine(scheduler: ManualScheduler) -> ExecutionEngine:
    """Engine on the default tree, initialized for inorder, with a manual clock."""
    eng = ExecutionEngine(scheduler=scheduler)
    eng.initialize("inorder")
    return eng
