"""
Traversal generator base.

A generator walks the tree the way a recursive interpreter would and
records every step it takes. Every invocation, including calls made with
an absent child, emits CALL then CHECK_NULL. An absent node then returns
immediately; a present node emits its three body steps and returns.

Orders only differ in two things, both declared by subclasses:
- ``lines``: where each part of the function sits in the order's listing
- ``body``: the sequence of the process / recurse-left / recurse-right steps
"""

from __future__ import annotations

from abc import ABC
from enum import Enum
from typing import ClassVar, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from treewalk.core.listings import LISTING_LINE_COUNT, TraversalType
from treewalk.core.steps import ExecutionStep
from treewalk.core.tree.models import TreeNode


class BodyPart(str, Enum):
    """One of the three order-dependent statements of a traversal function."""

    PROCESS = "process"
    RECURSE_LEFT = "recurse_left"
    RECURSE_RIGHT = "recurse_right"


class LineTable(BaseModel):
    """Listing line of each part of a traversal function."""

    model_config = ConfigDict(frozen=True)

    function_entry: int = Field(ge=1, le=LISTING_LINE_COUNT)
    null_check: int = Field(ge=1, le=LISTING_LINE_COUNT)
    process: int = Field(ge=1, le=LISTING_LINE_COUNT)
    recurse_left: int = Field(ge=1, le=LISTING_LINE_COUNT)
    recurse_right: int = Field(ge=1, le=LISTING_LINE_COUNT)
    function_exit: int = Field(ge=1, le=LISTING_LINE_COUNT)


class TraversalGenerator(ABC):
    """Produces the complete step sequence of one traversal order."""

    traversal_type: ClassVar[TraversalType]
    lines: ClassVar[LineTable]
    body: ClassVar[Tuple[BodyPart, BodyPart, BodyPart]]

    def generate_steps(self, root: Optional[TreeNode]) -> List[ExecutionStep]:
        """
        Generate every execution step for a traversal starting at ``root``.

        Args:
            root: Tree root; None produces the three steps of a null call

        Returns:
            Steps in execution order. CALL and RETURN steps always balance.
        """
        steps: List[ExecutionStep] = []
        self._traverse(root, steps)
        return steps

    def _traverse(self, node: Optional[TreeNode], steps: List[ExecutionStep]) -> None:
        node_value = node.value if node is not None else None

        steps.append(ExecutionStep.call(node_value, self.lines.function_entry))
        steps.append(ExecutionStep.check_null(node_value, self.lines.null_check))

        if node is None:
            steps.append(ExecutionStep.return_(None, self.lines.null_check, is_null_return=True))
            return

        for part in self.body:
            if part is BodyPart.PROCESS:
                steps.append(ExecutionStep.process_node(node.value, self.lines.process))
            elif part is BodyPart.RECURSE_LEFT:
                steps.append(ExecutionStep.recurse_left(node.value, self.lines.recurse_left))
                self._traverse(node.left, steps)
            else:
                steps.append(ExecutionStep.recurse_right(node.value, self.lines.recurse_right))
                self._traverse(node.right, steps)

        steps.append(ExecutionStep.return_(node.value, self.lines.function_exit))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


__all__ = ["BodyPart", "LineTable", "TraversalGenerator"]
