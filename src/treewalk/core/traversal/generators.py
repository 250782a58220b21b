"""Concrete traversal generators and the factory that picks one by type tag."""

from __future__ import annotations

import logging
from typing import Any, Dict, Type

from treewalk.core.listings import normalize_traversal_type
from treewalk.core.traversal.base import BodyPart, LineTable, TraversalGenerator

logger = logging.getLogger(__name__)


class InorderGenerator(TraversalGenerator):
    """Left, node, right.

    1: void inOrder(Node node) {
    2:     if (node == null) return;
    3:     inOrder(node.left);
    4:     print(node.val);
    5:     inOrder(node.right);
    6: }
    """

    traversal_type = "inorder"
    lines = LineTable(
        function_entry=1,
        null_check=2,
        recurse_left=3,
        process=4,
        recurse_right=5,
        function_exit=6,
    )
    body = (BodyPart.RECURSE_LEFT, BodyPart.PROCESS, BodyPart.RECURSE_RIGHT)


class PreorderGenerator(TraversalGenerator):
    """Node, left, right.

    1: void preOrder(Node node) {
    2:     if (node == null) return;
    3:     print(node.val);
    4:     preOrder(node.left);
    5:     preOrder(node.right);
    6: }
    """

    traversal_type = "preorder"
    lines = LineTable(
        function_entry=1,
        null_check=2,
        process=3,
        recurse_left=4,
        recurse_right=5,
        function_exit=6,
    )
    body = (BodyPart.PROCESS, BodyPart.RECURSE_LEFT, BodyPart.RECURSE_RIGHT)


class PostorderGenerator(TraversalGenerator):
    """Left, right, node.

    1: void postOrder(Node node) {
    2:     if (node == null) return;
    3:     postOrder(node.left);
    4:     postOrder(node.right);
    5:     print(node.val);
    6: }
    """

    traversal_type = "postorder"
    lines = LineTable(
        function_entry=1,
        null_check=2,
        recurse_left=3,
        recurse_right=4,
        process=5,
        function_exit=6,
    )
    body = (BodyPart.RECURSE_LEFT, BodyPart.RECURSE_RIGHT, BodyPart.PROCESS)


GENERATORS: Dict[str, Type[TraversalGenerator]] = {
    "inorder": InorderGenerator,
    "preorder": PreorderGenerator,
    "postorder": PostorderGenerator,
}


def get_traversal_generator(traversal_type: Any) -> TraversalGenerator:
    """Return a generator for ``traversal_type``; unknown tags get inorder."""
    normalized = normalize_traversal_type(traversal_type)
    if normalized != traversal_type:
        logger.debug("Unknown traversal type %r, using %s", traversal_type, normalized)
    return GENERATORS[normalized]()


__all__ = [
    "InorderGenerator",
    "PreorderGenerator",
    "PostorderGenerator",
    "GENERATORS",
    "get_traversal_generator",
]
