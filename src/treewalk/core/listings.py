"""
Code Listings

Each traversal order is shown next to a fixed six-line pseudocode listing.
Execution steps refer to these listings through 1-indexed ``code_line``
values, so the listings, the function names and the traversal type tags
all live here.

Unknown traversal type tags are never an error: every lookup normalizes
them to ``"inorder"``.
"""

from __future__ import annotations

from typing import Any, Dict, Literal, Tuple

TraversalType = Literal["inorder", "preorder", "postorder"]

TRAVERSAL_TYPES: Tuple[str, ...] = ("inorder", "preorder", "postorder")
DEFAULT_TRAVERSAL_TYPE: TraversalType = "inorder"

LISTING_LINE_COUNT = 6

FUNCTION_NAMES: Dict[str, str] = {
    "inorder": "inOrder",
    "preorder": "preOrder",
    "postorder": "postOrder",
}

CODE_LISTINGS: Dict[str, Tuple[str, ...]] = {
    "inorder": (
        "void inOrder(Node node) {",
        "    if (node == null) return;",
        "    inOrder(node.left);",
        "    print(node.val);",
        "    inOrder(node.right);",
        "}",
    ),
    "preorder": (
        "void preOrder(Node node) {",
        "    if (node == null) return;",
        "    print(node.val);",
        "    preOrder(node.left);",
        "    preOrder(node.right);",
        "}",
    ),
    "postorder": (
        "void postOrder(Node node) {",
        "    if (node == null) return;",
        "    postOrder(node.left);",
        "    postOrder(node.right);",
        "    print(node.val);",
        "}",
    ),
}


def is_valid_traversal_type(value: Any) -> bool:
    return value in TRAVERSAL_TYPES


def normalize_traversal_type(value: Any) -> TraversalType:
    """Return ``value`` if it is a known traversal type, else ``"inorder"``."""
    if is_valid_traversal_type(value):
        return value
    return DEFAULT_TRAVERSAL_TYPE


def get_code_listing(traversal_type: Any) -> Tuple[str, ...]:
    return CODE_LISTINGS[normalize_traversal_type(traversal_type)]


def get_line_count(traversal_type: Any) -> int:
    return len(get_code_listing(traversal_type))


def is_valid_line_number(traversal_type: Any, line_number: Any) -> bool:
    """
    Check that ``line_number`` addresses a line of the order's listing.

    Booleans are rejected even though they are ints in Python.
    """
    if isinstance(line_number, bool) or not isinstance(line_number, int):
        return False
    return 1 <= line_number <= get_line_count(traversal_type)


def get_function_name(traversal_type: Any) -> str:
    return FUNCTION_NAMES[normalize_traversal_type(traversal_type)]


__all__ = [
    "TraversalType",
    "TRAVERSAL_TYPES",
    "DEFAULT_TRAVERSAL_TYPE",
    "LISTING_LINE_COUNT",
    "FUNCTION_NAMES",
    "CODE_LISTINGS",
    "is_valid_traversal_type",
    "normalize_traversal_type",
    "get_code_listing",
    "get_line_count",
    "is_valid_line_number",
    "get_function_name",
]
