from .base import BodyPart, LineTable, TraversalGenerator
from .generators import (
    GENERATORS,
    InorderGenerator,
    PostorderGenerator,
    PreorderGenerator,
    get_traversal_generator,
)

__all__ = [
    "BodyPart",
    "LineTable",
    "TraversalGenerator",
    "InorderGenerator",
    "PreorderGenerator",
    "PostorderGenerator",
    "GENERATORS",
    "get_traversal_generator",
]
