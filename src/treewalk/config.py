"""
Visualizer settings.

Settings come from defaults, optionally overridden by a YAML file (see
``treewalk.io.settings_loader``). Expected format:

    animation_speed: 300
    canvas_width: 800
    canvas_height: 400
    node_radius: 25
    top_margin: 20
    traversal_type: preorder
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from treewalk.core.listings import DEFAULT_TRAVERSAL_TYPE, normalize_traversal_type
from treewalk.core.state import DEFAULT_ANIMATION_SPEED
from treewalk.core.tree.layout import DEFAULT_NODE_RADIUS, DEFAULT_TOP_MARGIN


class Settings(BaseModel):
    """
    Tunable parameters of the visualizer.

    Attributes:
        animation_speed: Milliseconds between auto-play steps
        canvas_width: Width of the drawing area used for layout
        canvas_height: Height of the drawing area used for layout
        node_radius: Radius of a drawn node
        top_margin: Gap between the top edge and the root node's outline
        traversal_type: Order selected on start-up; unknown values fall
            back to inorder
    """

    model_config = ConfigDict(extra="forbid")

    animation_speed: int = Field(default=DEFAULT_ANIMATION_SPEED, gt=0)
    canvas_width: float = Field(default=800.0, gt=0)
    canvas_height: float = Field(default=400.0, gt=0)
    node_radius: float = Field(default=DEFAULT_NODE_RADIUS, ge=0)
    top_margin: float = Field(default=DEFAULT_TOP_MARGIN, ge=0)
    traversal_type: str = DEFAULT_TRAVERSAL_TYPE

    @field_validator("traversal_type")
    @classmethod
    def _normalize_traversal_type(cls, v: str) -> str:
        return normalize_traversal_type(v)

    @property
    def top_padding(self) -> float:
        return self.node_radius + self.top_margin


__all__ = ["Settings"]
