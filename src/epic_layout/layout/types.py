"""Layout types shared across the layout engine, routers, and renderers."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from epic_layout.layout.path import PathCommand
from epic_layout.types import PathType


class DependentNode(Protocol):
    """Anything with an id and a dependency list can be laid out."""

    @property
    def id(self) -> int: ...

    @property
    def depends_on(self) -> Sequence[int]: ...


@dataclass
class GraphNode:
    """Minimal node: an id and the ids it depends on."""

    id: int
    depends_on: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class Connection:
    """A dependency edge drawn from ``from_id`` (depended on) to ``to_id`` (dependent)."""

    from_id: int
    to_id: int


@dataclass(frozen=True)
class NodeLayout:
    """A positioned node: grid cell plus pixel rect."""

    id: int
    row: int
    col: int
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def right_center(self) -> tuple[float, float]:
        return (self.x + self.width, self.y + self.height / 2)

    def left_center(self) -> tuple[float, float]:
        return (self.x, self.y + self.height / 2)

    def top_center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y)

    def bottom_center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height)

    def translated(self, dx: float, dy: float) -> NodeLayout:
        return NodeLayout(
            id=self.id,
            row=self.row,
            col=self.col,
            x=self.x + dx,
            y=self.y + dy,
            width=self.width,
            height=self.height,
        )

    def overlaps(self, other: NodeLayout) -> bool:
        """True if the two rects share interior area (touching edges do not count)."""
        return self.x < other.right and other.x < self.right and self.y < other.bottom and other.y < self.bottom

    def contains(self, other: NodeLayout) -> bool:
        return self.x <= other.x and self.y <= other.y and other.right <= self.right and other.bottom <= self.bottom

    def to_dict(self) -> dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "row": self.row,
            "col": self.col,
        }


@dataclass
class LayoutResult:
    """Self-contained layout output for one scope.

    ``nodes`` maps node id to its layout, in input order.
    """

    nodes: dict[int, NodeLayout]
    grid_width: int
    grid_height: int
    canvas_width: float
    canvas_height: float
    column_widths: list[float] = field(default_factory=list)
    row_heights: list[float] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": {str(node_id): nl.to_dict() for node_id, nl in self.nodes.items()},
            "gridWidth": self.grid_width,
            "gridHeight": self.grid_height,
            "canvasWidth": self.canvas_width,
            "canvasHeight": self.canvas_height,
        }


@dataclass
class ArrowPath:
    """A routed arrow: the path string plus the commands it was built from."""

    from_id: int
    to_id: int
    path: str
    path_type: PathType
    commands: list[PathCommand] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.from_id,
            "to": self.to_id,
            "path": self.path,
            "pathType": self.path_type.value,
        }
