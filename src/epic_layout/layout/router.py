"""Arrow routing between laid-out nodes.

Every connection is classified by the relative grid position of its two
endpoints, then handed to a route geometry for that class. Two geometries
exist: smooth curves for task cards and axis-aligned polylines for batch
containers.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Protocol

from epic_layout.config import DEFAULT_BATCH_LAYOUT_CONFIG, DEFAULT_LAYOUT_CONFIG, BatchLayoutConfig, LayoutConfig
from epic_layout.layout.path import CubicTo, LineTo, MoveTo, PathCommand, QuadTo, to_path_string
from epic_layout.layout.types import ArrowPath, Connection, NodeLayout
from epic_layout.types import PathType, RouteKind

logger = logging.getLogger(__name__)

Point = tuple[float, float]

# Minimum control-point offsets for the cubic curves.
MIN_HORIZONTAL_PULL: float = 20
MIN_VERTICAL_PULL: float = 15
CURVE_PULL: float = 0.4
# Radius of the roundings at each bend of a backwards task route.
BEND_RADIUS: float = 10
# Perpendicular offsets under this many pixels are drawn as straight lines.
STRAIGHT_TOLERANCE: float = 2


def classify(src: NodeLayout, dst: NodeLayout) -> RouteKind:
    if src.col < dst.col:
        return RouteKind.Horizontal
    if src.col == dst.col and src.row != dst.row:
        return RouteKind.Vertical
    if src.col > dst.col:
        return RouteKind.Backwards
    return RouteKind.Fallback


_PATH_TYPES: dict[RouteKind, PathType] = {
    RouteKind.Horizontal: PathType.Horizontal,
    RouteKind.Vertical: PathType.Vertical,
    RouteKind.Backwards: PathType.Complex,
    RouteKind.Fallback: PathType.Complex,
}


class RouteGeometry(Protocol):
    """Path construction for each route class."""

    def horizontal(self, src: NodeLayout, dst: NodeLayout) -> list[PathCommand]: ...

    def vertical(self, src: NodeLayout, dst: NodeLayout) -> list[PathCommand]: ...

    def backwards(self, src: NodeLayout, dst: NodeLayout) -> list[PathCommand]: ...

    def fallback(self, src: NodeLayout, dst: NodeLayout) -> list[PathCommand]: ...


# ─── Shared curve helpers ───────────────────────────────────────────────────


def s_curve(a: Point, b: Point) -> list[PathCommand]:
    """Cubic leaving ``a`` and entering ``b`` horizontally."""
    pull = max((b[0] - a[0]) * CURVE_PULL, MIN_HORIZONTAL_PULL)
    return [MoveTo(*a), CubicTo(a[0] + pull, a[1], b[0] - pull, b[1], b[0], b[1])]


def vertical_curve(a: Point, b: Point) -> list[PathCommand]:
    """Cubic leaving ``a`` and entering ``b`` vertically, bulging the way it flows."""
    dy = b[1] - a[1]
    pull = max(abs(dy) * CURVE_PULL, MIN_VERTICAL_PULL)
    if dy > 0:
        return [MoveTo(*a), CubicTo(a[0], a[1] + pull, b[0], b[1] - pull, b[0], b[1])]
    return [MoveTo(*a), CubicTo(a[0], a[1] - pull, b[0], b[1] + pull, b[0], b[1])]


def elbow_horizontal(a: Point, b: Point) -> list[PathCommand]:
    """Horizontal, vertical, horizontal; straight when the rows already line up."""
    if abs(a[1] - b[1]) < STRAIGHT_TOLERANCE:
        return [MoveTo(*a), LineTo(*b)]
    mid_x = a[0] + (b[0] - a[0]) / 2
    return [MoveTo(*a), LineTo(mid_x, a[1]), LineTo(mid_x, b[1]), LineTo(*b)]


def elbow_vertical(a: Point, b: Point) -> list[PathCommand]:
    """Vertical, horizontal, vertical; straight when the columns already line up."""
    if abs(a[0] - b[0]) < STRAIGHT_TOLERANCE:
        return [MoveTo(*a), LineTo(*b)]
    mid_y = a[1] + (b[1] - a[1]) / 2
    return [MoveTo(*a), LineTo(a[0], mid_y), LineTo(b[0], mid_y), LineTo(*b)]


# ─── Task level: curves ─────────────────────────────────────────────────────


class CurveGeometry:
    """Bezier routes between fixed-size task cards."""

    def __init__(self, config: LayoutConfig = DEFAULT_LAYOUT_CONFIG) -> None:
        self.config = config

    def horizontal(self, src: NodeLayout, dst: NodeLayout) -> list[PathCommand]:
        return s_curve(src.right_center(), dst.left_center())

    def vertical(self, src: NodeLayout, dst: NodeLayout) -> list[PathCommand]:
        # Always flow from the upper card to the lower one.
        if src.row > dst.row:
            return vertical_curve(dst.bottom_center(), src.top_center())
        return vertical_curve(src.bottom_center(), dst.top_center())

    def backwards(self, src: NodeLayout, dst: NodeLayout) -> list[PathCommand]:
        """Detour: out right, around the row band, back left, in from the left."""
        fx, fy = src.right_center()
        tx, ty = dst.left_center()
        if tx > fx:
            return s_curve((fx, fy), (tx, ty))

        gap = self.config.horizontal_gap / 2
        # Measured from the anchor centre, so the return leg can cross the
        # cards of the adjacent row.
        band = self.config.cell_height + self.config.vertical_gap / 2
        go_down = src.row <= dst.row
        mid_y = max(fy, ty) + band if go_down else min(fy, ty) - band
        r = BEND_RADIUS if go_down else -BEND_RADIUS

        out_x = fx + gap
        in_x = tx - gap
        return [
            MoveTo(fx, fy),
            LineTo(out_x, fy),
            QuadTo(out_x + BEND_RADIUS, fy, out_x + BEND_RADIUS, fy + r),
            LineTo(out_x + BEND_RADIUS, mid_y),
            QuadTo(out_x + BEND_RADIUS, mid_y + r, out_x, mid_y + r),
            LineTo(in_x, mid_y + r),
            QuadTo(in_x - BEND_RADIUS, mid_y + r, in_x - BEND_RADIUS, mid_y),
            LineTo(in_x - BEND_RADIUS, ty - r),
            QuadTo(in_x - BEND_RADIUS, ty, in_x, ty),
            LineTo(tx, ty),
        ]

    def fallback(self, src: NodeLayout, dst: NodeLayout) -> list[PathCommand]:
        return s_curve(src.right_center(), dst.left_center())


# ─── Batch level: orthogonal ────────────────────────────────────────────────


class OrthogonalGeometry:
    """Axis-aligned routes between variable-size batch containers."""

    def __init__(self, config: BatchLayoutConfig = DEFAULT_BATCH_LAYOUT_CONFIG) -> None:
        self.config = config

    def horizontal(self, src: NodeLayout, dst: NodeLayout) -> list[PathCommand]:
        return elbow_horizontal(src.right_center(), dst.left_center())

    def vertical(self, src: NodeLayout, dst: NodeLayout) -> list[PathCommand]:
        if src.row < dst.row:
            return elbow_vertical(src.bottom_center(), dst.top_center())
        return elbow_vertical(src.top_center(), dst.bottom_center())

    def backwards(self, src: NodeLayout, dst: NodeLayout) -> list[PathCommand]:
        fx, fy = src.right_center()
        tx, ty = dst.left_center()
        if tx > fx:
            return elbow_horizontal((fx, fy), (tx, ty))

        gap = self.config.horizontal_gap / 2
        band = max(src.height, dst.height) / 2 + self.config.vertical_gap / 2
        go_down = src.row <= dst.row
        mid_y = max(fy, ty) + band if go_down else min(fy, ty) - band
        return [
            MoveTo(fx, fy),
            LineTo(fx + gap, fy),
            LineTo(fx + gap, mid_y),
            LineTo(tx - gap, mid_y),
            LineTo(tx - gap, ty),
            LineTo(tx, ty),
        ]

    def fallback(self, src: NodeLayout, dst: NodeLayout) -> list[PathCommand]:
        fx, fy = src.right_center()
        tx, ty = dst.left_center()
        mid_x = (fx + tx) / 2
        return [MoveTo(fx, fy), CubicTo(mid_x, fy, mid_x, ty, tx, ty)]


# ─── Router ─────────────────────────────────────────────────────────────────


class ArrowRouter:
    """Routes connections over a set of node layouts with one geometry."""

    def __init__(self, geometry: RouteGeometry) -> None:
        self.geometry = geometry

    def route_one(self, conn: Connection, src: NodeLayout, dst: NodeLayout) -> ArrowPath:
        kind = classify(src, dst)
        if kind is RouteKind.Horizontal:
            commands = self.geometry.horizontal(src, dst)
        elif kind is RouteKind.Vertical:
            commands = self.geometry.vertical(src, dst)
        elif kind is RouteKind.Backwards:
            commands = self.geometry.backwards(src, dst)
        else:
            commands = self.geometry.fallback(src, dst)
        return ArrowPath(
            from_id=conn.from_id,
            to_id=conn.to_id,
            path=to_path_string(commands),
            path_type=_PATH_TYPES[kind],
            commands=commands,
        )

    def route(self, connections: Iterable[Connection], layouts: Mapping[int, NodeLayout]) -> list[ArrowPath]:
        """One arrow per connection, in input order.

        Connections with an endpoint missing from ``layouts`` are skipped.
        """
        paths: list[ArrowPath] = []
        for conn in connections:
            src = layouts.get(conn.from_id)
            dst = layouts.get(conn.to_id)
            if src is None or dst is None:
                logger.debug("skipping arrow %s -> %s: no layout for endpoint", conn.from_id, conn.to_id)
                continue
            paths.append(self.route_one(conn, src, dst))
        return paths
