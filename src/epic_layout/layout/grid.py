"""Layered grid layout engine.

Phases:
  1. Dependency graph + cycle check
  2. Column assignment (dependency depth)
  3. Row assignment (barycenter, nearest free row)
  4. Coordinate assignment (per-column widths, per-row heights)

The same engine serves tasks inside a batch and batches inside an epic; the
sizing strategy is the only thing that differs.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from epic_layout.layout.connections import build_connections
from epic_layout.layout.graph import DependencyGraph
from epic_layout.layout.sizing import SizingStrategy
from epic_layout.layout.types import Connection, DependentNode, LayoutResult, NodeLayout

logger = logging.getLogger(__name__)


# ─── Column Assignment ──────────────────────────────────────────────────────


def assign_columns(graph: DependencyGraph) -> dict[int, int]:
    """Column = 1 + deepest dependency column; roots go to column 0.

    Raises:
        CyclicDependencyError: If the graph has a cycle.
    """
    columns: dict[int, int] = {}
    for node_id in graph.topological_order():
        columns[node_id] = max((columns[dep] + 1 for dep in graph.dependencies(node_id)), default=0)
    return columns


# ─── Row Assignment ─────────────────────────────────────────────────────────


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def _nearest_free_row(base: int, used: set[int]) -> int:
    row = base
    offset = 0
    while row in used:
        offset += 1
        if base + offset not in used:
            row = base + offset
        elif base - offset >= 0 and base - offset not in used:
            row = base - offset
    return row


def assign_rows(graph: DependencyGraph, columns: dict[int, int]) -> dict[int, int]:
    """Order each column to keep edges short; rows are unique within a column.

    Column 0 puts the nodes with the most dependents first. Later columns
    sort by the mean row of each node's dependencies and take the nearest
    free row. Every sort is stable, so input order breaks ties. Row numbers
    are compacted to 0..n-1 at the end.
    """
    if not columns:
        return {}

    groups: dict[int, list[int]] = {}
    for node_id in graph.node_ids():
        groups.setdefault(columns[node_id], []).append(node_id)

    rows: dict[int, int] = {}
    for col in range(max(columns.values()) + 1):
        members = groups.get(col, [])
        if col == 0:
            ordered = sorted(members, key=lambda n: -len(graph.dependents(n)))
            for idx, node_id in enumerate(ordered):
                rows[node_id] = idx
            continue

        ideal: dict[int, float] = {}
        for idx, node_id in enumerate(members):
            dep_rows = [rows[dep] for dep in graph.dependencies(node_id) if dep in rows]
            ideal[node_id] = sum(dep_rows) / len(dep_rows) if dep_rows else float(idx)

        used: set[int] = set()
        for node_id in sorted(members, key=ideal.__getitem__):
            row = _nearest_free_row(_round_half_up(ideal[node_id]), used)
            used.add(row)
            rows[node_id] = row

    compact = {row: idx for idx, row in enumerate(sorted(set(rows.values())))}
    return {node_id: compact[row] for node_id, row in rows.items()}


# ─── Coordinate Assignment ──────────────────────────────────────────────────


def assign_coordinates(
    node_ids: Sequence[int],
    columns: dict[int, int],
    rows: dict[int, int],
    sizing: SizingStrategy,
) -> LayoutResult:
    """Turn grid cells into pixel rects.

    Each column is as wide as its widest node and each row as tall as its
    tallest, so rects never overlap whatever the individual sizes are.
    """
    pad = sizing.padding
    min_w, min_h = sizing.min_size()
    if not node_ids:
        return LayoutResult(nodes={}, grid_width=0, grid_height=0, canvas_width=pad * 2, canvas_height=pad * 2)

    grid_width = max(columns.values()) + 1
    grid_height = max(rows.values()) + 1

    sizes = {node_id: sizing.node_size(node_id) for node_id in node_ids}
    column_widths: list[float] = [0] * grid_width
    row_heights: list[float] = [0] * grid_height
    for node_id, (w, h) in sizes.items():
        col, row = columns[node_id], rows[node_id]
        column_widths[col] = max(column_widths[col], w)
        row_heights[row] = max(row_heights[row], h)

    column_x: list[float] = []
    x = pad
    for w in column_widths:
        column_x.append(x)
        x += w + sizing.horizontal_gap

    row_y: list[float] = []
    y = pad
    for h in row_heights:
        row_y.append(y)
        y += h + sizing.vertical_gap

    nodes: dict[int, NodeLayout] = {}
    for node_id in node_ids:
        col, row = columns[node_id], rows[node_id]
        w, h = sizes[node_id]
        nodes[node_id] = NodeLayout(
            id=node_id,
            row=row,
            col=col,
            x=column_x[col],
            y=row_y[row],
            width=w,
            height=row_heights[row] if sizing.stretch_rows else h,
        )

    canvas_width = pad * 2 + sum(column_widths) + (grid_width - 1) * sizing.horizontal_gap
    canvas_height = pad * 2 + sum(row_heights) + (grid_height - 1) * sizing.vertical_gap
    return LayoutResult(
        nodes=nodes,
        grid_width=grid_width,
        grid_height=grid_height,
        canvas_width=max(canvas_width, min_w + pad * 2),
        canvas_height=max(canvas_height, min_h + pad * 2),
        column_widths=column_widths,
        row_heights=row_heights,
    )


# ─── GridLayout Engine ──────────────────────────────────────────────────────


class GridLayout:
    """Grid layout engine parameterized by a sizing strategy."""

    def __init__(self, sizing: SizingStrategy) -> None:
        self.sizing = sizing

    def layout(
        self,
        nodes: Sequence[DependentNode],
        connections: Iterable[Connection] | None = None,
    ) -> LayoutResult:
        """Lay out ``nodes``; connections default to the nodes' own dependency lists.

        Connections naming a node outside ``nodes`` are ignored.

        Raises:
            LayoutError: If a node id is duplicated.
            CyclicDependencyError: If the dependencies form a cycle.
        """
        node_ids = [node.id for node in nodes]
        conns = build_connections(nodes) if connections is None else list(connections)

        graph = DependencyGraph.from_connections(node_ids, conns)
        in_scope = set(node_ids)
        for conn in conns:
            if conn.from_id not in in_scope or conn.to_id not in in_scope:
                logger.debug("ignoring connection %s -> %s: endpoint outside scope", conn.from_id, conn.to_id)

        columns = assign_columns(graph)
        rows = assign_rows(graph, columns)
        result = assign_coordinates(node_ids, columns, rows, self.sizing)
        logger.debug(
            "laid out %d nodes on a %dx%d grid (%d edges)",
            len(node_ids),
            result.grid_width,
            result.grid_height,
            graph.edge_count(),
        )
        return result
