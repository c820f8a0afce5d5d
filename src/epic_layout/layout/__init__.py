"""Layout engine and arrow routers: public API."""

from __future__ import annotations

from epic_layout.layout.connections import (
    InterBatchConnection,
    build_batch_connections,
    build_connections,
    build_inter_batch_connections,
)
from epic_layout.layout.engine import layout_batches, layout_tasks, route_batch_arrows, route_task_arrows
from epic_layout.layout.epic import EpicLayout, layout_epic
from epic_layout.layout.graph import DependencyGraph
from epic_layout.layout.grid import GridLayout, assign_columns, assign_coordinates, assign_rows
from epic_layout.layout.router import ArrowRouter, CurveGeometry, OrthogonalGeometry, classify
from epic_layout.layout.sizing import ContainerSizing, FixedCellSizing, container_size
from epic_layout.layout.types import ArrowPath, Connection, GraphNode, LayoutResult, NodeLayout

__all__ = [
    "ArrowPath",
    "ArrowRouter",
    "Connection",
    "ContainerSizing",
    "CurveGeometry",
    "DependencyGraph",
    "EpicLayout",
    "FixedCellSizing",
    "GraphNode",
    "GridLayout",
    "InterBatchConnection",
    "LayoutResult",
    "NodeLayout",
    "OrthogonalGeometry",
    "assign_columns",
    "assign_coordinates",
    "assign_rows",
    "build_batch_connections",
    "build_connections",
    "build_inter_batch_connections",
    "classify",
    "container_size",
    "layout_batches",
    "layout_epic",
    "layout_tasks",
    "route_batch_arrows",
    "route_task_arrows",
]
