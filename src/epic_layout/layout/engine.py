"""Layout engine convenience functions for the two diagram levels."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from epic_layout.config import DEFAULT_BATCH_LAYOUT_CONFIG, DEFAULT_LAYOUT_CONFIG, BatchLayoutConfig, LayoutConfig
from epic_layout.layout.grid import GridLayout
from epic_layout.layout.router import ArrowRouter, CurveGeometry, OrthogonalGeometry
from epic_layout.layout.sizing import ContainerSizing, FixedCellSizing
from epic_layout.layout.types import ArrowPath, Connection, DependentNode, LayoutResult, NodeLayout


def layout_tasks(
    tasks: Sequence[DependentNode],
    connections: Iterable[Connection] | None = None,
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> LayoutResult:
    """Lay out the tasks of one batch on a fixed-cell grid."""
    return GridLayout(FixedCellSizing(config)).layout(tasks, connections)


def layout_batches(
    batches: Sequence[DependentNode],
    connections: Iterable[Connection] | None = None,
    config: BatchLayoutConfig = DEFAULT_BATCH_LAYOUT_CONFIG,
    sizes: Mapping[int, tuple[float, float]] | None = None,
) -> LayoutResult:
    """Lay out batch containers; ``sizes`` gives each batch's (width, height)."""
    return GridLayout(ContainerSizing(config, sizes)).layout(batches, connections)


def route_task_arrows(
    connections: Iterable[Connection],
    layouts: Mapping[int, NodeLayout],
    config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
) -> list[ArrowPath]:
    """Curved arrows between task cards."""
    return ArrowRouter(CurveGeometry(config)).route(connections, layouts)


def route_batch_arrows(
    connections: Iterable[Connection],
    layouts: Mapping[int, NodeLayout],
    config: BatchLayoutConfig = DEFAULT_BATCH_LAYOUT_CONFIG,
) -> list[ArrowPath]:
    """Orthogonal arrows between batch containers."""
    return ArrowRouter(OrthogonalGeometry(config)).route(connections, layouts)
