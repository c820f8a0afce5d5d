"""Cell sizing strategies for the grid layout engine.

The engine is shared by both levels; what differs is how big each grid cell
is. Tasks use one fixed cell size. Batches are containers whose size comes
from the task grid they hold.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from epic_layout.config import (
    DEFAULT_BATCH_LAYOUT_CONFIG,
    DEFAULT_LAYOUT_CONFIG,
    BatchLayoutConfig,
    LayoutConfig,
    check_number,
)
from epic_layout.layout.types import LayoutResult


class SizingStrategy(Protocol):
    """What the engine needs to turn grid cells into pixel rects."""

    horizontal_gap: float
    vertical_gap: float
    padding: float
    # Stretch each node to its row's height instead of keeping its own.
    stretch_rows: bool

    def node_size(self, node_id: int) -> tuple[float, float]:
        """(width, height) of a node before row stretching."""
        ...

    def min_size(self) -> tuple[float, float]:
        """Smallest cell; the canvas is never smaller than one of these."""
        ...


class FixedCellSizing:
    """Every node gets ``cell_width`` x ``cell_height``."""

    stretch_rows = False

    def __init__(self, config: LayoutConfig = DEFAULT_LAYOUT_CONFIG) -> None:
        self.config = config
        self.horizontal_gap = config.horizontal_gap
        self.vertical_gap = config.vertical_gap
        self.padding = config.padding

    def node_size(self, node_id: int) -> tuple[float, float]:
        return (self.config.cell_width, self.config.cell_height)

    def min_size(self) -> tuple[float, float]:
        return (self.config.cell_width, self.config.cell_height)


class ContainerSizing:
    """Per-node sizes, floored at the configured minimum batch size.

    Nodes missing from ``sizes`` get the minimum size.
    """

    stretch_rows = True

    def __init__(
        self,
        config: BatchLayoutConfig = DEFAULT_BATCH_LAYOUT_CONFIG,
        sizes: Mapping[int, tuple[float, float]] | None = None,
    ) -> None:
        self.config = config
        self.sizes = dict(sizes or {})
        self.horizontal_gap = config.horizontal_gap
        self.vertical_gap = config.vertical_gap
        self.padding = config.padding
        for node_id, (w, h) in self.sizes.items():
            check_number(f"width of node {node_id}", w, allow_zero=False)
            check_number(f"height of node {node_id}", h, allow_zero=False)

    def node_size(self, node_id: int) -> tuple[float, float]:
        min_w, min_h = self.min_size()
        w, h = self.sizes.get(node_id, (min_w, min_h))
        return (max(min_w, w), max(min_h, h))

    def min_size(self) -> tuple[float, float]:
        return (self.config.min_batch_width, self.config.min_batch_height)


def container_size(
    tasks: LayoutResult,
    config: BatchLayoutConfig = DEFAULT_BATCH_LAYOUT_CONFIG,
) -> tuple[float, float]:
    """Size of a batch container that encloses the given task layout.

    The task grid sits below the header, inset by ``content_padding`` on
    every side.
    """
    inset = 2 * config.content_padding
    width = max(config.min_batch_width, tasks.canvas_width + inset)
    height = max(config.min_batch_height, config.header_height + inset + tasks.canvas_height)
    return (width, height)
