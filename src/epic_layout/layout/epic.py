"""Two-level epic layout: tasks inside batches, batches inside the epic.

Each batch is laid out on its own first. The resulting task grid fixes the
batch container's size, the containers are laid out as compound nodes, and
finally every task rect is shifted into its container's content area.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from epic_layout.config import DEFAULT_BATCH_LAYOUT_CONFIG, DEFAULT_LAYOUT_CONFIG, BatchLayoutConfig, LayoutConfig
from epic_layout.ir.epic import Epic
from epic_layout.layout.connections import (
    InterBatchConnection,
    build_batch_connections,
    build_connections,
    build_inter_batch_connections,
)
from epic_layout.layout.engine import layout_batches, layout_tasks, route_batch_arrows, route_task_arrows
from epic_layout.layout.sizing import container_size
from epic_layout.layout.types import ArrowPath, LayoutResult, NodeLayout

logger = logging.getLogger(__name__)


@dataclass
class EpicLayout:
    """Everything a renderer needs to draw an epic, in absolute pixels."""

    batches: LayoutResult
    batch_arrows: list[ArrowPath]
    tasks: dict[int, dict[int, NodeLayout]] = field(default_factory=dict)
    task_arrows: dict[int, list[ArrowPath]] = field(default_factory=dict)
    inter_batch_connections: list[InterBatchConnection] = field(default_factory=list)

    @property
    def canvas_width(self) -> float:
        return self.batches.canvas_width

    @property
    def canvas_height(self) -> float:
        return self.batches.canvas_height

    def to_dict(self) -> dict[str, Any]:
        return {
            "canvasWidth": self.canvas_width,
            "canvasHeight": self.canvas_height,
            "batches": self.batches.to_dict()["nodes"],
            "batchArrows": [a.to_dict() for a in self.batch_arrows],
            "tasks": {
                str(batch_id): {str(tid): tl.to_dict() for tid, tl in layouts.items()}
                for batch_id, layouts in self.tasks.items()
            },
            "taskArrows": {str(batch_id): [a.to_dict() for a in arrows] for batch_id, arrows in self.task_arrows.items()},
            "interBatchConnections": [
                {"from": c.from_id, "to": c.to_id, "fromBatch": c.from_batch, "toBatch": c.to_batch}
                for c in self.inter_batch_connections
            ],
        }


def layout_epic(
    epic: Epic,
    task_config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
    batch_config: BatchLayoutConfig = DEFAULT_BATCH_LAYOUT_CONFIG,
) -> EpicLayout:
    """Lay out and route a whole epic.

    Raises:
        LayoutError: On duplicate ids within a scope.
        CyclicDependencyError: If tasks in a batch, or the batches, form a cycle.
    """
    relative: dict[int, LayoutResult] = {}
    sizes: dict[int, tuple[float, float]] = {}
    for batch in epic.batches:
        result = layout_tasks(batch.tasks, config=task_config)
        relative[batch.number] = result
        sizes[batch.number] = container_size(result, batch_config)

    batch_conns = build_batch_connections(epic)
    batches = layout_batches(epic.batches, batch_conns, batch_config, sizes)
    batch_arrows = route_batch_arrows(batch_conns, batches.nodes, batch_config)

    tasks: dict[int, dict[int, NodeLayout]] = {}
    task_arrows: dict[int, list[ArrowPath]] = {}
    for batch in epic.batches:
        container = batches.nodes[batch.number]
        dx = container.x + batch_config.content_padding
        dy = container.y + batch_config.header_height + batch_config.content_padding
        placed = {tid: tl.translated(dx, dy) for tid, tl in relative[batch.number].nodes.items()}
        tasks[batch.number] = placed
        task_arrows[batch.number] = route_task_arrows(build_connections(batch.tasks), placed, task_config)

    inter = build_inter_batch_connections(epic)
    logger.debug(
        "epic #%d: %d batches, %d batch arrows, %d inter-batch task edges",
        epic.number,
        len(epic.batches),
        len(batch_arrows),
        len(inter),
    )
    return EpicLayout(
        batches=batches,
        batch_arrows=batch_arrows,
        tasks=tasks,
        task_arrows=task_arrows,
        inter_batch_connections=inter,
    )
