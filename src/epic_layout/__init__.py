"""epic-layout: grid layout and arrow routing for GitHub epic dependency diagrams."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from epic_layout.config import (
    DEFAULT_BATCH_LAYOUT_CONFIG,
    DEFAULT_LAYOUT_CONFIG,
    BatchLayoutConfig,
    LayoutConfig,
)
from epic_layout.errors import CyclicDependencyError, DocumentError, LayoutConfigError, LayoutError
from epic_layout.ir.epic import Batch, Epic, Task
from epic_layout.layout import (
    ArrowPath,
    Connection,
    EpicLayout,
    GraphNode,
    LayoutResult,
    NodeLayout,
    build_connections,
    layout_batches,
    layout_epic,
    layout_tasks,
    route_batch_arrows,
    route_task_arrows,
)
from epic_layout.renderers.svg import SvgRenderer
from epic_layout.types import IssueStatus, PathType

__all__ = [
    "DEFAULT_BATCH_LAYOUT_CONFIG",
    "DEFAULT_LAYOUT_CONFIG",
    "ArrowPath",
    "Batch",
    "BatchLayoutConfig",
    "Connection",
    "CyclicDependencyError",
    "DocumentError",
    "Epic",
    "EpicLayout",
    "GraphNode",
    "IssueStatus",
    "LayoutConfig",
    "LayoutConfigError",
    "LayoutError",
    "LayoutResult",
    "NodeLayout",
    "PathType",
    "Task",
    "build_connections",
    "layout_batches",
    "layout_epic",
    "layout_json",
    "layout_tasks",
    "render_epic_svg",
    "route_batch_arrows",
    "route_task_arrows",
]


def _load(document: str | Mapping[str, Any]) -> Epic:
    if isinstance(document, str):
        try:
            document = json.loads(document)
        except json.JSONDecodeError as e:
            raise DocumentError(f"invalid JSON: {e}") from None
    return Epic.from_dict(document)


def layout_json(
    document: str | Mapping[str, Any],
    task_config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
    batch_config: BatchLayoutConfig = DEFAULT_BATCH_LAYOUT_CONFIG,
) -> dict[str, Any]:
    """Lay out an epic document and return the JSON-ready result.

    Args:
        document: Epic document as a JSON string or an already-decoded mapping.
        task_config: Task grid options.
        batch_config: Batch grid options.

    Returns:
        The ``EpicLayout.to_dict()`` form: batch rects, task rects, arrows.

    Raises:
        DocumentError: If the document cannot be parsed.
        CyclicDependencyError: If dependencies form a cycle.
    """
    return layout_epic(_load(document), task_config, batch_config).to_dict()


def render_epic_svg(
    document: str | Mapping[str, Any],
    task_config: LayoutConfig = DEFAULT_LAYOUT_CONFIG,
    batch_config: BatchLayoutConfig = DEFAULT_BATCH_LAYOUT_CONFIG,
) -> str:
    """Lay out an epic document and render it to SVG."""
    epic = _load(document)
    return SvgRenderer().render(epic, layout_epic(epic, task_config, batch_config))
