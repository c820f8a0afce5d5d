"""Connection extraction: dependency lists to drawable edges.

A node's ``depends_on`` list can name nodes outside the current scope
(a task in another batch, say). Those are dropped here; only the next level
up can draw them.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from epic_layout.ir.epic import Epic
from epic_layout.layout.types import Connection, DependentNode


@dataclass(frozen=True)
class InterBatchConnection:
    """A task-to-task dependency whose endpoints sit in different batches."""

    from_id: int
    to_id: int
    from_batch: int
    to_batch: int


def build_connections(nodes: Sequence[DependentNode]) -> list[Connection]:
    """Connections for every in-scope dependency, in node then dependency order."""
    ids = {node.id for node in nodes}
    connections: list[Connection] = []
    for node in nodes:
        for dep in node.depends_on:
            if dep in ids:
                connections.append(Connection(from_id=dep, to_id=node.id))
    return connections


def build_batch_connections(epic: Epic) -> list[Connection]:
    return build_connections(epic.batches)


def build_inter_batch_connections(epic: Epic) -> list[InterBatchConnection]:
    task_batch: dict[int, int] = {}
    for batch in epic.batches:
        for task in batch.tasks:
            task_batch.setdefault(task.number, batch.number)

    result: list[InterBatchConnection] = []
    for batch in epic.batches:
        for task in batch.tasks:
            for dep in task.depends_on:
                dep_batch = task_batch.get(dep)
                if dep_batch is None or dep_batch == batch.number:
                    continue
                result.append(
                    InterBatchConnection(from_id=dep, to_id=task.number, from_batch=dep_batch, to_batch=batch.number)
                )
    return result
