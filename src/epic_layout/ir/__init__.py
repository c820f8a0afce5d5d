"""Intermediate representation: the epic document model."""

from epic_layout.ir.epic import Batch, Epic, Task

__all__ = [
    "Batch",
    "Epic",
    "Task",
]
