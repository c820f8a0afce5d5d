"""Shared type definitions for epic-layout.

Enums and small types used across the document model, layout, and renderers.
"""

from __future__ import annotations

from enum import Enum, auto


class IssueStatus(Enum):
    DONE = "done"
    IN_PROGRESS = "in-progress"
    PLANNED = "planned"
    NOT_PLANNED = "not-planned"

    @classmethod
    def default(cls) -> IssueStatus:
        return cls.PLANNED

    @classmethod
    def from_value(cls, value: str | IssueStatus | None) -> IssueStatus:
        if value is None:
            return cls.default()
        if isinstance(value, IssueStatus):
            return value
        try:
            return cls(value.strip().lower())
        except (AttributeError, ValueError):
            raise ValueError(f"Unknown issue status {value!r}") from None


class PathType(Enum):
    """Rendering hint attached to every arrow path."""

    Horizontal = "horizontal"
    Vertical = "vertical"
    Complex = "complex"


class RouteKind(Enum):
    Horizontal = auto()  # from.col < to.col
    Vertical = auto()  # same column, different rows
    Backwards = auto()  # from.col > to.col
    Fallback = auto()  # anything else (e.g. same cell)
