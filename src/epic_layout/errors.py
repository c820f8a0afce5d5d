"""Exception hierarchy for epic-layout.

All errors derive from ValueError: they describe malformed input, never an
external failure.
"""

from __future__ import annotations


class LayoutError(ValueError):
    """Base class for layout input errors."""


class LayoutConfigError(LayoutError):
    """A layout configuration value is missing, non-numeric, or out of range."""


class DocumentError(LayoutError):
    """An epic document could not be parsed."""


class CyclicDependencyError(LayoutError):
    """The dependency graph contains a cycle, so no column order exists."""

    def __init__(self, cycle: list[int]) -> None:
        self.cycle = cycle
        chain = " -> ".join(str(n) for n in [*cycle, cycle[0]]) if cycle else "?"
        super().__init__(f"dependency cycle detected: {chain}")
