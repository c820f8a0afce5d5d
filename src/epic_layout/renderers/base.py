"""Base renderer protocol."""

from __future__ import annotations

from typing import Protocol

from epic_layout.ir.epic import Epic
from epic_layout.layout.epic import EpicLayout


class Renderer(Protocol):
    """Protocol that all renderers must implement."""

    def render(self, epic: Epic, layout: EpicLayout) -> str:
        """Render a laid-out epic to an output string."""
        ...
