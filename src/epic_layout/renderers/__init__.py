"""Renderers that paint an EpicLayout."""

from epic_layout.renderers.base import Renderer
from epic_layout.renderers.svg import SvgRenderer

__all__ = [
    "Renderer",
    "SvgRenderer",
]
