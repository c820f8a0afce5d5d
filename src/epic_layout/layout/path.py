"""Arrow path commands and their SVG path-data serialisation.

Paths are built as lists of absolute commands and serialised to the
mini-grammar the rendering surface expects::

    M x y
    L x y
    C c1x c1y, c2x c2y, x y
    Q cx cy, x y
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


def fmt(value: float) -> str:
    """Format a coordinate: integral values print without a decimal point."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float

    def to_svg(self) -> str:
        return f"M {fmt(self.x)} {fmt(self.y)}"


@dataclass(frozen=True)
class LineTo:
    x: float
    y: float

    def to_svg(self) -> str:
        return f"L {fmt(self.x)} {fmt(self.y)}"


@dataclass(frozen=True)
class CubicTo:
    c1x: float
    c1y: float
    c2x: float
    c2y: float
    x: float
    y: float

    def to_svg(self) -> str:
        return (
            f"C {fmt(self.c1x)} {fmt(self.c1y)}, {fmt(self.c2x)} {fmt(self.c2y)}, "
            f"{fmt(self.x)} {fmt(self.y)}"
        )


@dataclass(frozen=True)
class QuadTo:
    """Quadratic segment, used for the small roundings at route bends."""

    cx: float
    cy: float
    x: float
    y: float

    def to_svg(self) -> str:
        return f"Q {fmt(self.cx)} {fmt(self.cy)}, {fmt(self.x)} {fmt(self.y)}"


PathCommand = Union[MoveTo, LineTo, CubicTo, QuadTo]


def to_path_string(commands: list[PathCommand]) -> str:
    return " ".join(cmd.to_svg() for cmd in commands)


def start_point(commands: list[PathCommand]) -> tuple[float, float]:
    first = commands[0]
    return (first.x, first.y)


def end_point(commands: list[PathCommand]) -> tuple[float, float]:
    last = commands[-1]
    return (last.x, last.y)


def points(commands: list[PathCommand]) -> list[tuple[float, float]]:
    """End point of every command, in drawing order (control points excluded)."""
    return [(cmd.x, cmd.y) for cmd in commands]
