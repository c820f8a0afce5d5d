"""Centralized configuration for epic-layout."""

from __future__ import annotations

import dataclasses
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from epic_layout.errors import LayoutConfigError

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(key: str) -> str:
    return _CAMEL_RE.sub("_", key).lower()


def check_number(name: str, value: Any, *, allow_zero: bool) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise LayoutConfigError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise LayoutConfigError(f"{name} must be finite, got {value!r}")
    if allow_zero and value < 0:
        raise LayoutConfigError(f"{name} must be >= 0, got {value!r}")
    if not allow_zero and value <= 0:
        raise LayoutConfigError(f"{name} must be > 0, got {value!r}")


class _ConfigMixin:
    """Validation and override helpers shared by the config dataclasses.

    Subclasses list their strictly positive fields in ``_SIZES``; every other
    field is a gap or padding and may be zero.
    """

    _SIZES: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for f in dataclasses.fields(self):
            check_number(f.name, getattr(self, f.name), allow_zero=f.name not in self._SIZES)

    def replace(self, **overrides: Any):
        """Return a copy with the given options overridden (and re-validated)."""
        self._check_known(overrides)
        return dataclasses.replace(self, **overrides)

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None = None):
        """Build a config from a mapping of camelCase or snake_case options.

        Omitted options keep their defaults.
        """
        kwargs = {_snake(key): value for key, value in (options or {}).items()}
        cls._check_known(kwargs)
        return cls(**kwargs)

    @classmethod
    def _check_known(cls, options: Mapping[str, Any]) -> None:
        known = {f.name for f in dataclasses.fields(cls)}
        for name in options:
            if name not in known:
                raise LayoutConfigError(f"unknown option {name!r} for {cls.__name__}")


@dataclass(frozen=True)
class LayoutConfig(_ConfigMixin):
    """Task-level grid: every task occupies one fixed-size cell."""

    _SIZES = ("cell_width", "cell_height")

    cell_width: float = 160
    cell_height: float = 65
    horizontal_gap: float = 50
    vertical_gap: float = 16
    padding: float = 0


@dataclass(frozen=True)
class BatchLayoutConfig(_ConfigMixin):
    """Batch-level grid: batches are containers sized by their task grid.

    ``header_height`` and ``content_padding`` place the task grid inside a
    batch container; they also feed the container size.
    """

    _SIZES = ("min_batch_width", "min_batch_height")

    min_batch_width: float = 380
    min_batch_height: float = 200
    horizontal_gap: float = 80
    vertical_gap: float = 40
    padding: float = 0
    header_height: float = 40
    content_padding: float = 12


DEFAULT_LAYOUT_CONFIG = LayoutConfig()
DEFAULT_BATCH_LAYOUT_CONFIG = BatchLayoutConfig()
