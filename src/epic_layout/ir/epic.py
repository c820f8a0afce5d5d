"""Epic document model: an epic holds batches, a batch holds tasks.

The document is already resolved by whatever fetched it from GitHub; this
module only gives it typed shape and parses the camelCase JSON form.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from epic_layout.errors import DocumentError
from epic_layout.types import IssueStatus


@dataclass
class Task:
    number: int
    title: str = ""
    status: IssueStatus = IssueStatus.PLANNED
    depends_on: list[int] = field(default_factory=list)
    url: str | None = None

    @property
    def id(self) -> int:
        return self.number


@dataclass
class Batch:
    number: int
    title: str = ""
    status: IssueStatus = IssueStatus.PLANNED
    tasks: list[Task] = field(default_factory=list)
    depends_on: list[int] = field(default_factory=list)
    url: str | None = None

    @property
    def id(self) -> int:
        return self.number

    @property
    def progress(self) -> int:
        return _percent_done(self.tasks)


@dataclass
class Epic:
    number: int
    title: str = ""
    owner: str = ""
    repo: str = ""
    batches: list[Batch] = field(default_factory=list)

    @property
    def progress(self) -> int:
        return _percent_done(self.batches)

    def find_task(self, number: int) -> tuple[Batch, Task] | None:
        for batch in self.batches:
            for task in batch.tasks:
                if task.number == number:
                    return batch, task
        return None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Epic:
        """Build an Epic from its JSON document form.

        Raises:
            DocumentError: If a required field is missing or has the wrong type.
        """
        if not isinstance(data, Mapping):
            raise DocumentError(f"epic document must be an object, got {type(data).__name__}")
        batches = [_parse_batch(b, f"batches[{i}]") for i, b in enumerate(_list(data, "batches", "epic"))]
        return cls(
            number=_int(data, "number", "epic"),
            title=_str(data, "title", "epic"),
            owner=_str(data, "owner", "epic"),
            repo=_str(data, "repo", "epic"),
            batches=batches,
        )


def _percent_done(items: list[Task] | list[Batch]) -> int:
    if not items:
        return 0
    done = sum(1 for item in items if item.status == IssueStatus.DONE)
    # round half up
    return int(done * 100 / len(items) + 0.5)


# ─── Parsing helpers ────────────────────────────────────────────────────────


def _parse_batch(raw: Any, where: str) -> Batch:
    if not isinstance(raw, Mapping):
        raise DocumentError(f"{where}: expected an object")
    tasks = [_parse_task(t, f"{where}.tasks[{i}]") for i, t in enumerate(_list(raw, "tasks", where))]
    return Batch(
        number=_int(raw, "number", where),
        title=_str(raw, "title", where),
        status=_status(raw, where),
        tasks=tasks,
        depends_on=_deps(raw, where),
        url=raw.get("url"),
    )


def _parse_task(raw: Any, where: str) -> Task:
    if not isinstance(raw, Mapping):
        raise DocumentError(f"{where}: expected an object")
    return Task(
        number=_int(raw, "number", where),
        title=_str(raw, "title", where),
        status=_status(raw, where),
        depends_on=_deps(raw, where),
        url=raw.get("url"),
    )


def _int(raw: Mapping[str, Any], key: str, where: str) -> int:
    if key not in raw:
        raise DocumentError(f"{where}: missing '{key}'")
    value = raw[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise DocumentError(f"{where}: '{key}' must be an integer, got {value!r}")
    return value


def _str(raw: Mapping[str, Any], key: str, where: str) -> str:
    value = raw.get(key) or ""
    if not isinstance(value, str):
        raise DocumentError(f"{where}: '{key}' must be a string, got {value!r}")
    return value


def _list(raw: Mapping[str, Any], key: str, where: str) -> list[Any]:
    value = raw.get(key) or []
    if not isinstance(value, list):
        raise DocumentError(f"{where}: '{key}' must be a list")
    return value


def _deps(raw: Mapping[str, Any], where: str) -> list[int]:
    deps = raw.get("dependsOn", raw.get("depends_on")) or []
    if not isinstance(deps, list) or any(isinstance(d, bool) or not isinstance(d, int) for d in deps):
        raise DocumentError(f"{where}: 'dependsOn' must be a list of integers")
    return list(deps)


def _status(raw: Mapping[str, Any], where: str) -> IssueStatus:
    try:
        return IssueStatus.from_value(raw.get("status"))
    except ValueError as e:
        raise DocumentError(f"{where}: {e}") from None
