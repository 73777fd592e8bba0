"""Append-only event storage backed by JSON-lines files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, List, Protocol, TypeVar, Union, runtime_checkable

from .events import Event, event_from_json, event_to_json
from .memory import MemoryEvent, memory_event_from_dict, memory_event_to_dict

_T = TypeVar("_T")
PathLike = Union[str, Path]


class StorageError(Exception):
    """Persisting or loading events failed."""


@runtime_checkable
class EventStore(Protocol):
    """Storage backend for network events."""

    def append(self, event: Event) -> None:
        """Persist one event."""

    def load(self) -> List[Event]:
        """Return all stored events in chronological order."""


@runtime_checkable
class MemoryEventStore(Protocol):
    """Storage backend for memory events."""

    def append(self, event: MemoryEvent) -> None:
        """Persist one event."""

    def load(self) -> List[MemoryEvent]:
        """Return all stored events in chronological order."""


def _append_line(path: Path, line: str) -> None:
    try:
        with path.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")
    except OSError as exc:
        raise StorageError(f"cannot append to {path}: {exc}") from exc


def _load_lines(path: Path, decode: Callable[[str], _T]) -> List[_T]:
    if not path.exists():
        return []
    try:
        with path.open(encoding="utf-8") as handle:
            lines = handle.readlines()
    except OSError as exc:
        raise StorageError(f"cannot read {path}: {exc}") from exc
    events: List[_T] = []
    for number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            events.append(decode(line))
        except ValueError as exc:
            raise StorageError(f"{path}:{number}: {exc}") from exc
    return events


class FileEventStore:
    """Stores network events in a file, one JSON document per line."""

    def __init__(self, path: PathLike) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.path)!r})"

    def append(self, event: Event) -> None:
        """Append ``event`` to the log, creating the file if needed."""
        _append_line(self.path, event_to_json(event))

    def load(self) -> List[Event]:
        """Read every event from the log; a missing file holds none."""
        return _load_lines(self.path, event_from_json)


def _memory_event_from_json(text: str) -> MemoryEvent:
    return memory_event_from_dict(json.loads(text))


class FileMemoryEventStore:
    """Stores memory events in a file, one JSON document per line."""

    def __init__(self, path: PathLike) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.path)!r})"

    def append(self, event: MemoryEvent) -> None:
        """Append ``event`` to the log, creating the file if needed."""
        data = memory_event_to_dict(event)
        try:
            line = json.dumps(data, separators=(",", ":"))
        except (TypeError, ValueError) as exc:
            raise StorageError(f"cannot encode memory event: {exc}") from exc
        _append_line(self.path, line)

    def load(self) -> List[MemoryEvent]:
        """Read every event from the log; a missing file holds none."""
        return _load_lines(self.path, _memory_event_from_json)