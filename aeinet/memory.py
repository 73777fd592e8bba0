"""Adaptive memory aggregate storing past experiences as scored entries."""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, List, Union
from uuid import UUID, uuid4


def _now() -> datetime:
    return datetime.now(timezone.utc)


_TIMESTAMP = re.compile(
    r"^(\d{4}-\d{2}-\d{2})[Tt ](\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|z|[+-]\d{2}:\d{2})$"
)


def _format_timestamp(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    micros = moment.microsecond
    if micros:
        text += f".{micros // 1000:03d}" if micros % 1000 == 0 else f".{micros:06d}"
    return text + "Z"


def _parse_timestamp(text: Any) -> datetime:
    if not isinstance(text, str):
        raise ValueError(f"expected a timestamp string, got {text!r}")
    match = _TIMESTAMP.match(text)
    if match is None:
        raise ValueError(f"invalid timestamp {text!r}")
    date_part, time_part, fraction, offset = match.groups()
    moment = datetime.strptime(f"{date_part}T{time_part}", "%Y-%m-%dT%H:%M:%S")
    if fraction:
        moment = moment.replace(microsecond=int(fraction[:6].ljust(6, "0")))
    if offset in ("Z", "z"):
        tz = timezone.utc
    else:
        sign = 1 if offset[0] == "+" else -1
        hours, minutes = int(offset[1:3]), int(offset[4:6])
        tz = timezone(sign * timedelta(hours=hours, minutes=minutes))
    return moment.replace(tzinfo=tz).astimezone(timezone.utc)


def _decode_uuid(value: Any) -> UUID:
    if not isinstance(value, str):
        raise ValueError(f"expected a UUID string, got {value!r}")
    return UUID(value)


def _decode_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a number, got {value!r}")
    return float(value)


@dataclass
class MemoryEntry:
    """A memorized experience with a usefulness score in ``[0.0, 1.0]``."""

    event_type: str
    payload: Any
    score: float
    id: UUID = field(default_factory=uuid4)
    timestamp: datetime = field(default_factory=_now)

    def to_dict(self) -> dict:
        """Encode the entry as a JSON-ready mapping."""
        return {
            "id": str(self.id),
            "timestamp": _format_timestamp(self.timestamp),
            "event_type": self.event_type,
            "payload": self.payload,
            "score": float(self.score),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "MemoryEntry":
        """Decode an entry from its mapping form."""
        if not isinstance(data, dict):
            raise ValueError("a memory entry must be a mapping")
        try:
            event_type = data["event_type"]
            if not isinstance(event_type, str):
                raise ValueError("event_type must be a string")
            return cls(
                event_type=event_type,
                payload=data["payload"],
                score=_decode_float(data["score"]),
                id=_decode_uuid(data["id"]),
                timestamp=_parse_timestamp(data["timestamp"]),
            )
        except KeyError as exc:
            raise ValueError(f"memory entry is missing field {exc.args[0]!r}") from exc


@dataclass(frozen=True)
class MemoryEntryAdded:
    """A new memory entry was recorded."""

    entry: MemoryEntry


@dataclass(frozen=True)
class MemoryEntryRemoved:
    """An existing entry was removed."""

    entry_id: UUID


@dataclass(frozen=True)
class MemoryPruned:
    """Several entries were pruned to respect capacity."""

    removed_entries: List[UUID]


@dataclass(frozen=True)
class MemoryScoreUpdated:
    """The score of an entry was updated."""

    entry_id: UUID
    old_score: float
    new_score: float


MemoryEvent = Union[MemoryEntryAdded, MemoryEntryRemoved, MemoryPruned, MemoryScoreUpdated]


def memory_event_to_dict(event: MemoryEvent) -> dict:
    """Encode a memory event as a single-key mapping ready for JSON."""
    match event:
        case MemoryEntryAdded(entry=entry):
            body = {"entry": entry.to_dict()}
        case MemoryEntryRemoved(entry_id=entry_id):
            body = {"entry_id": str(entry_id)}
        case MemoryPruned(removed_entries=removed):
            body = {"removed_entries": [str(entry_id) for entry_id in removed]}
        case MemoryScoreUpdated(entry_id=entry_id, old_score=old, new_score=new):
            body = {"entry_id": str(entry_id), "old_score": float(old), "new_score": float(new)}
        case _:
            raise TypeError(f"not a memory event: {event!r}")
    return {type(event).__name__: body}


def memory_event_from_dict(data: Any) -> MemoryEvent:
    """Decode a memory event from its single-key mapping form."""
    if not isinstance(data, dict) or len(data) != 1:
        raise ValueError("a memory event must be a mapping with exactly one key")
    ((name, body),) = data.items()
    if not isinstance(body, dict):
        raise ValueError(f"fields of {name} must be a mapping")
    try:
        if name == "MemoryEntryAdded":
            return MemoryEntryAdded(entry=MemoryEntry.from_dict(body["entry"]))
        if name == "MemoryEntryRemoved":
            return MemoryEntryRemoved(entry_id=_decode_uuid(body["entry_id"]))
        if name == "MemoryPruned":
            removed = body["removed_entries"]
            if not isinstance(removed, list):
                raise ValueError("removed_entries must be a list")
            return MemoryPruned(removed_entries=[_decode_uuid(item) for item in removed])
        if name == "MemoryScoreUpdated":
            return MemoryScoreUpdated(
                entry_id=_decode_uuid(body["entry_id"]),
                old_score=_decode_float(body["old_score"]),
                new_score=_decode_float(body["new_score"]),
            )
    except KeyError as exc:
        raise ValueError(f"{name} is missing field {exc.args[0]!r}") from exc
    raise ValueError(f"unknown memory event type {name!r}")


@dataclass
class AdaptiveMemory:
    """Bounded buffer of memory entries kept in insertion order."""

    max_size: int
    entries: List[MemoryEntry] = field(default_factory=list)

    @classmethod
    def hydrate(cls, max_size: int, events: Iterable[MemoryEvent]) -> "AdaptiveMemory":
        """Rebuild a memory by replaying ``events`` in order."""
        memory = cls(max_size)
        for event in events:
            memory.apply(event)
        return memory

    def apply(self, event: MemoryEvent) -> None:
        """Apply one memory event to the state."""
        match event:
            case MemoryEntryAdded(entry=entry):
                self.entries.append(dataclasses.replace(entry))
            case MemoryEntryRemoved(entry_id=entry_id):
                self.entries = [e for e in self.entries if e.id != entry_id]
            case MemoryPruned(removed_entries=removed):
                gone = set(removed)
                self.entries = [e for e in self.entries if e.id not in gone]
            case MemoryScoreUpdated(entry_id=entry_id, new_score=new_score):
                entry = next((e for e in self.entries if e.id == entry_id), None)
                if entry is not None:
                    entry.score = new_score
            case _:
                raise TypeError(f"not a memory event: {event!r}")