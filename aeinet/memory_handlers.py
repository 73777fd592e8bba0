"""Commands and handlers that change the adaptive memory through events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List
from uuid import UUID

from .event_store import MemoryEventStore
from .memory import (
    AdaptiveMemory,
    MemoryEntry,
    MemoryEntryAdded,
    MemoryEntryRemoved,
    MemoryEvent,
    MemoryPruned,
    MemoryScoreUpdated,
)


class InvalidScoreError(ValueError):
    """A score lies outside the range ``[0.0, 1.0]``."""


class EntryNotFoundError(LookupError):
    """No memory entry has the requested identifier."""


@dataclass(frozen=True)
class AddMemoryEntryCommand:
    """Record a new experience with a usefulness score in ``[0.0, 1.0]``."""

    event_type: str
    payload: Any
    score: float


@dataclass(frozen=True)
class RemoveMemoryEntryCommand:
    """Remove the entry with the given identifier."""

    entry_id: UUID


@dataclass(frozen=True)
class PruneMemoryCommand:
    """Drop the lowest scoring entries if memory exceeds its capacity."""


@dataclass(frozen=True)
class UpdateMemoryScoreCommand:
    """Set a new score, in ``[0.0, 1.0]``, on an existing entry."""

    entry_id: UUID
    new_score: float


def _check_score(score: float) -> None:
    if not 0.0 <= score <= 1.0:
        raise InvalidScoreError(f"score must lie in [0.0, 1.0], got {score!r}")


class _MemoryHandler:
    """Base for handlers that rebuild the memory from a store on creation."""

    def __init__(self, store: MemoryEventStore, max_size: int) -> None:
        self.store = store
        self.memory = AdaptiveMemory.hydrate(max_size, store.load())

    def _emit(self, event: MemoryEvent) -> None:
        self.store.append(event)
        self.memory.apply(event)

    def _find(self, entry_id: UUID) -> MemoryEntry:
        entry = next((e for e in self.memory.entries if e.id == entry_id), None)
        if entry is None:
            raise EntryNotFoundError(f"no memory entry {entry_id}")
        return entry

    def _prune_lowest(self) -> List[UUID]:
        excess = len(self.memory.entries) - self.memory.max_size
        ranked = sorted(self.memory.entries, key=lambda e: e.score)
        removed = [entry.id for entry in ranked[:excess]]
        self._emit(MemoryPruned(removed_entries=list(removed)))
        return removed


class AddMemoryEntryHandler(_MemoryHandler):
    """Adds entries, pruning the lowest scores when capacity is exceeded."""

    def handle(self, command: AddMemoryEntryCommand) -> UUID:
        """Record the entry and return its identifier."""
        _check_score(command.score)
        entry = MemoryEntry(
            event_type=command.event_type, payload=command.payload, score=command.score
        )
        self._emit(MemoryEntryAdded(entry=entry))
        if len(self.memory.entries) > self.memory.max_size:
            self._prune_lowest()
        return entry.id


class RemoveMemoryEntryHandler(_MemoryHandler):
    """Removes a single entry."""

    def handle(self, command: RemoveMemoryEntryCommand) -> None:
        """Remove the entry named by ``command``."""
        self._find(command.entry_id)
        self._emit(MemoryEntryRemoved(entry_id=command.entry_id))


class PruneMemoryHandler(_MemoryHandler):
    """Removes the lowest scoring entries beyond capacity."""

    def handle(self, command: PruneMemoryCommand) -> List[UUID]:
        """Prune if needed and return the identifiers of removed entries."""
        if len(self.memory.entries) <= self.memory.max_size:
            return []
        return self._prune_lowest()


class UpdateMemoryScoreHandler(_MemoryHandler):
    """Changes the score of an existing entry."""

    def handle(self, command: UpdateMemoryScoreCommand) -> None:
        """Record the new score of the entry named by ``command``."""
        _check_score(command.new_score)
        entry = self._find(command.entry_id)
        self._emit(
            MemoryScoreUpdated(
                entry_id=command.entry_id,
                old_score=entry.score,
                new_score=command.new_score,
            )
        )