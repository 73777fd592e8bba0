"""Read models built by replaying event streams."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional
from uuid import UUID

from .activation import Activation
from .events import CuriosityScoreUpdated, Event
from .memory import AdaptiveMemory, MemoryEntry, MemoryEvent
from .network import Network, Neuron, Synapse


class NetworkProjection:
    """Queryable view of the network state."""

    def __init__(self, network: Optional[Network] = None) -> None:
        self._network = network if network is not None else Network()

    @classmethod
    def from_events(cls, events: Iterable[Event]) -> "NetworkProjection":
        """Build the projection by replaying ``events``."""
        return cls(Network.hydrate(events))

    def apply(self, event: Event) -> None:
        """Update the projection with one more event."""
        self._network.apply(event)

    def neuron(self, neuron_id: UUID) -> Optional[Neuron]:
        """Return the neuron with this identifier, if any."""
        return self._network.neurons.get(neuron_id)

    def neurons(self) -> List[Neuron]:
        """Return all neurons."""
        return list(self._network.neurons.values())

    def synapses(self) -> List[Synapse]:
        """Return all synapses."""
        return list(self._network.synapses.values())

    def synapse(self, synapse_id: UUID) -> Optional[Synapse]:
        """Return the synapse with this identifier, if any."""
        return self._network.synapses.get(synapse_id)

    def activation(self, neuron_id: UUID) -> Optional[Activation]:
        """Return the activation function of a neuron, if it exists."""
        neuron = self._network.neurons.get(neuron_id)
        return neuron.activation if neuron is not None else None


class CuriosityScoreProjection:
    """Maps neuron and synapse identifiers to their latest curiosity score."""

    def __init__(self) -> None:
        self._scores: Dict[UUID, float] = {}

    @classmethod
    def from_events(cls, events: Iterable[Event]) -> "CuriosityScoreProjection":
        """Build the projection by replaying ``events``."""
        projection = cls()
        for event in events:
            projection.apply(event)
        return projection

    def apply(self, event: Event) -> None:
        """Record the new score carried by a curiosity update; ignore others."""
        if isinstance(event, CuriosityScoreUpdated):
            self._scores[event.target_id] = event.new_score

    def get(self, target_id: UUID) -> Optional[float]:
        """Return the curiosity score for ``target_id``, if one was recorded."""
        return self._scores.get(target_id)


class MemoryProjection:
    """Queryable view of the adaptive memory."""

    def __init__(self, memory: AdaptiveMemory) -> None:
        self._memory = memory

    @classmethod
    def from_events(cls, max_size: int, events: Iterable[MemoryEvent]) -> "MemoryProjection":
        """Build the projection by replaying ``events``."""
        return cls(AdaptiveMemory.hydrate(max_size, events))

    def apply(self, event: MemoryEvent) -> None:
        """Update the projection with one more event."""
        self._memory.apply(event)

    def entries(self) -> List[MemoryEntry]:
        """Return all entries in insertion order."""
        return list(self._memory.entries)

    def entry(self, entry_id: UUID) -> Optional[MemoryEntry]:
        """Return the entry with this identifier, if any."""
        return next((e for e in self._memory.entries if e.id == entry_id), None)

    def top_entries(self, limit: int) -> List[MemoryEntry]:
        """Return at most ``limit`` entries, highest score first."""
        ranked = sorted(self._memory.entries, key=lambda e: e.score, reverse=True)
        return ranked[:limit]