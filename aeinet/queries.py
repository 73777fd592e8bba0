"""Read-side queries and the handlers that answer them from projections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union
from uuid import UUID

from .activation import Activation
from .memory import MemoryEntry
from .network import Neuron, Synapse
from .projections import MemoryProjection, NetworkProjection


@dataclass(frozen=True)
class GetNeuron:
    """Fetch a neuron by identifier."""

    neuron_id: UUID


@dataclass(frozen=True)
class ListNeurons:
    """Return all known neurons."""


@dataclass(frozen=True)
class ListSynapses:
    """Return all known synapses."""


@dataclass(frozen=True)
class GetSynapse:
    """Fetch a synapse by identifier."""

    synapse_id: UUID


@dataclass(frozen=True)
class GetNeuronActivation:
    """Fetch the activation function of a neuron."""

    neuron_id: UUID


Query = Union[GetNeuron, ListNeurons, ListSynapses, GetSynapse, GetNeuronActivation]
QueryResult = Union[Optional[Neuron], List[Neuron], List[Synapse], Optional[Synapse], Optional[Activation]]


class QueryHandler:
    """Answers network queries from a projection."""

    def __init__(self, projection: NetworkProjection) -> None:
        self._projection = projection

    def handle(self, query: Query) -> QueryResult:
        """Execute ``query`` and return its result."""
        match query:
            case GetNeuron(neuron_id=neuron_id):
                return self._projection.neuron(neuron_id)
            case ListNeurons():
                return self._projection.neurons()
            case ListSynapses():
                return self._projection.synapses()
            case GetSynapse(synapse_id=synapse_id):
                return self._projection.synapse(synapse_id)
            case GetNeuronActivation(neuron_id=neuron_id):
                return self._projection.activation(neuron_id)
            case _:
                raise TypeError(f"not a network query: {query!r}")

    def neuron(self, neuron_id: UUID) -> Optional[Neuron]:
        """Fetch a neuron directly."""
        return self._projection.neuron(neuron_id)

    def synapse(self, synapse_id: UUID) -> Optional[Synapse]:
        """Fetch a synapse directly."""
        return self._projection.synapse(synapse_id)

    def activation(self, neuron_id: UUID) -> Optional[Activation]:
        """Fetch a neuron's activation directly."""
        return self._projection.activation(neuron_id)


@dataclass(frozen=True)
class GetMemoryState:
    """Retrieve all memory entries."""


@dataclass(frozen=True)
class GetTopEntries:
    """Retrieve the ``limit`` highest scoring entries."""

    limit: int


@dataclass(frozen=True)
class GetEntryById:
    """Retrieve a single entry by identifier."""

    entry_id: UUID


MemoryQuery = Union[GetMemoryState, GetTopEntries, GetEntryById]
MemoryQueryResult = Union[List[MemoryEntry], Optional[MemoryEntry]]


class MemoryQueryHandler:
    """Answers memory queries from a projection."""

    def __init__(self, projection: MemoryProjection) -> None:
        self._projection = projection

    def handle(self, query: MemoryQuery) -> MemoryQueryResult:
        """Execute ``query`` and return its result."""
        match query:
            case GetMemoryState():
                return self._projection.entries()
            case GetTopEntries(limit=limit):
                return self._projection.top_entries(limit)
            case GetEntryById(entry_id=entry_id):
                return self._projection.entry(entry_id)
            case _:
                raise TypeError(f"not a memory query: {query!r}")

    def entry(self, entry_id: UUID) -> Optional[MemoryEntry]:
        """Fetch an entry directly."""
        return self._projection.entry(entry_id)