"""Recalculation of curiosity scores from the rarity of events."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Sequence
from uuid import UUID

from .event_store import EventStore
from .events import (
    CuriosityScoreUpdated,
    Event,
    NeuronActivationMutated,
    RandomNeuronAdded,
    RandomNeuronRemoved,
    RandomSynapseAdded,
    RandomSynapseRemoved,
    SynapseCreated,
    SynapseRemoved,
    SynapseWeightMutated,
)
from .network import Network


class CuriosityScope(Enum):
    """Kind of targets whose curiosity score is recomputed."""

    NEURON = "Neuron"
    SYNAPSE = "Synapse"
    ALL = "All"


@dataclass(frozen=True)
class RecalculateCuriosityScoreCommand:
    """Request to recompute curiosity scores.

    For the neuron and synapse scopes, ``target_ids`` lists the targets; the
    ``ALL`` scope covers every neuron and synapse in the network instead.
    """

    target_ids: Sequence[UUID]
    scope: CuriosityScope


def touches(event: Event, target_id: UUID) -> bool:
    """Tell whether ``event`` concerns the neuron or synapse ``target_id``."""
    match event:
        case RandomNeuronAdded(neuron_id=nid) | RandomNeuronRemoved(neuron_id=nid):
            return nid == target_id
        case NeuronActivationMutated(neuron_id=nid):
            return nid == target_id
        case SynapseCreated(id=sid, source=source, target=target):
            return target_id in (sid, source, target)
        case RandomSynapseAdded(synapse_id=sid, source=source, target=target):
            return target_id in (sid, source, target)
        case SynapseRemoved(id=sid):
            return sid == target_id
        case RandomSynapseRemoved(synapse_id=sid) | SynapseWeightMutated(synapse_id=sid):
            return sid == target_id
        case CuriosityScoreUpdated(target_id=tid):
            return tid == target_id
        case _:
            raise TypeError(f"not a network event: {event!r}")


def compute_score(events: Iterable[Event], target_id: UUID) -> float:
    """Score a target by rarity: the fewer events touch it, the higher."""
    occurrences = sum(1 for event in events if touches(event, target_id))
    return 1.0 / (1.0 + occurrences)


class RecalculateCuriosityScoreHandler:
    """Recomputes curiosity scores and records the changes as events."""

    def __init__(self, store: EventStore) -> None:
        self.store = store
        self.network = Network.hydrate(store.load())

    def _resolve_targets(self, command: RecalculateCuriosityScoreCommand) -> List[UUID]:
        if command.scope is CuriosityScope.ALL:
            return [*self.network.neurons, *self.network.synapses]
        return list(command.target_ids)

    def _current_score(self, target_id: UUID) -> float:
        neuron = self.network.neurons.get(target_id)
        if neuron is not None:
            return neuron.curiosity_score
        synapse = self.network.synapses.get(target_id)
        return synapse.curiosity_score if synapse is not None else 0.0

    def handle(self, command: RecalculateCuriosityScoreCommand) -> List[CuriosityScoreUpdated]:
        """Recompute the scores and return the update events that were emitted.

        A target whose score does not change produces no event.
        """
        history = self.store.load()
        emitted: List[CuriosityScoreUpdated] = []
        for target_id in self._resolve_targets(command):
            old_score = self._current_score(target_id)
            new_score = compute_score(history, target_id)
            if abs(new_score - old_score) > sys.float_info.epsilon:
                event = CuriosityScoreUpdated(
                    target_id=target_id, old_score=old_score, new_score=new_score
                )
                self.store.append(event)
                self.network.apply(event)
                emitted.append(event)
        return emitted