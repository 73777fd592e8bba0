"""Neurons, synapses and the event-sourced network aggregate."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable
from uuid import UUID, uuid4

from .activation import Activation
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


@dataclass
class Neuron:
    """A neuron with an activation function and its current output value."""

    activation: Activation
    id: UUID = field(default_factory=uuid4)
    value: float = 0.0
    curiosity_score: float = 0.0

    def update_curiosity_score(self, score: float) -> None:
        """Set the neuron's curiosity score."""
        self.curiosity_score = score


@dataclass
class Synapse:
    """A directed, weighted connection from one neuron to another."""

    source: UUID
    target: UUID
    weight: float
    id: UUID = field(default_factory=uuid4)
    curiosity_score: float = 0.0

    def update_curiosity_score(self, score: float) -> None:
        """Set the synapse's curiosity score."""
        self.curiosity_score = score


@dataclass
class Network:
    """Aggregate holding all neurons and synapses, changed only by events."""

    neurons: Dict[UUID, Neuron] = field(default_factory=dict)
    synapses: Dict[UUID, Synapse] = field(default_factory=dict)

    @classmethod
    def hydrate(cls, events: Iterable[Event]) -> "Network":
        """Build a network by replaying ``events`` in order."""
        network = cls()
        for event in events:
            network.apply(event)
        return network

    def _connected(self, source: UUID, target: UUID) -> bool:
        return any(s.source == source and s.target == target for s in self.synapses.values())

    def apply(self, event: Event) -> None:
        """Apply one domain event to the network state."""
        match event:
            case RandomNeuronAdded(neuron_id=nid, activation=activation):
                self.neurons[nid] = Neuron(activation, id=nid)
            case RandomNeuronRemoved(neuron_id=nid):
                self.neurons.pop(nid, None)
                self.synapses = {
                    sid: s
                    for sid, s in self.synapses.items()
                    if s.source != nid and s.target != nid
                }
            case SynapseCreated(id=sid, source=source, target=target, weight=weight):
                if source in self.neurons and target in self.neurons:
                    self.synapses[sid] = Synapse(source, target, weight, id=sid)
            case SynapseRemoved(id=sid):
                self.synapses.pop(sid, None)
            case RandomSynapseAdded(synapse_id=sid, source=source, target=target, weight=weight):
                if (
                    source in self.neurons
                    and target in self.neurons
                    and source != target
                    and not self._connected(source, target)
                ):
                    self.synapses[sid] = Synapse(source, target, weight, id=sid)
            case RandomSynapseRemoved(synapse_id=sid):
                self.synapses.pop(sid, None)
            case SynapseWeightMutated(synapse_id=sid, new_weight=new_weight):
                synapse = self.synapses.get(sid)
                if synapse is not None:
                    synapse.weight = new_weight
            case NeuronActivationMutated(neuron_id=nid, new_activation=new_activation):
                neuron = self.neurons.get(nid)
                if neuron is not None:
                    neuron.activation = new_activation
            case CuriosityScoreUpdated(target_id=tid, new_score=new_score):
                if tid in self.neurons:
                    self.neurons[tid].curiosity_score = new_score
                elif tid in self.synapses:
                    self.synapses[tid].curiosity_score = new_score
            case _:
                raise TypeError(f"not a network event: {event!r}")