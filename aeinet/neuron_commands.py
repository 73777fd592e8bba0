"""Commands and handlers that add, remove and mutate random neurons."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional
from uuid import UUID, uuid4

from .activation import Activation
from .event_store import EventStore
from .events import (
    Event,
    NeuronActivationMutated,
    RandomNeuronAdded,
    RandomNeuronRemoved,
    SynapseCreated,
)
from .network import Network

_ACTIVATIONS = (
    Activation.IDENTITY,
    Activation.SIGMOID,
    Activation.RELU,
    Activation.TANH,
)


class NoNeuronAvailableError(LookupError):
    """The network holds no neuron that could be removed."""


class NoEligibleNeuronError(LookupError):
    """No neuron matched the selection criteria."""


@dataclass(frozen=True)
class AddRandomNeuronCommand:
    """Request to add a neuron with a random activation."""


@dataclass(frozen=True)
class RemoveRandomNeuronCommand:
    """Request to remove a randomly chosen neuron."""


@dataclass(frozen=True)
class MutateRandomNeuronActivationCommand:
    """Request to change the activation of a randomly chosen neuron.

    With ``exclude_io`` set, only neurons having both incoming and outgoing
    synapses are eligible.
    """

    exclude_io: bool = False


class _NetworkHandler:
    """Base for handlers that rebuild the network from a store on creation."""

    def __init__(self, store: EventStore, rng: Optional[random.Random] = None) -> None:
        self.store = store
        self.network = Network.hydrate(store.load())
        self._rng = rng if rng is not None else random.Random()

    def _emit(self, event: Event) -> None:
        self.store.append(event)
        self.network.apply(event)


class AddRandomNeuronHandler(_NetworkHandler):
    """Adds neurons and wires each new one to some existing neurons."""

    def handle(self, command: AddRandomNeuronCommand) -> UUID:
        """Add a neuron and return its identifier.

        When other neurons exist, the new neuron is connected to a random,
        non-empty subset of them, each synapse in a random direction.
        """
        activation = self._rng.choice(_ACTIVATIONS)
        neuron_id = uuid4()
        self._emit(RandomNeuronAdded(neuron_id=neuron_id, activation=activation))

        others: List[UUID] = [nid for nid in self.network.neurons if nid != neuron_id]
        if others:
            count = self._rng.randint(1, len(others))
            self._rng.shuffle(others)
            for other in others[:count]:
                weight = self._rng.uniform(-1.0, 1.0)
                if self._rng.random() < 0.5:
                    source, target = other, neuron_id
                else:
                    source, target = neuron_id, other
                self._emit(
                    SynapseCreated(id=uuid4(), source=source, target=target, weight=weight)
                )
        return neuron_id


class RemoveRandomNeuronHandler(_NetworkHandler):
    """Removes a randomly chosen neuron together with its synapses."""

    def handle(self, command: RemoveRandomNeuronCommand) -> UUID:
        """Remove a neuron and return its identifier."""
        ids = list(self.network.neurons)
        if not ids:
            raise NoNeuronAvailableError("the network contains no neuron")
        neuron_id = self._rng.choice(ids)
        self._emit(RandomNeuronRemoved(neuron_id=neuron_id))
        return neuron_id


class MutateRandomNeuronActivationHandler(_NetworkHandler):
    """Replaces a random neuron's activation with a different one."""

    def _has_both_directions(self, neuron_id: UUID) -> bool:
        synapses = self.network.synapses.values()
        has_in = any(s.target == neuron_id for s in synapses)
        has_out = any(s.source == neuron_id for s in synapses)
        return has_in and has_out

    def handle(self, command: MutateRandomNeuronActivationCommand) -> UUID:
        """Mutate one neuron's activation and return the neuron's identifier."""
        candidates = list(self.network.neurons)
        if command.exclude_io:
            candidates = [nid for nid in candidates if self._has_both_directions(nid)]
        if not candidates:
            raise NoEligibleNeuronError("no neuron matches the selection criteria")
        neuron_id = self._rng.choice(candidates)
        old_activation = self.network.neurons[neuron_id].activation
        choices = [a for a in _ACTIVATIONS if a != old_activation]
        new_activation = self._rng.choice(choices)
        self._emit(
            NeuronActivationMutated(
                neuron_id=neuron_id,
                old_activation=old_activation,
                new_activation=new_activation,
            )
        )
        return neuron_id