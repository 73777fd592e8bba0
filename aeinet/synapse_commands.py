"""Commands and handlers that add, remove and mutate random synapses."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Tuple
from uuid import UUID, uuid4

from .event_store import EventStore
from .events import (
    Event,
    RandomSynapseAdded,
    RandomSynapseRemoved,
    SynapseWeightMutated,
)
from .network import Network


class NotEnoughNeuronsError(LookupError):
    """The network holds fewer than two neurons."""


class NoAvailableConnectionError(LookupError):
    """Every ordered pair of distinct neurons is already connected."""


class NoSynapseAvailableError(LookupError):
    """The network holds no synapse."""


class InvalidStdDevError(ValueError):
    """The standard deviation of the mutation noise is not positive."""


@dataclass(frozen=True)
class AddRandomSynapseCommand:
    """Request to connect two randomly chosen, unconnected neurons."""


@dataclass(frozen=True)
class RemoveRandomSynapseCommand:
    """Request to remove a randomly chosen synapse."""


@dataclass(frozen=True)
class MutateRandomSynapseWeightCommand:
    """Request to add Gaussian noise with ``std_dev`` to a random synapse weight."""

    std_dev: float


class _NetworkHandler:
    """Base for handlers that rebuild the network from a store on creation."""

    def __init__(self, store: EventStore, rng: Optional[random.Random] = None) -> None:
        self.store = store
        self.network = Network.hydrate(store.load())
        self._rng = rng if rng is not None else random.Random()

    def _emit(self, event: Event) -> None:
        self.store.append(event)
        self.network.apply(event)


class AddRandomSynapseHandler(_NetworkHandler):
    """Creates a synapse between a random pair of unconnected neurons."""

    def _free_pairs(self, neuron_ids: List[UUID]) -> List[Tuple[UUID, UUID]]:
        taken = {(s.source, s.target) for s in self.network.synapses.values()}
        return [
            (source, target)
            for source in neuron_ids
            for target in neuron_ids
            if source != target and (source, target) not in taken
        ]

    def handle(self, command: AddRandomSynapseCommand) -> UUID:
        """Add a synapse and return its identifier."""
        neuron_ids = list(self.network.neurons)
        if len(neuron_ids) < 2:
            raise NotEnoughNeuronsError("the network needs at least two neurons")
        pairs = self._free_pairs(neuron_ids)
        if not pairs:
            raise NoAvailableConnectionError("all neuron pairs are already connected")
        source, target = self._rng.choice(pairs)
        weight = self._rng.uniform(-1.0, 1.0)
        synapse_id = uuid4()
        self._emit(
            RandomSynapseAdded(
                synapse_id=synapse_id, source=source, target=target, weight=weight
            )
        )
        return synapse_id


class RemoveRandomSynapseHandler(_NetworkHandler):
    """Removes a randomly chosen synapse."""

    def handle(self, command: RemoveRandomSynapseCommand) -> UUID:
        """Remove a synapse and return its identifier."""
        ids = list(self.network.synapses)
        if not ids:
            raise NoSynapseAvailableError("the network contains no synapse")
        synapse_id = self._rng.choice(ids)
        self._emit(RandomSynapseRemoved(synapse_id=synapse_id))
        return synapse_id


class MutateRandomSynapseWeightHandler(_NetworkHandler):
    """Perturbs the weight of a random synapse with Gaussian noise."""

    def handle(self, command: MutateRandomSynapseWeightCommand) -> UUID:
        """Mutate one synapse's weight and return the synapse's identifier."""
        if not command.std_dev > 0.0:
            raise InvalidStdDevError(
                f"standard deviation must be positive, got {command.std_dev!r}"
            )
        ids = list(self.network.synapses)
        if not ids:
            raise NoSynapseAvailableError("the network contains no synapse")
        synapse_id = self._rng.choice(ids)
        old_weight = self.network.synapses[synapse_id].weight
        new_weight = old_weight + self._rng.gauss(0.0, command.std_dev)
        self._emit(
            SynapseWeightMutated(
                synapse_id=synapse_id, old_weight=old_weight, new_weight=new_weight
            )
        )
        return synapse_id