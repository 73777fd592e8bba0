import math
import random
from uuid import uuid4

import pytest

from aeinet.activation import Activation
from aeinet.event_store import FileEventStore, StorageError
from aeinet.events import (
    RandomNeuronAdded,
    RandomSynapseAdded,
    RandomSynapseRemoved,
    SynapseCreated,
    SynapseWeightMutated,
)
from aeinet.network import Network
from aeinet.projections import NetworkProjection
from aeinet.queries import GetSynapse, QueryHandler
from aeinet.synapse_commands import (
    AddRandomSynapseCommand,
    AddRandomSynapseHandler,
    InvalidStdDevError,
    MutateRandomSynapseWeightCommand,
    MutateRandomSynapseWeightHandler,
    NoAvailableConnectionError,
    NoSynapseAvailableError,
    NotEnoughNeuronsError,
    RemoveRandomSynapseCommand,
    RemoveRandomSynapseHandler,
)


@pytest.fixture
def store(tmp_path):
    return FileEventStore(tmp_path / "events.log")


def seed_two_neurons(store, n1, n2):
    for nid in (n1, n2):
        store.append(RandomNeuronAdded(neuron_id=nid, activation=Activation.IDENTITY))


def seed_synapse(store, synapse_id, source, target):
    store.append(SynapseCreated(id=synapse_id, source=source, target=target, weight=1.0))


def seed_random_synapse(store, synapse_id, source, target):
    store.append(
        RandomSynapseAdded(synapse_id=synapse_id, source=source, target=target, weight=1.0)
    )


class FailingStore:
    def __init__(self, events):
        self.events = list(events)

    def load(self):
        return list(self.events)

    def append(self, event):
        raise StorageError("disk full")


def test_add_random_synapse_appends_event(store):
    n1, n2 = uuid4(), uuid4()
    seed_two_neurons(store, n1, n2)

    handler = AddRandomSynapseHandler(store, random.Random(1))
    synapse_id = handler.handle(AddRandomSynapseCommand())
    assert synapse_id in handler.network.synapses
    synapse = handler.network.synapses[synapse_id]
    assert {synapse.source, synapse.target} == {n1, n2}
    assert -1.0 <= synapse.weight <= 1.0

    last = handler.store.load()[-1]
    assert isinstance(last, RandomSynapseAdded)
    assert last.synapse_id == synapse_id


def test_add_random_synapse_requires_two_neurons(store):
    store.append(RandomNeuronAdded(neuron_id=uuid4(), activation=Activation.IDENTITY))
    handler = AddRandomSynapseHandler(store, random.Random(2))
    with pytest.raises(NotEnoughNeuronsError):
        handler.handle(AddRandomSynapseCommand())


def test_add_random_synapse_errors_when_no_connection_available(store):
    n1, n2 = uuid4(), uuid4()
    seed_two_neurons(store, n1, n2)

    handler = AddRandomSynapseHandler(store, random.Random(3))
    handler.handle(AddRandomSynapseCommand())
    handler.handle(AddRandomSynapseCommand())
    pairs = {(s.source, s.target) for s in handler.network.synapses.values()}
    assert pairs == {(n1, n2), (n2, n1)}
    with pytest.raises(NoAvailableConnectionError):
        handler.handle(AddRandomSynapseCommand())


def test_remove_random_synapse_appends_event(store):
    n1, n2 = uuid4(), uuid4()
    seed_two_neurons(store, n1, n2)
    synapse_id = uuid4()
    seed_synapse(store, synapse_id, n1, n2)

    handler = RemoveRandomSynapseHandler(store, random.Random(4))
    removed_id = handler.handle(RemoveRandomSynapseCommand())
    assert removed_id == synapse_id
    assert removed_id not in handler.network.synapses

    last = handler.store.load()[-1]
    assert isinstance(last, RandomSynapseRemoved)
    assert last.synapse_id == removed_id


def test_remove_random_synapse_errors_when_empty(store):
    handler = RemoveRandomSynapseHandler(store, random.Random(5))
    with pytest.raises(NoSynapseAvailableError):
        handler.handle(RemoveRandomSynapseCommand())


def test_remove_random_synapse_event_replay(store):
    n1, n2 = uuid4(), uuid4()
    seed_two_neurons(store, n1, n2)
    seed_synapse(store, uuid4(), n1, n2)

    handler = RemoveRandomSynapseHandler(store, random.Random(6))
    removed_id = handler.handle(RemoveRandomSynapseCommand())

    events = handler.store.load()
    net = Network.hydrate(events)
    assert removed_id not in net.synapses
    assert NetworkProjection.from_events(events).synapses() == []


def test_mutate_synapse_weight_appends_event(store):
    n1, n2 = uuid4(), uuid4()
    seed_two_neurons(store, n1, n2)
    synapse_id = uuid4()
    seed_random_synapse(store, synapse_id, n1, n2)

    handler = MutateRandomSynapseWeightHandler(store, random.Random(7))
    mutated_id = handler.handle(MutateRandomSynapseWeightCommand(std_dev=0.5))
    assert mutated_id == synapse_id

    last = handler.store.load()[-1]
    assert isinstance(last, SynapseWeightMutated)
    assert last.synapse_id == synapse_id
    assert last.old_weight == 1.0
    assert last.new_weight != last.old_weight
    assert handler.network.synapses[synapse_id].weight == last.new_weight


def test_mutate_synapse_weight_errors_when_empty(store):
    handler = MutateRandomSynapseWeightHandler(store, random.Random(8))
    with pytest.raises(NoSynapseAvailableError):
        handler.handle(MutateRandomSynapseWeightCommand(std_dev=0.1))


@pytest.mark.parametrize("std_dev", [0.0, -0.5, math.nan])
def test_mutate_synapse_weight_rejects_invalid_std_dev(store, std_dev):
    n1, n2 = uuid4(), uuid4()
    seed_two_neurons(store, n1, n2)
    seed_random_synapse(store, uuid4(), n1, n2)
    handler = MutateRandomSynapseWeightHandler(store, random.Random(1))
    with pytest.raises(InvalidStdDevError):
        handler.handle(MutateRandomSynapseWeightCommand(std_dev=std_dev))
    assert len(store.load()) == 3


def test_invalid_std_dev_checked_before_empty_network(store):
    handler = MutateRandomSynapseWeightHandler(store, random.Random(1))
    with pytest.raises(InvalidStdDevError):
        handler.handle(MutateRandomSynapseWeightCommand(std_dev=0.0))


def test_mutate_synapse_weight_event_replay(store):
    n1, n2 = uuid4(), uuid4()
    seed_two_neurons(store, n1, n2)
    synapse_id = uuid4()
    seed_random_synapse(store, synapse_id, n1, n2)

    handler = MutateRandomSynapseWeightHandler(store, random.Random(9))
    handler.handle(MutateRandomSynapseWeightCommand(std_dev=0.5))

    events = handler.store.load()
    last = events[-1]
    assert isinstance(last, SynapseWeightMutated)
    net = Network.hydrate(events)
    assert net.synapses[synapse_id].weight == last.new_weight

    query = QueryHandler(NetworkProjection.from_events(events))
    found = query.handle(GetSynapse(synapse_id=synapse_id))
    assert found.weight == last.new_weight


def test_storage_failure_propagates_and_leaves_state_unchanged():
    n1, n2 = uuid4(), uuid4()
    failing = FailingStore(
        [
            RandomNeuronAdded(neuron_id=n1, activation=Activation.IDENTITY),
            RandomNeuronAdded(neuron_id=n2, activation=Activation.IDENTITY),
        ]
    )
    handler = AddRandomSynapseHandler(failing, random.Random(0))
    with pytest.raises(StorageError):
        handler.handle(AddRandomSynapseCommand())
    assert handler.network.synapses == {}