from uuid import uuid4

import pytest

from aeinet.activation import Activation
from aeinet.curiosity import (
    CuriosityScope,
    RecalculateCuriosityScoreCommand,
    RecalculateCuriosityScoreHandler,
    compute_score,
    touches,
)
from aeinet.event_store import FileEventStore
from aeinet.events import (
    CuriosityScoreUpdated,
    RandomNeuronAdded,
    RandomNeuronRemoved,
    SynapseCreated,
    SynapseRemoved,
)
from aeinet.network import Network
from aeinet.projections import CuriosityScoreProjection


def test_curiosity_score_event_and_projection(tmp_path):
    store = FileEventStore(tmp_path / "curiosity.log")
    neuron_id = uuid4()
    store.append(RandomNeuronAdded(neuron_id=neuron_id, activation=Activation.IDENTITY))

    handler = RecalculateCuriosityScoreHandler(store)
    events = handler.handle(
        RecalculateCuriosityScoreCommand(target_ids=[neuron_id], scope=CuriosityScope.NEURON)
    )
    assert isinstance(events[0], CuriosityScoreUpdated)
    assert events[0].target_id == neuron_id

    history = handler.store.load()
    projection = CuriosityScoreProjection.from_events(history)
    score = projection.get(neuron_id)
    assert score is not None and score <= 1.0
    network = Network.hydrate(history)
    assert network.neurons[neuron_id].curiosity_score == score


def test_compute_score_decreases_with_occurrences():
    nid = uuid4()
    events = [
        RandomNeuronAdded(neuron_id=nid, activation=Activation.IDENTITY),
        RandomNeuronRemoved(neuron_id=nid),
    ]
    assert compute_score(events, nid) < 1.0
    assert compute_score(events, nid) < compute_score(events[:1], nid)


def test_compute_score_without_occurrences_is_maximal():
    assert compute_score([], uuid4()) == 1.0


def test_touches_matches_synapse_endpoints():
    n1, n2, sid = uuid4(), uuid4(), uuid4()
    created = SynapseCreated(id=sid, source=n1, target=n2, weight=1.0)
    assert touches(created, n1)
    assert touches(created, n2)
    assert touches(created, sid)
    assert not touches(created, uuid4())
    assert touches(SynapseRemoved(id=sid), sid)
    assert not touches(SynapseRemoved(id=sid), n1)


def test_scope_all_covers_neurons_and_synapses(tmp_path):
    store = FileEventStore(tmp_path / "all.log")
    n1, n2, sid = uuid4(), uuid4(), uuid4()
    store.append(RandomNeuronAdded(neuron_id=n1, activation=Activation.IDENTITY))
    store.append(RandomNeuronAdded(neuron_id=n2, activation=Activation.TANH))
    store.append(SynapseCreated(id=sid, source=n1, target=n2, weight=1.0))
    handler = RecalculateCuriosityScoreHandler(store)
    events = handler.handle(RecalculateCuriosityScoreCommand(target_ids=[], scope=CuriosityScope.ALL))
    assert [e.target_id for e in events] == [n1, n2, sid]
    assert handler.network.synapses[sid].curiosity_score == events[2].new_score
    assert store.load()[-3:] == events


def test_unchanged_score_emits_nothing(tmp_path):
    store = FileEventStore(tmp_path / "same.log")
    nid = uuid4()
    store.append(RandomNeuronAdded(neuron_id=nid, activation=Activation.IDENTITY))
    store.append(CuriosityScoreUpdated(target_id=nid, old_score=0.0, new_score=1.0 / 3.0))
    handler = RecalculateCuriosityScoreHandler(store)
    result = handler.handle(
        RecalculateCuriosityScoreCommand(target_ids=[nid], scope=CuriosityScope.NEURON)
    )
    assert result == []
    assert len(store.load()) == 2


def test_touches_rejects_foreign_objects():
    with pytest.raises(TypeError):
        touches("event", uuid4())