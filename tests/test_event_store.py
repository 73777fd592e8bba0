from uuid import UUID, uuid4

import pytest

from aeinet.activation import Activation
from aeinet.event_store import (
    EventStore,
    FileEventStore,
    FileMemoryEventStore,
    MemoryEventStore,
    StorageError,
)
from aeinet.events import (
    RandomNeuronAdded,
    RandomNeuronRemoved,
    SynapseCreated,
    SynapseWeightMutated,
)
from aeinet.memory import (
    MemoryEntry,
    MemoryEntryAdded,
    MemoryEntryRemoved,
    MemoryPruned,
    MemoryScoreUpdated,
)


def test_load_missing_file_returns_empty(tmp_path):
    store = FileEventStore(tmp_path / "absent.log")
    assert store.load() == []
    assert not (tmp_path / "absent.log").exists()


def test_append_and_load_round_trip(tmp_path):
    store = FileEventStore(tmp_path / "events.log")
    n1, n2, s = uuid4(), uuid4(), uuid4()
    events = [
        RandomNeuronAdded(n1, Activation.SIGMOID),
        RandomNeuronAdded(n2, Activation.TANH),
        SynapseCreated(s, n1, n2, 0.25),
        SynapseWeightMutated(s, 0.25, -0.5),
        RandomNeuronRemoved(n1),
    ]
    for event in events:
        store.append(event)
    assert store.load() == events
    assert FileEventStore(str(tmp_path / "events.log")).load() == events


def test_one_line_per_event_in_wire_format(tmp_path):
    path = tmp_path / "events.log"
    store = FileEventStore(path)
    neuron_id = UUID("12345678-1234-4234-8234-123456789abc")
    store.append(RandomNeuronRemoved(neuron_id))
    assert path.read_text(encoding="utf-8") == (
        '{"RandomNeuronRemoved":{"neuron_id":"12345678-1234-4234-8234-123456789abc"}}\n'
    )


def test_blank_lines_are_skipped(tmp_path):
    path = tmp_path / "events.log"
    store = FileEventStore(path)
    nid = uuid4()
    store.append(RandomNeuronAdded(nid, Activation.IDENTITY))
    with path.open("a", encoding="utf-8") as handle:
        handle.write("\n   \n")
    store.append(RandomNeuronRemoved(nid))
    assert store.load() == [
        RandomNeuronAdded(nid, Activation.IDENTITY),
        RandomNeuronRemoved(nid),
    ]


def test_corrupt_line_raises_storage_error(tmp_path):
    path = tmp_path / "events.log"
    path.write_text("not json\n", encoding="utf-8")
    with pytest.raises(StorageError):
        FileEventStore(path).load()


def test_unknown_event_raises_storage_error(tmp_path):
    path = tmp_path / "events.log"
    path.write_text('{"Nonsense":{}}\n', encoding="utf-8")
    with pytest.raises(StorageError):
        FileEventStore(path).load()


def test_append_to_directory_raises_storage_error(tmp_path):
    store = FileEventStore(tmp_path)
    with pytest.raises(StorageError):
        store.append(RandomNeuronRemoved(uuid4()))


def test_file_stores_satisfy_protocols(tmp_path):
    store = FileEventStore(tmp_path / "a.log")
    memory_store = FileMemoryEventStore(tmp_path / "b.log")
    assert isinstance(store, EventStore)
    assert isinstance(memory_store, MemoryEventStore)
    assert store.load() == [] and memory_store.load() == []


def test_memory_store_round_trip(tmp_path):
    store = FileMemoryEventStore(tmp_path / "memory.log")
    entry = MemoryEntry("interaction", {"msg": "hello"}, 0.7)
    events = [
        MemoryEntryAdded(entry),
        MemoryScoreUpdated(entry.id, 0.7, 0.9),
        MemoryPruned([uuid4(), uuid4()]),
        MemoryEntryRemoved(entry.id),
    ]
    for event in events:
        store.append(event)
    loaded = store.load()
    assert loaded == events
    assert loaded[0].entry.payload == {"msg": "hello"}


def test_memory_store_missing_file_returns_empty(tmp_path):
    assert FileMemoryEventStore(tmp_path / "none.log").load() == []


def test_memory_store_unencodable_payload_raises(tmp_path):
    path = tmp_path / "memory.log"
    store = FileMemoryEventStore(path)
    with pytest.raises(StorageError):
        store.append(MemoryEntryAdded(MemoryEntry("bad", {1, 2}, 0.5)))
    assert store.load() == []


def test_memory_store_corrupt_line_raises(tmp_path):
    path = tmp_path / "memory.log"
    path.write_text('{"MemoryEntryRemoved":{"entry_id":"nope"}}\n', encoding="utf-8")
    with pytest.raises(StorageError):
        FileMemoryEventStore(path).load()