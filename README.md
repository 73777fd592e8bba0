# aeinet

Dynamic neural networks whose structure is built and changed entirely through
events. Every change (adding or removing a neuron, wiring or cutting a
synapse, mutating a weight or an activation function, updating a curiosity
score) is written as an event to an append-only JSON-lines log. Replaying
the log rebuilds the network.

The package also holds an adaptive memory: a bounded list of scored
experiences that prunes its lowest-scoring entries when it grows past its
capacity, kept in its own event log.

No third-party libraries are needed.

## Install

```
pip install .
```

Running the tests:

```
pip install ".[test]"
pytest
```

## Concepts

- **Activation** (`aeinet.activation`): `Activation.IDENTITY`,
  `SIGMOID`, `RELU` and `TANH`, each with `apply(x)` and
  `derivative(activated)`, the derivative being expressed in terms of the
  already activated output.
- **Events** (`aeinet.events`): `RandomNeuronAdded`, `RandomNeuronRemoved`,
  `SynapseCreated`, `SynapseRemoved`, `RandomSynapseAdded`,
  `RandomSynapseRemoved`, `SynapseWeightMutated`, `NeuronActivationMutated`
  and `CuriosityScoreUpdated`. `event_to_dict` / `event_from_dict` and
  `event_to_json` / `event_from_json` convert them to and from a single-key
  mapping named after the event; malformed input raises `ValueError`.
- **Network** (`aeinet.network`): `Neuron`, `Synapse` and the `Network`
  aggregate. `Network.hydrate(events)` replays a history; `apply(event)` folds
  in one more. Removing a neuron also drops every synapse touching it,
  synapses that name unknown neurons are ignored, and a `RandomSynapseAdded`
  event is ignored for a self-loop or an already connected pair.
- **Adaptive memory** (`aeinet.memory`): `MemoryEntry`, the events
  `MemoryEntryAdded`, `MemoryEntryRemoved`, `MemoryPruned` and
  `MemoryScoreUpdated`, and the `AdaptiveMemory` aggregate with `hydrate` and
  `apply`. `memory_event_to_dict` / `memory_event_from_dict` give their
  serialized form; timestamps are written in UTC.
- **Event stores** (`aeinet.event_store`): `FileEventStore` and
  `FileMemoryEventStore` append one JSON document per line and load them back
  in order; a missing file holds no events and blank lines are skipped.
  Failures to read, write or decode surface as `StorageError`. The
  `EventStore` and `MemoryEventStore` protocols describe what any other store
  must offer (`append` and `load`).
- **Command handlers**: each handler loads its store on construction,
  validates a command, appends the resulting event and applies it to its
  in-memory state (`handler.network` or `handler.memory`):
  - `aeinet.neuron_commands`: `AddRandomNeuronHandler` (a new neuron is
    wired to a random, non-empty subset of the existing neurons, each synapse
    in a random direction), `RemoveRandomNeuronHandler`,
    `MutateRandomNeuronActivationHandler` (with `exclude_io=True` only neurons
    having both incoming and outgoing synapses are eligible)
  - `aeinet.synapse_commands`: `AddRandomSynapseHandler`,
    `RemoveRandomSynapseHandler`, `MutateRandomSynapseWeightHandler` (adds
    Gaussian noise with the command's `std_dev`)
  - `aeinet.command_handler`: `CommandHandler` for explicit
    `CreateSynapse` / `RemoveSynapse` commands
  - `aeinet.curiosity`: `RecalculateCuriosityScoreHandler` with
    `CuriosityScope.NEURON`, `SYNAPSE` or `ALL`. `compute_score(events, id)`
    is `1 / (1 + n)` where `n` is the number of events that `touches` the
    target; only changed scores produce a `CuriosityScoreUpdated` event.
  - `aeinet.memory_handlers`: `AddMemoryEntryHandler` (prunes the lowest
    scores once capacity is exceeded), `RemoveMemoryEntryHandler`,
    `PruneMemoryHandler`, `UpdateMemoryScoreHandler`
- **Projections and queries**: `NetworkProjection`,
  `CuriosityScoreProjection` and `MemoryProjection` (`aeinet.projections`)
  are read models built from an event list. `QueryHandler` answers
  `GetNeuron`, `ListNeurons`, `ListSynapses`, `GetSynapse` and
  `GetNeuronActivation`; `MemoryQueryHandler` answers `GetMemoryState`,
  `GetTopEntries` and `GetEntryById` (`aeinet.queries`).

Handlers that pick things at random take an optional `random.Random`
instance, so a seeded generator gives repeatable choices.

## Growing a network

```python
import random
from pathlib import Path

from aeinet.event_store import FileEventStore
from aeinet.neuron_commands import AddRandomNeuronCommand, AddRandomNeuronHandler
from aeinet.synapse_commands import AddRandomSynapseCommand, AddRandomSynapseHandler
from aeinet.projections import NetworkProjection
from aeinet.queries import QueryHandler

store = FileEventStore(Path("network.log"))
rng = random.Random(42)

add_neuron = AddRandomNeuronHandler(store, rng)
first = add_neuron.handle(AddRandomNeuronCommand())
second = add_neuron.handle(AddRandomNeuronCommand())

add_synapse = AddRandomSynapseHandler(store, rng)
add_synapse.handle(AddRandomSynapseCommand())

projection = NetworkProjection.from_events(store.load())
queries = QueryHandler(projection)
print(queries.activation(first))
```

Errors are exceptions: adding a synapse to a network with fewer than two
neurons raises `NotEnoughNeuronsError`, and when every ordered pair of
neurons is already connected it raises `NoAvailableConnectionError`.
Removing or mutating with nothing to act on raises `NoNeuronAvailableError`,
`NoEligibleNeuronError` or `NoSynapseAvailableError`; a non-positive
`std_dev` raises `InvalidStdDevError`.

## Adaptive memory

```python
from pathlib import Path

from aeinet.event_store import FileMemoryEventStore
from aeinet.memory_handlers import (
    AddMemoryEntryCommand,
    AddMemoryEntryHandler,
    UpdateMemoryScoreCommand,
    UpdateMemoryScoreHandler,
)
from aeinet.projections import MemoryProjection

store = FileMemoryEventStore(Path("memory.log"))

add = AddMemoryEntryHandler(store, 10)
entry_id = add.handle(
    AddMemoryEntryCommand(event_type="interaction", payload={"msg": "hello"}, score=0.7)
)

update = UpdateMemoryScoreHandler(store, 10)
update.handle(UpdateMemoryScoreCommand(entry_id=entry_id, new_score=0.9))

projection = MemoryProjection.from_events(10, store.load())
top = projection.top_entries(1)[0]
print(top.id, top.score)
```

Scores must lie in `[0.0, 1.0]`; anything else raises `InvalidScoreError`.
Referring to an entry that does not exist raises `EntryNotFoundError`.

## Command line

Two demonstrations are available:

```
aeinet network [--path LOG] [--seed N]
aeinet memory [--path LOG]
```

`aeinet network` adds two random neurons and a random synapse to the event
log (by default `aei_example.log` in the temporary directory, which is kept
and appended to on later runs), then prints the identifiers and the first
neuron's activation. `--seed` makes the random choices repeatable.

`aeinet memory` records an entry with score 0.7, raises it to 0.9 and prints
the top entry. Without `--path` it uses a fresh file in the temporary
directory and deletes it afterwards.

Both exit with status 1 and a message on standard error if a storage,
lookup or value error occurs. The same demonstrations are available from
Python as `aeinet.cli.run_network_demo(path, rng)` and
`aeinet.cli.run_memory_demo(path)`.

## What it does not do

The network is a structure only. There is no forward pass, propagation or
training: `Neuron.value` stays at 0.0, and `Activation.apply` and
`Activation.derivative` are not used by the network itself. Storage is
limited to the JSON-lines files above; there is no database backend and no
locking for concurrent writers.