"""Command-line demonstrations of the network and the adaptive memory."""

from __future__ import annotations

import argparse
import random
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union
from uuid import UUID, uuid4

from .activation import Activation
from .event_store import FileEventStore, FileMemoryEventStore, StorageError
from .memory import MemoryEntry
from .memory_handlers import (
    AddMemoryEntryCommand,
    AddMemoryEntryHandler,
    UpdateMemoryScoreCommand,
    UpdateMemoryScoreHandler,
)
from .neuron_commands import AddRandomNeuronCommand, AddRandomNeuronHandler
from .projections import MemoryProjection, NetworkProjection
from .queries import GetNeuron, QueryHandler
from .synapse_commands import AddRandomSynapseCommand, AddRandomSynapseHandler

PathLike = Union[str, Path]
_MEMORY_CAPACITY = 10


@dataclass(frozen=True)
class NetworkDemoResult:
    """What the network demonstration created."""

    first_neuron: UUID
    second_neuron: UUID
    synapse_id: UUID
    activation: Optional[Activation]


def run_network_demo(
    path: PathLike, rng: Optional[random.Random] = None
) -> NetworkDemoResult:
    """Add two neurons and a synapse to the log at ``path``, then query it."""
    rng = rng if rng is not None else random.Random()
    add_neuron = AddRandomNeuronHandler(FileEventStore(path), rng)
    first = add_neuron.handle(AddRandomNeuronCommand())
    second = add_neuron.handle(AddRandomNeuronCommand())

    add_synapse = AddRandomSynapseHandler(add_neuron.store, rng)
    synapse_id = add_synapse.handle(AddRandomSynapseCommand())

    projection = NetworkProjection.from_events(add_synapse.store.load())
    neuron = QueryHandler(projection).handle(GetNeuron(first))
    activation = neuron.activation if neuron is not None else None
    return NetworkDemoResult(first, second, synapse_id, activation)


def run_memory_demo(path: PathLike) -> Optional[MemoryEntry]:
    """Store an entry, raise its score and return the top entry of the memory."""
    add = AddMemoryEntryHandler(FileMemoryEventStore(path), _MEMORY_CAPACITY)
    entry_id = add.handle(
        AddMemoryEntryCommand(event_type="interaction", payload={"msg": "hello"}, score=0.7)
    )
    update = UpdateMemoryScoreHandler(add.store, _MEMORY_CAPACITY)
    update.handle(UpdateMemoryScoreCommand(entry_id=entry_id, new_score=0.9))

    projection = MemoryProjection.from_events(_MEMORY_CAPACITY, update.store.load())
    top = projection.top_entries(1)
    return top[0] if top else None


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aeinet", description="Run a demonstration against an event log."
    )
    demos = parser.add_subparsers(dest="demo", required=True)
    network = demos.add_parser("network", help="grow a small random network")
    network.add_argument("--path", type=Path, help="event log to use")
    network.add_argument("--seed", type=int, help="seed for the random generator")
    memory = demos.add_parser("memory", help="store and rescore a memory entry")
    memory.add_argument("--path", type=Path, help="memory event log to use")
    return parser


def _network(args: argparse.Namespace) -> None:
    path = args.path or Path(tempfile.gettempdir()) / "aei_example.log"
    rng = random.Random(args.seed) if args.seed is not None else None
    result = run_network_demo(path, rng)
    print(
        f"Added neurons {result.first_neuron} and {result.second_neuron} "
        f"with synapse {result.synapse_id}"
    )
    if result.activation is not None:
        print(f"Neuron {result.first_neuron} activation: {result.activation.value}")


def _memory(args: argparse.Namespace) -> None:
    temporary = args.path is None
    path = args.path or Path(tempfile.gettempdir()) / f"aei_memory_{uuid4()}.log"
    try:
        entry = run_memory_demo(path)
        if entry is not None:
            print(f"Top entry: {entry.id} with score {entry.score}")
    finally:
        if temporary:
            path.unlink(missing_ok=True)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the demonstration chosen on the command line."""
    args = _build_parser().parse_args(argv)
    try:
        if args.demo == "network":
            _network(args)
        else:
            _memory(args)
    except (StorageError, LookupError, ValueError) as exc:
        print(f"aeinet: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())