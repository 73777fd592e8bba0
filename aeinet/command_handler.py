"""Write-side commands that create or remove synapses explicitly."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union
from uuid import UUID

from .event_store import EventStore
from .events import Event, SynapseCreated, SynapseRemoved
from .network import Network


@dataclass(frozen=True)
class CreateSynapse:
    """Create a synapse between two existing neurons."""

    id: UUID
    source: UUID
    target: UUID
    weight: float


@dataclass(frozen=True)
class RemoveSynapse:
    """Delete a synapse by its identifier."""

    id: UUID


Command = Union[CreateSynapse, RemoveSynapse]


class CommandHandler:
    """Turns commands into events, persists them and updates the network."""

    def __init__(self, store: EventStore) -> None:
        self.store = store
        self.network = Network.hydrate(store.load())

    def handle(self, command: Command) -> None:
        """Persist the event for ``command`` and apply it to the network."""
        event: Event
        match command:
            case CreateSynapse(id=sid, source=source, target=target, weight=weight):
                event = SynapseCreated(id=sid, source=source, target=target, weight=weight)
            case RemoveSynapse(id=sid):
                event = SynapseRemoved(id=sid)
            case _:
                raise TypeError(f"not a network command: {command!r}")
        self.store.append(event)
        self.network.apply(event)