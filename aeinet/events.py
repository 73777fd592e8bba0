"""Domain events describing changes to the network, and their wire format.

Each event serializes to a single-key mapping whose key is the event's
name and whose value holds its fields.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, Tuple, Union
from uuid import UUID

from .activation import Activation


@dataclass(frozen=True)
class RandomNeuronAdded:
    """A neuron was added to the network with a random activation."""

    neuron_id: UUID
    activation: Activation


@dataclass(frozen=True)
class RandomNeuronRemoved:
    """A neuron was removed from the network."""

    neuron_id: UUID


@dataclass(frozen=True)
class SynapseCreated:
    """A synapse connecting two neurons was created."""

    id: UUID
    source: UUID
    target: UUID
    weight: float


@dataclass(frozen=True)
class SynapseRemoved:
    """A synapse was removed from the network."""

    id: UUID


@dataclass(frozen=True)
class RandomSynapseAdded:
    """A synapse between two randomly selected neurons was added."""

    synapse_id: UUID
    source: UUID
    target: UUID
    weight: float


@dataclass(frozen=True)
class RandomSynapseRemoved:
    """A randomly chosen synapse was removed."""

    synapse_id: UUID


@dataclass(frozen=True)
class SynapseWeightMutated:
    """The weight of an existing synapse was mutated."""

    synapse_id: UUID
    old_weight: float
    new_weight: float


@dataclass(frozen=True)
class NeuronActivationMutated:
    """The activation function of a neuron was mutated."""

    neuron_id: UUID
    old_activation: Activation
    new_activation: Activation


@dataclass(frozen=True)
class CuriosityScoreUpdated:
    """The curiosity score of a neuron or synapse was updated."""

    target_id: UUID
    old_score: float
    new_score: float


Event = Union[
    RandomNeuronAdded,
    RandomNeuronRemoved,
    SynapseCreated,
    SynapseRemoved,
    RandomSynapseAdded,
    RandomSynapseRemoved,
    SynapseWeightMutated,
    NeuronActivationMutated,
    CuriosityScoreUpdated,
]


def _decode_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a number, got {value!r}")
    return float(value)


def _decode_uuid(value: Any) -> UUID:
    if not isinstance(value, str):
        raise ValueError(f"expected a UUID string, got {value!r}")
    return UUID(value)


_ENCODERS: Dict[str, Callable[[Any], Any]] = {
    "uuid": str,
    "float": float,
    "activation": lambda activation: activation.value,
}

_DECODERS: Dict[str, Callable[[Any], Any]] = {
    "uuid": _decode_uuid,
    "float": _decode_float,
    "activation": Activation,
}

# attribute name, wire key, value kind
_Schema = Tuple[Tuple[str, str, str], ...]

_SCHEMAS: Dict[type, _Schema] = {
    RandomNeuronAdded: (
        ("neuron_id", "neuron_id", "uuid"),
        ("activation", "activation", "activation"),
    ),
    RandomNeuronRemoved: (("neuron_id", "neuron_id", "uuid"),),
    SynapseCreated: (
        ("id", "id", "uuid"),
        ("source", "from", "uuid"),
        ("target", "to", "uuid"),
        ("weight", "weight", "float"),
    ),
    SynapseRemoved: (("id", "id", "uuid"),),
    RandomSynapseAdded: (
        ("synapse_id", "synapse_id", "uuid"),
        ("source", "from", "uuid"),
        ("target", "to", "uuid"),
        ("weight", "weight", "float"),
    ),
    RandomSynapseRemoved: (("synapse_id", "synapse_id", "uuid"),),
    SynapseWeightMutated: (
        ("synapse_id", "synapse_id", "uuid"),
        ("old_weight", "old_weight", "float"),
        ("new_weight", "new_weight", "float"),
    ),
    NeuronActivationMutated: (
        ("neuron_id", "neuron_id", "uuid"),
        ("old_activation", "old_activation", "activation"),
        ("new_activation", "new_activation", "activation"),
    ),
    CuriosityScoreUpdated: (
        ("target_id", "target_id", "uuid"),
        ("old_score", "old_score", "float"),
        ("new_score", "new_score", "float"),
    ),
}

_BY_NAME: Dict[str, type] = {cls.__name__: cls for cls in _SCHEMAS}


def event_to_dict(event: Event) -> dict:
    """Encode an event as a single-key mapping ready for JSON."""
    schema = _SCHEMAS.get(type(event))
    if schema is None:
        raise TypeError(f"not a network event: {event!r}")
    body = {key: _ENCODERS[kind](getattr(event, attr)) for attr, key, kind in schema}
    return {type(event).__name__: body}


def event_from_dict(data: Any) -> Event:
    """Decode an event from its single-key mapping form."""
    if not isinstance(data, dict) or len(data) != 1:
        raise ValueError("an event must be a mapping with exactly one key")
    ((name, body),) = data.items()
    cls = _BY_NAME.get(name)
    if cls is None:
        raise ValueError(f"unknown event type {name!r}")
    if not isinstance(body, dict):
        raise ValueError(f"fields of {name} must be a mapping")
    try:
        fields = {
            attr: _DECODERS[kind](body[key]) for attr, key, kind in _SCHEMAS[cls]
        }
    except KeyError as exc:
        raise ValueError(f"{name} is missing field {exc.args[0]!r}") from exc
    except (TypeError, AttributeError) as exc:
        raise ValueError(f"invalid field in {name}: {exc}") from exc
    return cls(**fields)


def event_to_json(event: Event) -> str:
    """Encode an event as one compact line of JSON."""
    return json.dumps(event_to_dict(event), separators=(",", ":"))


def event_from_json(text: str) -> Event:
    """Decode an event from a line of JSON."""
    return event_from_dict(json.loads(text))