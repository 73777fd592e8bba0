"""Activation functions available to neurons."""

from __future__ import annotations

import math
from enum import Enum


class Activation(Enum):
    """Transformation applied to a neuron's input during propagation.

    The member values are the names used in the serialized event log.
    """

    IDENTITY = "Identity"
    SIGMOID = "Sigmoid"
    RELU = "ReLU"
    TANH = "Tanh"

    def apply(self, x: float) -> float:
        """Apply the activation function to ``x``."""
        if self is Activation.IDENTITY:
            return x
        if self is Activation.SIGMOID:
            try:
                return 1.0 / (1.0 + math.exp(-x))
            except OverflowError:
                return 0.0
        if self is Activation.RELU:
            return x if x > 0.0 else 0.0
        return math.tanh(x)

    def derivative(self, activated: float) -> float:
        """Return the derivative expressed in terms of the activated output."""
        if self is Activation.IDENTITY:
            return 1.0
        if self is Activation.SIGMOID:
            return activated * (1.0 - activated)
        if self is Activation.RELU:
            return 1.0 if activated > 0.0 else 0.0
        return 1.0 - activated * activated