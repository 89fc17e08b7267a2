"""
activations.py
~~~~~~~~~~~~~~

Activation functions applied elementwise by the network.

Each activation exposes ``forward(x)`` and ``derivative(y)``. The derivative
is expressed in terms of the activation's own *output* ``y = forward(x)``,
not the pre-activation input, because the backward pass only keeps layer
outputs in its cache. Only activations whose slope can be recovered from
their output belong here.
"""

import abc
import math
from typing import Dict, Union


class Activation(abc.ABC):
    """Base class for output-differentiable activation functions."""

    name: str = ''

    @abc.abstractmethod
    def forward(self, x: float) -> float:
        """Apply the activation to a pre-activation value."""
        raise NotImplementedError

    @abc.abstractmethod
    def derivative(self, y: float) -> float:
        """Slope of the activation, given its already-activated output ``y``."""
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"


class Sigmoid(Activation):
    """Logistic sigmoid: ``1 / (1 + e^-x)`` with derivative ``y * (1 - y)``."""

    name = 'sigmoid'

    def forward(self, x: float) -> float:
        # Split on sign so math.exp never overflows
        if x >= 0:
            return 1.0 / (1.0 + math.exp(-x))
        z = math.exp(x)
        return z / (1.0 + z)

    def derivative(self, y: float) -> float:
        return y * (1.0 - y)


class Tanh(Activation):
    """Hyperbolic tangent with derivative ``1 - y^2``."""

    name = 'tanh'

    def forward(self, x: float) -> float:
        return math.tanh(x)

    def derivative(self, y: float) -> float:
        return 1.0 - y * y


class ReLU(Activation):
    """Rectified linear unit; slope is 1 where the output is positive."""

    name = 'relu'

    def forward(self, x: float) -> float:
        return x if x > 0.0 else 0.0

    def derivative(self, y: float) -> float:
        return 1.0 if y > 0.0 else 0.0


SIGMOID = Sigmoid()
TANH = Tanh()
RELU = ReLU()

ACTIVATIONS: Dict[str, Activation] = {
    activation.name: activation for activation in (SIGMOID, TANH, RELU)
}


def get_activation(activation: Union[str, Activation]) -> Activation:
    """
    Resolve an activation by name, or pass an instance through.

    Args:
        activation: One of ``'sigmoid'``, ``'tanh'``, ``'relu'`` (any case),
            or an Activation instance

    Returns:
        Activation: The matching activation

    Raises:
        ValueError: If the name is not a known activation
    """
    if isinstance(activation, Activation):
        return activation

    key = str(activation).strip().lower()
    if key not in ACTIVATIONS:
        raise ValueError(
            f"Unknown activation '{activation}'. "
            f"Expected one of {sorted(ACTIVATIONS)}"
        )
    return ACTIVATIONS[key]
