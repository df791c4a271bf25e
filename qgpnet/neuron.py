"""A single perceptron neuron with a vector activation function."""

from __future__ import annotations

from typing import Callable, Sequence

import numpy as np

VectorFunction = Callable[[list], list]

_WEIGHT_SEED = 5


def vector_softmax(values):
    """Numerically stable softmax of a sequence of numbers, returned as a list."""
    array = np.asarray(list(values), dtype=float)
    if array.size == 0:
        return []
    exps = np.exp(array - array.max())
    return [float(value) for value in exps / exps.sum()]


class Neuron:
    """A neuron holding the weights of the connections that lead into it.

    Every weight starts with the same value drawn uniformly from [0, 1).
    Without an explicit generator a freshly seeded one is used, so all
    neurons created that way start with identical weights.  Without a
    derivative function the derivative is ``a * (1 - a)`` of the activation.
    """

    def __init__(self, size=0, activation_function=None, derivative_function=None, rng=None):
        size = int(size)
        if size < 0:
            raise ValueError(f"neuron size must not be negative, got {size}")
        self.activation_function: VectorFunction = (
            activation_function if activation_function is not None else vector_softmax
        )
        self.derivative_function: VectorFunction | None = derivative_function
        generator = rng if rng is not None else np.random.default_rng(_WEIGHT_SEED)
        initial = float(generator.uniform(0.0, 1.0))
        self.weights: list[float] = [initial] * size
        self.output_val = 0.0

    def __getitem__(self, index):
        return self.weights[index]

    def __setitem__(self, index, value):
        self.weights[index] = float(value)

    def __len__(self):
        return len(self.weights)

    def activation(self, values: Sequence[float]):
        """Apply the activation function to a vector of weighted sums."""
        return list(self.activation_function(list(values)))

    def derivative(self, values: Sequence[float]):
        """Apply the derivative of the activation function to a vector."""
        if self.derivative_function is not None:
            return list(self.derivative_function(list(values)))
        return [a * (1.0 - a) for a in self.activation(values)]

    def __repr__(self):
        return f"Neuron(size={len(self.weights)}, output={self.output_val:g})"