"""A fully connected layer with matrix weights and a pluggable activation."""

from __future__ import annotations

from typing import Callable

import numpy as np

ActivationFunction = Callable[["Layer", np.ndarray], np.ndarray]

_WEIGHT_RNG = np.random.default_rng(2)


def _as_column(values):
    array = np.asarray(values, dtype=float)
    if array.ndim == 1:
        array = array.reshape(-1, 1)
    if array.ndim != 2:
        raise ValueError(f"expected a matrix, got {array.ndim} dimensions")
    return array


def softmax(layer, values):
    """Numerically stable softmax of a column vector."""
    column = _as_column(values)
    if column.shape[1] != 1:
        raise ValueError(f"softmax expects a column vector, got shape {column.shape}")
    exps = np.exp(column - column.max())
    return exps / exps.sum()


def softmax_derivative(layer, values):
    """Element-wise ``a * (1 - a)`` where ``a`` is the layer's activation of ``values``."""
    activation = layer.activation if layer is not None else softmax
    activated = activation(layer, _as_column(values))
    return activated * (1.0 - activated)


class Layer:
    """One layer of a multi layer perceptron.

    The weight matrix has shape ``(s_current_layer, s_prev_layer)``; feeding
    forward multiplies its transpose with a column vector of length
    ``s_current_layer``.
    """

    def __init__(self, s_current_layer, s_prev_layer, activation=None, derivative=None, rng=None):
        self.activation: ActivationFunction = activation if activation is not None else softmax
        self.derivative: ActivationFunction = (
            derivative if derivative is not None else softmax_derivative
        )
        self.output = np.zeros((s_current_layer, 1))
        self.sum_z = np.zeros((s_current_layer, 1))
        generator = rng if rng is not None else _WEIGHT_RNG
        self.weights = generator.uniform(0.0, 1.0, size=(s_current_layer, s_prev_layer))

    def feed_forward(self, inputs):
        """Compute the weighted sums for ``inputs`` and store their activation."""
        self.sum_z = self.weights.T @ _as_column(inputs)
        self.output = self.activation(self, self.sum_z)

    def calculate_gradients(self, target):
        """Replace the output with ``target`` times the derivative of the output."""
        self.output = _as_column(target) @ self.derivative(self, self.output)

    def update_weights(self, prev_output):
        """Subtract ``prev_output @ output`` from the weights."""
        delta = _as_column(prev_output) @ self.output
        if delta.shape != self.weights.shape:
            raise ValueError(
                f"weight update of shape {delta.shape} does not match weights {self.weights.shape}"
            )
        self.weights -= delta

    def __repr__(self):
        rows, cols = self.weights.shape
        return f"Layer({rows}, {cols})"