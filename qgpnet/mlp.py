"""A multi layer perceptron built from fully connected layers."""

from __future__ import annotations

import numpy as np

from .layer import Layer


def _column(values):
    array = np.asarray(values, dtype=float)
    if array.ndim == 1:
        array = array.reshape(-1, 1)
    return array


class MultiLayerPerceptron:
    """A stack of :class:`Layer` objects given by a topology of layer sizes."""

    def __init__(self, topology, rng=None):
        sizes = [int(size) for size in topology]
        self._layers = [Layer(prev, cur, rng=rng) for prev, cur in zip(sizes, sizes[1:])]

    def forward_propagation(self, inputs):
        """Feed ``inputs`` through every layer and return the final output."""
        values = _column(inputs)
        for layer in self._layers:
            layer.feed_forward(values)
            values = layer.output
        return values.copy()

    def back_propagation(self, mean_cost, inputs):
        """Propagate ``mean_cost`` backwards and update every layer's weights."""
        if not self._layers:
            raise ValueError("the network has no layers to train")

        cost = _column(mean_cost)
        for layer in reversed(self._layers[1:]):
            layer.calculate_gradients(cost)
            cost = layer.weights @ layer.output

        for prev, layer in reversed(list(zip(self._layers, self._layers[1:]))):
            layer.update_weights(prev.output)

        first = self._layers[0]
        delta = (first.output @ _column(inputs).T).T
        if delta.shape != first.weights.shape:
            raise ValueError(
                f"input update of shape {delta.shape} does not match weights {first.weights.shape}"
            )
        first.weights -= delta

    def __getitem__(self, index):
        return self._layers[index]

    def __len__(self):
        return len(self._layers)

    def __iter__(self):
        return iter(self._layers)

    def __repr__(self):
        return f"MultiLayerPerceptron({self._layers!r})"