"""A neural network made of layers of individual neurons."""

from __future__ import annotations

from os import PathLike
from pathlib import Path

from .neuron import Neuron


class Network:
    """Layers of :class:`Neuron` objects built from a topology of layer sizes.

    The first entry of the topology is the size of the input vector; every
    further entry creates a layer of that many neurons, each holding one
    weight per value of the previous layer.
    """

    def __init__(self, topology, rng=None):
        sizes = [int(size) for size in topology]
        if len(sizes) < 2:
            raise ValueError("a topology needs an input size and at least one layer")
        if any(size <= 0 for size in sizes):
            raise ValueError(f"layer sizes must be positive, got {sizes}")
        self.input_size = sizes[0]
        self._layers = [
            [Neuron(prev, rng=rng) for _ in range(cur)]
            for prev, cur in zip(sizes, sizes[1:])
        ]
        self.outputs: list[float] = []
        self.errors: list[float] = []

    def forward_propagation(self, inputs, target=()):
        """Feed ``inputs`` through every layer, store and return the final outputs."""
        values = [float(value) for value in inputs]
        if len(values) != self.input_size:
            raise ValueError("Invalid input size")
        for i_layer, layer in enumerate(self._layers):
            sums = self.weights_inputs_product(values, i_layer)
            activated = layer[0].activation(sums)
            for neuron, output in zip(layer, activated):
                neuron.output_val = output
            values = activated
        self.outputs = list(values)
        self.errors = [float(value) for value in target]
        return list(self.outputs)

    def weights_inputs_product(self, inputs, i_layer):
        """Inner product of every neuron's weights in layer ``i_layer`` with ``inputs``."""
        values = [float(value) for value in inputs]
        layer = self._layers[i_layer]
        for neuron in layer:
            if len(neuron.weights) != len(values):
                raise ValueError(
                    f"layer {i_layer} expects {len(neuron.weights)} inputs, got {len(values)}"
                )
        return [sum(w * x for w, x in zip(neuron.weights, values)) for neuron in layer]

    def read_output(self):
        """Return the output values of the neurons in the last layer."""
        return [neuron.output_val for neuron in self._layers[-1]]

    def train(self, file_names):
        """Read an input vector from each file and feed it forward.

        Accepts one path or an iterable of paths; returns the outputs of the last file.
        """
        if isinstance(file_names, (str, PathLike)):
            file_names = [file_names]
        outputs: list[float] = []
        for file_name in file_names:
            tokens = Path(file_name).read_text(encoding="utf-8").split()
            outputs = self.forward_propagation([float(token) for token in tokens])
        return outputs

    def __getitem__(self, index):
        return self._layers[index]

    def __len__(self):
        return len(self._layers)

    def __iter__(self):
        return iter(self._layers)

    def __repr__(self):
        sizes = [self.input_size] + [len(layer) for layer in self._layers]
        return f"Network({sizes})"