"""A three-dimensional convolutional layer working on lists of cubic channels."""

from __future__ import annotations

from typing import Callable

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .tensors import Channel, Kernel

ScalarActivation = Callable[[float], float]


def leaky_relu(value):
    """Leaky ReLU with slope 0.01 for negative values; works on scalars and arrays."""
    result = np.maximum(value, np.multiply(value, 0.01))
    if np.ndim(result) == 0:
        return float(result)
    return result


def _as_tensor(value):
    if isinstance(value, (Channel, Kernel)):
        return value.tensor
    array = np.asarray(value, dtype=float)
    if array.ndim != 3:
        raise ValueError(f"expected a 3-d tensor, got {array.ndim} dimensions")
    return array


class Conv3D:
    """Convolutional layer holding ``size`` filters of ``particles`` cubic kernels each.

    Every kernel starts as a copy of one randomly drawn kernel of edge length
    ``tensor_size``.  Each channel's contribution is activated on its own and
    the activated contributions are summed into one output channel per filter.
    """

    def __init__(self, tensor_size, particles, size, activation_function=None, rng=None):
        template = Kernel(tensor_size, rng)
        self.kernels = [[template.copy() for _ in range(particles)] for _ in range(size)]
        self.activation_function: ScalarActivation = (
            activation_function if activation_function is not None else leaky_relu
        )

    def _apply_activation(self, values):
        if self.activation_function is leaky_relu:
            return leaky_relu(values)
        return np.vectorize(self.activation_function, otypes=[float])(values)

    def create_sub_channel(self, channel, i_momentum, i_azimuth, i_inclination, s_fil, padding):
        """Cut the ``s_fil`` sized window centred on the given padded coordinates."""
        tensor = _as_tensor(channel)
        starts = [i_momentum - padding, i_azimuth - padding, i_inclination - padding]
        for start, extent in zip(starts, tensor.shape):
            if start < 0 or start + s_fil > extent:
                raise IndexError(
                    f"window of size {s_fil} at {start} exceeds tensor extent {extent}"
                )
        x, y, z = starts
        return tensor[x:x + s_fil, y:y + s_fil, z:z + s_fil].copy()

    def pad_channel(self, tensor, new_size, padding):
        """Return a ``new_size`` cube of zeros with ``tensor`` placed at offset ``padding``."""
        source = _as_tensor(tensor)
        if padding < 0 or any(padding + extent > new_size for extent in source.shape):
            raise ValueError(
                f"tensor of shape {source.shape} does not fit into size {new_size} "
                f"with padding {padding}"
            )
        result = np.zeros((new_size, new_size, new_size))
        x, y, z = source.shape
        result[padding:padding + x, padding:padding + y, padding:padding + z] = source
        return result

    def calculate_inner_product(self, channel, kernel):
        """Activated, size-normalised inner product of two equally shaped cubes."""
        left = _as_tensor(channel)
        right = _as_tensor(kernel)
        if left.shape != right.shape:
            raise ValueError("Unmatching sizes on kernel and channel part")
        accumulated = float(np.sum(left * right))
        return float(self.activation_function(accumulated / left.shape[0] ** 3))

    def feed_forward(self, channels):
        """Convolve the input channels with every filter; one channel per filter comes out."""
        tensors = [_as_tensor(channel) for channel in channels]
        if not tensors:
            raise ValueError("feed_forward needs at least one channel")
        particles = len(self.kernels[0]) if self.kernels else 0
        if len(tensors) < particles:
            raise ValueError(
                f"layer expects {particles} channels, got {len(tensors)}"
            )
        shape = tensors[0].shape
        if any(tensor.shape != shape for tensor in tensors):
            raise ValueError("all channels must share the same shape")
        if not self.kernels:
            return []

        n = shape[0]
        s_fil = self.kernels[0][0].size
        padding = s_fil // 2
        new_size = n + 2 * padding

        windows = []
        for tensor in tensors[:particles]:
            padded = self.pad_channel(tensor, new_size, padding)
            view = sliding_window_view(padded, (s_fil, s_fil, s_fil))[:n, :n, :n]
            windows.append(view.reshape(n ** 3, s_fil ** 3))
        stacked = np.stack(windows)

        weights = np.stack(
            [np.stack([kernel.tensor.ravel() for kernel in filt]) for filt in self.kernels]
        )
        products = stacked @ weights.transpose(1, 2, 0)
        activated = self._apply_activation(products / s_fil ** 3)
        summed = activated.sum(axis=0)

        return [
            Channel.from_tensor(summed[:, i_filter].reshape(n, n, n))
            for i_filter in range(len(self.kernels))
        ]

    def __repr__(self):
        size = self.kernels[0][0].size if self.kernels and self.kernels[0] else 0
        particles = len(self.kernels[0]) if self.kernels else 0
        return f"Conv3D({size}, {particles}, {len(self.kernels)})"