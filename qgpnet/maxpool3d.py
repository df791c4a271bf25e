"""Max pooling over 2x2x2 blocks of cubic channels."""

from __future__ import annotations

import numpy as np

from .tensors import Channel, Kernel


def _as_tensor(value):
    if isinstance(value, (Channel, Kernel)):
        return value.tensor
    array = np.asarray(value, dtype=float)
    if array.ndim != 3:
        raise ValueError(f"expected a 3-d tensor, got {array.ndim} dimensions")
    return array


class MaxPool3D:
    """Halves every channel by keeping the maximum of each 2x2x2 block."""

    def find_max(self, channel, i_momentum, i_azimuth, i_inclination):
        """Maximum of the 2x2x2 block whose first corner is at the given coordinates."""
        tensor = _as_tensor(channel)
        corner = (i_momentum, i_azimuth, i_inclination)
        for start, extent in zip(corner, tensor.shape):
            if start < 0 or start + 2 > extent:
                raise IndexError(f"block at {start} exceeds tensor extent {extent}")
        x, y, z = corner
        return float(tensor[x:x + 2, y:y + 2, z:z + 2].max())

    def feed_forward(self, channels):
        """Pool every channel; each edge shrinks to half its length, rounded down."""
        results = []
        for channel in channels:
            tensor = _as_tensor(channel)
            half = tuple(extent // 2 for extent in tensor.shape)
            a, b, c = half
            trimmed = tensor[:2 * a, :2 * b, :2 * c]
            pooled = trimmed.reshape(a, 2, b, 2, c, 2).max(axis=(1, 3, 5))
            results.append(Channel.from_tensor(pooled))
        return results

    def __repr__(self):
        return "MaxPool3D()"