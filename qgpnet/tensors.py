"""Cubic tensors of random values used as convolution channels and filters."""

from __future__ import annotations

import numpy as np

_CHANNEL_RNG = np.random.default_rng(0)
_KERNEL_RNG = np.random.default_rng(1)


def random_cube(size, rng):
    """Return a ``size`` x ``size`` x ``size`` array drawn uniformly from [-1, 1)."""
    size = int(size)
    if size < 0:
        raise ValueError(f"cube size must not be negative, got {size}")
    return rng.uniform(-1.0, 1.0, size=(size, size, size))


class _Cube:
    """A square three-dimensional tensor, filled with random values on creation."""

    _default_rng: np.random.Generator

    def __init__(self, size, rng=None):
        self.tensor = random_cube(size, rng if rng is not None else self._default_rng)

    @classmethod
    def from_tensor(cls, tensor):
        """Wrap an existing cubic array instead of drawing random values."""
        array = np.array(tensor, dtype=float)
        if array.ndim != 3 or len(set(array.shape)) != 1:
            raise ValueError(f"expected a cubic 3-d tensor, got shape {array.shape}")
        cube = cls.__new__(cls)
        cube.tensor = array
        return cube

    @property
    def size(self):
        """Edge length of the cube."""
        return self.tensor.shape[0]

    def copy(self):
        """Return an independent copy."""
        return type(self).from_tensor(self.tensor)

    def __repr__(self):
        return f"{type(self).__name__}(size={self.size})"


class Channel(_Cube):
    """A 3-d square tensor holding the particle representation of one input channel."""

    _default_rng = _CHANNEL_RNG


class Kernel(_Cube):
    """A 3-d square filter tensor of a convolutional layer."""

    _default_rng = _KERNEL_RNG