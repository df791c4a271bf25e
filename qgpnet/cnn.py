"""Convolutional network pipeline that classifies event files into qgp and non-qgp."""

from __future__ import annotations

import argparse
from pathlib import Path

import numpy as np

from .conv3d import Conv3D
from .maxpool3d import MaxPool3D
from .mlp import MultiLayerPerceptron
from .tensors import Channel

EVENT_PARTICLES = 28
EVENT_GRID = 20
MAX_EVENTS = 10000
DEFAULT_DATA_DIRECTORY = "../materials/dataset_new"


def flatten_channels(channels):
    """Concatenate all channel values, in index order, into one column vector."""
    if not channels:
        return np.zeros((0, 1))
    values = np.concatenate([np.asarray(channel.tensor, dtype=float).ravel() for channel in channels])
    return values.reshape(-1, 1)


def import_event_file(path):
    """Read an event file of whitespace separated numbers into 28 channels of 20^3 values."""
    with open(path, encoding="utf-8") as handle:
        tokens = handle.read().split()
    needed = EVENT_PARTICLES * EVENT_GRID ** 3
    if len(tokens) < needed:
        raise ValueError(f"{path}: expected {needed} values, found {len(tokens)}")
    values = np.array(tokens[:needed], dtype=float).reshape(
        EVENT_PARTICLES, EVENT_GRID, EVENT_GRID, EVENT_GRID
    )
    return [Channel.from_tensor(particle) for particle in values]


def list_directory(path):
    """Return the entries of a directory, sorted by name."""
    return sorted(Path(path).iterdir())


class CnnTrainer:
    """Convolution, pooling and perceptron stages together with the pools of event files.

    ``complete_list`` holds two lists of event paths: label 0 (qgp) and label 1 (nqgp).
    """

    def __init__(self, complete_list=None, rng=None):
        self.rng = rng if rng is not None else np.random.default_rng(3)
        self.qgp_identifier = MultiLayerPerceptron([8000, 2, 1], rng=self.rng)
        self.layer28_32 = Conv3D(3, 28, 32, rng=self.rng)
        self.layer32_64 = Conv3D(3, 32, 64, rng=self.rng)
        self.layer20_10 = MaxPool3D()
        self.layer10_5 = MaxPool3D()
        if complete_list is None:
            self.complete_list = [[], []]
        else:
            pools = [list(pool) for pool in complete_list]
            if len(pools) != 2:
                raise ValueError("complete_list needs exactly two lists of events")
            self.complete_list = pools

    def predict(self, channels):
        """Run the whole pipeline on one event and return the network output."""
        features = self.layer10_5.feed_forward(
            self.layer32_64.feed_forward(
                self.layer20_10.feed_forward(self.layer28_32.feed_forward(channels))
            )
        )
        return self.qgp_identifier.forward_propagation(flatten_channels(features))

    def batch(self, s_batch, copied_list):
        """Feed ``s_batch`` randomly labelled events forward; return (output, label) pairs."""
        results = []
        for _ in range(s_batch):
            label = int(self.rng.integers(0, 2))
            candidates = copied_list[label]
            if not candidates:
                raise IndexError(f"no events left for label {label}")
            event = candidates[-1]
            pool = self.complete_list[label]
            if not pool:
                raise IndexError(f"event pool for label {label} is empty")
            pool.pop()
            output = self.predict(import_event_file(event))
            results.append((output, label))
        return results

    def run_epoch(self, n_epochs, s_epoch, s_batch):
        """Run ``n_epochs`` epochs drawing from the first ``s_epoch`` // 2 events of each label."""
        if s_epoch > MAX_EVENTS:
            raise ValueError(f"Only {MAX_EVENTS} events available")
        half = s_epoch // 2
        for _ in range(n_epochs):
            copied_list = [pool[:half] for pool in self.complete_list]
            self.batch(s_batch, copied_list)


def main(argv=None):
    """Train on the qgp and nqgp subdirectories of a data directory."""
    parser = argparse.ArgumentParser(description="Run the convolutional qgp classifier.")
    parser.add_argument("data_dir", nargs="?", default=DEFAULT_DATA_DIRECTORY)
    args = parser.parse_args(argv)
    try:
        base = Path(args.data_dir)
        trainer = CnnTrainer(
            [list_directory(base / "qgp"), list_directory(base / "nqgp")]
        )
        trainer.run_epoch(3, 3, 3)
    except Exception as error:  # report any failure the way the command line expects
        print(error)
        return 1
    return 0