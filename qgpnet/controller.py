"""Training controller that feeds event files through the perceptron and reports progress."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import numpy as np

from .mlp import MultiLayerPerceptron

logger = logging.getLogger(__name__)

DEFAULT_TOPOLOGY = (224000, 2, 1)
EVENTS_PER_LABEL = 5000
MAX_EVENTS = 10000
DEFAULT_EPOCH_NO = 100
EPOCH_SIZE = 100
BATCH_SIZE = 10


class Signal:
    """A list of callables that are all invoked with the arguments given to :meth:`emit`."""

    def __init__(self):
        self._slots = []

    def connect(self, slot):
        """Register a callable."""
        self._slots.append(slot)

    def emit(self, *args):
        """Call every registered callable with ``args``."""
        for slot in list(self._slots):
            slot(*args)


class Controller:
    """Owns the qgp identifier network and the pools of event files used to train it.

    ``complete_list`` holds two lists of event paths: label 0 (qgp) and label 1 (nqgp).
    ``epoch_trained`` is emitted with the number of each finished epoch and
    ``new_data_point`` with ``(plot_name, x, y)`` for the "time" and "loss" series.
    """

    def __init__(self, topology=None, rng=None):
        self.rng = rng if rng is not None else np.random.default_rng(4)
        self._topology = [int(size) for size in (topology or DEFAULT_TOPOLOGY)]
        self.qgp_identifier = MultiLayerPerceptron(self._topology, rng=self.rng)
        self.percentage_test = 0
        self.epoch_no = DEFAULT_EPOCH_NO
        self.training_data_path = ""
        self.complete_list = [[], []]
        self.epoch_trained = Signal()
        self.new_data_point = Signal()

    @property
    def input_size(self):
        """Number of values read from one event file."""
        return self._topology[0]

    def import_file(self, file_name):
        """Read ``input_size`` whitespace separated integers into a column vector."""
        with open(file_name, encoding="utf-8") as handle:
            tokens = handle.read().split()
        needed = self.input_size
        if len(tokens) < needed:
            raise ValueError(f"{file_name}: expected {needed} values, found {len(tokens)}")
        try:
            values = [int(token) for token in tokens[:needed]]
        except ValueError as error:
            raise ValueError(f"{file_name}: event files must hold integers") from error
        return np.array(values, dtype=float).reshape(-1, 1)

    def batch_normalization(self, s_batch, copied_list):
        """Feed ``s_batch`` randomly labelled events forward, then back propagate once.

        Returns the total absolute difference between labels and network outputs.
        """
        if s_batch <= 0:
            raise ValueError(f"batch size must be positive, got {s_batch}")
        mean_inputs = np.zeros((self.input_size, 1))
        total_cost = 0.0
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

            inputs = self.import_file(event)
            mean_inputs += inputs
            output = self.qgp_identifier.forward_propagation(inputs)
            total_cost += abs(label - float(output[0, 0]))

        mean_inputs /= s_batch
        self.qgp_identifier.back_propagation(np.array([[total_cost]]), mean_inputs)
        return total_cost

    def run_epoch(self, n_epochs, s_epoch, s_batch):
        """Train ``n_epochs`` epochs, emitting progress, time and loss after each one."""
        if s_epoch > MAX_EVENTS:
            raise ValueError(f"Only {MAX_EVENTS} events available")
        half = s_epoch // 2
        # Files before this index are held back as test data.
        first_training_index = (self.percentage_test // 100) * EVENTS_PER_LABEL
        previous = time.time()
        for i_epoch in range(n_epochs):
            copied_list = [pool[first_training_index:half] for pool in self.complete_list]
            loss = self.batch_normalization(s_batch, copied_list)

            self.epoch_trained.emit(i_epoch + 1)
            now = time.time()
            self.new_data_point.emit("time", float(i_epoch + 1), now - previous)
            self.new_data_point.emit("loss", float(i_epoch + 1), loss)
            previous = now
            logger.debug("epoch %d finished at %f", i_epoch, now)

    def set_training_data_directory(self, path):
        """Set the directory holding the ``qgp`` and ``nqgp`` subdirectories."""
        self.training_data_path = str(path)

    def parse_directory(self, input_dir):
        """Return the entries of a directory, sorted by name."""
        return sorted(Path(input_dir).iterdir())

    def set_topology(self, topology):
        """Replace the network with a fresh one of the given layer sizes."""
        sizes = [int(size) for size in topology]
        logger.info("new topology %s", sizes)
        self.qgp_identifier = MultiLayerPerceptron(sizes, rng=self.rng)
        self._topology = sizes

    def set_split(self, percentage_test):
        """Set the percentage of files per label kept back for testing."""
        if percentage_test < 0:
            raise ValueError(f"percentage must not be negative, got {percentage_test}")
        self.percentage_test = int(percentage_test)

    def set_epoch_no(self, epoch_no):
        """Set the number of epochs run by :meth:`start_training`."""
        self.epoch_no = int(epoch_no)

    def start_training(self):
        """Load the event lists and train; returns 0 on success and 1 on failure."""
        logger.info("starting training")
        try:
            self.complete_list = [
                self.parse_directory(self.training_data_path + "/qgp"),
                self.parse_directory(self.training_data_path + "/nqgp"),
            ]
            self.run_epoch(self.epoch_no, EPOCH_SIZE, BATCH_SIZE)
        except Exception as error:  # the training thread reports every failure as a code
            logger.error("%s", error)
            return 1
        return 0