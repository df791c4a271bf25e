"""Command line front end that trains the network and reports the recorded graphs."""

from __future__ import annotations

import argparse
import enum
import math
from dataclasses import dataclass
from itertools import accumulate

from .controller import DEFAULT_EPOCH_NO, Controller
from .datastorage import DataStorage

INPUT_SIZE = 224000
DEFAULT_X_MAX = 5.0
DEFAULT_Y_MAX = 2.0

_TOPOLOGIES = {
    0: (INPUT_SIZE, 2, 1),
    1: (INPUT_SIZE, 64, 2, 1),
    2: (INPUT_SIZE, 64, 64, 2, 1),
}


class PlotKind(enum.IntEnum):
    """What a graph shows."""

    TIME = 0
    LOSS = 1
    LOSS_ACCUMULATED = 2


_SETTINGS = {
    PlotKind.TIME: ("time", "epoch", "time [s]"),
    PlotKind.LOSS: ("loss", "epoch", "loss"),
    PlotKind.LOSS_ACCUMULATED: ("loss", "epoch", "accumulated loss"),
}


@dataclass(frozen=True)
class PlotView:
    """A graph ready to be shown: labels, points and axis ranges."""

    kind: PlotKind
    x_label: str
    y_label: str
    xs: tuple
    ys: tuple
    x_range: tuple
    y_range: tuple

    def format(self):
        """Render the graph as a small text table."""
        lines = [
            f"{self.kind.name.lower()}: {self.x_label} in [{self.x_range[0]:g}, {self.x_range[1]:g}], "
            f"{self.y_label} in [{self.y_range[0]:g}, {self.y_range[1]:g}]"
        ]
        lines.extend(f"  {x:g}\t{y:g}" for x, y in zip(self.xs, self.ys))
        return "\n".join(lines)


def topology_for_mode(mode):
    """Layer sizes for a network with one, two or three hidden layers (modes 0, 1, 2)."""
    try:
        return list(_TOPOLOGIES[int(mode)])
    except KeyError:
        raise ValueError(f"unknown network mode {mode}") from None


def plot_series(storage, kind):
    """Build the view of one graph from the data recorded in ``storage``."""
    kind = PlotKind(kind)
    series_name, x_label, y_label = _SETTINGS[kind]
    xs, ys = storage.series(series_name)
    if kind is PlotKind.LOSS_ACCUMULATED:
        # each point holds the sum of the losses of all earlier epochs
        ys = list(accumulate(ys, initial=0.0))[: len(xs)]

    x_max, y_max = DEFAULT_X_MAX, DEFAULT_Y_MAX
    if xs and ys:
        top_x = math.ceil(xs[-1])
        top_y = math.ceil(max(ys))
        if x_max <= top_x:
            x_max = top_x + 1
        if y_max < top_y:
            y_max = top_y + 1
    return PlotView(
        kind=kind,
        x_label=x_label,
        y_label=y_label,
        xs=tuple(xs),
        ys=tuple(ys),
        x_range=(0.0, float(x_max)),
        y_range=(0.0, float(y_max)),
    )


def main(argv=None):
    """Train on a data directory and print the time and loss graphs."""
    parser = argparse.ArgumentParser(description="Train the qgp identifier.")
    parser.add_argument("data_dir", help="directory holding the qgp and nqgp subdirectories")
    parser.add_argument("--epochs", type=int, default=DEFAULT_EPOCH_NO)
    parser.add_argument("--mode", type=int, choices=sorted(_TOPOLOGIES), default=0,
                        help="0, 1 or 2 for one, two or three hidden layers")
    parser.add_argument("--split", type=int, default=0, help="percentage of test data")
    args = parser.parse_args(argv)

    storage = DataStorage()
    controller = Controller(topology_for_mode(args.mode))
    controller.new_data_point.connect(storage.accept_new_datapoint)
    controller.epoch_trained.connect(lambda epoch: print(f"epoch {epoch}/{args.epochs}"))

    controller.set_training_data_directory(args.data_dir)
    controller.set_split(args.split)
    controller.set_epoch_no(args.epochs)
    code = controller.start_training()

    for kind in PlotKind:
        print(plot_series(storage, kind).format())
    return code