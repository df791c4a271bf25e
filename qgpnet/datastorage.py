"""Storage for the series of data points shown as training graphs."""

from __future__ import annotations


class DataStorage:
    """Keeps named series of (x, y) points and notifies listeners on every change.

    ``data`` maps a plot name such as ``"time"`` or ``"loss"`` to a pair of
    lists: the x values and the y values.
    """

    def __init__(self):
        self.data: dict[str, tuple[list[float], list[float]]] = {}
        self._listeners = []

    def accept_new_datapoint(self, plot_name, xvalue, yvalue):
        """Append one point to the named series and notify every listener."""
        xs, ys = self.data.setdefault(plot_name, ([], []))
        xs.append(float(xvalue))
        ys.append(float(yvalue))
        for callback in list(self._listeners):
            callback()

    def connect(self, callback):
        """Register a callable taking no arguments, invoked whenever data changes."""
        self._listeners.append(callback)

    def series(self, plot_name):
        """Return copies of the x and y values of a series; empty lists if it is unknown."""
        xs, ys = self.data.get(plot_name, ([], []))
        return list(xs), list(ys)

    def __repr__(self):
        sizes = {name: len(xs) for name, (xs, _) in self.data.items()}
        return f"DataStorage({sizes})"