# qgpnet

Small neural networks for classifying heavy-ion collision events as
quark-gluon plasma (qgp) or non-qgp (nqgp). Everything is plain Python on
top of NumPy.

## Modules

- `qgpnet.tensors` – `Channel` and `Kernel`, cubic 3D tensors filled with
  uniform random values from [-1, 1); `random_cube(size, rng)` builds such
  an array. `Channel.from_tensor` / `Kernel.from_tensor` wrap an existing
  cubic array.
- `qgpnet.layer` – `Layer`, one fully connected layer with `weights`,
  `sum_z` and `output`, plus `feed_forward`, `calculate_gradients` and
  `update_weights`. `softmax` and `softmax_derivative` are the default
  activation and its derivative.
- `qgpnet.mlp` – `MultiLayerPerceptron`, a stack of `Layer`s built from a
  topology such as `[224000, 64, 2, 1]`, with `forward_propagation` and
  `back_propagation`. It supports `len()`, indexing and iteration.
- `qgpnet.conv3d` – `Conv3D`, a 3D convolutional layer with zero padding;
  the activation is `leaky_relu` unless another scalar function is given.
  Each filter produces one output channel of the input's size.
- `qgpnet.maxpool3d` – `MaxPool3D`, 2×2×2 max pooling that halves every
  channel edge (rounded down).
- `qgpnet.cnn` – `CnnTrainer`, which chains two convolutions, two poolings
  and a `[8000, 2, 1]` perceptron (`predict`, `batch`, `run_epoch`), plus
  `flatten_channels`, `import_event_file` (28 channels of 20×20×20 values)
  and `list_directory`.
- `qgpnet.controller` – `Controller`, which reads event files of integers
  from a training directory, runs epochs of batched training with
  `run_epoch` / `start_training` and emits progress through two signals:
  `epoch_trained` (epoch number) and `new_data_point`
  (`plot_name, x, y` for the `"time"` and `"loss"` series).
- `qgpnet.datastorage` – `DataStorage`, which collects named (x, y) series
  and calls every connected callback whenever a point arrives.
- `qgpnet.app` – ties a `Controller` to a `DataStorage`:
  `topology_for_mode` maps mode 0, 1 or 2 to a network with one, two or
  three hidden layers, and `plot_series` turns stored data into a
  `PlotView` (`PlotKind.TIME`, `LOSS` or `LOSS_ACCUMULATED`) with labels,
  points and axis ranges; `PlotView.format()` renders it as text.
- `qgpnet.neuron` and `qgpnet.network` – a per-neuron formulation of a
  dense network: `Neuron`, `vector_softmax` and `Network`, whose `train`
  reads whitespace separated input vectors from files and feeds them
  forward.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Using the perceptron

Inputs and outputs are column vectors (NumPy arrays of shape `(n, 1)`),
where `n` is the first entry of the topology.

```python
import numpy as np
from qgpnet.mlp import MultiLayerPerceptron

net = MultiLayerPerceptron([4, 3, 1])
output = net.forward_propagation(np.ones((4, 1)))

print(len(net))              # number of layers
print(net[0].weights.shape)  # (4, 3)
```

## Collecting training data points

```python
from qgpnet.controller import Controller
from qgpnet.datastorage import DataStorage

storage = DataStorage()
storage.connect(lambda: print("data changed"))

controller = Controller([10, 2, 1])
controller.new_data_point.connect(storage.accept_new_datapoint)

storage.accept_new_datapoint("loss", 1, 0.75)
print(storage.series("loss"))  # ([1.0], [0.75])
```

## Commands

A training data directory holds a `qgp` and an `nqgp` subdirectory of
event files.

```
qgpnet-cnn [DATA_DIR]
```

Runs a short pass of the convolutional pipeline (3 epochs, epoch size 3,
batch size 3) over the event files. Prints the error and exits with 1 on
failure.

```
qgpnet-app DATA_DIR [--epochs N] [--mode {0,1,2}] [--split PERCENT]
```

Trains the perceptron with the `Controller`, prints each finished epoch,
then prints the time, loss and accumulated loss graphs as text tables.
Exits with 0 on success and 1 if training failed.

## What the package does not do

- There is no graphical window: `qgpnet-app` prints its graphs as text.
- `CnnTrainer` only feeds events forward; it does not update any weights.
- `Network` only feeds inputs forward; it has no back propagation.
- Trained networks are not saved to or loaded from disk.