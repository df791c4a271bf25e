"""Dense and 3D convolutional neural networks for classifying quark-gluon plasma events."""

__version__ = "0.1.0"