import math

import numpy as np
import pytest

from qgpnet.neuron import Neuron, vector_softmax


def test_softmax_sums_to_one_and_keeps_order():
    result = vector_softmax([1.0, 3.0, 2.0])
    assert math.isclose(sum(result), 1.0)
    assert result[1] > result[2] > result[0]


def test_softmax_of_equal_values_is_uniform():
    result = vector_softmax([7.0, 7.0, 7.0, 7.0])
    assert result == pytest.approx([0.25] * 4)


def test_softmax_handles_large_values():
    result = vector_softmax([1000.0, 1000.0])
    assert result == pytest.approx([0.5, 0.5])


def test_softmax_of_empty_is_empty():
    assert vector_softmax([]) == []


def test_weights_are_identical_and_in_unit_interval():
    neuron = Neuron(5)
    assert len(neuron.weights) == 5
    assert len(set(neuron.weights)) == 1
    assert 0.0 <= neuron.weights[0] < 1.0


def test_default_neurons_start_with_same_weights():
    first = Neuron(3)
    second = Neuron(3)
    assert len(first.weights) == 3
    assert 0.0 <= first.weights[0] < 1.0
    assert list(first.weights) == [first.weights[0]] * 3
    assert list(second.weights) == list(first.weights)


def test_explicit_generator_is_used():
    first = Neuron(2, rng=np.random.default_rng(11))
    second = Neuron(2, rng=np.random.default_rng(11))
    assert first.weights == second.weights


def test_getitem_and_setitem():
    neuron = Neuron(3)
    neuron[1] = 4.5
    assert neuron[1] == 4.5
    assert neuron.weights[1] == 4.5


def test_negative_size_is_rejected():
    with pytest.raises(ValueError):
        Neuron(-1)


def test_default_activation_is_softmax():
    neuron = Neuron(2)
    values = [0.5, -1.0, 2.0]
    assert neuron.activation(values) == pytest.approx(vector_softmax(values))


def test_default_derivative_bounds():
    neuron = Neuron(2)
    derivative = neuron.derivative([0.1, 0.2, 0.3])
    assert len(derivative) == 3
    assert all(0.0 < value <= 0.25 for value in derivative)


def test_derivative_follows_custom_activation():
    neuron = Neuron(1, activation_function=lambda values: [0.5 for _ in values])
    assert neuron.derivative([3.0, 4.0]) == pytest.approx([0.25, 0.25])


def test_custom_derivative_is_used():
    neuron = Neuron(1, derivative_function=lambda values: [v * 2 for v in values])
    assert neuron.derivative([1.0, 2.0]) == [2.0, 4.0]