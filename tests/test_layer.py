"""Tests for DenseLayer."""

import pytest

from ffnet.activations import leaky_relu, relu, tanh
from ffnet.errors import InvalidArgument, ShapeMismatch
from ffnet.layer import DenseLayer
from ffnet.matrix import Vector


def test_starts_at_zero():
    layer = DenseLayer(3, tanh())
    assert layer.size() == 3
    assert len(layer) == 3
    assert layer.get_activated_vector().tolist() == [0.0, 0.0, 0.0]
    assert layer.get_unactivated_vector().tolist() == [0.0, 0.0, 0.0]


def test_activation_by_name():
    assert DenseLayer(2, 'relu').activation == relu()


@pytest.mark.parametrize("count", [0, -2, 2.5, True])
def test_bad_neuron_count(count):
    with pytest.raises(InvalidArgument):
        DenseLayer(count, tanh())


def test_none_activation():
    with pytest.raises(InvalidArgument):
        DenseLayer(2, None)
    layer = DenseLayer(2, tanh())
    with pytest.raises(InvalidArgument):
        layer.set_activation_function(None)
    assert layer.activation == tanh()


def test_setters_store_copies():
    layer = DenseLayer(2, tanh())
    values = Vector([1.0, 2.0])
    layer.set_activated_values(values)
    values[0] = 9.0
    assert layer.get_activated_value(0) == 1.0

    returned = layer.get_activated_vector()
    returned[1] = 9.0
    assert layer.get_activated_value(1) == 2.0


def test_setters_accept_sequences():
    layer = DenseLayer(2, tanh())
    layer.set_unactivated_values([0.5, -0.5])
    assert layer.get_unactivated_value(1) == -0.5


def test_setter_shape_mismatch_leaves_state():
    layer = DenseLayer(2, tanh())
    layer.set_activated_values([1.0, 2.0])
    with pytest.raises(ShapeMismatch):
        layer.set_activated_values([1.0, 2.0, 3.0])
    with pytest.raises(ShapeMismatch):
        layer.set_unactivated_values([1.0])
    assert layer.get_activated_vector().tolist() == [1.0, 2.0]


def test_clear():
    layer = DenseLayer(2, tanh())
    layer.set_activated_values([1.0, 2.0])
    layer.set_unactivated_values([3.0, 4.0])
    layer.clear()
    assert layer.get_activated_vector().sum() == 0.0
    assert layer.get_unactivated_vector().sum() == 0.0


def test_copy_is_independent():
    layer = DenseLayer(2, leaky_relu(0.2))
    layer.set_activated_values([1.0, 1.0])
    copy = layer.copy()
    copy.set_activated_values([5.0, 5.0])
    assert layer.get_activated_value(0) == 1.0
    assert copy.activation == layer.activation


class TestFromSpec:
    def test_two_tuple(self):
        layer = DenseLayer.from_spec((4, 'sigmoid'))
        assert layer.size() == 4
        assert layer.activation.name == 'sigmoid'

    def test_three_tuple_with_params(self):
        layer = DenseLayer.from_spec((3, 'leaky_relu', {'alpha': 0.3}))
        assert layer.activation.alpha == 0.3

    def test_layer_passthrough_is_copied(self):
        original = DenseLayer(2, tanh())
        built = DenseLayer.from_spec(original)
        assert built is not original
        assert built.size() == 2

    @pytest.mark.parametrize("spec", [(3,), "tanh", (3, None), (3, 'tanh', {}, 1)])
    def test_malformed(self, spec):
        with pytest.raises(InvalidArgument):
            DenseLayer.from_spec(spec)
