"""Tests for NeuralNetwork construction, forward and backward passes."""

import math

import pytest

from ffnet import NeuralNetwork, SeedStrategy
from ffnet.activations import tanh
from ffnet.errors import InvalidArgument, OutOfRange, ShapeMismatch
from ffnet.layer import DenseLayer
from ffnet.matrix import Matrix, Vector


def linear_pair():
    """1 → 1 linear network with W = [[2]], b = [1]."""
    network = NeuralNetwork(0, [(1, 'linear'), (1, 'linear')])
    network.update_parameters([Matrix.from_rows([[2.0]])], [Vector([1.0])])
    return network


def loss(network, feature, label):
    return network.evaluate([feature], [label])[0]


class TestConstruction:
    def test_topology(self, xor_network):
        assert xor_network.size() == 4
        assert len(xor_network) == 4
        assert xor_network.input_size() == 2
        assert xor_network.output_size() == 1
        shapes = [c.shape for c in xor_network.get_connections()]
        assert shapes == [(2, 8), (8, 8), (8, 1)]

    def test_accepts_dense_layers(self):
        network = NeuralNetwork(1, [DenseLayer(2, tanh()), DenseLayer(1, 'sigmoid')])
        assert network.output_size() == 1

    def test_layers_are_copied(self):
        layer = DenseLayer(2, 'linear')
        network = NeuralNetwork(1, [layer, (1, 'sigmoid')])
        network.set_input([1.0, 2.0])
        assert layer.get_activated_vector().tolist() == [0.0, 0.0]

    @pytest.mark.parametrize("layers", [[], [(2, 'linear')]])
    def test_needs_two_layers(self, layers):
        with pytest.raises(InvalidArgument):
            NeuralNetwork(42, layers)

    def test_null_activation(self):
        with pytest.raises(InvalidArgument):
            NeuralNetwork(42, [(2, 'linear'), (1, None)])

    def test_bad_seed(self):
        with pytest.raises(InvalidArgument):
            NeuralNetwork('42', [(2, 'linear'), (1, 'sigmoid')])

    def test_bad_seed_strategy(self):
        with pytest.raises(InvalidArgument):
            NeuralNetwork(42, [(2, 'linear'), (1, 'sigmoid')], seed_strategy='random')

    def test_same_seed_same_weights(self, xor_network):
        other = NeuralNetwork(42, [(2, 'linear'), (8, 'tanh'), (8, 'tanh'), (1, 'sigmoid')])
        assert other.get_weights() == xor_network.get_weights()

    def test_shared_seed_strategy(self):
        layers = [(4, 'linear'), (4, 'tanh'), (4, 'tanh')]
        network = NeuralNetwork(5, layers, seed_strategy=SeedStrategy.SHARED)
        first, second = network.get_weights()
        assert first == second == Matrix.xavier(4, 4, 5)

    def test_per_connection_seed_strategy(self):
        layers = [(4, 'linear'), (4, 'tanh'), (4, 'relu')]
        network = NeuralNetwork(5, layers, seed_strategy='per_connection')
        first, second = network.get_weights()
        assert first == Matrix.xavier(4, 4, 5)
        assert second == Matrix.kaiming(4, 4, 5 ^ 1)

    def test_biases_start_at_zero(self, xor_network):
        assert all(b.sum() == 0.0 for b in xor_network.get_biases())

    def test_accessor_bounds(self, xor_network):
        with pytest.raises(OutOfRange):
            xor_network.get_layer(4)
        with pytest.raises(OutOfRange):
            xor_network.get_connection(3)
        assert xor_network.get_connection(2).out_index == 3


class TestForward:
    def test_set_input(self, xor_network):
        xor_network.set_input([1.0, 0.0])
        assert xor_network.get_neuron_value(0, 0) == 1.0

    def test_set_input_shape_mismatch_leaves_state(self, xor_network):
        xor_network.set_input([0.25, 0.75])
        with pytest.raises(ShapeMismatch):
            xor_network.set_input([1.0, 2.0, 3.0])
        assert xor_network.get_layer(0).get_activated_vector().tolist() == [0.25, 0.75]

    def test_hand_computed(self):
        network = linear_pair()
        network.set_input([3.0])
        network.forward_propagate()
        assert network.output().tolist() == [7.0]

    def test_deterministic(self, xor_network):
        other = NeuralNetwork(42, [(2, 'linear'), (8, 'tanh'), (8, 'tanh'), (1, 'sigmoid')])
        for network in (xor_network, other):
            network.set_input([0.3, -0.7])
            network.forward_propagate()
        assert xor_network.output() == other.output()

    def test_input_activation_is_not_applied(self):
        network = NeuralNetwork(3, [(2, 'sigmoid'), (1, 'linear')])
        network.set_input([5.0, -5.0])
        network.forward_propagate()
        assert network.get_layer(0).get_activated_vector().tolist() == [5.0, -5.0]


class TestBackward:
    def test_hand_computed_deltas(self):
        network = linear_pair()
        network.set_input([3.0])
        network.forward_propagate()
        gradients = network.back_propagate([10.0], 0.1)

        # residual 3, δ = -2 * 3 = -6
        assert gradients.squared_residual == pytest.approx(9.0)
        assert gradients.weight_deltas[0][0, 0] == pytest.approx(3.0 * -6.0 * 0.1)
        assert gradients.bias_deltas[0][0] == pytest.approx(-0.6)

    def test_delta_shapes_follow_layer_order(self, xor_network):
        xor_network.set_input([1.0, 0.0])
        xor_network.forward_propagate()
        weight_deltas, bias_deltas, residual = xor_network.back_propagate([1.0], 0.05)
        assert [d.shape for d in weight_deltas] == [(2, 8), (8, 8), (8, 1)]
        assert [len(d) for d in bias_deltas] == [8, 8, 1]
        assert residual >= 0.0

    def test_expected_shape_mismatch(self, xor_network):
        with pytest.raises(ShapeMismatch):
            xor_network.back_propagate([1.0, 0.0], 0.1)

    def test_error_sensitivity_hand_computed(self):
        network = NeuralNetwork(0, [(2, 'linear'), (2, 'tanh'), (1, 'linear')])
        network.update_parameters(
            [Matrix.from_rows([[0.5, -1.0], [0.25, 2.0]]), Matrix.from_rows([[3.0], [-2.0]])],
            [Vector([0.1, 0.2]), Vector([0.0])])
        network.set_input([1.0, 2.0])
        network.forward_propagate()

        z = [1.0 * 0.5 + 2.0 * 0.25 + 0.1, 1.0 * -1.0 + 2.0 * 2.0 + 0.2]
        sensitivity = network.get_layer_error_sensitivity(1, [0.5])
        expected = [(1 - math.tanh(z[0]) ** 2) * 0.5 * 3.0,
                    (1 - math.tanh(z[1]) ** 2) * 0.5 * -2.0]
        assert sensitivity.tolist() == pytest.approx(expected)

    def test_error_sensitivity_bounds(self, xor_network):
        with pytest.raises(OutOfRange):
            xor_network.get_layer_error_sensitivity(3, [1.0])
        with pytest.raises(OutOfRange):
            xor_network.get_layer_error_sensitivity(-1, [1.0] * 8)
        with pytest.raises(ShapeMismatch):
            xor_network.get_layer_error_sensitivity(2, [1.0, 2.0])

    @pytest.mark.parametrize("network_fixture", ["small_network", "xor_network"])
    def test_gradient_check(self, network_fixture, request):
        network = request.getfixturevalue(network_fixture)
        feature = [0.4, -0.3, 0.9][:network.input_size()]
        label = [0.2, 0.8][:network.output_size()]

        network.set_input(feature)
        network.forward_propagate()
        analytic = network.back_propagate(label, 1.0)

        eps = 1e-5
        for l, connection in enumerate(network.get_connections()):
            weights = connection.get_weights()
            for i in range(weights.rows):
                for j in range(weights.cols):
                    original = weights[i, j]
                    weights[i, j] = original + eps
                    connection.set_weights(weights)
                    plus = loss(network, feature, label)
                    weights[i, j] = original - eps
                    connection.set_weights(weights)
                    minus = loss(network, feature, label)
                    weights[i, j] = original
                    connection.set_weights(weights)

                    numeric = (plus - minus) / (2 * eps)
                    assert analytic.weight_deltas[l][i, j] == pytest.approx(numeric, abs=1e-3)

            biases = connection.get_biases()
            for j in range(len(biases)):
                original = biases[j]
                biases[j] = original + eps
                connection.set_biases(biases)
                plus = loss(network, feature, label)
                biases[j] = original - eps
                connection.set_biases(biases)
                minus = loss(network, feature, label)
                biases[j] = original
                connection.set_biases(biases)

                numeric = (plus - minus) / (2 * eps)
                assert analytic.bias_deltas[l][j] == pytest.approx(numeric, abs=1e-3)


class TestParameterUpdates:
    def test_take_step_subtracts_without_rescaling(self):
        network = linear_pair()
        new_weights, new_biases = network.take_step([Matrix.from_rows([[0.5]])], [Vector([0.25])])
        assert new_weights[0][0, 0] == 1.5
        assert new_biases[0][0] == 0.75
        # take_step does not mutate
        assert network.get_weights()[0][0, 0] == 2.0

    def test_take_step_count_mismatch(self, xor_network):
        with pytest.raises(InvalidArgument):
            xor_network.take_step([], [])

    def test_update_parameters_is_all_or_nothing(self, xor_network):
        before_w = xor_network.get_weights()
        before_b = xor_network.get_biases()
        bad_weights = [Matrix(2, 8, 1.0), Matrix(8, 8, 1.0), Matrix(8, 2, 1.0)]
        good_biases = [Vector(8), Vector(8), Vector(1)]
        with pytest.raises(ShapeMismatch):
            xor_network.update_parameters(bad_weights, good_biases)
        assert xor_network.get_weights() == before_w
        assert xor_network.get_biases() == before_b
