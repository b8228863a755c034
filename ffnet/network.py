"""
FEED-FORWARD NEURAL NETWORK

===============================================================
THE MODEL
===============================================================

An ordered list of dense layers joined by connections:

    Layer₀ → Conn₀ → Layer₁ → Conn₁ → … → Layerₙ₋₁

    z_{l+1} = a_lᵀ · W_l + b_l          (W_l is size(l) × size(l+1))
    a_{l+1} = f_{l+1}(z_{l+1})

The input is written straight into Layer₀'s activated values; the input
layer's own activation is never applied.

===============================================================
BACKPROPAGATION = CHAIN RULE, RIGHT TO LEFT
===============================================================

Loss for one example (sum of squared residuals):

    E = Σ_i (y_i - ŷ_i)²

Sensitivity of a pre-activation:  δ_l[i] = ∂E/∂z_l[i]

OUTPUT LAYER:
    δ_out[i] = -2 (y_i - ŷ_i) × f'(z_out[i])

HIDDEN LAYER l (each step uses only δ_{l+1}):
    δ_l[i] = f'(z_l[i]) × Σ_j δ_{l+1}[j] × W_l[i][j]

GRADIENTS for the connection feeding layer l+1:
    ∂E/∂W_l = a_l ⊗ δ_{l+1}             (outer product, size(l) × size(l+1))
    ∂E/∂b_l = δ_{l+1}

back_propagate returns these ALREADY multiplied by the learning rate, so a
gradient-descent step is a plain subtraction:

    W ← W - ΔW          b ← b - Δb

===============================================================
TWO UPDATE MODES
===============================================================

STOCHASTIC:  update after every example (N updates per epoch).
FULL-BATCH:  accumulate Δ/N over all N examples, update once per epoch —
             the step follows the averaged gradient.

Both visit examples in the order given. Training is deterministic: same
topology + seed + data order ⇒ same result.
"""

import logging
import numbers
from typing import List, NamedTuple

from .config import DEFAULT_LOG_EVERY, SeedStrategy, TrainingConfig
from .connection import LayerConnection
from .errors import InvalidArgument, OutOfRange, ShapeMismatch
from .layer import DenseLayer
from .matrix import Matrix, Vector, as_vector

logger = logging.getLogger(__name__)


class Gradients(NamedTuple):
    """Learning-rate-scaled deltas for every connection, in layer order."""
    weight_deltas: List[Matrix]
    bias_deltas: List[Vector]
    squared_residual: float


class NeuralNetwork:
    """
    Dense feed-forward network trained with plain gradient descent.

    Parameters:
    -----------
    seed : int
        Seed for the weight initializers.
    layers : list
        At least two layer specs, input first. Each is a DenseLayer or a
        tuple (neuron_count, activation[, params]), e.g.
            [(2, 'linear'), (8, 'tanh'), (1, 'sigmoid')]
    seed_strategy : SeedStrategy or str
        'per_connection' (default) seeds connection i with seed ^ i;
        'shared' gives every connection the same seed.
    """

    def __init__(self, seed, layers, seed_strategy=SeedStrategy.PER_CONNECTION):
        if isinstance(seed, bool) or not isinstance(seed, numbers.Integral):
            raise InvalidArgument(f"seed must be an integer, got {seed!r}")
        try:
            seed_strategy = SeedStrategy(seed_strategy)
        except ValueError:
            raise InvalidArgument(f"Unknown seed strategy: {seed_strategy!r}") from None

        layers = [DenseLayer.from_spec(spec) for spec in layers]
        if len(layers) < 2:
            raise InvalidArgument(f"Neural network must contain at least 2 layers, got {len(layers)}")

        self.seed = int(seed)
        self.seed_strategy = seed_strategy
        self._layers = layers
        self._connections = [
            LayerConnection(self._layers, i, i + 1, auto_initialize=True,
                            seed=seed_strategy.connection_seed(self.seed, i))
            for i in range(len(layers) - 1)
        ]
        self.loss_history = []

        logger.info("Built network %s (seed=%d, %s)", self._topology(), self.seed, seed_strategy.value)

    def _topology(self):
        return " -> ".join(f"{layer.size()} {layer.activation.name}" for layer in self._layers)

    # ============================================================
    # ACCESSORS
    # ============================================================

    def size(self):
        return len(self._layers)

    def __len__(self):
        return len(self._layers)

    def input_size(self):
        return self._layers[0].size()

    def output_size(self):
        return self._layers[-1].size()

    def get_layer(self, index):
        if not 0 <= index < len(self._layers):
            raise OutOfRange(f"Layer index {index} out of range for {len(self._layers)} layers")
        return self._layers[index]

    def get_neuron_value(self, layer_index, neuron_index):
        return self.get_layer(layer_index).get_activated_value(neuron_index)

    def get_connection(self, index):
        if not 0 <= index < len(self._connections):
            raise OutOfRange(f"Connection index {index} out of range for {len(self._connections)} connections")
        return self._connections[index]

    def get_connections(self):
        return tuple(self._connections)

    def get_weights(self):
        return [connection.get_weights() for connection in self._connections]

    def get_biases(self):
        return [connection.get_biases() for connection in self._connections]

    # ============================================================
    # FORWARD
    # ============================================================

    def set_input(self, values):
        self._layers[0].set_activated_values(values)

    def output(self):
        return self._layers[-1].get_activated_vector()

    def forward_propagate(self):
        for connection in self._connections:
            connection.forward_propagate()

    def clear(self):
        """Zero every layer's cached values."""
        for layer in self._layers:
            layer.clear()

    # ============================================================
    # BACKWARD
    # ============================================================

    def get_layer_error_sensitivity(self, layer_index, next_sensitivity):
        """
        δ_l from δ_{l+1}:

            δ_l[i] = f'(z_l[i]) × Σ_j δ_{l+1}[j] × W_l[i][j]

        W_l · δ_{l+1} does the sum over j in one product, since W_l is
        stored size(l) × size(l+1).
        """
        if not 0 <= layer_index < len(self._layers) - 1:
            raise OutOfRange(f"Layer index {layer_index} out of range for error sensitivity")

        layer = self._layers[layer_index]
        next_layer = self._layers[layer_index + 1]
        next_sensitivity = as_vector(next_sensitivity)
        if len(next_sensitivity) != next_layer.size():
            raise ShapeMismatch(
                f"Next layer sensitivity has length {len(next_sensitivity)}, "
                f"next layer has {next_layer.size()} neurons")

        weights = self._connections[layer_index].get_weights()
        backward = weights * next_sensitivity
        derivative = layer.get_unactivated_vector().map(layer.activation.derivative)
        return backward.hadamard_product(derivative)

    def back_propagate(self, expected, learning_rate):
        """
        Backward pass for the example currently loaded in the network.

        Call after forward_propagate(). Returns Gradients(weight_deltas,
        bias_deltas, squared_residual) with both delta lists in layer order
        and already scaled by learning_rate.
        """
        expected = as_vector(expected)
        last = self._layers[-1]
        if len(expected) != last.size():
            raise ShapeMismatch(
                f"Expected values have length {len(expected)}, output layer has {last.size()} neurons")

        predicted = last.get_activated_vector()
        residual = expected - predicted
        squared_residual = residual.hadamard_product(residual).sum()

        # ∂E/∂ŷ = -2(y - ŷ), then through the output activation
        derivative = last.get_unactivated_vector().map(last.activation.derivative)
        sensitivity = (residual * -2.0).hadamard_product(derivative)

        count = len(self._connections)
        weight_deltas = [None] * count
        bias_deltas = [None] * count
        for l in range(count - 1, -1, -1):
            previous = self._layers[l]
            weight_deltas[l] = previous.get_activated_vector().outer(sensitivity) * learning_rate
            bias_deltas[l] = sensitivity * learning_rate
            if l > 0:
                sensitivity = self.get_layer_error_sensitivity(l, sensitivity)

        return Gradients(weight_deltas, bias_deltas, squared_residual)

    # ============================================================
    # PARAMETER UPDATES
    # ============================================================

    def _check_parameter_counts(self, weights, biases, what):
        count = len(self._connections)
        if len(weights) != count or len(biases) != count:
            raise InvalidArgument(
                f"{what} weights/biases count ({len(weights)}, {len(biases)}) "
                f"must match number of connections ({count})")

    def take_step(self, delta_weights, delta_biases):
        """Current parameters minus the (already scaled) deltas. Does not mutate."""
        self._check_parameter_counts(delta_weights, delta_biases, "Delta")
        new_weights = []
        new_biases = []
        for connection, delta_w, delta_b in zip(self._connections, delta_weights, delta_biases):
            if not isinstance(delta_w, Matrix):
                delta_w = Matrix.from_array(delta_w)
            new_weights.append(connection.get_weights() - delta_w)
            new_biases.append(connection.get_biases() - as_vector(delta_b))
        return new_weights, new_biases

    def update_parameters(self, new_weights, new_biases):
        """Replace every connection's parameters; all shapes are checked first."""
        self._check_parameter_counts(new_weights, new_biases, "New")
        new_weights = [w if isinstance(w, Matrix) else Matrix.from_array(w) for w in new_weights]
        new_biases = [as_vector(b) for b in new_biases]
        for l, (connection, weights, biases) in enumerate(zip(self._connections, new_weights, new_biases)):
            if weights.shape != connection.shape:
                raise ShapeMismatch(f"Weights for connection {l} have shape {weights.shape}, expected {connection.shape}")
            if len(biases) != connection.shape[1]:
                raise ShapeMismatch(f"Biases for connection {l} have length {len(biases)}, expected {connection.shape[1]}")

        for connection, weights, biases in zip(self._connections, new_weights, new_biases):
            connection.set_weights(weights)
            connection.set_biases(biases)

    # ============================================================
    # TRAINING & INFERENCE
    # ============================================================

    def _checked_dataset(self, features, labels, what):
        features = [as_vector(f) for f in features]
        labels = [as_vector(y) for y in labels]
        if len(features) != len(labels):
            raise InvalidArgument(
                f"{what} features and labels must be of same count, got {len(features)} and {len(labels)}")
        if not features:
            raise InvalidArgument(f"{what} dataset must not be empty")

        input_size, output_size = self.input_size(), self.output_size()
        for i, (feature, label) in enumerate(zip(features, labels)):
            if len(feature) != input_size:
                raise ShapeMismatch(f"{what} feature {i} has length {len(feature)}, input layer has {input_size}")
            if len(label) != output_size:
                raise ShapeMismatch(f"{what} label {i} has length {len(label)}, output layer has {output_size}")
        return features, labels

    def train(self, features, labels, learning_rate, epochs, stochastic=False,
              log_every=DEFAULT_LOG_EVERY):
        """
        Train for `epochs` passes over (features, labels), in order.

        Returns the squared residual of every example as it was processed,
        flattened across epochs (len = epochs × n_examples). The per-epoch
        means are kept in self.loss_history.
        """
        config = TrainingConfig(learning_rate=learning_rate, epochs=epochs,
                                stochastic=stochastic, log_every=log_every)
        features, labels = self._checked_dataset(features, labels, "Training")

        count = len(self._connections)
        example_count = len(features)
        example_weight = 1.0 / example_count

        logger.info("Training on %d examples for %d epochs (%s, lr=%g)", example_count, config.epochs,
                    "stochastic" if config.stochastic else "full-batch", config.learning_rate)

        metrics = []
        self.loss_history = []
        for epoch in range(config.epochs):
            if not config.stochastic:
                total_weights = [Matrix(*connection.shape) for connection in self._connections]
                total_biases = [Vector(connection.shape[1]) for connection in self._connections]

            epoch_loss = 0.0
            for feature, label in zip(features, labels):
                self.set_input(feature)
                self.forward_propagate()
                delta_weights, delta_biases, residual = self.back_propagate(label, config.learning_rate)
                metrics.append(residual)
                epoch_loss += residual

                if config.stochastic:
                    self.update_parameters(*self.take_step(delta_weights, delta_biases))
                else:
                    for l in range(count):
                        total_weights[l] += delta_weights[l] * example_weight
                        total_biases[l] += delta_biases[l] * example_weight

            if not config.stochastic:
                self.update_parameters(*self.take_step(total_weights, total_biases))

            self.loss_history.append(epoch_loss / example_count)
            if config.log_every and (epoch + 1) % config.log_every == 0:
                logger.debug("Epoch %d/%d: mean squared residual %.6f",
                             epoch + 1, config.epochs, self.loss_history[-1])

        logger.info("Training finished: mean squared residual %.6f", self.loss_history[-1])
        return metrics

    def fit(self, features, labels, config=None):
        """train() driven by a TrainingConfig (defaults if None)."""
        config = TrainingConfig() if config is None else config
        return self.train(features, labels, config.learning_rate, config.epochs,
                          stochastic=config.stochastic, log_every=config.log_every)

    def evaluate(self, features, labels):
        """Squared residual per example. Forward passes only; parameters are untouched."""
        features, labels = self._checked_dataset(features, labels, "Test")
        metrics = []
        for feature, label in zip(features, labels):
            self.set_input(feature)
            self.forward_propagate()
            residual = label - self.output()
            metrics.append(residual.hadamard_product(residual).sum())
        return metrics

    def predict(self, values):
        """Output for one input. Layer caches are zeroed before returning."""
        self.set_input(values)
        self.forward_propagate()
        prediction = self.output()
        self.clear()
        return prediction

    def __repr__(self):
        return f"NeuralNetwork([{self._topology()}], seed={self.seed})"
