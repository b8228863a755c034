"""
LAYER CONNECTION — the learnable affine map between two adjacent layers.

    z = applyMatrix(a_in) + b       W is in_size × out_size
    a_out = f_out(z)

A connection refers to its layers by INDEX into the layer list owned by the
network, never by holding the layer objects themselves.

INITIALIZATION is picked by the destination layer's activation:
    ReLU / LeakyReLU  → Kaiming (He)   keeps Var(a) stable when half the
                                       units are zeroed
    everything else   → Xavier         balances fan-in and fan-out for
                                       saturating / linear units
Biases always start at zero.
"""

import logging

from .errors import InvalidArgument, OutOfRange, ShapeMismatch
from .matrix import Matrix, Vector, as_vector

logger = logging.getLogger(__name__)


class LayerConnection:
    """
    Parameters:
    -----------
    layers : list of DenseLayer
        The layer list this connection indexes into.
    in_index, out_index : int
        Source and destination layer. out_index defaults to in_index + 1.
    weights, biases : Matrix / Vector, optional
        Explicit starting parameters (copied). Must match
        (in_size × out_size) and out_size.
    auto_initialize : bool
        Draw weights with Xavier/Kaiming instead of starting at zero.
    seed : int
        Initializer seed.
    """

    def __init__(self, layers, in_index, out_index=None, weights=None, biases=None,
                 auto_initialize=False, seed=0):
        if out_index is None:
            out_index = in_index + 1
        for index in (in_index, out_index):
            if not 0 <= index < len(layers):
                raise OutOfRange(f"Layer index {index} out of range for {len(layers)} layers")
        if in_index == out_index:
            raise InvalidArgument(f"A connection needs two distinct layers, got {in_index} twice")

        self._layers = layers
        self.in_index = in_index
        self.out_index = out_index

        in_size, out_size = self.shape
        self._biases = Vector(out_size)
        if weights is not None:
            self._weights = Matrix(in_size, out_size)
            self.set_weights(weights)
        elif auto_initialize:
            self.initialize_weights(seed)
        else:
            self._weights = Matrix(in_size, out_size)
        if biases is not None:
            self.set_biases(biases)

    @property
    def in_layer(self):
        return self._layers[self.in_index]

    @property
    def out_layer(self):
        return self._layers[self.out_index]

    @property
    def shape(self):
        """(in_size, out_size) — always the weight matrix shape."""
        return self.in_layer.size(), self.out_layer.size()

    def initialize_weights(self, seed):
        in_size, out_size = self.shape
        activation = self.out_layer.activation
        if activation.uses_kaiming:
            self._weights = Matrix.kaiming(in_size, out_size, seed)
            scheme = 'kaiming'
        else:
            self._weights = Matrix.xavier(in_size, out_size, seed)
            scheme = 'xavier'
        logger.debug("Connection %d->%d: %s init (%dx%d, %s, seed=%d)",
                     self.in_index, self.out_index, scheme, in_size, out_size,
                     activation.name, seed)

    # ------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------

    def get_weights(self):
        return self._weights.copy()

    def set_weights(self, weights):
        if not isinstance(weights, Matrix):
            weights = Matrix.from_array(weights)
        if weights.shape != self.shape:
            raise ShapeMismatch(
                f"Weights of shape {weights.shape} do not fit connection "
                f"{self.in_index}->{self.out_index} of shape {self.shape}")
        self._weights = Matrix.wrap(weights.to_numpy())

    def get_biases(self):
        return self._biases.copy()

    def set_biases(self, biases):
        biases = as_vector(biases)
        out_size = self.out_layer.size()
        if len(biases) != out_size:
            raise ShapeMismatch(
                f"Biases of length {len(biases)} do not fit connection "
                f"{self.in_index}->{self.out_index} with {out_size} outputs")
        self._biases = biases.copy()

    def weight_at(self, j, i):
        """Weight from source neuron i to destination neuron j (stored at (i, j))."""
        return self._weights.at(i, j)

    def bias_at(self, i):
        return self._biases[i]

    # ------------------------------------------------------------
    # Forward
    # ------------------------------------------------------------

    def forward_propagate(self):
        """Write z and f(z) into the destination layer."""
        out_layer = self.out_layer
        unactivated = self._weights.apply_matrix(self.in_layer.get_activated_vector()) + self._biases
        activated = unactivated.map(out_layer.activation.apply)
        out_layer.set_unactivated_values(unactivated)
        out_layer.set_activated_values(activated)

    def get_output(self):
        return self.out_layer.get_activated_vector()

    def __repr__(self):
        return f"LayerConnection({self.in_index}->{self.out_index}, shape={self.shape})"
