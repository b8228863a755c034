"""
Dense layer: a neuron count, one activation, and the cached values of the
last forward pass.

    unactivated  z = W·a_prev + b    (needed by backprop for f'(z))
    activated    a = f(z)            (fed to the next connection)

Both start at zero. Only forward propagation and the explicit setters
write them.
"""

import numbers

from .activations import get_activation
from .errors import InvalidArgument, ShapeMismatch
from .matrix import Vector, as_vector


class DenseLayer:
    """A layer of `neuron_count` neurons sharing one activation."""

    def __init__(self, neuron_count, activation):
        if isinstance(neuron_count, bool) or not isinstance(neuron_count, numbers.Integral):
            raise InvalidArgument(f"neuron_count must be an integer, got {neuron_count!r}")
        if neuron_count < 1:
            raise InvalidArgument(f"A layer needs at least one neuron, got {neuron_count}")
        if activation is None:
            raise InvalidArgument("A layer needs an activation function, got None")

        self.neuron_count = int(neuron_count)
        self._activation = get_activation(activation).clone()
        self._activated = Vector(self.neuron_count)
        self._unactivated = Vector(self.neuron_count)

    @classmethod
    def from_spec(cls, spec):
        """
        Build from a layer spec.

        Accepts a DenseLayer (copied), or a tuple
            (neuron_count, activation)
            (neuron_count, activation, {param: value})
        where activation is an Activation or a registry name.
        """
        if isinstance(spec, DenseLayer):
            return spec.copy()
        if not isinstance(spec, (tuple, list)) or len(spec) not in (2, 3):
            raise InvalidArgument(f"Layer spec must be (count, activation[, params]), got {spec!r}")
        count, activation = spec[0], spec[1]
        params = spec[2] if len(spec) == 3 else {}
        if activation is None:
            raise InvalidArgument("A layer needs an activation function, got None")
        return cls(count, get_activation(activation, **params))

    def size(self):
        return self.neuron_count

    def __len__(self):
        return self.neuron_count

    @property
    def activation(self):
        return self._activation

    def get_activation_function(self):
        return self._activation

    def set_activation_function(self, activation):
        if activation is None:
            raise InvalidArgument("A layer needs an activation function, got None")
        self._activation = get_activation(activation).clone()

    # ------------------------------------------------------------
    # Cached values
    # ------------------------------------------------------------

    def get_activated_vector(self):
        return self._activated.copy()

    def get_unactivated_vector(self):
        return self._unactivated.copy()

    def get_activated_value(self, i):
        return self._activated[i]

    def get_unactivated_value(self, i):
        return self._unactivated[i]

    def _checked(self, values, which):
        vector = as_vector(values)
        if len(vector) != self.neuron_count:
            raise ShapeMismatch(
                f"{which} values have length {len(vector)}, layer has {self.neuron_count} neurons")
        return vector.copy()

    def set_activated_values(self, values):
        self._activated = self._checked(values, "Activated")

    def set_unactivated_values(self, values):
        self._unactivated = self._checked(values, "Unactivated")

    def clear(self):
        self._activated = Vector(self.neuron_count)
        self._unactivated = Vector(self.neuron_count)

    def copy(self):
        layer = DenseLayer(self.neuron_count, self._activation)
        layer._activated = self._activated.copy()
        layer._unactivated = self._unactivated.copy()
        return layer

    def __repr__(self):
        return f"DenseLayer({self.neuron_count}, {self._activation.name})"
