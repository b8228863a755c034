"""
ACTIVATION FUNCTIONS

Without a nonlinearity between layers, a deep network collapses to a single
affine map:

    W₂(W₁x + b₁) + b₂ = W₂W₁x + (W₂b₁ + b₂) = W'x + b'

Each activation is a plain immutable value: a kind tag plus the parameters
that kind needs. apply() and derivative() dispatch on the tag and are both
evaluated at the PRE-activation value z — the layer caches z during the
forward pass exactly so the backward pass can call derivative(z).

    Linear         x                    1
    ReLU           max(0, x)            1 if x > 0 else 0
    LeakyReLU(α)   x if x > 0 else αx   1 if x > 0 else α
    Sigmoid        1 / (1 + e^-x)       s(1 - s)
    Logistic(L,K)  L / (1 + e^-Kx)      v(1 - v)
    Tanh           tanh(x)              1 - t²

Both functions accept a scalar (returning a float) or an ndarray
(element-wise, returning a new array).
"""

from dataclasses import dataclass, replace
from enum import Enum

import numpy as np

from .config import DEFAULT_LEAKY_ALPHA
from .errors import InvalidArgument


class ActivationKind(str, Enum):
    LINEAR = 'linear'
    RELU = 'relu'
    LEAKY_RELU = 'leaky_relu'
    SIGMOID = 'sigmoid'
    LOGISTIC = 'logistic'
    TANH = 'tanh'


def _like_input(result, x):
    if np.ndim(x) == 0:
        return float(result)
    return np.array(result, dtype=np.float64)


@dataclass(frozen=True)
class Activation:
    """
    One of the six activation kinds.

    alpha      — LeakyReLU negative slope
    maximum    — Logistic L (curve maximum)
    steepness  — Logistic K
    """
    kind: ActivationKind
    alpha: float = DEFAULT_LEAKY_ALPHA
    maximum: float = 1.0
    steepness: float = 1.0

    def __post_init__(self):
        try:
            kind = ActivationKind(self.kind)
        except ValueError:
            raise InvalidArgument(f"Unknown activation: {self.kind!r}") from None
        object.__setattr__(self, 'kind', kind)

    @property
    def name(self):
        return self.kind.value

    @property
    def uses_kaiming(self):
        """ReLU-family layers get He init; everything else gets Xavier."""
        return self.kind in (ActivationKind.RELU, ActivationKind.LEAKY_RELU)

    def apply(self, x):
        kind = self.kind
        if kind is ActivationKind.LINEAR:
            y = x
        elif kind is ActivationKind.RELU:
            y = np.maximum(0.0, x)
        elif kind is ActivationKind.LEAKY_RELU:
            y = np.where(np.asarray(x) > 0, x, self.alpha * np.asarray(x))
        elif kind is ActivationKind.SIGMOID:
            y = 1.0 / (1.0 + np.exp(-np.clip(x, -500, 500)))
        elif kind is ActivationKind.LOGISTIC:
            y = self.maximum / (1.0 + np.exp(-np.clip(self.steepness * np.asarray(x), -500, 500)))
        else:
            y = np.tanh(x)
        return _like_input(y, x)

    __call__ = apply

    def derivative(self, x):
        kind = self.kind
        if kind is ActivationKind.LINEAR:
            d = np.ones_like(x, dtype=np.float64)
        elif kind is ActivationKind.RELU:
            d = np.where(np.asarray(x) > 0, 1.0, 0.0)
        elif kind is ActivationKind.LEAKY_RELU:
            d = np.where(np.asarray(x) > 0, 1.0, self.alpha)
        elif kind in (ActivationKind.SIGMOID, ActivationKind.LOGISTIC):
            # Logistic reuses the sigmoid form v(1 - v) on its own output
            v = np.asarray(self.apply(x))
            d = v * (1.0 - v)
        else:
            t = np.tanh(x)
            d = 1.0 - t * t
        return _like_input(d, x)

    def clone(self):
        return replace(self)


# ============================================================
# FACTORIES
# ============================================================

def linear():
    return Activation(ActivationKind.LINEAR)


def relu():
    return Activation(ActivationKind.RELU)


def leaky_relu(alpha=DEFAULT_LEAKY_ALPHA):
    return Activation(ActivationKind.LEAKY_RELU, alpha=float(alpha))


def sigmoid():
    return Activation(ActivationKind.SIGMOID)


def logistic(maximum=1.0, steepness=1.0):
    return Activation(ActivationKind.LOGISTIC, maximum=float(maximum), steepness=float(steepness))


def tanh():
    return Activation(ActivationKind.TANH)


ACTIVATIONS = {
    'linear': linear,
    'relu': relu,
    'leaky_relu': leaky_relu,
    'sigmoid': sigmoid,
    'logistic': logistic,
    'tanh': tanh,
}


def get_activation(name, **params):
    """
    Look up an activation by name (or pass an Activation straight through).

    get_activation('tanh')
    get_activation('leaky_relu', alpha=0.2)
    get_activation('logistic', maximum=2.0, steepness=0.5)
    """
    if isinstance(name, Activation):
        return name
    if name is None:
        raise InvalidArgument("Activation must not be None")
    key = name.value if isinstance(name, ActivationKind) else str(name).lower()
    if key not in ACTIVATIONS:
        raise InvalidArgument(f"Unknown activation: {name}")
    try:
        return ACTIVATIONS[key](**params)
    except TypeError as e:
        raise InvalidArgument(f"Bad parameters for activation '{key}': {e}") from e
