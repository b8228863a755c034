"""
ffnet — a small dense feed-forward neural network built on numpy.

    from ffnet import NeuralNetwork
    from ffnet.datasets import xor_table

    net = NeuralNetwork(42, [(2, 'linear'), (8, 'tanh'), (8, 'tanh'), (1, 'sigmoid')])
    features, labels = xor_table()
    net.train(features, labels, learning_rate=0.05, epochs=20000)
    net.predict([1.0, 0.0])
"""

from .activations import (
    ACTIVATIONS,
    Activation,
    ActivationKind,
    get_activation,
    leaky_relu,
    linear,
    logistic,
    relu,
    sigmoid,
    tanh,
)
from .config import SeedStrategy, TrainingConfig
from .connection import LayerConnection
from .errors import InvalidArgument, NetworkError, OutOfRange, ShapeMismatch
from .layer import DenseLayer
from .matrix import Matrix, Vector, as_vector
from .network import Gradients, NeuralNetwork

__version__ = "0.1.0"

__all__ = [
    "ACTIVATIONS",
    "Activation",
    "ActivationKind",
    "DenseLayer",
    "Gradients",
    "InvalidArgument",
    "LayerConnection",
    "Matrix",
    "NetworkError",
    "NeuralNetwork",
    "OutOfRange",
    "SeedStrategy",
    "ShapeMismatch",
    "TrainingConfig",
    "Vector",
    "as_vector",
    "get_activation",
    "leaky_relu",
    "linear",
    "logistic",
    "relu",
    "sigmoid",
    "tanh",
]
