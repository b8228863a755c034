import logging

import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

from ffnet import NeuralNetwork  # noqa: E402


@pytest.fixture(autouse=True)
def setup_logging():
    """Keep library logging quiet during tests."""
    logging.getLogger("ffnet").setLevel(logging.WARNING)
    yield
    logging.getLogger("ffnet").setLevel(logging.NOTSET)


@pytest.fixture
def xor_network():
    """The [2 linear → 8 tanh → 8 tanh → 1 sigmoid] XOR topology, seed 42."""
    return NeuralNetwork(42, [(2, "linear"), (8, "tanh"), (8, "tanh"), (1, "sigmoid")])


@pytest.fixture
def small_network():
    """A tiny mixed-activation network used by gradient checks."""
    return NeuralNetwork(7, [(3, "linear"), (4, "tanh"), (3, "leaky_relu", {"alpha": 0.1}), (2, "sigmoid")])
