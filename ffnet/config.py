"""
Defaults and training configuration.

Every hyperparameter can also be passed directly as a keyword argument;
TrainingConfig just bundles the ones `NeuralNetwork.fit` needs.
"""

import numbers
from dataclasses import dataclass
from enum import Enum

from .errors import InvalidArgument


DEFAULT_SEED = 42
DEFAULT_LEARNING_RATE = 0.05
DEFAULT_EPOCHS = 1000
DEFAULT_LOG_EVERY = 1000
DEFAULT_LEAKY_ALPHA = 0.01


class SeedStrategy(str, Enum):
    """
    How each connection's initializer is seeded from the network seed.

    SHARED:         every connection uses the network seed as-is. Two
                    connections of the same shape start with identical weights.
    PER_CONNECTION: connection i uses (seed XOR i). Connection 0 still sees
                    the network seed.
    """
    SHARED = 'shared'
    PER_CONNECTION = 'per_connection'

    def connection_seed(self, seed, index):
        if self is SeedStrategy.SHARED:
            return seed
        return seed ^ index


@dataclass(frozen=True)
class TrainingConfig:
    """
    Parameters:
    -----------
    learning_rate : float
        Step size η. Deltas returned by backprop are already scaled by it.
    epochs : int
        Full passes over the training set.
    stochastic : bool
        True  → update after every example.
        False → accumulate the averaged delta, update once per epoch.
    log_every : int
        Emit a DEBUG line with the mean epoch loss every N epochs (0 = never).
    """
    learning_rate: float = DEFAULT_LEARNING_RATE
    epochs: int = DEFAULT_EPOCHS
    stochastic: bool = False
    log_every: int = DEFAULT_LOG_EVERY

    def __post_init__(self):
        if not _is_real(self.learning_rate) or not self.learning_rate > 0:
            raise InvalidArgument(f"learning_rate must be a positive number, got {self.learning_rate!r}")
        if not _is_integer(self.epochs) or self.epochs < 1:
            raise InvalidArgument(f"epochs must be a positive integer, got {self.epochs!r}")
        if not _is_integer(self.log_every) or self.log_every < 0:
            raise InvalidArgument(f"log_every must be a non-negative integer, got {self.log_every!r}")


def _is_real(value):
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_integer(value):
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)
