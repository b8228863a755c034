"""
DATASETS: XOR, the smallest problem a single linear layer cannot solve.

    xor_table()         exact 4-row truth table, as Vectors
    make_xor()          noisy point cloud around the four corners
    train_test_split()  seeded shuffle + split
    to_vectors()        rows of an array → list of Vectors
"""

from typing import List, Tuple

import numpy as np

from .errors import InvalidArgument
from .matrix import Vector


def to_vectors(X) -> List[Vector]:
    """
    One Vector per row.

    A 1-D array is treated as one scalar per example (labels), so
    to_vectors([0, 1, 1]) gives three length-1 Vectors.
    """
    X = np.asarray(X, dtype=np.float64)
    if X.ndim == 1:
        X = X.reshape(-1, 1)
    if X.ndim != 2:
        raise InvalidArgument(f"Expected a 1-D or 2-D array, got shape {X.shape}")
    return [Vector(row) for row in X]


def xor_table() -> Tuple[List[Vector], List[Vector]]:
    """
    (0,0)→0  (0,1)→1  (1,0)→1  (1,1)→0
    """
    features = [Vector([0.0, 0.0]), Vector([0.0, 1.0]), Vector([1.0, 0.0]), Vector([1.0, 1.0])]
    labels = [Vector([0.0]), Vector([1.0]), Vector([1.0]), Vector([0.0])]
    return features, labels


def make_xor(n_samples=200, noise=0.1, random_state=42):
    """
    Gaussian clouds around the four truth-table corners, labelled by the
    table. n_samples is rounded down to a multiple of 4.

    Returns X of shape (n, 2) and float labels y of shape (n,), shuffled.
    """
    if n_samples < 4:
        raise InvalidArgument(f"Need at least 4 samples for XOR, got {n_samples}")
    rng = np.random.RandomState(random_state)
    per_corner = n_samples // 4

    corners, labels = xor_table()
    X = np.vstack([rng.randn(per_corner, 2) * noise + corner.to_numpy().ravel()
                   for corner in corners])
    y = np.repeat([label[0] for label in labels], per_corner)

    order = rng.permutation(len(y))
    return X[order], y[order]


def train_test_split(X, y, test_ratio=0.2, random_state=42):
    """Seeded shuffle, then the first int(n * test_ratio) rows become the test set."""
    if not 0.0 < test_ratio < 1.0:
        raise InvalidArgument(f"test_ratio must be in (0, 1), got {test_ratio}")
    X = np.asarray(X)
    y = np.asarray(y)
    if len(X) != len(y):
        raise InvalidArgument(f"X has {len(X)} rows but y has {len(y)} labels")

    order = np.random.RandomState(random_state).permutation(len(y))
    test, train = np.split(order, [int(len(y) * test_ratio)])
    return X[train], X[test], y[train], y[test]
