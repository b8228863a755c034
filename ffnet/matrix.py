"""
DENSE MATRIX ALGEBRA

===============================================================
WHAT IT IS
===============================================================

A small value-semantic wrapper around a row-major float64 numpy buffer.

    Matrix  — rows × cols
    Vector  — a Matrix with exactly one column

Everything the network needs is here: element-wise +/-, scalar */÷,
matrix multiply, the Hadamard product, transpose, and apply_matrix.

===============================================================
CONVENTIONS
===============================================================

WEIGHTS ARE STORED in_size × out_size.

So a forward step is a LEFT multiplication by the input row:

    z = inputᵀ · W          z[c] = Σ_i input[i] × W[i][c]

That is what apply_matrix computes.

VALUE SEMANTICS: every constructor that takes caller data copies it.
The one exception is Matrix.wrap, which adopts a buffer as-is and is used
for arrays that were just computed and belong to nobody else.

Any operation whose result has a single column returns a Vector.

===============================================================
INITIALIZERS
===============================================================

XAVIER (Glorot), for tanh / sigmoid / linear:
    W ~ U(-b, b),   b = sqrt(6 / (fan_in + fan_out))

KAIMING (He), for ReLU-family:
    W ~ N(0, σ²),   σ = sqrt(2 / fan_in)

Both draw from np.random.RandomState(seed), so the same seed always
reproduces the same matrix.
"""

import numbers
import sys

import numpy as np

from .errors import InvalidArgument, OutOfRange, ShapeMismatch


def _is_scalar(value):
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _random_state(seed):
    if isinstance(seed, bool) or not isinstance(seed, numbers.Integral):
        raise InvalidArgument(f"seed must be an integer, got {seed!r}")
    # Seeds wrap to 32 bits, like an unsigned 32-bit generator seed
    return np.random.RandomState(int(seed) & 0xFFFFFFFF)


def _check_counts(in_count, out_count):
    if in_count < 1 or out_count < 1:
        raise InvalidArgument(f"Initializer needs positive fan-in/fan-out, got ({in_count}, {out_count})")


class Matrix:
    """Dense rows × cols matrix of floats."""

    def __init__(self, rows=0, cols=0, fill=0.0):
        for dim in (rows, cols):
            if isinstance(dim, bool) or not isinstance(dim, numbers.Integral) or dim < 0:
                raise InvalidArgument(f"Matrix dimensions must be non-negative integers, got ({rows!r}, {cols!r})")
        self._data = np.full((int(rows), int(cols)), float(fill), dtype=np.float64)

    # ------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------

    @classmethod
    def wrap(cls, array):
        """
        Adopt `array` as the backing buffer WITHOUT copying.

        Only use this for a buffer nobody else holds — mutating the
        matrix mutates the array.
        """
        array = np.asarray(array, dtype=np.float64)
        if array.ndim != 2:
            raise ShapeMismatch(f"Matrix buffer must be 2-D, got shape {array.shape}")
        matrix = cls.__new__(cls)
        matrix._data = array
        return matrix

    @classmethod
    def from_array(cls, array):
        """Deep-copy a 2-D array-like into a new Matrix."""
        return Matrix.wrap(np.array(array, dtype=np.float64))

    @classmethod
    def from_rows(cls, rows):
        """Build from nested sequences, e.g. [[1, 2], [3, 4]]."""
        array = np.array(rows, dtype=np.float64)
        if array.size == 0:
            return Matrix(0, 0)
        return Matrix.wrap(array)

    @classmethod
    def xavier(cls, in_count, out_count, seed):
        """Uniform in [-b, b], b = sqrt(6 / (in + out))."""
        _check_counts(in_count, out_count)
        rng = _random_state(seed)
        endpoint = np.sqrt(6.0 / (in_count + out_count))
        return Matrix.wrap(rng.uniform(-endpoint, endpoint, size=(in_count, out_count)))

    @classmethod
    def kaiming(cls, in_count, out_count, seed):
        """Normal with mean 0, std sqrt(2 / in)."""
        _check_counts(in_count, out_count)
        rng = _random_state(seed)
        std = np.sqrt(2.0 / in_count)
        return Matrix.wrap(rng.normal(0.0, std, size=(in_count, out_count)))

    def _like(self, array):
        if array.shape[1] == 1:
            return Vector.wrap(array)
        return Matrix.wrap(array)

    # ------------------------------------------------------------
    # Shape & element access
    # ------------------------------------------------------------

    @property
    def rows(self):
        return self._data.shape[0]

    @property
    def cols(self):
        return self._data.shape[1]

    @property
    def shape(self):
        return self._data.shape

    @property
    def size(self):
        """Total element count (rows × cols)."""
        return self._data.size

    def _check_index(self, row, col):
        rows, cols = self._data.shape
        if not (0 <= row < rows and 0 <= col < cols):
            raise OutOfRange(f"Invalid row/col | row: {row} col: {col} | rows: {rows} cols: {cols}")

    def at(self, row, col):
        self._check_index(row, col)
        return float(self._data[row, col])

    def set_at(self, row, col, value):
        self._check_index(row, col)
        self._data[row, col] = value

    def __getitem__(self, key):
        row, col = key
        return self.at(row, col)

    def __setitem__(self, key, value):
        row, col = key
        self.set_at(row, col, value)

    def get_row(self, row):
        """Copy of one row, as a Vector."""
        self._check_index(row, 0)
        return Vector.wrap(self._data[row, :].reshape(-1, 1).copy())

    def get_col(self, col):
        """Copy of one column, as a Vector."""
        self._check_index(0, col)
        return Vector.wrap(self._data[:, col].reshape(-1, 1).copy())

    # ------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------

    def _require_same_shape(self, other, operation):
        if self._data.shape != other._data.shape:
            raise ShapeMismatch(
                f"{operation} requires matrices of the same dimensions, "
                f"got {self._data.shape} and {other._data.shape}")

    def __add__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        self._require_same_shape(other, "Addition")
        return self._like(self._data + other._data)

    def __sub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        self._require_same_shape(other, "Subtraction")
        return self._like(self._data - other._data)

    def __mul__(self, other):
        if isinstance(other, Matrix):
            return self.matmul(other)
        if _is_scalar(other):
            return self._like(self._data * other)
        return NotImplemented

    def __rmul__(self, other):
        if _is_scalar(other):
            return self._like(self._data * other)
        return NotImplemented

    def __matmul__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.matmul(other)

    def __truediv__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        return self._like(self._data / other)

    def __neg__(self):
        return self._like(-self._data)

    def __iadd__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        self._require_same_shape(other, "Addition")
        self._data += other._data
        return self

    def __isub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        self._require_same_shape(other, "Subtraction")
        self._data -= other._data
        return self

    def __imul__(self, other):
        # Matrix-by-matrix falls back to __mul__ since the shape may change
        if not _is_scalar(other):
            return NotImplemented
        self._data *= other
        return self

    def __itruediv__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        self._data /= other
        return self

    def matmul(self, other):
        """Standard product: (r × k) · (k × c) → (r × c)."""
        if self.cols != other.rows:
            raise ShapeMismatch(
                f"Matrix columns ({self.cols}) do not match other's rows ({other.rows})")
        return self._like(self._data @ other._data)

    def apply_matrix(self, inputs):
        """
        Map a column vector of length `rows` to a Vector of length `cols`.

            result[c] = Σ_i inputs[i] × M[i][c]
        """
        if not isinstance(inputs, Matrix) or inputs.cols != 1:
            raise ShapeMismatch("Input matrix must be a column vector")
        if inputs.rows != self.rows:
            raise ShapeMismatch(
                f"Input length ({inputs.rows}) does not match matrix rows ({self.rows})")
        return Vector.wrap((inputs._data[:, 0] @ self._data).reshape(-1, 1))

    def hadamard_product(self, other):
        """Element-wise product of two same-shaped matrices."""
        self._require_same_shape(other, "Hadamard product")
        return self._like(self._data * other._data)

    def transposed(self):
        return self._like(np.ascontiguousarray(self._data.T))

    def sum(self):
        return float(self._data.sum())

    def map(self, func):
        """Apply a vectorized element-wise function, returning a new matrix."""
        result = np.asarray(func(self._data), dtype=np.float64)
        if result.shape != self._data.shape:
            raise ShapeMismatch(f"map() must preserve shape {self._data.shape}, got {result.shape}")
        return self._like(result)

    # ------------------------------------------------------------
    # Copies & comparisons
    # ------------------------------------------------------------

    def copy(self):
        return type(self).wrap(self._data.copy())

    def to_numpy(self):
        """A copy of the underlying buffer."""
        return self._data.copy()

    def tolist(self):
        return self._data.tolist()

    def allclose(self, other, rtol=1e-7, atol=1e-9):
        other = other if isinstance(other, Matrix) else Matrix.from_array(other)
        return self.shape == other.shape and bool(np.allclose(self._data, other._data, rtol=rtol, atol=atol))

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._data.shape == other._data.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None

    def __repr__(self):
        return f"Matrix({self.rows}x{self.cols}, {self._data.tolist()})"

    def print_matrix(self, file=None):
        """Write the matrix row by row (stderr by default)."""
        file = sys.stderr if file is None else file
        for row in self._data:
            print(" ".join(f"{value:.6g}" for value in row), file=file)


class Vector(Matrix):
    """
    Column vector (N × 1).

    Vector(3)            → [0, 0, 0]
    Vector(3, 0.5)       → [0.5, 0.5, 0.5]
    Vector([1.0, 2.0])   → [1, 2]
    """

    def __init__(self, size_or_values=0, fill=0.0):
        if isinstance(size_or_values, numbers.Integral) and not isinstance(size_or_values, bool):
            super().__init__(int(size_or_values), 1, fill)
            return
        if isinstance(size_or_values, Matrix):
            if size_or_values.cols != 1:
                raise ShapeMismatch(f"Vector objects must have only 1 col, got {size_or_values.shape}")
            self._data = size_or_values.to_numpy()
            return
        values = np.array(size_or_values, dtype=np.float64)
        if values.ndim != 1:
            raise ShapeMismatch(f"Vector values must be one-dimensional, got shape {values.shape}")
        self._data = values.reshape(-1, 1)

    @classmethod
    def wrap(cls, array):
        array = np.asarray(array, dtype=np.float64)
        if array.ndim == 1:
            array = array.reshape(-1, 1)
        if array.ndim != 2 or array.shape[1] != 1:
            raise ShapeMismatch(f"Vector objects must have only 1 col, got shape {array.shape}")
        vector = cls.__new__(cls)
        vector._data = array
        return vector

    @classmethod
    def from_matrix(cls, matrix):
        """Copy a single-column Matrix into a Vector."""
        if matrix.cols != 1:
            raise ShapeMismatch(f"Vector objects must have only 1 col, got {matrix.shape}")
        return cls.wrap(matrix.to_numpy())

    def outer(self, other):
        """self · otherᵀ — (n × 1)(1 × m) → n × m."""
        return Matrix.wrap(np.outer(self._data[:, 0], other._data[:, 0]))

    def __len__(self):
        return self._data.shape[0]

    def __iter__(self):
        return iter(self._data[:, 0].tolist())

    def __getitem__(self, key):
        if isinstance(key, tuple):
            return super().__getitem__(key)
        return self.at(key, 0)

    def __setitem__(self, key, value):
        if isinstance(key, tuple):
            super().__setitem__(key, value)
            return
        self.set_at(key, 0, value)

    def tolist(self):
        return self._data[:, 0].tolist()

    def __repr__(self):
        return f"Vector({self.tolist()})"


def as_vector(values):
    """
    Coerce a Vector, single-column Matrix, sequence or 1-D array to a Vector.

    Vectors are returned as-is; everything else is copied.
    """
    if isinstance(values, Vector):
        return values
    if isinstance(values, Matrix):
        return Vector.from_matrix(values)
    return Vector(values)
