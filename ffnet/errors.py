"""
Error types raised by ffnet.

Two families:
    ShapeMismatch / InvalidArgument — the caller passed something the network
        cannot use. Raised before any state is touched, so the instance is
        exactly as it was before the call.
    OutOfRange — an index fell outside a buffer or the layer list. This is a
        programming error and is never caught inside the library.
"""


class NetworkError(Exception):
    """Base class for every error raised by ffnet."""


class InvalidArgument(NetworkError, ValueError):
    """Bad counts, empty datasets, non-positive hyperparameters, missing activations."""


class ShapeMismatch(NetworkError, ValueError):
    """Two operands (or a value and its slot) disagree on dimensions."""


class OutOfRange(NetworkError, IndexError):
    """Element or layer index outside the valid range."""
