"""
exceptions.py
~~~~~~~~~~~~~

Error types raised by the matrix and network engines.

Every error derives from both :class:`FeedforwardError` and ``ValueError``,
so callers can catch the package-specific base or the builtin.
"""


class FeedforwardError(Exception):
    """Base class for all errors raised by this package."""


class DimensionMismatch(FeedforwardError, ValueError):
    """Raised when the operand shapes of a matrix operation are incompatible."""


class ConstructionSizeMismatch(FeedforwardError, ValueError):
    """Raised when a matrix buffer does not hold exactly rows * cols values."""


class InvalidInputSize(FeedforwardError, ValueError):
    """Raised when a network input does not match the input layer."""


class InvalidTopology(FeedforwardError, ValueError):
    """Raised when a network is built from an unusable list of layer sizes."""


class MissingForwardPass(FeedforwardError, ValueError):
    """
    Raised when back-propagation is attempted before any forward pass
    has filled the activation cache.
    """


class DatasetSizeMismatch(FeedforwardError, ValueError):
    """Raised when a dataset has a different number of inputs and targets."""
