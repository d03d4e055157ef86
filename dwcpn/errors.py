"""
Exceptions raised by the per-pixel production model.

Both are value-level failures: the grid processor catches ModelError for a
single pixel, logs it and carries on with the rest of the grid.
"""


class ModelError(Exception):
    """Base class for failures of a single pixel computation."""


class InvalidInputError(ModelError, ValueError):
    """A physical input is missing, non-finite or out of its valid range."""


class NumericalFailureError(ModelError, ArithmeticError):
    """An intermediate or final result is non-finite or degenerate."""
