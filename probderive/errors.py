# errors.py
"""
Exception kinds raised by probderive.

Each error subclasses the builtin exception that callers would already
expect (``ValueError`` for bad shapes or arguments, ``NotImplementedError``
for missing capabilities), so existing handlers keep working.
"""

__all__ = [
    "ProbDeriveError",
    "ShapeMismatchError",
    "DomainError",
    "UnsupportedOperationError",
]


class ProbDeriveError(Exception):
    """Base class for all probderive errors."""


class ShapeMismatchError(ProbDeriveError, ValueError):
    """Containers disagree in shape, or a sample axis cannot be determined.

    Raised when a caller-supplied output buffer has the wrong shape, when
    parallel inputs cannot be promoted to a common shape, or when a
    multivariate buffer matches the distribution's dimension on neither or
    both axes.
    """


class DomainError(ProbDeriveError, ValueError):
    """An argument lies outside the valid domain of a primitive operation."""


class UnsupportedOperationError(ProbDeriveError, NotImplementedError):
    """The requested capability is not defined for this distribution."""
