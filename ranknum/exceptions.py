"""Error types raised by ranknum.

Each error also derives from the builtin exception that describes it, so
``except ValueError`` and ``except TypeError`` keep catching them.
"""


class RankingError(Exception):
    """Base class for all ranknum errors."""


class InvalidPolicyError(RankingError, ValueError):
    """The requested ranking policy is not one of the five conventions."""


class InvalidInputTypeError(RankingError, TypeError):
    """Values are neither numeric nor drawn from one ordered categorical domain."""


class ShapeMismatchError(RankingError, ValueError):
    """Table or matrix dimensions disagree with what was declared or expected."""


__all__ = [
    "RankingError",
    "InvalidPolicyError",
    "InvalidInputTypeError",
    "ShapeMismatchError",
]
