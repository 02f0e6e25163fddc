"""Exceptions raised by the rollkit functionals."""

__all__ = ["RollkitError", "InvalidArgument"]


class RollkitError(Exception):
    """Base exception class for rollkit."""


class InvalidArgument(RollkitError, ValueError):
    """Raised when a functional is called with arguments it cannot accept.

    Subclasses ``ValueError`` so existing ``except ValueError`` handlers keep
    catching bad inputs.
    """
