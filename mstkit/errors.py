"""Exception hierarchy shared by the spanning tree engine."""
from __future__ import annotations


class MSTError(Exception):
    """Base class for every error raised by :mod:`mstkit`."""


class EmptyCollectionError(MSTError, IndexError):
    """Raised when removing from an empty partial tree list."""


class DisconnectedGraphError(MSTError):
    """Raised when no spanning tree exists for the input graph."""

    def __init__(self, message: str, root: object = None) -> None:
        super().__init__(message)
        self.root = root


class InvariantViolationError(MSTError):
    """Raised when the registered partial trees stop partitioning the vertices."""


class GraphFormatError(MSTError, ValueError):
    """Raised when a textual graph description cannot be parsed."""

    def __init__(self, message: str, line: int | None = None) -> None:
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line
