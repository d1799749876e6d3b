from __future__ import annotations


class OthelloError(Exception):
    """Base class for errors raised by the rules engine."""


class ConfigurationError(OthelloError, ValueError):
    pass


class OutOfBoundsError(OthelloError, IndexError):
    pass


class IllegalPassError(OthelloError, ValueError):
    """Raised when a pass is requested while the side to move has a legal move."""
