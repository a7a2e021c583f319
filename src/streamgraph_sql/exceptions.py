"""Errors raised while building or compiling stream graphs."""

from __future__ import annotations


class StreamGraphError(Exception):
    """Base exception for stream graph errors."""
    pass


class ValidationError(StreamGraphError, ValueError):
    """Raised when a graph is malformed and cannot be compiled."""
    pass


class UnsupportedOperationError(StreamGraphError, NotImplementedError):
    """Raised when a graph asks for something the compiler does not support."""
    pass
