"""
Exceptions raised while encoding values into query parameters.
"""
from typing import Any


class QueryError(Exception):
    """Base class for query encoding errors."""


class UnsupportedKindError(QueryError, TypeError):
    """Raised when the root value cannot be encoded."""

    def __init__(self, value: Any):
        self.value_type = type(value)
        super().__init__(
            f"query: unsupported kind input. Got {self.value_type.__name__}"
        )


class MaxDepthExceededError(QueryError):
    """Raised when nesting goes deeper than the configured limit."""

    def __init__(self, key: str, depth: int, max_depth: int):
        self.key = key
        self.depth = depth
        self.max_depth = max_depth
        super().__init__(
            f"query: nesting depth {depth} exceeds limit {max_depth} at key {key!r}"
        )


class CustomEncoderError(QueryError):
    """
    Convenience base class for errors raised by custom encoders.

    The encoder never wraps errors coming out of ``encode_values``; any
    exception a custom encoder raises reaches the caller as is.
    """
