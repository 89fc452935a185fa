"""Error taxonomy for grid loading, composition and saving."""

from __future__ import annotations


class RefLineError(Exception):
    """Base class for every failure raised by the drawing pipeline."""


class ConfigurationError(RefLineError):
    """Malformed or unreadable grid description."""


class DimensionMismatch(RefLineError):
    def __init__(self, field: str, expected: int, actual: int):
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"'{field}' must have {expected} entries, got {actual}"
        )


class InvalidSpan(RefLineError):
    def __init__(self, field: str, index: int, value: float):
        self.field = field
        self.index = index
        self.value = value
        super().__init__(
            f"'{field}[{index}]' must be a finite, non-negative distance, got {value!r}"
        )


class SinkError(RefLineError):
    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Could not write drawing to '{path}': {reason}")
