"""Span sequence → absolute axis positions.

Positions are a running sum of the spans: the first axis sits at 0.0 and
each following axis is one span further along. The last span ends on the
last axis, so ``positions[-1] == sum(spans)`` exactly.
"""

from __future__ import annotations

import math
from itertools import accumulate
from typing import Sequence

from refline.core.errors import ConfigurationError, DimensionMismatch, InvalidSpan


def check_spans(spans: Sequence[float], field: str = "spans") -> None:
    """Raise InvalidSpan for the first negative, NaN or infinite span."""
    for i, span in enumerate(spans):
        if not math.isfinite(span) or span < 0:
            raise InvalidSpan(field, i, span)


def derive_coordinates(
    axis_count: int,
    spans: Sequence[float],
    field: str = "spans",
) -> list[float]:
    """Return ``axis_count`` absolute positions for the given spans."""
    if axis_count < 1:
        raise ConfigurationError(f"Axis count must be at least 1, got {axis_count}")
    if len(spans) != axis_count - 1:
        raise DimensionMismatch(field, axis_count - 1, len(spans))
    check_spans(spans, field)

    return [0.0, *accumulate(float(s) for s in spans)]


def total_length(spans: Sequence[float]) -> float:
    """Perpendicular extent of the lines drawn for the *other* axis."""
    return float(sum(spans))
