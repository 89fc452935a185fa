"""Validated in-memory grid description.

A GridSpecification is built once from loaded input and never changes.
Every count check happens here, in ``__post_init__``, so that nothing
downstream can index past the end of a span or label list.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ezdxf.lldxf.validator import is_valid_layer_name

from refline.core.errors import ConfigurationError, DimensionMismatch
from refline.core.grid.coords import check_spans, derive_coordinates, total_length
from refline.core.grid.layers import LayerNames, resolve_layer_names


@dataclass(frozen=True)
class GridSpecification:
    """Structural grid: axis counts, spans, floors, labels and layer names.

    Spans and floor heights are in millimeters.
    """

    axis_count_x: int
    axis_count_y: int
    span_x: tuple[float, ...]
    span_y: tuple[float, ...]
    floor_heights: tuple[float, ...] = ()
    floor_count: Optional[int] = None
    axis_labels_x: Optional[tuple[str, ...]] = None
    axis_labels_y: Optional[tuple[str, ...]] = None
    layer_name: Optional[tuple[Optional[str], Optional[str]]] = None
    unit: str = "mm"

    def __post_init__(self) -> None:
        # Accept any sequence, store tuples
        for name in ("span_x", "span_y", "floor_heights"):
            object.__setattr__(self, name, tuple(float(v) for v in getattr(self, name)))
        for name in ("axis_labels_x", "axis_labels_y"):
            labels = getattr(self, name)
            if labels is not None:
                object.__setattr__(self, name, tuple(str(v) for v in labels))
        if self.layer_name is not None:
            object.__setattr__(self, "layer_name", tuple(self.layer_name))

        self._validate()

    def _validate(self) -> None:
        for name in ("axis_count_x", "axis_count_y"):
            count = getattr(self, name)
            if count < 1:
                raise ConfigurationError(f"'{name}' must be at least 1, got {count}")

        _check_length("span_x", self.span_x, self.axis_count_x - 1)
        _check_length("span_y", self.span_y, self.axis_count_y - 1)
        if self.axis_labels_x is not None:
            _check_length("axis_labels_x", self.axis_labels_x, self.axis_count_x)
        if self.axis_labels_y is not None:
            _check_length("axis_labels_y", self.axis_labels_y, self.axis_count_y)
        if self.floor_count is not None:
            if self.floor_count < 0:
                raise ConfigurationError(
                    f"'floor_count' must be non-negative, got {self.floor_count}"
                )
            _check_length("floor_heights", self.floor_heights, self.floor_count)

        check_spans(self.span_x, "span_x")
        check_spans(self.span_y, "span_y")

        layers = self.layers()
        for field, name in (("reference_line", layers.reference_line), ("dimension", layers.dimension)):
            if not is_valid_layer_name(name):
                raise ConfigurationError(f"Invalid {field} layer name '{name}'")

    # ── Derived values ─────────────────────────────────────────────────

    def x_coordinates(self) -> list[float]:
        return derive_coordinates(self.axis_count_x, self.span_x, "span_x")

    def y_coordinates(self) -> list[float]:
        return derive_coordinates(self.axis_count_y, self.span_y, "span_y")

    @property
    def width(self) -> float:
        """Total X extent, the length of every horizontal grid line."""
        return total_length(self.span_x)

    @property
    def height(self) -> float:
        """Total Y extent, the length of every vertical grid line."""
        return total_length(self.span_y)

    def layers(self) -> LayerNames:
        return resolve_layer_names(self.layer_name)


def _check_length(field: str, values: Sequence, expected: int) -> None:
    if len(values) != expected:
        raise DimensionMismatch(field, expected, len(values))
