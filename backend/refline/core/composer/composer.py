"""Reference-line drawing composition.

One composer serves all three annotation levels:

  MINIMAL      grid lines only
  DIMENSIONED  grid lines + dimensions along the X axis
  FULL         grid lines + dimensions on both axes + axis labels

The layout (coordinates, layer names, labels) is derived completely before
the first entity reaches the exporter, so invalid input never leaves a
half-populated document behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from refline.core.exporter.dxf_layers import (
    DIMENSION_LAYER,
    DRAFTING,
    REF_LINE_LAYER,
    DraftingStandard,
)
from refline.core.exporter.dxf_writer import GridDXFExporter
from refline.core.grid.layers import LayerNames
from refline.core.grid.spec import GridSpecification

logger = logging.getLogger(__name__)


class AnnotationLevel(str, Enum):
    MINIMAL = "minimal"
    DIMENSIONED = "dimensioned"
    FULL = "full"


@dataclass(frozen=True)
class GridLayout:
    """Everything the emitters need, derived from a GridSpecification."""

    xs: list[float]
    ys: list[float]
    width: float
    height: float
    layers: LayerNames
    labels_x: tuple[str, ...]
    labels_y: tuple[str, ...]


def default_axis_labels(prefix: str, count: int) -> tuple[str, ...]:
    """X1, X2, ... / Y1, Y2, ... for grids without explicit labels."""
    return tuple(f"{prefix}{i}" for i in range(1, count + 1))


def layout_grid(spec: GridSpecification) -> GridLayout:
    xs = spec.x_coordinates()
    ys = spec.y_coordinates()
    return GridLayout(
        xs=xs,
        ys=ys,
        width=spec.width,
        height=spec.height,
        layers=spec.layers(),
        labels_x=spec.axis_labels_x or default_axis_labels("X", len(xs)),
        labels_y=spec.axis_labels_y or default_axis_labels("Y", len(ys)),
    )


def grid_line_segments(layout: GridLayout) -> list[tuple[tuple[float, float], tuple[float, float]]]:
    """Vertical lines at every X, then horizontal lines at every Y.

    Each line runs the full length of the other axis, from 0 to the total
    of its spans.
    """
    vertical = [((x, 0.0), (x, layout.height)) for x in layout.xs]
    horizontal = [((0.0, y), (layout.width, y)) for y in layout.ys]
    return vertical + horizontal


# ── Emitters ───────────────────────────────────────────────────────────

def emit_layers(exporter: GridDXFExporter, layers: LayerNames) -> None:
    exporter.add_layer(layers.reference_line, REF_LINE_LAYER.color, REF_LINE_LAYER.linetype)
    exporter.add_layer(layers.dimension, DIMENSION_LAYER.color, DIMENSION_LAYER.linetype)


def emit_grid_lines(exporter: GridDXFExporter, layout: GridLayout) -> None:
    for start, end in grid_line_segments(layout):
        exporter.add_line(start, end, layout.layers.reference_line)


def emit_dimensions(
    exporter: GridDXFExporter,
    coords: Sequence[float],
    layer: str,
    vertical: bool = False,
    standard: DraftingStandard = DRAFTING,
) -> None:
    """One dimension per pair of adjacent axes.

    X dimensions sit ``dimension_gap`` below the grid; Y dimensions sit the
    same distance to its left with their text rotated to read upwards.
    """
    exporter.add_dimension_style(
        standard.dimstyle_name,
        text_height=standard.dim_text_height,
        arrow_size=standard.dim_arrow_size,
        extension_offset=standard.dim_extension_offset,
    )

    for a, b in zip(coords, coords[1:]):
        mid = (a + b) / 2.0
        if vertical:
            p1, p2 = (0.0, a), (0.0, b)
            base = (-standard.dimension_gap, mid)
            rotation: Optional[float] = standard.vertical_text_rotation
        else:
            p1, p2 = (a, 0.0), (b, 0.0)
            base = (mid, -standard.dimension_gap)
            rotation = None

        exporter.add_dimension(
            p1, p2, base,
            layer=layer,
            dimstyle=standard.dimstyle_name,
            vertical=vertical,
            text_rotation=rotation,
        )


def emit_axis_labels(
    exporter: GridDXFExporter,
    coords: Sequence[float],
    labels: Sequence[str],
    layer: str,
    vertical: bool = False,
    standard: DraftingStandard = DRAFTING,
) -> None:
    """Label every axis just outside the grid: below X axes, left of Y axes."""
    for coord, label in zip(coords, labels):
        if vertical:
            position = (standard.label_offset, coord)
            rotation = standard.vertical_text_rotation
        else:
            position = (coord, standard.label_offset)
            rotation = 0.0

        exporter.add_axis_label(
            position,
            label,
            layer=layer,
            height=standard.label_text_height,
            width_factor=standard.label_width_factor,
            radius=standard.marker_radius,
            rotation=rotation,
        )


# ── Composition ────────────────────────────────────────────────────────

def compose(
    spec: GridSpecification,
    level: AnnotationLevel = AnnotationLevel.FULL,
    exporter: Optional[GridDXFExporter] = None,
    standard: DraftingStandard = DRAFTING,
) -> GridDXFExporter:
    """Draw the grid described by ``spec`` at the requested annotation level."""
    level = AnnotationLevel(level)
    layout = layout_grid(spec)

    if exporter is None:
        exporter = GridDXFExporter(unit="mm")

    emit_layers(exporter, layout.layers)
    emit_grid_lines(exporter, layout)

    dim_layer = layout.layers.dimension
    if level in (AnnotationLevel.DIMENSIONED, AnnotationLevel.FULL):
        emit_dimensions(exporter, layout.xs, dim_layer, standard=standard)

    if level is AnnotationLevel.FULL:
        emit_dimensions(exporter, layout.ys, dim_layer, vertical=True, standard=standard)
        emit_axis_labels(exporter, layout.xs, layout.labels_x, dim_layer, standard=standard)
        emit_axis_labels(
            exporter, layout.ys, layout.labels_y, dim_layer, vertical=True, standard=standard,
        )

    logger.info(
        "Composed %s grid: %d x %d axes, %.0f x %.0f",
        level.value, len(layout.xs), len(layout.ys), layout.width, layout.height,
    )
    return exporter
