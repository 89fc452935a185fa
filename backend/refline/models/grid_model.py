"""Bridge between validated input and the grid specification."""

from __future__ import annotations

from refline.core.grid.spec import GridSpecification
from refline.models.schemas import GridInput
from refline.utils.units import to_mm


def input_to_spec(data: GridInput) -> GridSpecification:
    """Convert loaded input into a GridSpecification with lengths in mm.

    Raises DimensionMismatch / InvalidSpan when counts and spans disagree.
    """
    layer_name = None
    if data.layer_name is not None:
        layer_name = (data.layer_name.ref_line, data.layer_name.dimension)

    return GridSpecification(
        axis_count_x=data.num_x_axis,
        axis_count_y=data.num_y_axis,
        span_x=[to_mm(v, data.unit) for v in data.x_spans],
        span_y=[to_mm(v, data.unit) for v in data.y_spans],
        floor_heights=[to_mm(v, data.unit) for v in data.floor_heights],
        floor_count=data.num_floor,
        axis_labels_x=data.x_axes,
        axis_labels_y=data.y_axes,
        layer_name=layer_name,
        unit=data.unit,
    )
