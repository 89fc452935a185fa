"""Parse endpoint — validates a TOML grid description without drawing it."""

from fastapi import APIRouter

from refline.api.errors import http_error
from refline.core.errors import RefLineError
from refline.core.parser.loader import parse_grid
from refline.models.schemas import SourceRequest

router = APIRouter(tags=["parse"])


@router.post("/parse")
async def parse_source(req: SourceRequest):
    """Parse and validate a grid description. Returns a summary or errors."""
    try:
        spec = parse_grid(req.source)
    except RefLineError as e:
        raise http_error(e)

    return {
        "valid": True,
        "unit": spec.unit,
        "axis_count_x": spec.axis_count_x,
        "axis_count_y": spec.axis_count_y,
        "floor_count": spec.floor_count if spec.floor_count is not None else len(spec.floor_heights),
        "has_labels": spec.axis_labels_x is not None or spec.axis_labels_y is not None,
    }
