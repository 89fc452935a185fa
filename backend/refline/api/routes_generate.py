"""Generate endpoint — grid coordinates and geometry preview."""

from fastapi import APIRouter
from shapely.geometry import MultiLineString, mapping

from refline.api.errors import http_error
from refline.core.composer.composer import compose, grid_line_segments, layout_grid
from refline.core.errors import RefLineError
from refline.models.grid_model import input_to_spec
from refline.models.schemas import GenerateResponse, GridRequest

router = APIRouter(tags=["generate"])


@router.post("/generate", response_model=GenerateResponse)
async def generate(req: GridRequest):
    """Derive axis coordinates and report what the drawing will contain."""
    try:
        spec = input_to_spec(req)
        layout = layout_grid(spec)
        exporter = compose(spec, req.level)
    except RefLineError as e:
        raise http_error(e)

    lines = MultiLineString(grid_line_segments(layout))

    return {
        "level": req.level,
        "x_coords": layout.xs,
        "y_coords": layout.ys,
        "layers": {
            "reference_line": layout.layers.reference_line,
            "dimension": layout.layers.dimension,
        },
        "bounding_box": list(lines.bounds),
        "grid_geojson": mapping(lines),
        "entity_counts": {
            kind: exporter.count(kind)
            for kind in ("LINE", "DIMENSION", "TEXT", "CIRCLE")
        },
    }
