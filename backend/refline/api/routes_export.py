"""Export endpoints — generate DXF files for download."""

import io

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from refline.api.errors import http_error
from refline.core.composer.composer import AnnotationLevel, compose
from refline.core.errors import RefLineError
from refline.core.parser.loader import parse_grid
from refline.models.grid_model import input_to_spec
from refline.models.schemas import GridRequest, SourceRequest

router = APIRouter(tags=["export"])


def _build_dxf_response(spec, level) -> StreamingResponse:
    """Shared logic: compose the grid and return it as a streaming download."""
    exporter = compose(spec, level)
    dxf_bytes = exporter.to_bytes()

    return StreamingResponse(
        io.BytesIO(dxf_bytes),
        media_type="application/dxf",
        headers={"Content-Disposition": 'attachment; filename="refline.dxf"'},
    )


@router.post("/export/dxf")
async def export_dxf(req: GridRequest):
    """Draw a grid from JSON input and export it as a DXF file."""
    try:
        spec = input_to_spec(req)
        return _build_dxf_response(spec, req.level)
    except RefLineError as e:
        raise http_error(e)


@router.post("/export/dxf/from-source")
async def export_dxf_from_source(req: SourceRequest, level: AnnotationLevel = AnnotationLevel.FULL):
    """Parse a TOML grid description and export it as a DXF file."""
    try:
        spec = parse_grid(req.source)
        return _build_dxf_response(spec, level)
    except RefLineError as e:
        raise http_error(e)
