"""DXF export engine — the document sink for reference-line drawings.

The composer only ever appends to the document through this class:
layers, one dimension style, and LINE / DIMENSION / TEXT / CIRCLE
entities. Nothing is read back during composition.

Entity structure per element:
  Grid line:  LINE on the reference-line layer
  Dimension:  DIMENSION (linear, rendered) on the dimension layer
  Axis label: TEXT + CIRCLE sharing one anchor, on the dimension layer
"""

from __future__ import annotations

import io
import logging
from typing import Optional

import ezdxf
from ezdxf.enums import TextEntityAlignment

from refline.config import settings
from refline.core.errors import SinkError
from refline.core.exporter.dxf_layers import DXF_UNITS

logger = logging.getLogger(__name__)


class GridDXFExporter:
    """Builds a DXF document from reference-line grid primitives."""

    def __init__(self, unit: str = "mm", dxfversion: Optional[str] = None):
        self.doc = ezdxf.new(dxfversion or settings.dxf_version, setup=True)
        self.msp = self.doc.modelspace()
        self.unit = unit

        self.doc.header["$INSUNITS"] = DXF_UNITS.get(unit, 4)
        self.doc.header["$LTSCALE"] = 1.0
        self.doc.header["$DIMSCALE"] = 1.0

    # ── Setup ───────────────────────────────────────────────────────────

    def add_layer(self, name: str, color: int, linetype: Optional[str] = None):
        """Create a layer. A name that already exists is left untouched."""
        if name in self.doc.layers:
            return
        if linetype is None:
            self.doc.layers.add(name, color=color)
        else:
            self.doc.layers.add(name, color=color, linetype=linetype)

    def add_dimension_style(
        self,
        name: str,
        text_height: float,
        arrow_size: Optional[float] = None,
        extension_offset: Optional[float] = None,
    ):
        """Register a dimension style once; repeated calls are no-ops."""
        if name in self.doc.dimstyles:
            return

        style = self.doc.dimstyles.new(name)
        style.dxf.dimtxt = text_height
        if arrow_size is not None:
            style.dxf.dimasz = arrow_size
        if extension_offset is not None:
            style.dxf.dimexo = extension_offset
        style.dxf.dimdec = 0         # whole millimeters

    # ── Entities ────────────────────────────────────────────────────────

    def add_line(self, start: tuple, end: tuple, layer: str):
        self.msp.add_line(start, end, dxfattribs={"layer": layer})

    def add_dimension(
        self,
        p1: tuple,
        p2: tuple,
        base: tuple,
        layer: str,
        dimstyle: str,
        vertical: bool = False,
        text_rotation: Optional[float] = None,
    ):
        """Dimension the distance between two points on one axis.

        ``base`` is the anchor the dimension line and its text pass through.
        Vertical dimensions measure along Y (angle 90).
        """
        dim = self.msp.add_linear_dim(
            base=base,
            p1=p1,
            p2=p2,
            angle=90 if vertical else 0,
            text_rotation=text_rotation,
            dimstyle=dimstyle,
            dxfattribs={"layer": layer},
        )
        dim.render()

    def add_axis_label(
        self,
        position: tuple,
        text: str,
        layer: str,
        height: float,
        width_factor: float,
        radius: float,
        rotation: float = 0.0,
    ):
        """Axis identifier centered in a marker circle."""
        self.msp.add_text(
            text,
            height=height,
            rotation=rotation,
            dxfattribs={
                "layer": layer,
                "width": width_factor,
            },
        ).set_placement(position, align=TextEntityAlignment.MIDDLE_CENTER)

        self.msp.add_circle(position, radius, dxfattribs={"layer": layer})

    def count(self, dxftype: str) -> int:
        """Number of modelspace entities of the given DXF type."""
        return len(self.msp.query(dxftype))

    # ── Output ─────────────────────────────────────────────────────────

    def save(self, filepath: str):
        """Save DXF to a file on disk."""
        try:
            self.doc.saveas(filepath)
        except OSError as exc:
            raise SinkError(str(filepath), exc.strerror or str(exc)) from exc
        logger.info("Wrote %s", filepath)

    def to_bytes(self) -> bytes:
        """Serialize DXF to bytes for HTTP response streaming."""
        stream = io.StringIO()
        self.doc.write(stream)
        stream.seek(0)
        return stream.read().encode("utf-8")
