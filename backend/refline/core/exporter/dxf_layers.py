"""DXF layer, linetype and drafting-standard definitions for grid drawings.

ACI color index reference:
  1=red  2=yellow  3=green  4=cyan  5=blue  6=magenta  7=white

Reference lines are drawn with the CENTER linetype (long dash, short dash),
which ezdxf.new(setup=True) already defines.
Dimensions, axis labels and their marker circles share the dimension layer.
All distances are in drawing units (mm).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class LayerDef:
    """Properties applied to one of the two grid layers."""
    color: int
    linetype: Optional[str] = None    # None = layer default (Continuous)


@dataclass(frozen=True)
class DraftingStandard:
    """Placement and sizing conventions for grid annotations."""

    # Dimensions
    dimstyle_name: str = "REFLINE_DIM"
    dim_text_height: float = 1000.0
    dim_arrow_size: float = 500.0
    dim_extension_offset: float = 2000.0
    dimension_gap: float = 5000.0       # dimension line distance from the axis origin

    # Axis labels
    label_offset: float = -7000.0       # label row/column position outside the grid
    label_text_height: float = 1000.0
    label_width_factor: float = 0.85
    marker_radius: float = 1000.0

    # Text on vertical (Y-axis) annotations reads bottom-to-top
    vertical_text_rotation: float = 270.0


DRAFTING = DraftingStandard()


# ── Layer definitions ───────────────────────────────────────────────────

REF_LINE_LAYER = LayerDef(color=3, linetype="CENTER")
DIMENSION_LAYER = LayerDef(color=3)


# ── DXF unit mapping ───────────────────────────────────────────────────

DXF_UNITS = {
    "mm": 4,
    "cm": 5,
    "m": 6,
    "ft": 2,
    "in": 1,
}
