"""Pydantic schemas for grid input and API request/response validation."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from refline.config import settings
from refline.core.composer.composer import AnnotationLevel
from refline.utils.units import VALID_UNITS


class LayerNameInput(BaseModel):
    ref_line: Optional[str] = None
    dimension: Optional[str] = None


class GridInput(BaseModel):
    """Grid description as written in the input file."""

    num_x_axis: int = Field(ge=1)
    num_y_axis: int = Field(ge=1)
    num_floor: Optional[int] = Field(default=None, ge=0)
    x_spans: list[float]
    y_spans: list[float]
    floor_heights: list[float] = []
    x_axes: Optional[list[str]] = None
    y_axes: Optional[list[str]] = None
    layer_name: Optional[LayerNameInput] = None
    unit: str = Field(default_factory=lambda: settings.default_unit)

    @field_validator("unit")
    @classmethod
    def must_be_known_unit(cls, v: str) -> str:
        if v not in VALID_UNITS:
            raise ValueError(f"Invalid unit '{v}'. Must be one of: {', '.join(sorted(VALID_UNITS))}")
        return v


class GridRequest(GridInput):
    level: AnnotationLevel = Field(default_factory=lambda: AnnotationLevel(settings.default_level))


class SourceRequest(BaseModel):
    source: str

    @field_validator("source")
    @classmethod
    def source_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Source cannot be empty")
        if len(v) > settings.max_input_length:
            raise ValueError(f"Source exceeds {settings.max_input_length} characters")
        return v


class LayerNamesResponse(BaseModel):
    reference_line: str
    dimension: str


class GenerateResponse(BaseModel):
    level: AnnotationLevel
    x_coords: list[float]
    y_coords: list[float]
    layers: LayerNamesResponse
    bounding_box: list[float]
    grid_geojson: dict
    entity_counts: dict[str, int]
