"""Drawing layer name resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

DEFAULT_REF_LINE_LAYER = "通り芯"   # reference / center line
DEFAULT_DIMENSION_LAYER = "寸法"    # dimension / annotation


@dataclass(frozen=True)
class LayerNames:
    reference_line: str = DEFAULT_REF_LINE_LAYER
    dimension: str = DEFAULT_DIMENSION_LAYER


LayerOverride = Union[LayerNames, tuple[Optional[str], Optional[str]], None]


def resolve_layer_names(override: LayerOverride = None) -> LayerNames:
    """Fill in the default for each layer name that is missing or empty.

    Never fails: ``None``, a pair with ``None`` members, or an already
    resolved ``LayerNames`` are all accepted.
    """
    if override is None:
        return LayerNames()
    if isinstance(override, LayerNames):
        ref_line, dimension = override.reference_line, override.dimension
    else:
        ref_line, dimension = override

    return LayerNames(
        reference_line=ref_line or DEFAULT_REF_LINE_LAYER,
        dimension=dimension or DEFAULT_DIMENSION_LAYER,
    )
