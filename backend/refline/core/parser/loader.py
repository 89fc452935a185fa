"""Load grid descriptions from TOML files, TOML text or plain mappings."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any, Mapping, Union

from pydantic import ValidationError

from refline.core.errors import ConfigurationError
from refline.core.grid.spec import GridSpecification
from refline.models.grid_model import input_to_spec
from refline.models.schemas import GridInput

logger = logging.getLogger(__name__)


def load_grid(path: Union[str, Path]) -> GridSpecification:
    """Read and validate a grid description file."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Cannot read '{path}': {exc}") from exc

    logger.debug("Loaded %s (%d characters)", path, len(text))
    return parse_grid(text)


def parse_grid(text: str) -> GridSpecification:
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Invalid TOML: {exc}") from exc
    return grid_from_mapping(data)


def grid_from_mapping(data: Mapping[str, Any]) -> GridSpecification:
    try:
        grid_input = GridInput.model_validate(dict(data))
    except ValidationError as exc:
        raise ConfigurationError(format_validation_error(exc)) from exc
    return input_to_spec(grid_input)


def format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    return "Invalid grid description: " + "; ".join(parts)
