# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loading of generation input bundles from YAML or JSON files."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from routedoc.model.routes import GenerationInput

# ###############
# Public Interface
# ###############


class InputError(Exception):
    """Raised when an input bundle cannot be read or is invalid."""


def load_input(path: Path) -> GenerationInput:
    """Load and validate a generation input bundle from disk.

    JSON files are read with the YAML loader since JSON is valid YAML. An
    empty file is treated as a bundle without routes.

    Args:
        path: Path to the YAML or JSON input file.

    Returns:
        A validated GenerationInput instance.

    Raises:
        InputError: If the file cannot be read, contains invalid YAML,
            or does not conform to the expected structure.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InputError(f"Cannot read input '{path}': {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise InputError(f"Invalid YAML in input '{path}': {exc}") from exc

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InputError(f"Input '{path}' must contain a mapping at the top level.")

    try:
        return GenerationInput.model_validate(data)
    except ValidationError as exc:
        raise InputError(f"Invalid input '{path}': {exc}") from exc
