# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Document assembly, version conversion and serialization."""

from routedoc.generator.assembler import (
    DocumentAssembler,
    GenerationResult,
    GenerationWarning,
    generate_document,
)
from routedoc.generator.converter import convert_to_openapi_31
from routedoc.generator.serialize import document_to_dict, schema_to_dict, serialize, write_document

__all__ = [
    "DocumentAssembler",
    "GenerationResult",
    "GenerationWarning",
    "generate_document",
    "convert_to_openapi_31",
    "document_to_dict",
    "schema_to_dict",
    "serialize",
    "write_document",
]
