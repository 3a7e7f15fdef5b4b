# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Conversion of an OpenAPI 3.0 document into its OpenAPI 3.1 form."""

from __future__ import annotations

from routedoc.model.document import OPENAPI_31, Document, MediaType, Operation, Parameter, Response
from routedoc.model.schema import ArraySchema, ObjectSchema, OneOfSchema, PrimitiveSchema, RefSchema, SchemaNode

# ###############
# Public Interface
# ###############

JSON_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"


def convert_to_openapi_31(document: Document) -> Document:
    """Return a 3.1 copy of ``document``.

    ``nullable`` becomes a ``"null"`` member of the type on every schema node,
    the JSON Schema dialect is declared and an empty ``webhooks`` map is
    added. A document that already declares a dialect is returned unchanged.
    """
    if document.json_schema_dialect is not None:
        return document
    paths = {
        path: {method: _convert_operation(operation) for method, operation in methods.items()}
        for path, methods in document.paths.items()
    }
    components = document.components.model_copy(
        update={"schemas": {name: convert_schema(node) for name, node in document.components.schemas.items()}}
    )
    return document.model_copy(
        update={
            "openapi": OPENAPI_31,
            "json_schema_dialect": JSON_SCHEMA_DIALECT,
            "paths": paths,
            "components": components,
            "webhooks": document.webhooks if document.webhooks is not None else {},
        }
    )


def convert_schema(node: SchemaNode) -> SchemaNode:
    """Convert ``node`` and every node nested in it."""
    if isinstance(node, ObjectSchema):
        node = node.model_copy(update={"properties": {k: convert_schema(v) for k, v in node.properties.items()}})
    elif isinstance(node, ArraySchema):
        if node.items is not None:
            node = node.model_copy(update={"items": convert_schema(node.items)})
    elif isinstance(node, OneOfSchema):
        node = node.model_copy(update={"branches": [convert_schema(branch) for branch in node.branches]})
    elif not isinstance(node, (PrimitiveSchema, RefSchema)):
        raise TypeError(f"Unsupported schema node: {node!r}")

    if not node.nullable:
        return node
    if isinstance(node, (RefSchema, OneOfSchema)):
        # Nodes without a type of their own cannot carry a null member.
        return node.model_copy(update={"nullable": False})
    return node.model_copy(update={"nullable": False, "null_type": True})


# ################
# Implementation
# ################


def _convert_content(content: dict[str, MediaType]) -> dict[str, MediaType]:
    return {
        media_type: media.model_copy(update={"schema_node": convert_schema(media.schema_node)})
        for media_type, media in content.items()
    }


def _convert_parameter(parameter: Parameter) -> Parameter:
    return parameter.model_copy(update={"schema_node": convert_schema(parameter.schema_node)})


def _convert_response(response: Response) -> Response:
    return response.model_copy(update={"content": _convert_content(response.content)})


def _convert_operation(operation: Operation) -> Operation:
    update: dict[str, object] = {
        "parameters": [_convert_parameter(p) for p in operation.parameters],
        "responses": {status: _convert_response(r) for status, r in operation.responses.items()},
    }
    if operation.request_body is not None:
        update["request_body"] = operation.request_body.model_copy(
            update={"content": _convert_content(operation.request_body.content)}
        )
    return operation.model_copy(update=update)
