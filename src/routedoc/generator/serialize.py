# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Rendering of documents and schema nodes into plain dictionaries, JSON and YAML.

Optional keys are only emitted when set, so rendered documents stay close to
what a human would write by hand.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from routedoc.model.document import (
    Components,
    Document,
    Info,
    Link,
    MediaType,
    Operation,
    Parameter,
    RequestBody,
    Response,
)
from routedoc.model.routes import SecurityScheme
from routedoc.model.schema import (
    ArraySchema,
    ObjectSchema,
    OneOfSchema,
    PrimitiveSchema,
    RefSchema,
    SchemaNode,
)

# ###############
# Public Interface
# ###############

YAML_SUFFIXES = (".yaml", ".yml")


def serialize(document: Document, fmt: str = "json") -> str:
    """Render ``document`` as ``"json"`` or ``"yaml"`` text."""
    data = document_to_dict(document)
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    if fmt == "json":
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    raise ValueError(f"Unsupported output format: {fmt!r}")


def write_document(document: Document, path: Path) -> None:
    """Write ``document`` to *path* as YAML or JSON depending on the suffix, creating parent directories."""
    fmt = "yaml" if path.suffix.lower() in YAML_SUFFIXES else "json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(document, fmt), encoding="utf-8")


def document_to_dict(document: Document) -> dict[str, Any]:
    d: dict[str, Any] = {"openapi": document.openapi}
    if document.json_schema_dialect is not None:
        d["jsonSchemaDialect"] = document.json_schema_dialect
    d["info"] = _info_to_dict(document.info)
    d["servers"] = [_without_none({"url": s.url, "description": s.description}) for s in document.servers]
    if document.security is not None:
        d["security"] = document.security
    d["tags"] = [_without_none({"name": t.name, "description": t.description}) for t in document.tags]
    if document.tag_groups is not None:
        d["x-tagGroups"] = [{"name": g.name, "tags": g.tags} for g in document.tag_groups]
    d["paths"] = {
        path: {method: _operation_to_dict(operation) for method, operation in methods.items()}
        for path, methods in document.paths.items()
    }
    d["components"] = _components_to_dict(document.components)
    if document.webhooks is not None:
        d["webhooks"] = document.webhooks
    return d


def schema_to_dict(node: SchemaNode) -> dict[str, Any]:
    """Render one schema node, recursing into nested nodes."""
    if isinstance(node, RefSchema):
        d: dict[str, Any] = {"$ref": node.ref}
        _add_annotations(d, node)
        return d
    if isinstance(node, OneOfSchema):
        d = {"oneOf": [schema_to_dict(branch) for branch in node.branches]}
        if node.discriminator is not None:
            disc: dict[str, Any] = {"propertyName": node.discriminator.property_name}
            if node.discriminator.mapping:
                disc["mapping"] = dict(node.discriminator.mapping)
            d["discriminator"] = disc
        _add_annotations(d, node)
        return d
    if isinstance(node, ObjectSchema):
        d = {"type": _type_value("object", node)}
        if node.properties:
            d["properties"] = {name: schema_to_dict(prop) for name, prop in node.properties.items()}
        if node.required:
            d["required"] = list(node.required)
        _add_annotations(d, node)
        return d
    if isinstance(node, ArraySchema):
        d = {"type": _type_value("array", node)}
        if node.items is not None:
            d["items"] = schema_to_dict(node.items)
        if node.min_items is not None:
            d["minItems"] = node.min_items
        if node.max_items is not None:
            d["maxItems"] = node.max_items
        _add_annotations(d, node)
        return d
    if isinstance(node, PrimitiveSchema):
        d = {"type": _type_value(node.type.value, node)}
        for attr, key in _PRIMITIVE_KEYS:
            value = getattr(node, attr)
            if value is not None:
                d[key] = value
        _add_annotations(d, node)
        return d
    raise TypeError(f"Unsupported schema node: {node!r}")


# ################
# Implementation
# ################

_PRIMITIVE_KEYS = (
    ("format", "format"),
    ("enum", "enum"),
    ("pattern", "pattern"),
    ("min_length", "minLength"),
    ("max_length", "maxLength"),
    ("minimum", "minimum"),
    ("maximum", "maximum"),
    ("exclusive_minimum", "exclusiveMinimum"),
    ("exclusive_maximum", "exclusiveMaximum"),
    ("max_size", "maxSize"),
    ("content_media_type", "contentMediaType"),
)


def _type_value(name: str, node: SchemaNode) -> str | list[str]:
    return [name, "null"] if node.null_type else name


def _add_annotations(d: dict[str, Any], node: SchemaNode) -> None:
    if node.title is not None:
        d["title"] = node.title
    if node.description is not None:
        d["description"] = node.description
    if node.nullable and not node.null_type:
        d["nullable"] = True
    if node.read_only:
        d["readOnly"] = True
    if node.default is not None:
        d["default"] = node.default
    if node.example is not None:
        d["example"] = node.example


def _without_none(d: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in d.items() if value is not None}


def _info_to_dict(info: Info) -> dict[str, Any]:
    return _without_none(
        {
            "title": info.title,
            "version": info.version,
            "description": info.description,
            "termsOfService": info.terms_of_service,
            "contact": info.contact,
            "license": info.license,
        }
    )


def _media_to_dict(content: dict[str, MediaType]) -> dict[str, Any]:
    return {media_type: {"schema": schema_to_dict(media.schema_node)} for media_type, media in content.items()}


def _parameter_to_dict(parameter: Parameter) -> dict[str, Any]:
    d: dict[str, Any] = {"name": parameter.name, "in": parameter.location, "required": parameter.required}
    if parameter.description is not None:
        d["description"] = parameter.description
    d["schema"] = schema_to_dict(parameter.schema_node)
    return d


def _request_body_to_dict(body: RequestBody) -> dict[str, Any]:
    d: dict[str, Any] = {"required": body.required}
    if body.description is not None:
        d["description"] = body.description
    d["content"] = _media_to_dict(body.content)
    return d


def _link_to_dict(link: Link) -> dict[str, Any]:
    d: dict[str, Any] = {}
    if link.operation_id is not None:
        d["operationId"] = link.operation_id
    if link.operation_ref is not None:
        d["operationRef"] = link.operation_ref
    if link.parameters:
        d["parameters"] = dict(link.parameters)
    if link.request_body is not None:
        d["requestBody"] = link.request_body
    if link.description is not None:
        d["description"] = link.description
    return d


def _response_to_dict(response: Response) -> dict[str, Any]:
    d: dict[str, Any] = {"description": response.description}
    if response.content:
        d["content"] = _media_to_dict(response.content)
    if response.links:
        d["links"] = {name: _link_to_dict(link) for name, link in response.links.items()}
    return d


def _operation_to_dict(operation: Operation) -> dict[str, Any]:
    d: dict[str, Any] = {}
    if operation.tags:
        d["tags"] = list(operation.tags)
    if operation.summary is not None:
        d["summary"] = operation.summary
    d["operationId"] = operation.operation_id
    if operation.parameters:
        d["parameters"] = [_parameter_to_dict(p) for p in operation.parameters]
    if operation.request_body is not None:
        d["requestBody"] = _request_body_to_dict(operation.request_body)
    d["responses"] = {status: _response_to_dict(r) for status, r in operation.responses.items()}
    if operation.security is not None:
        d["security"] = operation.security
    return d


def _security_scheme_to_dict(scheme: SecurityScheme) -> dict[str, Any]:
    return scheme.model_dump(by_alias=True, exclude_none=True)


def _components_to_dict(components: Components) -> dict[str, Any]:
    return {
        "schemas": {name: schema_to_dict(node) for name, node in components.schemas.items()},
        "securitySchemes": {
            name: _security_scheme_to_dict(scheme) for name, scheme in components.security_schemes.items()
        },
    }
