# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Response schemas for JSON resources and Fractal transformers."""

from __future__ import annotations

from collections.abc import Mapping

from routedoc.model.routes import PaginationKind, ResourceAnalysis, ResourceInclude, ResourceProperty
from routedoc.model.schema import ArraySchema, ObjectSchema, PrimitiveKind, PrimitiveSchema, SchemaNode

# ###############
# Public Interface
# ###############

FRACTAL = "fractal"


def build_item_schema(resource: ResourceAnalysis) -> ObjectSchema:
    """Schema of a single resource item, including Fractal includes and any custom example."""
    properties = properties_schema(resource.properties)
    if resource.kind == FRACTAL:
        properties.update(_include_properties(resource))
    return ObjectSchema(properties=properties, example=resource.custom_example)


def build_resource_schema(
    resource: ResourceAnalysis,
    *,
    is_collection: bool = False,
    pagination: PaginationKind | None = None,
) -> ObjectSchema | ArraySchema:
    """Full response schema of a resource, inlined rather than referenced."""
    return wrap_resource_reference(
        build_item_schema(resource),
        kind=resource.kind,
        is_collection=is_collection,
        pagination=pagination,
    )


def wrap_resource_reference(
    item: SchemaNode,
    *,
    kind: str = "resource",
    is_collection: bool = False,
    pagination: PaginationKind | None = None,
) -> SchemaNode:
    """Wrap an item schema (usually a reference) in its collection or pagination envelope.

    Pagination implies a collection. JSON resources use the paginator shape
    selected by ``pagination``; Fractal transformers nest the payload under
    ``data`` with pagination metadata under ``meta.pagination``.
    """
    is_collection = is_collection or pagination is not None
    if kind == FRACTAL:
        data = ArraySchema(items=item) if is_collection else item
        properties: dict[str, SchemaNode] = {"data": data}
        if is_collection and pagination is not None:
            properties["meta"] = ObjectSchema(properties={"pagination": fractal_pagination_schema()})
        return ObjectSchema(properties=properties)
    if pagination is not None:
        return pagination_schema(pagination, item)
    if is_collection:
        return ArraySchema(items=item)
    return item


def pagination_schema(kind: PaginationKind, item: SchemaNode) -> ObjectSchema:
    """A Laravel paginator response carrying ``item`` entries under ``data``."""
    properties: dict[str, SchemaNode] = {"data": ArraySchema(items=item)}
    if kind is PaginationKind.LENGTH_AWARE:
        properties.update(
            {
                "current_page": _integer(example=1),
                "first_page_url": _uri(),
                "from": _integer(nullable=True),
                "last_page": _integer(),
                "last_page_url": _uri(),
                "links": ArraySchema(
                    items=ObjectSchema(
                        properties={
                            "url": _uri(nullable=True),
                            "label": PrimitiveSchema(),
                            "active": PrimitiveSchema(type=PrimitiveKind.BOOLEAN),
                        }
                    )
                ),
                "next_page_url": _uri(nullable=True),
                "path": _uri(),
                "per_page": _integer(),
                "prev_page_url": _uri(nullable=True),
                "to": _integer(nullable=True),
                "total": _integer(),
            }
        )
    elif kind is PaginationKind.SIMPLE:
        properties.update(
            {
                "first_page_url": _uri(),
                "from": _integer(nullable=True),
                "next_page_url": _uri(nullable=True),
                "path": _uri(),
                "per_page": _integer(),
                "prev_page_url": _uri(nullable=True),
                "to": _integer(nullable=True),
            }
        )
    else:
        properties.update(
            {
                "path": _uri(),
                "per_page": _integer(),
                "next_cursor": PrimitiveSchema(nullable=True),
                "next_page_url": _uri(nullable=True),
                "prev_cursor": PrimitiveSchema(nullable=True),
                "prev_page_url": _uri(nullable=True),
            }
        )
    return ObjectSchema(properties=properties)


def fractal_pagination_schema() -> ObjectSchema:
    return ObjectSchema(
        properties={
            "total": _integer(example=100),
            "count": _integer(example=15),
            "per_page": _integer(example=15),
            "current_page": _integer(example=1),
            "total_pages": _integer(example=7),
            "links": ObjectSchema(
                properties={
                    "previous": _uri(nullable=True),
                    "next": _uri(nullable=True),
                }
            ),
        }
    )


def property_schema(prop: ResourceProperty) -> SchemaNode:
    """Schema of one resource property, recursing into nested objects and arrays."""
    type_name = _TYPE_ALIASES.get(prop.type.lower(), prop.type.lower())
    common = {"description": prop.description, "example": prop.example, "nullable": prop.nullable}
    if type_name == "object":
        return ObjectSchema(properties=properties_schema(prop.properties), **common)
    if type_name == "array":
        items = property_schema(prop.items) if prop.items is not None else None
        return ArraySchema(items=items, **common)
    primitive = PrimitiveKind(type_name) if type_name in _PRIMITIVE_NAMES else PrimitiveKind.STRING
    return PrimitiveSchema(type=primitive, format=prop.format, enum=prop.enum, **common)


def properties_schema(properties: Mapping[str, ResourceProperty]) -> dict[str, SchemaNode]:
    return {name: property_schema(prop) for name, prop in properties.items()}


# ################
# Implementation
# ################

_TYPE_ALIASES = {"int": "integer", "float": "number", "double": "number", "bool": "boolean"}
_PRIMITIVE_NAMES = frozenset(kind.value for kind in PrimitiveKind)


def _integer(*, example: int | None = None, nullable: bool = False) -> PrimitiveSchema:
    return PrimitiveSchema(type=PrimitiveKind.INTEGER, example=example, nullable=nullable)


def _uri(*, nullable: bool = False) -> PrimitiveSchema:
    return PrimitiveSchema(format="uri", nullable=nullable)


def _include_properties(resource: ResourceAnalysis) -> dict[str, SchemaNode]:
    includes: dict[str, SchemaNode] = {}
    for name, include in resource.available_includes.items():
        if name in resource.default_includes:
            description = f"Default include. Always embedded as '{name}'"
        else:
            description = f"Optional include. Request with ?include={name}"
        includes[name] = _include_schema(include, description)
    for name in resource.default_includes:
        if name not in includes:
            includes[name] = _include_schema(ResourceInclude(), f"Default include. Always embedded as '{name}'")
    return includes


def _include_schema(include: ResourceInclude, description: str) -> SchemaNode:
    item = ObjectSchema(properties=properties_schema(include.properties))
    if include.collection:
        return ArraySchema(items=item, description=description)
    return item.model_copy(update={"description": description})
