# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema node representations used throughout the generated document.

Every schema that ends up in a document (request bodies, responses,
parameters and reusable components) is one of the variants of the closed
``SchemaNode`` union. Builders produce nodes, the serializer renders them.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############

REF_PREFIX = "#/components/schemas/"


class PrimitiveKind(Enum):
    """JSON types a primitive schema node can take."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"


class _SchemaBase(BaseModel):
    """Annotations shared by every schema node."""

    title: str | None = None
    description: str | None = None
    example: Any = None
    default: Any = None
    nullable: bool = False
    read_only: bool = False
    # Renders as ``type: [T, "null"]`` instead of ``nullable: true``.
    null_type: bool = False


class ObjectSchema(_SchemaBase):
    """An object with named properties."""

    kind: Literal["object"] = "object"
    properties: dict[str, SchemaNode] = _Field(default_factory=dict)
    required: list[str] = _Field(default_factory=list)


class ArraySchema(_SchemaBase):
    """A list of items, optionally with a known item schema."""

    kind: Literal["array"] = "array"
    items: SchemaNode | None = None
    min_items: int | None = None
    max_items: int | None = None


class PrimitiveSchema(_SchemaBase):
    """A scalar value with optional format, enum and bounds."""

    kind: Literal["primitive"] = "primitive"
    type: PrimitiveKind = PrimitiveKind.STRING
    format: str | None = None
    enum: list[Any] | None = None
    pattern: str | None = None
    min_length: int | None = None
    max_length: int | None = None
    minimum: int | float | None = None
    maximum: int | float | None = None
    exclusive_minimum: int | float | None = None
    exclusive_maximum: int | float | None = None
    max_size: int | None = None
    content_media_type: str | None = None


class Discriminator(BaseModel):
    """Selects a ``oneOf`` branch by the value of a property."""

    property_name: str
    mapping: dict[str, str] = _Field(default_factory=dict)


class OneOfSchema(_SchemaBase):
    """A discriminated union of alternative schemas."""

    kind: Literal["one_of"] = "one_of"
    branches: list[SchemaNode] = _Field(default_factory=list)
    discriminator: Discriminator | None = None


class RefSchema(_SchemaBase):
    """A reference to a named component schema."""

    kind: Literal["ref"] = "ref"
    name: str

    @property
    def ref(self) -> str:
        return f"{REF_PREFIX}{self.name}"


SchemaNode = Annotated[
    ObjectSchema | ArraySchema | PrimitiveSchema | OneOfSchema | RefSchema,
    _Field(discriminator="kind"),
]

# Rebuild models that use forward references so Pydantic resolves them correctly.
ObjectSchema.model_rebuild()
ArraySchema.model_rebuild()
OneOfSchema.model_rebuild()
