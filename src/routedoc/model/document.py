# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""The assembled API description document."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from pydantic import Field as _Field

from routedoc.model.routes import SecurityScheme
from routedoc.model.schema import SchemaNode

# ###############
# Public Interface
# ###############

OPENAPI_30 = "3.0.0"
OPENAPI_31 = "3.1.0"

SecurityRequirement = dict[str, list[str]]


class MediaType(BaseModel):
    """The schema of one content type of a request or response body."""

    schema_node: SchemaNode


class Link(BaseModel):
    """A design-time link from a response to another operation."""

    operation_id: str | None = None
    operation_ref: str | None = None
    parameters: dict[str, Any] = _Field(default_factory=dict)
    request_body: Any = None
    description: str | None = None


class Response(BaseModel):
    """A response declared for one status code."""

    description: str
    content: dict[str, MediaType] = _Field(default_factory=dict)
    links: dict[str, Link] = _Field(default_factory=dict)


class RequestBody(BaseModel):
    """The request body of an operation."""

    content: dict[str, MediaType]
    required: bool = True
    description: str | None = None


class Parameter(BaseModel):
    """A path or query parameter."""

    name: str
    location: str
    schema_node: SchemaNode
    required: bool = False
    description: str | None = None


class Operation(BaseModel):
    """One HTTP method on one path."""

    operation_id: str
    summary: str | None = None
    tags: list[str] = _Field(default_factory=list)
    parameters: list[Parameter] = _Field(default_factory=list)
    request_body: RequestBody | None = None
    responses: dict[str, Response] = _Field(default_factory=dict)
    # None inherits the document-level requirement; an empty list disables it.
    security: list[SecurityRequirement] | None = None


class Info(BaseModel):
    """Document metadata."""

    title: str = "API Documentation"
    version: str = "1.0.0"
    description: str | None = None
    terms_of_service: str | None = None
    contact: dict[str, Any] | None = None
    license: dict[str, Any] | None = None


class Server(BaseModel):
    url: str
    description: str | None = None


class TagDefinition(BaseModel):
    name: str
    description: str | None = None


class TagGroup(BaseModel):
    """An entry of the ``x-tagGroups`` vendor extension."""

    name: str
    tags: list[str] = _Field(default_factory=list)


class Components(BaseModel):
    schemas: dict[str, SchemaNode] = _Field(default_factory=dict)
    security_schemes: dict[str, SecurityScheme] = _Field(default_factory=dict)


class Document(BaseModel):
    """A complete API description document."""

    openapi: str = OPENAPI_30
    info: Info = _Field(default_factory=Info)
    servers: list[Server] = _Field(default_factory=list)
    paths: dict[str, dict[str, Operation]] = _Field(default_factory=dict)
    components: Components = _Field(default_factory=Components)
    tags: list[TagDefinition] = _Field(default_factory=list)
    tag_groups: list[TagGroup] | None = None
    security: list[SecurityRequirement] | None = None
    json_schema_dialect: str | None = None
    webhooks: dict[str, Any] | None = None

    def operations(self) -> list[Operation]:
        """All operations in path order."""
        return [operation for methods in self.paths.values() for operation in methods.values()]
