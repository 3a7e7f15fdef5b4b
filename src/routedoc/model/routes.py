# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data contracts describing the analysed application.

These models are what route, controller, resource and authentication
analysers hand to the generator. They are validated once when a
``GenerationInput`` is constructed and treated as read-only afterwards.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic import Field as _Field

from routedoc.model.descriptors import RuleToken, ValidationRuleSet, parse_rules

# ###############
# Public Interface
# ###############


class RouteParameter(BaseModel):
    """A path parameter such as ``{user}`` or ``{post?}``."""

    name: str
    required: bool = True
    type: str = "string"
    format: str | None = None
    pattern: str | None = None
    description: str | None = None


class RouteAuthentication(BaseModel):
    """Security explicitly assigned to a single route."""

    scheme: str | None = None
    required: bool = True
    scopes: list[str] = _Field(default_factory=list)


class RouteRecord(BaseModel):
    """A registered HTTP route."""

    uri: str
    methods: list[str] = _Field(default_factory=lambda: ["GET"])
    name: str | None = None
    controller: str | None = None
    action: str | None = None
    middleware: list[str] = _Field(default_factory=list)
    parameters: list[RouteParameter] = _Field(default_factory=list)
    tags: list[str] | None = None
    authentication: RouteAuthentication | None = None

    @property
    def controller_key(self) -> str | None:
        """Key of the matching controller analysis (``Controller@action``)."""
        if not self.controller:
            return None
        return f"{self.controller}@{self.action or '__invoke'}"


class PaginationKind(Enum):
    """Paginator shapes a collection response may be wrapped in."""

    LENGTH_AWARE = "length_aware"
    SIMPLE = "simple"
    CURSOR = "cursor"


class EnumParameter(BaseModel):
    """A parameter whose value is constrained to a fixed set of values."""

    name: str
    type: str = "string"
    values: list[Any] = _Field(default_factory=list)
    required: bool = False
    description: str | None = None


class QueryParameter(BaseModel):
    """A query-string parameter detected in a controller action."""

    name: str
    type: str = "string"
    required: bool = False
    default: Any = None
    enum: list[Any] | None = None
    description: str | None = None
    rules: list[RuleToken] = _Field(default_factory=list)

    @field_validator("rules", mode="before")
    @classmethod
    def _parse_rules(cls, value: Any) -> list[RuleToken]:
        return parse_rules(value)


class ResponseLink(BaseModel):
    """A link from one response to a follow-up operation."""

    status_code: str
    name: str
    operation_id: str | None = None
    operation_ref: str | None = None
    parameters: dict[str, Any] = _Field(default_factory=dict)
    request_body: Any = None
    description: str | None = None

    @field_validator("status_code", mode="before")
    @classmethod
    def _status_as_string(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    @model_validator(mode="after")
    def _check_target(self) -> ResponseLink:
        if (self.operation_id is None) == (self.operation_ref is None):
            raise ValueError("a response link needs exactly one of operation_id or operation_ref")
        return self


class ControllerAnalysis(BaseModel):
    """What was learned about one controller action."""

    response_type: str | None = None
    form_request: str | None = None
    inline_rules: dict[str, list[RuleToken]] = _Field(default_factory=dict)
    resource: str | None = None
    is_collection: bool = False
    pagination: PaginationKind | None = None
    enum_parameters: list[EnumParameter] = _Field(default_factory=list)
    query_parameters: list[QueryParameter] = _Field(default_factory=list)
    response_links: list[ResponseLink] = _Field(default_factory=list)
    error_responses: dict[str, str] = _Field(default_factory=dict)

    @field_validator("inline_rules", mode="before")
    @classmethod
    def _parse_rule_map(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        return {str(name): parse_rules(raw) for name, raw in value.items()}

    @field_validator("error_responses", mode="before")
    @classmethod
    def _status_keys_as_strings(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        return {str(status): description for status, description in value.items()}


class ResourceProperty(BaseModel):
    """One property of a resource or transformer output."""

    type: str = "string"
    format: str | None = None
    example: Any = None
    description: str | None = None
    nullable: bool = False
    enum: list[Any] | None = None
    properties: dict[str, ResourceProperty] = _Field(default_factory=dict)
    items: ResourceProperty | None = None


class ResourceInclude(BaseModel):
    """A relation a transformer can embed on request."""

    collection: bool = False
    properties: dict[str, ResourceProperty] = _Field(default_factory=dict)


class ResourceAnalysis(BaseModel):
    """The output shape of a JSON resource or a Fractal transformer."""

    kind: Literal["resource", "fractal"] = "resource"
    properties: dict[str, ResourceProperty] = _Field(default_factory=dict)
    custom_example: Any = None
    available_includes: dict[str, ResourceInclude] = _Field(default_factory=dict)
    default_includes: list[str] = _Field(default_factory=list)


class SecurityScheme(BaseModel):
    """A declared security scheme, rendered into ``components.securitySchemes``."""

    model_config = ConfigDict(populate_by_name=True)

    type: str
    scheme: str | None = None
    bearer_format: str | None = _Field(default=None, alias="bearerFormat")
    location: str | None = _Field(default=None, alias="in")
    name: str | None = None
    description: str | None = None
    flows: dict[str, Any] | None = None
    open_id_connect_url: str | None = _Field(default=None, alias="openIdConnectUrl")


class AuthenticationAnalysis(BaseModel):
    """Authentication schemes of the application and the global default."""

    schemes: dict[str, SecurityScheme] = _Field(default_factory=dict)
    default_scheme: str | None = None
    default_required: bool = False


class GenerationInput(BaseModel):
    """Everything the generator consumes for one pass."""

    routes: list[RouteRecord] | None = _Field(default_factory=list)
    controllers: dict[str, ControllerAnalysis] = _Field(default_factory=dict)
    resources: dict[str, ResourceAnalysis] = _Field(default_factory=dict)
    form_requests: dict[str, ValidationRuleSet] = _Field(default_factory=dict)
    authentication: AuthenticationAnalysis = _Field(default_factory=AuthenticationAnalysis)


ResourceProperty.model_rebuild()
