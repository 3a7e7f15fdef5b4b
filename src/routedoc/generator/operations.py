# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Per-operation building blocks: paths, identifiers, tags, parameters, security and error responses."""

from __future__ import annotations

import fnmatch
import re
from collections.abc import Iterable
from dataclasses import dataclass

from routedoc.config import GeneratorConfig
from routedoc.model.descriptors import ParameterDescriptor, ParameterKind
from routedoc.model.document import MediaType, Parameter, Response, SecurityRequirement
from routedoc.model.routes import (
    AuthenticationAnalysis,
    ControllerAnalysis,
    EnumParameter,
    QueryParameter,
    RouteParameter,
    RouteRecord,
    SecurityScheme,
)
from routedoc.model.schema import ArraySchema, ObjectSchema, PrimitiveKind, PrimitiveSchema, SchemaNode
from routedoc.schema.parameters import descriptor_schema

# ###############
# Public Interface
# ###############

JSON_MEDIA_TYPE = "application/json"

DEFAULT_BEARER_SCHEME_NAME = "bearerAuth"
DEFAULT_BEARER_SCHEME = SecurityScheme(
    type="http",
    scheme="bearer",
    bearer_format="JWT",
    description="Bearer token authentication",
)

STATUS_DESCRIPTIONS = {
    "200": "Successful response",
    "201": "Created",
    "204": "No content",
    "401": "Unauthorized",
    "403": "Forbidden",
    "404": "Not Found",
    "422": "Validation Error",
    "500": "Internal Server Error",
}

BODY_METHODS = frozenset({"post", "put", "patch"})
SUPPORTED_METHODS = ("get", "post", "put", "patch", "delete")


def to_openapi_path(uri: str) -> str:
    """``users/{user?}`` -> ``/users/{user}``."""
    return "/" + _OPTIONAL_PARAMETER.sub(r"{\1}", uri.strip("/"))


def operation_id(route: RouteRecord, method: str) -> str:
    """camelCased route name, or camelCased ``method_uri`` for unnamed routes."""
    if route.name:
        return camel(route.name.replace(".", "_"))
    uri = route.uri.replace("/", "_")
    for char in "{}?":
        uri = uri.replace(char, "")
    return camel(f"{method.lower()}_{uri}")


def summary(route: RouteRecord, method: str) -> str:
    """Human summary such as ``"List all User"`` or ``"Create a new Post"``."""
    method = method.lower()
    resource = resource_name(route.uri, method)
    if method == "get":
        if _has_trailing_parameter(route.uri):
            return f"Get {resource} by ID"
        segments = _meaningful_segments(route.uri)
        list_action = (route.action or "").lower() in ("index", "list", "search", "browse")
        if segments and not list_action and _is_singular(segments[-1]):
            return f"Get {resource}"
        return f"List all {resource}"
    if method == "post":
        return f"Create a new {resource}"
    if method in ("put", "patch"):
        return f"Update {resource}"
    if method == "delete":
        return f"Delete {resource}"
    return f"{method.capitalize()} {resource}"


def resource_name(uri: str, method: str | None = None) -> str:
    segments = _meaningful_segments(uri)
    if not segments:
        return "Resource"
    resource = studly(singular(segments[-1]))
    if method == "post" and len(segments) >= 2 and re.search(r"[-_]", segments[-1]):
        resource = studly(singular(segments[-2])) + resource
    return resource


def resolve_tags(route: RouteRecord, config: GeneratorConfig) -> list[str]:
    """Tags of an operation, deduplicated in first-seen order.

    Explicit route tags win, then the configured tag map, then the controller
    name, then the leading URI segments up to the configured depth.
    """
    if route.tags:
        return _unique(route.tags)
    mapped = _mapped_tags(route.uri, config.tag_map)
    if mapped is not None:
        return _unique(mapped)
    if route.controller:
        name = re.split(r"[\\./]", route.controller)[-1].replace("Controller", "")
        if name:
            return [studly(singular(name))]
    segments = _meaningful_segments(route.uri)[: config.tag_depth]
    return _unique(studly(singular(segment)) for segment in segments)


def build_parameters(route: RouteRecord, controller: ControllerAnalysis | None) -> list[Parameter]:
    """Path parameters, then enum and query parameters of the controller action.

    An enum parameter whose name matches a path parameter constrains it;
    otherwise it becomes a query parameter.
    """
    enum_parameters = {enum.name: enum for enum in controller.enum_parameters} if controller else {}
    parameters = [path_parameter(param, enum_parameters.pop(param.name, None)) for param in route.parameters]
    for enum in enum_parameters.values():
        parameters.append(
            Parameter(
                name=enum.name,
                location="query",
                required=enum.required,
                description=enum.description,
                schema_node=_enum_schema(enum),
            )
        )
    if controller is not None:
        seen = {parameter.name for parameter in parameters}
        for query in controller.query_parameters:
            if query.name not in seen:
                parameters.append(query_parameter(query))
                seen.add(query.name)
    return parameters


def path_parameter(param: RouteParameter, enum: EnumParameter | None = None) -> Parameter:
    if enum is not None:
        schema_node: SchemaNode = _enum_schema(enum)
    else:
        schema_node = PrimitiveSchema(type=_primitive_kind(param.type), format=param.format, pattern=param.pattern)
    return Parameter(
        name=param.name,
        location="path",
        # Path parameters are always required, even when optional in the route.
        required=True,
        description=param.description or (enum.description if enum else None),
        schema_node=schema_node,
    )


def query_parameter(query: QueryParameter) -> Parameter:
    kind = _parameter_kind(query.type)
    descriptor = ParameterDescriptor(
        name=query.name,
        kind=kind,
        required=query.required,
        enum=query.enum,
        default=query.default,
        rules=query.rules,
    )
    schema_node, required = descriptor_schema(descriptor)
    return Parameter(
        name=query.name,
        location="query",
        required=required,
        description=query.description,
        schema_node=schema_node,
    )


def requires_authentication(middleware: Iterable[str]) -> bool:
    """Whether a middleware stack includes ``auth``, ``auth:<guard>`` or ``auth.basic``."""
    return any(item == "auth" or item.startswith("auth:") or item == "auth.basic" for item in middleware)


@dataclass(frozen=True)
class SecurityDecision:
    """Security of one operation.

    Attributes:
        requirement: Operation-level requirement; None inherits the document default.
        scheme_names: Schemes the requirement refers to.
    """

    requirement: list[SecurityRequirement] | None = None
    scheme_names: tuple[str, ...] = ()


def resolve_security(route: RouteRecord, authentication: AuthenticationAnalysis) -> SecurityDecision:
    explicit = route.authentication
    if explicit is not None:
        if not explicit.required or not explicit.scheme:
            return SecurityDecision(requirement=[])
        return SecurityDecision(requirement=[{explicit.scheme: list(explicit.scopes)}], scheme_names=(explicit.scheme,))
    if requires_authentication(route.middleware):
        name = authentication.default_scheme or next(iter(authentication.schemes), DEFAULT_BEARER_SCHEME_NAME)
        return SecurityDecision(requirement=[{name: []}], scheme_names=(name,))
    return SecurityDecision()


def default_error_responses(method: str, *, requires_auth: bool) -> dict[str, Response]:
    method = method.lower()
    responses: dict[str, Response] = {}
    if requires_auth:
        responses["401"] = message_response("401", "Unauthenticated.")
        responses["403"] = message_response("403", "This action is unauthorized.")
    if method in ("get", "put", "patch", "delete"):
        responses["404"] = message_response("404", "Resource not found.")
    responses["500"] = message_response("500", "Server Error")
    return responses


def validation_error_response(fields: Iterable[str]) -> Response:
    """The 422 response listing error messages per validated field."""
    errors = {
        name: ArraySchema(items=PrimitiveSchema(), description=f"Validation errors for the {name} field")
        for name in fields
        if name and not name.startswith("_")
    }
    schema_node = ObjectSchema(
        properties={
            "message": PrimitiveSchema(example="The given data was invalid."),
            "errors": ObjectSchema(properties=errors),
        }
    )
    return Response(
        description=STATUS_DESCRIPTIONS["422"],
        content={JSON_MEDIA_TYPE: MediaType(schema_node=schema_node)},
    )


def message_response(status: str, message: str, *, description: str | None = None) -> Response:
    """A JSON response with a single ``message`` property."""
    schema_node = ObjectSchema(properties={"message": PrimitiveSchema(example=message)})
    return Response(
        description=description or STATUS_DESCRIPTIONS.get(status, "Error"),
        content={JSON_MEDIA_TYPE: MediaType(schema_node=schema_node)},
    )


def camel(text: str) -> str:
    """``get_api-users`` -> ``getApiUsers``."""
    words = [word for word in re.split(r"[^A-Za-z0-9]+", text) if word]
    if not words:
        return ""
    return words[0][0].lower() + words[0][1:] + "".join(word[0].upper() + word[1:] for word in words[1:])


def studly(text: str) -> str:
    """``user-profiles`` -> ``UserProfiles``."""
    return "".join(word[0].upper() + word[1:] for word in re.split(r"[^A-Za-z0-9]+", text) if word)


def singular(word: str) -> str:
    """English singular for the common regular plural forms."""
    lower = word.lower()
    if lower.endswith("ies") and len(word) > 3:
        return word[:-3] + ("Y" if word[-3:].isupper() else "y")
    if lower.endswith(("sses", "xes", "ches", "shes", "zzes")):
        return word[:-2]
    if lower.endswith("s") and not lower.endswith(("ss", "us", "is")):
        return word[:-1]
    return word


# ################
# Implementation
# ################

_OPTIONAL_PARAMETER = re.compile(r"\{([^}]+)\?\}")
_PARAMETER_SEGMENT = re.compile(r"^\{[^}]+\??\}$")
_VERSION_SEGMENT = re.compile(r"^v\d+$", re.IGNORECASE)


def _meaningful_segments(uri: str) -> list[str]:
    """URI segments without parameters and without ``api``/``v<n>`` prefixes."""
    segments = []
    for segment in uri.strip("/").split("/"):
        if not segment or _PARAMETER_SEGMENT.match(segment):
            continue
        clean = re.sub(r"\{[^}]+\??\}", "", segment)
        if not clean or clean.lower() == "api" or _VERSION_SEGMENT.match(clean):
            continue
        segments.append(clean)
    return segments


def _has_trailing_parameter(uri: str) -> bool:
    segments = uri.strip("/").split("/")
    return bool(segments) and bool(_PARAMETER_SEGMENT.match(segments[-1]))


def _is_singular(segment: str) -> bool:
    return singular(segment).lower() == segment.lower() and not segment.lower().endswith("s")


def _mapped_tags(uri: str, tag_map: dict[str, str | list[str]]) -> list[str] | None:
    uri = uri.strip("/")
    tags = tag_map.get(uri)
    if tags is None:
        for pattern, candidate in tag_map.items():
            if fnmatch.fnmatchcase(uri, pattern.strip("/")):
                tags = candidate
                break
    if tags is None:
        return None
    return [tags] if isinstance(tags, str) else list(tags)


def _unique(tags: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(tag for tag in tags if tag))


_KIND_NAMES = {
    "int": ParameterKind.INTEGER,
    "float": ParameterKind.NUMBER,
    "double": ParameterKind.NUMBER,
    "bool": ParameterKind.BOOLEAN,
}


def _parameter_kind(type_name: str) -> ParameterKind:
    type_name = type_name.lower()
    if type_name in _KIND_NAMES:
        return _KIND_NAMES[type_name]
    try:
        kind = ParameterKind(type_name)
    except ValueError:
        return ParameterKind.STRING
    return ParameterKind.STRING if kind is ParameterKind.FILE else kind


def _primitive_kind(type_name: str) -> PrimitiveKind:
    kind = _parameter_kind(type_name)
    try:
        return PrimitiveKind(kind.value)
    except ValueError:
        return PrimitiveKind.STRING


def _enum_schema(enum: EnumParameter) -> PrimitiveSchema:
    return PrimitiveSchema(type=_primitive_kind(enum.type), enum=list(enum.values))
