# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model for RouteDoc (schema nodes, input contracts and the document)."""

from routedoc.model.descriptors import (
    Condition,
    ConditionalBranch,
    CustomCondition,
    ElseCondition,
    FileDimensions,
    FileInfo,
    HttpMethodCondition,
    ParameterDescriptor,
    ParameterKind,
    RequestFieldCondition,
    RuleToken,
    UserCheckCondition,
    ValidationRuleSet,
    parse_rules,
)
from routedoc.model.document import (
    OPENAPI_30,
    OPENAPI_31,
    Components,
    Document,
    Info,
    Link,
    MediaType,
    Operation,
    Parameter,
    RequestBody,
    Response,
    Server,
    TagDefinition,
    TagGroup,
)
from routedoc.model.routes import (
    AuthenticationAnalysis,
    ControllerAnalysis,
    EnumParameter,
    GenerationInput,
    PaginationKind,
    QueryParameter,
    ResourceAnalysis,
    ResourceInclude,
    ResourceProperty,
    ResponseLink,
    RouteAuthentication,
    RouteParameter,
    RouteRecord,
    SecurityScheme,
)
from routedoc.model.schema import (
    ArraySchema,
    Discriminator,
    ObjectSchema,
    OneOfSchema,
    PrimitiveKind,
    PrimitiveSchema,
    RefSchema,
    SchemaNode,
)

__all__ = [
    # Schema nodes
    "PrimitiveKind",
    "ObjectSchema",
    "ArraySchema",
    "PrimitiveSchema",
    "Discriminator",
    "OneOfSchema",
    "RefSchema",
    "SchemaNode",
    # Rules and descriptors
    "RuleToken",
    "parse_rules",
    "ParameterKind",
    "HttpMethodCondition",
    "UserCheckCondition",
    "RequestFieldCondition",
    "ElseCondition",
    "CustomCondition",
    "Condition",
    "ConditionalBranch",
    "FileDimensions",
    "FileInfo",
    "ParameterDescriptor",
    "ValidationRuleSet",
    # Input contracts
    "RouteParameter",
    "RouteAuthentication",
    "RouteRecord",
    "PaginationKind",
    "EnumParameter",
    "QueryParameter",
    "ResponseLink",
    "ControllerAnalysis",
    "ResourceProperty",
    "ResourceInclude",
    "ResourceAnalysis",
    "SecurityScheme",
    "AuthenticationAnalysis",
    "GenerationInput",
    # Document
    "OPENAPI_30",
    "OPENAPI_31",
    "MediaType",
    "Link",
    "Response",
    "RequestBody",
    "Parameter",
    "Operation",
    "Info",
    "Server",
    "TagDefinition",
    "TagGroup",
    "Components",
    "Document",
]
