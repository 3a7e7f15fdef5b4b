# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Assembly of a complete API description document from analysed routes.

The assembler walks every route, builds one operation per HTTP method and
collects the cross-route state (tags, security schemes, named component
schemas) into the final document. Problems that do not prevent a usable
document, such as a response link targeting an undeclared status or a
schema reference that was never registered, are reported as warnings on the
result and logged; they never abort generation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from routedoc.config import GeneratorConfig
from routedoc.generator.converter import convert_to_openapi_31
from routedoc.generator.operations import (
    BODY_METHODS,
    DEFAULT_BEARER_SCHEME,
    DEFAULT_BEARER_SCHEME_NAME,
    JSON_MEDIA_TYPE,
    STATUS_DESCRIPTIONS,
    SUPPORTED_METHODS,
    build_parameters,
    default_error_responses,
    message_response,
    operation_id,
    requires_authentication,
    resolve_security,
    resolve_tags,
    summary,
    to_openapi_path,
    validation_error_response,
)
from routedoc.generator.tags import build_tag_definitions, build_tag_groups, collect_tags
from routedoc.model.descriptors import ParameterDescriptor
from routedoc.model.document import (
    OPENAPI_30,
    OPENAPI_31,
    Components,
    Document,
    Info,
    Link,
    MediaType,
    Operation,
    RequestBody,
    Response,
    Server,
)
from routedoc.model.routes import ControllerAnalysis, GenerationInput, RouteRecord, SecurityScheme
from routedoc.model.schema import SchemaNode
from routedoc.schema.conditional import compose_conditional_schema
from routedoc.schema.parameters import (
    MultipartContent,
    build_parameter_schema,
    describe_file,
    descriptors_from_rule_set,
    descriptors_from_rules,
    has_file_fields,
)
from routedoc.schema.registry import SchemaRegistry
from routedoc.schema.resources import build_item_schema, wrap_resource_reference

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class GenerationWarning:
    """A non-fatal issue found while assembling a document.

    Attributes:
        message: Human-readable description of the warning.
    """

    message: str


@dataclass
class GenerationResult:
    """The assembled document and the warnings raised along the way.

    Attributes:
        document: The generated document.
        warnings: Non-fatal issues, in the order they were found.
        broken_references: Schema names referenced but never registered.
    """

    document: Document
    warnings: list[GenerationWarning] = field(default_factory=list)
    broken_references: list[str] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)


class DocumentAssembler:
    """Builds documents from generation inputs.

    The assembler owns a schema registry which is cleared at the start of
    every ``generate`` call, so one instance can be reused for many passes
    but must not be shared between concurrent ones.
    """

    def __init__(self, config: GeneratorConfig | None = None, registry: SchemaRegistry | None = None) -> None:
        self._config = config or GeneratorConfig()
        self._registry = registry or SchemaRegistry()
        self._warnings: list[GenerationWarning] = []
        self._input = GenerationInput()
        self._security_schemes: dict[str, SecurityScheme] = {}

    @property
    def registry(self) -> SchemaRegistry:
        return self._registry

    def generate(self, generation_input: GenerationInput | None = None) -> GenerationResult:
        """Assemble one document. A missing input or route list yields an empty document."""
        self._registry.clear()
        self._warnings = []
        self._input = generation_input or GenerationInput()
        self._security_schemes = dict(self._input.authentication.schemes)

        paths: dict[str, dict[str, Operation]] = {}
        routes = self._input.routes or []
        for route in routes:
            path = to_openapi_path(route.uri)
            for method in _route_methods(route):
                logger.debug("Building operation %s %s", method.upper(), path)
                paths.setdefault(path, {})[method] = self._build_operation(route, method, path)

        document = self._finalize(paths)
        broken = self._registry.validate_references()
        if broken:
            self._warn("Unresolved schema references: " + ", ".join(broken))

        if self._config.target_version == OPENAPI_31:
            document = convert_to_openapi_31(document)

        logger.info(
            "Generated %d path(s) from %d route(s) with %d component schema(s)",
            len(paths),
            len(routes),
            len(document.components.schemas),
        )
        return GenerationResult(document=document, warnings=list(self._warnings), broken_references=broken)

    def _warn(self, message: str) -> None:
        logger.warning(message)
        self._warnings.append(GenerationWarning(message))

    def _controller(self, route: RouteRecord) -> ControllerAnalysis | None:
        key = route.controller_key
        if key is None:
            return None
        controller = self._input.controllers.get(key)
        if controller is None:
            logger.debug("No controller analysis for %s", key)
        return controller

    def _build_operation(self, route: RouteRecord, method: str, path: str) -> Operation:
        controller = self._controller(route)
        security = resolve_security(route, self._input.authentication)
        for name in security.scheme_names:
            if name not in self._security_schemes and name == DEFAULT_BEARER_SCHEME_NAME:
                self._security_schemes[name] = DEFAULT_BEARER_SCHEME

        descriptors = self._request_descriptors(controller) if method in BODY_METHODS else []
        request_body = self._build_request_body(descriptors)
        responses = self._build_responses(route, method, controller, descriptors)
        if controller is not None:
            self._attach_links(controller, responses, method, path)

        return Operation(
            operation_id=operation_id(route, method),
            summary=summary(route, method),
            tags=resolve_tags(route, self._config),
            parameters=build_parameters(route, controller),
            request_body=request_body,
            responses=responses,
            security=security.requirement,
        )

    def _request_descriptors(self, controller: ControllerAnalysis | None) -> list[ParameterDescriptor]:
        if controller is None:
            return []
        if controller.form_request:
            rule_set = self._input.form_requests.get(controller.form_request)
            if rule_set is not None:
                return descriptors_from_rule_set(rule_set)
            logger.debug("No rule set for form request %s", controller.form_request)
        if controller.inline_rules:
            return descriptors_from_rules(controller.inline_rules)
        return []

    def _build_request_body(self, descriptors: list[ParameterDescriptor]) -> RequestBody | None:
        named = [descriptor for descriptor in descriptors if descriptor.name]
        if not named:
            return None
        if any(descriptor.is_conditional for descriptor in named):
            schema_node: SchemaNode = compose_conditional_schema(named)
            if has_file_fields(named):
                return _multipart_body(MultipartContent(schema_node=schema_node), named)
            return RequestBody(content={JSON_MEDIA_TYPE: MediaType(schema_node=schema_node)})
        built = build_parameter_schema(named)
        if isinstance(built, MultipartContent):
            return _multipart_body(built, named)
        return RequestBody(content={JSON_MEDIA_TYPE: MediaType(schema_node=built)})

    def _build_responses(
        self,
        route: RouteRecord,
        method: str,
        controller: ControllerAnalysis | None,
        descriptors: list[ParameterDescriptor],
    ) -> dict[str, Response]:
        responses: dict[str, Response] = {}
        status, success = self._success_response(method, controller)
        responses[status] = success

        requires_auth = requires_authentication(route.middleware)
        for code, response in default_error_responses(method, requires_auth=requires_auth).items():
            responses.setdefault(code, response)
        if descriptors:
            responses["422"] = validation_error_response(descriptor.name for descriptor in descriptors)
        if controller is not None:
            for code, description in controller.error_responses.items():
                responses[code] = message_response(code, description, description=description)
        return dict(sorted(responses.items()))

    def _success_response(self, method: str, controller: ControllerAnalysis | None) -> tuple[str, Response]:
        if controller is not None and controller.resource:
            status = "201" if method == "post" else "200"
            schema_node = self._resource_response_schema(controller)
            return status, Response(
                description=STATUS_DESCRIPTIONS[status],
                content={JSON_MEDIA_TYPE: MediaType(schema_node=schema_node)},
            )
        if method == "delete" or (controller is not None and controller.response_type == "void"):
            return "204", Response(description=STATUS_DESCRIPTIONS["204"])
        status = "201" if method == "post" else "200"
        return status, Response(description=STATUS_DESCRIPTIONS[status])

    def _resource_response_schema(self, controller: ControllerAnalysis) -> SchemaNode:
        class_name = controller.resource or ""
        resource = self._input.resources.get(class_name)
        if resource is None:
            # The schema may still be registered by a later route; otherwise it is reported.
            reference = self._registry.get_ref(self._registry.extract_schema_name(class_name))
            kind = "resource"
        else:
            reference = self._registry.register_and_get_ref(class_name, build_item_schema(resource))
            kind = resource.kind
        return wrap_resource_reference(
            reference,
            kind=kind,
            is_collection=controller.is_collection,
            pagination=controller.pagination,
        )

    def _attach_links(
        self,
        controller: ControllerAnalysis,
        responses: dict[str, Response],
        method: str,
        path: str,
    ) -> None:
        for link in controller.response_links:
            response = responses.get(link.status_code)
            if response is None:
                self._warn(
                    f"Link '{link.name}' on {method.upper()} {path} targets undeclared status "
                    f"{link.status_code}; link dropped"
                )
                continue
            response.links[link.name] = Link(
                operation_id=link.operation_id,
                operation_ref=link.operation_ref,
                parameters=dict(link.parameters),
                request_body=link.request_body,
                description=link.description,
            )

    def _finalize(self, paths: dict[str, dict[str, Operation]]) -> Document:
        config = self._config
        authentication = self._input.authentication
        used_tags = collect_tags(operation.tags for methods in paths.values() for operation in methods.values())

        security = None
        if authentication.default_scheme and authentication.default_required:
            name = authentication.default_scheme
            security = [{name: []}]
            if name not in self._security_schemes:
                if name == DEFAULT_BEARER_SCHEME_NAME:
                    self._security_schemes[name] = DEFAULT_BEARER_SCHEME
                else:
                    self._warn(f"Default security scheme '{name}' is not declared")

        return Document(
            openapi=OPENAPI_30,
            info=Info(
                title=config.title,
                version=config.version,
                description=config.description,
                terms_of_service=config.terms_of_service,
                contact=config.contact,
                license=config.license,
            ),
            servers=[Server(url=server.url, description=server.description) for server in config.servers],
            paths=paths,
            components=Components(schemas=self._registry.all(), security_schemes=dict(self._security_schemes)),
            tags=build_tag_definitions(used_tags, config),
            tag_groups=build_tag_groups(used_tags, config),
            security=security,
        )


def generate_document(
    generation_input: GenerationInput | None,
    config: GeneratorConfig | None = None,
) -> GenerationResult:
    """Assemble a document with a fresh assembler."""
    return DocumentAssembler(config).generate(generation_input)


# ################
# Implementation
# ################


def _multipart_body(content: MultipartContent, descriptors: list[ParameterDescriptor]) -> RequestBody:
    notes = [
        f"{descriptor.name}: {describe_file(descriptor.file)}"
        for descriptor in descriptors
        if descriptor.file is not None and describe_file(descriptor.file)
    ]
    return RequestBody(
        content={content.media_type: MediaType(schema_node=content.schema_node)},
        description="; ".join(notes) or None,
    )


def _route_methods(route: RouteRecord) -> list[str]:
    methods = []
    for method in route.methods:
        method = method.lower()
        if method in SUPPORTED_METHODS and method not in methods:
            methods.append(method)
    return methods
