# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for per-operation helpers."""

import pytest

from routedoc.config import GeneratorConfig
from routedoc.generator.operations import (
    DEFAULT_BEARER_SCHEME_NAME,
    build_parameters,
    camel,
    default_error_responses,
    operation_id,
    requires_authentication,
    resolve_security,
    resolve_tags,
    singular,
    studly,
    summary,
    to_openapi_path,
    validation_error_response,
)
from routedoc.model.routes import (
    AuthenticationAnalysis,
    ControllerAnalysis,
    EnumParameter,
    QueryParameter,
    RouteAuthentication,
    RouteParameter,
    RouteRecord,
    SecurityScheme,
)
from routedoc.model.schema import ObjectSchema, PrimitiveKind, PrimitiveSchema

# ###############
# Test Helpers
# ###############


def _route(uri: str, **kwargs) -> RouteRecord:
    return RouteRecord(uri=uri, **kwargs)


# ###############
# Public Interface
# ###############


class TestPathsAndIdentifiers:
    def test_optional_parameter_marker_removed(self) -> None:
        assert to_openapi_path("api/users/{user?}") == "/api/users/{user}"

    def test_operation_id_from_route_name(self) -> None:
        assert operation_id(_route("api/users", name="users.index"), "get") == "usersIndex"

    def test_operation_id_from_method_and_uri(self) -> None:
        assert operation_id(_route("api/users/{user}"), "GET") == "getApiUsersUser"

    @pytest.mark.parametrize(
        ("uri", "method", "action", "expected"),
        [
            ("api/users", "get", "index", "List all User"),
            ("api/users/{user}", "get", "show", "Get User by ID"),
            ("api/profile", "get", "show", "Get Profile"),
            ("api/v1/posts", "post", "store", "Create a new Post"),
            ("api/posts/{post}", "put", "update", "Update Post"),
            ("api/posts/{post}", "delete", "destroy", "Delete Post"),
            ("api/posts/{post}/blog-comments", "post", "store", "Create a new PostBlogComment"),
        ],
    )
    def test_summary(self, uri: str, method: str, action: str, expected: str) -> None:
        assert summary(_route(uri, action=action), method) == expected

    def test_summary_without_segments(self) -> None:
        assert summary(_route("api"), "get") == "List all Resource"


class TestInflection:
    @pytest.mark.parametrize(
        ("word", "expected"),
        [
            ("users", "user"),
            ("categories", "category"),
            ("boxes", "box"),
            ("addresses", "address"),
            ("status", "status"),
        ],
    )
    def test_singular(self, word: str, expected: str) -> None:
        assert singular(word) == expected

    def test_studly(self) -> None:
        assert studly("user-profiles") == "UserProfiles"

    def test_camel(self) -> None:
        assert camel("get_api-users") == "getApiUsers"


class TestTags:
    def test_explicit_tags_win(self) -> None:
        route = _route("api/users", tags=["Accounts", "Accounts"], controller="UserController")
        assert resolve_tags(route, GeneratorConfig()) == ["Accounts"]

    def test_tag_map_exact(self) -> None:
        config = GeneratorConfig(tag_map={"api/admin/stats": "Admin"})
        assert resolve_tags(_route("api/admin/stats", controller="StatsController"), config) == ["Admin"]

    def test_tag_map_glob(self) -> None:
        config = GeneratorConfig(tag_map={"api/admin/*": ["Admin", "Internal"]})
        assert resolve_tags(_route("api/admin/users/{user}"), config) == ["Admin", "Internal"]

    def test_controller_name(self) -> None:
        route = _route("api/users", controller="App\\Http\\Controllers\\UsersController")
        assert resolve_tags(route, GeneratorConfig()) == ["User"]

    def test_uri_segments_limited_by_depth(self) -> None:
        route = _route("api/v2/users/{user}/posts")
        assert resolve_tags(route, GeneratorConfig()) == ["User"]
        assert resolve_tags(route, GeneratorConfig(tag_depth=2)) == ["User", "Post"]


class TestParameters:
    def test_path_parameters_are_required(self) -> None:
        route = _route("api/posts/{post?}", parameters=[RouteParameter(name="post", required=False, type="integer")])
        [param] = build_parameters(route, None)
        assert param.location == "path"
        assert param.required
        assert isinstance(param.schema_node, PrimitiveSchema)
        assert param.schema_node.type is PrimitiveKind.INTEGER

    def test_enum_merged_into_path_parameter(self) -> None:
        route = _route("api/posts/{status}", parameters=[RouteParameter(name="status")])
        controller = ControllerAnalysis(enum_parameters=[EnumParameter(name="status", values=["draft", "published"])])
        [param] = build_parameters(route, controller)
        assert param.location == "path"
        assert isinstance(param.schema_node, PrimitiveSchema)
        assert param.schema_node.enum == ["draft", "published"]

    def test_unmatched_enum_becomes_query(self) -> None:
        controller = ControllerAnalysis(enum_parameters=[EnumParameter(name="sort", values=["asc", "desc"])])
        [param] = build_parameters(_route("api/posts"), controller)
        assert param.location == "query"
        assert not param.required

    def test_query_parameter_rules(self) -> None:
        controller = ControllerAnalysis(
            query_parameters=[
                QueryParameter(name="per_page", type="integer", default=15, rules="integer|min:1|max:100")
            ]
        )
        [param] = build_parameters(_route("api/posts"), controller)
        assert param.location == "query"
        schema = param.schema_node
        assert isinstance(schema, PrimitiveSchema)
        assert (schema.minimum, schema.maximum, schema.default) == (1, 100, 15)


class TestSecurity:
    @pytest.mark.parametrize(
        ("middleware", "expected"),
        [(["auth"], True), (["auth:sanctum"], True), (["auth.basic"], True), (["api", "throttle"], False)],
    )
    def test_requires_authentication(self, middleware: list[str], expected: bool) -> None:
        assert requires_authentication(middleware) is expected

    def test_explicit_assignment_wins(self) -> None:
        authentication = RouteAuthentication(scheme="oauth", scopes=["read"])
        route = _route("api/users", middleware=["auth"], authentication=authentication)
        decision = resolve_security(route, AuthenticationAnalysis())
        assert decision.requirement == [{"oauth": ["read"]}]

    def test_explicit_not_required_disables_security(self) -> None:
        route = _route("api/health", middleware=["auth"], authentication=RouteAuthentication(required=False))
        assert resolve_security(route, AuthenticationAnalysis()).requirement == []

    def test_middleware_uses_default_scheme(self) -> None:
        auth = AuthenticationAnalysis(
            schemes={"apiKey": SecurityScheme(type="apiKey"), "sanctum": SecurityScheme(type="http")},
            default_scheme="sanctum",
        )
        assert resolve_security(_route("api/me", middleware=["auth"]), auth).requirement == [{"sanctum": []}]

    def test_middleware_uses_first_scheme_without_default(self) -> None:
        auth = AuthenticationAnalysis(schemes={"apiKey": SecurityScheme(type="apiKey")})
        assert resolve_security(_route("api/me", middleware=["auth"]), auth).requirement == [{"apiKey": []}]

    def test_middleware_falls_back_to_bearer(self) -> None:
        decision = resolve_security(_route("api/me", middleware=["auth:api"]), AuthenticationAnalysis())
        assert decision.scheme_names == (DEFAULT_BEARER_SCHEME_NAME,)

    def test_public_route_inherits(self) -> None:
        assert resolve_security(_route("api/posts"), AuthenticationAnalysis()).requirement is None


class TestErrorResponses:
    def test_get_without_auth(self) -> None:
        assert sorted(default_error_responses("get", requires_auth=False)) == ["404", "500"]

    def test_post_with_auth(self) -> None:
        assert sorted(default_error_responses("post", requires_auth=True)) == ["401", "403", "500"]

    def test_validation_error_lists_fields(self) -> None:
        response = validation_error_response(["email", "_notice", "name"])
        schema = response.content["application/json"].schema_node
        assert isinstance(schema, ObjectSchema)
        errors = schema.properties["errors"]
        assert isinstance(errors, ObjectSchema)
        assert list(errors.properties) == ["email", "name"]
