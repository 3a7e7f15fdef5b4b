# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for resource and transformer response schemas."""

from routedoc.model.routes import PaginationKind, ResourceAnalysis, ResourceInclude, ResourceProperty
from routedoc.model.schema import ArraySchema, ObjectSchema, PrimitiveKind, PrimitiveSchema, RefSchema
from routedoc.schema.resources import (
    build_item_schema,
    build_resource_schema,
    pagination_schema,
    property_schema,
    wrap_resource_reference,
)

# ###############
# Test Helpers
# ###############


def _user_resource(**kwargs) -> ResourceAnalysis:
    return ResourceAnalysis(
        properties={
            "id": ResourceProperty(type="integer", example=1),
            "name": ResourceProperty(type="string", example="John Doe"),
            "email": ResourceProperty(type="string", format="email"),
        },
        **kwargs,
    )


# ###############
# Public Interface
# ###############


class TestJsonResources:
    def test_item_schema(self) -> None:
        schema = build_resource_schema(_user_resource())
        assert isinstance(schema, ObjectSchema)
        assert list(schema.properties) == ["id", "name", "email"]
        email = schema.properties["email"]
        assert isinstance(email, PrimitiveSchema)
        assert email.format == "email"

    def test_collection_is_array(self) -> None:
        schema = build_resource_schema(_user_resource(), is_collection=True)
        assert isinstance(schema, ArraySchema)
        assert isinstance(schema.items, ObjectSchema)

    def test_length_aware_pagination(self) -> None:
        schema = build_resource_schema(_user_resource(), pagination=PaginationKind.LENGTH_AWARE)
        assert isinstance(schema, ObjectSchema)
        for key in ("data", "current_page", "last_page", "links", "total", "next_page_url"):
            assert key in schema.properties
        next_url = schema.properties["next_page_url"]
        assert next_url.nullable
        assert isinstance(next_url, PrimitiveSchema)
        assert next_url.format == "uri"

    def test_simple_pagination_has_no_total(self) -> None:
        schema = pagination_schema(PaginationKind.SIMPLE, ObjectSchema())
        assert "total" not in schema.properties
        assert "per_page" in schema.properties

    def test_cursor_pagination(self) -> None:
        schema = pagination_schema(PaginationKind.CURSOR, ObjectSchema())
        assert schema.properties["next_cursor"].nullable
        assert "current_page" not in schema.properties

    def test_custom_example_attached_verbatim(self) -> None:
        example = {"id": 7, "name": "Ada"}
        schema = build_item_schema(_user_resource(custom_example=example))
        assert schema.example == example


class TestFractal:
    def test_data_envelope(self) -> None:
        schema = build_resource_schema(_user_resource(kind="fractal"))
        assert isinstance(schema, ObjectSchema)
        data = schema.properties["data"]
        assert isinstance(data, ObjectSchema)
        assert "email" in data.properties

    def test_includes(self) -> None:
        resource = _user_resource(
            kind="fractal",
            available_includes={
                "posts": ResourceInclude(collection=True),
                "profile": ResourceInclude(),
            },
            default_includes=["profile"],
        )
        data = build_resource_schema(resource).properties["data"]
        assert isinstance(data, ObjectSchema)
        posts = data.properties["posts"]
        profile = data.properties["profile"]
        assert isinstance(posts, ArraySchema)
        assert isinstance(profile, ObjectSchema)
        assert "Optional include" in (posts.description or "")
        assert "Default include" in (profile.description or "")

    def test_collection_with_pagination_meta(self) -> None:
        schema = build_resource_schema(
            _user_resource(kind="fractal"), is_collection=True, pagination=PaginationKind.LENGTH_AWARE
        )
        assert isinstance(schema, ObjectSchema)
        assert isinstance(schema.properties["data"], ArraySchema)
        meta = schema.properties["meta"]
        assert isinstance(meta, ObjectSchema)
        pagination = meta.properties["pagination"]
        assert isinstance(pagination, ObjectSchema)
        for key in ("total", "count", "per_page", "current_page", "total_pages", "links"):
            assert key in pagination.properties

    def test_collection_without_pagination_has_no_meta(self) -> None:
        schema = build_resource_schema(_user_resource(kind="fractal"), is_collection=True)
        assert isinstance(schema, ObjectSchema)
        assert "meta" not in schema.properties


class TestReferences:
    def test_wrapping_a_reference(self) -> None:
        ref = RefSchema(name="UserResource")
        assert wrap_resource_reference(ref) is ref
        collection = wrap_resource_reference(ref, is_collection=True)
        assert isinstance(collection, ArraySchema)
        assert collection.items == ref

    def test_pagination_implies_collection(self) -> None:
        ref = RefSchema(name="UserResource")
        schema = wrap_resource_reference(ref, pagination=PaginationKind.SIMPLE)
        assert isinstance(schema, ObjectSchema)
        data = schema.properties["data"]
        assert isinstance(data, ArraySchema)
        assert data.items == ref


def test_nested_property_schema() -> None:
    prop = ResourceProperty(
        type="object",
        properties={
            "tags": ResourceProperty(type="array", items=ResourceProperty(type="string")),
            "score": ResourceProperty(type="float", nullable=True),
        },
    )
    schema = property_schema(prop)
    assert isinstance(schema, ObjectSchema)
    tags = schema.properties["tags"]
    assert isinstance(tags, ArraySchema)
    assert isinstance(tags.items, PrimitiveSchema)
    score = schema.properties["score"]
    assert isinstance(score, PrimitiveSchema)
    assert score.type is PrimitiveKind.NUMBER
    assert score.nullable
