# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for top-level tags and tag groups."""

from routedoc.config import GeneratorConfig, TagGroupConfig
from routedoc.generator.tags import build_tag_definitions, build_tag_groups, collect_tags
from routedoc.model.document import TagDefinition, TagGroup


def test_collect_tags_sorted_and_unique() -> None:
    assert collect_tags([["User", "Admin"], ["Post"], ["User"]]) == ["Admin", "Post", "User"]


def test_tag_definitions_with_descriptions() -> None:
    config = GeneratorConfig(tag_descriptions={"User": "User management", "Post": ""})
    assert build_tag_definitions(["Post", "User"], config) == [
        TagDefinition(name="Post"),
        TagDefinition(name="User", description="User management"),
    ]


def test_no_groups_configured() -> None:
    assert build_tag_groups(["User"], GeneratorConfig()) is None


def test_groups_keep_only_used_tags_and_collect_the_rest() -> None:
    config = GeneratorConfig(
        tag_groups=[
            TagGroupConfig(name="Accounts", tags=["User", "Profile"]),
            TagGroupConfig(name="Billing", tags=["Invoice"]),
        ]
    )
    assert build_tag_groups(["Post", "User"], config) == [
        TagGroup(name="Accounts", tags=["User"]),
        TagGroup(name="Other", tags=["Post"]),
    ]


def test_custom_ungrouped_name() -> None:
    config = GeneratorConfig(
        tag_groups=[TagGroupConfig(name="Accounts", tags=["User"])],
        ungrouped_tag_group_name="Misc",
    )
    groups = build_tag_groups(["Post", "User"], config)
    assert groups is not None
    assert groups[-1] == TagGroup(name="Misc", tags=["Post"])
