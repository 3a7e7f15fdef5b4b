# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Top-level tag definitions and the ``x-tagGroups`` extension."""

from __future__ import annotations

from collections.abc import Iterable

from routedoc.config import GeneratorConfig
from routedoc.model.document import TagDefinition, TagGroup

# ###############
# Public Interface
# ###############


def collect_tags(tag_lists: Iterable[Iterable[str]]) -> list[str]:
    """Sorted, deduplicated union of all operation tags."""
    return sorted({tag for tags in tag_lists for tag in tags})


def build_tag_definitions(used_tags: list[str], config: GeneratorConfig) -> list[TagDefinition]:
    return [TagDefinition(name=tag, description=config.tag_descriptions.get(tag) or None) for tag in used_tags]


def build_tag_groups(used_tags: list[str], config: GeneratorConfig) -> list[TagGroup] | None:
    """Configured groups restricted to used tags, plus a group for the rest.

    Returns None when no groups are configured, so the extension is omitted.
    """
    if not config.tag_groups:
        return None
    groups: list[TagGroup] = []
    grouped: set[str] = set()
    for group in config.tag_groups:
        tags = [tag for tag in group.tags if tag in used_tags]
        if tags:
            groups.append(TagGroup(name=group.name, tags=tags))
            grouped.update(tags)
    ungrouped = [tag for tag in used_tags if tag not in grouped]
    if ungrouped and config.ungrouped_tag_group_name:
        groups.append(TagGroup(name=config.ungrouped_tag_group_name, tags=ungrouped))
    return groups
