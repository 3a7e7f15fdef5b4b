# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generator configuration and its YAML loader.

The configuration is one explicit value passed to the assembler. Keys in the
YAML file are kebab-case, e.g.::

    title: Shop API
    target-version: "3.1.0"
    tag-depth: 2
    tag-map:
      "api/admin/*": Admin
    tag-groups:
      - name: Catalog
        tags: [Product, Category]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

# ###############
# Public Interface
# ###############

DEFAULT_TAG_DEPTH = 1
DEFAULT_UNGROUPED_TAG_GROUP = "Other"


class ConfigError(Exception):
    """Raised when a generator configuration file is invalid or cannot be loaded."""


@dataclass
class ServerConfig:
    url: str
    description: str | None = None


@dataclass
class TagGroupConfig:
    """A named group of tags rendered into ``x-tagGroups``."""

    name: str
    tags: list[str] = field(default_factory=list)


@dataclass
class ExampleGenerationConfig:
    """Options for the example-value collaborator. The generator only carries them."""

    use_faker: bool = True
    faker_seed: int | None = None
    faker_locale: str | None = None


@dataclass
class GeneratorConfig:
    """Everything the document assembler can be configured with.

    Attributes:
        title: Document title.
        version: Version of the described API.
        description: Optional document description.
        terms_of_service: Optional terms-of-service URL.
        contact: Optional contact object, passed through.
        license: Optional license object, passed through.
        servers: Servers listed in the document.
        target_version: ``"3.1.0"`` selects OpenAPI 3.1 output; anything else keeps 3.0.
        tag_depth: Number of URI segments used to derive fallback tags.
        tag_map: URI (exact or glob pattern) to tag name(s).
        tag_descriptions: Descriptions of top-level tags.
        tag_groups: Groups for the ``x-tagGroups`` extension.
        ungrouped_tag_group_name: Group collecting tags not placed in any group.
        example_generation: Options for example synthesis.
    """

    title: str = "API Documentation"
    version: str = "1.0.0"
    description: str | None = None
    terms_of_service: str | None = None
    contact: dict[str, Any] | None = None
    license: dict[str, Any] | None = None
    servers: list[ServerConfig] = field(default_factory=lambda: [ServerConfig(url="/api", description="API Server")])
    target_version: str | None = None
    tag_depth: int = DEFAULT_TAG_DEPTH
    tag_map: dict[str, str | list[str]] = field(default_factory=dict)
    tag_descriptions: dict[str, str] = field(default_factory=dict)
    tag_groups: list[TagGroupConfig] = field(default_factory=list)
    ungrouped_tag_group_name: str = DEFAULT_UNGROUPED_TAG_GROUP
    example_generation: ExampleGenerationConfig = field(default_factory=ExampleGenerationConfig)


def load_config(path: Path) -> GeneratorConfig:
    """Load and parse a generator configuration file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        A GeneratorConfig populated from the file. An empty file yields the defaults.

    Raises:
        ConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc

    return _parse_config(text, source_label=str(path))


# ################
# Implementation
# ################


def _parse_config(text: str, source_label: str = "<string>") -> GeneratorConfig:
    """Parse configuration YAML text into a GeneratorConfig.

    Raises:
        ConfigError: If the YAML is invalid or a field has the wrong shape.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return GeneratorConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: config must be a YAML mapping")

    config = GeneratorConfig()
    config.title = _optional_string(data, "title", source_label) or config.title
    version = data.get("version")
    if version is not None:
        config.version = str(version)
    config.description = _optional_string(data, "description", source_label)
    config.terms_of_service = _optional_string(data, "terms-of-service", source_label)
    config.contact = _optional_mapping(data, "contact", source_label)
    config.license = _optional_mapping(data, "license", source_label)

    if "servers" in data:
        config.servers = _parse_servers(data["servers"], source_label)

    # Anything but a string is ignored and falls back to the default version.
    target_version = data.get("target-version")
    config.target_version = target_version if isinstance(target_version, str) else None

    tag_depth = data.get("tag-depth", DEFAULT_TAG_DEPTH)
    valid_depth = isinstance(tag_depth, int) and not isinstance(tag_depth, bool) and tag_depth >= 0
    config.tag_depth = tag_depth if valid_depth else DEFAULT_TAG_DEPTH

    config.tag_map = _parse_tag_map(data.get("tag-map"), source_label)
    config.tag_descriptions = {
        str(name): str(text) for name, text in (_optional_mapping(data, "tag-descriptions", source_label) or {}).items()
    }
    config.tag_groups = _parse_tag_groups(data.get("tag-groups"), source_label)
    config.ungrouped_tag_group_name = (
        _optional_string(data, "ungrouped-tag-group-name", source_label) or DEFAULT_UNGROUPED_TAG_GROUP
    )
    config.example_generation = _parse_example_generation(data.get("example-generation"), source_label)
    return config


def _optional_string(mapping: dict[str, Any], key: str, source_label: str) -> str | None:
    """Extract an optional string field, raising ConfigError if it has another type."""
    value = mapping.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"{source_label}: '{key}' must be a string")
    return value


def _optional_mapping(mapping: dict[str, Any], key: str, source_label: str) -> dict[str, Any] | None:
    value = mapping.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ConfigError(f"{source_label}: '{key}' must be a mapping")
    return value


def _parse_servers(raw: object, source_label: str) -> list[ServerConfig]:
    if not isinstance(raw, list):
        raise ConfigError(f"{source_label}: 'servers' must be a list")
    servers = []
    for index, entry in enumerate(raw):
        location = f"{source_label}: servers[{index}]"
        if not isinstance(entry, dict) or not isinstance(entry.get("url"), str):
            raise ConfigError(f"{location} must be a mapping with a string 'url'")
        servers.append(ServerConfig(url=entry["url"], description=_optional_string(entry, "description", location)))
    return servers


def _parse_tag_map(raw: object, source_label: str) -> dict[str, str | list[str]]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{source_label}: 'tag-map' must be a mapping")
    tag_map: dict[str, str | list[str]] = {}
    for pattern, tags in raw.items():
        if isinstance(tags, str):
            tag_map[str(pattern)] = tags
        elif isinstance(tags, list) and all(isinstance(tag, str) for tag in tags):
            tag_map[str(pattern)] = list(tags)
        else:
            raise ConfigError(f"{source_label}: tag-map entry '{pattern}' must be a string or a list of strings")
    return tag_map


def _parse_tag_groups(raw: object, source_label: str) -> list[TagGroupConfig]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ConfigError(f"{source_label}: 'tag-groups' must be a list")
    groups = []
    for index, entry in enumerate(raw):
        location = f"{source_label}: tag-groups[{index}]"
        if not isinstance(entry, dict):
            raise ConfigError(f"{location} must be a YAML mapping")
        name = _optional_string(entry, "name", location)
        if not name:
            raise ConfigError(f"{location}: missing required field 'name'")
        tags = entry.get("tags", [])
        if not isinstance(tags, list):
            raise ConfigError(f"{location} '{name}': 'tags' must be a list")
        groups.append(TagGroupConfig(name=name, tags=[str(tag) for tag in tags]))
    return groups


def _parse_example_generation(raw: object, source_label: str) -> ExampleGenerationConfig:
    if raw is None:
        return ExampleGenerationConfig()
    if not isinstance(raw, dict):
        raise ConfigError(f"{source_label}: 'example-generation' must be a mapping")
    seed = raw.get("faker-seed")
    return ExampleGenerationConfig(
        use_faker=bool(raw.get("use-faker", True)),
        faker_seed=seed if isinstance(seed, int) else None,
        faker_locale=_optional_string(raw, "faker-locale", f"{source_label}: example-generation"),
    )
