# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Building request body schemas from parameter descriptors.

A flat descriptor list becomes an object schema. As soon as one descriptor is
a file upload the body switches to ``multipart/form-data``. Descriptors can
also be derived from a plain ``field -> rules`` map, which is how inline
validation and form requests without explicit descriptors are handled.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from routedoc.model.descriptors import (
    FileDimensions,
    FileInfo,
    ParameterDescriptor,
    ParameterKind,
    RuleToken,
    ValidationRuleSet,
)
from routedoc.model.schema import ArraySchema, ObjectSchema, OneOfSchema, PrimitiveSchema, SchemaNode
from routedoc.schema.rules import (
    KIND_RULES,
    apply_rules,
    base_node,
    infer_kind,
    is_required,
    parse_number,
    patch_node,
)

# ###############
# Public Interface
# ###############

MULTIPART_FORM_DATA = "multipart/form-data"

# Field name suffixes marking a field as a list of values.
ARRAY_SUFFIXES = (".*", "[*]", "[]")

# Descriptor fields copied onto the schema node after the rules were applied.
DIRECT_FIELDS = (
    "format",
    "enum",
    "minimum",
    "maximum",
    "min_length",
    "max_length",
    "min_items",
    "max_items",
    "pattern",
    "default",
    "example",
    "description",
)


@dataclass(frozen=True)
class MultipartContent:
    """A request body that must be sent as ``multipart/form-data``."""

    schema_node: ObjectSchema | OneOfSchema
    media_type: str = MULTIPART_FORM_DATA


def build_parameter_schema(descriptors: Iterable[ParameterDescriptor]) -> ObjectSchema | MultipartContent:
    """Build the body schema for a flat list of descriptors.

    Nameless descriptors are skipped. Dotted or bracketed names are kept as
    literal property keys.
    """
    named = [descriptor for descriptor in descriptors if descriptor.name]
    if any(descriptor.is_file for descriptor in named):
        return MultipartContent(schema_node=object_schema(named, with_files=True))
    return object_schema(named, with_files=False)


def descriptor_schema(descriptor: ParameterDescriptor) -> tuple[SchemaNode, bool]:
    """Build the schema of one non-file descriptor.

    Returns:
        The schema node and whether the field is required.
    """
    kind = descriptor.kind or infer_kind(descriptor.rules)
    if kind is ParameterKind.FILE:
        kind = ParameterKind.STRING
    node, rule_required = apply_rules(base_node(kind), descriptor.rules, kind)
    direct = {name: getattr(descriptor, name) for name in DIRECT_FIELDS if getattr(descriptor, name) is not None}
    if descriptor.nullable:
        direct["nullable"] = True
    return patch_node(node, direct), descriptor.required or rule_required


def file_schema(descriptor: ParameterDescriptor) -> tuple[str, SchemaNode, bool]:
    """Build the multipart part of a file descriptor.

    Returns:
        The property key with any array suffix stripped, the schema node and
        whether the field is required.
    """
    info = descriptor.file or FileInfo()
    key, has_suffix = strip_array_suffix(descriptor.name)
    binary = PrimitiveSchema(
        format="binary",
        description=describe_file(info) or descriptor.description,
        max_size=info.max_size,
        content_media_type=info.mime_types[0] if len(info.mime_types) == 1 else None,
    )
    required = descriptor.required or is_required(descriptor.rules)
    if has_suffix or info.multiple:
        return key, ArraySchema(items=binary, description=descriptor.description), required
    return key, binary, required


def strip_array_suffix(name: str) -> tuple[str, bool]:
    for suffix in ARRAY_SUFFIXES:
        if name.endswith(suffix):
            return name[: -len(suffix)], True
    return name, False


def describe_file(info: FileInfo) -> str:
    """Human-readable summary of upload constraints, e.g. ``"Allowed types: png, jpg. Max size: 2MB"``."""
    parts: list[str] = []
    if info.mimes:
        parts.append("Allowed types: " + ", ".join(info.mimes))
    elif info.mime_types:
        parts.append("Allowed MIME types: " + ", ".join(info.mime_types))
    elif info.is_image:
        parts.append("Image file")
    if info.max_size is not None:
        parts.append("Max size: " + format_file_size(info.max_size))
    if info.min_size is not None:
        parts.append("Min size: " + format_file_size(info.min_size))
    if info.dimensions is not None:
        parts.extend(_describe_dimensions(info.dimensions))
    return ". ".join(parts)


def format_file_size(size: int) -> str:
    """Format a byte count with the largest unit that keeps it at least 1."""
    value = float(size)
    for unit in ("B", "KB", "MB", "GB"):
        if value < 1024 or unit == "GB":
            return f"{value:g}{unit}" if unit != "B" else f"{size}B"
        value /= 1024
    return f"{size}B"


def descriptors_from_rules(rule_map: Mapping[str, list[RuleToken]]) -> list[ParameterDescriptor]:
    """Derive descriptors from a ``field -> rule tokens`` map."""
    descriptors = []
    for name, tokens in rule_map.items():
        kind = infer_kind(tokens)
        descriptors.append(
            ParameterDescriptor(
                name=name,
                kind=kind,
                required=is_required(tokens),
                nullable=any(token.name == "nullable" for token in tokens),
                rules=tokens,
                file=file_info(name, tokens) if kind is ParameterKind.FILE else None,
            )
        )
    return descriptors


def descriptors_from_rule_set(rule_set: ValidationRuleSet) -> list[ParameterDescriptor]:
    """Merge explicit descriptors, plain rules and conditional branches of a rule set.

    Explicit descriptors win over rule-derived ones of the same name. Branches
    attach to the descriptor of their field, creating one when needed.
    """
    merged: dict[str, ParameterDescriptor] = {}
    for descriptor in rule_set.parameters:
        merged[descriptor.name] = descriptor
    for descriptor in descriptors_from_rules(rule_set.rules):
        merged.setdefault(descriptor.name, descriptor)
    for name, branches in rule_set.branches.items():
        existing = merged.get(name)
        if existing is None:
            merged[name] = ParameterDescriptor(name=name, conditional_rules=branches)
        else:
            merged[name] = existing.model_copy(update={"conditional_rules": existing.conditional_rules + branches})
    return list(merged.values())


def object_schema(descriptors: Iterable[ParameterDescriptor], *, with_files: bool) -> ObjectSchema:
    """Build an object schema from named descriptors; file descriptors become binary parts when ``with_files``."""
    properties: dict[str, SchemaNode] = {}
    required: list[str] = []
    for descriptor in descriptors:
        if with_files and descriptor.is_file:
            key, node, is_req = file_schema(descriptor)
        else:
            key = descriptor.name
            node, is_req = descriptor_schema(descriptor)
        properties[key] = node
        if is_req and key not in required:
            required.append(key)
    return ObjectSchema(properties=properties, required=required)


def branch_descriptor(descriptor: ParameterDescriptor, tokens: list[RuleToken]) -> ParameterDescriptor:
    """The descriptor of a conditional field under one branch.

    Branch rules replace the field rules and alone decide whether the field is
    required. A kind-bearing branch rule overrides the kind of the field.
    """
    update: dict[str, object] = {"rules": tokens, "required": False}
    if any(token.name in KIND_RULES for token in tokens):
        kind = infer_kind(tokens)
        update["kind"] = kind
        update["file"] = file_info(descriptor.name, tokens) if kind is ParameterKind.FILE else None
    return descriptor.model_copy(update=update)


def has_file_fields(descriptors: Iterable[ParameterDescriptor]) -> bool:
    """Whether any descriptor, or any branch of a conditional one, is a file upload."""
    for descriptor in descriptors:
        if descriptor.is_file:
            return True
        if any(infer_kind(branch.rules) is ParameterKind.FILE for branch in descriptor.conditional_rules):
            return True
    return False


def file_info(name: str, tokens: Iterable[RuleToken]) -> FileInfo:
    """Collect upload metadata from file rules. ``min``/``max`` are kilobytes."""
    info = FileInfo(multiple=strip_array_suffix(name)[1])
    update: dict[str, object] = {}
    for token in tokens:
        if token.name == "image":
            update["is_image"] = True
        elif token.name == "mimes":
            update["mimes"] = list(token.args)
        elif token.name == "mimetypes":
            update["mime_types"] = list(token.args)
        elif token.name in ("max", "min"):
            kilobytes = parse_number(token.first_arg())
            if kilobytes is not None:
                update["max_size" if token.name == "max" else "min_size"] = int(kilobytes * 1024)
        elif token.name == "dimensions":
            update["dimensions"] = _parse_dimensions(token.args)
    return info.model_copy(update=update)


# ################
# Implementation
# ################


def _parse_dimensions(args: tuple[str, ...]) -> FileDimensions:
    values: dict[str, object] = {}
    for arg in args:
        key, sep, raw = arg.partition("=")
        key = key.strip()
        if not sep or key not in FileDimensions.model_fields:
            continue
        if key == "ratio":
            values[key] = raw.strip()
        else:
            number = parse_number(raw)
            if number is not None:
                values[key] = int(number)
    return FileDimensions.model_validate(values)


def _describe_dimensions(dimensions: FileDimensions) -> list[str]:
    parts = []
    if dimensions.width is not None and dimensions.height is not None:
        parts.append(f"Required dimensions: {dimensions.width}x{dimensions.height}px")
    if dimensions.min_width is not None or dimensions.min_height is not None:
        parts.append(f"Min dimensions: {dimensions.min_width or '?'}x{dimensions.min_height or '?'}px")
    if dimensions.max_width is not None or dimensions.max_height is not None:
        parts.append(f"Max dimensions: {dimensions.max_width or '?'}x{dimensions.max_height or '?'}px")
    if dimensions.ratio:
        parts.append(f"Aspect ratio: {dimensions.ratio}")
    return parts
