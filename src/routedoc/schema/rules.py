# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Mapping of validation rule tokens onto schema constraints.

Each token is mapped independently into a ``RuleConstraint``: a partial set
of schema node fields plus a flag telling whether the rule makes the field
required. Bounds rules (``min``, ``max``, ``between``, ``size``) are typed by
the field's kind, so ``min:5`` means a minimum length on a string, a minimum
value on an integer and a minimum item count on an array.

The mapper never raises. Unknown rules and malformed arguments contribute
nothing.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from routedoc.model.descriptors import ParameterKind, RuleToken
from routedoc.model.schema import ArraySchema, ObjectSchema, PrimitiveKind, PrimitiveSchema, SchemaNode

# ###############
# Public Interface
# ###############

REQUIRED_RULES = frozenset(
    {
        "required",
        "required_if",
        "required_unless",
        "required_with",
        "required_with_all",
        "required_without",
        "required_without_all",
        "present",
    }
)

FORMAT_RULES = {
    "email": "email",
    "url": "uri",
    "active_url": "uri",
    "uuid": "uuid",
    "ip": "ipv4",
    "ipv4": "ipv4",
    "ipv6": "ipv6",
    "mac_address": "mac",
    "date": "date",
    "datetime": "date-time",
    "date_time": "date-time",
    "date_format": "date-time",
}

KIND_RULES = {
    "integer": ParameterKind.INTEGER,
    "int": ParameterKind.INTEGER,
    "digits": ParameterKind.INTEGER,
    "digits_between": ParameterKind.INTEGER,
    "numeric": ParameterKind.NUMBER,
    "decimal": ParameterKind.NUMBER,
    "boolean": ParameterKind.BOOLEAN,
    "bool": ParameterKind.BOOLEAN,
    "accepted": ParameterKind.BOOLEAN,
    "declined": ParameterKind.BOOLEAN,
    "array": ParameterKind.ARRAY,
    "json": ParameterKind.OBJECT,
    "file": ParameterKind.FILE,
    "image": ParameterKind.FILE,
    "mimes": ParameterKind.FILE,
    "mimetypes": ParameterKind.FILE,
}

PRIMITIVE_KINDS = {
    ParameterKind.STRING: PrimitiveKind.STRING,
    ParameterKind.INTEGER: PrimitiveKind.INTEGER,
    ParameterKind.NUMBER: PrimitiveKind.NUMBER,
    ParameterKind.BOOLEAN: PrimitiveKind.BOOLEAN,
}


@dataclass(frozen=True)
class RuleConstraint:
    """The schema fields one rule contributes.

    Attributes:
        patch: Schema node field names mapped to their values.
        required: Whether the rule makes the field required.
    """

    patch: dict[str, Any] = field(default_factory=dict)
    required: bool = False


def infer_kind(tokens: Iterable[RuleToken]) -> ParameterKind:
    """Infer a field's kind from its rules; the first kind-bearing rule wins."""
    for token in tokens:
        kind = KIND_RULES.get(token.name)
        if kind is not None:
            return kind
    return ParameterKind.STRING


def is_required(tokens: Iterable[RuleToken]) -> bool:
    return any(token.name in REQUIRED_RULES for token in tokens)


def map_rule(token: RuleToken, kind: ParameterKind = ParameterKind.STRING) -> RuleConstraint:
    """Map a single rule token onto a constraint for a field of ``kind``."""
    name = token.name
    if name in REQUIRED_RULES:
        return RuleConstraint(required=True)
    if name == "nullable":
        return RuleConstraint(patch={"nullable": True})
    if name in FORMAT_RULES:
        return RuleConstraint(patch={"format": FORMAT_RULES[name]})
    if name == "in":
        return RuleConstraint(patch={"enum": list(token.args)} if token.args else {})
    if name in ("regex", "pattern"):
        arg = token.first_arg()
        return RuleConstraint(patch={"pattern": strip_delimiters(arg)} if arg else {})
    if name in ("min", "max", "size", "between"):
        return RuleConstraint(patch=_bounds(name, token.args, kind))
    if name in ("gt", "gte", "lt", "lte"):
        return RuleConstraint(patch=_comparison(name, token.first_arg(), kind))
    if name == "digits":
        length = _integer(token.first_arg())
        return RuleConstraint(patch={"min_length": length, "max_length": length} if length is not None else {})
    if name == "digits_between":
        return RuleConstraint(patch=_pair(token.args, "min_length", "max_length", integral=True))
    return RuleConstraint()


def apply_rules(node: SchemaNode, tokens: Iterable[RuleToken], kind: ParameterKind) -> tuple[SchemaNode, bool]:
    """Apply every token to ``node`` in order. Later tokens override earlier ones.

    Returns:
        The constrained node and whether any token made the field required.
    """
    patch: dict[str, Any] = {}
    required = False
    for token in tokens:
        constraint = map_rule(token, kind)
        patch.update(constraint.patch)
        required = required or constraint.required
    return patch_node(node, patch), required


def base_node(kind: ParameterKind) -> SchemaNode:
    """An unconstrained schema node for a non-file kind."""
    if kind is ParameterKind.ARRAY:
        return ArraySchema()
    if kind is ParameterKind.OBJECT:
        return ObjectSchema()
    return PrimitiveSchema(type=PRIMITIVE_KINDS.get(kind, PrimitiveKind.STRING))


def patch_node(node: SchemaNode, patch: dict[str, Any]) -> SchemaNode:
    """Copy ``node`` with the fields of ``patch`` that the node type declares."""
    fields = type(node).model_fields
    update = {key: value for key, value in patch.items() if key in fields}
    return node.model_copy(update=update) if update else node


def strip_delimiters(pattern: str) -> str:
    """Strip one pair of regex delimiters and trailing flags, e.g. ``/^a+$/i`` -> ``^a+$``."""
    match = _DELIMITED.match(pattern)
    return match.group(2) if match else pattern


def parse_number(text: str | None) -> int | float | None:
    """Parse an integer, or a float when the text has a decimal point. ``None`` if not numeric."""
    if text is None:
        return None
    text = text.strip()
    try:
        return float(text) if "." in text else int(text)
    except ValueError:
        return None


# ################
# Implementation
# ################

_DELIMITED = re.compile(r"^([/#~!%@|])(.*)\1[a-zA-Z]*$", re.DOTALL)

_BOUND_FIELDS = {
    ParameterKind.STRING: ("min_length", "max_length"),
    ParameterKind.INTEGER: ("minimum", "maximum"),
    ParameterKind.NUMBER: ("minimum", "maximum"),
    ParameterKind.ARRAY: ("min_items", "max_items"),
}


def _integer(text: str | None) -> int | None:
    value = parse_number(text)
    return int(value) if value is not None else None


def _bounds(name: str, args: tuple[str, ...], kind: ParameterKind) -> dict[str, Any]:
    fields = _BOUND_FIELDS.get(kind)
    if fields is None:
        return {}
    lower, upper = fields
    integral = kind is not ParameterKind.NUMBER and kind is not ParameterKind.INTEGER
    if name == "between":
        return _pair(args, lower, upper, integral=integral)
    value = parse_number(args[0] if args else None)
    if value is None:
        return {}
    if integral:
        value = int(value)
    if name == "min":
        return {lower: value}
    if name == "max":
        return {upper: value}
    return {lower: value, upper: value}


def _pair(args: tuple[str, ...], lower: str, upper: str, *, integral: bool) -> dict[str, Any]:
    if len(args) < 2:
        return {}
    low = parse_number(args[0])
    high = parse_number(args[1])
    if low is None or high is None:
        return {}
    if integral:
        low, high = int(low), int(high)
    return {lower: low, upper: high}


def _comparison(name: str, arg: str | None, kind: ParameterKind) -> dict[str, Any]:
    if kind not in (ParameterKind.INTEGER, ParameterKind.NUMBER):
        return {}
    value = parse_number(arg)
    if value is None:
        return {}
    target = {
        "gt": "exclusive_minimum",
        "gte": "minimum",
        "lt": "exclusive_maximum",
        "lte": "maximum",
    }[name]
    return {target: value}
