# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Discriminated union schemas for conditional validation rules.

A field whose rules depend on runtime conditions (the HTTP method, a user
check, the presence of another request field) carries one branch per
condition set. Branches are grouped by a key derived from their first
condition; every group becomes one ``oneOf`` alternative holding the fields
active under it. Fields without branches appear in every alternative.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable
from dataclasses import dataclass, field

from routedoc.model.descriptors import (
    Condition,
    CustomCondition,
    ElseCondition,
    HttpMethodCondition,
    ParameterDescriptor,
    RequestFieldCondition,
    RuleToken,
    UserCheckCondition,
)
from routedoc.model.schema import Discriminator, ObjectSchema, OneOfSchema, SchemaNode
from routedoc.schema.parameters import branch_descriptor, object_schema

# ###############
# Public Interface
# ###############

DISCRIMINATOR_PROPERTY = "_condition"
DEFAULT_GROUP_KEY = "default"


@dataclass
class ConditionGroup:
    """Fields active while every condition of the group holds.

    Attributes:
        key: Stable key derived from the first condition.
        conditions: The conditions of the first branch that opened the group.
        members: Field name mapped to its descriptor and active rule tokens.
    """

    key: str
    conditions: list[Condition] = field(default_factory=list)
    members: dict[str, tuple[ParameterDescriptor, list[RuleToken]]] = field(default_factory=dict)


def condition_key(condition: Condition) -> str:
    """Derive the grouping key of a single condition."""
    if isinstance(condition, HttpMethodCondition):
        return condition.method.lower()
    if isinstance(condition, UserCheckCondition):
        return "user_" + condition.name.lower()
    if isinstance(condition, RequestFieldCondition):
        return f"request_{condition.check}_{condition.field}"
    if isinstance(condition, ElseCondition):
        return "else"
    if isinstance(condition, CustomCondition):
        if not condition.expression:
            return "unknown"
        return hashlib.md5(condition.expression.encode("utf-8")).hexdigest()[:8]
    raise TypeError(f"Unsupported condition: {condition!r}")


def group_key(conditions: list[Condition]) -> str:
    return condition_key(conditions[0]) if conditions else DEFAULT_GROUP_KEY


def describe_condition(condition: Condition) -> str:
    if isinstance(condition, HttpMethodCondition):
        return f"HTTP method is {condition.method.upper()}"
    if isinstance(condition, UserCheckCondition):
        return f"user {condition.name}()"
    if isinstance(condition, RequestFieldCondition):
        return f"request {condition.check} '{condition.field}'"
    if isinstance(condition, ElseCondition):
        return "Otherwise"
    if isinstance(condition, CustomCondition):
        return condition.expression or "Custom condition"
    raise TypeError(f"Unsupported condition: {condition!r}")


def describe_conditions(conditions: list[Condition]) -> str:
    if not conditions:
        return "Default validation rules"
    return " AND ".join(describe_condition(condition) for condition in conditions)


def group_conditional_rules(descriptors: Iterable[ParameterDescriptor]) -> list[ConditionGroup]:
    """Group the branches of conditional descriptors by condition key.

    Groups are returned in the order their key first appears. Members keep
    the order of ``descriptors``. A field hit twice within one group gets its
    rule lists concatenated.
    """
    named = [descriptor for descriptor in descriptors if descriptor.name]
    groups: dict[str, ConditionGroup] = {}
    for descriptor in named:
        for branch in descriptor.conditional_rules:
            key = group_key(branch.conditions)
            if key not in groups:
                groups[key] = ConditionGroup(key=key, conditions=list(branch.conditions))

    for group in groups.values():
        for descriptor in named:
            if not descriptor.is_conditional:
                group.members[descriptor.name] = (descriptor, list(descriptor.rules))
                continue
            tokens: list[RuleToken] | None = None
            for branch in descriptor.conditional_rules:
                if group_key(branch.conditions) == group.key:
                    tokens = (tokens or []) + list(branch.rules)
            if tokens is not None:
                group.members[descriptor.name] = (descriptor, tokens)
    return list(groups.values())


def compose_conditional_schema(descriptors: Iterable[ParameterDescriptor]) -> ObjectSchema | OneOfSchema:
    """Build an object schema, or a ``oneOf`` when two or more condition groups exist."""
    descriptors = list(descriptors)
    groups = group_conditional_rules(descriptors)
    if not groups:
        return _members_schema((descriptor, list(descriptor.rules)) for descriptor in descriptors if descriptor.name)
    if len(groups) == 1:
        return _members_schema(groups[0].members.values())

    branches: list[SchemaNode] = []
    mapping: dict[str, str] = {}
    for index, group in enumerate(groups):
        branch = _members_schema(group.members.values())
        update: dict[str, str] = {"description": describe_conditions(group.conditions)}
        if len(group.conditions) == 1 and isinstance(group.conditions[0], HttpMethodCondition):
            update["title"] = f"{group.conditions[0].method.upper()} Request"
        branches.append(branch.model_copy(update=update))
        mapping[group.key] = f"#/oneOf/{index}"
    return OneOfSchema(
        branches=branches,
        discriminator=Discriminator(property_name=DISCRIMINATOR_PROPERTY, mapping=mapping),
    )


# ################
# Implementation
# ################


def _members_schema(members: Iterable[tuple[ParameterDescriptor, list[RuleToken]]]) -> ObjectSchema:
    descriptors = [
        branch_descriptor(descriptor, tokens) if descriptor.is_conditional else descriptor
        for descriptor, tokens in members
    ]
    return object_schema(descriptors, with_files=True)
