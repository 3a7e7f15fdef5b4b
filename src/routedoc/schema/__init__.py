# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema construction from validation rules, conditions and resources."""

from routedoc.schema.conditional import ConditionGroup, compose_conditional_schema, group_conditional_rules
from routedoc.schema.parameters import (
    MultipartContent,
    build_parameter_schema,
    descriptors_from_rule_set,
    descriptors_from_rules,
)
from routedoc.schema.registry import SchemaRegistry
from routedoc.schema.resources import build_item_schema, build_resource_schema, wrap_resource_reference
from routedoc.schema.rules import RuleConstraint, infer_kind, map_rule

__all__ = [
    "RuleConstraint",
    "map_rule",
    "infer_kind",
    "MultipartContent",
    "build_parameter_schema",
    "descriptors_from_rules",
    "descriptors_from_rule_set",
    "ConditionGroup",
    "group_conditional_rules",
    "compose_conditional_schema",
    "build_item_schema",
    "build_resource_schema",
    "wrap_resource_reference",
    "SchemaRegistry",
]
