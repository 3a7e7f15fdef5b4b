# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for rule parsing and descriptor validation."""

import pytest
from pydantic import ValidationError

from routedoc.model.descriptors import (
    ConditionalBranch,
    CustomCondition,
    HttpMethodCondition,
    ParameterDescriptor,
    ParameterKind,
    RuleToken,
    ValidationRuleSet,
    parse_rules,
)
from routedoc.model.routes import ControllerAnalysis, ResponseLink

# ###############
# Public Interface
# ###############


class TestRuleTokenParse:
    def test_name_only(self) -> None:
        assert RuleToken.parse("required") == RuleToken(name="required")

    def test_arguments_split_on_comma(self) -> None:
        token = RuleToken.parse("between:1,10")
        assert token.name == "between"
        assert token.args == ("1", "10")

    def test_name_is_lowercased(self) -> None:
        assert RuleToken.parse("Email").name == "email"

    def test_regex_keeps_commas(self) -> None:
        assert RuleToken.parse("regex:/^a{1,3}$/").args == ("/^a{1,3}$/",)

    def test_empty_arguments_are_dropped(self) -> None:
        assert RuleToken.parse("in:").args == ()
        assert RuleToken.parse("in:a,,b").args == ("a", "b")

    def test_tokens_are_immutable(self) -> None:
        token = RuleToken.parse("min:1")
        with pytest.raises(ValidationError):
            token.name = "max"  # type: ignore[misc]


class TestParseRules:
    def test_pipe_string(self) -> None:
        assert [t.name for t in parse_rules("required|email|max:255")] == ["required", "email", "max"]

    def test_list_entries_are_single_rules(self) -> None:
        tokens = parse_rules(["required", "regex:/a|b/"])
        assert [t.name for t in tokens] == ["required", "regex"]
        assert tokens[1].args == ("/a|b/",)

    def test_non_string_entries_are_skipped(self) -> None:
        assert [t.name for t in parse_rules(["required", 42, None, {"class": "Rule"}])] == ["required"]

    def test_none_is_empty(self) -> None:
        assert parse_rules(None) == []

    def test_empty_segments_are_dropped(self) -> None:
        assert [t.name for t in parse_rules("required||string|")] == ["required", "string"]

    @pytest.mark.parametrize("raw", [5, True, 1.5, {"required": True}])
    def test_unsupported_values_yield_no_rules(self, raw: object) -> None:
        assert parse_rules(raw) == []


class TestDescriptorValidation:
    def test_rules_parsed_on_construction(self) -> None:
        descriptor = ParameterDescriptor(name="email", rules="required|email")
        assert [t.name for t in descriptor.rules] == ["required", "email"]

    def test_kind_from_value(self) -> None:
        descriptor = ParameterDescriptor.model_validate({"name": "avatar", "kind": "file"})
        assert descriptor.kind is ParameterKind.FILE
        assert descriptor.is_file

    def test_conditions_discriminated_by_kind(self) -> None:
        branch = ConditionalBranch.model_validate(
            {"conditions": [{"kind": "http_method", "method": "POST"}, {"kind": "custom"}], "rules": "required"}
        )
        assert branch.conditions == [HttpMethodCondition(method="POST"), CustomCondition()]
        assert branch.rules == [RuleToken(name="required")]

    def test_conditions_compare_structurally(self) -> None:
        assert HttpMethodCondition(method="PUT") == HttpMethodCondition(method="PUT")
        assert HttpMethodCondition(method="PUT") != HttpMethodCondition(method="POST")

    def test_rule_set_map(self) -> None:
        rule_set = ValidationRuleSet.model_validate({"rules": {"name": "required|string", "tags": ["array"]}})
        assert [t.name for t in rule_set.rules["name"]] == ["required", "string"]
        assert not rule_set.is_empty


class TestControllerContracts:
    def test_inline_rules_parsed(self) -> None:
        controller = ControllerAnalysis.model_validate({"inline_rules": {"title": "required|max:100"}})
        assert controller.inline_rules["title"][1] == RuleToken(name="max", args=("100",))

    def test_non_rule_values_are_ignored(self) -> None:
        controller = ControllerAnalysis.model_validate(
            {"inline_rules": {"age": 5, "flag": True, "meta": {"max": 3}, "name": "required"}}
        )
        assert controller.inline_rules == {"age": [], "flag": [], "meta": [], "name": [RuleToken(name="required")]}

    def test_error_response_keys_become_strings(self) -> None:
        controller = ControllerAnalysis.model_validate({"error_responses": {409: "Conflict"}})
        assert controller.error_responses == {"409": "Conflict"}

    def test_link_status_code_normalized(self) -> None:
        link = ResponseLink.model_validate({"status_code": 201, "name": "GetUser", "operation_id": "usersShow"})
        assert link.status_code == "201"

    def test_link_needs_exactly_one_target(self) -> None:
        with pytest.raises(ValidationError):
            ResponseLink(status_code="200", name="Broken")
        with pytest.raises(ValidationError):
            ResponseLink(status_code="200", name="Broken", operation_id="a", operation_ref="#/paths/~1a/get")
