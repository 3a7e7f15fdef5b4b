# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Validation rule tokens, request parameter descriptors and branch conditions.

Rule text such as ``"required|string|max:255"`` is parsed into ``RuleToken``
values exactly once, when a descriptor or rule set is validated. Everything
downstream works on tokens.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############

# Rules whose argument is a single regular expression that may contain commas.
PATTERN_RULES = frozenset({"regex", "not_regex", "pattern"})


class RuleToken(BaseModel):
    """A single validation rule with its ordered arguments."""

    model_config = ConfigDict(frozen=True)

    name: str
    args: tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str) -> RuleToken:
        """Parse one rule segment such as ``"between:1,10"``."""
        name, sep, remainder = text.strip().partition(":")
        name = name.strip().lower()
        if not sep:
            return cls(name=name)
        if name in PATTERN_RULES:
            return cls(name=name, args=(remainder,))
        args = tuple(arg.strip() for arg in remainder.split(","))
        return cls(name=name, args=tuple(arg for arg in args if arg))

    def first_arg(self) -> str | None:
        return self.args[0] if self.args else None


def parse_rules(raw: Any) -> list[RuleToken]:
    """Parse rule text or a list of rule entries into tokens.

    A string is split on ``|``. In a list, every string entry is one rule and
    entries that are neither strings nor tokens (rule objects, closures) are
    skipped. Any other value (numbers, booleans, mappings) yields no rules.
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        return [RuleToken.parse(segment) for segment in raw.split("|") if segment.strip()]
    if not isinstance(raw, (list, tuple)):
        return []
    tokens: list[RuleToken] = []
    for entry in raw:
        if isinstance(entry, RuleToken):
            tokens.append(entry)
        elif isinstance(entry, str) and entry.strip():
            tokens.append(RuleToken.parse(entry))
        elif isinstance(entry, dict) and "name" in entry:
            tokens.append(RuleToken.model_validate(entry))
    return tokens


class ParameterKind(Enum):
    """Primitive kinds a request parameter may declare."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    FILE = "file"


class HttpMethodCondition(BaseModel):
    """Branch is active for one HTTP method."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["http_method"] = "http_method"
    method: str


class UserCheckCondition(BaseModel):
    """Branch is active when a user predicate such as ``isAdmin`` holds."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["user_check"] = "user_check"
    name: str


class RequestFieldCondition(BaseModel):
    """Branch is active depending on a request field (e.g. ``has 'token'``)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["request_field"] = "request_field"
    check: str
    field: str


class ElseCondition(BaseModel):
    """Branch is active when no sibling branch is."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["else"] = "else"


class CustomCondition(BaseModel):
    """Branch guarded by an arbitrary expression."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["custom"] = "custom"
    expression: str = ""


Condition = Annotated[
    HttpMethodCondition | UserCheckCondition | RequestFieldCondition | ElseCondition | CustomCondition,
    _Field(discriminator="kind"),
]


class ConditionalBranch(BaseModel):
    """The rules a field carries while all of ``conditions`` hold."""

    conditions: list[Condition] = _Field(default_factory=list)
    rules: list[RuleToken] = _Field(default_factory=list)

    @field_validator("rules", mode="before")
    @classmethod
    def _parse_rules(cls, value: Any) -> list[RuleToken]:
        return parse_rules(value)


class FileDimensions(BaseModel):
    """Image dimension constraints from a ``dimensions`` rule."""

    width: int | None = None
    height: int | None = None
    min_width: int | None = None
    min_height: int | None = None
    max_width: int | None = None
    max_height: int | None = None
    ratio: str | None = None


class FileInfo(BaseModel):
    """Upload metadata for a file parameter. Sizes are in bytes."""

    is_image: bool = False
    mimes: list[str] = _Field(default_factory=list)
    mime_types: list[str] = _Field(default_factory=list)
    min_size: int | None = None
    max_size: int | None = None
    dimensions: FileDimensions | None = None
    multiple: bool = False


class ParameterDescriptor(BaseModel):
    """A request field with its declared constraints and rules.

    ``kind`` left unset means the kind is inferred from ``rules``.
    """

    name: str = ""
    kind: ParameterKind | None = None
    required: bool = False
    nullable: bool = False
    format: str | None = None
    enum: list[Any] | None = None
    minimum: int | float | None = None
    maximum: int | float | None = None
    min_length: int | None = None
    max_length: int | None = None
    min_items: int | None = None
    max_items: int | None = None
    pattern: str | None = None
    default: Any = None
    example: Any = None
    description: str | None = None
    rules: list[RuleToken] = _Field(default_factory=list)
    file: FileInfo | None = None
    conditional_rules: list[ConditionalBranch] = _Field(default_factory=list)

    @field_validator("rules", mode="before")
    @classmethod
    def _parse_rules(cls, value: Any) -> list[RuleToken]:
        return parse_rules(value)

    @property
    def is_file(self) -> bool:
        return self.kind is ParameterKind.FILE or self.file is not None

    @property
    def is_conditional(self) -> bool:
        return bool(self.conditional_rules)


class ValidationRuleSet(BaseModel):
    """Validation declared by a form request: plain rules, branches and explicit descriptors."""

    rules: dict[str, list[RuleToken]] = _Field(default_factory=dict)
    branches: dict[str, list[ConditionalBranch]] = _Field(default_factory=dict)
    parameters: list[ParameterDescriptor] = _Field(default_factory=list)

    @field_validator("rules", mode="before")
    @classmethod
    def _parse_rule_map(cls, value: Any) -> dict[str, list[RuleToken]]:
        if not isinstance(value, dict):
            return value
        return {str(name): parse_rules(raw) for name, raw in value.items()}

    @property
    def is_empty(self) -> bool:
        return not (self.rules or self.branches or self.parameters)


ConditionalBranch.model_rebuild()
ParameterDescriptor.model_rebuild()
