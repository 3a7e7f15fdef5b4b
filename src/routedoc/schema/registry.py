# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Named component schemas and the references pointing at them.

Schemas registered here end up in ``components.schemas``; everywhere else a
``RefSchema`` is used. A reference may be requested before its schema is
registered. References that are still unregistered once generation ends are
reported by ``validate_references``.
"""

from __future__ import annotations

import re

from routedoc.model.schema import RefSchema, SchemaNode

# ###############
# Public Interface
# ###############


class SchemaRegistry:
    """Store of named schemas with forward-reference tracking."""

    def __init__(self) -> None:
        self._schemas: dict[str, SchemaNode] = {}
        self._referenced: set[str] = set()

    def register(self, name: str, schema: SchemaNode) -> None:
        """Register ``schema`` under ``name``, replacing an earlier registration."""
        self._schemas[name] = schema

    def has(self, name: str) -> bool:
        return name in self._schemas

    def get(self, name: str) -> SchemaNode | None:
        return self._schemas.get(name)

    def get_ref(self, name: str) -> RefSchema:
        """Return a reference to ``name``, whether or not it is registered yet."""
        self._referenced.add(name)
        return RefSchema(name=name)

    def all(self) -> dict[str, SchemaNode]:
        """All registered schemas in registration order."""
        return dict(self._schemas)

    def pending_references(self) -> list[str]:
        return sorted(name for name in self._referenced if name not in self._schemas)

    def validate_references(self) -> list[str]:
        """Names that were referenced but never registered. Empty when consistent."""
        return self.pending_references()

    def clear(self) -> None:
        self._schemas.clear()
        self._referenced.clear()

    @staticmethod
    def extract_schema_name(class_name: str) -> str:
        """Short schema name of a qualified class name, e.g. ``App\\Http\\UserResource`` -> ``UserResource``."""
        segments = [segment for segment in _SEPARATORS.split(class_name) if segment]
        return segments[-1] if segments else class_name

    def register_and_get_ref(self, class_name: str, schema: SchemaNode) -> RefSchema:
        """Register ``schema`` under the short name of ``class_name`` and return its reference."""
        name = self.extract_schema_name(class_name)
        self.register(name, schema)
        return self.get_ref(name)

    def __len__(self) -> int:
        return len(self._schemas)


# ################
# Implementation
# ################

_SEPARATORS = re.compile(r"[\\./]")
