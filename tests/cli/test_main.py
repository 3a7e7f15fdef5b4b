# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the RouteDoc CLI entry point."""

import json
import sys
from pathlib import Path

import pytest
import yaml

from routedoc.cli.main import main

# ###############
# Test Helpers
# ###############

_INPUT = """\
routes:
  - uri: api/users
    methods: [GET]
    controller: UserController
    action: index
  - uri: api/users
    methods: [POST]
    controller: UserController
    action: store
controllers:
  UserController@index:
    resource: App\\Http\\Resources\\UserResource
    is_collection: true
  UserController@store:
    inline_rules:
      email: required|email
resources:
  App\\Http\\Resources\\UserResource:
    properties:
      id:
        type: integer
"""

_BROKEN_INPUT = """\
routes:
  - uri: api/orders
    controller: OrderController
    action: index
controllers:
  OrderController@index:
    resource: App\\Http\\Resources\\OrderResource
"""


def _write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


def _run(monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
    monkeypatch.setattr(sys, "argv", ["routedoc", *args])
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


# ###############
# Public Interface
# ###############


def test_main_no_args_prints_help_and_exits(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    assert _run(monkeypatch) == 0
    assert "generate" in capsys.readouterr().out


# -------- generate tests --------


def test_generate_to_stdout(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    input_file = _write(tmp_path, "input.yaml", _INPUT)
    assert _run(monkeypatch, "generate", str(input_file)) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["openapi"] == "3.0.0"
    assert set(data["paths"]["/api/users"]) == {"get", "post"}
    assert list(data["components"]["schemas"]) == ["UserResource"]


def test_generate_yaml_to_stdout(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    input_file = _write(tmp_path, "input.yaml", _INPUT)
    assert _run(monkeypatch, "generate", str(input_file), "--format", "yaml") == 0
    assert yaml.safe_load(capsys.readouterr().out)["info"]["title"] == "API Documentation"


def test_generate_to_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    input_file = _write(tmp_path, "input.yaml", _INPUT)
    output = tmp_path / "build" / "openapi.yaml"
    assert _run(monkeypatch, "generate", str(input_file), "-o", str(output)) == 0

    assert "Wrote 1 path(s)" in capsys.readouterr().out
    assert yaml.safe_load(output.read_text())["paths"]["/api/users"]["post"]["operationId"] == "postApiUsers"


def test_generate_with_config_and_version_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    input_file = _write(tmp_path, "input.yaml", _INPUT)
    config_file = _write(tmp_path, "routedoc.yaml", "title: Shop API\ntarget-version: '3.0.0'\n")
    output = tmp_path / "openapi.json"
    code = _run(
        monkeypatch,
        "generate",
        str(input_file),
        "-c",
        str(config_file),
        "--target-version",
        "3.1.0",
        "-o",
        str(output),
    )
    assert code == 0

    data = json.loads(output.read_text())
    assert data["info"]["title"] == "Shop API"
    assert data["openapi"] == "3.1.0"


def test_generate_missing_input(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    assert _run(monkeypatch, "generate", str(tmp_path / "missing.yaml")) == 1
    assert "Error:" in capsys.readouterr().err


def test_generate_invalid_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    input_file = _write(tmp_path, "input.yaml", _INPUT)
    config_file = _write(tmp_path, "routedoc.yaml", "servers: /api\n")
    assert _run(monkeypatch, "generate", str(input_file), "-c", str(config_file)) == 1
    assert "'servers' must be a list" in capsys.readouterr().err


# -------- check tests --------


def test_check_clean_input(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    input_file = _write(tmp_path, "input.yaml", _INPUT)
    assert _run(monkeypatch, "check", str(input_file)) == 0
    assert "No issues found." in capsys.readouterr().out


def test_check_reports_broken_reference(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    input_file = _write(tmp_path, "input.yaml", _BROKEN_INPUT)
    assert _run(monkeypatch, "check", str(input_file)) == 1
    assert "schema 'OrderResource' is referenced but never defined" in capsys.readouterr().err


def test_check_counts_warnings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    content = """\
routes:
  - uri: api/users/{user}
    controller: UserController
    action: show
controllers:
  UserController@show:
    response_links:
      - status_code: 201
        name: GetPosts
        operation_id: postsIndex
"""
    input_file = _write(tmp_path, "input.yaml", content)
    assert _run(monkeypatch, "check", str(input_file)) == 0
    assert "1 warning(s) found." in capsys.readouterr().out
