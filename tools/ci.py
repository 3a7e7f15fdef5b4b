#!/usr/bin/env python3
# Copyright 2026 RouteDoc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the RouteDoc CI checks locally: format, lint, type check, tests and build."""

import argparse
import subprocess
import sys
import time
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: list[tuple[str, list[str]]] = [
    ("Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"]),
    ("Lint", ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"]),
    ("Type check", ["uv", "run", "ty", "check", "src/"]),
    ("Tests", ["uv", "run", "pytest", "--cov=routedoc", "--cov-report=term-missing"]),
    ("Build", ["uv", "build"]),
]


def main() -> int:
    """Run the selected CI steps and report results."""
    parser = argparse.ArgumentParser(description="Run RouteDoc CI checks")
    parser.add_argument(
        "--only",
        action="append",
        choices=[name for name, _ in STEPS],
        help="Run only the named step (repeatable)",
    )
    args = parser.parse_args()
    selected = [(name, cmd) for name, cmd in STEPS if not args.only or name in args.only]

    results: list[tuple[str, bool, float]] = []
    for name, cmd in selected:
        sep = chalk.blue("=" * 60)
        print(f"\n{sep}")
        print(chalk.blue(name))
        print(sep)
        start = time.monotonic()
        proc = subprocess.run(cmd, cwd=_repo_root())
        results.append((name, proc.returncode == 0, time.monotonic() - start))

    _print_summary(results)
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################


def _print_summary(results: list[tuple[str, bool, float]]) -> None:
    sep = "=" * 60
    print(f"\n{chalk.blue(sep)}")
    print(chalk.blue("  Summary"))
    print(chalk.blue(sep))
    for name, passed, elapsed in results:
        color = chalk.green if passed else chalk.red
        status = "PASS" if passed else "FAIL"
        print(color(f"  {status}  {name} ({elapsed:.1f}s)"))
    print()


def _repo_root() -> str:
    return str(Path(__file__).parent.parent)


if __name__ == "__main__":
    sys.exit(main())
