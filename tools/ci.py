#!/usr/bin/env python3
# Copyright 2026 chainabi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the chainabi CI steps locally.

Usage::

    python tools/ci.py              # every step
    python tools/ci.py --skip build # everything except the package build
    python tools/ci.py --only tests lint
"""

import argparse
import pathlib
import subprocess
import sys
import time
from dataclasses import dataclass

from yachalk import chalk

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class Step:
    """A named CI step and the command that runs it."""

    key: str
    title: str
    command: list[str]


STEPS: list[Step] = [
    Step("format", "Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"]),
    Step("lint", "Lint", ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"]),
    Step("types", "Type check", ["uv", "run", "ty", "check", "src/"]),
    Step("tests", "Tests", ["uv", "run", "pytest", "--cov=chainabi", "--cov-report=term-missing"]),
    Step("build", "Build", ["uv", "build"]),
]


def main() -> int:
    """Run the selected CI steps and print a summary."""
    args = _parse_args()
    selected = [s for s in STEPS if (not args.only or s.key in args.only) and s.key not in args.skip]

    outcomes: list[tuple[Step, bool, float]] = []
    for step in selected:
        _banner(step.title)
        started = time.monotonic()
        returncode = subprocess.run(step.command, cwd=_repo_root()).returncode
        outcomes.append((step, returncode == 0, time.monotonic() - started))
        if returncode != 0 and args.fail_fast:
            break

    _banner("Summary")
    for step, passed, elapsed in outcomes:
        paint = chalk.green if passed else chalk.red
        print(paint(f"  {'PASS' if passed else 'FAIL'}  {step.title} ({elapsed:.1f}s)"))
    print()
    return 0 if all(passed for _, passed, _ in outcomes) else 1


# ################
# Implementation
# ################


def _parse_args() -> argparse.Namespace:
    keys = [s.key for s in STEPS]
    parser = argparse.ArgumentParser(description="Run the chainabi CI steps.")
    parser.add_argument("--only", nargs="+", choices=keys, default=[], help="Run only these steps")
    parser.add_argument("--skip", nargs="+", choices=keys, default=[], help="Skip these steps")
    parser.add_argument("--fail-fast", action="store_true", help="Stop at the first failing step")
    return parser.parse_args()


def _banner(title: str) -> None:
    rule = chalk.blue("=" * 60)
    print(f"\n{rule}\n{chalk.blue(title)}\n{rule}")


def _repo_root() -> pathlib.Path:
    return pathlib.Path(__file__).resolve().parent.parent


if __name__ == "__main__":
    sys.exit(main())
