#!/usr/bin/env python3
"""Lint, type-check and test the autocrop package.

Stops at the first failing step and exits with its status.
"""

from __future__ import annotations

import argparse
import shutil
import subprocess
import sys


def _step(name: str, cmd: list[str]) -> int:
    print(f"=> [{name}]", " ".join(cmd))
    rc = subprocess.run(cmd, check=False).returncode
    if rc != 0:
        print(f"{name} failed (exit {rc})")
    return rc


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--fix", action="store_true", help="Let ruff apply safe fixes")
    parser.add_argument("--no-tests", action="store_true", help="Skip pytest")
    parser.add_argument("--no-imaging", action="store_true", help="Skip tests that need pyvips")
    args = parser.parse_args()

    ruff = [sys.executable, "-m", "ruff", "check", "."]
    if args.fix:
        ruff.append("--fix")
    pyright = [shutil.which("pyright") or "pyright"]
    pytest = [sys.executable, "-m", "pytest", "-q"]
    if args.no_imaging:
        pytest += ["-m", "not imaging"]

    steps = [("ruff", ruff), ("pyright", pyright)]
    if not args.no_tests:
        steps.append(("pytest", pytest))

    for name, cmd in steps:
        rc = _step(name, cmd)
        if rc != 0:
            return rc

    print("All checks passed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
