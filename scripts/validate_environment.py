#!/usr/bin/env python3
"""Validate local portal environment readiness."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

import httpx

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from energy_portal.utils.config import get_settings

SEPARATOR_LINE = "=" * 44


def _print_result(name: str, success: bool, detail: str = "") -> tuple[bool, str]:
    if success:
        return True, f"[PASS] {name}{detail}"
    return False, f"[FAIL] {name}: {detail}"


def main() -> int:
    results: list[str] = []
    all_passed = True

    # CHECK 1: Python version >= 3.10
    if sys.version_info >= (3, 10):
        ok, line = _print_result("Python " + sys.version.split()[0], True)
    else:
        ok, line = _print_result(
            "Python version >= 3.10",
            False,
            f"found {sys.version.split()[0]}",
        )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 2: Required packages importable
    package_names = [
        "fastapi",
        "uvicorn",
        "pydantic",
        "httpx",
        "requests",
        "pandas",
        "streamlit",
        "plotly",
    ]
    import_errors: list[str] = []
    for module_name in package_names:
        try:
            importlib.import_module(module_name)
        except ImportError as exc:
            import_errors.append(f"{module_name} ({exc})")
    if import_errors:
        ok, line = _print_result(
            "Required packages",
            False,
            "missing/unimportable -> " + "; ".join(import_errors),
        )
    else:
        ok, line = _print_result("Required packages: all importable", True)
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 3: Settings resolution
    try:
        settings = get_settings()
        ok, line = _print_result("Settings", True, f": backend={settings.backend_url}")
    except ValueError as exc:
        settings = None
        ok, line = _print_result("Settings", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 4: Backend reachability (any HTTP answer counts as reachable)
    if settings is not None:
        endpoint = f"{settings.backend_url}/dataset"
        try:
            response = httpx.get(
                endpoint,
                params={"page": 1, "limit": 1},
                timeout=settings.backend_timeout_seconds,
            )
            ok, line = _print_result(
                "Backend reachable",
                True,
                f": GET {endpoint} -> {response.status_code}",
            )
        except httpx.HTTPError as exc:
            ok, line = _print_result("Backend reachable", False, f"{endpoint} ({exc})")
        results.append(line)
        all_passed = all_passed and ok

    print(SEPARATOR_LINE)
    print(" Energy Portal Environment Validation")
    print(SEPARATOR_LINE)
    for line in results:
        print(f" {line}")
    print(SEPARATOR_LINE)
    if all_passed:
        print(" All checks passed. Environment is ready.")
        print(SEPARATOR_LINE)
        return 0
    print(" One or more checks failed.")
    print(SEPARATOR_LINE)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
