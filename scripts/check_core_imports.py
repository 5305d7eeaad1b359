#!/usr/bin/env python3
"""
Fail if core imports the transport or the API layer.
Checks all Python files under src/gatepay_sdk/core/.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
CORE_DIR = REPO_ROOT / "src" / "gatepay_sdk" / "core"

FORBIDDEN_PREFIXES = (
    "httpx",
    "respx",
    "gatepay_sdk.client",
    "gatepay_sdk.apis",
    "gatepay_sdk.gatepay",
    "gatepay_sdk.payments",
)


def is_forbidden(module: str) -> bool:
    return any(
        module == prefix or module.startswith(prefix + ".")
        for prefix in FORBIDDEN_PREFIXES
    )


def scan_file(path: Path) -> list[str]:
    errors: list[str] = []
    tree = ast.parse(path.read_text())
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                mod = alias.name
                if is_forbidden(mod):
                    errors.append(f"{path}: forbidden import '{mod}'")
        elif isinstance(node, ast.ImportFrom):
            mod = node.module or ""
            if node.level >= 2:
                # "from ..x import y" inside core resolves to gatepay_sdk.x
                mod = "gatepay_sdk" + (f".{mod}" if mod else "")
                if mod == "gatepay_sdk":
                    mod += "." + ",".join(a.name for a in node.names)
            if mod and is_forbidden(mod):
                errors.append(f"{path}: forbidden import '{mod}'")
    return errors


def main() -> int:
    violations: list[str] = []
    for py_file in CORE_DIR.rglob("*.py"):
        violations.extend(scan_file(py_file))

    if violations:
        for v in violations:
            print(v, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
