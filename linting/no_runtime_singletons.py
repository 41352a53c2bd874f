#!/usr/bin/env python
"""Reject process-wide client state in runtime Python modules.

Sockets and HTTP clients are owned by ``RuntimeDeps`` and built inside the
app lifespan. Module-level construction of one of them, ``global`` rebinding
or singleton-style naming all bypass that and are flagged here.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT / "src"

RUNTIME_CLASSES = {
    "AsyncClient",
    "RuntimeDeps",
    "MeetingBotClient",
    "TranscriptionProxy",
    "TranscriptionSessionClient",
}
SINGLETON_CLASS_SUFFIX = "Singleton"
SINGLETON_FN_NAMES = {"get_instance", "reset_instance"}


def _call_name(node: ast.Call) -> str | None:
    func = node.func
    if isinstance(func, ast.Name):
        return func.id
    if isinstance(func, ast.Attribute):
        return func.attr
    return None


def _module_level_constructions(node: ast.stmt) -> list[str]:
    # Function and class bodies run later, under an owner; only flag what runs at import.
    if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef)):
        return []
    names: list[str] = []
    for child in ast.walk(node):
        if isinstance(child, ast.Call):
            name = _call_name(child)
            if name in RUNTIME_CLASSES:
                names.append(name)
    return names


def _collect_violations(filepath: Path) -> list[str]:
    try:
        source = filepath.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return []

    try:
        tree = ast.parse(source, filename=str(filepath))
    except SyntaxError:
        return []

    violations: list[str] = []
    rel = filepath.relative_to(ROOT)

    for node in tree.body:
        if isinstance(node, ast.ClassDef) and node.name.endswith(SINGLETON_CLASS_SUFFIX):
            violations.append(f"  {rel}:{node.lineno} class `{node.name}` uses singleton naming")
            continue
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)) and node.name in SINGLETON_FN_NAMES:
            violations.append(f"  {rel}:{node.lineno} function `{node.name}` suggests singleton lifecycle")
            continue
        for name in _module_level_constructions(node):
            violations.append(f"  {rel}:{node.lineno} `{name}` constructed at import time")

    for node in ast.walk(tree):
        if isinstance(node, ast.Global):
            names = ", ".join(node.names)
            violations.append(f"  {rel}:{node.lineno} `global` rebinding of module state: {names}")

    return violations


def main() -> int:
    if not SRC_DIR.is_dir():
        print(f"[no-runtime-singletons] Missing source directory: {SRC_DIR}", file=sys.stderr)
        return 1

    violations: list[str] = []
    for py_file in sorted(SRC_DIR.rglob("*.py")):
        if "__pycache__" in py_file.parts:
            continue
        violations.extend(_collect_violations(py_file))

    if not violations:
        return 0

    print("Runtime singleton violations:", file=sys.stderr)
    for violation in violations:
        print(violation, file=sys.stderr)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
