"""Architecture boundary checks: the domain package stays free of I/O."""

from __future__ import annotations

import ast
from pathlib import Path

DOMAIN_DIR = Path(__file__).resolve().parents[1] / "ensek_check" / "domain"

FORBIDDEN_PREFIXES = ("httpx", "dotenv", "ensek_check.runtime", "ensek_check.client", "ensek_check.application")


def _imports(path: Path) -> list[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    result: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                result.append(alias.name)
        elif isinstance(node, ast.ImportFrom):
            base = "." * node.level + (node.module or "")
            result.append(base)
    return result


def test_domain_does_not_import_io_layers() -> None:
    violations: list[str] = []
    for path in sorted(DOMAIN_DIR.rglob("*.py")):
        for mod in _imports(path):
            if any(mod == prefix or mod.startswith(f"{prefix}.") for prefix in FORBIDDEN_PREFIXES):
                violations.append(f"{path}: {mod}")
    assert not violations, "Domain -> I/O layer import violations:\n" + "\n".join(violations)


def test_domain_does_not_log() -> None:
    violations = [
        str(path) for path in sorted(DOMAIN_DIR.rglob("*.py")) if "logging" in _imports(path)
    ]
    assert not violations, "Domain modules should not configure or use logging:\n" + "\n".join(violations)
