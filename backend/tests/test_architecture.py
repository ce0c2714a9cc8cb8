"""
Architecture boundary tests — keep the preset engine's layers pointing inward.

Allowed dependency direction:
  domain/         → stdlib + sqlmodel only
  infrastructure/ → domain, logging_config (NOT application, api)
  application/    → domain, infrastructure, i18n, logging_config (NOT api)
  api/            → application, domain, api, logging_config
                    (infrastructure only for get_session)
"""

import ast
import sys
from pathlib import Path

import pytest

BACKEND_ROOT = Path(__file__).parent.parent

FORBIDDEN_LAYERS = {
    "domain": ["application", "infrastructure", "api", "i18n", "config", "logging_config"],
    "infrastructure": ["application", "api"],
    "application": ["api", "main"],
}

DOMAIN_THIRD_PARTY_ALLOWED = {"sqlmodel"}

API_ALLOWED_INFRASTRUCTURE = {"infrastructure.database"}


def _collect_imports(filepath: Path) -> list[str]:
    """Parse a Python file and return all imported module names."""
    tree = ast.parse(filepath.read_text())
    imports: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            imports.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            imports.append(node.module)
    return imports


def _layer_files(layer: str) -> list[Path]:
    layer_dir = BACKEND_ROOT / layer
    if not layer_dir.exists():
        return []
    return sorted(layer_dir.rglob("*.py"))


def _matches(module: str, prefix: str) -> bool:
    return module == prefix or module.startswith(f"{prefix}.")


@pytest.mark.parametrize("layer", sorted(FORBIDDEN_LAYERS))
def test_layer_has_no_forbidden_imports(layer: str) -> None:
    files = _layer_files(layer)
    assert files, f"no python files found for layer {layer}"

    violations = [
        f"{filepath.relative_to(BACKEND_ROOT)}: imports {imp}"
        for filepath in files
        for imp in _collect_imports(filepath)
        for forbidden in FORBIDDEN_LAYERS[layer]
        if _matches(imp, forbidden)
    ]
    assert violations == [], f"{layer} layer violations:\n" + "\n".join(violations)


def test_domain_only_uses_stdlib_and_sqlmodel() -> None:
    violations = []
    for filepath in _layer_files("domain"):
        for imp in _collect_imports(filepath):
            top = imp.split(".")[0]
            if top == "domain" or top in sys.stdlib_module_names:
                continue
            if top not in DOMAIN_THIRD_PARTY_ALLOWED:
                violations.append(f"{filepath.name}: imports {imp}")
    assert violations == [], "Domain third-party imports:\n" + "\n".join(violations)


def test_api_only_touches_infrastructure_for_sessions() -> None:
    violations = [
        f"{filepath.name}: imports {imp}"
        for filepath in _layer_files("api")
        for imp in _collect_imports(filepath)
        if _matches(imp, "infrastructure") and imp not in API_ALLOWED_INFRASTRUCTURE
    ]
    assert violations == [], "API layer infrastructure violations:\n" + "\n".join(violations)
