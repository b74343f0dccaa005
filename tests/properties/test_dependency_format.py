"""Tests that every third-party import is declared in pyproject.toml."""

import ast
import re
import sys
from pathlib import Path

import tomli
from hypothesis import given
from hypothesis import strategies as st

PROJECT_ROOT = Path(__file__).parent.parent.parent

# Import names that differ from their distribution names would go here
DISTRIBUTION_NAMES: dict[str, str] = {}


def load_pyproject_toml():
    """Load the pyproject.toml file."""
    with open(PROJECT_ROOT / "pyproject.toml", "rb") as f:
        return tomli.load(f)


def requirement_name(dep: str) -> str:
    """Distribution name of a PEP 508 requirement string."""
    return re.split(r"[\[<>=!~;\s]", dep.strip(), maxsplit=1)[0].lower()


def third_party_imports(package: Path) -> set[str]:
    """Top-level modules imported by ``package`` that are neither stdlib nor local."""
    names = set()
    for source in package.rglob("*.py"):
        tree = ast.parse(source.read_text())
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                names.update(alias.name.split(".")[0] for alias in node.names)
            elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
                names.add(node.module.split(".")[0])
    return {
        n for n in names if n not in sys.stdlib_module_names and n != package.name
    }


def test_every_runtime_import_is_declared():
    """Modules imported by devcluster are all listed as project dependencies."""
    declared = {requirement_name(d) for d in load_pyproject_toml()["project"]["dependencies"]}

    for module in third_party_imports(PROJECT_ROOT / "devcluster"):
        distribution = DISTRIBUTION_NAMES.get(module, module)
        assert distribution in declared, f"'{module}' is imported but not declared"


def test_click_is_declared_alongside_typer():
    """click is imported directly, so it is declared and typer stays on releases using it."""
    dependencies = load_pyproject_toml()["project"]["dependencies"]
    by_name = {requirement_name(d): d for d in dependencies}

    assert "click" in by_name
    assert "<" in by_name["typer"]


def test_typer_uses_the_declared_click():
    """The usage-error handling catches the same click exceptions typer raises."""
    import click
    from typer import core

    assert core.click is click


@given(
    name=st.from_regex(r"^[a-z0-9]([a-z0-9_-]*[a-z0-9])?$", fullmatch=True),
    spec=st.sampled_from(["", ">=1.0.0", ">=0.12.0,<0.20", "[extra]>=2.0", "==1.2.3"]),
)
def test_requirement_name_strips_specifiers(name, spec):
    """For any requirement string, the parsed name is the distribution name."""
    assert requirement_name(f"{name}{spec}") == name
