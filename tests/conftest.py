"""Shared pytest fixtures for the create-velox-app test suite.

Provides reusable fixtures for:
- A binding map like the one the CLI builds
- A small on-disk template tree exercising every filename convention
- An isolated working directory for CLI runs
"""

from __future__ import annotations

from pathlib import Path

import pytest


# ---------------------------------------------------------------------------
# Bindings
# ---------------------------------------------------------------------------

@pytest.fixture
def bindings() -> dict[str, str]:
    """Binding map matching what ``build_template_data`` produces."""
    return {
        "project_name": "My App",
        "package_name": "my-app",
        "identifier": "com.test.my-app",
        "swift_module_name": "MyApp",
        "velox_dependency": '.package(path: "../velox")',
        "velox_local": "true",
        "pkg": "acme",
        "bar": "X",
    }


# ---------------------------------------------------------------------------
# Template trees
# ---------------------------------------------------------------------------

def _write(path: Path, content: str | bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_bytes(content.encode("utf-8"))


@pytest.fixture
def template_tree(tmp_path: Path) -> Path:
    """A template source tree covering each renaming rule.

    Layout::

        src/
          foo.lte                      -> foo (rendered)
          plain.txt                    -> plain.txt (copied)
          _gitignore                   -> .gitignore (copied)
          .DS_Store                    (skipped)
          empty/                       (recreated, empty)
          {% pkg %}/module.lte         -> acme/module
          Sources/__swift_module_name__/main.swift.lte
                                       -> Sources/MyApp/main.swift
    """
    root = tmp_path / "src"
    _write(root / "foo.lte", "{% bar %}")
    _write(root / "plain.txt", "left {% alone %}\n")
    _write(root / "_gitignore", ".build/\n{% not_rendered %}\n")
    _write(root / ".DS_Store", b"\x00\x01junk")
    (root / "empty").mkdir(parents=True)
    _write(root / "{% pkg %}" / "module.lte", "package {% pkg %}\n")
    _write(
        root / "Sources" / "__swift_module_name__" / "main.swift.lte",
        '{% if velox_local %}// local{% else %}// remote{% endif %}\nprint("{% project_name %}")\n',
    )
    return root


@pytest.fixture
def templates_root(tmp_path: Path) -> Path:
    """A templates directory holding a single ``template-mini`` template."""
    root = tmp_path / "templates"
    mini = root / "template-mini"
    _write(mini / "README.md.lte", "# {% project_name %}\n{% identifier %}\n")
    _write(mini / "Sources" / "__swift_module_name__" / "main.swift.lte", "// {% swift_module_name %}\n")
    _write(mini / "Package.swift.lte", "name: {% package_name %}\ndep: {% velox_dependency %}\n")
    _write(mini / "_gitignore", ".build/\n")
    _write(mini / "Makefile", "bootstrap:\n\ttrue\n")
    return root


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty working directory the CLI runs in."""
    cwd = tmp_path / "work"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    monkeypatch.setenv("VELOX_SKIP_BOOTSTRAP", "1")
    monkeypatch.delenv("VELOX_TEMPLATES_DIR", raising=False)
    monkeypatch.delenv("VELOX_PATH", raising=False)
    return cwd
