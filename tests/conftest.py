"""Shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from gomermaid.model import LoadedModule, PackageFact


class StaticLoader:
    """Loader returning a fixed LoadedModule, recording what it was asked for."""

    def __init__(self, loaded: LoadedModule, *, handles: bool = True):
        self.loaded = loaded
        self.handles = handles
        self.calls: list[tuple[Path, str]] = []

    def can_handle(self, module_dir: Path) -> bool:
        return self.handles

    def load(self, module_dir: Path, pattern: str) -> LoadedModule:
        self.calls.append((module_dir, pattern))
        return self.loaded


@pytest.fixture
def static_loader():
    """Factory for loaders that return a fixed LoadedModule."""
    return StaticLoader


@pytest.fixture
def app_module() -> LoadedModule:
    """Two-package module: a imports b."""
    return LoadedModule(
        module_path="example.com/app",
        packages=[
            PackageFact("example.com/app/a", "a", frozenset({"example.com/app/b"})),
            PackageFact("example.com/app/b", "b"),
        ],
    )


@pytest.fixture
def write_go_module(tmp_path: Path):
    """Write a go module from a ``{relative_path: source}`` mapping."""

    def _write(files: dict[str, str], module_path: str = "example.com/app") -> Path:
        (tmp_path / "go.mod").write_text(f"module {module_path}\n\ngo 1.22\n")
        for rel, source in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(source)
        return tmp_path

    return _write
