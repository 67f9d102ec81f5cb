"""Tests for the tree-sitter source loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from gomermaid.errors import LoadError
from gomermaid.loaders.source import (
    SourceLoader,
    compile_pattern,
    read_module_path,
    resolve_pattern,
)

MAIN_GO = """\
package main

import (
\t"fmt"

\t"example.com/app/api"
\tcfg "example.com/app/config"
)

func main() { fmt.Println(api.Serve(cfg.Load())) }
"""

API_GO = """\
// Package api serves things.
package api

import "example.com/app/config"

func Serve(c config.C) string { return c.Name }
"""

API_EXTRA_GO = """\
package api

import (
\t_ "embed"
\t. `example.com/app/db`
)
"""

CONFIG_GO = """\
package config

type C struct{ Name string }

func Load() C { return C{} }
"""


def _by_path(loaded) -> dict:
    return {p.path: p for p in loaded.packages}


def test_load_module(write_go_module) -> None:
    """Package names and imports are read from every non-test file."""
    module_dir = write_go_module(
        {
            "main.go": MAIN_GO,
            "api/api.go": API_GO,
            "api/extra.go": API_EXTRA_GO,
            "api/api_test.go": 'package api\n\nimport "example.com/app/testutil"\n',
            "config/config.go": CONFIG_GO,
        }
    )

    loaded = SourceLoader().load(module_dir, "./...")
    packages = _by_path(loaded)

    assert loaded.module_path == "example.com/app"
    assert set(packages) == {"example.com/app", "example.com/app/api", "example.com/app/config"}
    assert packages["example.com/app"].is_entry_point
    assert packages["example.com/app"].imports == frozenset(
        {"fmt", "example.com/app/api", "example.com/app/config"}
    )
    assert packages["example.com/app/api"].name == "api"
    assert packages["example.com/app/api"].imports == frozenset(
        {"example.com/app/config", "embed", "example.com/app/db"}
    )
    assert packages["example.com/app/config"].imports == frozenset()


def test_skipped_directories(write_go_module) -> None:
    """testdata, vendor, dot/underscore dirs and nested modules are not walked."""
    module_dir = write_go_module(
        {
            "a/a.go": "package a\n",
            "testdata/t.go": "package t\n",
            "vendor/x/x.go": "package x\n",
            ".hidden/h.go": "package h\n",
            "_old/o.go": "package o\n",
            "tools/go.mod": "module example.com/app/tools\n",
            "tools/tools.go": "package tools\n",
            "docs/README.md": "not go\n",
        }
    )
    loaded = SourceLoader().load(module_dir, "./...")
    assert [p.path for p in loaded.packages] == ["example.com/app/a"]


def test_directory_symlinks_are_not_followed(write_go_module) -> None:
    """A link back into the tree does not create phantom packages."""
    module_dir = write_go_module({"a/a.go": "package a\n", "b/b.go": "package b\n"})
    (module_dir / "a" / "self").symlink_to(".", target_is_directory=True)
    (module_dir / "b2").symlink_to("b", target_is_directory=True)

    loaded = SourceLoader().load(module_dir, "./...")

    assert sorted(p.path for p in loaded.packages) == ["example.com/app/a", "example.com/app/b"]


def test_ignored_files_do_not_name_the_package(write_go_module) -> None:
    """A generator tagged go:build ignore is neither parsed for name nor imports."""
    module_dir = write_go_module(
        {
            "lib/gen.go": '//go:build ignore\n\npackage main\n\nimport "os"\n',
            "lib/lib.go": '// Package lib does things.\npackage lib\n\nimport "example.com/app/util"\n',
            "scripts/run.go": "// +build ignore\n\npackage main\n",
            "util/util.go": "package util\n",
        }
    )

    packages = _by_path(SourceLoader().load(module_dir, "./..."))

    assert set(packages) == {"example.com/app/lib", "example.com/app/util"}
    assert packages["example.com/app/lib"].name == "lib"
    assert not packages["example.com/app/lib"].is_entry_point
    assert packages["example.com/app/lib"].imports == frozenset({"example.com/app/util"})


def test_pattern_selects_subtree(write_go_module) -> None:
    module_dir = write_go_module(
        {
            "main.go": "package main\n",
            "internal/a/a.go": "package a\n",
            "internal/b/b.go": "package b\n",
            "pkg/c/c.go": "package c\n",
        }
    )
    loaded = SourceLoader().load(module_dir, "./internal/...")
    assert sorted(p.path for p in loaded.packages) == [
        "example.com/app/internal/a",
        "example.com/app/internal/b",
    ]

    loaded = SourceLoader().load(module_dir, ".")
    assert [p.path for p in loaded.packages] == ["example.com/app"]


def test_missing_go_mod(tmp_path: Path) -> None:
    with pytest.raises(LoadError, match="Could not read"):
        SourceLoader().load(tmp_path, "./...")


def test_read_module_path(tmp_path: Path) -> None:
    go_mod = tmp_path / "go.mod"
    go_mod.write_text('// comment\nmodule "example.com/quoted" // trailing\n\ngo 1.22\n')
    assert read_module_path(go_mod) == "example.com/quoted"

    go_mod.write_text("go 1.22\n")
    with pytest.raises(LoadError, match="No module directive"):
        read_module_path(go_mod)


@pytest.mark.parametrize(
    ("pattern", "expected"),
    [
        ("./...", "example.com/app/..."),
        (".", "example.com/app"),
        ("./cmd/server", "example.com/app/cmd/server"),
        ("example.com/app/pkg/...", "example.com/app/pkg/..."),
    ],
)
def test_resolve_pattern(pattern: str, expected: str) -> None:
    assert resolve_pattern(pattern, "example.com/app") == expected


def test_compile_pattern() -> None:
    """Trailing /... also matches the bare prefix; ... is a wildcard."""
    matches = compile_pattern("example.com/app/...")
    assert matches("example.com/app")
    assert matches("example.com/app/a/b")
    assert not matches("example.com/application")

    matches = compile_pattern("example.com/app/.../mocks")
    assert matches("example.com/app/x/y/mocks")
    assert not matches("example.com/app/mocks/x")

    matches = compile_pattern("example.com/app/a")
    assert matches("example.com/app/a")
    assert not matches("example.com/app/ab")
