"""Load package facts straight from Go sources via tree-sitter (no go toolchain)."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator
from pathlib import Path

from gomermaid.errors import LoadError
from gomermaid.model import LoadedModule, PackageFact

logger = logging.getLogger(__name__)

# Directories the go command never treats as part of ./...
_SKIP_DIRS = {"testdata", "vendor"}

_MODULE_RE = re.compile(r"^module\s+(\S+)")

# Build constraint used by generators and scripts kept beside a package.
_IGNORE_CONSTRAINT_RE = re.compile(r"^//(?:go:build| \+build) ignore\s*$")


class SourceLoader:
    """Walk the module tree and parse package clauses and imports."""

    def can_handle(self, module_dir: Path) -> bool:
        return (module_dir / "go.mod").exists()

    def load(self, module_dir: Path, pattern: str) -> LoadedModule:
        try:
            import tree_sitter_go as tsgo
            from tree_sitter import Language, Parser
        except ImportError as e:
            raise LoadError(
                "tree-sitter / tree-sitter-go not installed. "
                "Install with: pip install tree-sitter tree-sitter-go"
            ) from e

        module_path = read_module_path(module_dir / "go.mod")
        matches = compile_pattern(resolve_pattern(pattern, module_path))

        parser = Parser(Language(tsgo.language()))

        packages: list[PackageFact] = []
        file_count = 0
        for pkg_dir, go_files in _iter_package_dirs(module_dir):
            rel = pkg_dir.relative_to(module_dir).as_posix()
            import_path = module_path if rel == "." else f"{module_path}/{rel}"
            if not matches(import_path):
                continue

            name = ""
            imports: set[str] = set()
            file_count_before = file_count
            for go_file in go_files:
                parsed = _parse_file(parser, go_file)
                if parsed is None:
                    continue
                file_count += 1
                file_name, file_imports = parsed
                name = name or file_name
                imports |= file_imports

            if file_count_before == file_count:
                # Every file was unreadable or excluded by a build constraint.
                continue

            packages.append(
                PackageFact(path=import_path, name=name, imports=frozenset(imports))
            )

        logger.debug(
            "Go sources: module %s, %d packages, %d files",
            module_path,
            len(packages),
            file_count,
        )
        return LoadedModule(module_path=module_path, packages=packages)


def read_module_path(go_mod: Path) -> str:
    """Return the path declared by the ``module`` directive of *go_mod*."""
    try:
        content = go_mod.read_text(encoding="utf-8")
    except OSError as e:
        raise LoadError(f"Could not read {go_mod}: {e}") from e

    for line in content.splitlines():
        line = line.split("//", 1)[0].strip()
        m = _MODULE_RE.match(line)
        if m:
            return m.group(1).strip('"`')

    raise LoadError(f"No module directive in {go_mod}")


def resolve_pattern(pattern: str, module_path: str) -> str:
    """Turn a directory-relative pattern (``./...``) into an import path pattern."""
    if pattern == ".":
        return module_path
    if pattern.startswith("./"):
        return module_path + pattern[1:]
    return pattern


def compile_pattern(pattern: str) -> Callable[[str], bool]:
    """Return a predicate implementing go package pattern matching.

    ``...`` matches any string, and a trailing ``/...`` also matches the
    bare prefix, so ``example.com/app/...`` selects ``example.com/app``.
    """
    regex = re.escape(pattern).replace(r"\.\.\.", ".*")
    if regex.endswith("/.*"):
        regex = regex[: -len("/.*")] + "(/.*)?"
    compiled = re.compile(regex)
    return lambda path: compiled.fullmatch(path) is not None


def _iter_package_dirs(module_dir: Path) -> Iterator[tuple[Path, list[Path]]]:
    """Yield ``(directory, go_files)`` for every directory holding Go sources."""
    stack = [module_dir]
    while stack:
        current = stack.pop()
        go_files: list[Path] = []
        subdirs: list[Path] = []
        for child in sorted(current.iterdir()):
            if child.name.startswith((".", "_")):
                continue
            if child.is_dir():
                # The go command does not follow directory symlinks for ./...
                if child.is_symlink():
                    continue
                if child.name in _SKIP_DIRS or (child / "go.mod").exists():
                    continue
                subdirs.append(child)
            elif child.suffix == ".go" and not child.name.endswith("_test.go"):
                go_files.append(child)
        if go_files:
            yield current, go_files
        stack.extend(reversed(subdirs))


def _parse_file(parser, go_file: Path) -> tuple[str, set[str]] | None:
    """Return the package name and import paths declared in one Go file.

    Returns None for unreadable files and for files tagged
    ``//go:build ignore``, which the go command never builds.
    """
    try:
        source = go_file.read_bytes()
    except OSError as e:
        logger.warning("Could not read %s: %s", go_file, e)
        return None

    tree = parser.parse(source)
    name = ""
    imports: set[str] = set()

    for node in tree.root_node.children:
        if node.type == "comment":
            # Constraints only count in the header, before the package clause.
            if not name and _IGNORE_CONSTRAINT_RE.match(node.text.decode("utf-8")):
                logger.debug("Skipping %s: build constraint ignore", go_file)
                return None
        elif node.type == "package_clause":
            for child in node.children:
                if child.type == "package_identifier":
                    name = child.text.decode("utf-8")
        elif node.type == "import_declaration":
            for spec in _import_specs(node):
                path_node = spec.child_by_field_name("path")
                if path_node is not None:
                    imports.add(path_node.text.decode("utf-8").strip('"`'))

    return name, imports


def _import_specs(node) -> Iterator:
    for child in node.children:
        if child.type == "import_spec":
            yield child
        elif child.type == "import_spec_list":
            yield from _import_specs(child)
