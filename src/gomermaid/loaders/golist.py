"""Load package facts by running ``go list -json``."""

from __future__ import annotations

import json
import logging
import shutil
import subprocess
from pathlib import Path

from gomermaid.errors import LoadError
from gomermaid.model import LoadedModule, PackageFact

logger = logging.getLogger(__name__)

_TIMEOUT = 300


class GoListLoader:
    """Ask the go toolchain which packages exist and what they import."""

    def __init__(self, go: str | None = None):
        self._go = go

    def can_handle(self, module_dir: Path) -> bool:
        return self._go_path() is not None and (module_dir / "go.mod").exists()

    def load(self, module_dir: Path, pattern: str) -> LoadedModule:
        go_path = self._go_path()
        if not go_path:
            raise LoadError("go executable not found on PATH")

        output = _run_go_list(go_path, module_dir, pattern)
        records = _decode_stream(output)
        return _to_loaded_module(records)

    def _go_path(self) -> str | None:
        return self._go or shutil.which("go")


def _run_go_list(go_path: str, module_dir: Path, pattern: str) -> str:
    """Run go list and return its stdout."""
    try:
        result = subprocess.run(
            [go_path, "list", "-e", "-json", pattern],
            capture_output=True,
            text=True,
            cwd=str(module_dir),
            timeout=_TIMEOUT,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        raise LoadError(f"Could not run go list: {e}") from e

    if result.returncode != 0:
        raise LoadError(
            "go list failed: "
            + (result.stderr.strip() if result.stderr else "unknown error")
        )
    return result.stdout


def _decode_stream(output: str) -> list[dict]:
    """Split go list's concatenated JSON objects into a list."""
    decoder = json.JSONDecoder()
    records: list[dict] = []
    pos = 0
    end = len(output)
    while True:
        while pos < end and output[pos].isspace():
            pos += 1
        if pos >= end:
            break
        try:
            obj, pos = decoder.raw_decode(output, pos)
        except json.JSONDecodeError as e:
            raise LoadError(f"go list JSON parse error: {e}") from e
        records.append(obj)
    return records


def _to_loaded_module(records: list[dict]) -> LoadedModule:
    module_paths: set[str] = set()
    packages: list[PackageFact] = []

    for rec in records:
        module = rec.get("Module") or {}
        module_path = module.get("Path")
        if not module_path:
            # Standard library or GOPATH packages matched by the pattern.
            logger.debug("Skipping %s: not part of a module", rec.get("ImportPath"))
            continue
        error = rec.get("Error")
        if error:
            # -e keeps broken packages in the listing; their Imports are still usable.
            logger.warning(
                "%s: %s", rec.get("ImportPath"), error.get("Err", "load error")
            )
        module_paths.add(module_path)
        packages.append(
            PackageFact(
                path=rec.get("ImportPath", ""),
                name=rec.get("Name", ""),
                imports=frozenset(rec.get("Imports") or ()),
            )
        )

    if not module_paths:
        raise LoadError("go list matched no packages belonging to a module")
    if len(module_paths) > 1:
        raise LoadError(
            "pattern spans multiple modules: " + ", ".join(sorted(module_paths))
        )

    (module_path,) = module_paths
    logger.debug("go list: module %s, %d packages", module_path, len(packages))
    return LoadedModule(module_path=module_path, packages=packages)
