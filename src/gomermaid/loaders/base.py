"""Loader protocol — all package fact loaders conform to this interface."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from gomermaid.model import LoadedModule


class PackageLoader(Protocol):
    """Protocol for package fact loaders."""

    def can_handle(self, module_dir: Path) -> bool:
        """Return True if this loader applies to the given module directory."""
        ...

    def load(self, module_dir: Path, pattern: str) -> LoadedModule:
        """Return the packages in *module_dir* selected by *pattern*.

        Raises :class:`gomermaid.errors.LoadError` on failure.
        """
        ...
