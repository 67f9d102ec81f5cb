"""Package fact loaders and loader selection."""

from __future__ import annotations

import logging
from pathlib import Path

from gomermaid.loaders.base import PackageLoader
from gomermaid.loaders.golist import GoListLoader
from gomermaid.loaders.source import SourceLoader

logger = logging.getLogger(__name__)

__all__ = [
    "GoListLoader",
    "PackageLoader",
    "SourceLoader",
    "LOADER_KINDS",
    "select_loader",
]

LOADER_KINDS = ("auto", "go", "source")


def select_loader(kind: str, module_dir: Path) -> PackageLoader:
    """Return the loader for *kind*; ``auto`` prefers the go toolchain."""
    if kind == "go":
        return GoListLoader()
    if kind == "source":
        return SourceLoader()
    if kind != "auto":
        raise ValueError(f"Unknown loader {kind!r}, expected one of {LOADER_KINDS}")

    go_loader = GoListLoader()
    if go_loader.can_handle(module_dir):
        logger.debug("Using go list")
        return go_loader

    logger.warning(
        "go list unavailable for %s (go not on PATH or no go.mod). "
        "Falling back to source parsing (build constraints are not evaluated).",
        module_dir,
    )
    return SourceLoader()
