"""Orchestrator: load → build → render → write."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

from gomermaid.config import Settings
from gomermaid.errors import LoadError
from gomermaid.graph import build_import_graph
from gomermaid.loaders import PackageLoader, select_loader
from gomermaid.renderer.mermaid import render_mermaid

logger = logging.getLogger(__name__)


def generate(
    module_dir: Path,
    settings: Settings,
    *,
    loader: PackageLoader | None = None,
) -> str:
    """Return the Mermaid diagram for the module in *module_dir*."""
    module_dir = module_dir.resolve()
    if not module_dir.is_dir():
        raise LoadError(f"Not a directory: {module_dir}")

    loader = loader or select_loader(settings.loader, module_dir)
    if not loader.can_handle(module_dir):
        raise LoadError(
            f"{type(loader).__name__} cannot load {module_dir} (no go.mod, or go not on PATH)"
        )
    logger.debug(
        "Module dir: %s, loader: %s, pattern: %s, ignore: %s, ignore prefix: %r",
        module_dir,
        type(loader).__name__,
        settings.pattern,
        list(settings.ignore.rules),
        settings.ignore_prefix,
    )

    loaded = loader.load(module_dir, settings.pattern)

    graph = build_import_graph(
        loaded.packages,
        loaded.module_path,
        exclude=settings.ignore,
        strip=settings.ignore_prefix,
    )
    return render_mermaid(graph)


def run(
    module_dir: Path,
    settings: Settings,
    *,
    loader: PackageLoader | None = None,
    out: TextIO | None = None,
) -> str:
    """Generate the diagram and write it to *out* (stdout by default)."""
    diagram = generate(module_dir, settings, loader=loader)
    out = out or sys.stdout
    out.write(diagram)
    out.flush()
    return diagram
