"""Build the internal import graph from package facts."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from gomermaid.filters import ExclusionRules, strip_prefix
from gomermaid.model import ImportGraph, PackageFact

logger = logging.getLogger(__name__)

ENTRY_POINT_MARKER = "/MAIN"


def node_key(path: str, prefix: str = "", *, entry_point: bool = False) -> str:
    """Return the diagram key for a package path."""
    key = strip_prefix(path, prefix)
    if entry_point:
        key += ENTRY_POINT_MARKER
    return key


def build_import_graph(
    packages: Iterable[PackageFact],
    module_path: str,
    *,
    exclude: ExclusionRules | None = None,
    strip: str = "",
) -> ImportGraph:
    """Map each non-excluded package's node key to the keys it imports.

    Only imports containing *module_path* are kept; anything else is an
    external dependency.  Every surviving package gets an entry, even when
    none of its imports survive, so it is still drawn as a node.

    An import is dropped only when it matches a rule in *exclude* or falls
    outside the module.  Whether its target package was itself loaded (or
    excluded) plays no part.
    """
    exclude = exclude or ExclusionRules()
    graph: ImportGraph = {}
    skipped = 0

    for pkg in packages:
        if exclude.excludes(pkg.path):
            skipped += 1
            continue

        importer = node_key(pkg.path, strip, entry_point=pkg.is_entry_point)
        # Keys can collide after stripping; merge rather than overwrite.
        importees = graph.setdefault(importer, set())

        for imp in pkg.imports:
            if exclude.excludes(imp):
                continue
            if module_path not in imp:
                continue
            importees.add(node_key(imp, strip))

    logger.debug(
        "Import graph: %d nodes, %d edges, %d packages excluded",
        len(graph),
        sum(len(v) for v in graph.values()),
        skipped,
    )
    return graph
