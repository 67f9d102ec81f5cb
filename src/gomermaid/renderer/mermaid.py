"""Render an ImportGraph as a Mermaid flowchart."""

from __future__ import annotations

from gomermaid.labels import LabelAssigner
from gomermaid.model import ImportGraph

HEADER = "flowchart BT"


def render_mermaid(graph: ImportGraph, labels: LabelAssigner | None = None) -> str:
    """Serialize *graph* to Mermaid text.

    Edges point from importee to importer, so with the bottom-to-top layout
    the packages everything depends on end up at the bottom.  Node keys are
    visited in sorted order so identical input always renders identically.
    Edge endpoints that are not themselves keys of *graph* still get a
    declaration line.
    """
    labels = labels or LabelAssigner()
    lines = [HEADER]

    for importer in sorted(graph):
        for importee in sorted(graph[importer]):
            lines.append(f"\t{labels.label(importee)} --> {labels.label(importer)}")

    # Packages without surviving edges.
    for importer in sorted(graph):
        labels.label(importer)

    for key, label in labels.items():
        lines.append(f"\t{label}[{key}]")

    return "\n".join(lines) + "\n"
