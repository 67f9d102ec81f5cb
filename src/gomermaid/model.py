"""Data model shared by loaders, the graph builder, and the renderer."""

from __future__ import annotations

from dataclasses import dataclass, field

# Importer node key -> importee node keys.
ImportGraph = dict[str, set[str]]

ENTRY_POINT_NAME = "main"


@dataclass(frozen=True)
class PackageFact:
    """A package discovered by a loader."""

    path: str
    name: str = ""
    imports: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_entry_point(self) -> bool:
        return self.name == ENTRY_POINT_NAME


@dataclass
class LoadedModule:
    """Everything a loader reports about one module."""

    module_path: str
    packages: list[PackageFact] = field(default_factory=list)
