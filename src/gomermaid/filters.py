"""Exclusion and prefix-strip helpers shared by the graph builder."""

from __future__ import annotations

from collections.abc import Iterable


class ExclusionRules:
    """An ordered set of substrings; a path containing any of them is excluded."""

    def __init__(self, rules: Iterable[str] = ()):
        self._rules = tuple(r for r in rules if r)

    @classmethod
    def from_string(cls, value: str) -> ExclusionRules:
        """Parse a comma-separated rule list (``"internal/mock,/testutil"``)."""
        return cls(part.strip() for part in value.split(","))

    @property
    def rules(self) -> tuple[str, ...]:
        return self._rules

    def excludes(self, path: str) -> bool:
        return any(rule in path for rule in self._rules)

    def __bool__(self) -> bool:
        return bool(self._rules)

    def __repr__(self) -> str:
        return f"ExclusionRules({list(self._rules)!r})"


def strip_prefix(path: str, prefix: str) -> str:
    """Remove the first occurrence of *prefix* from *path* (not anchored)."""
    if not prefix:
        return path
    return path.replace(prefix, "", 1)
