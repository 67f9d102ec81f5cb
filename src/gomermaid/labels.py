"""Allocate short, unique diagram identifiers for node keys."""

from __future__ import annotations

import string
from collections.abc import Iterator

_ALPHABET = string.ascii_uppercase


def label_for_index(index: int) -> str:
    """Return the *index*-th label: ``A``..``Z``, then ``AA``, ``AB``, ..."""
    if index < 0:
        raise ValueError(f"label index must be non-negative, got {index}")
    chars: list[str] = []
    n = index + 1
    while n:
        n, rem = divmod(n - 1, len(_ALPHABET))
        chars.append(_ALPHABET[rem])
    return "".join(reversed(chars))


class LabelAssigner:
    """Hand out labels on first sight and reuse them afterwards.

    Lookups work in both directions: :meth:`label` for key → label and
    :meth:`key` for label → key.  Iteration yields ``(key, label)`` pairs in
    allocation order.
    """

    def __init__(self) -> None:
        self._labels: dict[str, str] = {}
        self._keys: dict[str, str] = {}

    def label(self, key: str) -> str:
        existing = self._labels.get(key)
        if existing is not None:
            return existing
        new = label_for_index(len(self._labels))
        self._labels[key] = new
        self._keys[new] = key
        return new

    def key(self, label: str) -> str:
        """Return the node key that *label* was allocated to."""
        return self._keys[label]

    def items(self) -> Iterator[tuple[str, str]]:
        return iter(self._labels.items())

    def __contains__(self, key: object) -> bool:
        return key in self._labels

    def __len__(self) -> int:
        return len(self._labels)
