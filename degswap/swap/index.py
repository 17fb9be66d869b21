"""Hash-set membership oracles over ordered vertex pairs.

EdgeIndex mirrors the chain's current edge list and is mutated on every
accepted swap. ForbiddenIndex holds the structural zeros and never
changes after construction.
"""

import logging
from collections.abc import Iterable

log = logging.getLogger(__name__)


class EdgeIndex:
    """Mutable set of directed edges with O(1) expected membership tests.

    Keys are ``(u, v)`` tuples of Python ints. No iteration is exposed:
    callers only ask whether a pair is present and keep the set in step
    with their own edge list through insert/erase.
    """

    __slots__ = ("_edges",)

    def __init__(self, e_from: Iterable[int], e_to: Iterable[int]) -> None:
        self._edges: set[tuple[int, int]] = set(
            zip(map(int, e_from), map(int, e_to))
        )

    def __len__(self) -> int:
        return len(self._edges)

    def __contains__(self, pair: tuple[int, int]) -> bool:
        return pair in self._edges

    def contains(self, u: int, v: int) -> bool:
        return (u, v) in self._edges

    def insert(self, u: int, v: int) -> None:
        """Add (u, v); the pair must not already be present."""
        edge = (u, v)
        if edge in self._edges:
            raise KeyError(f"edge {edge} already present")
        self._edges.add(edge)

    def erase(self, u: int, v: int) -> None:
        """Remove (u, v); the pair must be present."""
        self._edges.remove((u, v))


class ForbiddenIndex:
    """Read-only set of structural-zero positions."""

    __slots__ = ("_pairs",)

    def __init__(self, z_from: Iterable[int], z_to: Iterable[int]) -> None:
        self._pairs: frozenset[tuple[int, int]] = frozenset(
            zip(map(int, z_from), map(int, z_to))
        )
        log.debug("ForbiddenIndex built with %d pairs", len(self._pairs))

    @classmethod
    def empty(cls) -> "ForbiddenIndex":
        return cls((), ())

    def __len__(self) -> int:
        return len(self._pairs)

    def __bool__(self) -> bool:
        return bool(self._pairs)

    def __contains__(self, pair: tuple[int, int]) -> bool:
        return pair in self._pairs

    def contains(self, u: int, v: int) -> bool:
        return (u, v) in self._pairs
