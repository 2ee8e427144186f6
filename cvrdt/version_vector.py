"""Immutable version vectors.

A version vector maps replica -> number of writes observed from that
replica. Vectors are partially ordered pointwise: ``a <= b`` when every
slot of ``a`` is at most the matching slot of ``b``. Two vectors where
neither is ``<=`` the other are *concurrent*.

Missing slots count as zero, and zero slots are dropped on construction
so that equal histories compare (and hash) equal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping


class VersionVector:
    """Pointwise-ordered replica -> counter mapping.

    Args:
        counters: Initial replica -> counter mapping.
    """

    __slots__ = ("_counters",)

    def __init__(self, counters: Mapping[Any, int] | None = None):
        self._counters: dict[Any, int] = {
            replica: count for replica, count in (counters or {}).items() if count
        }

    @classmethod
    def bottom(cls) -> Self:
        return cls()

    def get(self, replica: Any) -> int:
        return self._counters.get(replica, 0)

    def to_dict(self) -> dict[Any, int]:
        return dict(self._counters)

    def increment(self, replica: Any) -> VersionVector:
        """Return a copy with ``replica``'s slot advanced by one."""
        counters = dict(self._counters)
        counters[replica] = counters.get(replica, 0) + 1
        return VersionVector(counters)

    def merge(self, other: VersionVector) -> VersionVector:
        """Pointwise maximum."""
        counters = dict(self._counters)
        for replica, count in other._counters.items():
            counters[replica] = max(counters.get(replica, 0), count)
        return VersionVector(counters)

    def leq(self, other: VersionVector) -> bool:
        return self <= other

    def dominates(self, other: VersionVector) -> bool:
        """True if ``other`` happened strictly before ``self``."""
        return other < self

    def concurrent_with(self, other: VersionVector) -> bool:
        return not self <= other and not other <= self

    def __le__(self, other: VersionVector) -> bool:
        return all(count <= other.get(replica) for replica, count in self._counters.items())

    def __lt__(self, other: VersionVector) -> bool:
        return self <= other and self != other

    def __ge__(self, other: VersionVector) -> bool:
        return other <= self

    def __gt__(self, other: VersionVector) -> bool:
        return other < self

    def __iter__(self) -> Iterator[Any]:
        return iter(self._counters)

    def __len__(self) -> int:
        return len(self._counters)

    def __repr__(self) -> str:
        return f"VersionVector({self._counters!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersionVector):
            return NotImplemented
        return self._counters == other._counters

    def __hash__(self) -> int:
        return hash(frozenset(self._counters.items()))
