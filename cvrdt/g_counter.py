"""Grow-only counter (G-Counter) CvRDT.

Each replica owns one slot that only it increments. The counter's value
is the sum of all slots, and merge keeps the per-slot maximum, so a slot
never moves backwards no matter how states are exchanged.

Example::

    a = GCounter.bottom().increment("node-a", 5)
    b = GCounter.bottom().increment("node-b", 3)
    assert a.merge(b).value == 8
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

from cvrdt.protocol import require_same_type

if TYPE_CHECKING:
    from collections.abc import Mapping


class GCounter:
    """Grow-only counter.

    Args:
        counts: Initial replica -> count mapping. Zero slots are dropped.
    """

    __slots__ = ("_counts",)

    def __init__(self, counts: Mapping[Any, int] | None = None):
        self._counts: dict[Any, int] = {
            replica: count for replica, count in (counts or {}).items() if count
        }

    @classmethod
    def bottom(cls) -> Self:
        return cls()

    @property
    def value(self) -> int:
        """Total count across all replicas."""
        return sum(self._counts.values())

    @property
    def counts(self) -> dict[Any, int]:
        """A copy of the per-replica slots."""
        return dict(self._counts)

    def replica_value(self, replica: Any) -> int:
        """The slot owned by ``replica`` (0 if it never incremented)."""
        return self._counts.get(replica, 0)

    def increment(self, replica: Any, n: int = 1) -> GCounter:
        """Return a counter with ``replica``'s slot raised by ``n``.

        Raises:
            ValueError: If n is not positive.
        """
        if n < 1:
            raise ValueError(f"Increment must be positive, got {n}")
        counts = dict(self._counts)
        counts[replica] = counts.get(replica, 0) + n
        return GCounter(counts)

    def merge(self, other: GCounter) -> GCounter:
        """Slot-wise maximum over the union of replicas."""
        require_same_type(self, other)
        counts = dict(self._counts)
        for replica, count in other._counts.items():
            counts[replica] = max(counts.get(replica, 0), count)
        return GCounter(counts)

    def leq(self, other: GCounter) -> bool:
        require_same_type(self, other)
        return all(count <= other._counts.get(replica, 0) for replica, count in self._counts.items())

    def __repr__(self) -> str:
        return f"GCounter(value={self.value}, counts={self._counts!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GCounter):
            return NotImplemented
        return self._counts == other._counts

    def __hash__(self) -> int:
        return hash(frozenset(self._counts.items()))
