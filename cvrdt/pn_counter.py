"""Positive-Negative counter (PN-Counter) CvRDT.

Two G-Counters side by side: ``P`` records increments and ``N`` records
decrements. The value is ``P.value - N.value`` and may go negative.

Example::

    c = PNCounter.bottom().increment("node-a", 10).decrement("node-a", 3)
    assert c.value == 7
"""

from __future__ import annotations

from typing import Any, Self

from cvrdt.g_counter import GCounter
from cvrdt.protocol import require_same_type


class PNCounter:
    """Positive-Negative counter.

    Args:
        p: Increment counter (default empty).
        n: Decrement counter (default empty).
    """

    __slots__ = ("_p", "_n")

    def __init__(self, p: GCounter | None = None, n: GCounter | None = None):
        self._p = p if p is not None else GCounter()
        self._n = n if n is not None else GCounter()

    @classmethod
    def bottom(cls) -> Self:
        return cls()

    @property
    def value(self) -> int:
        """Net count (increments - decrements)."""
        return self._p.value - self._n.value

    @property
    def increments(self) -> GCounter:
        return self._p

    @property
    def decrements(self) -> GCounter:
        return self._n

    def increment(self, replica: Any, n: int = 1) -> PNCounter:
        """Return a counter raised by ``n`` at ``replica``.

        Raises:
            ValueError: If n is not positive.
        """
        return PNCounter(self._p.increment(replica, n), self._n)

    def decrement(self, replica: Any, n: int = 1) -> PNCounter:
        """Return a counter lowered by ``n`` at ``replica``.

        Raises:
            ValueError: If n is not positive.
        """
        return PNCounter(self._p, self._n.increment(replica, n))

    def merge(self, other: PNCounter) -> PNCounter:
        """Merge the P and N counters independently."""
        require_same_type(self, other)
        return PNCounter(self._p.merge(other._p), self._n.merge(other._n))

    def leq(self, other: PNCounter) -> bool:
        require_same_type(self, other)
        return self._p.leq(other._p) and self._n.leq(other._n)

    def __repr__(self) -> str:
        return f"PNCounter(value={self.value})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PNCounter):
            return NotImplemented
        return self._p == other._p and self._n == other._n

    def __hash__(self) -> int:
        return hash((self._p, self._n))
