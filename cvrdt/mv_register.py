"""Multi-Value Register (MV-Register) CvRDT.

Instead of picking a winner, the register keeps every write that is not
causally superseded. Each payload is stored with the version vector of
the write that produced it:

- ``assign`` stamps the new payload with a vector that dominates every
  vector currently held, so it replaces everything this replica has seen.
- ``merge`` takes the union of both entry sets and prunes every entry
  whose vector is strictly dominated by another entry's vector.

What remains is the set of concurrent writes. More than one value in
``values`` means a conflict the application has to resolve, typically
by assigning a reconciled payload.

Example::

    base = MVRegister.bottom().assign("draft", "A")
    a = base.assign("left", "A")
    b = base.assign("right", "B")
    assert a.merge(b).values == frozenset({"left", "right"})
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, NamedTuple, Self

from cvrdt.protocol import require_same_type
from cvrdt.version_vector import VersionVector

if TYPE_CHECKING:
    from collections.abc import Iterable


class Entry(NamedTuple):
    """A payload and the version vector of the write that produced it."""

    value: Any
    version: VersionVector


def _maxima(entries: Iterable[Entry]) -> frozenset[Entry]:
    """Drop every entry whose version is strictly dominated by another's."""
    pool = frozenset(entries)
    return frozenset(
        entry
        for entry in pool
        if not any(entry.version < other.version for other in pool)
    )


class MVRegister:
    """Multi-value register of hashable payloads.

    Args:
        entries: Initial ``(value, version)`` entries; dominated ones are pruned.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[Entry | tuple[Any, VersionVector]] = ()):
        self._entries = _maxima(Entry(*entry) for entry in entries)

    @classmethod
    def bottom(cls) -> Self:
        return cls()

    @property
    def entries(self) -> frozenset[Entry]:
        return self._entries

    @property
    def values(self) -> frozenset:
        """Every surviving payload; more than one signals concurrent writes."""
        return frozenset(entry.value for entry in self._entries)

    @property
    def value(self) -> frozenset:
        """Alias for ``values``."""
        return self.values

    @property
    def version(self) -> VersionVector:
        """Join of all held versions: the causal history this register has seen."""
        version = VersionVector()
        for entry in self._entries:
            version = version.merge(entry.version)
        return version

    @property
    def is_conflicted(self) -> bool:
        return len(self._entries) > 1

    def assign(self, value: Any, replica: Any) -> MVRegister:
        """Overwrite every observed write with ``value`` written at ``replica``."""
        return MVRegister([Entry(value, self.version.increment(replica))])

    def merge(self, other: MVRegister) -> MVRegister:
        require_same_type(self, other)
        return MVRegister(self._entries | other._entries)

    def leq(self, other: MVRegister) -> bool:
        require_same_type(self, other)
        return self.merge(other) == other

    def __repr__(self) -> str:
        return f"MVRegister(values={set(self.values)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MVRegister):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)
