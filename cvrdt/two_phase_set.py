"""Two-Phase set (2P-Set) CvRDT.

A pair of grow-only sets: ``added`` and ``removed``. An element is a
member while it is in ``added`` and not in ``removed``. Removal is a
tombstone and is permanent: once an element has been removed anywhere,
no replica can add it back, and a concurrent add never beats a remove.

Example::

    s = TwoPhaseSet.bottom().add("foo").remove("foo")
    assert "foo" not in s.add("foo")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Self

from cvrdt.protocol import require_same_type

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

logger = logging.getLogger(__name__)


class TwoPhaseSet:
    """Two-Phase set of hashable elements.

    Args:
        added: Elements ever added.
        removed: Tombstoned elements.
    """

    __slots__ = ("_added", "_removed")

    def __init__(self, added: Iterable[Any] = (), removed: Iterable[Any] = ()):
        self._added = frozenset(added)
        self._removed = frozenset(removed)

    @classmethod
    def bottom(cls) -> Self:
        return cls()

    @property
    def added(self) -> frozenset:
        return self._added

    @property
    def removed(self) -> frozenset:
        return self._removed

    @property
    def elements(self) -> frozenset:
        """Effective membership: ``added - removed``."""
        return self._added - self._removed

    @property
    def value(self) -> frozenset:
        """Alias for ``elements``."""
        return self.elements

    def add(self, element: Any) -> TwoPhaseSet:
        """Add ``element``.

        Adding a tombstoned element is a no-op; the result equals ``self``.
        """
        if element in self._removed:
            logger.debug("Ignoring add of tombstoned element %r", element)
            return self
        return TwoPhaseSet(self._added | {element}, self._removed)

    def remove(self, element: Any) -> TwoPhaseSet:
        """Tombstone ``element`` if it is currently a member, else return ``self``."""
        if not self.contains(element):
            return self
        return TwoPhaseSet(self._added, self._removed | {element})

    def contains(self, element: Any) -> bool:
        return element in self._added and element not in self._removed

    def merge(self, other: TwoPhaseSet) -> TwoPhaseSet:
        """Union each component independently."""
        require_same_type(self, other)
        return TwoPhaseSet(self._added | other._added, self._removed | other._removed)

    def leq(self, other: TwoPhaseSet) -> bool:
        require_same_type(self, other)
        return self._added <= other._added and self._removed <= other._removed

    def __contains__(self, element: Any) -> bool:
        return self.contains(element)

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.elements)

    def __repr__(self) -> str:
        return f"TwoPhaseSet(elements={set(self.elements)!r}, removed={len(self._removed)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TwoPhaseSet):
            return NotImplemented
        return self._added == other._added and self._removed == other._removed

    def __hash__(self) -> int:
        return hash((self._added, self._removed))
