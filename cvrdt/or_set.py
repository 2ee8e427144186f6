"""Observed-Remove Set (OR-Set) CvRDT.

Every add mints a unique tag ``Tag(seq, replica)`` for the element. A
remove tombstones exactly the tags the removing replica has *observed*
for that element. An element is a member while at least one of its tags
is not tombstoned.

Because a remove only tombstones observed tags, an add that happens
concurrently on another replica carries a tag the remover never saw, and
that tag survives the merge: concurrent add and remove resolve as
add-wins.

Tag uniqueness needs no coordination: ``replica`` distinguishes
replicas, and ``seq`` is one more than the highest sequence number the
replica has already minted in this state. That counter lives in the
value itself (tombstoned tags included), so a replica that always adds
to its latest state never reuses a tag.

Tags and tombstones accumulate; nothing here compacts them.

Example::

    a = ORSet.bottom().add("x", "A")
    b = a.remove("x")                  # B observed A's tag and removed it
    a2 = a.add("x", "A")               # concurrent re-add mints a new tag
    assert "x" in a2.merge(b)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, NamedTuple, Self

from cvrdt.protocol import require_same_type

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

logger = logging.getLogger(__name__)


class Tag(NamedTuple):
    """Globally unique marker for one add."""

    seq: int
    replica: Any


class ORSet:
    """Observed-remove (add-wins) set of hashable elements.

    Args:
        entries: element -> tags ever minted for it.
        removed: Tombstoned tags.
    """

    __slots__ = ("_entries", "_removed")

    def __init__(
        self,
        entries: Mapping[Any, Iterable[Tag | tuple[int, Any]]] | None = None,
        removed: Iterable[Tag | tuple[int, Any]] = (),
    ):
        self._entries: dict[Any, frozenset[Tag]] = {}
        for element, tags in (entries or {}).items():
            tag_set = frozenset(Tag(*tag) for tag in tags)
            if tag_set:
                self._entries[element] = tag_set
        self._removed: frozenset[Tag] = frozenset(Tag(*tag) for tag in removed)

    @classmethod
    def bottom(cls) -> Self:
        return cls()

    @property
    def elements(self) -> frozenset:
        """Elements with at least one live tag."""
        return frozenset(e for e, tags in self._entries.items() if tags - self._removed)

    @property
    def value(self) -> frozenset:
        """Alias for ``elements``."""
        return self.elements

    @property
    def removed_tags(self) -> frozenset[Tag]:
        return self._removed

    def tags(self, element: Any) -> frozenset[Tag]:
        """Every tag ever minted for ``element``, tombstoned or not."""
        return self._entries.get(element, frozenset())

    def live_tags(self, element: Any) -> frozenset[Tag]:
        return self.tags(element) - self._removed

    def _next_seq(self, replica: Any) -> int:
        minted = [tag.seq for tags in self._entries.values() for tag in tags if tag.replica == replica]
        minted.extend(tag.seq for tag in self._removed if tag.replica == replica)
        return max(minted, default=0) + 1

    def _knows(self, tag: Tag) -> bool:
        return tag in self._removed or any(tag in tags for tags in self._entries.values())

    def add(self, element: Any, replica: Any, seq: int | None = None) -> ORSet:
        """Add ``element`` under a fresh tag minted by ``replica``.

        Args:
            element: The element to add.
            replica: Identifier of the adding replica.
            seq: Explicit sequence number from a caller-held counter.
                Defaults to one past the highest ``seq`` ``replica`` has
                minted in this state.

        Raises:
            ValueError: If ``Tag(seq, replica)`` already exists in this state.
        """
        tag = Tag(self._next_seq(replica) if seq is None else seq, replica)
        if seq is not None and self._knows(tag):
            raise ValueError(f"Tag {tag} has already been minted")
        entries = dict(self._entries)
        entries[element] = entries.get(element, frozenset()) | {tag}
        return ORSet(entries, self._removed)

    def remove(self, element: Any) -> ORSet:
        """Tombstone every tag this state has observed for ``element``.

        Removing an absent element is a no-op and returns ``self``.
        """
        observed = self.live_tags(element)
        if not observed:
            return self
        logger.debug("Tombstoning %d tag(s) for %r", len(observed), element)
        return ORSet(self._entries, self._removed | observed)

    def contains(self, element: Any) -> bool:
        return bool(self.live_tags(element))

    def merge(self, other: ORSet) -> ORSet:
        """Union the tag sets per element and union the tombstones."""
        require_same_type(self, other)
        entries = dict(self._entries)
        for element, tags in other._entries.items():
            entries[element] = entries.get(element, frozenset()) | tags
        return ORSet(entries, self._removed | other._removed)

    def leq(self, other: ORSet) -> bool:
        require_same_type(self, other)
        return self._removed <= other._removed and all(
            tags <= other.tags(element) for element, tags in self._entries.items()
        )

    def __contains__(self, element: Any) -> bool:
        return self.contains(element)

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.elements)

    def __repr__(self) -> str:
        return f"ORSet(elements={set(self.elements)!r}, tombstones={len(self._removed)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ORSet):
            return NotImplemented
        return self._entries == other._entries and self._removed == other._removed

    def __hash__(self) -> int:
        return hash((frozenset(self._entries.items()), self._removed))
