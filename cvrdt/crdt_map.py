"""Composite map: key -> CvRDT value of a single type.

The map lifts its value type's semilattice pointwise. Merge combines the
two values stored under each key, an absent key stands for the value
type's bottom, and keys never influence each other.

Example::

    a = CRDTMap.bottom(PNCounter).update("likes", PNCounter.increment, "A")
    b = CRDTMap.bottom(PNCounter).update("views", PNCounter.increment, "B", 3)
    merged = a.merge(b)
    assert merged.get("likes").value == 1
    assert merged.get("views").value == 3

A map's own bottom needs its value type, so ``CRDTMap.of`` packages the
two into the zero-argument factory other code expects. Maps nest by
passing such a factory as the inner bottom::

    per_user = CRDTMap.of(CRDTMap, CRDTMap.of(PNCounter))
    m = per_user().update("alice", CRDTMap.update, "likes", PNCounter.increment, "A")
    assert m.value == {"alice": {"likes": 1}}
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from cvrdt.protocol import require_same_type

if TYPE_CHECKING:
    from collections.abc import Callable, ItemsView, Iterator, KeysView, Mapping

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CRDTMap(Generic[T]):
    """Map from keys to CvRDT values of type ``value_type``.

    Entries equal to the value bottom are not stored, so a key that was
    only touched by a no-op update is indistinguishable from an absent key.

    Two maps are compatible when they hold the same ``value_type`` and
    their value bottoms are equal, which for nested maps compares the
    inner value types all the way down.

    Args:
        value_type: The CvRDT class of every value.
        entries: Initial key -> value mapping.
        bottom: Zero-argument factory for the value bottom. Defaults to
            ``value_type.bottom``; required when the value type is itself
            a ``CRDTMap``.
    """

    __slots__ = ("_value_type", "_make_bottom", "_bottom", "_entries")

    def __init__(
        self,
        value_type: type[T],
        entries: Mapping[Any, T] | None = None,
        bottom: Callable[[], T] | None = None,
    ):
        self._value_type = value_type
        self._make_bottom = bottom or value_type.bottom
        self._bottom: T = self._make_bottom()
        if not isinstance(self._bottom, value_type):
            raise TypeError(
                f"Bottom factory returned {type(self._bottom).__name__}, "
                f"expected {value_type.__name__}"
            )
        self._entries: dict[Any, T] = {}
        for key, value in (entries or {}).items():
            if not isinstance(value, value_type):
                raise TypeError(
                    f"Value for key {key!r} is {type(value).__name__}, "
                    f"expected {value_type.__name__}"
                )
            if value != self._bottom:
                self._entries[key] = value

    @classmethod
    def bottom(cls, value_type: type[T], bottom: Callable[[], T] | None = None) -> CRDTMap[T]:
        """The empty map over ``value_type``."""
        return cls(value_type, bottom=bottom)

    @classmethod
    def of(cls, value_type: type[T], bottom: Callable[[], T] | None = None) -> Callable[[], CRDTMap[T]]:
        """Zero-argument factory for the empty map over ``value_type``.

        Use it wherever a bottom factory is expected: as the inner bottom
        of a nested map, in ``merge_all`` or in a law-checker ``Lattice``.
        """
        return lambda: cls(value_type, bottom=bottom)

    @property
    def value_type(self) -> type[T]:
        return self._value_type

    @property
    def value(self) -> dict[Any, Any]:
        """key -> resolved value of each entry."""
        return {key: entry.value for key, entry in self._entries.items()}

    def get(self, key: Any) -> T:
        """The value at ``key``, or the value bottom if absent."""
        return self._entries.get(key, self._bottom)

    def keys(self) -> KeysView[Any]:
        return self._entries.keys()

    def items(self) -> ItemsView[Any, T]:
        return self._entries.items()

    def _with(self, entries: Mapping[Any, T]) -> CRDTMap[T]:
        return CRDTMap(self._value_type, entries, self._make_bottom)

    def update(self, key: Any, operation: Callable[..., T], *args: Any, **kwargs: Any) -> CRDTMap[T]:
        """Apply a local operation to the value at ``key``.

        ``operation(current, *args, **kwargs)`` must return a value of the
        same type that is ``>=`` ``current``, e.g. ``PNCounter.increment``
        or ``lambda s: s.add("x", "A")``.

        Raises:
            TypeError: If the operation returns a different type.
            ValueError: If the result is not an upward move from the current value.
        """
        current = self.get(key)
        updated = operation(current, *args, **kwargs)
        require_same_type(current, updated)
        if updated.merge(current) != updated:
            logger.debug("Rejected non-monotone update at key %r", key)
            raise ValueError(f"Update at key {key!r} is not monotone: {current!r} -> {updated!r}")
        entries = dict(self._entries)
        entries[key] = updated
        return self._with(entries)

    def _describe(self) -> str:
        if isinstance(self._bottom, CRDTMap):
            return f"CRDTMap[{self._bottom._describe()}]"
        return f"CRDTMap[{self._value_type.__name__}]"

    def _require_compatible(self, other: CRDTMap[T]) -> None:
        require_same_type(self, other)
        if self._value_type is not other._value_type or self._bottom != other._bottom:
            raise TypeError(f"Cannot merge {self._describe()} with {other._describe()}")

    def merge(self, other: CRDTMap[T]) -> CRDTMap[T]:
        """Merge per key; keys missing on one side merge with bottom."""
        self._require_compatible(other)
        entries = dict(self._entries)
        for key, value in other._entries.items():
            entries[key] = entries[key].merge(value) if key in entries else value
        return self._with(entries)

    def leq(self, other: CRDTMap[T]) -> bool:
        self._require_compatible(other)
        return all(value.leq(other.get(key)) for key, value in self._entries.items())

    def __contains__(self, key: Any) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"{self._describe()}({self._entries!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CRDTMap):
            return NotImplemented
        return (
            self._value_type is other._value_type
            and self._bottom == other._bottom
            and self._entries == other._entries
        )

    def __hash__(self) -> int:
        return hash((self._value_type, self._bottom, frozenset(self._entries.items())))
