"""Grow-only set (G-Set) CvRDT.

Elements can be added but never removed; merge is set union.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

from cvrdt.protocol import require_same_type

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


class GSet:
    """Grow-only set of hashable elements.

    Args:
        elements: Initial elements.
    """

    __slots__ = ("_elements",)

    def __init__(self, elements: Iterable[Any] = ()):
        self._elements = frozenset(elements)

    @classmethod
    def bottom(cls) -> Self:
        return cls()

    @property
    def elements(self) -> frozenset:
        return self._elements

    @property
    def value(self) -> frozenset:
        """Alias for ``elements``."""
        return self._elements

    def add(self, element: Any) -> GSet:
        return GSet(self._elements | {element})

    def contains(self, element: Any) -> bool:
        return element in self._elements

    def merge(self, other: GSet) -> GSet:
        require_same_type(self, other)
        return GSet(self._elements | other._elements)

    def leq(self, other: GSet) -> bool:
        require_same_type(self, other)
        return self._elements <= other._elements

    def __contains__(self, element: Any) -> bool:
        return element in self._elements

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._elements)

    def __repr__(self) -> str:
        return f"GSet(elements={set(self._elements)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GSet):
            return NotImplemented
        return self._elements == other._elements

    def __hash__(self) -> int:
        return hash(self._elements)
