"""The join-semilattice contract shared by every CvRDT.

A state-based CRDT is a value plus a ``merge`` that is a join:

- **Idempotence**: ``a.merge(a) == a``
- **Commutativity**: ``a.merge(b) == b.merge(a)``
- **Associativity**: ``a.merge(b.merge(c)) == a.merge(b).merge(c)``
- **Identity**: ``a.merge(T.bottom()) == a``

Merge induces a partial order, ``a <= b`` iff ``a.merge(b) == b``, and
every local mutator must move a value upward in that order. Together these
let replicas exchange full states in any order, any number of times, and
still converge.

Values in this package are immutable: mutators and ``merge`` return new
instances, so a value can be handed to another replica without copying.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, Self, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

V = TypeVar("V", bound="CvRDT")


@runtime_checkable
class CvRDT(Protocol):
    """Protocol for all convergent replicated data types.

    Implementations are independent classes; nothing inherits from this.
    """

    @classmethod
    def bottom(cls) -> Self:
        """The least element: the state of a freshly bootstrapped replica."""
        ...

    def merge(self, other: Self) -> Self:
        """Return the join of this value and ``other``.

        Args:
            other: A value of the same concrete type.

        Raises:
            TypeError: If ``other`` is a different type.
        """
        ...

    def leq(self, other: Self) -> bool:
        """True iff ``self.merge(other) == other``."""
        ...


def require_same_type(a: Any, b: Any) -> None:
    """Raise ``TypeError`` unless ``a`` and ``b`` share a concrete type."""
    if type(a) is not type(b):
        raise TypeError(
            f"Cannot merge {type(a).__name__} with {type(b).__name__}"
        )


def merge(a: V, b: V) -> V:
    """Functional spelling of ``a.merge(b)``."""
    return a.merge(b)


def merge_all(values: Iterable[V], bottom: Callable[[], V] | None = None) -> V:
    """Fold any number of replica states into one.

    The result does not depend on the order of ``values`` or on
    duplicates among them.

    Args:
        values: States of the same concrete type.
        bottom: Factory for the result when ``values`` is empty.

    Raises:
        ValueError: If ``values`` is empty and no ``bottom`` was given.
    """
    iterator = iter(values)
    try:
        result = next(iterator)
    except StopIteration:
        if bottom is None:
            raise ValueError("merge_all() of an empty iterable needs a bottom factory") from None
        return bottom()
    for value in iterator:
        result = result.merge(value)
    return result
