"""Last-Writer-Wins Register (LWW-Register) CvRDT.

The register holds one payload stamped with ``(timestamp, replica)``.
Merge keeps the payload with the greater stamp; equal timestamps are
broken by the greater replica id, so every replica picks the same winner.

Timestamps come from the caller (typically a Lamport clock per replica)
and must be comparable across replicas. The register never reads a clock.

Example::

    a = LWWRegister.bottom().assign("foo", 5, "A")
    b = LWWRegister.bottom().assign("bar", 5, "B")
    assert a.merge(b).value == "bar"
"""

from __future__ import annotations

import logging
from typing import Any, Self

from cvrdt.protocol import require_same_type

logger = logging.getLogger(__name__)


class LWWRegister:
    """Last-writer-wins register.

    Args:
        value: Current payload (default None).
        timestamp: Logical time of the write (default None = never written).
        replica: Replica that performed the write.
    """

    __slots__ = ("_value", "_timestamp", "_replica")

    def __init__(self, value: Any = None, timestamp: Any = None, replica: Any = None):
        self._value = value
        self._timestamp = timestamp
        self._replica = replica

    @classmethod
    def bottom(cls) -> Self:
        return cls()

    @property
    def value(self) -> Any:
        return self._value

    @property
    def timestamp(self) -> Any:
        return self._timestamp

    @property
    def replica(self) -> Any:
        return self._replica

    @property
    def is_written(self) -> bool:
        return self._timestamp is not None

    def _newer_than(self, other: LWWRegister) -> bool:
        if self._timestamp is None:
            return False
        if other._timestamp is None:
            return True
        return (self._timestamp, self._replica) > (other._timestamp, other._replica)

    def assign(self, value: Any, timestamp: Any, replica: Any) -> LWWRegister:
        """Write ``value`` stamped ``(timestamp, replica)``.

        A stamp that does not beat the current one leaves the register
        unchanged.

        Args:
            value: The new payload.
            timestamp: Caller-supplied logical time, monotone per replica.
            replica: Identifier of the writing replica.
        """
        candidate = LWWRegister(value, timestamp, replica)
        if not candidate._newer_than(self):
            logger.debug(
                "Ignoring stale write at (%r, %r); current stamp is (%r, %r)",
                timestamp, replica, self._timestamp, self._replica,
            )
            return self
        return candidate

    def merge(self, other: LWWRegister) -> LWWRegister:
        """Keep whichever side carries the greater stamp."""
        require_same_type(self, other)
        return other if other._newer_than(self) else self

    def leq(self, other: LWWRegister) -> bool:
        require_same_type(self, other)
        return self == other or other._newer_than(self)

    def __repr__(self) -> str:
        return (
            f"LWWRegister(value={self._value!r}, timestamp={self._timestamp!r}, "
            f"replica={self._replica!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LWWRegister):
            return NotImplemented
        return (self._value, self._timestamp, self._replica) == (
            other._value,
            other._timestamp,
            other._replica,
        )

    def __hash__(self) -> int:
        # The stamp identifies a write; payloads need not be hashable.
        return hash((self._timestamp, self._replica))
