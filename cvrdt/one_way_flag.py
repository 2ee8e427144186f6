"""One-way flag: a boolean that, once enabled, can never revert.

The simplest CvRDT there is. Merge is logical *or*.
"""

from __future__ import annotations

from typing import Self

from cvrdt.protocol import require_same_type


class OneWayFlag:
    """Flag that moves from disabled to enabled and never back.

    Args:
        enabled: Initial state. Defaults to disabled, the bottom value.
    """

    __slots__ = ("_enabled",)

    def __init__(self, enabled: bool = False):
        self._enabled = bool(enabled)

    @classmethod
    def bottom(cls) -> Self:
        return cls()

    @property
    def value(self) -> bool:
        return self._enabled

    def enable(self) -> OneWayFlag:
        return self if self._enabled else OneWayFlag(True)

    def merge(self, other: OneWayFlag) -> OneWayFlag:
        require_same_type(self, other)
        return OneWayFlag(self._enabled or other._enabled)

    def leq(self, other: OneWayFlag) -> bool:
        require_same_type(self, other)
        return self._enabled <= other._enabled

    def __bool__(self) -> bool:
        return self._enabled

    def __repr__(self) -> str:
        return f"OneWayFlag(enabled={self._enabled})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OneWayFlag):
            return NotImplemented
        return self._enabled == other._enabled

    def __hash__(self) -> int:
        return hash(self._enabled)
