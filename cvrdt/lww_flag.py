"""Last-Writer-Wins flag (enable/disable) CvRDT.

An ``LWWRegister`` restricted to a boolean payload. The bottom value is
disabled; ``enable`` and ``disable`` are stamped writes resolved with the
register's ``(timestamp, replica)`` rule.
"""

from __future__ import annotations

from typing import Any, Self

from cvrdt.lww_register import LWWRegister
from cvrdt.protocol import require_same_type


class LWWFlag:
    """Boolean last-writer-wins flag; disabled until the first write.

    Args:
        register: Underlying register holding the boolean payload and its
            ``(timestamp, replica)`` stamp. Defaults to an unwritten register.
    """

    __slots__ = ("_register",)

    def __init__(self, register: LWWRegister | None = None):
        self._register = register if register is not None else LWWRegister()

    @classmethod
    def bottom(cls) -> Self:
        return cls()

    @property
    def value(self) -> bool:
        return bool(self._register.value)

    @property
    def enabled(self) -> bool:
        return self.value

    @property
    def timestamp(self) -> Any:
        return self._register.timestamp

    @property
    def replica(self) -> Any:
        return self._register.replica

    def enable(self, timestamp: Any, replica: Any) -> LWWFlag:
        return LWWFlag(self._register.assign(True, timestamp, replica))

    def disable(self, timestamp: Any, replica: Any) -> LWWFlag:
        return LWWFlag(self._register.assign(False, timestamp, replica))

    def merge(self, other: LWWFlag) -> LWWFlag:
        require_same_type(self, other)
        return LWWFlag(self._register.merge(other._register))

    def leq(self, other: LWWFlag) -> bool:
        require_same_type(self, other)
        return self._register.leq(other._register)

    def __bool__(self) -> bool:
        return self.value

    def __repr__(self) -> str:
        return f"LWWFlag(enabled={self.value}, timestamp={self.timestamp!r}, replica={self.replica!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LWWFlag):
            return NotImplemented
        return self._register == other._register

    def __hash__(self) -> int:
        return hash(self._register)
