from __future__ import annotations

from enum import Enum


class ToolState(Enum):
    """
    Lifecycle state of a tool instance.

    FREE, INUSE and MAXED are ordered by severity and derived from usage.
    INDEBT marks demand beyond the physical pool and is never derived.
    """

    FREE = "FREE"
    INUSE = "INUSE"
    MAXED = "MAXED"
    INDEBT = "INDEBT"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    @classmethod
    def from_usage(cls, usage: int, budget: int) -> "ToolState":
        if usage == 0:
            return cls.FREE
        if usage > budget:
            return cls.MAXED
        return cls.INUSE

    def __str__(self) -> str:
        return self.value


_SEVERITY = {
    ToolState.FREE: 0,
    ToolState.INUSE: 1,
    ToolState.MAXED: 2,
    ToolState.INDEBT: 3,
}
