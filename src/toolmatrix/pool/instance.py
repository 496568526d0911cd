from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date

from toolmatrix.catalog import ToolType

from .state import ToolState


def _prefixed(prefix: str, value: object) -> str:
    s = str(value)
    return s if s.upper().startswith(prefix) else f"{prefix}{s}"


@dataclass(frozen=True, slots=True)
class ProjectRef:
    """
    Work-order identity of a project requesting a tool.

    Only the four work-order fields take part in equality; the usage and
    date are request payload.
    """

    work_order: str | int
    version: str
    piece_number: str | int
    technology_number: str | int
    required_usage: int = field(default=0, compare=False)
    manufacture_date: date | None = field(default=None, compare=False)

    @property
    def key(self) -> str:
        return (
            f"{_prefixed('W', self.work_order)}"
            f"{str(self.version).upper()}"
            f"{self.piece_number}"
            f"{_prefixed('T', self.technology_number)}"
        )

    def __str__(self) -> str:
        return self.key


class ToolInstance:
    """One physical tool, or one fabricated INDEBT placeholder."""

    __slots__ = ("_id", "_tool_type", "_usage", "_state", "_projects")

    def __init__(self, tool_type: ToolType, state: ToolState = ToolState.FREE) -> None:
        if state not in (ToolState.FREE, ToolState.INDEBT):
            raise ValueError(f"New instances start FREE or INDEBT; got {state}.")
        self._id: uuid.UUID = uuid.uuid4()
        self._tool_type = tool_type
        self._usage: int = 0
        self._state = state
        self._projects: list[ProjectRef] = []

    @classmethod
    def indebt(cls, tool_type: ToolType) -> "ToolInstance":
        return cls(tool_type, ToolState.INDEBT)

    # ── mutation (allocation engine only) ────────────────────────────────

    def _record(self, project: ProjectRef, usage: int) -> None:
        self._projects.append(project)
        self._usage += usage
        if self._state is not ToolState.INDEBT:
            self._state = ToolState.from_usage(self._usage, self._tool_type.lifetime_budget)

    # ── queries ──────────────────────────────────────────────────────────

    def holds(self, project: ProjectRef) -> bool:
        return project in self._projects

    def accepts(self, required_usage: int, tolerance: float) -> bool:
        return self._usage + required_usage < self._tool_type.lifetime_budget * tolerance

    @property
    def id(self) -> uuid.UUID:
        return self._id

    @property
    def tool_type(self) -> ToolType:
        return self._tool_type

    @property
    def usage(self) -> int:
        return self._usage

    @property
    def state(self) -> ToolState:
        return self._state

    @property
    def projects(self) -> tuple[ProjectRef, ...]:
        return tuple(self._projects)

    @property
    def remaining(self) -> int:
        return max(0, self._tool_type.lifetime_budget - self._usage)

    @property
    def utilization(self) -> float:
        return self._usage / self._tool_type.lifetime_budget

    def __repr__(self) -> str:
        return (
            f"ToolInstance(id={str(self._id)[:8]}, type={self._tool_type}, "
            f"state={self._state}, usage={self._usage}, "
            f"projects={[p.key for p in self._projects]})"
        )
