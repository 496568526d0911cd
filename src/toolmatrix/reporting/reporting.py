from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np
from scipy import stats

from toolmatrix.catalog import ToolType
from toolmatrix.pool import ToolInstance, ToolPool, ToolState


def state_counts(pool: ToolPool) -> dict[ToolState, int]:
    counts = {s: 0 for s in ToolState}
    for inst in pool.all_instances():
        counts[inst.state] += 1
    return counts


def inventory_line(inst: ToolInstance) -> str:
    keys = ", ".join(p.key for p in inst.projects) if inst.projects else "null"
    return f"{inst.tool_type} - {inst.state} - {inst.usage} - Projects: {keys}"


def inventory_lines(pool: ToolPool) -> list[str]:
    return [inventory_line(i) for i in pool.all_instances()]


def shortages(pool: ToolPool) -> dict[ToolType, int]:
    out: dict[ToolType, int] = {}
    for inst in pool.by_state(ToolState.INDEBT):
        out[inst.tool_type] = out.get(inst.tool_type, 0) + 1
    return out


# ── utilisation ──────────────────────────────────────────────────────────────

@dataclass(frozen=True, eq=False)
class UtilizationStats:
    """
    Usage as a percentage of lifetime budget across physical instances.

    ``percent[i]`` belongs to ``instances[i]``; INDEBT placeholders are not
    physical tools and are left out.
    """

    instances: tuple[ToolInstance, ...]
    percent: np.ndarray
    mean: float
    minimum: float
    maximum: float
    variance: float

    def top(self, n: int = 5) -> list[tuple[ToolInstance, float]]:
        order = np.argsort(-self.percent, kind="stable")[:n]
        return [(self.instances[i], float(self.percent[i])) for i in order]

    def underutilized(self, n: int = 5) -> list[tuple[ToolInstance, float]]:
        order = np.argsort(self.percent, kind="stable")
        picked = [i for i in order if self.instances[i].state is not ToolState.MAXED]
        return [(self.instances[i], float(self.percent[i])) for i in picked[:n]]

    def __len__(self) -> int:
        return len(self.instances)


def utilization(pool: ToolPool) -> UtilizationStats:
    instances = tuple(
        i for i in pool.all_instances() if i.state is not ToolState.INDEBT
    )
    percent = np.array([i.utilization * 100.0 for i in instances], dtype=float)
    if percent.size == 0:
        return UtilizationStats(instances, percent, 0.0, 0.0, 0.0, 0.0)

    d = stats.describe(percent, ddof=0)
    lo, hi = d.minmax
    return UtilizationStats(
        instances,
        percent,
        mean=float(d.mean),
        minimum=float(lo),
        maximum=float(hi),
        variance=float(d.variance),
    )


# ── maintenance ──────────────────────────────────────────────────────────────

class Priority(Enum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3


@dataclass(frozen=True, slots=True)
class Recommendation:
    instance: ToolInstance
    priority: Priority
    action: str
    reason: str


PREPARE_THRESHOLD: float = 90.0
MONITOR_THRESHOLD: float = 75.0


def maintenance_recommendations(pool: ToolPool) -> list[Recommendation]:
    """
    Replacement advice per physical instance, highest priority first.

    MAXED → HIGH/REPLACE, ≥90% of budget → MEDIUM/PREPARE_REPLACEMENT,
    ≥75% → LOW/MONITOR.  Ties keep pool order.
    """
    recs: list[Recommendation] = []
    for inst in pool.all_instances():
        if inst.state is ToolState.INDEBT:
            continue
        pct = inst.utilization * 100.0
        if inst.state is ToolState.MAXED:
            recs.append(Recommendation(
                inst, Priority.HIGH, "REPLACE",
                "Tool has exceeded maximum usage time",
            ))
        elif pct >= PREPARE_THRESHOLD:
            recs.append(Recommendation(
                inst, Priority.MEDIUM, "PREPARE_REPLACEMENT",
                f"Tool is at {pct:.1f}% capacity",
            ))
        elif pct >= MONITOR_THRESHOLD:
            recs.append(Recommendation(
                inst, Priority.LOW, "MONITOR",
                f"Tool is at {pct:.1f}% capacity",
            ))
    recs.sort(key=lambda r: r.priority.value, reverse=True)
    return recs
