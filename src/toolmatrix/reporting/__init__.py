"""
toolmatrix.reporting
~~~~~~~~~~~~~~~~~~~~

Read-only views over a ToolPool for inventory dumps and shortage reports.
Nothing here mutates the pool.

Basic usage::

    from toolmatrix.reporting import inventory_lines, shortages, state_counts

    for line in inventory_lines(pool):
        print(line)      # D5.7 P8400 - INUSE - 32 - Projects: W5154NS01005T80

    state_counts(pool)[ToolState.INDEBT]     # unmet demand
    shortages(pool)                          # {ToolType: n_indebt}

Utilisation and maintenance::

    from toolmatrix.reporting import maintenance_recommendations, utilization

    u = utilization(pool)
    u.mean, u.top(5), u.underutilized(5)
    maintenance_recommendations(pool)        # HIGH first
"""

from __future__ import annotations

from toolmatrix.reporting.reporting import (
    Priority,
    Recommendation,
    UtilizationStats,
    inventory_line,
    inventory_lines,
    maintenance_recommendations,
    shortages,
    state_counts,
    utilization,
)

__all__ = [
    "Priority",
    "Recommendation",
    "UtilizationStats",
    "inventory_line",
    "inventory_lines",
    "maintenance_recommendations",
    "shortages",
    "state_counts",
    "utilization",
]
