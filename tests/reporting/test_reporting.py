"""
tests/reporting/test_reporting.py

Covers:
  - State counts (all states present)
  - Inventory line formatting
  - Shortage grouping
  - Utilisation statistics (INDEBT excluded, empty pool, top/underutilised)
  - Maintenance recommendations and their ordering
"""

import numpy as np
import pytest

from toolmatrix.allocation import AllocationEngine
from toolmatrix.catalog import ToolCatalog, ToolType
from toolmatrix.pool import ProjectRef, ToolPool, ToolState
from toolmatrix.reporting import (
    Priority,
    inventory_line,
    inventory_lines,
    maintenance_recommendations,
    shortages,
    state_counts,
    utilization,
)


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def d57():
    return ToolType(5.7, 8400, 60, "RT-8400300")

@pytest.fixture
def d77():
    return ToolType(7.7, 8400, 60, "RT-8400391")

@pytest.fixture
def pool():
    return ToolPool()

@pytest.fixture
def engine(d57, d77, pool):
    return AllocationEngine(ToolCatalog([d57, d77]), pool)


def project(n):
    return ProjectRef(5154, "ns", f"{n:05d}", 80)


# ── Counts and lines ──────────────────────────────────────────────────────────

class TestCounts:

    def test_empty_pool_has_all_states(self, pool):
        assert state_counts(pool) == {s: 0 for s in ToolState}

    def test_counts(self, engine, pool, d57):
        engine.seed(d57, 3)
        engine.allocate(d57, project(1), 61)      # MAXED
        engine.allocate(d57, project(2), 10)      # INUSE
        engine.allocate((7.7, 8400), project(3), 10)  # INDEBT
        counts = state_counts(pool)
        assert counts[ToolState.FREE] == 1
        assert counts[ToolState.INUSE] == 1
        assert counts[ToolState.MAXED] == 1
        assert counts[ToolState.INDEBT] == 1


class TestInventoryLines:

    def test_unbound_line(self, engine, pool, d57):
        engine.seed(d57, 1)
        assert inventory_lines(pool) == ["D5.7 P8400 - FREE - 0 - Projects: null"]

    def test_bound_line(self, engine, pool, d57):
        (t,) = engine.seed(d57, 1)
        engine.assign(t, project(1), 32)
        engine.assign(t, project(2), 32)
        assert inventory_line(t) == (
            "D5.7 P8400 - MAXED - 64 - Projects: W5154NS00001T80, W5154NS00002T80"
        )

    def test_one_line_per_instance_in_order(self, engine, pool, d57, d77):
        engine.seed(d77, 1)
        engine.seed(d57, 2)
        lines = inventory_lines(pool)
        assert len(lines) == 3
        assert lines[0].startswith("D7.7")


class TestShortages:

    def test_no_shortage(self, engine, pool, d57):
        engine.seed(d57, 1)
        engine.allocate(d57, project(1), 10)
        assert shortages(pool) == {}

    def test_grouped_by_type(self, engine, pool, d57, d77):
        engine.allocate(d77, project(1), 10)
        engine.allocate(d57, project(2), 10)
        engine.allocate(d77, project(3), 10)
        out = shortages(pool)
        assert out == {d77: 2, d57: 1}
        assert list(out) == [d77, d57]


# ── Utilisation ───────────────────────────────────────────────────────────────

class TestUtilization:

    def test_empty_pool(self, pool):
        u = utilization(pool)
        assert len(u) == 0
        assert u.percent.size == 0
        assert u.mean == 0.0
        assert u.top() == []

    def test_indebt_excluded(self, engine, pool, d57):
        engine.allocate(d57, project(1), 30)
        assert len(utilization(pool)) == 0

    def test_statistics(self, engine, pool, d57):
        a, b, c = engine.seed(d57, 3)
        engine.assign(a, project(1), 30)     # 50%
        engine.assign(b, project(2), 60)     # 100%
        u = utilization(pool)
        np.testing.assert_allclose(u.percent, [50.0, 100.0, 0.0])
        assert u.mean == pytest.approx(50.0)
        assert u.minimum == 0.0
        assert u.maximum == 100.0
        assert u.variance == pytest.approx(np.var([50.0, 100.0, 0.0]))

    def test_single_instance_variance_zero(self, engine, pool, d57):
        engine.seed(d57, 1)
        assert utilization(pool).variance == 0.0

    def test_top(self, engine, pool, d57):
        a, b, c = engine.seed(d57, 3)
        engine.assign(a, project(1), 10)
        engine.assign(b, project(2), 40)
        top = utilization(pool).top(2)
        assert [t for t, _ in top] == [b, a]
        assert top[0][1] == pytest.approx(40 / 60 * 100)

    def test_underutilized_skips_maxed(self, engine, pool, d57):
        a, b, c = engine.seed(d57, 3)
        engine.assign(a, project(1), 70)     # MAXED
        engine.assign(b, project(2), 30)
        under = utilization(pool).underutilized()
        assert [t for t, _ in under] == [c, b]


# ── Maintenance ───────────────────────────────────────────────────────────────

class TestMaintenance:

    def test_thresholds(self, engine, pool, d57):
        low, mid, high, none = engine.seed(d57, 4)
        engine.assign(low, project(1), 45)    # 75%
        engine.assign(mid, project(2), 54)    # 90%
        engine.assign(high, project(3), 61)   # MAXED
        engine.assign(none, project(4), 44)   # 73%
        recs = maintenance_recommendations(pool)
        assert [(r.instance, r.priority, r.action) for r in recs] == [
            (high, Priority.HIGH, "REPLACE"),
            (mid, Priority.MEDIUM, "PREPARE_REPLACEMENT"),
            (low, Priority.LOW, "MONITOR"),
        ]

    def test_reason_text(self, engine, pool, d57):
        (t,) = engine.seed(d57, 1)
        engine.assign(t, project(1), 54)
        (rec,) = maintenance_recommendations(pool)
        assert rec.reason == "Tool is at 90.0% capacity"

    def test_ties_keep_pool_order(self, engine, pool, d57):
        a, b = engine.seed(d57, 2)
        engine.assign(a, project(1), 61)
        engine.assign(b, project(2), 61)
        assert [r.instance for r in maintenance_recommendations(pool)] == [a, b]

    def test_indebt_skipped(self, engine, pool, d57):
        engine.allocate(d57, project(1), 600)
        assert maintenance_recommendations(pool) == []
