"""
toolmatrix.pool
~~~~~~~~~~~~~~~

The in-memory pool of tool instances.  Each ToolInstance tracks cumulative
usage in minutes against its type's lifetime budget; its state is derived
from that usage (FREE → INUSE → MAXED) except for fabricated INDEBT
instances, which keep their state forever.

Basic usage::

    from toolmatrix.catalog import default_catalog
    from toolmatrix.pool import ToolPool, ToolState

    catalog = default_catalog()
    pool = ToolPool()
    pool.seed(catalog.lookup(5.7, 8400), 3)
    pool.by_state(ToolState.FREE)        # three FREE instances

From inventory rows::

    from toolmatrix.pool import seed_from_records

    seed_from_records(pool, catalog, [{"ToolName": "RT-8400300", "Amount": 2}])

The pool is a plain object owned by the caller; there is no module-level
state.  Mutation of instances happens only through
``toolmatrix.allocation.AllocationEngine``.

Public API
----------
ToolState          Lifecycle enum.
ProjectRef         Work-order identity plus requested usage.
ToolInstance       One tracked tool.
ToolPool           Insertion-ordered collection with filtered views.
seed_from_records  Adapter from inventory rows to ``ToolPool.seed``.
"""

from __future__ import annotations

from toolmatrix.pool.instance import ProjectRef, ToolInstance
from toolmatrix.pool.pool import ToolPool
from toolmatrix.pool.seeding import seed_from_records
from toolmatrix.pool.state import ToolState

__all__ = [
    "ProjectRef",
    "ToolInstance",
    "ToolPool",
    "ToolState",
    "seed_from_records",
]
