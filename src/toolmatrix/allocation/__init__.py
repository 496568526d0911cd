"""
toolmatrix.allocation
~~~~~~~~~~~~~~~~~~~~~

Allocation engine: resolves a ``(tool type, usage, project)`` request into a
binding on one tool instance.  The policy is reuse → fresh → fabricate:

1. the first INUSE instance of the type that does not already hold the
   project and has headroom (``usage + required < budget × tolerance``);
2. otherwise the first FREE instance of the type;
3. otherwise a new INDEBT instance recording the shortage.

A fabricated result also lists physical instances of nearby types that
could take the job (``result.alternatives``).  Step 3 never fails, so
shortage is reported as data rather than as an error.  Unknown tool types
and duplicate bindings come back as failed results and leave the pool
untouched.

Basic usage::

    from toolmatrix.allocation import AllocationEngine
    from toolmatrix.catalog import default_catalog
    from toolmatrix.pool import ProjectRef, ToolPool

    engine = AllocationEngine(default_catalog(), ToolPool())
    engine.seed((5.7, 8400), 1)

    p1 = ProjectRef(5154, "ns", "01005", 80)
    result = engine.allocate((5.7, 8400), p1, required_usage=32)
    result.ok                 # → True
    result.instance.usage     # → 32

Batch processing::

    results = engine.allocate_many([
        ((5.7, 8400), 32, p2),
        ((5.7, 8400), 30, p3),
    ])

Public API
----------
AllocationEngine         The policy layer.
AllocationResult         Per-request outcome value.
Outcome                  How a request was satisfied (or rejected).
AllocationError          Base exception for binding errors.
DuplicateProjectBinding  Project already bound to the instance.
InvalidUsage             Negative or fractional usage (also a ValueError).
UnknownToolType          Request names a type absent from the catalog.
"""

from __future__ import annotations

from toolmatrix.allocation._exceptions import (
    AllocationError,
    DuplicateProjectBinding,
    InvalidUsage,
)
from toolmatrix.allocation.engine import AllocationEngine, AllocationResult, Outcome
from toolmatrix.catalog import UnknownToolType

__all__ = [
    "AllocationEngine",
    "AllocationError",
    "AllocationResult",
    "DuplicateProjectBinding",
    "InvalidUsage",
    "Outcome",
    "UnknownToolType",
]
