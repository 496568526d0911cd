"""
toolmatrix.catalog
~~~~~~~~~~~~~~~~~~

Static reference data for cutting tools.  A ToolType identifies a class of
physical tool by diameter and tool code and carries its lifetime usage
budget in minutes.  The catalog is loaded once and never mutated.

Basic usage::

    from toolmatrix.catalog import default_catalog

    catalog = default_catalog()
    t = catalog.lookup(5.7, 8400)        # ToolType(diameter=5.7, tool_code=8400)
    t.lifetime_budget                    # → 60
    catalog.by_name("RT-8400391_1")      # reground 7.4 mm variant

From ingestion records::

    from toolmatrix.catalog import ToolCatalog

    catalog = ToolCatalog.from_records([
        {"diameter": 5.7, "tool_code": 8400, "lifetime_budget": 60},
    ])

Public API
----------
ToolType         Immutable catalog entry.
ToolCatalog      Lookup table of ToolTypes.
default_catalog  Built-in RT tool catalog.
CatalogError     Malformed catalog data.
UnknownToolType  Lookup of a type the catalog does not contain.
"""

from __future__ import annotations

from toolmatrix.catalog._exceptions import CatalogError, UnknownToolType
from toolmatrix.catalog.catalog import ToolCatalog, ToolType, default_catalog

__all__ = [
    "CatalogError",
    "ToolCatalog",
    "ToolType",
    "UnknownToolType",
    "default_catalog",
]
