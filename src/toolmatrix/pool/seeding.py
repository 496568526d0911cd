from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from toolmatrix.catalog import ToolCatalog, ToolType, UnknownToolType

from .pool import ToolPool

logger = logging.getLogger(__name__)


def _resolve(catalog: ToolCatalog, rec: Mapping[str, Any]) -> ToolType | None:
    name = rec.get("ToolName") or rec.get("name")
    if name:
        return catalog.by_name(str(name))
    if "diameter" in rec:
        code = rec.get("tool_code", rec.get("toolCode"))
        if code is not None:
            return catalog.lookup(float(rec["diameter"]), int(code))
    return None


def seed_from_records(
    pool: ToolPool,
    catalog: ToolCatalog,
    records: Iterable[Mapping[str, Any]],
) -> int:
    """
    Seed ``pool`` from inventory rows.

    Rows are either ``{"ToolName": "RT-8400300", "Amount": 3}`` or
    ``{"diameter": 5.7, "tool_code": 8400, "quantity": 3}``.  Rows naming an
    unknown type, or no type at all, are logged and skipped.  Returns the
    number of instances created.
    """
    created = 0
    for rec in records:
        try:
            tool_type = _resolve(catalog, rec)
        except UnknownToolType as exc:
            logger.warning("Skipping inventory row %r: %s", dict(rec), exc)
            continue
        except (TypeError, ValueError) as exc:
            logger.warning("Skipping malformed inventory row %r: %s", dict(rec), exc)
            continue
        if tool_type is None:
            logger.warning("Skipping inventory row without a tool type: %r", dict(rec))
            continue

        try:
            quantity = int(rec.get("Amount", rec.get("quantity", 0)) or 0)
        except (TypeError, ValueError):
            logger.warning("Skipping inventory row with invalid amount: %r", dict(rec))
            continue
        created += len(pool.seed(tool_type, quantity))
    return created
