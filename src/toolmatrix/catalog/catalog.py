from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Mapping, Sequence

from ._exceptions import CatalogError, UnknownToolType


@dataclass(frozen=True, slots=True)
class ToolType:
    """
    Catalog entry for a class of physical tools.

    Identity is the ``(diameter, tool_code)`` pair; the budget and the
    inventory name are descriptive and do not take part in equality.
    """

    diameter: float
    tool_code: int
    lifetime_budget: int = field(compare=False)
    name: str = field(default="", compare=False)

    @property
    def key(self) -> tuple[float, int]:
        return self.diameter, self.tool_code

    def __str__(self) -> str:
        return f"D{self.diameter} P{self.tool_code}"


class ToolCatalog:
    """
    Immutable lookup table of tool types.

    Lookups are linear scans; catalogs hold at most a few hundred rows.
    """

    def __init__(self, types: Iterable[ToolType]) -> None:
        self._types: tuple[ToolType, ...] = tuple(types)
        if not self._types:
            raise CatalogError("Catalog must contain at least one tool type.")

        seen: set[tuple[float, int]] = set()
        for t in self._types:
            if t.lifetime_budget <= 0:
                raise CatalogError(
                    f"Lifetime budget must be positive; got {t.lifetime_budget} for {t}."
                )
            if t.key in seen:
                raise CatalogError(f"Duplicate tool type {t}.")
            seen.add(t.key)

    # ── construction ─────────────────────────────────────────────────────

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "ToolCatalog":
        types = []
        for rec in records:
            try:
                diameter = float(rec["diameter"])
                tool_code = int(_first(rec, "tool_code", "toolCode"))
                budget = int(_first(rec, "lifetime_budget", "maxToolTime"))
            except (KeyError, TypeError, ValueError) as exc:
                raise CatalogError(f"Invalid catalog record {dict(rec)!r}: {exc}") from exc
            name = str(rec.get("name", rec.get("fullName", "")))
            types.append(ToolType(diameter, tool_code, budget, name))
        return cls(types)

    # ── lookups ──────────────────────────────────────────────────────────

    def find(self, diameter: float, tool_code: int) -> ToolType | None:
        diameter = float(diameter)
        tool_code = int(tool_code)
        for t in self._types:
            if t.diameter == diameter and t.tool_code == tool_code:
                return t
        return None

    def lookup(self, diameter: float, tool_code: int) -> ToolType:
        found = self.find(diameter, tool_code)
        if found is None:
            raise UnknownToolType(diameter=diameter, tool_code=tool_code)
        return found

    def by_name(self, name: str) -> ToolType:
        for t in self._types:
            if t.name and t.name == name:
                return t
        raise UnknownToolType(name=name)

    # ── container protocol ───────────────────────────────────────────────

    @property
    def types(self) -> tuple[ToolType, ...]:
        return self._types

    def __contains__(self, item: object) -> bool:
        return item in self._types

    def __iter__(self) -> Iterator[ToolType]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        codes = sorted({t.tool_code for t in self._types})
        return f"ToolCatalog(types={len(self._types)}, tool_codes={codes})"


def _first(rec: Mapping[str, Any], *keys: str) -> Any:
    for k in keys:
        if k in rec:
            return rec[k]
    raise KeyError(keys[0])


# ── built-in RT catalog ──────────────────────────────────────────────────────

DEFAULT_BUDGET: int = 60

# size suffix -> diameter; "_1" marks the reground variant.
_RT_SIZES: Sequence[tuple[str, float]] = (
    ("300", 5.7),
    ("391", 7.7),
    ("391_1", 7.4),
    ("450", 9.7),
    ("450_1", 9.4),
    ("501", 11.7),
    ("501_1", 11.4),
    ("610", 15.6),
    ("610_1", 15.2),
)

_RT_CODES: Sequence[int] = (
    8400, 8410, 8420,            # E-Cut
    8201, 8211, 8221,            # MFC
    15250, 15251, 15254, 8521,   # MXF / XFeed
)


def default_catalog() -> ToolCatalog:
    types = [ToolType(4.7, 15250, DEFAULT_BUDGET, "RT-15250260")]
    for code in _RT_CODES:
        for suffix, diameter in _RT_SIZES:
            types.append(ToolType(diameter, code, DEFAULT_BUDGET, f"RT-{code}{suffix}"))
    return ToolCatalog(types)
