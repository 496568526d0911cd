from __future__ import annotations


class CatalogError(ValueError):
    """Malformed catalog data (duplicate key, bad budget, empty catalog)."""


class UnknownToolType(LookupError):
    """A (diameter, tool code) pair or inventory name the catalog has never seen."""

    def __init__(self, diameter: float | None = None, tool_code: int | None = None,
                 name: str | None = None) -> None:
        self.diameter = diameter
        self.tool_code = tool_code
        self.name = name
        if name is not None:
            msg = f"No tool type named {name!r} in the catalog."
        else:
            msg = f"No tool type with D{diameter} P{tool_code} in the catalog."
        super().__init__(msg)
