from __future__ import annotations

import logging
from typing import Iterator

from toolmatrix.catalog import ToolType

from .instance import ToolInstance
from .state import ToolState

logger = logging.getLogger(__name__)


class ToolPool:
    """
    Authoritative, insertion-ordered collection of tool instances.

    Instances are never removed: MAXED and INDEBT instances stay visible for
    shortage reporting until the pool itself is discarded.
    """

    def __init__(self) -> None:
        self._instances: list[ToolInstance] = []

    def seed(self, tool_type: ToolType, quantity: int) -> list[ToolInstance]:
        if quantity <= 0:
            return []
        created = [ToolInstance(tool_type) for _ in range(quantity)]
        self._instances.extend(created)
        logger.debug("Seeded %d x %s", quantity, tool_type)
        return created

    def append(self, instance: ToolInstance) -> None:
        self._instances.append(instance)

    # ── views ────────────────────────────────────────────────────────────

    def all_instances(self) -> tuple[ToolInstance, ...]:
        return tuple(self._instances)

    def by_state(self, state: ToolState) -> tuple[ToolInstance, ...]:
        return tuple(i for i in self._instances if i.state is state)

    def by_type(self, tool_type: ToolType) -> tuple[ToolInstance, ...]:
        return tuple(i for i in self._instances if i.tool_type == tool_type)

    def by_type_and_state(
        self, tool_type: ToolType, state: ToolState
    ) -> tuple[ToolInstance, ...]:
        return tuple(
            i for i in self._instances
            if i.state is state and i.tool_type == tool_type
        )

    # ── container protocol ───────────────────────────────────────────────

    def __iter__(self) -> Iterator[ToolInstance]:
        return iter(tuple(self._instances))

    def __len__(self) -> int:
        return len(self._instances)

    def __repr__(self) -> str:
        counts = {s.value: 0 for s in ToolState}
        for i in self._instances:
            counts[i.state.value] += 1
        return f"ToolPool(size={len(self._instances)}, states={counts})"
