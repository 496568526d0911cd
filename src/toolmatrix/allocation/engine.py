from __future__ import annotations

import logging
import numbers
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple, Union

from toolmatrix.catalog import ToolCatalog, ToolType, UnknownToolType
from toolmatrix.pool import ProjectRef, ToolInstance, ToolPool, ToolState

from ._exceptions import DuplicateProjectBinding, InvalidUsage, RequestError

logger = logging.getLogger(__name__)

ToolKey = Union[ToolType, Tuple[float, int]]
Request = Tuple[ToolKey, Union[int, None], ProjectRef]


class Outcome(Enum):
    REUSED = "reused"
    FRESH = "fresh"
    FABRICATED = "fabricated"
    REJECTED = "rejected"


@dataclass(frozen=True, slots=True)
class AllocationResult:
    """Outcome of one allocation request: the bound instance or the error."""

    outcome: Outcome
    project: ProjectRef
    instance: ToolInstance | None = None
    error: RequestError | None = None
    alternatives: tuple[ToolInstance, ...] = ()

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> ToolInstance:
        if self.error is not None:
            raise self.error
        if self.instance is None:
            raise RuntimeError("Successful allocation result without an instance.")
        return self.instance


class AllocationEngine:
    """
    Binds projects to tool instances: reuse an INUSE instance with headroom,
    else take a FREE one, else fabricate an INDEBT record.

    Selection is first-found in pool insertion order, not least-loaded.
    Calls are serialised by an internal lock.
    """

    DEFAULT_TOLERANCE: float = 1.2

    def __init__(
        self,
        catalog: ToolCatalog,
        pool: ToolPool,
        tolerance: float = DEFAULT_TOLERANCE,
    ) -> None:
        if tolerance < 1.0:
            raise ValueError(f"Tolerance must be at least 1.0; got {tolerance}.")
        self._catalog = catalog
        self._pool = pool
        self._tolerance = float(tolerance)
        self._lock = threading.Lock()

    # ── type resolution / seeding ────────────────────────────────────────

    def lookup_type(self, diameter: float, tool_code: int) -> ToolType:
        return self._catalog.lookup(diameter, tool_code)

    def _resolve(self, tool: ToolKey) -> ToolType:
        if isinstance(tool, ToolType):
            return self._catalog.lookup(*tool.key)
        diameter, tool_code = tool
        return self._catalog.lookup(diameter, tool_code)

    def seed(self, tool: ToolKey, quantity: int) -> list[ToolInstance]:
        tool_type = self._resolve(tool)
        with self._lock:
            return self._pool.seed(tool_type, quantity)

    # ── allocation ───────────────────────────────────────────────────────

    def allocate(
        self,
        tool: ToolKey,
        project: ProjectRef,
        required_usage: int | None = None,
    ) -> AllocationResult:
        usage = self._usage_for(project, required_usage)
        try:
            tool_type = self._resolve(tool)
        except UnknownToolType as exc:
            logger.warning("Rejected %s: %s", project, exc)
            return AllocationResult(Outcome.REJECTED, project, error=exc)

        alternatives: tuple[ToolInstance, ...] = ()
        with self._lock:
            instance, outcome = self._select(tool_type, project, usage)
            if instance is None:
                alternatives = tuple(self._alternatives(tool_type, usage))
                instance = ToolInstance.indebt(tool_type)
                self._pool.append(instance)
                outcome = Outcome.FABRICATED
                logger.info(
                    "No %s available for %s; recorded shortage %s (%d alternatives)",
                    tool_type, project, instance.id, len(alternatives),
                )
            try:
                self.bind(instance, project, usage)
            except DuplicateProjectBinding as exc:
                logger.warning("Rejected %s: %s", project, exc)
                return AllocationResult(Outcome.REJECTED, project, instance, exc)
        return AllocationResult(outcome, project, instance, alternatives=alternatives)

    def assign(
        self,
        instance: ToolInstance,
        project: ProjectRef,
        required_usage: int | None = None,
    ) -> AllocationResult:
        """Bind ``project`` to a caller-chosen instance, bypassing selection."""
        usage = self._usage_for(project, required_usage)
        with self._lock:
            previous = instance.state
            try:
                self.bind(instance, project, usage)
            except DuplicateProjectBinding as exc:
                logger.warning("Rejected %s: %s", project, exc)
                return AllocationResult(Outcome.REJECTED, project, instance, exc)
        if previous is ToolState.INDEBT:
            outcome = Outcome.FABRICATED
        elif previous is ToolState.FREE:
            outcome = Outcome.FRESH
        else:
            outcome = Outcome.REUSED
        return AllocationResult(outcome, project, instance)

    def allocate_many(self, requests: Iterable[Request]) -> list[AllocationResult]:
        """
        Process requests one at a time, in order.

        Each request stands alone: a bad usage value is returned as a
        REJECTED result instead of stopping the batch.
        """
        results = []
        for tool, usage, project in requests:
            try:
                results.append(self.allocate(tool, project, usage))
            except InvalidUsage as exc:
                logger.warning("Rejected %s: %s", project, exc)
                results.append(AllocationResult(Outcome.REJECTED, project, error=exc))
        return results

    def alternatives(
        self,
        tool: ToolKey,
        required_usage: int,
        diameter_tolerance: float = 0.1,
        limit: int = 5,
    ) -> list[ToolInstance]:
        """
        Physical instances of other types that could take ``required_usage``.

        Same diameter with a different tool code come first, then any code
        at a different diameter within ``diameter_tolerance``.  Only
        instances with ``usage + required_usage <= budget`` qualify.
        """
        tool_type = self._resolve(tool)
        usage = self._checked_usage(required_usage)
        with self._lock:
            return self._alternatives(tool_type, usage, diameter_tolerance, limit)

    def _alternatives(
        self,
        tool_type: ToolType,
        usage: int,
        diameter_tolerance: float = 0.1,
        limit: int = 5,
    ) -> list[ToolInstance]:
        capable = [
            i for i in self._pool.all_instances()
            if i.state is not ToolState.INDEBT
            and i.usage + usage <= i.tool_type.lifetime_budget
        ]
        same_diameter = [
            i for i in capable
            if i.tool_type.diameter == tool_type.diameter
            and i.tool_type.tool_code != tool_type.tool_code
        ]
        # epsilon absorbs float error in the diameter difference
        similar = [
            i for i in capable
            if i.tool_type.diameter != tool_type.diameter
            and abs(i.tool_type.diameter - tool_type.diameter) <= diameter_tolerance + 1e-9
        ]
        return (same_diameter + similar)[:limit]

    def bind(self, instance: ToolInstance, project: ProjectRef, usage: int) -> None:
        if instance.holds(project):
            raise DuplicateProjectBinding(instance.id, project.key)
        instance._record(project, usage)
        logger.debug(
            "Bound %s to %s (+%d min, now %d, %s)",
            project, instance.id, usage, instance.usage, instance.state,
        )

    # ── selection ────────────────────────────────────────────────────────

    def _select(
        self, tool_type: ToolType, project: ProjectRef, usage: int
    ) -> tuple[ToolInstance | None, Outcome]:
        for candidate in self._pool.by_type_and_state(tool_type, ToolState.INUSE):
            if not candidate.holds(project) and candidate.accepts(usage, self._tolerance):
                return candidate, Outcome.REUSED
        for candidate in self._pool.by_type_and_state(tool_type, ToolState.FREE):
            if not candidate.holds(project):
                return candidate, Outcome.FRESH
        return None, Outcome.FABRICATED

    @classmethod
    def _usage_for(cls, project: ProjectRef, required_usage: int | None) -> int:
        return cls._checked_usage(
            project.required_usage if required_usage is None else required_usage
        )

    @staticmethod
    def _checked_usage(value: object) -> int:
        # whole minutes only; 3.0 is accepted, 2.9 and True are not
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise InvalidUsage(value)
        if not isinstance(value, numbers.Integral) and not float(value).is_integer():
            raise InvalidUsage(value)
        usage = int(value)
        if usage < 0:
            raise InvalidUsage(value)
        return usage

    # ── properties / repr ────────────────────────────────────────────────

    @property
    def catalog(self) -> ToolCatalog:
        return self._catalog

    @property
    def pool(self) -> ToolPool:
        return self._pool

    @property
    def tolerance(self) -> float:
        return self._tolerance

    def __repr__(self) -> str:
        return (
            f"AllocationEngine(tolerance={self._tolerance}, "
            f"catalog_types={len(self._catalog)}, pool_size={len(self._pool)})"
        )
