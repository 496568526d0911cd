from __future__ import annotations

import uuid

from toolmatrix.catalog import UnknownToolType


class AllocationError(Exception):
    """Base class for errors raised while binding projects to tools."""


class DuplicateProjectBinding(AllocationError):
    """The project is already bound to the targeted tool instance."""

    def __init__(self, instance_id: uuid.UUID, project_key: str) -> None:
        self.instance_id = instance_id
        self.project_key = project_key
        super().__init__(
            f"Project {project_key} is already bound to tool {instance_id}."
        )


class InvalidUsage(AllocationError, ValueError):
    """Requested usage is negative or not a whole number of minutes."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(
            f"Required usage must be a non-negative whole number of minutes; got {value!r}."
        )


RequestError = UnknownToolType | DuplicateProjectBinding | InvalidUsage
