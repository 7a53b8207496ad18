from __future__ import annotations

from typing import Sequence

from src.app.core.constants import PIPELINE_NOT_FOUND
from src.app.core.exceptions import PipelineNotFoundError
from src.app.models import PipelineDefinition
from src.engine.services.rwlock import ReadWriteLock


class InMemoryPipelinesRepository:
    """Process-lifetime store of pipeline definitions keyed by name.

    Provides:
    - no business validation (the service validates before calling ``put``);
    - concurrent reads, exclusive writes;
    - a uniform contract (returns the object or raises a domain error).
    """

    def __init__(self) -> None:
        self._items: dict[str, PipelineDefinition] = {}
        self._lock = ReadWriteLock()

    async def list_pipelines(self) -> Sequence[PipelineDefinition]:
        async with self._lock.read():
            items = list(self._items.values())
        return sorted(items, key=lambda p: p.name)

    async def get_pipeline(self, name: str) -> PipelineDefinition:
        async with self._lock.read():
            pipeline = self._items.get(name)

        if pipeline is None:
            raise PipelineNotFoundError(PIPELINE_NOT_FOUND)

        return pipeline

    async def put_pipeline(self, definition: PipelineDefinition) -> None:
        """Insert or overwrite (last write wins)."""
        async with self._lock.write():
            self._items[definition.name] = definition
