from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from src.app.models import PipelineDefinition


class PipelinesRepository(Protocol):
    async def list_pipelines(self) -> Sequence[PipelineDefinition]: ...

    async def get_pipeline(self, name: str) -> PipelineDefinition: ...

    async def put_pipeline(self, definition: PipelineDefinition) -> None: ...
