from __future__ import annotations

import logging
from typing import Sequence

from src.app.models import PipelineDefinition
from src.app.repositories.interfaces import PipelinesRepository
from src.engine.orchestration.context import RunContext
from src.engine.orchestration.executor import PipelineExecutor, RunResult
from src.engine.ports.connectors import ConnectorInfo
from src.engine.registry import ConnectorRegistry
from src.engine.services.validation import validate_pipeline_name

logger = logging.getLogger("el_api")


class PipelinesService:
    """Service layer over the registry, the pipeline store and the executor."""

    def __init__(
        self,
        registry: ConnectorRegistry,
        repo: PipelinesRepository,
        executor: PipelineExecutor | None = None,
    ) -> None:
        self.registry = registry
        self.repo = repo
        self.executor = executor or PipelineExecutor(registry=registry, pipelines=repo)

    # ---------- connectors ----------

    def list_connectors(self) -> list[ConnectorInfo]:
        return self.registry.available()

    # ---------- pipeline definitions ----------

    async def list_pipelines(self) -> Sequence[PipelineDefinition]:
        """Return all pipelines sorted by name."""
        return await self.repo.list_pipelines()

    async def create_pipeline(self, definition: PipelineDefinition) -> PipelineDefinition:
        """Validate a definition and store it (overwriting one with the same name).

        Order: name -> connectors -> pairing -> configs -> store. Any failure
        raises before the store is touched, so nothing is half-written.
        """
        validate_pipeline_name(definition.name)

        src, dst = self.registry.resolve(definition.source_name, definition.destination_name)
        src.validate(definition.source_config)
        dst.validate(definition.destination_config)

        await self.repo.put_pipeline(definition)
        logger.info(
            "Pipeline %s stored: %s -> %s",
            definition.name, definition.source_name, definition.destination_name,
        )
        return definition

    # ---------- runs ----------

    async def run_pipeline(self, ctx: RunContext, name: str) -> RunResult:
        """Execute a stored pipeline; failures are reported in the result."""
        return await self.executor.run(ctx, name)
