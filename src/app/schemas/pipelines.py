from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.app.models import PipelineDefinition
from src.engine.orchestration.executor import RunResult


# ======================
#   Base models
# ======================

class PipelineBase(BaseModel):
    """Pipeline definition on the wire (camelCase, as the dashboard sends it).

    The name is not validated here: an empty name is a domain error
    (InvalidNameError) reported by the service.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    source_type: str = Field(alias="sourceType")
    source_config: dict[str, str] = Field(default_factory=dict, alias="sourceConfig")
    dest_type: str = Field(alias="destType")
    dest_config: dict[str, str] = Field(default_factory=dict, alias="destConfig")


class PipelineCreate(PipelineBase):
    """Payload of POST /pipelines."""

    def to_definition(self) -> PipelineDefinition:
        return PipelineDefinition(
            name=self.name,
            source_name=self.source_type,
            source_config=self.source_config,
            destination_name=self.dest_type,
            destination_config=self.dest_config,
        )


# ======================
#   Output models
# ======================

class PipelineOut(PipelineBase):
    @classmethod
    def from_definition(cls, pipeline: PipelineDefinition) -> PipelineOut:
        return cls(
            name=pipeline.name,
            source_type=pipeline.source_name,
            source_config=dict(pipeline.source_config),
            dest_type=pipeline.destination_name,
            dest_config=dict(pipeline.destination_config),
        )


class PipelineCreatedOut(BaseModel):
    status: str = "created"


class RunResultOut(BaseModel):
    """Result of one run. ``error`` is omitted when the run succeeded."""

    model_config = ConfigDict(populate_by_name=True)

    pipeline_name: str = Field(alias="pipelineName")
    started_at: datetime = Field(alias="startedAt")
    finished_at: datetime | None = Field(default=None, alias="finishedAt")
    records: int = Field(ge=0)
    error: str | None = None

    @classmethod
    def from_result(cls, result: RunResult) -> RunResultOut:
        return cls(
            pipeline_name=result.pipeline_name,
            started_at=result.started_at,
            finished_at=result.finished_at,
            records=result.records,
            error=result.error or None,
        )
