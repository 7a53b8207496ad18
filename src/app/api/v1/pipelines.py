from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request

from src.app.api.helpers.pipelines import cancel_on_disconnect, http_400
from src.app.core.exceptions import PipelineError
from src.app.dependencies import get_app_settings, get_pipelines_service
from src.app.schemas.pipelines import (
    PipelineCreate,
    PipelineCreatedOut,
    PipelineOut,
    RunResultOut,
)
from src.app.services.pipelines import PipelinesService
from src.config import Settings
from src.engine.orchestration.context import RunContext

router = APIRouter(prefix="/pipelines", tags=["pipelines"])


@router.get("", response_model=List[PipelineOut])
async def list_pipelines_endpoint(
    service: PipelinesService = Depends(get_pipelines_service),
) -> List[PipelineOut]:
    pipelines = await service.list_pipelines()
    return [PipelineOut.from_definition(p) for p in pipelines]


@router.post("", response_model=PipelineCreatedOut)
async def create_pipeline_endpoint(
    payload: PipelineCreate,
    service: PipelinesService = Depends(get_pipelines_service),
) -> PipelineCreatedOut:
    try:
        await service.create_pipeline(payload.to_definition())
    except PipelineError as exc:
        # bad name, unknown connector, invalid pairing, missing config field
        raise http_400(str(exc))

    return PipelineCreatedOut()


@router.post(
    "/{name}/run",
    response_model=RunResultOut,
    response_model_exclude_none=True,
)
async def run_pipeline_endpoint(
    name: str,
    request: Request,
    service: PipelinesService = Depends(get_pipelines_service),
    settings: Settings = Depends(get_app_settings),
) -> RunResultOut:
    """Run a pipeline synchronously. Always 200: failures are in ``error``."""
    async with RunContext(timeout=settings.run_timeout_seconds) as ctx:
        async with cancel_on_disconnect(request, ctx):
            result = await service.run_pipeline(ctx, name)

    return RunResultOut.from_result(result)
