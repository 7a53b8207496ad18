from __future__ import annotations

from fastapi import APIRouter, Depends

from src.app.dependencies import get_pipelines_service
from src.app.schemas.connectors import ConnectorOut
from src.app.services.pipelines import PipelinesService

router = APIRouter(prefix="/connectors", tags=["connectors"])


@router.get("", response_model=list[ConnectorOut])
async def list_connectors_endpoint(
    service: PipelinesService = Depends(get_pipelines_service),
) -> list[ConnectorOut]:
    return [ConnectorOut.from_info(info) for info in service.list_connectors()]
