from __future__ import annotations

from fastapi import Request

from src.app.services.pipelines import PipelinesService
from src.config import Settings


def get_pipelines_service(request: Request) -> PipelinesService:
    """PipelinesService factory for DI.

    Registry, store and executor are process-lifetime objects built by
    ``create_app`` and kept on ``app.state``; the service itself is cheap.
    """
    state = request.app.state
    return PipelinesService(
        registry=state.registry,
        repo=state.pipelines,
        executor=state.executor,
    )


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
