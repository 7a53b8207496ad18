from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.app.api.v1.connectors import router as connectors_router
from src.app.api.v1.pipelines import router as pipelines_router
from src.app.repositories.pipelines import InMemoryPipelinesRepository
from src.config import Settings, get_settings
from src.engine.orchestration.executor import PipelineExecutor
from src.engine.registry import build_default_registry

logger = logging.getLogger("el_api")


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] [%(name)s] %(message)s",
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # malformed pipeline payloads are client errors like any other validation failure
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": format_errors(exc)},
    )


def format_errors(exc: RequestValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    logger.info(
        "EL API starting (env=%s, %d connector(s))",
        app.state.settings.app_env, len(app.state.registry.available()),
    )

    yield

    # shutdown: definitions are in-memory only
    pipelines = await app.state.pipelines.list_pipelines()
    logger.info("EL API stopped, %d pipeline definition(s) discarded", len(pipelines))


def create_app(settings: Settings | None = None) -> FastAPI:
    """Application factory: registry, store and executor live on ``app.state``."""
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="EL Orchestration API", version="0.1.0", lifespan=lifespan)

    registry = build_default_registry(pacing=settings.pacing_seconds)
    pipelines = InMemoryPipelinesRepository()
    app.state.settings = settings
    app.state.registry = registry
    app.state.pipelines = pipelines
    app.state.executor = PipelineExecutor(registry=registry, pipelines=pipelines)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(connectors_router)
    app.include_router(pipelines_router)

    @app.get("/health", tags=["system"])
    async def healthcheck() -> str:
        return "ok"

    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    logger.info("server listening on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
