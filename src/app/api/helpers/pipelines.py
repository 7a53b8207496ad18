from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import HTTPException, Request, status

from src.app.core.constants import CLIENT_DISCONNECTED
from src.engine.orchestration.context import RunContext

logger = logging.getLogger("el_api")


def http_400(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=detail,
    )


@asynccontextmanager
async def cancel_on_disconnect(
    request: Request,
    ctx: RunContext,
    *,
    poll_interval: float = 0.1,
) -> AsyncIterator[RunContext]:
    """Cancel ``ctx`` if the HTTP client goes away while the run is in flight."""

    async def _watch() -> None:
        while not ctx.cancelled:
            if await request.is_disconnected():
                logger.info("Client disconnected from %s, cancelling run", request.url.path)
                ctx.cancel(CLIENT_DISCONNECTED)
                return
            await asyncio.sleep(poll_interval)

    watcher = asyncio.create_task(_watch())
    try:
        yield ctx
    finally:
        watcher.cancel()
        await asyncio.wait({watcher})
