from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from src.app.core.constants import CONTEXT_CANCELED, DEADLINE_EXCEEDED
from src.app.core.exceptions import ContextCancelledError

T = TypeVar("T")


class RunContext:
    """Cancellation scope of one pipeline run.

    Shared by the producer (extraction) and the consumer (tee -> load).
    Every suspension point of either side goes through ``race`` so that
    cancellation is observed wherever the run happens to be waiting.

    Must be created inside a running event loop when ``timeout`` is set.
    """

    def __init__(self, *, timeout: float | None = None) -> None:
        self._done = asyncio.Event()
        self._reason: str | None = None
        self._deadline: asyncio.TimerHandle | None = None

        if timeout is not None:
            loop = asyncio.get_running_loop()
            self._deadline = loop.call_later(timeout, self.cancel, DEADLINE_EXCEEDED)

    async def __aenter__(self) -> RunContext:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self._disarm()

    @property
    def cancelled(self) -> bool:
        return self._done.is_set()

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str = CONTEXT_CANCELED) -> None:
        # first reason wins
        if self._done.is_set():
            return
        self._reason = reason
        self._done.set()
        self._disarm()

    async def wait(self) -> None:
        await self._done.wait()

    def raise_if_cancelled(self) -> None:
        if self._done.is_set():
            raise ContextCancelledError(self._reason or CONTEXT_CANCELED)

    async def race(self, aw: Awaitable[T]) -> T:
        """Await ``aw`` unless the context is cancelled first.

        Cancellation has priority: if both finish in the same iteration,
        ``ContextCancelledError`` is raised and the result of ``aw`` is dropped.
        """
        if self._done.is_set():
            if asyncio.iscoroutine(aw):
                aw.close()
            self.raise_if_cancelled()

        task = asyncio.ensure_future(aw)
        waiter = asyncio.ensure_future(self._done.wait())
        try:
            await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            task.cancel()
            waiter.cancel()
            # the child may still be inside an async generator; let it unwind first
            await asyncio.wait({task, waiter})
            raise

        if self._done.is_set():
            task.cancel()
            await asyncio.wait({task})
            if not task.cancelled():
                # retrieve it: cancellation wins over a concurrent failure
                task.exception()
            raise ContextCancelledError(self._reason or CONTEXT_CANCELED)

        waiter.cancel()
        return task.result()

    def _disarm(self) -> None:
        if self._deadline is not None:
            self._deadline.cancel()
            self._deadline = None
