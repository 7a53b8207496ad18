from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import AsyncGenerator, AsyncIterable, AsyncIterator, Callable

from src.app.core.exceptions import ContextCancelledError
from src.engine.orchestration.context import RunContext
from src.engine.ports.connectors import Record

logger = logging.getLogger("el_engine")


class ChannelClosed(Exception):
    """Raised by ``RecordChannel.receive`` once the producer closed the channel."""


class RecordChannel:
    """Unbuffered (capacity 0) handoff between one producer and one consumer.

    ``send`` returns only after the consumer has taken the record, so the
    producer is never more than one record ahead of the consumer.
    """

    def __init__(self) -> None:
        self._offers: deque[tuple[Record, asyncio.Future[None]]] = deque()
        self._receivers: deque[asyncio.Future[None]] = deque()
        self._closed = False
        self._error: BaseException | None = None

    async def send(self, record: Record) -> None:
        if self._closed:
            raise RuntimeError("send on closed channel")

        taken: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        offer = (record, taken)
        self._offers.append(offer)
        self._wake_receiver()
        try:
            await taken
        except asyncio.CancelledError:
            # not handed off -> never produced
            if offer in self._offers:
                self._offers.remove(offer)
            raise

    async def receive(self) -> Record:
        while True:
            if self._offers:
                record, taken = self._offers.popleft()
                if taken.done():
                    # withdrawn by a cancelled sender
                    continue
                taken.set_result(None)
                return record

            if self._closed:
                if self._error is not None:
                    raise self._error
                raise ChannelClosed()

            waiter: asyncio.Future[None] = asyncio.get_running_loop().create_future()
            self._receivers.append(waiter)
            try:
                await waiter
            finally:
                if waiter in self._receivers:
                    self._receivers.remove(waiter)

    def close(self, error: BaseException | None = None) -> None:
        """End the stream; ``error`` is re-raised to the consumer after pending offers."""
        if self._closed:
            return
        self._closed = True
        self._error = error
        while self._receivers:
            waiter = self._receivers.popleft()
            if not waiter.done():
                waiter.set_result(None)

    def _wake_receiver(self) -> None:
        while self._receivers:
            waiter = self._receivers.popleft()
            if not waiter.done():
                waiter.set_result(None)
                return


class ProducerStream:
    """Consumer side of an extraction: async iterator fed by a producer task."""

    def __init__(self, ctx: RunContext, channel: RecordChannel, task: asyncio.Task[None]) -> None:
        self._ctx = ctx
        self._channel = channel
        self._task = task

    def __aiter__(self) -> AsyncIterator[Record]:
        return self

    async def __anext__(self) -> Record:
        try:
            return await self._ctx.race(self._channel.receive())
        except ChannelClosed:
            raise StopAsyncIteration from None

    async def aclose(self) -> None:
        if not self._task.done():
            self._task.cancel()
        await asyncio.wait({self._task})


async def _pump(
    ctx: RunContext,
    records: AsyncGenerator[Record, None],
    channel: RecordChannel,
    name: str,
) -> None:
    error: BaseException | None = None
    produced = 0
    try:
        async for record in records:
            await ctx.race(channel.send(record))
            produced += 1
    except ContextCancelledError:
        # cancellation is the caller's concern; the producer just stops
        logger.debug("Producer %s stopped after %d record(s): %s", name, produced, ctx.reason)
    except Exception as exc:
        logger.warning("Producer %s failed after %d record(s): %r", name, produced, exc)
        error = exc
    finally:
        channel.close(error)
        await records.aclose()


def open_stream(
    ctx: RunContext,
    records: AsyncGenerator[Record, None],
    *,
    name: str = "extract",
) -> ProducerStream:
    """Start a producer task pumping ``records`` through a rendezvous channel."""
    channel = RecordChannel()
    task = asyncio.create_task(_pump(ctx, records, channel, name), name=f"producer:{name}")
    return ProducerStream(ctx, channel, task)


async def tee(
    records: AsyncIterable[Record],
    fn: Callable[[Record], None],
) -> AsyncGenerator[Record, None]:
    """Forward each record unchanged after applying ``fn`` to it exactly once.

    Pull-based: the next upstream record is requested only after the previous
    one was handed downstream.
    """
    async for record in records:
        fn(record)
        yield record


async def drain(ctx: RunContext, records: AsyncIterable[Record]) -> int:
    """Consume ``records`` to exhaustion, racing every pull against ``ctx``."""
    iterator = aiter(records)
    consumed = 0
    while True:
        try:
            await ctx.race(anext(iterator))
        except StopAsyncIteration:
            return consumed
        consumed += 1
