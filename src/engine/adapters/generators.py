from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator
from dataclasses import dataclass

from src.app.core.constants import DEFAULT_PACING_SECONDS
from src.engine.orchestration.context import RunContext
from src.engine.ports.connectors import Record


@dataclass(frozen=True, slots=True)
class SampleRecordGenerator:
    """Stand-in for real extraction throughput: ``count`` synthetic records.

    Each record is yielded only after ``pacing`` seconds (simulated I/O).
    """

    count: int
    pacing: float = DEFAULT_PACING_SECONDS

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError(f"count must be >= 0, got {self.count}")
        if self.pacing < 0:
            raise ValueError(f"pacing must be >= 0, got {self.pacing}")

    async def records(self, ctx: RunContext) -> AsyncGenerator[Record, None]:
        for i in range(1, self.count + 1):
            await ctx.race(asyncio.sleep(self.pacing))
            yield {"id": i, "payload": f"record-{i}"}
