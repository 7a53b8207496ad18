from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Protocol

from src.engine.orchestration.context import RunContext
from src.engine.ports.connectors import Record


class RecordGenerator(Protocol):
    """Strategy producing the records of an extraction (simulated or driver-backed)."""

    def records(self, ctx: RunContext) -> AsyncIterator[Record]: ...
