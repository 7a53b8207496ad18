from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from src.app.core.enums import ConnectorKind
from src.engine.orchestration.context import RunContext

Record = dict[str, Any]
ConnectorConfig = Mapping[str, str]


@dataclass(frozen=True, slots=True)
class ConnectorInfo:
    """Static metadata of a connector, as shown to the dashboard."""

    name: str
    kind: ConnectorKind
    description: str
    supports_schema_change: bool = False
    max_parallelism: int = 1

    def __post_init__(self) -> None:
        if self.max_parallelism < 1:
            raise ValueError(
                f"max_parallelism must be >= 1, got {self.max_parallelism} for {self.name!r}"
            )


class RecordStream(Protocol):
    """Lazy, finite record sequence produced by an extraction."""

    def __aiter__(self) -> AsyncIterator[Record]: ...

    async def aclose(self) -> None:
        """Stop the producer and release its resources."""
        ...


class Source(Protocol):
    def info(self) -> ConnectorInfo: ...

    def validate(self, config: ConnectorConfig) -> None:
        """Raise MissingFieldError for the first absent/empty required key."""
        ...

    async def extract(self, ctx: RunContext, config: ConnectorConfig) -> RecordStream: ...


class Destination(Protocol):
    def info(self) -> ConnectorInfo: ...

    def validate(self, config: ConnectorConfig) -> None: ...

    async def load(
        self,
        ctx: RunContext,
        config: ConnectorConfig,
        records: AsyncIterable[Record],
    ) -> None: ...
