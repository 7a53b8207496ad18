from __future__ import annotations

import logging
from collections.abc import AsyncIterable, Sequence

from src.app.core.enums import ConnectorKind
from src.engine.adapters.relational import masked_url
from src.engine.orchestration.context import RunContext
from src.engine.ports.connectors import ConnectorConfig, ConnectorInfo, Record
from src.engine.services.streams import drain
from src.engine.services.validation import ensure_required_fields

logger = logging.getLogger("el_engine")


class SampleDestination:
    """Destination that consumes records without writing them anywhere."""

    def __init__(self, info: ConnectorInfo, required: Sequence[str]) -> None:
        if info.kind is not ConnectorKind.DESTINATION:
            raise ValueError(f"{info.name!r} is not a destination descriptor")
        self._info = info
        self._required = tuple(required)

    def info(self) -> ConnectorInfo:
        return self._info

    def validate(self, config: ConnectorConfig) -> None:
        ensure_required_fields(self._required, config)

    async def load(
        self,
        ctx: RunContext,
        config: ConnectorConfig,
        records: AsyncIterable[Record],
    ) -> None:
        self.validate(config)
        self._log_open(config)
        # no transaction: records consumed before a cancellation stay delivered
        consumed = await drain(ctx, records)
        logger.debug("Load into %s consumed %d record(s)", self._info.name, consumed)

    def _log_open(self, config: ConnectorConfig) -> None:
        logger.debug("Load into %s", self._info.name)


class RelationalDestination(SampleDestination):
    def __init__(self, info: ConnectorInfo, required: Sequence[str], *, driver: str) -> None:
        super().__init__(info, required)
        self.driver = driver

    def _log_open(self, config: ConnectorConfig) -> None:
        logger.info("Load into %s url=%s", self._info.name, masked_url(self.driver, config))


def relational_destination(
    name: str,
    description: str,
    *,
    supports_schema_change: bool,
    max_parallelism: int,
    required: Sequence[str],
    driver: str,
) -> RelationalDestination:
    info = ConnectorInfo(
        name=name,
        kind=ConnectorKind.DESTINATION,
        description=description,
        supports_schema_change=supports_schema_change,
        max_parallelism=max_parallelism,
    )
    return RelationalDestination(info, required, driver=driver)
