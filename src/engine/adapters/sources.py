from __future__ import annotations

import logging
from collections.abc import Sequence

from src.app.core.enums import ConnectorKind
from src.engine.adapters.generators import SampleRecordGenerator
from src.engine.adapters.relational import masked_url
from src.engine.orchestration.context import RunContext
from src.engine.ports.connectors import ConnectorConfig, ConnectorInfo
from src.engine.ports.generator import RecordGenerator
from src.engine.services.streams import ProducerStream, open_stream
from src.engine.services.validation import ensure_required_fields

logger = logging.getLogger("el_engine")


class SampleSource:
    """Source whose extraction is delegated to a ``RecordGenerator`` strategy."""

    def __init__(
        self,
        info: ConnectorInfo,
        required: Sequence[str],
        generator: RecordGenerator,
    ) -> None:
        if info.kind is not ConnectorKind.SOURCE:
            raise ValueError(f"{info.name!r} is not a source descriptor")
        self._info = info
        self._required = tuple(required)
        self._generator = generator

    def info(self) -> ConnectorInfo:
        return self._info

    def validate(self, config: ConnectorConfig) -> None:
        ensure_required_fields(self._required, config)

    async def extract(self, ctx: RunContext, config: ConnectorConfig) -> ProducerStream:
        self.validate(config)
        self._log_open(config)
        return open_stream(ctx, self._generator.records(ctx), name=self._info.name)

    def _log_open(self, config: ConnectorConfig) -> None:
        logger.debug("Extract from %s", self._info.name)


class RelationalSource(SampleSource):
    def __init__(
        self,
        info: ConnectorInfo,
        required: Sequence[str],
        generator: RecordGenerator,
        *,
        driver: str,
    ) -> None:
        super().__init__(info, required, generator)
        self.driver = driver

    def _log_open(self, config: ConnectorConfig) -> None:
        logger.info("Extract from %s url=%s", self._info.name, masked_url(self.driver, config))


class TableFormatSource(SampleSource):
    """Snapshot reader over a table-format catalog (e.g. Iceberg)."""

    def _log_open(self, config: ConnectorConfig) -> None:
        logger.info(
            "Extract from %s table=%s.%s warehouse=%s",
            self._info.name, config["catalog"], config["table"], config["warehouse"],
        )


def sample_source(
    name: str,
    description: str,
    *,
    supports_schema_change: bool,
    max_parallelism: int,
    required: Sequence[str],
    sample_records: int,
    pacing: float,
    driver: str | None = None,
) -> SampleSource:
    info = ConnectorInfo(
        name=name,
        kind=ConnectorKind.SOURCE,
        description=description,
        supports_schema_change=supports_schema_change,
        max_parallelism=max_parallelism,
    )
    generator = SampleRecordGenerator(count=sample_records, pacing=pacing)
    if driver is not None:
        return RelationalSource(info, required, generator, driver=driver)
    return TableFormatSource(info, required, generator)
