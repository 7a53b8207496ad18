from __future__ import annotations

import logging

from src.app.core.constants import (
    DEFAULT_PACING_SECONDS,
    RELATIONAL_FIELDS,
    TABLE_FORMAT_FIELDS,
    is_source_only,
)
from src.app.core.enums import ConnectorKind
from src.app.core.exceptions import InvalidPairingError, UnknownConnectorError
from src.engine.adapters.destinations import relational_destination
from src.engine.adapters.relational import DRIVERS
from src.engine.adapters.sources import sample_source
from src.engine.ports.connectors import ConnectorInfo, Destination, Source

logger = logging.getLogger("el_engine")


def validate_pair(src: ConnectorInfo, dst: ConnectorInfo) -> None:
    """Check that ``src``/``dst`` may be paired; does not look at configs."""
    if src.kind is not ConnectorKind.SOURCE or dst.kind is not ConnectorKind.DESTINATION:
        raise InvalidPairingError("invalid connector pairing")
    if is_source_only(dst.name):
        raise InvalidPairingError(f"{dst.name} cannot be a destination")


class ConnectorRegistry:
    """Fixed catalog of sources and destinations, indexed by name.

    Populated once at startup and read-only afterwards, so lookups need no lock.
    """

    def __init__(self) -> None:
        self._sources: dict[str, Source] = {}
        self._destinations: dict[str, Destination] = {}

    def register_sources(self, *items: Source) -> None:
        for item in items:
            self._register(self._sources, item, ConnectorKind.SOURCE)

    def register_destinations(self, *items: Destination) -> None:
        for item in items:
            self._register(self._destinations, item, ConnectorKind.DESTINATION)

    @staticmethod
    def _register(index: dict, item: Source | Destination, kind: ConnectorKind) -> None:
        info = item.info()
        if info.kind is not kind:
            raise ValueError(f"connector {info.name!r} is a {info.kind.value}, expected {kind.value}")
        if info.name in index:
            raise ValueError(f"{kind.value} connector {info.name!r} is already registered")
        index[info.name] = item

    def available(self) -> list[ConnectorInfo]:
        return [s.info() for s in self._sources.values()] + [
            d.info() for d in self._destinations.values()
        ]

    def source_by_name(self, name: str) -> Source:
        try:
            return self._sources[name]
        except KeyError:
            raise UnknownConnectorError(f"unknown source connector {name}") from None

    def destination_by_name(self, name: str) -> Destination:
        try:
            return self._destinations[name]
        except KeyError:
            raise UnknownConnectorError(f"unknown destination connector {name}") from None

    def validate_pair(self, src: ConnectorInfo, dst: ConnectorInfo) -> None:
        validate_pair(src, dst)

    def resolve(self, source_name: str, destination_name: str) -> tuple[Source, Destination]:
        """Look both sides up and check the pairing (no config validation).

        A source-only connector named as destination is a pairing error even
        though no destination of that name is registered.
        """
        src = self.source_by_name(source_name)
        if is_source_only(destination_name):
            raise InvalidPairingError(f"{destination_name} cannot be a destination")
        dst = self.destination_by_name(destination_name)
        self.validate_pair(src.info(), dst.info())
        return src, dst


def build_default_registry(*, pacing: float = DEFAULT_PACING_SECONDS) -> ConnectorRegistry:
    registry = ConnectorRegistry()

    registry.register_sources(
        sample_source(
            "mysql", "High-speed MySQL binlog reader",
            supports_schema_change=True, max_parallelism=8,
            required=RELATIONAL_FIELDS, sample_records=50, pacing=pacing,
            driver=DRIVERS["mysql"],
        ),
        sample_source(
            "postgres", "Logical replication with parallel snapshot",
            supports_schema_change=True, max_parallelism=8,
            required=RELATIONAL_FIELDS, sample_records=50, pacing=pacing,
            driver=DRIVERS["postgres"],
        ),
        sample_source(
            "sqlserver", "SQL Server CDC with snapshot fallback",
            supports_schema_change=True, max_parallelism=4,
            required=RELATIONAL_FIELDS, sample_records=50, pacing=pacing,
            driver=DRIVERS["sqlserver"],
        ),
        sample_source(
            "iceberg", "Snapshot reads over Apache Iceberg metadata",
            supports_schema_change=False, max_parallelism=6,
            required=TABLE_FORMAT_FIELDS, sample_records=30, pacing=pacing,
        ),
    )

    registry.register_destinations(
        relational_destination(
            "mysql", "Batch inserts with parallel writers",
            supports_schema_change=True, max_parallelism=8,
            required=RELATIONAL_FIELDS, driver=DRIVERS["mysql"],
        ),
        relational_destination(
            "postgres", "COPY protocol with conflict handling",
            supports_schema_change=True, max_parallelism=8,
            required=RELATIONAL_FIELDS, driver=DRIVERS["postgres"],
        ),
        relational_destination(
            "sqlserver", "Bulk copy optimized for columnstore",
            supports_schema_change=True, max_parallelism=4,
            required=RELATIONAL_FIELDS, driver=DRIVERS["sqlserver"],
        ),
    )

    logger.info("Connector registry ready: %d connector(s)", len(registry.available()))
    return registry
