import pytest

from src.app.core.enums import ConnectorKind
from src.app.core.exceptions import InvalidPairingError, UnknownConnectorError
from src.app.core.constants import RELATIONAL_FIELDS
from src.engine.adapters.destinations import relational_destination
from src.engine.ports.connectors import ConnectorInfo
from src.engine.registry import ConnectorRegistry, validate_pair


def _info(name, kind):
    return ConnectorInfo(name=name, kind=kind, description=name, max_parallelism=1)


def test_available_has_unique_name_kind_pairs(registry):
    infos = registry.available()
    keys = [(i.name, i.kind) for i in infos]

    assert len(keys) == len(set(keys))
    assert len(infos) == 7


def test_available_lists_sources_then_destinations(registry):
    infos = registry.available()
    sources = [i.name for i in infos if i.kind is ConnectorKind.SOURCE]
    destinations = [i.name for i in infos if i.kind is ConnectorKind.DESTINATION]

    assert sources == ["mysql", "postgres", "sqlserver", "iceberg"]
    assert destinations == ["mysql", "postgres", "sqlserver"]
    assert infos[0].kind is ConnectorKind.SOURCE
    assert infos[-1].kind is ConnectorKind.DESTINATION


def test_iceberg_descriptor(registry):
    info = registry.source_by_name("iceberg").info()

    assert info.supports_schema_change is False
    assert info.max_parallelism == 6


def test_lookup_unknown_connectors(registry):
    with pytest.raises(UnknownConnectorError, match="unknown source connector oracle"):
        registry.source_by_name("oracle")

    with pytest.raises(UnknownConnectorError, match="unknown destination connector iceberg"):
        registry.destination_by_name("iceberg")


@pytest.mark.parametrize(
    "src_kind, dst_kind",
    [
        (ConnectorKind.DESTINATION, ConnectorKind.DESTINATION),
        (ConnectorKind.SOURCE, ConnectorKind.SOURCE),
        (ConnectorKind.DESTINATION, ConnectorKind.SOURCE),
    ],
)
def test_validate_pair_rejects_wrong_kinds(src_kind, dst_kind):
    with pytest.raises(InvalidPairingError, match="invalid connector pairing"):
        validate_pair(_info("mysql", src_kind), _info("postgres", dst_kind))


def test_validate_pair_rejects_iceberg_destination():
    with pytest.raises(InvalidPairingError, match="iceberg cannot be a destination"):
        validate_pair(
            _info("iceberg", ConnectorKind.SOURCE),
            _info("iceberg", ConnectorKind.DESTINATION),
        )


def test_validate_pair_accepts_source_and_destination():
    validate_pair(_info("iceberg", ConnectorKind.SOURCE), _info("postgres", ConnectorKind.DESTINATION))


def test_resolve_reports_iceberg_destination_as_pairing_error(registry):
    with pytest.raises(InvalidPairingError):
        registry.resolve("iceberg", "iceberg")


def test_resolve_returns_both_sides(registry):
    src, dst = registry.resolve("mysql", "postgres")

    assert src.info().kind is ConnectorKind.SOURCE
    assert dst.info().name == "postgres"


def test_duplicate_registration_is_rejected():
    registry = ConnectorRegistry()
    dst = relational_destination(
        "postgres", "COPY",
        supports_schema_change=True, max_parallelism=8,
        required=RELATIONAL_FIELDS, driver="postgresql+asyncpg",
    )
    registry.register_destinations(dst)

    with pytest.raises(ValueError, match="already registered"):
        registry.register_destinations(dst)


def test_registering_destination_as_source_is_rejected():
    registry = ConnectorRegistry()
    dst = relational_destination(
        "postgres", "COPY",
        supports_schema_change=True, max_parallelism=8,
        required=RELATIONAL_FIELDS, driver="postgresql+asyncpg",
    )

    with pytest.raises(ValueError):
        registry.register_sources(dst)


def test_descriptor_requires_positive_parallelism():
    with pytest.raises(ValueError):
        ConnectorInfo(name="x", kind=ConnectorKind.SOURCE, description="", max_parallelism=0)
