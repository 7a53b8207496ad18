from unittest.mock import AsyncMock

import pytest

from src.app.core.exceptions import (
    InvalidNameError,
    InvalidPairingError,
    MissingFieldError,
    UnknownConnectorError,
)
from src.app.models import PipelineDefinition
from src.app.services.pipelines import PipelinesService


def _definition(name="nightly-sync", src="mysql", dst="postgres", src_cfg=None, dst_cfg=None, cfg=None):
    return PipelineDefinition(
        name=name,
        source_name=src,
        source_config=src_cfg if src_cfg is not None else dict(cfg or {}),
        destination_name=dst,
        destination_config=dst_cfg if dst_cfg is not None else dict(cfg or {}),
    )


@pytest.mark.asyncio
async def test_create_then_list(service, db_config):
    await service.create_pipeline(_definition(cfg=db_config))

    pipelines = await service.list_pipelines()

    assert [p.name for p in pipelines] == ["nightly-sync"]
    assert pipelines[0].source_config == db_config


@pytest.mark.asyncio
async def test_list_is_sorted_by_name(service, db_config):
    for name in ("zeta", "alpha", "mid"):
        await service.create_pipeline(_definition(name=name, cfg=db_config))

    assert [p.name for p in await service.list_pipelines()] == ["alpha", "mid", "zeta"]


@pytest.mark.asyncio
@pytest.mark.parametrize("bad_name", ["", "   ", "\t\n"])
async def test_create_rejects_blank_name(service, db_config, bad_name):
    with pytest.raises(InvalidNameError, match="pipeline name is required"):
        await service.create_pipeline(_definition(name=bad_name, cfg=db_config))

    assert await service.list_pipelines() == []


@pytest.mark.asyncio
async def test_create_rejects_unknown_connector(service, db_config):
    with pytest.raises(UnknownConnectorError):
        await service.create_pipeline(_definition(src="oracle", cfg=db_config))


@pytest.mark.asyncio
async def test_iceberg_to_iceberg_is_invalid_pairing(service, iceberg_config):
    with pytest.raises(InvalidPairingError):
        await service.create_pipeline(
            _definition(name="lake", src="iceberg", dst="iceberg", cfg=iceberg_config)
        )

    assert await service.list_pipelines() == []


@pytest.mark.asyncio
async def test_pairing_is_checked_before_configs(service):
    # empty configs would fail validation; the pairing error must win
    with pytest.raises(InvalidPairingError):
        await service.create_pipeline(_definition(src="iceberg", dst="iceberg", cfg={}))


@pytest.mark.asyncio
async def test_missing_source_field_names_the_field(service, db_config):
    src_cfg = dict(db_config)
    del src_cfg["password"]

    with pytest.raises(MissingFieldError) as e:
        await service.create_pipeline(_definition(src_cfg=src_cfg, dst_cfg=db_config))

    assert e.value.field == "password"
    assert await service.list_pipelines() == []


@pytest.mark.asyncio
async def test_missing_destination_field_leaves_store_unchanged(registry, db_config):
    repo = AsyncMock()
    service = PipelinesService(registry=registry, repo=repo)

    with pytest.raises(MissingFieldError, match="database"):
        await service.create_pipeline(
            _definition(src_cfg=db_config, dst_cfg={**db_config, "database": ""})
        )

    repo.put_pipeline.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_overwrites_same_name(service, db_config):
    await service.create_pipeline(_definition(cfg=db_config))
    second = {**db_config, "host": "replica.internal"}
    await service.create_pipeline(_definition(src="postgres", dst="mysql", cfg=second))

    pipelines = await service.list_pipelines()

    assert len(pipelines) == 1
    assert pipelines[0].source_name == "postgres"
    assert pipelines[0].source_config["host"] == "replica.internal"


@pytest.mark.asyncio
async def test_stored_definition_is_isolated_from_caller_dict(service, db_config):
    cfg = dict(db_config)
    await service.create_pipeline(_definition(src_cfg=cfg, dst_cfg=db_config))

    cfg["host"] = "mutated"

    (stored,) = await service.list_pipelines()
    assert stored.source_config["host"] == "db.internal"


def test_list_connectors_delegates_to_registry(service, registry):
    assert service.list_connectors() == registry.available()
