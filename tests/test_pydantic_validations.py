from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from src.app.core.enums import ConnectorKind
from src.app.schemas.connectors import ConnectorOut
from src.app.schemas.pipelines import PipelineCreate, RunResultOut
from src.engine.orchestration.executor import RunResult
from src.engine.ports.connectors import ConnectorInfo


def test_pipeline_create_accepts_dashboard_payload():
    payload = PipelineCreate.model_validate(
        {
            "name": "nightly-sync",
            "sourceType": "mysql",
            "sourceConfig": {"host": "h"},
            "destType": "postgres",
            "destConfig": {},
            "ignored": True,
        }
    )

    definition = payload.to_definition()
    assert definition.source_name == "mysql"
    assert definition.destination_name == "postgres"
    assert definition.source_config == {"host": "h"}


@pytest.mark.parametrize("missing", ["sourceType", "destType", "name"])
def test_pipeline_create_requires_connector_names(missing):
    data = {"name": "p", "sourceType": "mysql", "destType": "postgres"}
    del data[missing]

    with pytest.raises(ValidationError) as e:
        PipelineCreate.model_validate(data)

    assert missing in str(e.value)


def test_pipeline_create_config_values_must_be_strings():
    with pytest.raises(ValidationError):
        PipelineCreate.model_validate(
            {"name": "p", "sourceType": "mysql", "destType": "postgres", "sourceConfig": {"port": [1]}}
        )


def test_blank_name_is_left_to_the_service():
    # InvalidNameError is raised by PipelinesService, not by the schema
    assert PipelineCreate.model_validate({"name": " ", "sourceType": "a", "destType": "b"}).name == " "


def test_run_result_omits_empty_error():
    now = datetime.now(timezone.utc)
    result = RunResult(pipeline_name="p", started_at=now).finish(3)

    dumped = RunResultOut.from_result(result).model_dump(by_alias=True, exclude_none=True)

    assert dumped["records"] == 3
    assert dumped["pipelineName"] == "p"
    assert "error" not in dumped


def test_run_result_keeps_error_text():
    now = datetime.now(timezone.utc)
    result = RunResult(pipeline_name="p", started_at=now).finish(0, "pipeline not found")

    assert RunResultOut.from_result(result).error == "pipeline not found"


def test_connector_out_aliases():
    info = ConnectorInfo(
        name="iceberg",
        kind=ConnectorKind.SOURCE,
        description="Snapshot reads",
        supports_schema_change=False,
        max_parallelism=6,
    )

    dumped = ConnectorOut.from_info(info).model_dump(by_alias=True, mode="json")

    assert dumped == {
        "name": "iceberg",
        "type": "source",
        "description": "Snapshot reads",
        "supportsDDL": False,
        "maxParallel": 6,
    }
