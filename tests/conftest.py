import pytest

from src.app.repositories.pipelines import InMemoryPipelinesRepository
from src.app.services.pipelines import PipelinesService
from src.engine.orchestration.executor import PipelineExecutor
from src.engine.registry import build_default_registry

DB_CONFIG = {
    "host": "db.internal",
    "port": "5432",
    "user": "etl_user",
    "password": "etl_password",
    "database": "analytics",
}

ICEBERG_CONFIG = {
    "catalog": "lake",
    "table": "events",
    "warehouse": "s3://warehouse",
}


@pytest.fixture
def db_config():
    return dict(DB_CONFIG)


@pytest.fixture
def iceberg_config():
    return dict(ICEBERG_CONFIG)


@pytest.fixture
def registry():
    # no pacing: tests should not wait on simulated I/O
    return build_default_registry(pacing=0)


@pytest.fixture
def repo():
    return InMemoryPipelinesRepository()


@pytest.fixture
def executor(registry, repo):
    return PipelineExecutor(registry=registry, pipelines=repo)


@pytest.fixture
def service(registry, repo, executor):
    return PipelinesService(registry=registry, repo=repo, executor=executor)
