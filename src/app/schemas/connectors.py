from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from src.app.core.enums import ConnectorKind
from src.engine.ports.connectors import ConnectorInfo


class ConnectorOut(BaseModel):
    """Connector descriptor as consumed by the dashboard."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    kind: ConnectorKind = Field(alias="type")
    description: str
    supports_schema_change: bool = Field(alias="supportsDDL")
    max_parallelism: int = Field(alias="maxParallel", ge=1)

    @classmethod
    def from_info(cls, info: ConnectorInfo) -> ConnectorOut:
        return cls(
            name=info.name,
            kind=info.kind,
            description=info.description,
            supports_schema_change=info.supports_schema_change,
            max_parallelism=info.max_parallelism,
        )
