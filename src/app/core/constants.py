from __future__ import annotations

PIPELINE_NOT_FOUND = "pipeline not found"
PIPELINE_NAME_REQUIRED = "pipeline name is required"

CONTEXT_CANCELED = "context canceled"
DEADLINE_EXCEEDED = "context deadline exceeded"
CLIENT_DISCONNECTED = "client disconnected"

# Connectors that may only ever act as a source (product restriction).
SOURCE_ONLY_CONNECTORS: frozenset[str] = frozenset({"iceberg"})

RELATIONAL_FIELDS: tuple[str, ...] = ("host", "port", "user", "password", "database")
TABLE_FORMAT_FIELDS: tuple[str, ...] = ("catalog", "table", "warehouse")

DEFAULT_PACING_SECONDS = 0.005


def is_source_only(name: str) -> bool:
    return (name or "").strip() in SOURCE_ONLY_CONNECTORS
