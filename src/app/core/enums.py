from __future__ import annotations

from enum import Enum


class ConnectorKind(str, Enum):
    SOURCE = "source"
    DESTINATION = "destination"
