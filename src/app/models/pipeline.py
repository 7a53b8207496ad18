from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class PipelineDefinition:
    """Stored pairing of one source and one destination with their configs.

    Configs are copied on construction so a caller mutating its own dict
    cannot change a stored definition.
    """

    name: str
    source_name: str
    destination_name: str
    source_config: Mapping[str, str] = field(default_factory=dict)
    destination_config: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "source_config", dict(self.source_config or {}))
        object.__setattr__(self, "destination_config", dict(self.destination_config or {}))
