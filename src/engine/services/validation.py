from __future__ import annotations

from collections.abc import Mapping, Sequence

from src.app.core.constants import PIPELINE_NAME_REQUIRED
from src.app.core.exceptions import InvalidNameError, MissingFieldError


def ensure_required_fields(required: Sequence[str], config: Mapping[str, str] | None) -> None:
    """Structural check only: every required key present and non-empty."""
    config = config or {}
    for key in required:
        if not config.get(key):
            raise MissingFieldError(key)


def validate_pipeline_name(name: str | None) -> str:
    if not (name or "").strip():
        raise InvalidNameError(PIPELINE_NAME_REQUIRED)
    return name
