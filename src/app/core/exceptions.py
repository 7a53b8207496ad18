from __future__ import annotations


class PipelineError(Exception):
    """Base error of the extract-load pipeline domain."""


class PipelineNotFoundError(PipelineError):
    """No pipeline is stored under the requested name."""


class InvalidNameError(PipelineError):
    """Pipeline name is empty or whitespace-only."""


class UnknownConnectorError(PipelineError):
    """Referenced source/destination is not registered."""


class InvalidPairingError(PipelineError):
    """Source and destination cannot be paired (kind mismatch, source-only connector)."""


class MissingFieldError(PipelineError):
    """A required configuration key is absent or empty."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"missing required config {field}")


class ContextCancelledError(PipelineError):
    """The run context ended before extraction/load completed."""
