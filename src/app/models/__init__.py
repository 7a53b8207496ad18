from .pipeline import PipelineDefinition

__all__ = [
    "PipelineDefinition",
]
