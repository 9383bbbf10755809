"""Pipeline assembly — ordered stage chain and the document it transforms."""

from hubdown.pipeline.builder import (
    Pipeline,
    Stage,
    base_stages,
    build_pipeline,
    default_pipeline,
    get_pipeline,
)
from hubdown.pipeline.document import Document
from hubdown.pipeline.registry import get_stage_factory, register_stage

__all__ = [
    "Document",
    "Pipeline",
    "Stage",
    "base_stages",
    "build_pipeline",
    "default_pipeline",
    "get_pipeline",
    "get_stage_factory",
    "register_stage",
]
