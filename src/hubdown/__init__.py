"""hubdown — markdown to HTML through a configurable, cached stage pipeline."""

from hubdown.cache import DiskStore, Found, MemoryStore, NotFound, Store, StoreError
from hubdown.core import convert, convert_batch, convert_sync
from hubdown.errors import (
    FrontmatterError,
    HubdownError,
    KeyNotFoundError,
    PipelineError,
    StageError,
)
from hubdown.pipeline import Document, Pipeline, build_pipeline, default_pipeline
from hubdown.types import ConvertOptions, StageName, StageSpec

__all__ = [
    "convert",
    "convert_sync",
    "convert_batch",
    "ConvertOptions",
    "StageName",
    "StageSpec",
    "Document",
    "Pipeline",
    "build_pipeline",
    "default_pipeline",
    "Store",
    "MemoryStore",
    "DiskStore",
    "Found",
    "NotFound",
    "StoreError",
    "HubdownError",
    "StageError",
    "PipelineError",
    "FrontmatterError",
    "KeyNotFoundError",
]
