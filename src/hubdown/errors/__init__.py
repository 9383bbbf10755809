"""Error handling — exception hierarchy shared by every hubdown module."""

from hubdown.errors.exceptions import (
    ConfigError,
    FrontmatterError,
    HubdownError,
    KeyNotFoundError,
    PipelineError,
    StageError,
)

__all__ = [
    "HubdownError",
    "StageError",
    "PipelineError",
    "FrontmatterError",
    "KeyNotFoundError",
    "ConfigError",
]
