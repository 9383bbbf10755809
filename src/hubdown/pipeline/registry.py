"""Registry of built-in stage factories, keyed by stage name."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Union

from hubdown.types import StageName

if TYPE_CHECKING:
    from hubdown.pipeline.document import Document

Transformer = Callable[["Document"], Union["Document", Awaitable["Document"], None]]
StageFactory = Callable[..., Transformer]

_STAGE_REGISTRY: dict[StageName, StageFactory] = {}


def register_stage(name: StageName) -> Callable[[StageFactory], StageFactory]:
    """Decorator to register the factory for a built-in stage."""

    def decorator(fn: StageFactory) -> StageFactory:
        _STAGE_REGISTRY[name] = fn
        return fn

    return decorator


def get_stage_factory(name: StageName) -> StageFactory | None:
    return _STAGE_REGISTRY.get(name)
