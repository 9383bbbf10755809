"""Assemble the ordered, filtered chain of stages into a runnable pipeline."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from pydantic import BaseModel, Field

# Auto-register built-in stages on import
import hubdown.stages  # noqa: F401
from hubdown.errors.exceptions import PipelineError
from hubdown.pipeline.document import Document
from hubdown.pipeline.registry import Transformer, get_stage_factory
from hubdown.types import StageName, StageSpec

logger = logging.getLogger(__name__)

# Options each built-in stage is constructed with
_STAGE_OPTIONS: dict[StageName, dict[str, Any]] = {
    StageName.REMARK2REHYPE: {"allow_dangerous_html": True},
    StageName.AUTOLINK_HEADINGS: {"behaviour": "wrap"},
}


class Stage(BaseModel):
    """One named pipeline slot. A slot without a factory is a placeholder."""

    name: str
    factory: Callable[..., Any] | None = None
    options: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_placeholder(self) -> bool:
        return self.factory is None


def base_stages() -> list[Stage]:
    """The fixed stage order; ``before`` is the caller injection point."""
    stages: list[Stage] = []
    for name in StageName:
        factory = None if name == StageName.BEFORE else get_stage_factory(name)
        if name != StageName.BEFORE and factory is None:
            raise PipelineError(f"No factory registered for stage '{name}'")
        stages.append(Stage(name=name, factory=factory, options=_STAGE_OPTIONS.get(name, {})))
    return stages


class Pipeline:
    """An immutable chain of instantiated stage transformers."""

    def __init__(self, stages: Sequence[Stage]) -> None:
        names = [s.name for s in stages]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise PipelineError(f"Duplicate stage names: {', '.join(duplicates)}")

        self._stage_names = tuple(names)
        transformers: list[tuple[str, Transformer]] = []
        for stage in stages:
            if stage.is_placeholder:
                continue
            transformers.append((stage.name, stage.factory(**stage.options)))
        self._transformers = tuple(transformers)

    @property
    def stage_names(self) -> tuple[str, ...]:
        return self._stage_names

    async def run(self, document: Document) -> Document:
        """Feed the document through every stage in order."""
        for name, transformer in self._transformers:
            logger.debug("Running stage '%s'", name)
            result = transformer(document)
            if inspect.isawaitable(result):
                result = await result
            if result is not None:
                document = result
        return document

    async def process(self, markdown: str) -> str:
        """Render markdown text to the serialized output."""
        document = await self.run(Document(markdown))
        if document.output is None:
            raise PipelineError(
                f"Pipeline produced no output (stages: {', '.join(self._stage_names)})"
            )
        return document.output

    def __repr__(self) -> str:
        return f"Pipeline({' -> '.join(self._stage_names)})"


def build_pipeline(
    run_before: Sequence[StageSpec | Any] = (),
    ignore: Iterable[str] = (),
) -> Pipeline:
    """Build a fresh pipeline with caller stages spliced in and exclusions removed."""
    excluded = {StageName(name) for name in ignore}
    extra = [StageSpec.coerce(spec) for spec in run_before]

    stages: list[Stage] = []
    for stage in base_stages():
        if stage.name in excluded:
            continue
        if stage.name == StageName.BEFORE and extra:
            stages.extend(
                Stage(name=spec.name, factory=spec.factory, options=spec.options) for spec in extra
            )
            continue
        stages.append(stage)
    return Pipeline(stages)


_default_pipeline: Pipeline | None = None


def default_pipeline() -> Pipeline:
    """The shared pipeline for uncustomized conversions, built on first use."""
    global _default_pipeline
    if _default_pipeline is None:
        _default_pipeline = build_pipeline()
    return _default_pipeline


def get_pipeline(
    run_before: Sequence[StageSpec | Any] = (),
    ignore: Iterable[str] = (),
) -> Pipeline:
    """Shared default pipeline when uncustomized, a fresh one otherwise."""
    ignore = list(ignore)
    if not run_before and not ignore:
        return default_pipeline()
    return build_pipeline(run_before, ignore)
