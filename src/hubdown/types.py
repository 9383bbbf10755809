"""Shared Pydantic models for hubdown."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator

# ── Enums ──


class StageName(StrEnum):
    """Built-in pipeline stages, in execution order."""

    MARKDOWN = "markdown"
    BEFORE = "before"
    EMOJI = "emoji"
    REMARK2REHYPE = "remark2rehype"
    SLUG = "slug"
    AUTOLINK_HEADINGS = "autolinkHeadings"
    HIGHLIGHT = "highlight"
    RAW = "raw"
    HTML = "html"


# ── Stage models ──


class StageSpec(BaseModel):
    """A caller-supplied stage: a factory plus the options it is built with.

    The factory is called once per pipeline build with ``**options`` and must
    return the transformer ``(Document) -> Document | Awaitable[Document]``.
    """

    name: str
    factory: Callable[..., Any]
    options: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def coerce(cls, value: Any) -> StageSpec:
        """Accept a StageSpec, a mapping, a bare factory, or ``(factory, options)``."""
        if isinstance(value, StageSpec):
            return value
        if isinstance(value, Mapping):
            return cls.model_validate(value)
        if isinstance(value, tuple) and len(value) == 2 and callable(value[0]):
            factory, options = value
            return cls(name=_factory_name(factory), factory=factory, options=dict(options or {}))
        if callable(value):
            return cls(name=_factory_name(value), factory=value)
        raise TypeError(f"Cannot use {value!r} as a pipeline stage")


def _factory_name(factory: Callable[..., Any]) -> str:
    return getattr(factory, "__qualname__", None) or type(factory).__qualname__


# ── Conversion options ──


class ConvertOptions(BaseModel):
    """Options recognized by ``convert``; unknown keys are kept as extras."""

    run_before: list[StageSpec] = Field(default_factory=list, alias="runBefore")
    frontmatter: bool = False
    ignore: list[StageName] = Field(default_factory=list)
    # Store handle; never part of the cache key
    cache: Any = None

    model_config = {"extra": "allow", "populate_by_name": True}

    @field_validator("run_before", mode="before")
    @classmethod
    def _coerce_stages(cls, value: Any) -> list[StageSpec]:
        if value is None:
            return []
        if callable(value) or isinstance(value, (StageSpec, tuple)):
            value = [value]
        specs: list[StageSpec] = []
        seen: dict[str, int] = {}
        for item in value:
            spec = StageSpec.coerce(item)
            # Anonymous factories sharing a qualname get numbered
            count = seen.get(spec.name, 0)
            seen[spec.name] = count + 1
            if count and not isinstance(item, (StageSpec, Mapping)):
                spec = spec.model_copy(update={"name": f"{spec.name}_{count + 1}"})
            specs.append(spec)
        return specs

    @field_validator("ignore", mode="before")
    @classmethod
    def _normalize_ignore(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        # Set semantics: order and repeats never change the pipeline or the key
        return sorted({str(v) for v in value})

    @property
    def is_default_pipeline(self) -> bool:
        return not self.run_before and not self.ignore

    @classmethod
    def from_input(
        cls,
        options: ConvertOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> ConvertOptions:
        """Merge a mapping (or existing options) with keyword overrides."""
        if isinstance(options, ConvertOptions):
            raw: dict[str, Any] = options.model_dump(by_alias=True, exclude={"cache"})
            raw["cache"] = options.cache
        else:
            raw = dict(options or {})
        raw.update(overrides)
        return cls.model_validate(raw)

    def hashable(self) -> dict[str, Any]:
        """Options as a plain dict with the store handle removed."""
        return self.model_dump(by_alias=True, exclude={"cache"})
