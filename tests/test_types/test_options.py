"""Tests for ConvertOptions and StageSpec."""

import pytest
from pydantic import ValidationError

from hubdown.types import ConvertOptions, StageName, StageSpec


def tag(label="x"):
    return lambda document: document


class TestStageName:
    def test_execution_order(self):
        assert [s.value for s in StageName] == [
            "markdown",
            "before",
            "emoji",
            "remark2rehype",
            "slug",
            "autolinkHeadings",
            "highlight",
            "raw",
            "html",
        ]

    def test_string_compat(self):
        assert StageName.SLUG == "slug"


class TestStageSpec:
    def test_coerce_factory(self):
        spec = StageSpec.coerce(tag)
        assert spec.name == "tag"
        assert spec.factory is tag
        assert spec.options == {}

    def test_coerce_tuple(self):
        spec = StageSpec.coerce((tag, {"label": "y"}))
        assert spec.name == "tag"
        assert spec.options == {"label": "y"}

    def test_coerce_mapping(self):
        spec = StageSpec.coerce({"name": "mine", "factory": tag})
        assert spec.name == "mine"

    def test_coerce_spec_unchanged(self):
        spec = StageSpec(name="mine", factory=tag)
        assert StageSpec.coerce(spec) is spec

    def test_coerce_rejects_non_callable(self):
        with pytest.raises(TypeError):
            StageSpec.coerce(42)


class TestConvertOptions:
    def test_defaults(self):
        opts = ConvertOptions()
        assert opts.run_before == []
        assert opts.frontmatter is False
        assert opts.ignore == []
        assert opts.cache is None
        assert opts.is_default_pipeline

    def test_alias_and_field_name(self):
        assert ConvertOptions.model_validate({"runBefore": [tag]}).run_before[0].name == "tag"
        assert ConvertOptions(run_before=[tag]).run_before[0].name == "tag"

    def test_single_stage_wrapped(self):
        assert len(ConvertOptions(run_before=tag).run_before) == 1

    def test_repeated_factories_numbered(self):
        opts = ConvertOptions(run_before=[tag, (tag, {"label": "y"})])
        assert [s.name for s in opts.run_before] == ["tag", "tag_2"]

    def test_ignore_normalized(self):
        opts = ConvertOptions(ignore=["slug", "emoji", "slug"])
        assert opts.ignore == [StageName.EMOJI, StageName.SLUG]
        assert not opts.is_default_pipeline

    def test_ignore_single_string(self):
        assert ConvertOptions(ignore="raw").ignore == [StageName.RAW]

    def test_unknown_ignore_rejected(self):
        with pytest.raises(ValidationError):
            ConvertOptions(ignore=["bogus"])

    def test_extra_options_kept(self):
        opts = ConvertOptions.model_validate({"flavour": "gfm"})
        assert opts.hashable()["flavour"] == "gfm"

    def test_hashable_excludes_cache(self):
        opts = ConvertOptions(cache=object(), frontmatter=True)
        hashable = opts.hashable()
        assert "cache" not in hashable
        assert hashable["frontmatter"] is True
        assert "runBefore" in hashable

    def test_from_input_overrides(self):
        opts = ConvertOptions.from_input({"frontmatter": False}, frontmatter=True)
        assert opts.frontmatter is True

    def test_from_input_keeps_store(self):
        store = object()
        original = ConvertOptions(cache=store, ignore=["slug"])
        copy = ConvertOptions.from_input(original)
        assert copy.cache is store
        assert copy.ignore == [StageName.SLUG]

    def test_from_input_none(self):
        assert ConvertOptions.from_input(None) == ConvertOptions()
