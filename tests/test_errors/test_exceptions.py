"""Tests for custom exception hierarchy."""

import pytest

from hubdown.errors.exceptions import (
    ConfigError,
    FrontmatterError,
    HubdownError,
    KeyNotFoundError,
    PipelineError,
    StageError,
)


class TestExceptionHierarchy:
    def test_all_inherit_from_base(self):
        for cls in (StageError, PipelineError, FrontmatterError, KeyNotFoundError, ConfigError):
            assert issubclass(cls, HubdownError)

    def test_all_inherit_from_exception(self):
        assert issubclass(HubdownError, Exception)


class TestStageError:
    def test_attributes(self):
        err = StageError("Unknown language", stage="highlight")
        assert err.stage == "highlight"
        assert err.message == "Unknown language"
        assert "Unknown language" in str(err)

    def test_defaults(self):
        assert StageError("x").stage == ""


class TestFrontmatterError:
    def test_keeps_original(self):
        original = ValueError("bad")
        err = FrontmatterError("Invalid", original=original)
        assert err.original is original

    def test_catchable_as_base(self):
        with pytest.raises(HubdownError):
            raise FrontmatterError("Invalid")


class TestKeyNotFoundError:
    def test_default_message(self):
        err = KeyNotFoundError(key="abc")
        assert err.key == "abc"
        assert str(err) == "Key not found: abc"

    def test_custom_message(self):
        assert str(KeyNotFoundError("gone", key="abc")) == "gone"
