"""Tests for frontmatter splitting."""

import datetime

import pytest

from hubdown.errors.exceptions import FrontmatterError
from hubdown.frontmatter import split_frontmatter


class TestSplitFrontmatter:
    def test_basic(self):
        data, body = split_frontmatter("---\ntitle: Hi\n---\n# Body")
        assert data == {"title": "Hi"}
        assert body == "# Body"

    def test_no_frontmatter(self):
        text = "# Just a heading\n\n---\nnot: metadata\n---\n"
        assert split_frontmatter(text) == ({}, text)

    def test_must_start_on_first_line(self):
        text = "\n---\na: 1\n---\n"
        assert split_frontmatter(text) == ({}, text)

    def test_empty_block(self):
        assert split_frontmatter("---\n---\nbody") == ({}, "body")

    def test_unclosed_block_is_all_metadata(self):
        assert split_frontmatter("---\na: 1\nb: 2\n") == ({"a": 1, "b": 2}, "")

    def test_typed_values(self):
        data, _ = split_frontmatter(
            "---\ndate: 2024-01-02\ncount: 3\ndraft: false\ntags: [x, y]\n---\n"
        )
        assert data == {
            "date": datetime.date(2024, 1, 2),
            "count": 3,
            "draft": False,
            "tags": ["x", "y"],
        }

    def test_crlf_line_endings(self):
        data, body = split_frontmatter("---\r\ntitle: Hi\r\n---\r\nbody")
        assert data == {"title": "Hi"}
        assert body == "body"

    def test_only_first_blank_line_stripped(self):
        _, body = split_frontmatter("---\na: 1\n---\n\ntext")
        assert body == "\ntext"

    def test_closing_delimiter_trailing_whitespace(self):
        assert split_frontmatter("---\na: 1\n---  \nbody") == ({"a": 1}, "body")

    def test_leading_bom_stripped(self):
        data, body = split_frontmatter("\ufeff---\ntitle: Hi\n---\n# Body")
        assert data == {"title": "Hi"}
        assert body == "# Body"

    def test_bom_without_block(self):
        assert split_frontmatter("\ufeff# Body") == ({}, "# Body")

    def test_invalid_yaml(self):
        with pytest.raises(FrontmatterError, match="Invalid frontmatter YAML") as exc_info:
            split_frontmatter("---\n: [\n---\nbody")
        assert exc_info.value.original is not None

    def test_non_mapping(self):
        with pytest.raises(FrontmatterError, match="mapping, got list"):
            split_frontmatter("---\n- a\n- b\n---\nbody")
