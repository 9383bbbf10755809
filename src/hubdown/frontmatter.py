"""Split a leading YAML metadata block from a markdown document."""

from __future__ import annotations

import re
from typing import Any

import yaml

from hubdown.errors.exceptions import FrontmatterError

_OPEN_RE = re.compile(r"---[ \t]*\r?\n")
_CLOSE_RE = re.compile(r"^---[ \t]*\r?$", re.MULTILINE)
_BOM = "\ufeff"


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return ``(metadata, body)``.

    The block must open on the very first line with ``---`` and ends at the
    next line that is exactly ``---``; without a closing line the rest of
    the text is metadata and the body is empty. Text without an opening
    delimiter comes back unchanged with empty metadata. A leading byte order
    mark is dropped before looking for the block.
    """
    if text.startswith(_BOM):
        text = text[1:]
    opening = _OPEN_RE.match(text)
    if opening is None:
        return {}, text

    rest = text[opening.end():]
    closing = _CLOSE_RE.search(rest)
    if closing is None:
        matter, body = rest, ""
    else:
        matter = rest[: closing.start()]
        body = rest[closing.end():]
        if body.startswith("\n"):
            body = body[1:]

    return _parse_matter(matter), body


def _parse_matter(matter: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(matter)
    except yaml.YAMLError as e:
        raise FrontmatterError(f"Invalid frontmatter YAML: {e}", original=e) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontmatterError(
            f"Frontmatter must be a mapping, got {type(data).__name__}"
        )
    return data
