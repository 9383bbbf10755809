"""Stage: give every heading a GitHub-style ``id``."""

from __future__ import annotations

import re

from hubdown.pipeline.document import Document
from hubdown.pipeline.registry import register_stage
from hubdown.stages.tree import HEADING_TAGS
from hubdown.types import StageName

_STRIP_RE = re.compile(r"[^\w\- ]")


class Slugger:
    """Generate unique slugs the way GitHub anchors headings.

    Repeats of a slug get ``-1``, ``-2``, ... suffixes. One slugger per
    document.
    """

    def __init__(self) -> None:
        self._occurrences: dict[str, int] = {}

    def slug(self, value: str) -> str:
        original = _STRIP_RE.sub("", value.lower()).replace(" ", "-")
        result = original
        while result in self._occurrences:
            self._occurrences[original] += 1
            result = f"{original}-{self._occurrences[original]}"
        self._occurrences[result] = 0
        return result

    def reset(self) -> None:
        self._occurrences.clear()


@register_stage(StageName.SLUG)
def heading_ids(prefix: str = ""):
    def assign(document: Document) -> Document:
        tree = document.require_tree(StageName.SLUG)
        slugger = Slugger()
        for heading in tree.find_all(HEADING_TAGS):
            if heading.get("id"):
                continue
            heading["id"] = prefix + slugger.slug(heading.get_text())
        return document

    return assign
