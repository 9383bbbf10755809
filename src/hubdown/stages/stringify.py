"""Stage: serialize the HTML tree to text."""

from __future__ import annotations

from bs4 import NavigableString

from hubdown.pipeline.document import Document
from hubdown.pipeline.registry import register_stage
from hubdown.stages.tree import OUTPUT_FORMATTER, RAW_TAG
from hubdown.types import StageName


@register_stage(StageName.HTML)
def serialize_html():
    def stringify(document: Document) -> Document:
        tree = document.require_tree(StageName.HTML)
        # Raw HTML that was never re-embedded is written out escaped
        for placeholder in tree.find_all(RAW_TAG):
            placeholder.replace_with(NavigableString(placeholder.get_text()))
        document.output = tree.decode(formatter=OUTPUT_FORMATTER)
        return document

    return stringify
