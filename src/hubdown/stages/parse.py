"""Stage: parse markdown source into a markdown-it token stream."""

from __future__ import annotations

from collections.abc import Sequence

from markdown_it import MarkdownIt

from hubdown.pipeline.document import Document
from hubdown.pipeline.registry import register_stage
from hubdown.types import StageName

_DEFAULT_RULES = ("table", "strikethrough")


@register_stage(StageName.MARKDOWN)
def markdown_parser(
    preset: str = "commonmark",
    html: bool = True,
    enable: Sequence[str] = _DEFAULT_RULES,
):
    """Build the parser once; the returned transformer only parses.

    Raw HTML is always tokenized here. Whether it survives is decided by
    tree conversion and re-embedding further down the pipeline.
    """
    md = MarkdownIt(preset, {"html": html})
    if enable:
        md.enable(list(enable))

    def parse(document: Document) -> Document:
        document.parser = md
        document.env = {}
        document.tokens = md.parse(document.source, document.env)
        return document

    return parse
