"""Stage: convert the markdown token stream into an HTML tree.

Raw HTML found in the markdown is not parsed here. With
``allow_dangerous_html`` it is kept verbatim inside ``<hubdown-raw>``
placeholder elements for the ``raw`` stage to re-embed; otherwise it is
dropped.
"""

from __future__ import annotations

from typing import Any

from bs4 import BeautifulSoup
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter
from markdown_it.common.utils import escapeHtml
from markdown_it.renderer import RendererHTML
from markdown_it.token import Token

from hubdown.errors.exceptions import StageError
from hubdown.pipeline.document import Document
from hubdown.pipeline.registry import register_stage
from hubdown.types import StageName

RAW_TAG = "hubdown-raw"
HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]

# Escape only &, <, > in text and write void elements as <br>
OUTPUT_FORMATTER = HTMLFormatter(
    entity_substitution=EntitySubstitution.substitute_xml,
    void_element_close_prefix=None,
)


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


class _TreeRenderer(RendererHTML):
    """markdown-it HTML renderer that fences raw HTML into placeholders."""

    def __init__(self, keep_raw: bool) -> None:
        super().__init__()
        self._keep_raw = keep_raw

    def html_block(self, tokens: list[Token], idx: int, options: Any, env: Any) -> str:
        return self._placeholder(tokens[idx].content)

    def html_inline(self, tokens: list[Token], idx: int, options: Any, env: Any) -> str:
        return self._placeholder(tokens[idx].content)

    def _placeholder(self, content: str) -> str:
        if not self._keep_raw:
            return ""
        return f"<{RAW_TAG}>{escapeHtml(content)}</{RAW_TAG}>"


@register_stage(StageName.REMARK2REHYPE)
def tokens_to_tree(allow_dangerous_html: bool = False):
    renderer = _TreeRenderer(keep_raw=allow_dangerous_html)

    def convert(document: Document) -> Document:
        if document.tokens is None or document.parser is None:
            raise StageError(
                "No markdown tokens to convert; is 'markdown' ignored?",
                stage=StageName.REMARK2REHYPE,
            )
        html = renderer.render(document.tokens, document.parser.options, document.env)
        document.tree = parse_html(html)
        return document

    return convert
