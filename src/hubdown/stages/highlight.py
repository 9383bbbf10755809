"""Stage: syntax-highlight fenced code blocks with Pygments."""

from __future__ import annotations

import asyncio
import logging

from bs4 import Tag
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from hubdown.errors.exceptions import StageError
from hubdown.pipeline.document import Document
from hubdown.pipeline.registry import register_stage
from hubdown.stages.tree import parse_html
from hubdown.types import StageName

logger = logging.getLogger(__name__)

_LANGUAGE_PREFIXES = ("language-", "lang-")
_NO_HIGHLIGHT = {"no-highlight", "nohighlight"}

# Code longer than this (in characters) is highlighted off the event loop
_THREAD_THRESHOLD = 20_000


@register_stage(StageName.HIGHLIGHT)
def highlight_code(
    prefix: str = "hljs-",
    ignore_missing: bool = False,
    thread_threshold: int = _THREAD_THRESHOLD,
):
    """Highlight ``<pre><code class="language-x">`` blocks.

    Blocks without a language class are left as they are. An unknown
    language fails the stage unless ``ignore_missing`` is set.
    """
    formatter = HtmlFormatter(nowrap=True, classprefix=prefix)

    async def transform(document: Document) -> Document:
        tree = document.require_tree(StageName.HIGHLIGHT)
        for code in tree.select("pre > code"):
            language = _language_of(code)
            if language is None:
                continue
            lexer = _lexer_for(language, ignore_missing)
            if lexer is None:
                continue

            text = code.get_text()
            if len(text) > thread_threshold:
                highlighted = await asyncio.to_thread(highlight, text, lexer, formatter)
            else:
                highlighted = highlight(text, lexer, formatter)

            fragment = parse_html(highlighted)
            code.clear()
            for node in list(fragment.contents):
                code.append(node.extract())

            classes = list(code.get("class") or [])
            if "hljs" not in classes:
                code["class"] = ["hljs", *classes]
        return document

    return transform


def _language_of(code: Tag) -> str | None:
    for cls in code.get("class") or []:
        if cls in _NO_HIGHLIGHT:
            return None
        for prefix in _LANGUAGE_PREFIXES:
            if cls.startswith(prefix) and len(cls) > len(prefix):
                return cls[len(prefix):]
    return None


def _lexer_for(language: str, ignore_missing: bool) -> Lexer | None:
    try:
        return get_lexer_by_name(language, stripnl=False, ensurenl=False)
    except ClassNotFound as e:
        if ignore_missing:
            logger.debug("No lexer for language '%s', leaving block as is", language)
            return None
        raise StageError(
            f"Unknown language: '{language}' is not registered",
            stage=StageName.HIGHLIGHT,
        ) from e
