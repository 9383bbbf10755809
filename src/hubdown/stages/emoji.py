"""Stage: convert gemoji shortcodes (``:tada:``) into emoji characters."""

from __future__ import annotations

import emoji
from markdown_it.token import Token

from hubdown.pipeline.document import Document
from hubdown.pipeline.registry import register_stage
from hubdown.types import StageName


@register_stage(StageName.EMOJI)
def gemoji_to_emoji(language: str = "alias"):
    def convert(document: Document) -> Document:
        for token in document.tokens or []:
            if token.type != "inline" or not token.children:
                continue
            token.children = _join_text(token.children)
            for child in token.children:
                # Code spans are separate token types and stay untouched
                if child.type == "text" and ":" in child.content:
                    child.content = emoji.emojize(child.content, language=language)
        return document

    return convert


def _join_text(children: list[Token]) -> list[Token]:
    """Merge adjacent text tokens so shortcodes are never split."""
    joined: list[Token] = []
    for child in children:
        if child.type == "text" and joined and joined[-1].type == "text":
            joined[-1].content += child.content
            continue
        joined.append(child)
    return joined
