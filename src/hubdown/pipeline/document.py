"""The intermediate document passed from stage to stage."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from hubdown.errors.exceptions import StageError

if TYPE_CHECKING:
    from bs4 import BeautifulSoup
    from markdown_it import MarkdownIt
    from markdown_it.token import Token


class Document:
    """Mutable state for one conversion.

    Stages fill in the representation they produce: the parser sets
    ``tokens`` (plus ``parser`` and ``env``, which rendering needs), tree
    conversion sets ``tree``, serialization sets ``output``.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.parser: MarkdownIt | None = None
        self.tokens: list[Token] | None = None
        self.env: dict[str, Any] = {}
        self.tree: BeautifulSoup | None = None
        self.output: str | None = None
        self.data: dict[str, Any] = {}

    def require_tree(self, stage: str) -> BeautifulSoup:
        """Return the output tree, or fail the stage that needs it."""
        if self.tree is None:
            raise StageError(
                f"Stage '{stage}' needs an HTML tree; is 'remark2rehype' ignored?",
                stage=stage,
            )
        return self.tree

    def __str__(self) -> str:
        return self.output if self.output is not None else ""

    def __repr__(self) -> str:
        if self.output is not None:
            state = "serialized"
        elif self.tree is not None:
            state = "tree"
        elif self.tokens is not None:
            state = "tokens"
        else:
            state = "source"
        return f"Document(len={len(self.source)}, state={state})"
