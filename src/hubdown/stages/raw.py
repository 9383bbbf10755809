"""Stage: re-embed raw HTML kept aside during tree conversion.

The whole tree is serialized with each placeholder swapped for its raw
markup, then parsed again, so an opening tag and its closing tag that
arrived as separate fragments end up as one element.
"""

from __future__ import annotations

import re

from hubdown.pipeline.document import Document
from hubdown.pipeline.registry import register_stage
from hubdown.stages.tree import OUTPUT_FORMATTER, RAW_TAG, parse_html
from hubdown.types import StageName

# Private-use code points delimit the placeholder index
_MARKER_START = "\ue000"
_MARKER_END = "\ue001"


def _marker_prefix(html: str) -> str:
    """Shortest ``\\ue000\\ue001...`` run that does not occur in ``html``."""
    prefix = _MARKER_START
    while prefix in html:
        prefix += _MARKER_END
    return prefix


@register_stage(StageName.RAW)
def reembed_raw():
    def reparse(document: Document) -> Document:
        tree = document.require_tree(StageName.RAW)
        placeholders = tree.find_all(RAW_TAG)
        if not placeholders:
            return document

        # The prefix never occurs in the document, so only real markers match
        prefix = _marker_prefix(tree.decode(formatter=OUTPUT_FORMATTER))
        fragments: list[str] = []
        for index, placeholder in enumerate(placeholders):
            fragments.append(placeholder.get_text())
            placeholder.replace_with(f"{prefix}{index}{_MARKER_END}")

        marker_re = re.compile(re.escape(prefix) + r"(\d+)" + _MARKER_END)
        html = marker_re.sub(
            lambda m: fragments[int(m.group(1))],
            tree.decode(formatter=OUTPUT_FORMATTER),
        )
        document.tree = parse_html(html)
        return document

    return reparse
