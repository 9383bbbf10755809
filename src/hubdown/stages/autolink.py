"""Stage: link each heading to its own ``id``."""

from __future__ import annotations

from typing import Any

from hubdown.errors.exceptions import StageError
from hubdown.pipeline.document import Document
from hubdown.pipeline.registry import register_stage
from hubdown.stages.tree import HEADING_TAGS
from hubdown.types import StageName

_BEHAVIOURS = ("wrap", "prepend", "append")
_ICON_CLASSES = ["icon", "icon-link"]


@register_stage(StageName.AUTOLINK_HEADINGS)
def autolink_headings(behaviour: str = "prepend", properties: dict[str, Any] | None = None):
    """Wrap heading content in a self-link, or add an icon link before/after it.

    Headings without an ``id`` are left alone.
    """
    if behaviour not in _BEHAVIOURS:
        raise StageError(
            f"Unknown autolink behaviour '{behaviour}' (expected one of {', '.join(_BEHAVIOURS)})",
            stage=StageName.AUTOLINK_HEADINGS,
        )
    if properties is None:
        properties = {} if behaviour == "wrap" else {"aria-hidden": "true"}

    def link(document: Document) -> Document:
        tree = document.require_tree(StageName.AUTOLINK_HEADINGS)
        for heading in tree.find_all(HEADING_TAGS):
            anchor_id = heading.get("id")
            if not anchor_id:
                continue
            anchor = tree.new_tag("a", attrs={"href": f"#{anchor_id}", **properties})
            if behaviour == "wrap":
                for child in list(heading.contents):
                    anchor.append(child.extract())
                heading.append(anchor)
                continue
            anchor.append(tree.new_tag("span", attrs={"class": " ".join(_ICON_CLASSES)}))
            if behaviour == "prepend":
                heading.insert(0, anchor)
            else:
                heading.append(anchor)
        return document

    return link
